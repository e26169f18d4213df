from contextlib import asynccontextmanager
from typing import Optional
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.api import api_router
from app.core.config import settings
from app.db.init_db import init_db
from app.infrastructure.response import standard_response, error_response
from app.web import pages

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ensure the database exists before the first request
    """
    if settings.CREATE_TABLES:
        logger.info("Initializing database...")
        try:
            await init_db(app.state.engine, seed=settings.SEED_DATA)
            logger.info("Database initialized")
        except Exception:
            logger.exception("Database initialization failed")
            # Requests will surface the store error themselves
            logger.warning("Starting anyway; database operations may fail")
    else:
        logger.info("Automatic table creation is disabled")
    yield


def _is_api_path(request: Request) -> bool:
    return request.url.path.startswith(settings.API_V1_STR)


def create_app(debug: Optional[bool] = None, engine: Optional[AsyncEngine] = None) -> FastAPI:
    """
    Build the application

    Args:
        debug: show tracebacks for unhandled errors; defaults to whether
            settings.ENVIRONMENT is development
        engine: database the startup hook creates tables in; defaults to
            the engine built from settings
    """
    if debug is None:
        debug = settings.is_development

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Weather forecast CRUD with a short-lived database session per operation",
        debug=debug,
        lifespan=lifespan,
    )
    app.state.engine = engine

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def not_found_page_handler(request: Request, exc: StarletteHTTPException):
        """Unknown UI paths get the not-found page, the API keeps JSON errors"""
        if exc.status_code == 404 and not _is_api_path(request):
            return pages.render_not_found(request)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """
        Only reached when debug is off; debug mode shows the traceback instead
        """
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        if _is_api_path(request):
            return JSONResponse(
                content=error_response(msg="Internal server error", code=500),
                status_code=500,
            )
        return pages.templates.TemplateResponse(request, "error.html", {}, status_code=500)

    app.include_router(api_router, prefix=settings.API_V1_STR)
    app.include_router(pages.router, prefix="/weather", include_in_schema=False)
    app.mount("/static", StaticFiles(directory=str(pages.STATIC_DIR)), name="static")

    @app.get("/")
    async def root():
        """Health check"""
        return standard_response(
            data={
                "status": "online",
                "version": settings.VERSION,
            },
            msg=f"{settings.PROJECT_NAME} is running"
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)
