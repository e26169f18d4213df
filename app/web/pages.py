"""
Server-rendered weather pages

These routes hold on to a ForecastService rather than a database session. Every
list, lookup or save goes through the service, which opens a fresh session for
that single call, so a page never keeps a connection or stale entities around.
"""
import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from app.api.dependencies import get_forecast_service
from app.infrastructure.exceptions import ForecastNotFoundError
from app.schemas.forecast import ForecastCreate, ForecastUpdate
from app.services.core.forecast_service import ForecastService

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


def _form_errors(exc: ValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        messages.append(f"{field}: {error['msg']}")
    return messages


def _render_form(
        request: Request,
        *,
        title: str,
        action: str,
        values: dict,
        errors: Optional[List[str]] = None,
        status_code: int = 200,
):
    return templates.TemplateResponse(
        request,
        "weather_form.html",
        {
            "title": title,
            "action": action,
            "values": values,
            "errors": errors or [],
            "summary_options": ForecastService.get_summary_options(),
        },
        status_code=status_code,
    )


def render_not_found(request: Request):
    return templates.TemplateResponse(request, "not_found.html", {}, status_code=404)


@router.get("")
async def weather_list(
        request: Request,
        service: ForecastService = Depends(get_forecast_service),
):
    forecasts = await service.get_all()
    return templates.TemplateResponse(request, "weather_list.html", {"forecasts": forecasts})


@router.get("/new")
async def new_forecast_form(request: Request):
    return _render_form(
        request,
        title="Add forecast",
        action=request.url.path,
        values={},
    )


@router.post("/new")
async def create_forecast_page(
        request: Request,
        date: str = Form(""),
        temperature_c: str = Form(""),
        summary: str = Form(""),
        service: ForecastService = Depends(get_forecast_service),
):
    values = {"date": date, "temperature_c": temperature_c, "summary": summary}
    try:
        data = ForecastCreate(**values)
    except ValidationError as e:
        return _render_form(
            request,
            title="Add forecast",
            action=request.url.path,
            values=values,
            errors=_form_errors(e),
            status_code=400,
        )

    forecast = await service.create(data.to_model())
    logger.info("Forecast %s added from the web form", forecast.id)
    return RedirectResponse(url=request.url_for("weather_list").path, status_code=303)


@router.get("/{forecast_id}/edit")
async def edit_forecast_form(
        request: Request,
        forecast_id: int,
        service: ForecastService = Depends(get_forecast_service),
):
    forecast = await service.get_by_id(forecast_id)
    if forecast is None:
        return render_not_found(request)
    values = {
        "date": forecast.date.isoformat(),
        "temperature_c": forecast.temperature_c,
        "summary": forecast.summary or "",
    }
    return _render_form(
        request,
        title=f"Edit forecast #{forecast_id}",
        action=request.url.path,
        values=values,
    )


@router.post("/{forecast_id}/edit")
async def update_forecast_page(
        request: Request,
        forecast_id: int,
        date: str = Form(""),
        temperature_c: str = Form(""),
        summary: str = Form(""),
        service: ForecastService = Depends(get_forecast_service),
):
    values = {"date": date, "temperature_c": temperature_c, "summary": summary}
    try:
        data = ForecastUpdate(**values)
    except ValidationError as e:
        return _render_form(
            request,
            title=f"Edit forecast #{forecast_id}",
            action=request.url.path,
            values=values,
            errors=_form_errors(e),
            status_code=400,
        )

    try:
        await service.update(data.to_model(forecast_id))
    except ForecastNotFoundError:
        return render_not_found(request)
    return RedirectResponse(url=request.url_for("weather_list").path, status_code=303)


@router.post("/{forecast_id}/delete")
async def delete_forecast_page(
        request: Request,
        forecast_id: int,
        service: ForecastService = Depends(get_forecast_service),
):
    await service.delete(forecast_id)
    return RedirectResponse(url=request.url_for("weather_list").path, status_code=303)
