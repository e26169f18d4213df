"""
API Dependencies

Provides dependency injection for the context factory and the forecast service.
The service holds the factory, never a session: each service call opens and
closes its own session, so one service instance can safely serve a long-lived
page or many requests.
"""

from fastapi import Depends

from app.db.session import ContextFactory, get_context_factory
from app.services.core.forecast_service import ForecastService


def get_forecast_service(
    context_factory: ContextFactory = Depends(get_context_factory),
) -> ForecastService:
    """
    Get Forecast Service instance bound to the context factory

    Returns:
        ForecastService: Configured forecast service
    """
    return ForecastService(context_factory)
