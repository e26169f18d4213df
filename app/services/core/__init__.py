"""
Core Services Module

Provides the CRUD service for weather forecasts.
"""

from .forecast_service import ForecastService

__all__ = ["ForecastService"]
