"""
Custom exceptions for the forecast service.
"""


class ForecastError(Exception):
    """Base class for forecast service errors."""
    pass


class ForecastNotFoundError(ForecastError):
    """An update targeted a forecast id that is not in the store."""

    def __init__(self, forecast_id):
        self.forecast_id = forecast_id
        super().__init__(f"Weather forecast {forecast_id} not found")
