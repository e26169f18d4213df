import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.forecast import SUMMARY_MAX_LENGTH, WeatherForecast


class ForecastBase(BaseModel):
    """
    Fields a client supplies for a forecast
    """
    date: datetime.date
    temperature_c: int
    summary: Optional[str] = Field(default=None, max_length=SUMMARY_MAX_LENGTH)

    @field_validator("summary", mode="before")
    @classmethod
    def blank_summary_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    def to_model(self, forecast_id: Optional[int] = None) -> WeatherForecast:
        return WeatherForecast(
            id=forecast_id,
            date=self.date,
            temperature_c=self.temperature_c,
            summary=self.summary,
        )


class ForecastCreate(ForecastBase):
    """Request body for creating a forecast"""


class ForecastUpdate(ForecastBase):
    """Request body for replacing a forecast; every field is overwritten"""


class ForecastRead(BaseModel):
    """
    Forecast as returned by the API
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: datetime.date
    temperature_c: int
    temperature_f: int
    summary: Optional[str] = None
