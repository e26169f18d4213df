from typing import Any, Dict

from sqlalchemy import Column, Date, Integer, String

from app.db.base import Base

SUMMARY_MAX_LENGTH = 64
# SQLite INTEGER is a signed 64-bit value; larger ids can never be stored
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


class WeatherForecast(Base):
    """
    Weather forecast database model

    One row per forecast; the id is assigned by the store on insert.
    """
    __tablename__ = "weather_forecasts"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    temperature_c = Column(Integer, nullable=False)
    summary = Column(String(SUMMARY_MAX_LENGTH), nullable=True)

    @property
    def temperature_f(self) -> int:
        """Fahrenheit, computed for display only"""
        return 32 + int(self.temperature_c / 0.5556)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "temperature_c": self.temperature_c,
            "temperature_f": self.temperature_f if self.temperature_c is not None else None,
            "summary": self.summary,
        }

    def __repr__(self) -> str:
        return f"<WeatherForecast id={self.id} date={self.date} temperature_c={self.temperature_c}>"
