"""
Weather forecast service

Plain SQLAlchemy usage without a generic repository layer. Each method opens its
own short-lived session through the context factory, performs one unit of work
and closes the session before returning, so no session outlives a single call.
"""
import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import make_transient

from app.db.session import ContextFactory
from app.infrastructure.exceptions import ForecastNotFoundError
from app.models.forecast import MAX_ID, MIN_ID, WeatherForecast

logger = logging.getLogger(__name__)

SUMMARY_OPTIONS = (
    "Freezing", "Bracing", "Chilly", "Cool", "Mild",
    "Warm", "Balmy", "Hot", "Sweltering", "Scorching",
)


def is_storable_id(forecast_id: int) -> bool:
    """Ids outside the INTEGER range cannot exist in the store"""
    return MIN_ID <= forecast_id <= MAX_ID


class ForecastService:
    def __init__(self, context_factory: ContextFactory):
        self.context_factory = context_factory

    async def get_all(self) -> List[WeatherForecast]:
        """
        Get all weather forecasts ordered by date
        """
        async with await self.context_factory.create_session() as session:
            result = await session.execute(
                select(WeatherForecast).order_by(WeatherForecast.date, WeatherForecast.id)
            )
            return list(result.scalars().all())

    async def get_by_id(self, forecast_id: int) -> Optional[WeatherForecast]:
        """
        Get a weather forecast by its id, None when there is no such row
        """
        if not is_storable_id(forecast_id):
            return None
        async with await self.context_factory.create_session() as session:
            forecast = await session.get(WeatherForecast, forecast_id)
            logger.debug("Lookup of forecast %s: %s", forecast_id, "hit" if forecast else "miss")
            return forecast

    async def create(self, forecast: WeatherForecast) -> WeatherForecast:
        """
        Create a new weather forecast

        Any id on the incoming record is discarded; the store assigns one.
        """
        make_transient(forecast)
        forecast.id = None
        async with await self.context_factory.create_session() as session:
            session.add(forecast)
            await session.commit()
        logger.info("Created weather forecast %s for %s", forecast.id, forecast.date)
        return forecast

    async def update(self, forecast: WeatherForecast) -> WeatherForecast:
        """
        Replace every field of the stored forecast matching forecast.id

        Raises:
            ForecastNotFoundError: no row has that id; nothing is written
        """
        if forecast.id is None or not is_storable_id(forecast.id):
            raise ForecastNotFoundError(forecast.id)
        async with await self.context_factory.create_session() as session:
            result = await session.execute(
                update(WeatherForecast)
                .where(WeatherForecast.id == forecast.id)
                .values(
                    date=forecast.date,
                    temperature_c=forecast.temperature_c,
                    summary=forecast.summary,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise ForecastNotFoundError(forecast.id)
            await session.commit()
        logger.info("Updated weather forecast %s", forecast.id)
        return forecast

    async def delete(self, forecast_id: int) -> None:
        """
        Delete a weather forecast by its id; a missing id is not an error
        """
        if not is_storable_id(forecast_id):
            logger.debug("Delete of out-of-range forecast id %s ignored", forecast_id)
            return
        async with await self.context_factory.create_session() as session:
            forecast = await session.get(WeatherForecast, forecast_id)
            if forecast is None:
                logger.debug("Delete of missing forecast %s ignored", forecast_id)
                return
            await session.delete(forecast)
            await session.commit()
        logger.info("Deleted weather forecast %s", forecast_id)

    @staticmethod
    def get_summary_options() -> List[str]:
        """
        Get the available weather summary labels
        """
        return list(SUMMARY_OPTIONS)
