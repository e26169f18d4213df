import asyncio
import logging
import random
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.base import Base, engine as default_engine
from app.db.session import ContextFactory
from app.models.forecast import WeatherForecast
from app.services.core.forecast_service import ForecastService

logger = logging.getLogger(__name__)

SEED_DAYS = 5


async def create_tables(engine: Optional[AsyncEngine] = None) -> None:
    """Create every missing table; existing tables are left alone."""
    async with (engine or default_engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def reset_db(engine: Optional[AsyncEngine] = None) -> None:
    """Drop and recreate every table."""
    async with (engine or default_engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def seed_forecasts(context_factory: ContextFactory, days: int = SEED_DAYS) -> int:
    """
    Insert sample forecasts for the coming days when the table is empty

    Returns:
        int: number of forecasts inserted
    """
    async with await context_factory.create_session() as session:
        count = await session.scalar(select(func.count()).select_from(WeatherForecast))
    if count:
        logger.info("Forecast table already holds %s rows, skipping seed", count)
        return 0

    service = ForecastService(context_factory)
    summaries = service.get_summary_options()
    start = date.today()
    for offset in range(1, days + 1):
        await service.create(WeatherForecast(
            date=start + timedelta(days=offset),
            temperature_c=random.randint(-20, 55),
            summary=random.choice(summaries),
        ))
    logger.info("Seeded %s sample forecasts", days)
    return days


async def init_db(
        engine: Optional[AsyncEngine] = None,
        seed: bool = False,
) -> None:
    """
    Ensure the schema exists and optionally seed sample data
    """
    engine = engine or default_engine
    await create_tables(engine)
    if seed:
        await seed_forecasts(ContextFactory(engine))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_tables())
    logging.info("Database tables created")
