import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.db.base import engine

logger = logging.getLogger(__name__)


class ContextFactory:
    """
    Hands out short-lived database sessions

    Every call to create_session returns a new, independent AsyncSession with its
    connection already checked out. The caller owns the session for one logical
    operation and releases it with ``async with``:

        async with await factory.create_session() as session:
            ...

    Leaving the block closes the session on every path, rolling back anything
    left uncommitted and returning the connection to the engine.
    """

    def __init__(self, bind: AsyncEngine, **session_options):
        self.bind = bind
        session_options.setdefault("autoflush", False)
        session_options.setdefault("expire_on_commit", False)
        self._sessionmaker = async_sessionmaker(bind=bind, **session_options)

    async def create_session(self) -> AsyncSession:
        """
        Open a new session and acquire its connection

        Raises:
            sqlalchemy.exc.SQLAlchemyError: the store cannot be reached; the
                half-built session is closed before the error propagates
        """
        session = self._sessionmaker()
        try:
            await session.connection()
        except Exception:
            await session.close()
            raise
        logger.debug("Opened database session %s", id(session))
        return session


context_factory = ContextFactory(engine)


def get_context_factory() -> ContextFactory:
    """
    Dependency returning the process-wide context factory

    Used by the FastAPI dependency system; tests override it to point at a
    throwaway database.
    """
    return context_factory
