import logging
from collections.abc import AsyncGenerator
from typing import Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

DATABASE_URL = "sqlite+aiosqlite:///./stall.db"


class Base(DeclarativeBase):
    pass


class Database:
    """Handle on the durable store: one engine, opened at startup and closed at shutdown.

    Constructed once per process and shared through ``app.state.database``;
    request handlers get sessions from it via ``get_async_session``.
    """

    def __init__(self, url: str = DATABASE_URL, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    async def open(self) -> None:
        if self._engine is not None:
            return
        # register tables on Base.metadata
        from db.inventory.item import InventoryItem  # noqa: F401
        from db.sale import Sale  # noqa: F401

        self._engine = create_async_engine(self.url, echo=self.echo)
        self._session_maker = async_sessionmaker(self._engine, expire_on_commit=False)
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Opened store at %s", self._engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Closed store")

    def session(self) -> AsyncSession:
        if self._session_maker is None:
            raise RuntimeError("Database is not open")
        return self._session_maker()


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
