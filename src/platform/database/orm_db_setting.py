"""
SQLAlchemy async engine and session management

The Database object is the single store client of the process: it is built by
the DI container (or by a test fixture), handed to every repository through
its ``session`` factory, and disposed by whoever created it.

Configuration:
- DATABASE_URL: full SQLAlchemy URL, takes precedence when set
- POSTGRES_*: used to assemble the asyncpg URL otherwise
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


class Database:
    """
    Store client for dependency injection

    The engine is created lazily on first use so that building the container
    never opens a connection.
    """

    def __init__(self, *, url: Optional[str] = None) -> None:
        self._url = url or settings.DATABASE_URL_ASYNC
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def url(self) -> str:
        return self._url

    def get_engine(self) -> AsyncEngine:
        if self._engine is None:
            Logger.base.info(f'🔗 [DB] Creating engine for {self._engine_label()}')
            self._engine = create_async_engine(self._url, **self._engine_options())
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                self.get_engine(),
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: Automatically handles rollback on exception
        """
        async with self.get_session_maker()() as session:
            yield session

    async def create_db_and_tables(self) -> None:
        """Create database tables if they don't exist"""
        # Models register themselves on Base.metadata at import time
        import src.service.parking.driven_adapter.model  # noqa: F401

        try:
            async with self.get_engine().begin() as conn:
                await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        except Exception as e:
            error_msg = str(e).lower()
            if any(
                keyword in error_msg
                for keyword in ['already exists', 'duplicate key', 'unique constraint']
            ):
                Logger.base.info('Tables already exist, skipping creation')
            else:
                Logger.base.error(f'Error creating tables: {e}')
                raise

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            Logger.base.info(f'🔌 [DB] Engine disposed for {self._engine_label()}')
        self._engine = None
        self._session_maker = None

    def _is_sqlite(self) -> bool:
        return self._url.startswith('sqlite')

    def _engine_label(self) -> str:
        # Never log credentials
        return self._url.split('@')[-1] if '@' in self._url else self._url

    def _engine_options(self) -> dict[str, Any]:
        if self._is_sqlite():
            # Wait on the database lock instead of failing concurrent writers immediately
            return {'echo': False, 'connect_args': {'timeout': settings.DB_POOL_TIMEOUT}}
        return {
            'echo': False,
            'pool_size': settings.DB_POOL_SIZE,
            'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
            'pool_timeout': settings.DB_POOL_TIMEOUT,
            'pool_recycle': settings.DB_POOL_RECYCLE,
            'pool_pre_ping': settings.DB_POOL_PRE_PING,
        }
