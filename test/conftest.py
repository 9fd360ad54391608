"""
Test Configuration and Fixtures

This module provides:
- Early environment setup (log directory, SQLite database URL)
- A fresh, seeded SQLite database per integration test
- Repository fixtures bound to that database
- An HTTP TestClient whose container uses that database

Architecture:
- Unit tests (marked unit): mock the ports with AsyncMock, no fixtures from here
- Integration tests: real repositories against SQLite through aiosqlite
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks read the environment at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Fallback store for anything built from settings; fixtures use per-test files
    os.environ.setdefault(
        'DATABASE_URL', f'sqlite+aiosqlite:///{test_log_dir / "parking_test.db"}'
    )


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from script.seed_data import seed_parking_spots  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.database.db_setting import Database  # noqa: E402
from src.service.parking.driven_adapter.repo.parking_spot_command_repo_impl import (  # noqa: E402
    ParkingSpotCommandRepoImpl,
)
from src.service.parking.driven_adapter.repo.ticket_command_repo_impl import (  # noqa: E402
    TicketCommandRepoImpl,
)
from src.service.parking.driven_adapter.repo.ticket_query_repo_impl import (  # noqa: E402
    TicketQueryRepoImpl,
)
from test.constants import TEST_BIKE_SPOTS, TEST_CAR_SPOTS  # noqa: E402


# =============================================================================
# Database Fixtures
# =============================================================================
@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f'sqlite+aiosqlite:///{tmp_path / "parking.db"}'


@pytest.fixture
async def database(database_url: str) -> AsyncGenerator[Database, None]:
    """Seeded database: CAR spots 1..3, BIKE spots 4..5"""
    db = Database(url=database_url)
    await seed_parking_spots(db, car_spots=TEST_CAR_SPOTS, bike_spots=TEST_BIKE_SPOTS)
    yield db
    await db.dispose()


@pytest.fixture
def parking_spot_command_repo(database: Database) -> ParkingSpotCommandRepoImpl:
    return ParkingSpotCommandRepoImpl(session_factory=database.session)


@pytest.fixture
def ticket_command_repo(database: Database) -> TicketCommandRepoImpl:
    return TicketCommandRepoImpl(session_factory=database.session)


@pytest.fixture
def ticket_query_repo(database: Database) -> TicketQueryRepoImpl:
    return TicketQueryRepoImpl(session_factory=database.session)


# =============================================================================
# HTTP Client Fixture
# =============================================================================
def _seed_database(database_url: str) -> None:
    async def _run() -> None:
        db = Database(url=database_url)
        try:
            await seed_parking_spots(db, car_spots=TEST_CAR_SPOTS, bike_spots=TEST_BIKE_SPOTS)
        finally:
            await db.dispose()

    asyncio.run(_run())


@pytest.fixture
def client(database_url: str) -> Generator[TestClient, None, None]:
    """
    TestClient on a freshly seeded database

    The app's engine is created inside the TestClient event loop, so the
    container gets its own Database bound to the same file.
    """
    from test.test_main import app

    _seed_database(database_url)
    container.reset_singletons()

    with container.database.override(providers.Singleton(Database, url=database_url)):
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client

    container.reset_singletons()
