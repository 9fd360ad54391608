"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.service.parking.app.query.loyalty_lookup_use_case import LoyaltyLookupUseCase
from src.service.parking.app.service.parking_spot_allocator import ParkingSpotAllocator
from src.service.parking.driven_adapter.repo.parking_spot_command_repo_impl import (
    ParkingSpotCommandRepoImpl,
)
from src.service.parking.driven_adapter.repo.ticket_command_repo_impl import (
    TicketCommandRepoImpl,
)
from src.service.parking.driven_adapter.repo.ticket_query_repo_impl import TicketQueryRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (engine is created lazily on first session)
    database = providers.Singleton(Database, url=config_service.provided.DATABASE_URL_ASYNC)

    # Repositories (stateless - use session_factory per-call)
    parking_spot_command_repo = providers.Singleton(
        ParkingSpotCommandRepoImpl, session_factory=database.provided.session
    )
    ticket_command_repo = providers.Singleton(
        TicketCommandRepoImpl, session_factory=database.provided.session
    )
    ticket_query_repo = providers.Singleton(
        TicketQueryRepoImpl, session_factory=database.provided.session
    )

    # Application services
    parking_spot_allocator = providers.Singleton(
        ParkingSpotAllocator, parking_spot_command_repo=parking_spot_command_repo
    )
    loyalty_lookup = providers.Singleton(LoyaltyLookupUseCase, ticket_query_repo=ticket_query_repo)


container = Container()
