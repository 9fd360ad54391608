"""
Parking Spot Allocator

Hands out free spots of a requested type and gives them back. The store does
the selection and the claim in one statement, so this class never re-sorts or
re-checks availability itself.
"""

from src.platform.logging.loguru_io import Logger
from src.service.parking.app.interface.i_parking_spot_command_repo import (
    IParkingSpotCommandRepo,
)
from src.service.parking.domain.entity.parking_spot_entity import ParkingSpot
from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.domain.parking_errors import (
    NoSpotAvailableError,
    PersistenceFailureError,
)


class ParkingSpotAllocator:
    def __init__(self, *, parking_spot_command_repo: IParkingSpotCommandRepo) -> None:
        self.parking_spot_command_repo = parking_spot_command_repo

    @Logger.io
    async def reserve_next_spot(self, *, parking_type: ParkingType) -> ParkingSpot:
        """
        Claim the next free spot of the given type

        Raises:
            NoSpotAvailableError: every spot of that type is occupied
            PersistenceFailureError: the store could not be reached
        """
        spot_id = await self.parking_spot_command_repo.claim_next_available_spot(
            parking_type=parking_type
        )
        # Store sentinels for "nothing free": None, 0 or a negative id
        if not spot_id or spot_id <= 0:
            raise NoSpotAvailableError(
                f'No {parking_type.value} parking spot available, parking slots might be full'
            )

        return ParkingSpot(id=spot_id, parking_type=parking_type, available=False)

    @Logger.io
    async def release(self, *, parking_spot: ParkingSpot) -> ParkingSpot:
        """
        Mark the spot free again

        Raises:
            PersistenceFailureError: the write failed; the error carries the
                released spot so the caller can log it for reconciliation
        """
        released = parking_spot.free()
        try:
            updated = await self.parking_spot_command_repo.update_availability(
                spot_id=released.id, available=True
            )
        except PersistenceFailureError as e:
            raise PersistenceFailureError(e.message, parking_spot=released) from e

        if not updated:
            raise PersistenceFailureError(
                f'Unable to release parking spot {released.id}', parking_spot=released
            )

        Logger.base.info(f'🅿️ [ALLOCATOR] Released spot {released.id} ({released.parking_type})')
        return released
