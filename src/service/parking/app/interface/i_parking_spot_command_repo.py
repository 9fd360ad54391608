"""
Parking Spot Command Repository Interface

Spot rows are seeded out-of-band; the core only claims and frees them.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.parking.domain.enum.parking_type import ParkingType


class IParkingSpotCommandRepo(ABC):
    @abstractmethod
    async def claim_next_available_spot(self, *, parking_type: ParkingType) -> Optional[int]:
        """
        Atomically mark the next free spot of the given type as occupied

        Two concurrent callers never receive the same spot id.

        Returns:
            The claimed spot id, or None when every spot of that type is taken

        Raises:
            PersistenceFailureError: the store could not be reached
        """
        pass

    @abstractmethod
    async def update_availability(self, *, spot_id: int, available: bool) -> bool:
        """
        Set the availability flag of one spot

        Returns:
            True if exactly one row was updated
        """
        pass
