import attrs

from src.service.parking.domain.enum.parking_type import ParkingType


@attrs.define(frozen=True)
class ParkingSpot:
    id: int = attrs.field(validator=attrs.validators.gt(0))
    parking_type: ParkingType
    available: bool = True

    def occupy(self) -> 'ParkingSpot':
        return attrs.evolve(self, available=False)

    def free(self) -> 'ParkingSpot':
        return attrs.evolve(self, available=True)
