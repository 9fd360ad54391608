"""
Parking Type Enum - Domain Value Object

Vehicle category a spot is built for. Exactly two categories exist; the menu
numbering (1 = CAR, 2 = BIKE) is part of the gate terminal contract.
"""

from enum import StrEnum

from src.service.parking.domain.parking_errors import InvalidParkingTypeError


class ParkingType(StrEnum):
    CAR = 'CAR'
    BIKE = 'BIKE'

    @classmethod
    def from_selection(cls, selection: int) -> 'ParkingType':
        try:
            return _MENU_SELECTION[selection]
        except (KeyError, TypeError):
            raise InvalidParkingTypeError(f'Unsupported vehicle type selection: {selection}')

    @classmethod
    def parse(cls, value: 'ParkingType | str | int') -> 'ParkingType':
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_selection(value)
        if isinstance(value, str):
            normalized = value.strip().upper()
            if normalized.isdigit():
                return cls.from_selection(int(normalized))
            try:
                return cls(normalized)
            except ValueError:
                pass
        raise InvalidParkingTypeError(f'Unsupported vehicle type: {value!r}')


_MENU_SELECTION: dict[int, ParkingType] = {
    1: ParkingType.CAR,
    2: ParkingType.BIKE,
}
