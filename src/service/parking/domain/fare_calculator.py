"""
Fare Calculator Domain

Pure pricing rules for a completed stay. No store access, no clock: the caller
supplies both timestamps.
"""

from datetime import datetime, timedelta
from typing import Optional

from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.domain.parking_errors import (
    InvalidIntervalError,
    UnknownParkingTypeError,
)


class Fare:
    CAR_RATE_PER_HOUR = 1.5
    BIKE_RATE_PER_HOUR = 1.0

    FREE_DURATION_HOURS = 0.5
    REGULAR_DISCOUNT_RATE = 0.95


HOURLY_RATES: dict[ParkingType, float] = {
    ParkingType.CAR: Fare.CAR_RATE_PER_HOUR,
    ParkingType.BIKE: Fare.BIKE_RATE_PER_HOUR,
}

_MILLIS_PER_HOUR = 3_600_000


def hourly_rate(parking_type: ParkingType) -> float:
    try:
        return HOURLY_RATES[parking_type]
    except KeyError:
        raise UnknownParkingTypeError(f'Unknown parking type: {parking_type}')


def _truncate_to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def stay_duration_hours(*, in_time: datetime, out_time: datetime) -> float:
    # Each timestamp is truncated to whole milliseconds before subtracting
    millis = (_truncate_to_millis(out_time) - _truncate_to_millis(in_time)) // timedelta(
        milliseconds=1
    )
    return millis / _MILLIS_PER_HOUR


def calculate_fare(
    *,
    in_time: datetime,
    out_time: Optional[datetime],
    parking_type: ParkingType,
    discount: bool = False,
) -> float:
    """
    Price of a stay.

    Raises:
        InvalidIntervalError: out_time missing or before in_time
        UnknownParkingTypeError: no hourly rate for parking_type
    """
    if out_time is None or out_time < in_time:
        raise InvalidIntervalError(f'Out time provided is incorrect: {out_time}')

    duration = stay_duration_hours(in_time=in_time, out_time=out_time)
    if duration <= Fare.FREE_DURATION_HOURS:
        return 0.0

    reduction = Fare.REGULAR_DISCOUNT_RATE if discount else 1.0
    return duration * hourly_rate(parking_type) * reduction
