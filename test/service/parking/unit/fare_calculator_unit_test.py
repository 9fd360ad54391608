"""
Unit tests for the fare calculator

Test Focus:
1. Hourly rates per vehicle category
2. First half hour is free, boundary included
3. 5% regular-customer reduction
4. Fail Fast: missing or inverted interval, unknown category
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.domain.fare_calculator import (
    Fare,
    calculate_fare,
    hourly_rate,
    stay_duration_hours,
)
from src.service.parking.domain.parking_errors import (
    InvalidIntervalError,
    UnknownParkingTypeError,
)


IN_TIME = datetime(2025, 1, 10, 10, 0, tzinfo=timezone.utc)


def _fare(minutes: float, parking_type: ParkingType, discount: bool = False) -> float:
    return calculate_fare(
        in_time=IN_TIME,
        out_time=IN_TIME + timedelta(minutes=minutes),
        parking_type=parking_type,
        discount=discount,
    )


@pytest.mark.unit
class TestCalculateFare:
    def test_car_one_hour(self) -> None:
        assert _fare(60, ParkingType.CAR) == pytest.approx(1.5)

    def test_bike_one_hour(self) -> None:
        assert _fare(60, ParkingType.BIKE) == pytest.approx(1.0)

    def test_bike_less_than_one_hour(self) -> None:
        assert _fare(45, ParkingType.BIKE) == pytest.approx(0.75)

    def test_car_less_than_one_hour(self) -> None:
        assert _fare(45, ParkingType.CAR) == pytest.approx(0.75 * Fare.CAR_RATE_PER_HOUR)

    def test_car_more_than_a_day(self) -> None:
        assert _fare(24 * 60, ParkingType.CAR) == pytest.approx(24 * Fare.CAR_RATE_PER_HOUR)

    @pytest.mark.parametrize('parking_type', [ParkingType.CAR, ParkingType.BIKE])
    @pytest.mark.parametrize('minutes', [0, 10, 29, 30])
    def test_first_half_hour_is_free(self, minutes: int, parking_type: ParkingType) -> None:
        assert _fare(minutes, parking_type) == 0.0

    def test_just_over_half_hour_is_charged_in_full(self) -> None:
        # No free allowance is deducted once the stay exceeds 30 minutes
        assert _fare(31, ParkingType.CAR) == pytest.approx(31 / 60 * Fare.CAR_RATE_PER_HOUR)

    def test_discount_for_regular_car(self) -> None:
        assert _fare(60, ParkingType.CAR, discount=True) == pytest.approx(0.95 * 1.5)

    def test_discount_for_regular_bike(self) -> None:
        assert _fare(60, ParkingType.BIKE, discount=True) == pytest.approx(0.95)

    def test_discount_does_not_apply_to_free_stay(self) -> None:
        assert _fare(20, ParkingType.CAR, discount=True) == 0.0

    def test_discount_never_increases_price(self) -> None:
        for minutes in (31, 45, 90, 600):
            for parking_type in ParkingType:
                assert _fare(minutes, parking_type, discount=True) <= _fare(minutes, parking_type)

    def test_fail_when_out_time_missing(self) -> None:
        with pytest.raises(InvalidIntervalError, match='Out time provided is incorrect'):
            calculate_fare(in_time=IN_TIME, out_time=None, parking_type=ParkingType.CAR)

    def test_fail_when_out_time_before_in_time(self) -> None:
        with pytest.raises(InvalidIntervalError):
            calculate_fare(
                in_time=IN_TIME,
                out_time=IN_TIME - timedelta(minutes=1),
                parking_type=ParkingType.BIKE,
            )

    def test_fail_for_unknown_parking_type(self) -> None:
        with pytest.raises(UnknownParkingTypeError):
            calculate_fare(
                in_time=IN_TIME,
                out_time=IN_TIME + timedelta(hours=2),
                parking_type='TRUCK',  # type: ignore[arg-type]
            )


@pytest.mark.unit
class TestStayDuration:
    def test_duration_in_fractional_hours(self) -> None:
        assert stay_duration_hours(
            in_time=IN_TIME, out_time=IN_TIME + timedelta(minutes=45)
        ) == pytest.approx(0.75)

    def test_sub_millisecond_difference_is_ignored(self) -> None:
        assert (
            stay_duration_hours(in_time=IN_TIME, out_time=IN_TIME + timedelta(microseconds=999))
            == 0.0
        )

    def test_timestamps_truncated_before_subtracting(self) -> None:
        # 30 min + 0.2 ms apart, but 30 min + 1 ms once each side drops its microseconds
        in_time = IN_TIME.replace(microsecond=900)
        out_time = IN_TIME + timedelta(minutes=30, microseconds=1_100)

        assert stay_duration_hours(in_time=in_time, out_time=out_time) == 1_800_001 / 3_600_000
        assert calculate_fare(
            in_time=in_time, out_time=out_time, parking_type=ParkingType.CAR
        ) == pytest.approx(1_800_001 / 3_600_000 * Fare.CAR_RATE_PER_HOUR)

    def test_every_category_has_a_rate(self) -> None:
        for parking_type in ParkingType:
            assert hourly_rate(parking_type) > 0
