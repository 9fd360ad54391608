from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.parking.domain.entity.parking_spot_entity import ParkingSpot
from src.service.parking.domain.entity.ticket_entity import (
    VEHICLE_REG_NUMBER_MAX_LENGTH,
    Ticket,
    normalize_vehicle_reg_number,
)
from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.domain.enum.ticket_status import TicketStatus
from src.service.parking.domain.parking_errors import (
    InvalidIntervalError,
    InvalidVehicleRegNumberError,
)


IN_TIME = datetime(2025, 1, 10, 10, 0, tzinfo=timezone.utc)


@pytest.mark.unit
class TestTicket:
    @pytest.fixture
    def car_spot(self) -> ParkingSpot:
        return ParkingSpot(id=1, parking_type=ParkingType.CAR, available=False)

    @pytest.fixture
    def open_ticket(self, car_spot: ParkingSpot) -> Ticket:
        return Ticket.open(parking_spot=car_spot, vehicle_reg_number='ABCDEF', in_time=IN_TIME)

    def test_open_ticket(self, open_ticket: Ticket) -> None:
        assert open_ticket.status == TicketStatus.OPEN
        assert open_ticket.price == 0.0
        assert open_ticket.out_time is None
        assert open_ticket.id is None

    def test_open_trims_vehicle_reg_number(self, car_spot: ParkingSpot) -> None:
        ticket = Ticket.open(parking_spot=car_spot, vehicle_reg_number='  AB-12 ', in_time=IN_TIME)
        assert ticket.vehicle_reg_number == 'AB-12'

    def test_close_sets_out_time_and_price_together(self, open_ticket: Ticket) -> None:
        out_time = IN_TIME + timedelta(hours=1)

        closed = open_ticket.close(out_time=out_time, discount=False)

        assert closed.status == TicketStatus.CLOSED
        assert closed.out_time == out_time
        assert closed.price == pytest.approx(1.5)
        assert closed.in_time == IN_TIME
        # The open ticket is left untouched
        assert open_ticket.out_time is None
        assert open_ticket.price == 0.0

    def test_close_with_discount(self, open_ticket: Ticket) -> None:
        closed = open_ticket.close(out_time=IN_TIME + timedelta(hours=1), discount=True)
        assert closed.price == pytest.approx(0.95 * 1.5)

    def test_fail_to_close_twice(self, open_ticket: Ticket) -> None:
        closed = open_ticket.close(out_time=IN_TIME + timedelta(hours=1), discount=False)

        with pytest.raises(DomainError, match='already closed'):
            closed.close(out_time=IN_TIME + timedelta(hours=2), discount=False)

    def test_fail_to_close_before_in_time(self, open_ticket: Ticket) -> None:
        with pytest.raises(InvalidIntervalError):
            open_ticket.close(out_time=IN_TIME - timedelta(seconds=1), discount=False)


@pytest.mark.unit
class TestNormalizeVehicleRegNumber:
    @pytest.mark.parametrize('value', ['', '   ', None])
    def test_fail_for_empty_value(self, value: str | None) -> None:
        with pytest.raises(InvalidVehicleRegNumberError):
            normalize_vehicle_reg_number(value)

    def test_strip_whitespace(self) -> None:
        assert normalize_vehicle_reg_number('\tXY-123\n') == 'XY-123'

    def test_longest_allowed_value(self) -> None:
        assert normalize_vehicle_reg_number('A' * VEHICLE_REG_NUMBER_MAX_LENGTH) == 'A' * 20

    def test_fail_for_too_long_value(self) -> None:
        with pytest.raises(InvalidVehicleRegNumberError):
            normalize_vehicle_reg_number('A' * (VEHICLE_REG_NUMBER_MAX_LENGTH + 1))


@pytest.mark.unit
class TestParkingSpot:
    def test_occupy_and_free(self) -> None:
        spot = ParkingSpot(id=4, parking_type=ParkingType.BIKE)

        occupied = spot.occupy()

        assert occupied.available is False
        assert occupied.free().available is True
        assert spot.available is True

    @pytest.mark.parametrize('spot_id', [0, -1])
    def test_fail_for_non_positive_id(self, spot_id: int) -> None:
        with pytest.raises(ValueError):
            ParkingSpot(id=spot_id, parking_type=ParkingType.CAR)
