from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.parking.app.command.process_exiting_vehicle_use_case import (
    ProcessExitingVehicleUseCase,
)
from src.service.parking.app.command.process_incoming_vehicle_use_case import (
    ProcessIncomingVehicleUseCase,
)
from src.service.parking.driving_adapter.http_controller.schema.parking_schema import (
    ParkingEntryRequest,
    ParkingEntryResponse,
    ParkingExitRequest,
    ParkingExitResponse,
)


router = APIRouter()


@router.post('/entry', status_code=status.HTTP_201_CREATED)
@Logger.io
async def process_incoming_vehicle(
    request: ParkingEntryRequest,
    use_case: ProcessIncomingVehicleUseCase = Depends(ProcessIncomingVehicleUseCase.depends),
) -> ParkingEntryResponse:
    result = await use_case.execute(
        vehicle_reg_number=request.vehicle_reg_number,
        parking_type=request.parking_type,
    )

    if result.ticket.id is None:
        raise ValueError('Ticket ID should not be None after creation.')

    return ParkingEntryResponse(
        ticket_id=result.ticket.id,
        parking_spot_id=result.parking_spot.id,
        parking_type=result.parking_spot.parking_type.value,
        vehicle_reg_number=result.ticket.vehicle_reg_number,
        in_time=result.ticket.in_time,
        returning_customer=result.returning_customer,
    )


@router.post('/exit', status_code=status.HTTP_200_OK)
@Logger.io
async def process_exiting_vehicle(
    request: ParkingExitRequest,
    use_case: ProcessExitingVehicleUseCase = Depends(ProcessExitingVehicleUseCase.depends),
) -> ParkingExitResponse:
    result = await use_case.execute(vehicle_reg_number=request.vehicle_reg_number)
    ticket = result.ticket

    return ParkingExitResponse(
        ticket_id=ticket.id or 0,
        parking_spot_id=ticket.parking_spot.id,
        vehicle_reg_number=ticket.vehicle_reg_number,
        price=ticket.price,
        in_time=ticket.in_time,
        out_time=ticket.out_time,
        discount_applied=result.discount_applied,
        spot_released=result.spot_released,
    )
