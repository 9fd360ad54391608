#!/usr/bin/env python
"""
Interactive Parking Shell
Gate console for attendants without the HTTP API

Menu:
1. New vehicle entering - allocate parking space
2. Vehicle exiting - generate ticket price
3. Shutdown system

Usage:
    python -m src.service.parking.driving_adapter.cli.interactive_shell
"""

from typing import Callable

import anyio

from src.platform.config.di import container
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.parking.app.command.process_exiting_vehicle_use_case import (
    ProcessExitingVehicleUseCase,
)
from src.service.parking.app.command.process_incoming_vehicle_use_case import (
    ProcessIncomingVehicleUseCase,
)
from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.domain.parking_errors import InvalidParkingTypeError


INVALID_SELECTION = -1


class MenuOption:
    INCOMING_VEHICLE = 1
    EXITING_VEHICLE = 2
    SHUTDOWN = 3


class InteractiveShell:
    def __init__(
        self,
        *,
        process_incoming_vehicle: ProcessIncomingVehicleUseCase,
        process_exiting_vehicle: ProcessExitingVehicleUseCase,
        read_line: Callable[[], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.process_incoming_vehicle = process_incoming_vehicle
        self.process_exiting_vehicle = process_exiting_vehicle
        self.read_line = read_line
        self.write = write

    async def run(self) -> None:
        """Loop over the main menu until shutdown is chosen or input ends"""
        Logger.base.info('🚀 [SHELL] App initialized')
        self.write('🅿️ Welcome to Parking System!')

        while True:
            self._show_menu()
            try:
                option = self._read_selection()
            except EOFError:
                option = MenuOption.SHUTDOWN

            if option == MenuOption.INCOMING_VEHICLE:
                await self._process_incoming_vehicle()
            elif option == MenuOption.EXITING_VEHICLE:
                await self._process_exiting_vehicle()
            elif option == MenuOption.SHUTDOWN:
                self.write('👋 Exiting from the system!')
                return
            else:
                self.write(
                    '❌ Unsupported option. Please enter a number corresponding to the provided menu'
                )

    def _show_menu(self) -> None:
        self.write('\nPlease select an option. Simply enter the number to choose an action')
        self.write(f'  {MenuOption.INCOMING_VEHICLE}. New Vehicle Entering - Allocate Parking Space')
        self.write(f'  {MenuOption.EXITING_VEHICLE}. Vehicle Exiting - Generate Ticket Price')
        self.write(f'  {MenuOption.SHUTDOWN}. Shutdown System')

    def _read_selection(self) -> int:
        raw = self.read_line()
        try:
            return int(raw.strip())
        except ValueError:
            Logger.base.warning(f'⚠️ [SHELL] Non-numeric selection: {raw!r}')
            self.write('❌ Error reading input. Please enter valid number for proceeding further')
            return INVALID_SELECTION

    def _read_parking_type(self) -> ParkingType:
        self.write('Please select vehicle type from menu')
        for selection, parking_type in ((1, ParkingType.CAR), (2, ParkingType.BIKE)):
            self.write(f'  {selection}. {parking_type.value}')

        selection = self._read_selection()
        if selection == INVALID_SELECTION:
            raise InvalidParkingTypeError('Incorrect input provided')
        return ParkingType.from_selection(selection)

    def _read_vehicle_reg_number(self) -> str:
        self.write('Please type the vehicle registration number and press enter key')
        return self.read_line()

    async def _process_incoming_vehicle(self) -> None:
        try:
            parking_type = self._read_parking_type()
            vehicle_reg_number = self._read_vehicle_reg_number()
            result = await self.process_incoming_vehicle.execute(
                vehicle_reg_number=vehicle_reg_number, parking_type=parking_type
            )
        except CustomBaseError as e:
            self.write(f'❌ Unable to process incoming vehicle: {e.message}')
            return

        if result.returning_customer:
            self.write(
                '🎉 Welcome back! As a regular user of our parking, you will receive a 5% discount.'
            )
        self.write(f'Please park your vehicle in spot number: {result.parking_spot.id}')
        self.write(
            f'Recorded in-time for vehicle number: {result.ticket.vehicle_reg_number} '
            f'is: {result.ticket.in_time.isoformat()}'
        )

    async def _process_exiting_vehicle(self) -> None:
        try:
            vehicle_reg_number = self._read_vehicle_reg_number()
            result = await self.process_exiting_vehicle.execute(
                vehicle_reg_number=vehicle_reg_number
            )
        except CustomBaseError as e:
            self.write(f'❌ Unable to process exiting vehicle: {e.message}')
            return

        ticket = result.ticket
        self.write(f'💰 Please pay the parking fare: {ticket.price:.2f}')
        self.write(
            f'Recorded out-time for vehicle number: {ticket.vehicle_reg_number} '
            f'is: {ticket.out_time.isoformat() if ticket.out_time else "-"}'
        )
        if not result.spot_released:
            self.write(
                f'⚠️ Spot {ticket.parking_spot.id} could not be released, please notify an operator'
            )


def build_interactive_shell() -> InteractiveShell:
    return InteractiveShell(
        process_incoming_vehicle=ProcessIncomingVehicleUseCase(
            parking_spot_allocator=container.parking_spot_allocator(),
            ticket_command_repo=container.ticket_command_repo(),
            loyalty_lookup=container.loyalty_lookup(),
        ),
        process_exiting_vehicle=ProcessExitingVehicleUseCase(
            parking_spot_allocator=container.parking_spot_allocator(),
            ticket_command_repo=container.ticket_command_repo(),
            ticket_query_repo=container.ticket_query_repo(),
            loyalty_lookup=container.loyalty_lookup(),
        ),
    )


async def main() -> None:
    database = container.database()
    await database.create_db_and_tables()
    try:
        await build_interactive_shell().run()
    finally:
        await database.dispose()
        container.reset_singletons()


if __name__ == '__main__':
    try:
        anyio.run(main)
    except KeyboardInterrupt:
        print('\n👋 Bye!')
