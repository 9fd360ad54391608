"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.parking.app.command import (
    process_exiting_vehicle_use_case,
    process_incoming_vehicle_use_case,
)
from src.service.parking.driving_adapter.http_controller import parking_controller


WIRE_MODULES: list[ModuleType] = [
    process_incoming_vehicle_use_case,
    process_exiting_vehicle_use_case,
    parking_controller,
]
