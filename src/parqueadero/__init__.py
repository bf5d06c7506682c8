"""Parqueadero: parking lot management (owners, vehicles, billed services)."""

from .domain.aggregates import ParkingLot, ParkingPolicies, FAILED_SERVICE_COST
from .domain.models import Owner, Vehicle, Service, VehicleCategory, Money
from .domain.results import OperationResult, FailureReason

__version__ = "1.0.0"

__all__ = [
    "ParkingLot", "ParkingPolicies", "FAILED_SERVICE_COST",
    "Owner", "Vehicle", "Service", "VehicleCategory", "Money",
    "OperationResult", "FailureReason",
]
