"""Domain layer: entities, value objects, pricing and the parking lot aggregate."""

from .models import (
    Money, VehicleCategory, Entity, Owner, Vehicle, Service,
    DomainEvent, OwnerRegisteredEvent, VehicleRegisteredEvent,
    HoursAccumulatedEvent, ServiceRegisteredEvent
)
from .results import OperationResult, FailureReason
from .strategies import PricingStrategy, HourlyRatePricingStrategy, DEFAULT_HOURLY_RATES
from .aggregates import AggregateRoot, ParkingLot, ParkingPolicies, FAILED_SERVICE_COST

__all__ = [
    "Money", "VehicleCategory", "Entity", "Owner", "Vehicle", "Service",
    "DomainEvent", "OwnerRegisteredEvent", "VehicleRegisteredEvent",
    "HoursAccumulatedEvent", "ServiceRegisteredEvent",
    "OperationResult", "FailureReason",
    "PricingStrategy", "HourlyRatePricingStrategy", "DEFAULT_HOURLY_RATES",
    "AggregateRoot", "ParkingLot", "ParkingPolicies", "FAILED_SERVICE_COST",
]
