# File: src/parqueadero/domain/aggregates.py
"""
Aggregate Roots for the Parqueadero Management System
Following Domain-Driven Design (DDD) Aggregate Pattern

Aggregates:
1. ParkingLot - Root aggregate owning owners, vehicles and the service history

Key Concepts:
- Aggregate Roots enforce business invariants
- Entities within aggregates are accessed through the root
- Domain events are raised for important state changes
- All modifications go through aggregate root methods
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Dict, Tuple, Any
from datetime import datetime
from decimal import Decimal
import logging
import threading

from .models import (
    Entity, Owner, Vehicle, Service, Money,
    DomainEvent, OwnerRegisteredEvent, VehicleRegisteredEvent,
    HoursAccumulatedEvent, ServiceRegisteredEvent,
    DEFAULT_VIP_HOURS_THRESHOLD
)
from .results import OperationResult, FailureReason
from .strategies import PricingStrategy, HourlyRatePricingStrategy


# Returned by register_service when any validation fails
FAILED_SERVICE_COST = Decimal('-1')


# ============================================================================
# BASE AGGREGATE ROOT
# ============================================================================

class AggregateRoot(Entity):
    """
    Base class for all aggregate roots
    Provides domain event collection and versioning
    """

    def __init__(self, id: Optional[str] = None):
        super().__init__(id)
        self._version: int = 1
        self._changes: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def version(self) -> int:
        """Get current aggregate version"""
        return self._version

    def _increment_version(self) -> None:
        """Increment version after state change"""
        self._version += 1

    def _add_domain_event(self, event: DomainEvent) -> None:
        """Add a domain event to the list of changes"""
        self._changes.append(event)
        self._logger.debug(f"Added domain event: {event.__class__.__name__}")

    def clear_events(self) -> List[DomainEvent]:
        """Clear and return all domain events"""
        events = self._changes.copy()
        self._changes.clear()
        return events

    @property
    def has_changes(self) -> bool:
        """Check if aggregate has pending domain events"""
        return len(self._changes) > 0


# ============================================================================
# PARKING LOT AGGREGATE
# ============================================================================

@dataclass
class ParkingPolicies:
    """Value Object: Parking lot business policies"""
    min_entry_hour: int = 1
    max_entry_hour: int = 22
    min_exit_hour: int = 2
    max_exit_hour: int = 23
    vip_hours_threshold: int = DEFAULT_VIP_HOURS_THRESHOLD

    def __post_init__(self):
        """Validate policy values"""
        if self.min_entry_hour > self.max_entry_hour:
            raise ValueError("Entry hour range is empty")

        if self.min_exit_hour > self.max_exit_hour:
            raise ValueError("Exit hour range is empty")

        if self.vip_hours_threshold < 0:
            raise ValueError("VIP hours threshold cannot be negative")

    def is_valid_entry_hour(self, hour: int) -> bool:
        return self.min_entry_hour <= hour <= self.max_entry_hour

    def is_valid_exit_hour(self, hour: int) -> bool:
        return self.min_exit_hour <= hour <= self.max_exit_hour


class ParkingLot(AggregateRoot):
    """
    Aggregate Root: the parking lot coordinator

    Owns the owner, vehicle and service collections, enforces identifier
    uniqueness, bills parking services and computes statistics. Lookups are
    linear scans in insertion order.

    Mutating operations come in two flavours: the plain ones return a bool
    (or the service cost, with FAILED_SERVICE_COST on failure) and the
    ``try_*`` ones return an OperationResult naming the failure reason.
    Failed operations leave the lot untouched.
    """

    def __init__(
        self,
        name: str = "Parqueadero",
        policies: Optional[ParkingPolicies] = None,
        pricing_strategy: Optional[PricingStrategy] = None,
        id: Optional[str] = None
    ):
        super().__init__(id)
        self.name = name
        self.policies = policies or ParkingPolicies()
        self.pricing_strategy = pricing_strategy or HourlyRatePricingStrategy()

        # Internal state
        self._owners: List[Owner] = []
        self._vehicles: List[Vehicle] = []
        self._services: List[Service] = []
        self._lock = threading.RLock()

        self.creation_date: datetime = datetime.now()
        self.last_updated: datetime = self.creation_date

        self._logger.info(f"Created ParkingLot: {self.name} (ID: {self.id})")

    # ========================================================================
    # LOOKUPS
    # ========================================================================

    def find_owner(self, owner_id: str) -> Optional[Owner]:
        """Find an owner by cedula, None if not registered"""
        with self._lock:
            for owner in self._owners:
                if owner.owner_id == owner_id:
                    return owner
            return None

    def find_vehicle(self, plate: str) -> Optional[Vehicle]:
        """Find a vehicle by plate, None if not registered"""
        with self._lock:
            for vehicle in self._vehicles:
                if vehicle.plate == plate:
                    return vehicle
            return None

    # ========================================================================
    # REGISTRATION
    # ========================================================================

    def try_register_owner(self, owner_id: str, name: str) -> OperationResult:
        with self._lock:
            if self.find_owner(owner_id) is not None:
                self._logger.warning(f"Owner {owner_id} is already registered")
                return OperationResult.fail(FailureReason.DUPLICATE_OWNER)

            owner = Owner(owner_id, name, vip_threshold=self.policies.vip_hours_threshold)
            self._owners.append(owner)
            self._touch()
            self._add_domain_event(OwnerRegisteredEvent(self.id, owner_id, name))

            self._logger.info(f"Registered owner {owner_id} ({name})")
            return OperationResult.ok(owner)

    def register_owner(self, owner_id: str, name: str) -> bool:
        """
        Register a new owner with zero accumulated hours
        Returns: False if the cedula is already registered
        """
        return self.try_register_owner(owner_id, name).success

    def try_register_vehicle(
        self,
        plate: str,
        year: int,
        color: str,
        owner_id: str,
        category: Any
    ) -> OperationResult:
        with self._lock:
            if self.find_vehicle(plate) is not None:
                self._logger.warning(f"Vehicle {plate} is already registered")
                return OperationResult.fail(FailureReason.DUPLICATE_VEHICLE)

            owner = self.find_owner(owner_id)
            if owner is None:
                self._logger.warning(f"Cannot register {plate}: owner {owner_id} not found")
                return OperationResult.fail(FailureReason.OWNER_NOT_FOUND)

            try:
                vehicle = Vehicle(plate, year, color, owner, category)
            except ValueError as e:
                self._logger.warning(f"Cannot register {plate}: {e}")
                return OperationResult.fail(FailureReason.INVALID_CATEGORY)

            self._vehicles.append(vehicle)
            self._touch()
            self._add_domain_event(
                VehicleRegisteredEvent(self.id, plate, owner_id, vehicle.category)
            )

            self._logger.info(f"Registered vehicle {plate} for owner {owner_id}")
            return OperationResult.ok(vehicle)

    def register_vehicle(
        self,
        plate: str,
        year: int,
        color: str,
        owner_id: str,
        category: Any
    ) -> bool:
        """
        Register a vehicle for an existing owner
        Returns: False if the plate exists or the owner is unknown
        """
        return self.try_register_vehicle(plate, year, color, owner_id, category).success

    # ========================================================================
    # HOUR ACCUMULATION
    # ========================================================================

    def try_accumulate_hours(self, owner_id: str, hours: int) -> OperationResult:
        with self._lock:
            owner = self.find_owner(owner_id)
            if owner is None:
                self._logger.warning(f"Cannot accumulate hours: owner {owner_id} not found")
                return OperationResult.fail(FailureReason.OWNER_NOT_FOUND)

            owner.accumulate_hours(hours)
            self._touch()
            self._add_domain_event(HoursAccumulatedEvent(
                self.id, owner_id, hours, owner.accumulated_hours, owner.is_vip()
            ))

            self._logger.debug(
                f"Owner {owner_id} +{hours}h (total {owner.accumulated_hours}h)"
            )
            return OperationResult.ok(owner.accumulated_hours)

    def accumulate_hours(self, owner_id: str, hours: int) -> bool:
        """
        Add usage hours to an owner
        Returns: False if the owner is not registered
        """
        return self.try_accumulate_hours(owner_id, hours).success

    # ========================================================================
    # SERVICE REGISTRATION
    # ========================================================================

    def try_register_service(
        self,
        plate: str,
        entry_hour: int,
        exit_hour: int
    ) -> OperationResult:
        with self._lock:
            reason = self._validate_service(plate, entry_hour, exit_hour)
            if reason is not None:
                self._logger.warning(
                    f"Service rejected for {plate} ({entry_hour}-{exit_hour}): {reason.value}"
                )
                return OperationResult.fail(reason)

            vehicle = self.find_vehicle(plate)
            service = Service(entry_hour, exit_hour, vehicle, self.pricing_strategy)

            self.try_accumulate_hours(vehicle.owner.owner_id, service.calculate_hours())
            self._services.append(service)
            self._touch()
            self._add_domain_event(ServiceRegisteredEvent(self.id, service))

            self._logger.info(f"Registered service {service}")
            return OperationResult.ok(service.cost)

    def register_service(self, plate: str, entry_hour: int, exit_hour: int) -> Decimal:
        """
        Bill a parking service and credit its hours to the vehicle owner
        Returns: the service cost, or FAILED_SERVICE_COST if any check fails
        """
        result = self.try_register_service(plate, entry_hour, exit_hour)
        if not result.success:
            return FAILED_SERVICE_COST
        return result.value

    def _validate_service(
        self,
        plate: str,
        entry_hour: int,
        exit_hour: int
    ) -> Optional[FailureReason]:
        """Checks run in a fixed order; the first failing one wins"""
        if not self.policies.is_valid_entry_hour(entry_hour):
            return FailureReason.ENTRY_HOUR_OUT_OF_RANGE

        if not self.policies.is_valid_exit_hour(exit_hour):
            return FailureReason.EXIT_HOUR_OUT_OF_RANGE

        if exit_hour <= entry_hour:
            return FailureReason.EXIT_NOT_AFTER_ENTRY

        if self.find_vehicle(plate) is None:
            return FailureReason.VEHICLE_NOT_FOUND

        return None

    # ========================================================================
    # STATISTICS
    # ========================================================================

    def total_revenue(self) -> Decimal:
        """Sum of the cost of every registered service"""
        with self._lock:
            total = Decimal('0')
            for service in self._services:
                total += service.cost
            return total

    def total_revenue_money(self) -> Money:
        with self._lock:
            total = Money.zero(self._currency())
            for service in self._services:
                total = total + service.fee
            return total

    def count_vip_owners(self) -> int:
        with self._lock:
            return sum(1 for owner in self._owners if owner.is_vip())

    def top_owner_by_hours(self) -> Optional[Owner]:
        """
        Owner with the most accumulated hours
        Ties keep the owner registered first; None when there are no owners
        """
        with self._lock:
            if not self._owners:
                return None

            top = self._owners[0]
            for owner in self._owners:
                if owner.accumulated_hours > top.accumulated_hours:
                    top = owner
            return top

    def statistics(self) -> Dict[str, Any]:
        """Summary of the lot for reporting"""
        with self._lock:
            top = self.top_owner_by_hours()
            return {
                "parking_lot_id": self.id,
                "name": self.name,
                "total_owners": len(self._owners),
                "total_vehicles": len(self._vehicles),
                "total_services": len(self._services),
                "total_revenue": self.total_revenue(),
                "currency": self._currency(),
                "vip_owners": self.count_vip_owners(),
                "top_owner_id": top.owner_id if top else None,
                "top_owner_hours": top.accumulated_hours if top else 0,
            }

    # ========================================================================
    # READ-ONLY VIEWS
    # ========================================================================

    @property
    def owners(self) -> Tuple[Owner, ...]:
        with self._lock:
            return tuple(self._owners)

    @property
    def vehicles(self) -> Tuple[Vehicle, ...]:
        with self._lock:
            return tuple(self._vehicles)

    @property
    def services(self) -> Tuple[Service, ...]:
        with self._lock:
            return tuple(self._services)

    def vehicles_of_owner(self, owner_id: str) -> Tuple[Vehicle, ...]:
        with self._lock:
            return tuple(v for v in self._vehicles if v.owner.owner_id == owner_id)

    def services_for_vehicle(self, plate: str) -> Tuple[Service, ...]:
        with self._lock:
            return tuple(s for s in self._services if s.vehicle.plate == plate)

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _currency(self) -> str:
        return getattr(self.pricing_strategy, "currency", Money.zero().currency)

    def _touch(self) -> None:
        self.last_updated = datetime.now()
        self._increment_version()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        with self._lock:
            return {
                "id": self.id,
                "name": self.name,
                "version": self.version,
                "owners": [o.to_dict() for o in self._owners],
                "vehicles": [v.to_dict() for v in self._vehicles],
                "services": [s.to_dict() for s in self._services],
                "creation_date": self.creation_date.isoformat(),
                "last_updated": self.last_updated.isoformat()
            }

    def run_and_collect(
        self,
        operation: Callable[..., OperationResult],
        *args: Any
    ) -> Tuple[OperationResult, List[DomainEvent]]:
        """
        Run one of the try_* operations and drain the events it raised
        in the same critical section
        """
        with self._lock:
            result = operation(*args)
            return result, self.clear_events()

    def __str__(self) -> str:
        return (
            f"{self.name}: {len(self._owners)} owners, "
            f"{len(self._vehicles)} vehicles, {len(self._services)} services"
        )
