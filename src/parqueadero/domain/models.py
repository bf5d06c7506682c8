# File: src/parqueadero/domain/models.py
"""
Domain Models for the Parqueadero Management System
Following Domain-Driven Design (DDD) principles with rich domain models

This module contains:
1. Value Objects: Immutable objects with no identity, only values
2. Enums: Vehicle categories
3. Entities: Owners, vehicles and parking services
4. Domain Events: Events representing business occurrences
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any, TYPE_CHECKING
from datetime import datetime
from decimal import Decimal
from enum import Enum
import uuid

if TYPE_CHECKING:
    from .strategies import PricingStrategy


DEFAULT_CURRENCY = "COP"
DEFAULT_VIP_HOURS_THRESHOLD = 100


# ============================================================================
# DOMAIN PRIMITIVES / VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)  # Value objects are immutable
class Money:
    """
    Value Object: Monetary amount with currency
    Provides arithmetic operations with validation
    """
    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        """Validate money amount"""
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if self.amount < Decimal('0'):
            raise ValueError("Money amount cannot be negative")

        if len(self.currency) != 3:
            raise ValueError(f"Currency must be 3-letter code: {self.currency}")

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> 'Money':
        return cls(Decimal('0'), currency)

    def __add__(self, other: 'Money') -> 'Money':
        """Add two money amounts (same currency only)"""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} to {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, multiplier) -> 'Money':
        """Multiply money by a non-negative number"""
        multiplier = Decimal(str(multiplier))
        if multiplier < Decimal('0'):
            raise ValueError("Multiplier cannot be negative")
        return Money(self.amount * multiplier, self.currency)

    def format(self) -> str:
        """Format money for display"""
        return f"${self.amount:,.2f} {self.currency}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "amount": float(self.amount),
            "currency": self.currency
        }

    def __str__(self) -> str:
        return self.format()


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class VehicleCategory(Enum):
    """
    Closed set of vehicle categories
    Each category is billed at its own hourly rate
    """
    SEDAN = "SEDAN"
    SUV = "SUV"
    TRUCK = "TRUCK"

    @classmethod
    def _missing_(cls, value):
        # Case-insensitive lookup; "CAMION" is the local name for trucks
        if isinstance(value, str):
            normalized = value.strip().upper()
            if normalized == "CAMION":
                return cls.TRUCK
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @classmethod
    def parse(cls, value: Any) -> 'VehicleCategory':
        """Convert a string (or category) to a VehicleCategory"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid vehicle category: {value!r}")

    def __str__(self) -> str:
        names = {
            VehicleCategory.SEDAN: "Sedan",
            VehicleCategory.SUV: "SUV",
            VehicleCategory.TRUCK: "Truck",
        }
        return names.get(self, self.value.title())


# ============================================================================
# DOMAIN ENTITIES
# ============================================================================

class Entity:
    """
    Base class for all domain entities
    Provides common functionality for entities with identity
    """

    def __init__(self, id: Optional[str] = None):
        self._id = id if id is not None else str(uuid.uuid4())

    @property
    def id(self) -> str:
        """Get entity ID"""
        return self._id

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same ID and type"""
        if not isinstance(other, Entity):
            return False
        return self.id == other.id and type(self) == type(other)

    def __hash__(self) -> int:
        return hash((self.id, type(self).__name__))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"


class Owner(Entity):
    """
    Entity: A registered customer ("propietario") identified by a cedula
    Keeps a running counter of the hours parked across all of their vehicles
    """

    def __init__(
        self,
        owner_id: str,
        name: str,
        vip_threshold: int = DEFAULT_VIP_HOURS_THRESHOLD
    ):
        super().__init__()
        # The cedula is the identity, taken as given
        self._id = owner_id
        self.name = name
        self.vip_threshold = vip_threshold
        self._accumulated_hours = 0

    @property
    def owner_id(self) -> str:
        return self.id

    @property
    def accumulated_hours(self) -> int:
        return self._accumulated_hours

    def accumulate_hours(self, hours: int) -> None:
        """Add hours to the owner's counter (no range check)"""
        self._accumulated_hours += hours

    def is_vip(self) -> bool:
        """An owner becomes VIP once their accumulated hours reach the threshold"""
        return self._accumulated_hours >= self.vip_threshold

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "name": self.name,
            "accumulated_hours": self.accumulated_hours,
            "is_vip": self.is_vip()
        }

    def __str__(self) -> str:
        vip = " [VIP]" if self.is_vip() else ""
        return f"{self.name} ({self.owner_id}) - {self.accumulated_hours}h{vip}"


class Vehicle(Entity):
    """
    Entity: Represents a vehicle identified by its plate
    The owner is fixed at creation time
    """

    def __init__(
        self,
        plate: str,
        year: int,
        color: str,
        owner: Owner,
        category: Any
    ):
        super().__init__()
        self._id = plate
        self.year = year
        self.color = color
        self.category = VehicleCategory.parse(category)
        self._owner = owner

    @property
    def plate(self) -> str:
        return self.id

    @property
    def owner(self) -> Owner:
        return self._owner

    @property
    def description(self) -> str:
        """Get human-readable vehicle description"""
        return f"{self.year} {self.category} ({self.color})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plate": self.plate,
            "year": self.year,
            "color": self.color,
            "category": self.category.value,
            "owner_id": self.owner.owner_id,
            "description": self.description
        }

    def __str__(self) -> str:
        return f"{self.description} [{self.plate}]"


class Service(Entity):
    """
    Entity: One completed parking transaction for a vehicle

    Duration and fee are computed once, at construction time, from the
    entry/exit hours and the vehicle category. Services never change after.
    """

    def __init__(
        self,
        entry_hour: int,
        exit_hour: int,
        vehicle: Vehicle,
        pricing_strategy: Optional['PricingStrategy'] = None,
        id: Optional[str] = None
    ):
        super().__init__(id)
        if exit_hour <= entry_hour:
            raise ValueError("Exit hour must be after entry hour")

        if pricing_strategy is None:
            from .strategies import HourlyRatePricingStrategy
            pricing_strategy = HourlyRatePricingStrategy()

        self._entry_hour = entry_hour
        self._exit_hour = exit_hour
        self._vehicle = vehicle
        self._fee = pricing_strategy.calculate_fee(vehicle.category, self.calculate_hours())

    @property
    def entry_hour(self) -> int:
        return self._entry_hour

    @property
    def exit_hour(self) -> int:
        return self._exit_hour

    @property
    def vehicle(self) -> Vehicle:
        return self._vehicle

    @property
    def fee(self) -> Money:
        return self._fee

    @property
    def cost(self) -> Decimal:
        return self._fee.amount

    def calculate_hours(self) -> int:
        """Billable hours of the service"""
        return self._exit_hour - self._entry_hour

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "plate": self.vehicle.plate,
            "entry_hour": self.entry_hour,
            "exit_hour": self.exit_hour,
            "hours": self.calculate_hours(),
            "cost": self._fee.to_dict()
        }

    def __str__(self) -> str:
        return (
            f"{self.vehicle.plate} {self.entry_hour:02d}h-{self.exit_hour:02d}h "
            f"{self._fee.format()}"
        )


# ============================================================================
# DOMAIN EVENTS (for event-driven architecture)
# ============================================================================

class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the domain
    """

    event_type: str = "domain.event"

    def __init__(self, parking_lot_id: str):
        self.event_id = str(uuid.uuid4())
        self.timestamp = datetime.now()
        self.version = "1.0"
        self.parking_lot_id = parking_lot_id

    @abstractmethod
    def _data(self) -> Dict[str, Any]:
        """Event specific payload"""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization"""
        data = {"parking_lot_id": self.parking_lot_id}
        data.update(self._data())
        return {
            "event_type": self.event_type,
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "version": self.version,
            "data": data
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__} at {self.timestamp}"


class OwnerRegisteredEvent(DomainEvent):
    """Event raised when an owner is registered"""

    event_type = "owner.registered"

    def __init__(self, parking_lot_id: str, owner_id: str, name: str):
        super().__init__(parking_lot_id)
        self.owner_id = owner_id
        self.name = name

    def _data(self) -> Dict[str, Any]:
        return {"owner_id": self.owner_id, "name": self.name}


class VehicleRegisteredEvent(DomainEvent):
    """Event raised when a vehicle is registered"""

    event_type = "vehicle.registered"

    def __init__(
        self,
        parking_lot_id: str,
        plate: str,
        owner_id: str,
        category: VehicleCategory
    ):
        super().__init__(parking_lot_id)
        self.plate = plate
        self.owner_id = owner_id
        self.category = category

    def _data(self) -> Dict[str, Any]:
        return {
            "plate": self.plate,
            "owner_id": self.owner_id,
            "category": self.category.value
        }


class HoursAccumulatedEvent(DomainEvent):
    """Event raised when hours are added to an owner"""

    event_type = "owner.hours_accumulated"

    def __init__(
        self,
        parking_lot_id: str,
        owner_id: str,
        hours: int,
        total_hours: int,
        is_vip: bool
    ):
        super().__init__(parking_lot_id)
        self.owner_id = owner_id
        self.hours = hours
        self.total_hours = total_hours
        self.is_vip = is_vip

    def _data(self) -> Dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "hours": self.hours,
            "total_hours": self.total_hours,
            "is_vip": self.is_vip
        }


class ServiceRegisteredEvent(DomainEvent):
    """Event raised when a parking service is billed"""

    event_type = "service.registered"

    def __init__(self, parking_lot_id: str, service: Service):
        super().__init__(parking_lot_id)
        self.service_id = service.id
        self.plate = service.vehicle.plate
        self.owner_id = service.vehicle.owner.owner_id
        self.hours = service.calculate_hours()
        self.fee = service.fee

    def _data(self) -> Dict[str, Any]:
        return {
            "service_id": self.service_id,
            "plate": self.plate,
            "owner_id": self.owner_id,
            "hours": self.hours,
            "fee_amount": float(self.fee.amount),
            "fee_currency": self.fee.currency
        }
