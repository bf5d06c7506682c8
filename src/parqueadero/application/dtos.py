# File: src/parqueadero/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Parqueadero Management System

This module defines DTOs for data transfer between layers:
1. Input DTOs - Requests received by the application service
2. Output DTOs - Snapshots of owners, vehicles, services and statistics

DTO Principles:
- Validation at creation (types only; business rules stay in the domain)
- No business logic, only data
- Serialization/deserialization support
"""

from typing import Dict, List, Optional, Any
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict, field_validator

from ..domain.models import Owner, Vehicle, Service
from ..domain.results import OperationResult


# ============================================================================
# BASE DTO CLASSES
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common functionality"""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self, **kwargs) -> Dict[str, Any]:
        """Convert DTO to dictionary"""
        return self.model_dump(**kwargs)

    def to_json(self, **kwargs) -> str:
        """Convert DTO to JSON string"""
        return self.model_dump_json(**kwargs)


# ============================================================================
# ENUM DTOs
# ============================================================================

class VehicleCategoryDTO(str, Enum):
    """Vehicle category DTO"""
    SEDAN = "SEDAN"
    SUV = "SUV"
    TRUCK = "TRUCK"


# ============================================================================
# INPUT DTOs
# ============================================================================

class LotRequestDTO(BaseDTO):
    """Base for requests addressed to one parking lot"""
    parking_lot_id: str = Field(description="Target parking lot")


class RegisterOwnerRequestDTO(LotRequestDTO):
    owner_id: str = Field(description="Owner cedula")
    name: str = Field(description="Owner name")


class RegisterVehicleRequestDTO(LotRequestDTO):
    plate: str = Field(description="Vehicle plate")
    year: int = Field(description="Model year")
    color: str
    owner_id: str = Field(description="Cedula of an already registered owner")
    category: str = Field(description="SEDAN, SUV or TRUCK")

    @field_validator('category', mode='before')
    @classmethod
    def normalize_category(cls, v):
        """Accept VehicleCategory members as well as plain strings"""
        if isinstance(v, Enum):
            return v.value
        return v


class AccumulateHoursRequestDTO(LotRequestDTO):
    owner_id: str
    hours: int


class RegisterServiceRequestDTO(LotRequestDTO):
    plate: str
    entry_hour: int = Field(description="Entry hour (1-22)")
    exit_hour: int = Field(description="Exit hour (2-23)")


# ============================================================================
# OUTPUT DTOs
# ============================================================================

class OwnerDTO(BaseDTO):
    """Owner snapshot"""
    owner_id: str
    name: str
    accumulated_hours: int
    is_vip: bool

    @classmethod
    def from_entity(cls, owner: Owner) -> 'OwnerDTO':
        return cls(
            owner_id=owner.owner_id,
            name=owner.name,
            accumulated_hours=owner.accumulated_hours,
            is_vip=owner.is_vip()
        )


class VehicleDTO(BaseDTO):
    """Vehicle snapshot"""
    plate: str
    year: int
    color: str
    category: VehicleCategoryDTO
    owner_id: str

    @classmethod
    def from_entity(cls, vehicle: Vehicle) -> 'VehicleDTO':
        return cls(
            plate=vehicle.plate,
            year=vehicle.year,
            color=vehicle.color,
            category=VehicleCategoryDTO(vehicle.category.value),
            owner_id=vehicle.owner.owner_id
        )


class ServiceDTO(BaseDTO):
    """Service snapshot"""
    service_id: str
    plate: str
    entry_hour: int
    exit_hour: int
    hours: int
    cost: Decimal = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3)

    @classmethod
    def from_entity(cls, service: Service) -> 'ServiceDTO':
        return cls(
            service_id=service.id,
            plate=service.vehicle.plate,
            entry_hour=service.entry_hour,
            exit_hour=service.exit_hour,
            hours=service.calculate_hours(),
            cost=service.cost,
            currency=service.fee.currency
        )


class OperationResultDTO(BaseDTO):
    """Outcome of a lot operation"""
    success: bool
    reason: Optional[str] = None
    message: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_result(
        cls,
        result: OperationResult,
        data: Optional[Dict[str, Any]] = None
    ) -> 'OperationResultDTO':
        if result.success:
            return cls(success=True, data=data or {})
        return cls(
            success=False,
            reason=result.reason.value,
            message=result.reason.message
        )


class LotStatisticsDTO(BaseDTO):
    """Aggregate statistics for one parking lot"""
    parking_lot_id: str
    name: str
    total_owners: int = Field(ge=0)
    total_vehicles: int = Field(ge=0)
    total_services: int = Field(ge=0)
    total_revenue: Decimal = Field(ge=0)
    currency: str
    vip_owners: int = Field(ge=0)
    top_owner_id: Optional[str] = None
    top_owner_hours: int = 0


class LotSummaryDTO(BaseDTO):
    """Full listing of a parking lot"""
    statistics: LotStatisticsDTO
    owners: List[OwnerDTO] = Field(default_factory=list)
    vehicles: List[VehicleDTO] = Field(default_factory=list)
    services: List[ServiceDTO] = Field(default_factory=list)
