"""Application layer: use-case service and DTOs."""

from .parking_service import ParkingService, ParkingServiceError, LotNotFoundError
from .dtos import (
    RegisterOwnerRequestDTO, RegisterVehicleRequestDTO,
    AccumulateHoursRequestDTO, RegisterServiceRequestDTO,
    OperationResultDTO, OwnerDTO, VehicleDTO, ServiceDTO,
    LotStatisticsDTO, LotSummaryDTO
)

__all__ = [
    "ParkingService", "ParkingServiceError", "LotNotFoundError",
    "RegisterOwnerRequestDTO", "RegisterVehicleRequestDTO",
    "AccumulateHoursRequestDTO", "RegisterServiceRequestDTO",
    "OperationResultDTO", "OwnerDTO", "VehicleDTO", "ServiceDTO",
    "LotStatisticsDTO", "LotSummaryDTO",
]
