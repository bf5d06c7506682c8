# File: src/parqueadero/application/parking_service.py
"""
Parqueadero Application Service

This module implements the application service layer. It looks up the parking
lot addressed by each request, runs the use case on the aggregate, publishes
the resulting domain events and converts the outcome into DTOs.

Responsibilities:
1. Manage parking lots through the lot repository
2. Execute use cases (registrations, billing, statistics)
3. Handle cross-cutting concerns (logging, event publishing)
4. Provide a clean API for the interface layer
"""

from typing import Dict, List, Optional, Any, Protocol
import logging

from ..domain.aggregates import ParkingLot
from ..domain.models import DomainEvent
from ..domain.results import OperationResult
from ..infrastructure.repositories import InMemoryParkingLotRepository, Repository
from ..infrastructure.messaging import EventBus
from ..config import ParkingConfig
from .dtos import (
    RegisterOwnerRequestDTO, RegisterVehicleRequestDTO,
    AccumulateHoursRequestDTO, RegisterServiceRequestDTO,
    OperationResultDTO, OwnerDTO, VehicleDTO, ServiceDTO,
    LotStatisticsDTO, LotSummaryDTO
)


# ============================================================================
# SERVICE INTERFACES
# ============================================================================

class IParkingService(Protocol):
    """Interface for parking service operations"""

    def create_lot(self, name: Optional[str] = None) -> str:
        """Create a parking lot and return its id"""
        ...

    def register_owner(self, request: RegisterOwnerRequestDTO) -> OperationResultDTO:
        """Register an owner in a lot"""
        ...

    def register_vehicle(self, request: RegisterVehicleRequestDTO) -> OperationResultDTO:
        """Register a vehicle for an owner"""
        ...

    def accumulate_hours(self, request: AccumulateHoursRequestDTO) -> OperationResultDTO:
        """Credit hours to an owner"""
        ...

    def register_service(self, request: RegisterServiceRequestDTO) -> OperationResultDTO:
        """Bill a parking service"""
        ...

    def get_statistics(self, parking_lot_id: str) -> LotStatisticsDTO:
        """Get revenue and customer statistics"""
        ...


# ============================================================================
# EXCEPTIONS
# ============================================================================

class ParkingServiceError(Exception):
    """Base exception for parking service errors"""
    pass


class LotNotFoundError(ParkingServiceError):
    """Raised when a request addresses an unknown parking lot"""

    def __init__(self, parking_lot_id: str):
        super().__init__(f"Parking lot {parking_lot_id} not found")
        self.parking_lot_id = parking_lot_id


# ============================================================================
# MAIN PARKING SERVICE
# ============================================================================

class ParkingService:
    """
    Main application service for parking lot management

    Rejected operations come back as unsuccessful OperationResultDTOs;
    exceptions are reserved for unknown lots and malformed requests.
    """

    def __init__(
        self,
        repository: Optional[Repository] = None,
        event_bus: Optional[EventBus] = None,
        config: Optional[ParkingConfig] = None
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.repository = repository if repository is not None else InMemoryParkingLotRepository()
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.config = config or ParkingConfig()

        self.logger.info("ParkingService initialized")

    # ========================================================================
    # LOT MANAGEMENT
    # ========================================================================

    def create_lot(self, name: Optional[str] = None) -> str:
        """Create a parking lot using the configured policies and tariff"""
        lot = ParkingLot(
            name=name or self.config.lot_name,
            policies=self.config.to_policies(),
            pricing_strategy=self.config.to_pricing_strategy()
        )
        self.repository.add(lot)
        self.logger.info(f"Created parking lot {lot.name} ({lot.id})")
        return lot.id

    def get_lot(self, parking_lot_id: str) -> ParkingLot:
        lot = self.repository.get(parking_lot_id)
        if lot is None:
            raise LotNotFoundError(parking_lot_id)
        return lot

    # ========================================================================
    # USE CASES
    # ========================================================================

    def register_owner(self, request: RegisterOwnerRequestDTO) -> OperationResultDTO:
        self.logger.info(f"Processing owner registration for {request.owner_id}")
        lot = self.get_lot(request.parking_lot_id)

        result, events = lot.run_and_collect(lot.try_register_owner, request.owner_id, request.name)
        return self._complete(result, events, lambda owner: OwnerDTO.from_entity(owner).to_dict())

    def register_vehicle(self, request: RegisterVehicleRequestDTO) -> OperationResultDTO:
        self.logger.info(f"Processing vehicle registration for {request.plate}")
        lot = self.get_lot(request.parking_lot_id)

        result, events = lot.run_and_collect(
            lot.try_register_vehicle,
            request.plate, request.year, request.color, request.owner_id, request.category
        )
        return self._complete(result, events, lambda vehicle: VehicleDTO.from_entity(vehicle).to_dict())

    def accumulate_hours(self, request: AccumulateHoursRequestDTO) -> OperationResultDTO:
        lot = self.get_lot(request.parking_lot_id)

        result, events = lot.run_and_collect(lot.try_accumulate_hours, request.owner_id, request.hours)
        return self._complete(result, events, lambda total: {"accumulated_hours": total})

    def register_service(self, request: RegisterServiceRequestDTO) -> OperationResultDTO:
        self.logger.info(
            f"Processing service for {request.plate} "
            f"({request.entry_hour}h-{request.exit_hour}h)"
        )
        lot = self.get_lot(request.parking_lot_id)

        result, events = lot.run_and_collect(
            lot.try_register_service, request.plate, request.entry_hour, request.exit_hour
        )
        return self._complete(result, events, lambda cost: {"cost": cost})

    # ========================================================================
    # QUERIES
    # ========================================================================

    def get_statistics(self, parking_lot_id: str) -> LotStatisticsDTO:
        lot = self.get_lot(parking_lot_id)
        return LotStatisticsDTO(**lot.statistics())

    def get_top_owner(self, parking_lot_id: str) -> Optional[OwnerDTO]:
        owner = self.get_lot(parking_lot_id).top_owner_by_hours()
        return OwnerDTO.from_entity(owner) if owner else None

    def find_owner(self, parking_lot_id: str, owner_id: str) -> Optional[OwnerDTO]:
        owner = self.get_lot(parking_lot_id).find_owner(owner_id)
        return OwnerDTO.from_entity(owner) if owner else None

    def find_vehicle(self, parking_lot_id: str, plate: str) -> Optional[VehicleDTO]:
        vehicle = self.get_lot(parking_lot_id).find_vehicle(plate)
        return VehicleDTO.from_entity(vehicle) if vehicle else None

    def list_owners(self, parking_lot_id: str) -> List[OwnerDTO]:
        return [OwnerDTO.from_entity(o) for o in self.get_lot(parking_lot_id).owners]

    def list_vehicles(self, parking_lot_id: str) -> List[VehicleDTO]:
        return [VehicleDTO.from_entity(v) for v in self.get_lot(parking_lot_id).vehicles]

    def list_services(self, parking_lot_id: str) -> List[ServiceDTO]:
        return [ServiceDTO.from_entity(s) for s in self.get_lot(parking_lot_id).services]

    def get_summary(self, parking_lot_id: str) -> LotSummaryDTO:
        return LotSummaryDTO(
            statistics=self.get_statistics(parking_lot_id),
            owners=self.list_owners(parking_lot_id),
            vehicles=self.list_vehicles(parking_lot_id),
            services=self.list_services(parking_lot_id)
        )

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _complete(
        self,
        result: OperationResult,
        events: List[DomainEvent],
        to_data
    ) -> OperationResultDTO:
        """Publish the events raised by one operation and wrap the result"""
        self.event_bus.publish_all(events)

        if not result.success:
            self.logger.warning(f"Operation rejected: {result.reason.message}")
            return OperationResultDTO.from_result(result)

        data: Dict[str, Any] = to_data(result.value)
        return OperationResultDTO.from_result(result, data)
