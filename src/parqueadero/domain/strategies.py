# File: src/parqueadero/domain/strategies.py
"""
Strategy Pattern Implementation for Parking Service Pricing

A pricing strategy turns the billable hours of a service and the category of
the vehicle into a fee. Strategies are injected into the parking lot so the
tariff can change at runtime without touching the coordinator.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Mapping
from decimal import Decimal
import logging

from .models import Money, VehicleCategory, DEFAULT_CURRENCY


DEFAULT_HOURLY_RATES: Dict[VehicleCategory, Decimal] = {
    VehicleCategory.SEDAN: Decimal('2000'),
    VehicleCategory.SUV: Decimal('3000'),
    VehicleCategory.TRUCK: Decimal('5000'),
}


# ============================================================================
# STRATEGY INTERFACES
# ============================================================================

class PricingStrategy(ABC):
    """
    Abstract base class for pricing strategies
    Defines the interface for fee calculation algorithms
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def calculate_fee(self, category: VehicleCategory, hours: int) -> Money:
        """
        Calculate the fee for a service of `hours` billable hours
        Returns: Calculated fee
        """
        pass

    def get_strategy_name(self) -> str:
        """Get human-readable strategy name"""
        return self.__class__.__name__.replace("Strategy", "")

    def __str__(self) -> str:
        return f"{self.get_strategy_name()} Strategy"


# ============================================================================
# CONCRETE STRATEGIES
# ============================================================================

class HourlyRatePricingStrategy(PricingStrategy):
    """
    Standard tariff: every started hour is billed at the category rate
    """

    def __init__(
        self,
        hourly_rates: Optional[Mapping[Any, Any]] = None,
        currency: str = DEFAULT_CURRENCY
    ):
        super().__init__()
        rates = dict(DEFAULT_HOURLY_RATES)
        for category, rate in (hourly_rates or {}).items():
            rates[VehicleCategory.parse(category)] = Decimal(str(rate))

        for category, rate in rates.items():
            if rate < Decimal('0'):
                raise ValueError(f"Hourly rate for {category} cannot be negative")

        self.hourly_rates = rates
        self.currency = currency

    def get_hourly_rate(self, category: VehicleCategory) -> Money:
        """Get hourly rate for a vehicle category"""
        return Money(self.hourly_rates[category], self.currency)

    def calculate_fee(self, category: VehicleCategory, hours: int) -> Money:
        if hours < 0:
            raise ValueError("Billable hours cannot be negative")

        fee = self.get_hourly_rate(category) * hours
        self.logger.debug(f"Fee for {hours}h {category}: {fee.format()}")
        return fee
