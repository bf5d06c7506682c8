# File: src/parqueadero/config.py
"""
Configuration for the Parqueadero Management System

Defaults reproduce the standard tariff and hour window. A YAML file can
override any subset of the fields, e.g.:

    vip_hours_threshold: 50
    hourly_rates:
      SEDAN: 2500
      TRUCK: 6000
"""

from typing import Dict, Optional, Any, Union
from decimal import Decimal
from pathlib import Path
import logging
import sys

import yaml
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from .domain.models import VehicleCategory, DEFAULT_CURRENCY, DEFAULT_VIP_HOURS_THRESHOLD
from .domain.strategies import HourlyRatePricingStrategy, DEFAULT_HOURLY_RATES
from .domain.aggregates import ParkingPolicies


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ParkingConfig(BaseModel):
    """Application configuration"""

    model_config = ConfigDict(extra='forbid')

    lot_name: str = "Parqueadero"
    min_entry_hour: int = 1
    max_entry_hour: int = 22
    min_exit_hour: int = 2
    max_exit_hour: int = 23
    vip_hours_threshold: int = Field(default=DEFAULT_VIP_HOURS_THRESHOLD, ge=0)
    hourly_rates: Dict[str, Decimal] = Field(
        default_factory=lambda: {c.value: r for c, r in DEFAULT_HOURLY_RATES.items()}
    )
    currency: str = Field(default=DEFAULT_CURRENCY, min_length=3, max_length=3)
    log_level: str = "INFO"

    @field_validator('hourly_rates')
    @classmethod
    def validate_rates(cls, v: Dict[str, Decimal]) -> Dict[str, Decimal]:
        """Normalize category names and merge over the default tariff"""
        rates = {c.value: r for c, r in DEFAULT_HOURLY_RATES.items()}
        for name, rate in v.items():
            if rate < 0:
                raise ValueError(f"Hourly rate for {name} cannot be negative")
            rates[VehicleCategory.parse(name).value] = rate
        return rates

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode='after')
    def validate_hour_ranges(self) -> 'ParkingConfig':
        if self.min_entry_hour > self.max_entry_hour:
            raise ValueError("Entry hour range is empty")
        if self.min_exit_hour > self.max_exit_hour:
            raise ValueError("Exit hour range is empty")
        return self

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ParkingConfig':
        return cls(**(data or {}))

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'ParkingConfig':
        """Load configuration overrides from a YAML file"""
        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        return cls.from_dict(data)

    def to_policies(self) -> ParkingPolicies:
        return ParkingPolicies(
            min_entry_hour=self.min_entry_hour,
            max_entry_hour=self.max_entry_hour,
            min_exit_hour=self.min_exit_hour,
            max_exit_hour=self.max_exit_hour,
            vip_hours_threshold=self.vip_hours_threshold
        )

    def to_pricing_strategy(self) -> HourlyRatePricingStrategy:
        return HourlyRatePricingStrategy(self.hourly_rates, self.currency)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Setup application logging configuration"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    return logging.getLogger("parqueadero")
