#!/usr/bin/env python3
"""
Configuration Unit Tests
"""

import unittest
import sys
import tempfile
import os
from decimal import Decimal
from pathlib import Path

# Add the src directory to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from pydantic import ValidationError

from parqueadero.config import ParkingConfig
from parqueadero.domain.models import VehicleCategory


class TestParkingConfig(unittest.TestCase):
    """Unit tests for ParkingConfig"""

    def test_defaults(self):
        config = ParkingConfig()
        policies = config.to_policies()
        self.assertEqual((policies.min_entry_hour, policies.max_entry_hour), (1, 22))
        self.assertEqual((policies.min_exit_hour, policies.max_exit_hour), (2, 23))
        self.assertEqual(config.hourly_rates["SEDAN"], Decimal('2000'))
        self.assertEqual(config.currency, "COP")

    def test_rate_overrides_merge_with_defaults(self):
        config = ParkingConfig(hourly_rates={"camion": 6000})
        self.assertEqual(config.hourly_rates["TRUCK"], Decimal('6000'))
        self.assertEqual(config.hourly_rates["SUV"], Decimal('3000'))

        strategy = config.to_pricing_strategy()
        self.assertEqual(strategy.get_hourly_rate(VehicleCategory.TRUCK).amount, Decimal('6000'))

    def test_invalid_values_rejected(self):
        invalid = [
            {"hourly_rates": {"SEDAN": -5}},
            {"hourly_rates": {"BUS": 100}},
            {"vip_hours_threshold": -1},
            {"min_entry_hour": 20, "max_entry_hour": 3},
            {"log_level": "LOUD"},
            {"currency": "PESOS"},
            {"unknown_field": 1},
        ]
        for data in invalid:
            with self.assertRaises(ValidationError, msg=str(data)):
                ParkingConfig.from_dict(data)

    def test_log_level_normalized(self):
        self.assertEqual(ParkingConfig(log_level="debug").log_level, "DEBUG")

    def test_from_yaml(self):
        content = (
            "lot_name: Centro\n"
            "vip_hours_threshold: 50\n"
            "hourly_rates:\n"
            "  SEDAN: 2500\n"
        )
        with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
            f.write(content)
            path = f.name
        try:
            config = ParkingConfig.from_yaml(path)
        finally:
            os.unlink(path)

        self.assertEqual(config.lot_name, "Centro")
        self.assertEqual(config.to_policies().vip_hours_threshold, 50)
        self.assertEqual(config.hourly_rates["SEDAN"], Decimal('2500'))

    def test_empty_yaml_uses_defaults(self):
        with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
            path = f.name
        try:
            config = ParkingConfig.from_yaml(path)
        finally:
            os.unlink(path)
        self.assertEqual(config, ParkingConfig())

    def test_yaml_must_be_mapping(self):
        with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
            f.write("- just\n- a list\n")
            path = f.name
        try:
            with self.assertRaises(ValueError):
                ParkingConfig.from_yaml(path)
        finally:
            os.unlink(path)

    def test_malformed_yaml_raises_value_error(self):
        with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
            f.write("hourly_rates: [unclosed\n  : :\n")
            path = f.name
        try:
            with self.assertRaises(ValueError) as ctx:
                ParkingConfig.from_yaml(path)
        finally:
            os.unlink(path)
        self.assertIn("Invalid YAML", str(ctx.exception))


if __name__ == '__main__':
    unittest.main(verbosity=2)
