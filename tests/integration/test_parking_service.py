#!/usr/bin/env python3
"""
Integration Tests for the application service

Exercise ParkingService end to end: repository, aggregate, event bus and DTOs.
"""

import unittest
import sys
import threading
from decimal import Decimal
from pathlib import Path
from unittest.mock import Mock

# Add the src directory to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from pydantic import ValidationError

from parqueadero.application.parking_service import ParkingService, LotNotFoundError
from parqueadero.application.dtos import (
    RegisterOwnerRequestDTO, RegisterVehicleRequestDTO,
    AccumulateHoursRequestDTO, RegisterServiceRequestDTO,
    LotStatisticsDTO
)
from parqueadero.config import ParkingConfig
from parqueadero.domain.models import VehicleCategory
from parqueadero.infrastructure.messaging import ALL_EVENTS, EventBus, EventHandler, InMemoryEventStore
from parqueadero.infrastructure.repositories import InMemoryParkingLotRepository


class TestParkingServiceIntegration(unittest.TestCase):
    """ParkingService wired with in-memory infrastructure"""

    def setUp(self):
        self.event_bus = EventBus()
        self.event_store = InMemoryEventStore()
        self.event_bus.subscribe(ALL_EVENTS, self.event_store)
        self.repository = InMemoryParkingLotRepository()
        self.service = ParkingService(
            repository=self.repository,
            event_bus=self.event_bus,
            config=ParkingConfig(vip_hours_threshold=8)
        )
        self.lot_id = self.service.create_lot("Centro")

    def _register_owner(self, owner_id="123", name="Ana"):
        return self.service.register_owner(RegisterOwnerRequestDTO(
            parking_lot_id=self.lot_id, owner_id=owner_id, name=name
        ))

    def _register_vehicle(self, plate="ABC123", owner_id="123", category="SEDAN"):
        return self.service.register_vehicle(RegisterVehicleRequestDTO(
            parking_lot_id=self.lot_id, plate=plate, year=2020,
            color="Rojo", owner_id=owner_id, category=category
        ))

    def _register_service(self, plate="ABC123", entry_hour=7, exit_hour=12):
        return self.service.register_service(RegisterServiceRequestDTO(
            parking_lot_id=self.lot_id, plate=plate,
            entry_hour=entry_hour, exit_hour=exit_hour
        ))

    def test_lot_is_stored_in_repository(self):
        lot = self.repository.get(self.lot_id)
        self.assertIsNotNone(lot)
        self.assertEqual(lot.name, "Centro")
        self.assertIs(self.repository.find_by_name("Centro"), lot)
        self.assertEqual(self.repository.count(), 1)

    def test_repository_rejects_duplicate_lot(self):
        with self.assertRaises(KeyError):
            self.repository.add(self.repository.get(self.lot_id))
        self.assertEqual(self.repository.count(), 1)

    def test_complete_workflow(self):
        self.assertTrue(self._register_owner().success)
        vehicle_result = self._register_vehicle(category=VehicleCategory.SUV)
        self.assertTrue(vehicle_result.success)
        self.assertEqual(vehicle_result.data["category"], "SUV")

        result = self._register_service(entry_hour=8, exit_hour=18)
        self.assertTrue(result.success)
        self.assertEqual(result.data["cost"], Decimal('30000'))

        stats = self.service.get_statistics(self.lot_id)
        self.assertIsInstance(stats, LotStatisticsDTO)
        self.assertEqual(stats.total_services, 1)
        self.assertEqual(stats.total_revenue, Decimal('30000'))
        self.assertEqual(stats.vip_owners, 1)
        self.assertEqual(stats.top_owner_id, "123")

        owner = self.service.find_owner(self.lot_id, "123")
        self.assertEqual(owner.accumulated_hours, 10)
        self.assertTrue(owner.is_vip)

    def test_rejections_carry_reason(self):
        self._register_owner()
        duplicate = self._register_owner()
        self.assertFalse(duplicate.success)
        self.assertEqual(duplicate.reason, "duplicate_owner")
        self.assertTrue(duplicate.message)

        orphan = self._register_vehicle(owner_id="999")
        self.assertEqual(orphan.reason, "owner_not_found")

        unknown = self._register_service(plate="NOPE")
        self.assertEqual(unknown.reason, "vehicle_not_found")

        self._register_vehicle()
        early = self._register_service(entry_hour=0, exit_hour=3)
        self.assertEqual(early.reason, "entry_hour_out_of_range")

        self.assertEqual(self.service.list_services(self.lot_id), [])

    def test_accumulate_hours(self):
        self._register_owner()
        result = self.service.accumulate_hours(AccumulateHoursRequestDTO(
            parking_lot_id=self.lot_id, owner_id="123", hours=4
        ))
        self.assertTrue(result.success)
        self.assertEqual(result.data["accumulated_hours"], 4)

        missing = self.service.accumulate_hours(AccumulateHoursRequestDTO(
            parking_lot_id=self.lot_id, owner_id="999", hours=4
        ))
        self.assertEqual(missing.reason, "owner_not_found")

    def test_events_are_published(self):
        self._register_owner()
        self._register_vehicle()
        self._register_service()

        event_types = [e.event_type for e in self.event_store.get_events()]
        self.assertEqual(event_types, [
            "owner.registered",
            "vehicle.registered",
            "owner.hours_accumulated",
            "service.registered",
        ])
        self.assertEqual(len(self.event_store.get_events_for_lot(self.lot_id)), 4)
        self.assertFalse(self.repository.get(self.lot_id).has_changes)

    def test_failing_handler_does_not_break_operation(self):
        handler = Mock()
        handler.can_handle.return_value = True
        handler.handle.side_effect = RuntimeError("boom")
        self.event_bus.subscribe("owner.registered", handler)

        result = self._register_owner()

        self.assertTrue(result.success)
        handler.handle.assert_called_once()
        self.assertEqual(self.event_store.count(), 1)

    def test_listings(self):
        self._register_owner("1", "Ana")
        self._register_owner("2", "Carlos")
        self._register_vehicle("AAA111", "1")
        self._register_vehicle("BBB222", "2", "CAMION")
        self._register_service("BBB222", 6, 9)

        self.assertEqual([o.owner_id for o in self.service.list_owners(self.lot_id)], ["1", "2"])
        self.assertEqual([v.plate for v in self.service.list_vehicles(self.lot_id)], ["AAA111", "BBB222"])

        services = self.service.list_services(self.lot_id)
        self.assertEqual(len(services), 1)
        self.assertEqual(services[0].hours, 3)
        self.assertEqual(services[0].cost, Decimal('15000'))

        summary = self.service.get_summary(self.lot_id)
        self.assertEqual(summary.statistics.top_owner_id, "2")
        self.assertEqual(len(summary.vehicles), 2)
        self.assertIn('"total_services":1', summary.to_json())

    def test_top_owner_and_lookups(self):
        self.assertIsNone(self.service.get_top_owner(self.lot_id))
        self._register_owner()
        self.assertEqual(self.service.get_top_owner(self.lot_id).owner_id, "123")
        self.assertIsNone(self.service.find_vehicle(self.lot_id, "NOPE"))

    def test_unknown_lot(self):
        with self.assertRaises(LotNotFoundError):
            self.service.get_statistics("missing")
        with self.assertRaises(LotNotFoundError):
            self.service.register_owner(RegisterOwnerRequestDTO(
                parking_lot_id="missing", owner_id="1", name="Ana"
            ))

    def test_malformed_request_rejected(self):
        with self.assertRaises(ValidationError):
            RegisterServiceRequestDTO(
                parking_lot_id=self.lot_id, plate="ABC123",
                entry_hour="seven", exit_hour=12
            )

    def test_lots_are_independent(self):
        other_lot = self.service.create_lot("Norte")
        self._register_owner()
        self.assertIsNone(self.service.find_owner(other_lot, "123"))
        self.assertEqual(self.service.get_statistics(other_lot).total_owners, 0)

    def test_concurrent_requests_publish_their_own_events(self):
        publishers = {}
        lock = threading.Lock()

        class PublisherRecorder(EventHandler):
            def handle(self, event):
                with lock:
                    publishers[event.owner_id] = threading.current_thread().name

        self.event_bus.subscribe("owner.registered", PublisherRecorder())

        def register(prefix):
            for i in range(50):
                self._register_owner(f"{prefix}-{i}", "Owner")

        threads = [
            threading.Thread(target=register, args=(f"t{n}",), name=f"t{n}")
            for n in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(publishers), 200)
        for owner_id, thread_name in publishers.items():
            self.assertEqual(owner_id.split("-")[0], thread_name)


if __name__ == '__main__':
    unittest.main(verbosity=2)
