# File: src/parqueadero/main.py
"""
Main application entry point for the Parqueadero Management System

Commands:
    demo    Register a few owners, vehicles and services and print statistics
    rates   Print the configured hourly tariff
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import ParkingConfig, setup_logging
from .application.parking_service import IParkingService, ParkingService
from .application.dtos import (
    RegisterOwnerRequestDTO, RegisterVehicleRequestDTO, RegisterServiceRequestDTO
)
from .infrastructure.messaging import ALL_EVENTS, EventBus, LoggingEventHandler, InMemoryEventStore


DEMO_OWNERS = [
    ("1094000001", "Ana Gomez"),
    ("1094000002", "Carlos Ruiz"),
    ("1094000003", "Lucia Mejia"),
]

DEMO_VEHICLES = [
    ("ABC123", 2020, "Rojo", "1094000001", "SEDAN"),
    ("XYZ789", 2018, "Negro", "1094000002", "SUV"),
    ("TRK456", 2015, "Blanco", "1094000002", "CAMION"),
    ("MNO321", 2022, "Gris", "1094000003", "SEDAN"),
]

DEMO_SERVICES = [
    ("ABC123", 7, 12),
    ("XYZ789", 8, 18),
    ("TRK456", 6, 9),
    ("MNO321", 14, 16),
    ("ABC123", 0, 5),     # rejected: entry hour out of range
    ("ZZZ000", 9, 10),    # rejected: unknown plate
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parqueadero",
        description="Parking lot management: owners, vehicles and billed services"
    )
    parser.add_argument("--config", help="YAML file with configuration overrides")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level"
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("demo", help="Run a sample scenario and print statistics")
    subparsers.add_parser("rates", help="Print the hourly tariff")
    return parser


def run_demo(service: IParkingService) -> int:
    """Run the sample scenario against a fresh lot"""
    lot_id = service.create_lot()

    for owner_id, name in DEMO_OWNERS:
        service.register_owner(RegisterOwnerRequestDTO(
            parking_lot_id=lot_id, owner_id=owner_id, name=name
        ))

    for plate, year, color, owner_id, category in DEMO_VEHICLES:
        service.register_vehicle(RegisterVehicleRequestDTO(
            parking_lot_id=lot_id, plate=plate, year=year,
            color=color, owner_id=owner_id, category=category
        ))

    for plate, entry_hour, exit_hour in DEMO_SERVICES:
        result = service.register_service(RegisterServiceRequestDTO(
            parking_lot_id=lot_id, plate=plate, entry_hour=entry_hour, exit_hour=exit_hour
        ))
        if result.success:
            print(f"  {plate} {entry_hour:02d}h-{exit_hour:02d}h -> {result.data['cost']}")
        else:
            print(f"  {plate} {entry_hour:02d}h-{exit_hour:02d}h -> rejected ({result.message})")

    stats = service.get_statistics(lot_id)
    print()
    print(f"Lot:            {stats.name}")
    print(f"Owners:         {stats.total_owners}")
    print(f"Vehicles:       {stats.total_vehicles}")
    print(f"Services:       {stats.total_services}")
    print(f"Total revenue:  {stats.total_revenue} {stats.currency}")
    print(f"VIP owners:     {stats.vip_owners}")
    print(f"Top owner:      {stats.top_owner_id} ({stats.top_owner_hours}h)")
    return 0


def print_rates(config: ParkingConfig) -> int:
    for category, rate in config.hourly_rates.items():
        print(f"{category:<6} {rate} {config.currency}/h")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ParkingConfig.from_yaml(args.config) if args.config else ParkingConfig()
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logger = setup_logging(args.log_level or config.log_level)

    if args.command == "rates":
        return print_rates(config)

    if args.command != "demo":
        parser.print_help()
        return 1

    event_bus = EventBus()
    event_store = InMemoryEventStore()
    event_bus.subscribe(ALL_EVENTS, LoggingEventHandler(logging.DEBUG))
    event_bus.subscribe(ALL_EVENTS, event_store)

    service = ParkingService(event_bus=event_bus, config=config)
    exit_code = run_demo(service)
    logger.info(f"Demo finished with {event_store.count()} domain events")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
