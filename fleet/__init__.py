"""
Fleet maintenance planning models.

This package provides the records and calculations behind the fleet
dashboard:
- Vehicle, Driver, MaintenanceOrder, FuelRecord: stored records
- compute_alerts: overdue/upcoming notification feed
- generate_schedule: recurring maintenance drafts from a RecurrencePlan
- Fleet: aggregate of all records plus Settings
- store functions: YAML-backed persistence for the four collections
"""

from .errors import (
    FleetError,
    InvalidDateFormat,
    EmptyScheduleInput,
    UnknownPeriodicity,
    UnknownCollection,
)
from .dates import parse_local_date, format_local_date, add_days, compare_dates
from .status import MaintenanceStatus, MaintenanceType, VehicleStatus, DriverStatus
from .vehicle import Vehicle
from .driver import Driver
from .fuel_record import FuelRecord
from .maintenance_order import MaintenanceOrder
from .alert import Alert
from .alerts import compute_alerts, classify_date, MISSING_PLATE
from .periodicity import Periodicity, periodicity_days
from .recurrence import RecurrencePlan, generate_schedule
from .settings import Settings
from .summary import FleetSummary, VehicleEfficiency, summarize
from .fleet import Fleet
from .store import (
    VEHICLES,
    DRIVERS,
    MAINTENANCE_RECORDS,
    FUEL_RECORDS,
    create_fleet_file,
    load_fleet,
    load_settings,
    save_settings,
    list_records,
    insert_records,
    update_record,
    delete_record,
    add_fuel_record,
)

__all__ = [
    "FleetError",
    "InvalidDateFormat",
    "EmptyScheduleInput",
    "UnknownPeriodicity",
    "UnknownCollection",
    "parse_local_date",
    "format_local_date",
    "add_days",
    "compare_dates",
    "MaintenanceStatus",
    "MaintenanceType",
    "VehicleStatus",
    "DriverStatus",
    "Vehicle",
    "Driver",
    "FuelRecord",
    "MaintenanceOrder",
    "Alert",
    "compute_alerts",
    "classify_date",
    "MISSING_PLATE",
    "Periodicity",
    "periodicity_days",
    "RecurrencePlan",
    "generate_schedule",
    "Settings",
    "FleetSummary",
    "VehicleEfficiency",
    "summarize",
    "Fleet",
    "VEHICLES",
    "DRIVERS",
    "MAINTENANCE_RECORDS",
    "FUEL_RECORDS",
    "create_fleet_file",
    "load_fleet",
    "load_settings",
    "save_settings",
    "list_records",
    "insert_records",
    "update_record",
    "delete_record",
    "add_fuel_record",
]
