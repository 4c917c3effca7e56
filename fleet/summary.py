"""Dashboard KPIs."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .dates import parse_local_date
from .fuel_record import FuelRecord
from .maintenance_order import MaintenanceOrder
from .status import MaintenanceStatus, VehicleStatus
from .vehicle import Vehicle

RECENT_ACTIVITY_LIMIT = 5
MONTHLY_FUEL_MONTHS = 6


@dataclass
class VehicleEfficiency:
    """Distance per liter for one vehicle, from its fill-ups."""

    vehicle_id: str
    label: str
    km_per_liter: float


@dataclass
class FleetSummary:
    total_vehicles: int = 0
    active_vehicles: int = 0
    pending_orders: int = 0
    completed_orders: int = 0
    completed_maintenance_cost: float = 0
    total_fuel_cost: float = 0
    total_liters: float = 0
    fuel_efficiency: List[VehicleEfficiency] = field(default_factory=list)
    monthly_fuel_cost: List[Tuple[str, float]] = field(default_factory=list)
    recent_activity: List[MaintenanceOrder] = field(default_factory=list)


def vehicle_efficiency(
    vehicle: Vehicle, fuel_records: Iterable[FuelRecord]
) -> float:
    """
    Distance per liter over a vehicle's fill-ups, rounded to 2 places.

    The first fill only marks the starting odometer, so its liters are not
    counted. Fewer than two fills, no distance or no liters give 0.
    """
    records = sorted(
        (f for f in fuel_records if f.vehicle_id == vehicle.id),
        key=lambda f: parse_local_date(f.date),
    )
    if len(records) < 2:
        return 0.0

    distance = records[-1].odometer - records[0].odometer
    liters = sum(f.liters or 0 for f in records[1:])
    if distance <= 0 or liters <= 0:
        return 0.0
    return round(distance / liters, 2)


def fuel_efficiency(
    vehicles: Iterable[Vehicle], fuel_records: Iterable[FuelRecord]
) -> List[VehicleEfficiency]:
    """Vehicles with a measurable efficiency, best first."""
    fuel_records = list(fuel_records)
    result = []
    for vehicle in vehicles:
        kml = vehicle_efficiency(vehicle, fuel_records)
        if kml > 0:
            label = f"{vehicle.model}-{vehicle.plate}"
            result.append(VehicleEfficiency(vehicle.id, label, kml))
    result.sort(key=lambda e: e.km_per_liter, reverse=True)
    return result


def monthly_fuel_cost(
    fuel_records: Iterable[FuelRecord], months: int = MONTHLY_FUEL_MONTHS
) -> List[Tuple[str, float]]:
    """Fuel spend per "YYYY-MM", oldest first, limited to the last `months`."""
    totals: Dict[str, float] = {}
    for record in fuel_records:
        d = parse_local_date(record.date)
        key = f"{d.year:04d}-{d.month:02d}"
        totals[key] = totals.get(key, 0) + (record.total_cost or 0)
    return sorted(totals.items())[-months:] if months > 0 else []


def recent_activity(
    maintenance: Iterable[MaintenanceOrder], limit: int = RECENT_ACTIVITY_LIMIT
) -> List[MaintenanceOrder]:
    """Latest maintenance orders by date, newest first."""
    ordered = sorted(maintenance, key=lambda m: parse_local_date(m.date), reverse=True)
    return ordered[:limit]


def summarize(
    vehicles: Iterable[Vehicle],
    maintenance: Iterable[MaintenanceOrder],
    fuel_records: Iterable[FuelRecord],
) -> FleetSummary:
    """Headline figures: pending orders are all orders not yet completed."""
    vehicles = list(vehicles)
    maintenance = list(maintenance)
    fuel_records = list(fuel_records)
    completed = [m for m in maintenance if m.status == MaintenanceStatus.COMPLETED]
    return FleetSummary(
        total_vehicles=len(vehicles),
        active_vehicles=sum(1 for v in vehicles if v.status == VehicleStatus.ACTIVE),
        pending_orders=len(maintenance) - len(completed),
        completed_orders=len(completed),
        completed_maintenance_cost=sum(m.cost or 0 for m in completed),
        total_fuel_cost=sum(f.total_cost or 0 for f in fuel_records),
        total_liters=sum(f.liters or 0 for f in fuel_records),
        fuel_efficiency=fuel_efficiency(vehicles, fuel_records),
        monthly_fuel_cost=monthly_fuel_cost(fuel_records),
        recent_activity=recent_activity(maintenance),
    )
