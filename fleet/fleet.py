"""Fleet class - the aggregate of all records in one fleet file."""

from datetime import date
from typing import List, Optional

from .alert import Alert
from .alerts import compute_alerts
from .driver import Driver
from .fuel_record import FuelRecord
from .maintenance_order import MaintenanceOrder
from .settings import Settings
from .summary import FleetSummary, summarize
from .vehicle import Vehicle


class Fleet:
    """Vehicles, drivers, maintenance orders and fuel records with settings."""

    def __init__(
        self,
        vehicles: Optional[List[Vehicle]] = None,
        drivers: Optional[List[Driver]] = None,
        maintenance: Optional[List[MaintenanceOrder]] = None,
        fuel_records: Optional[List[FuelRecord]] = None,
        settings: Optional[Settings] = None,
    ):
        self.vehicles = vehicles or []
        self.drivers = drivers or []
        self.maintenance = maintenance or []
        self.fuel_records = fuel_records or []
        self.settings = settings or Settings()

    def get_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        """Find a vehicle by id."""
        for vehicle in self.vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        for driver in self.drivers:
            if driver.id == driver_id:
                return driver
        return None

    def get_order(self, order_id: str) -> Optional[MaintenanceOrder]:
        for order in self.maintenance:
            if order.id == order_id:
                return order
        return None

    def orders_for_vehicle(self, vehicle_id: str) -> List[MaintenanceOrder]:
        return [m for m in self.maintenance if m.vehicle_id == vehicle_id]

    def alerts(
        self, today: Optional[date] = None, lookahead_days: Optional[int] = None
    ) -> List[Alert]:
        """
        Notification feed using this fleet's settings.

        Args:
            today: Defaults to the local calendar day.
            lookahead_days: Overrides settings.alert_lookahead_days.
        """
        if lookahead_days is None:
            lookahead_days = self.settings.alert_lookahead_days
        return compute_alerts(
            self.maintenance,
            self.vehicles,
            today or date.today(),
            lookahead_days=lookahead_days,
            enabled=self.settings.notifications_enabled,
        )

    def summary(self) -> FleetSummary:
        return summarize(self.vehicles, self.maintenance, self.fuel_records)
