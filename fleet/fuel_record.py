"""FuelRecord class for refueling entries."""

from typing import Optional, Tuple


class FuelRecord:
    """A refueling of one vehicle by one driver."""

    def __init__(
        self,
        id: Optional[str],
        vehicle_id: str,
        driver_id: Optional[str],
        date: str,
        odometer: float,
        liters: float,
        total_cost: float,
        location: Optional[Tuple[float, float]] = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.driver_id = driver_id
        self.date = date
        self.odometer = odometer
        self.liters = liters
        self.total_cost = total_cost
        self.location = location

    @property
    def price_per_liter(self) -> Optional[float]:
        if not self.liters:
            return None
        return self.total_cost / self.liters
