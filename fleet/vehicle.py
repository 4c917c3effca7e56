"""Vehicle class for fleet identification."""

from typing import Optional

from .status import VehicleStatus


class Vehicle:
    """A vehicle in the fleet."""

    def __init__(
        self,
        id: Optional[str],
        plate: str,
        brand: str = "",
        model: str = "",
        year: Optional[int] = None,
        status: VehicleStatus = VehicleStatus.ACTIVE,
        mileage: float = 0,
    ):
        self.id = id
        self.plate = plate
        self.brand = brand
        self.model = model
        self.year = year
        self.status = status
        self.mileage = mileage

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        base = " ".join(str(p) for p in (self.year, self.brand, self.model) if p)
        return f"{base} ({self.plate})" if base else self.plate
