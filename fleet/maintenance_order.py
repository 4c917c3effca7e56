"""MaintenanceOrder class for planned and performed maintenance."""

from typing import Optional

from .status import MaintenanceStatus, MaintenanceType


class MaintenanceOrder:
    """
    A maintenance order for one vehicle.

    `date` is a local calendar day as "YYYY-MM-DD". An order without an id is
    a draft that has not been stored yet.
    """

    def __init__(
        self,
        vehicle_id: str,
        description: str,
        date: str,
        cost: float = 0,
        status: MaintenanceStatus = MaintenanceStatus.PENDING,
        type: MaintenanceType = MaintenanceType.PREVENTIVE,
        id: Optional[str] = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.description = description
        self.cost = cost
        self.date = date
        self.status = status
        self.type = type

    @property
    def is_draft(self) -> bool:
        return self.id is None

    @property
    def is_open(self) -> bool:
        """Pending or in progress."""
        return self.status.is_open

    def __repr__(self) -> str:
        return (
            f"MaintenanceOrder(id={self.id!r}, vehicle_id={self.vehicle_id!r}, "
            f"description={self.description!r}, date={self.date!r}, "
            f"status={self.status.value!r})"
        )
