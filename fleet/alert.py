"""Alert dataclass for a maintenance order that needs attention."""

from dataclasses import dataclass

from .status import MaintenanceStatus, MaintenanceType


@dataclass
class Alert:
    """A derived view of an open order that is overdue or coming up soon."""

    order_id: str
    vehicle_id: str
    description: str
    cost: float
    date: str
    status: MaintenanceStatus
    type: MaintenanceType
    is_overdue: bool
    is_upcoming: bool
    vehicle_plate: str

    @property
    def label(self) -> str:
        return "OVERDUE" if self.is_overdue else "UPCOMING"
