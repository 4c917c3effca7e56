"""Status enums for fleet records."""

from enum import Enum


class MaintenanceStatus(Enum):
    """Lifecycle of a maintenance order."""

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

    @property
    def is_open(self) -> bool:
        return self is not MaintenanceStatus.COMPLETED


class MaintenanceType(Enum):
    PREVENTIVE = "Preventive"
    CORRECTIVE = "Corrective"
    EMERGENCY = "Emergency"


class VehicleStatus(Enum):
    ACTIVE = "Active"
    MAINTENANCE = "Maintenance"
    RETIRED = "Retired"


class DriverStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
