"""Driver class."""

from typing import Optional

from .status import DriverStatus


class Driver:
    """A licensed driver."""

    def __init__(
        self,
        id: Optional[str],
        name: str,
        license_number: str = "",
        license_category: str = "",
        phone: str = "",
        status: DriverStatus = DriverStatus.ACTIVE,
    ):
        self.id = id
        self.name = name
        self.license_number = license_number
        self.license_category = license_category
        self.phone = phone
        self.status = status
