"""Fleet-wide settings."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from .alerts import DEFAULT_LOOKAHEAD_DAYS

DATA_FILE_ENV = "FLEET_DATA_FILE"
DISTANCE_UNITS = ("km", "mi")


class Settings:
    """Preferences stored in the `settings` section of a fleet file."""

    def __init__(
        self,
        fleet_name: str = "My Fleet",
        currency: str = "BRL",
        distance_unit: str = "km",
        notifications_enabled: bool = True,
        alert_lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
    ):
        if distance_unit not in DISTANCE_UNITS:
            raise ValueError(
                f"distance_unit must be one of {', '.join(DISTANCE_UNITS)}, "
                f"got {distance_unit!r}"
            )
        if alert_lookahead_days < 0:
            raise ValueError(
                f"alert_lookahead_days must not be negative, got {alert_lookahead_days}"
            )
        if not isinstance(notifications_enabled, bool):
            raise ValueError(
                f"notifications_enabled must be true or false, got {notifications_enabled!r}"
            )
        self.fleet_name = fleet_name
        self.currency = currency
        self.distance_unit = distance_unit
        self.notifications_enabled = notifications_enabled
        self.alert_lookahead_days = alert_lookahead_days

    @classmethod
    def from_dict(cls, dct: Optional[Dict[str, Any]]) -> "Settings":
        dct = dct or {}
        return cls(
            fleet_name=dct.get("fleet_name", "My Fleet"),
            currency=dct.get("currency", "BRL"),
            distance_unit=dct.get("distance_unit", "km"),
            notifications_enabled=dct.get("notifications_enabled", True),
            alert_lookahead_days=int(
                dct.get("alert_lookahead_days", DEFAULT_LOOKAHEAD_DAYS)
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fleet_name": self.fleet_name,
            "currency": self.currency,
            "distance_unit": self.distance_unit,
            "notifications_enabled": self.notifications_enabled,
            "alert_lookahead_days": self.alert_lookahead_days,
        }


def default_data_file() -> Optional[Path]:
    """Fleet file named by $FLEET_DATA_FILE, if set."""
    value = os.environ.get(DATA_FILE_ENV)
    return Path(value) if value else None
