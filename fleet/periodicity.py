"""Periodicity presets for recurring maintenance."""

from enum import Enum
from typing import Optional, Union

from .errors import UnknownPeriodicity


class Periodicity(Enum):
    DAYS_30 = "30d"
    DAYS_60 = "60d"
    DAYS_90 = "90d"
    DAYS_180 = "180d"
    DAYS_365 = "365d"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Union["Periodicity", str]) -> "Periodicity":
        """Accept a member, its name ("DAYS_90") or its value ("90d")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            for member in cls:
                if text.upper() == member.name or text.lower() == member.value:
                    return member
        raise UnknownPeriodicity(f"Unknown periodicity: {value!r}")


PERIODICITY_DAYS = {
    Periodicity.DAYS_30: 30,
    Periodicity.DAYS_60: 60,
    Periodicity.DAYS_90: 90,
    Periodicity.DAYS_180: 180,
    Periodicity.DAYS_365: 365,
}


def periodicity_days(
    periodicity: Union[Periodicity, str], custom_days: Optional[int] = None
) -> int:
    """Day count for a periodicity. CUSTOM takes its count from custom_days."""
    periodicity = Periodicity.parse(periodicity)
    if periodicity is Periodicity.CUSTOM:
        if (
            not isinstance(custom_days, int)
            or isinstance(custom_days, bool)
            or custom_days < 1
        ):
            raise UnknownPeriodicity(
                f"Custom periodicity needs a positive day count, got {custom_days!r}"
            )
        return custom_days
    try:
        return PERIODICITY_DAYS[periodicity]
    except KeyError:
        raise UnknownPeriodicity(f"No day count for {periodicity.name}") from None
