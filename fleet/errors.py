"""Exception types raised by the fleet package."""


class FleetError(Exception):
    """Base class for all fleet errors."""


class InvalidDateFormat(FleetError, ValueError):
    """A date string is not a valid YYYY-MM-DD calendar date."""


class EmptyScheduleInput(FleetError, ValueError):
    """A recurrence plan is missing a vehicle, a description or occurrences."""


class UnknownPeriodicity(FleetError, ValueError):
    """A periodicity has no day count."""


class UnknownCollection(FleetError, KeyError):
    """A record store collection name is not recognized."""

    def __str__(self) -> str:
        # KeyError quotes its message otherwise
        return str(self.args[0]) if self.args else ""
