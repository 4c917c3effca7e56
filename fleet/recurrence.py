"""Recurring maintenance schedule generation."""

from dataclasses import dataclass
from typing import List, Optional, Union

from .dates import add_days, format_local_date, parse_local_date
from .errors import EmptyScheduleInput
from .maintenance_order import MaintenanceOrder
from .periodicity import Periodicity, periodicity_days
from .status import MaintenanceStatus, MaintenanceType


@dataclass
class RecurrencePlan:
    """Input for a recurring maintenance schedule."""

    vehicle_id: str
    description: str
    start_date: str
    periodicity: Union[Periodicity, str] = Periodicity.DAYS_180
    occurrences: int = 4
    estimated_cost: float = 0
    custom_days: Optional[int] = None

    @property
    def interval_days(self) -> int:
        return periodicity_days(self.periodicity, self.custom_days)

    def missing_fields(self) -> List[str]:
        """Names of required inputs that are empty or non-positive."""
        missing = []
        if not self.vehicle_id:
            missing.append("vehicle_id")
        if not self.description or not self.description.strip():
            missing.append("description")
        if not self.occurrences or self.occurrences < 1:
            missing.append("occurrences")
        return missing


def generate_schedule(
    plan: RecurrencePlan, strict: bool = False
) -> List[MaintenanceOrder]:
    """
    Generate draft maintenance orders for a recurrence plan.

    Drafts start on plan.start_date and are spaced by the plan's interval in
    calendar days. Each description gets a "(n/total)" suffix. Drafts have
    no id; storing them is up to the caller, as a single batch insert.

    An incomplete plan yields no drafts, or raises EmptyScheduleInput when
    strict is set. Bad dates and periodicities always raise.
    """
    missing = plan.missing_fields()
    if missing:
        if strict:
            raise EmptyScheduleInput(
                f"Recurrence plan is missing: {', '.join(missing)}"
            )
        return []

    interval = plan.interval_days
    current = parse_local_date(plan.start_date)

    drafts = []
    for i in range(plan.occurrences):
        drafts.append(
            MaintenanceOrder(
                vehicle_id=plan.vehicle_id,
                description=f"{plan.description} ({i + 1}/{plan.occurrences})",
                date=format_local_date(current),
                cost=plan.estimated_cost,
                status=MaintenanceStatus.PENDING,
                type=MaintenanceType.PREVENTIVE,
            )
        )
        current = add_days(current, interval)
    return drafts
