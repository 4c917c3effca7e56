"""Maintenance alert classification."""

from datetime import date
from typing import Dict, Iterable, List, Tuple

from .alert import Alert
from .dates import add_days, parse_local_date
from .maintenance_order import MaintenanceOrder
from .vehicle import Vehicle

MISSING_PLATE = "---"
DEFAULT_LOOKAHEAD_DAYS = 7


def classify_date(
    due: date, today: date, lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS
) -> Tuple[bool, bool]:
    """
    Classify a due date against today.

    Returns (is_overdue, is_upcoming). Overdue means strictly before today;
    upcoming means within [today, today + lookahead_days], both ends
    inclusive.
    """
    is_overdue = due < today
    is_upcoming = today <= due <= add_days(today, lookahead_days)
    return is_overdue, is_upcoming


def compute_alerts(
    orders: Iterable[MaintenanceOrder],
    vehicles: Iterable[Vehicle],
    today: date,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
    enabled: bool = True,
) -> List[Alert]:
    """
    Build the notification feed for open maintenance orders.

    Only Pending and InProgress orders are considered. Orders that are
    neither overdue nor upcoming are dropped. The result is sorted by date;
    orders on the same date keep their input order.

    A malformed order date raises InvalidDateFormat. A vehicle id with no
    matching vehicle gets the placeholder plate "---".
    """
    if not enabled:
        return []

    plates: Dict[str, str] = {}
    for vehicle in vehicles:
        plates.setdefault(vehicle.id, vehicle.plate)

    dated = []
    for order in orders:
        if not order.is_open:
            continue
        due = parse_local_date(order.date)
        is_overdue, is_upcoming = classify_date(due, today, lookahead_days)
        if not (is_overdue or is_upcoming):
            continue
        dated.append(
            (
                due,
                Alert(
                    order_id=order.id,
                    vehicle_id=order.vehicle_id,
                    description=order.description,
                    cost=order.cost,
                    date=order.date,
                    status=order.status,
                    type=order.type,
                    is_overdue=is_overdue,
                    is_upcoming=is_upcoming,
                    vehicle_plate=plates.get(order.vehicle_id) or MISSING_PLATE,
                ),
            )
        )

    dated.sort(key=lambda pair: pair[0])
    return [a for _, a in dated]
