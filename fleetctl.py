#!/usr/bin/env python3
"""
Command-line tool for fleet maintenance planning.

Commands:
  alerts      - Show maintenance that is overdue or coming up
  plan        - Schedule recurring preventive maintenance
  orders      - List maintenance orders
  set-status  - Change the status of a maintenance order
  vehicles    - List vehicles
  summary     - Show fleet KPIs
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleet import (
    Alert,
    Fleet,
    FleetError,
    MaintenanceOrder,
    MaintenanceStatus,
    MAINTENANCE_RECORDS,
    MISSING_PLATE,
    Periodicity,
    RecurrencePlan,
    generate_schedule,
    insert_records,
    load_fleet,
    parse_local_date,
    update_record,
)
from fleet.settings import default_data_file

# =============================================================================
# Formatting helpers
# =============================================================================


def format_cost(cost: Optional[float], currency: str = "") -> str:
    """Format cost for display."""
    if cost is None:
        return "-"
    prefix = f"{currency} " if currency else ""
    return f"{prefix}{cost:,.2f}"


def format_days_away(order_date: str, today: date) -> str:
    """Format distance from today (e.g., 'today', 'in 3d', '5d ago')."""
    days = (parse_local_date(order_date) - today).days
    if days == 0:
        return "today"
    if days > 0:
        return f"in {days}d"
    return f"{abs(days)}d ago"


def truncate(text: Optional[str], max_len: int = 40) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_alert_table(alerts: List[Alert], today: date) -> List[List[str]]:
    """Convert alerts to table rows."""
    return [
        [
            a.date,
            format_days_away(a.date, today),
            a.vehicle_plate,
            truncate(a.description),
            a.status.value,
        ]
        for a in alerts
    ]


def make_order_table(
    orders: List[MaintenanceOrder], fleet: Fleet, show_id: bool = False
) -> List[List[str]]:
    """Convert maintenance orders to table rows."""
    rows = []
    for order in orders:
        vehicle = fleet.get_vehicle(order.vehicle_id)
        row = [
            order.date,
            vehicle.plate if vehicle else MISSING_PLATE,
            truncate(order.description),
            order.type.value,
            order.status.value,
            format_cost(order.cost),
        ]
        if show_id:
            row.insert(0, order.id or "-")
        rows.append(row)
    return rows


# =============================================================================
# Alerts command
# =============================================================================


def cmd_alerts(args):
    """Show maintenance that is overdue or coming up."""
    fleet = load_fleet(args.fleet_file)
    today = parse_local_date(args.today) if args.today else date.today()
    lookahead = (
        args.lookahead
        if args.lookahead is not None
        else fleet.settings.alert_lookahead_days
    )

    print(f"Fleet: {fleet.settings.fleet_name}")
    print(f"Today: {today.isoformat()} (looking ahead {lookahead} days)")
    print()

    if not fleet.settings.notifications_enabled:
        print("Notifications are disabled in settings.")
        return 0

    alerts = fleet.alerts(today=today, lookahead_days=lookahead)
    overdue = [a for a in alerts if a.is_overdue]
    upcoming = [a for a in alerts if a.is_upcoming]

    headers = ["Date", "When", "Vehicle", "Description", "Status"]

    if overdue:
        print("OVERDUE:")
        print(tabulate(make_alert_table(overdue, today), headers=headers, tablefmt="simple"))
        print()

    if upcoming:
        print("UPCOMING:")
        print(tabulate(make_alert_table(upcoming, today), headers=headers, tablefmt="simple"))
        print()

    if not alerts:
        print("Fleet is up to date. No pending alerts.")

    return 0


# =============================================================================
# Plan command
# =============================================================================


def cmd_plan(args):
    """Schedule recurring preventive maintenance."""
    fleet = load_fleet(args.fleet_file)

    vehicle = fleet.get_vehicle(args.vehicle_id)
    if vehicle is None:
        print(f"Error: Unknown vehicle id '{args.vehicle_id}'")
        if fleet.vehicles:
            print("\nAvailable vehicles:")
            for v in fleet.vehicles:
                print(f"  {v.id}  {v.name}")
        return 1

    plan = RecurrencePlan(
        vehicle_id=vehicle.id,
        description=args.description,
        start_date=args.start or date.today().isoformat(),
        periodicity=Periodicity.parse(args.periodicity),
        occurrences=args.occurrences,
        estimated_cost=args.cost,
        custom_days=args.custom_days,
    )
    drafts = generate_schedule(plan, strict=True)

    print(f"Schedule for {vehicle.name}:")
    print(f"  Every {plan.interval_days} days, {len(drafts)} times")
    print()
    rows = [
        [i + 1, d.date, d.description, format_cost(d.cost, fleet.settings.currency)]
        for i, d in enumerate(drafts)
    ]
    print(tabulate(rows, headers=["#", "Date", "Description", "Cost"], tablefmt="simple"))
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    saved = insert_records(args.fleet_file, MAINTENANCE_RECORDS, drafts)
    print(f"{len(saved)} maintenance orders scheduled.")
    return 0


# =============================================================================
# Orders command
# =============================================================================


def cmd_orders(args):
    """List maintenance orders."""
    fleet = load_fleet(args.fleet_file)

    orders = sorted(fleet.maintenance, key=lambda m: m.date, reverse=not args.asc)
    if args.status:
        status = MaintenanceStatus(args.status)
        orders = [m for m in orders if m.status == status]
    if args.vehicle:
        orders = [m for m in orders if m.vehicle_id == args.vehicle]

    total_cost = sum(m.cost for m in orders if m.cost)

    print(f"Fleet: {fleet.settings.fleet_name}")
    print(f"Total orders: {len(fleet.maintenance)}")
    if args.status or args.vehicle:
        print(f"Showing: {len(orders)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: {format_cost(total_cost, fleet.settings.currency)}")
    print()

    if not orders:
        print("No maintenance orders found.")
        return 0

    headers = ["Date", "Vehicle", "Description", "Type", "Status", "Cost"]
    if args.ids:
        headers.insert(0, "Id")
    print(
        tabulate(
            make_order_table(orders, fleet, show_id=args.ids),
            headers=headers,
            tablefmt="simple",
        )
    )
    return 0


# =============================================================================
# Set-status command
# =============================================================================


def cmd_set_status(args):
    """Change the status of a maintenance order."""
    fleet = load_fleet(args.fleet_file)

    order = fleet.get_order(args.order_id)
    if order is None:
        print(f"Error: Unknown order id '{args.order_id}'")
        return 1

    old_status = order.status
    order.status = MaintenanceStatus(args.status)

    print(f"Order:  {order.description} ({order.date})")
    print(f"Status: {old_status.value} -> {order.status.value}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    update_record(args.fleet_file, MAINTENANCE_RECORDS, order.id, order)
    print("Order updated.")
    return 0


# =============================================================================
# Vehicles command
# =============================================================================


def cmd_vehicles(args):
    """List vehicles."""
    fleet = load_fleet(args.fleet_file)
    unit = fleet.settings.distance_unit

    print(f"Fleet: {fleet.settings.fleet_name}")
    print(f"Vehicles: {len(fleet.vehicles)}")
    print()

    rows = []
    for v in sorted(fleet.vehicles, key=lambda v: v.plate):
        open_orders = sum(1 for m in fleet.orders_for_vehicle(v.id) if m.is_open)
        rows.append(
            [
                v.id,
                v.plate,
                f"{v.brand} {v.model}".strip() or "-",
                v.year or "-",
                v.status.value,
                f"{v.mileage:,.0f} {unit}",
                open_orders,
            ]
        )

    headers = ["Id", "Plate", "Vehicle", "Year", "Status", "Mileage", "Open Orders"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Summary command
# =============================================================================


def cmd_summary(args):
    """Show fleet KPIs."""
    fleet = load_fleet(args.fleet_file)
    summary = fleet.summary()
    currency = fleet.settings.currency

    print(f"Fleet: {fleet.settings.fleet_name}")
    print()
    rows = [
        ["Vehicles", summary.total_vehicles],
        ["Active vehicles", summary.active_vehicles],
        ["Open orders", summary.pending_orders],
        ["Completed orders", summary.completed_orders],
        ["Maintenance spend", format_cost(summary.completed_maintenance_cost, currency)],
        ["Fuel spend", format_cost(summary.total_fuel_cost, currency)],
        ["Fuel volume (L)", f"{summary.total_liters:,.1f}"],
    ]
    print(tabulate(rows, tablefmt="simple"))

    unit = fleet.settings.distance_unit
    if summary.fuel_efficiency:
        print()
        print(f"FUEL EFFICIENCY ({unit}/L)")
        rows = [[e.label, f"{e.km_per_liter:.2f}"] for e in summary.fuel_efficiency]
        print(tabulate(rows, headers=["Vehicle", f"{unit}/L"], tablefmt="simple"))

    if summary.monthly_fuel_cost:
        print()
        print("MONTHLY FUEL SPEND")
        rows = [[month, format_cost(cost, currency)]
                for month, cost in summary.monthly_fuel_cost]
        print(tabulate(rows, headers=["Month", "Spend"], tablefmt="simple"))

    if summary.recent_activity:
        print()
        print("RECENT ACTIVITY")
        headers = ["Date", "Vehicle", "Description", "Type", "Status", "Cost"]
        print(
            tabulate(
                make_order_table(summary.recent_activity, fleet),
                headers=headers,
                tablefmt="simple",
            )
        )
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet maintenance planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleets/main.yaml alerts
  %(prog)s fleets/main.yaml alerts --today 2024-06-10 --lookahead 14
  %(prog)s fleets/main.yaml plan v1 "Oil change" \\
      --start 2024-01-01 --periodicity DAYS_90 --occurrences 4 --cost 250
  %(prog)s fleets/main.yaml orders --status Pending --ids
  %(prog)s fleets/main.yaml set-status <order-id> Completed
  %(prog)s fleets/main.yaml summary
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        nargs="?",
        default=default_data_file(),
        help="Path to fleet YAML file (default: $FLEET_DATA_FILE)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Alerts subcommand
    alerts_parser = subparsers.add_parser(
        "alerts", help="Show maintenance that is overdue or coming up"
    )
    alerts_parser.add_argument(
        "--today",
        type=str,
        help="Evaluate as of this date (YYYY-MM-DD, default: today)",
    )
    alerts_parser.add_argument(
        "--lookahead",
        type=int,
        help="Days ahead to treat as upcoming (default: from settings)",
    )

    # Plan subcommand
    plan_parser = subparsers.add_parser(
        "plan", help="Schedule recurring preventive maintenance"
    )
    plan_parser.add_argument("vehicle_id", type=str, help="Vehicle id")
    plan_parser.add_argument(
        "description", type=str, help="Service description (e.g., 'Oil change')"
    )
    plan_parser.add_argument(
        "--start",
        type=str,
        help="First date in YYYY-MM-DD format (default: today)",
    )
    plan_parser.add_argument(
        "--periodicity",
        choices=[p.name for p in Periodicity],
        default=Periodicity.DAYS_180.name,
        help="Interval preset (default: DAYS_180)",
    )
    plan_parser.add_argument(
        "--custom-days",
        type=int,
        help="Interval in days when --periodicity is CUSTOM",
    )
    plan_parser.add_argument(
        "--occurrences",
        type=int,
        default=4,
        help="Number of orders to schedule (default: 4)",
    )
    plan_parser.add_argument(
        "--cost",
        type=float,
        default=0,
        help="Estimated cost of each order",
    )
    plan_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the schedule without saving",
    )

    # Orders subcommand
    orders_parser = subparsers.add_parser("orders", help="List maintenance orders")
    orders_parser.add_argument(
        "--status",
        choices=[s.value for s in MaintenanceStatus],
        help="Only show orders with this status",
    )
    orders_parser.add_argument("--vehicle", type=str, help="Only show this vehicle id")
    orders_parser.add_argument(
        "--asc", action="store_true", help="Oldest first instead of newest first"
    )
    orders_parser.add_argument(
        "--ids", action="store_true", help="Show order ids"
    )

    # Set-status subcommand
    set_status_parser = subparsers.add_parser(
        "set-status", help="Change the status of a maintenance order"
    )
    set_status_parser.add_argument("order_id", type=str, help="Order id")
    set_status_parser.add_argument(
        "status", choices=[s.value for s in MaintenanceStatus], help="New status"
    )
    set_status_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    subparsers.add_parser("vehicles", help="List vehicles")
    subparsers.add_parser("summary", help="Show fleet KPIs")

    return parser


COMMANDS = {
    "alerts": cmd_alerts,
    "plan": cmd_plan,
    "orders": cmd_orders,
    "set-status": cmd_set_status,
    "vehicles": cmd_vehicles,
    "summary": cmd_summary,
}


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.fleet_file is None:
        print("Error: No fleet file given and FLEET_DATA_FILE is not set")
        return 1
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except FleetError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
