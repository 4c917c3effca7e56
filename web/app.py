"""Flask JSON API for fleet maintenance planning."""

import logging
import os
from datetime import date
from pathlib import Path

from flask import Flask, abort, jsonify, request

# Add parent directory to path for fleet imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fleet.alert import Alert
from fleet.errors import FleetError
from fleet.dates import parse_local_date
from fleet.maintenance_order import MaintenanceOrder
from fleet.periodicity import Periodicity
from fleet.recurrence import RecurrencePlan, generate_schedule
from fleet.settings import DATA_FILE_ENV
from fleet.status import MaintenanceStatus, MaintenanceType
from fleet.store import (
    MAINTENANCE_RECORDS,
    insert_records,
    load_fleet,
    update_record,
)

logger = logging.getLogger("fleet.web")

app = Flask(__name__)
app.config["FLEET_DATA_FILE"] = os.environ.get(
    DATA_FILE_ENV, str(Path(__file__).parent.parent / "fleets" / "fleet.yaml")
)


def get_data_file() -> Path:
    """Fleet file configured for this app."""
    return Path(app.config["FLEET_DATA_FILE"])


def order_to_json(order: MaintenanceOrder) -> dict:
    return {
        "id": order.id,
        "vehicle_id": order.vehicle_id,
        "description": order.description,
        "cost": order.cost,
        "date": order.date,
        "status": order.status.value,
        "type": order.type.value,
    }


def alert_to_json(alert: Alert) -> dict:
    return {
        "id": alert.order_id,
        "vehicle_id": alert.vehicle_id,
        "description": alert.description,
        "cost": alert.cost,
        "date": alert.date,
        "status": alert.status.value,
        "type": alert.type.value,
        "is_overdue": alert.is_overdue,
        "is_upcoming": alert.is_upcoming,
        "vehicle_plate": alert.vehicle_plate,
    }


def json_body() -> dict:
    """Request body as a JSON object; anything else is a bad request."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    return payload


def number_field(payload: dict, key: str, default, convert=float):
    value = payload.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"'{key}' must be a number, got {value!r}")
    try:
        return convert(value)
    except ValueError:
        raise ValueError(f"'{key}' must be a number, got {value!r}") from None


def plan_from_json(payload: dict) -> RecurrencePlan:
    """Build a recurrence plan from a request body."""
    return RecurrencePlan(
        vehicle_id=str(payload.get("vehicle_id") or ""),
        description=payload.get("description") or "",
        start_date=payload.get("start_date") or date.today().isoformat(),
        periodicity=Periodicity.parse(
            payload.get("periodicity", Periodicity.DAYS_180.name)
        ),
        occurrences=number_field(payload, "occurrences", 4, int),
        estimated_cost=number_field(payload, "estimated_cost", 0),
        custom_days=payload.get("custom_days"),
    )


@app.errorhandler(FleetError)
@app.errorhandler(ValueError)
def handle_bad_input(error):
    return jsonify({"error": str(error)}), 400


@app.route("/api/alerts")
def alerts():
    """Overdue and upcoming maintenance orders."""
    fleet = load_fleet(get_data_file())
    today_arg = request.args.get("today")
    today = parse_local_date(today_arg) if today_arg else date.today()
    lookahead = request.args.get("lookahead", type=int)

    feed = fleet.alerts(today=today, lookahead_days=lookahead)
    return jsonify(
        {
            "enabled": fleet.settings.notifications_enabled,
            "today": today.isoformat(),
            "count": len(feed),
            "alerts": [alert_to_json(a) for a in feed],
        }
    )


@app.route("/api/orders")
def orders():
    """Maintenance orders, newest first. Filter with ?status= and ?vehicle_id=."""
    fleet = load_fleet(get_data_file())
    status = request.args.get("status")
    vehicle_id = request.args.get("vehicle_id")

    result = sorted(fleet.maintenance, key=lambda m: m.date, reverse=True)
    if status:
        try:
            wanted = MaintenanceStatus(status)
        except ValueError:
            return jsonify({"error": f"Unknown status '{status}'"}), 400
        result = [m for m in result if m.status == wanted]
    if vehicle_id:
        result = [m for m in result if m.vehicle_id == vehicle_id]

    return jsonify({"orders": [order_to_json(m) for m in result]})


@app.route("/api/orders/<order_id>", methods=["PATCH"])
def update_order(order_id: str):
    """Edit the status, cost or date of a maintenance order."""
    path = get_data_file()
    fleet = load_fleet(path)
    order = fleet.get_order(order_id)
    if order is None:
        abort(404)

    payload = json_body()
    if "status" in payload:
        order.status = MaintenanceStatus(payload["status"])
    if "type" in payload:
        order.type = MaintenanceType(payload["type"])
    if "cost" in payload:
        order.cost = number_field(payload, "cost", None)
    if "date" in payload:
        # Reject bad dates before they reach the store
        parse_local_date(payload["date"])
        order.date = payload["date"]

    update_record(path, MAINTENANCE_RECORDS, order_id, order)
    return jsonify(order_to_json(order))


@app.route("/api/planner/preview", methods=["POST"])
def planner_preview():
    """Draft orders for a recurrence plan, without saving them."""
    plan = plan_from_json(json_body())
    drafts = generate_schedule(plan, strict=True)
    return jsonify(
        {
            "interval_days": plan.interval_days,
            "drafts": [order_to_json(d) for d in drafts],
        }
    )


@app.route("/api/planner/schedule", methods=["POST"])
def planner_schedule():
    """Generate and store a recurring schedule in one batch."""
    path = get_data_file()
    fleet = load_fleet(path)
    plan = plan_from_json(json_body())

    if plan.vehicle_id and fleet.get_vehicle(plan.vehicle_id) is None:
        return jsonify({"error": f"Unknown vehicle '{plan.vehicle_id}'"}), 404

    drafts = generate_schedule(plan, strict=True)
    saved = insert_records(path, MAINTENANCE_RECORDS, drafts)
    logger.info("Scheduled %d orders for vehicle %s", len(saved), plan.vehicle_id)
    return jsonify({"orders": [order_to_json(o) for o in saved]}), 201


@app.route("/api/summary")
def summary():
    """Dashboard KPIs."""
    fleet = load_fleet(get_data_file())
    s = fleet.summary()
    return jsonify(
        {
            "fleet_name": fleet.settings.fleet_name,
            "currency": fleet.settings.currency,
            "total_vehicles": s.total_vehicles,
            "active_vehicles": s.active_vehicles,
            "pending_orders": s.pending_orders,
            "completed_orders": s.completed_orders,
            "completed_maintenance_cost": s.completed_maintenance_cost,
            "total_fuel_cost": s.total_fuel_cost,
            "total_liters": s.total_liters,
            "fuel_efficiency": [
                {
                    "vehicle_id": e.vehicle_id,
                    "label": e.label,
                    "km_per_liter": e.km_per_liter,
                }
                for e in s.fuel_efficiency
            ],
            "monthly_fuel_cost": [
                {"month": month, "total_cost": cost}
                for month, cost in s.monthly_fuel_cost
            ],
            "recent_activity": [order_to_json(m) for m in s.recent_activity],
        }
    )


if __name__ == "__main__":
    # Run with debug mode for development
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, host="0.0.0.0", port=5001)
