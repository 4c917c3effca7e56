"""YAML-backed record store for fleet data."""

import logging
import os
import stat
import tempfile
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import yaml

from .driver import Driver
from .errors import UnknownCollection
from .fleet import Fleet
from .fuel_record import FuelRecord
from .maintenance_order import MaintenanceOrder
from .settings import Settings
from .status import DriverStatus, MaintenanceStatus, MaintenanceType, VehicleStatus
from .vehicle import Vehicle

logger = logging.getLogger("fleet.store")

Record = Union[Vehicle, Driver, MaintenanceOrder, FuelRecord]

VEHICLES = "vehicles"
DRIVERS = "drivers"
MAINTENANCE_RECORDS = "maintenance_records"
FUEL_RECORDS = "fuel_records"


# =============================================================================
# Record <-> dict conversion
# =============================================================================


def _id(value: Any) -> Optional[str]:
    # Ids may be written as YAML integers; lookups always use strings
    return None if value is None else str(value)


def _parse_vehicle(dct: Dict[str, Any]) -> Vehicle:
    return Vehicle(
        _id(dct.get("id")),
        dct["plate"],
        dct.get("brand", ""),
        dct.get("model", ""),
        dct.get("year"),
        VehicleStatus(dct.get("status", VehicleStatus.ACTIVE.value)),
        float(dct.get("mileage") or 0),
    )


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "plate": vehicle.plate,
        "brand": vehicle.brand,
        "model": vehicle.model,
        "status": vehicle.status.value,
        "mileage": vehicle.mileage,
    }
    if vehicle.year is not None:
        d["year"] = vehicle.year
    return d


def _parse_driver(dct: Dict[str, Any]) -> Driver:
    return Driver(
        _id(dct.get("id")),
        dct["name"],
        dct.get("license_number", ""),
        dct.get("license_category", ""),
        dct.get("phone", ""),
        DriverStatus(dct.get("status", DriverStatus.ACTIVE.value)),
    )


def _driver_to_dict(driver: Driver) -> Dict[str, Any]:
    return {
        "name": driver.name,
        "license_number": driver.license_number,
        "license_category": driver.license_category,
        "phone": driver.phone,
        "status": driver.status.value,
    }


def _parse_order(dct: Dict[str, Any]) -> MaintenanceOrder:
    return MaintenanceOrder(
        vehicle_id=_id(dct["vehicle_id"]),
        description=dct["description"],
        date=str(dct["date"]),
        cost=float(dct.get("cost") or 0),
        status=MaintenanceStatus(dct.get("status", MaintenanceStatus.PENDING.value)),
        type=MaintenanceType(dct.get("type", MaintenanceType.PREVENTIVE.value)),
        id=_id(dct.get("id")),
    )


def _order_to_dict(order: MaintenanceOrder) -> Dict[str, Any]:
    return {
        "vehicle_id": order.vehicle_id,
        "description": order.description,
        "cost": order.cost,
        "date": order.date,
        "status": order.status.value,
        "type": order.type.value,
    }


def _parse_fuel(dct: Dict[str, Any]) -> FuelRecord:
    location = dct.get("location")
    return FuelRecord(
        _id(dct.get("id")),
        _id(dct["vehicle_id"]),
        _id(dct.get("driver_id")),
        str(dct["date"]),
        float(dct.get("odometer") or 0),
        float(dct.get("liters") or 0),
        float(dct.get("total_cost") or 0),
        (location["latitude"], location["longitude"]) if location else None,
    )


def _fuel_to_dict(record: FuelRecord) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "vehicle_id": record.vehicle_id,
        "driver_id": record.driver_id,
        "date": record.date,
        "odometer": record.odometer,
        "liters": record.liters,
        "total_cost": record.total_cost,
    }
    if record.location is not None:
        d["location"] = {
            "latitude": record.location[0],
            "longitude": record.location[1],
        }
    return d


_COLLECTIONS: Dict[str, Tuple[Callable[..., Any], Callable[..., Dict[str, Any]]]] = {
    VEHICLES: (_parse_vehicle, _vehicle_to_dict),
    DRIVERS: (_parse_driver, _driver_to_dict),
    MAINTENANCE_RECORDS: (_parse_order, _order_to_dict),
    FUEL_RECORDS: (_parse_fuel, _fuel_to_dict),
}


def _codec(collection: str):
    try:
        return _COLLECTIONS[collection]
    except KeyError:
        raise UnknownCollection(
            f"Unknown collection '{collection}' "
            f"(expected one of: {', '.join(_COLLECTIONS)})"
        ) from None


# =============================================================================
# File access
# =============================================================================


def _load_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    """Load the raw YAML data (not parsed into objects)."""
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    for collection in _COLLECTIONS:
        if data.get(collection) is None:
            data[collection] = []
    return data


def _write_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    """
    Write the YAML data back to the file.

    The file is replaced in one step, so readers see either the old or the
    new contents and a failed write leaves the old contents in place.
    """
    path = Path(filename)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w") as fp:
            yaml.dump(
                data,
                fp,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=120,
            )
        if path.exists():
            # mkstemp creates 0600 files; keep the mode of the file we replace
            os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _sort_value(value: Any) -> Any:
    # Unquoted YAML dates load as date objects, quoted ones as strings
    if isinstance(value, date):
        return value.isoformat()
    return value


def _new_row(to_dict, record) -> Dict[str, Any]:
    row = {"id": str(uuid.uuid4())}
    row.update(to_dict(record))
    row["created_at"] = datetime.now(timezone.utc).isoformat(timespec="seconds")
    return row


# =============================================================================
# Public API
# =============================================================================


def create_fleet_file(
    filename: Union[str, Path], settings: Optional[Settings] = None
) -> None:
    """Create an empty fleet file with the given settings."""
    data: Dict[str, Any] = {"settings": (settings or Settings()).to_dict()}
    for collection in _COLLECTIONS:
        data[collection] = []
    _write_raw(filename, data)
    logger.info("Created fleet file %s", filename)


def load_settings(filename: Union[str, Path]) -> Settings:
    return Settings.from_dict(_load_raw(filename).get("settings"))


def save_settings(filename: Union[str, Path], settings: Settings) -> None:
    data = _load_raw(filename)
    data["settings"] = settings.to_dict()
    _write_raw(filename, data)


def load_fleet(filename: Union[str, Path]) -> Fleet:
    """Load every collection and the settings from a fleet file."""
    data = _load_raw(filename)
    return Fleet(
        vehicles=[_parse_vehicle(r) for r in data[VEHICLES]],
        drivers=[_parse_driver(r) for r in data[DRIVERS]],
        maintenance=[_parse_order(r) for r in data[MAINTENANCE_RECORDS]],
        fuel_records=[_parse_fuel(r) for r in data[FUEL_RECORDS]],
        settings=Settings.from_dict(data.get("settings")),
    )


def list_records(
    filename: Union[str, Path],
    collection: str,
    order_by: Optional[str] = None,
    descending: bool = False,
) -> List[Record]:
    """
    List all records of a collection.

    Args:
        order_by: Column to sort on (e.g. "date", "name", "created_at").
            Rows missing the column sort last. Unsorted keeps file order.
        descending: Reverse the sort order.
    """
    parse, _ = _codec(collection)
    rows = _load_raw(filename)[collection]
    if order_by:
        present = [r for r in rows if r.get(order_by) is not None]
        absent = [r for r in rows if r.get(order_by) is None]
        present.sort(key=lambda r: _sort_value(r[order_by]), reverse=descending)
        rows = present + absent
    return [parse(r) for r in rows]


def insert_records(
    filename: Union[str, Path], collection: str, records: Sequence[Record]
) -> List[Record]:
    """
    Insert one or many records in a single write.

    Every record gets a new id. Either the whole batch is stored or, if the
    write fails, none of it. The given records are not modified; the stored
    copies are returned.
    """
    parse, to_dict = _codec(collection)
    if not records:
        return []

    data = _load_raw(filename)
    rows = [_new_row(to_dict, r) for r in records]
    data[collection].extend(rows)
    _write_raw(filename, data)

    logger.info("Inserted %d record(s) into %s", len(rows), collection)
    return [parse(r) for r in rows]


def update_record(
    filename: Union[str, Path], collection: str, record_id: str, record: Record
) -> bool:
    """Replace the fields of the record with the given id. False if not found."""
    _, to_dict = _codec(collection)
    data = _load_raw(filename)
    for row in data[collection]:
        if _id(row.get("id")) == record_id:
            fields = to_dict(record)
            for key in list(row):
                if key not in fields and key not in ("id", "created_at"):
                    del row[key]
            row.update(fields)
            _write_raw(filename, data)
            logger.info("Updated %s/%s", collection, record_id)
            return True
    logger.debug("No %s record with id %s to update", collection, record_id)
    return False


def delete_record(filename: Union[str, Path], collection: str, record_id: str) -> bool:
    """Remove the record with the given id. False if not found."""
    _codec(collection)
    data = _load_raw(filename)
    rows = data[collection]
    for index, row in enumerate(rows):
        if _id(row.get("id")) == record_id:
            del rows[index]
            _write_raw(filename, data)
            logger.info("Deleted %s/%s", collection, record_id)
            return True
    logger.debug("No %s record with id %s to delete", collection, record_id)
    return False


def add_fuel_record(filename: Union[str, Path], record: FuelRecord) -> FuelRecord:
    """
    Store a fuel record and raise the vehicle's mileage to its odometer.

    Both changes are written together.
    """
    data = _load_raw(filename)
    row = _new_row(_fuel_to_dict, record)
    data[FUEL_RECORDS].append(row)

    for vehicle in data[VEHICLES]:
        if _id(vehicle.get("id")) == record.vehicle_id:
            if record.odometer > float(vehicle.get("mileage") or 0):
                vehicle["mileage"] = record.odometer
            break
    else:
        logger.debug("Fuel record for unknown vehicle %s", record.vehicle_id)

    _write_raw(filename, data)
    logger.info("Inserted fuel record %s", row["id"])
    return _parse_fuel(row)
