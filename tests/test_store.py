#!/usr/bin/env python3
"""Tests for the YAML-backed record store."""
import stat
from datetime import date
from pathlib import Path

import pytest
import yaml

from fleet import (
    DRIVERS,
    FUEL_RECORDS,
    MAINTENANCE_RECORDS,
    VEHICLES,
    Driver,
    Fleet,
    FuelRecord,
    MaintenanceOrder,
    MaintenanceStatus,
    MaintenanceType,
    Periodicity,
    RecurrencePlan,
    Settings,
    UnknownCollection,
    Vehicle,
    VehicleStatus,
    add_fuel_record,
    create_fleet_file,
    delete_record,
    generate_schedule,
    insert_records,
    list_records,
    load_fleet,
    load_settings,
    save_settings,
    update_record,
)
import fleet.store as store

FLEET_YAML = """
settings:
  fleet_name: Test Fleet
  currency: USD
  distance_unit: mi
  notifications_enabled: true
  alert_lookahead_days: 10

vehicles:
  - id: v1
    plate: ABC-1234
    brand: Volvo
    model: FH
    year: 2020
    status: Active
    mileage: 120000
  - id: v2
    plate: XYZ-9876
    status: Retired

drivers:
  - id: d1
    name: Ana Souza
    license_number: "123456"
    license_category: E
    phone: "555-0100"
    status: Active

maintenance_records:
  - id: m1
    vehicle_id: v1
    description: Brake pads
    cost: 480
    date: 2024-06-01
    status: Completed
    type: Corrective
  - id: m2
    vehicle_id: v1
    description: Oil change
    cost: 150
    date: '2024-06-12'
    status: Pending
    type: Preventive

fuel_records:
  - id: f1
    vehicle_id: v1
    driver_id: d1
    date: '2024-06-02'
    odometer: 120000
    liters: 300
    total_cost: 1800
    location:
      latitude: -23.55
      longitude: -46.63
"""


@pytest.fixture
def fleet_file(tmp_path):
    path = tmp_path / "fleet.yaml"
    path.write_text(FLEET_YAML)
    return path


def read_yaml(path):
    with open(path) as fp:
        return yaml.safe_load(fp)


class TestLoadFleet:
    """Tests for load_fleet."""

    def test_loads_all_collections(self, fleet_file):
        fleet = load_fleet(fleet_file)
        assert isinstance(fleet, Fleet)
        assert [v.id for v in fleet.vehicles] == ["v1", "v2"]
        assert [d.name for d in fleet.drivers] == ["Ana Souza"]
        assert [m.id for m in fleet.maintenance] == ["m1", "m2"]
        assert [f.id for f in fleet.fuel_records] == ["f1"]

    def test_parses_vehicle(self, fleet_file):
        vehicle = load_fleet(fleet_file).get_vehicle("v1")
        assert vehicle.plate == "ABC-1234"
        assert vehicle.year == 2020
        assert vehicle.status == VehicleStatus.ACTIVE
        assert vehicle.mileage == 120000

    def test_vehicle_defaults(self, fleet_file):
        vehicle = load_fleet(fleet_file).get_vehicle("v2")
        assert vehicle.brand == ""
        assert vehicle.year is None
        assert vehicle.mileage == 0

    def test_unquoted_dates_load_as_strings(self, fleet_file):
        order = load_fleet(fleet_file).get_order("m1")
        assert order.date == "2024-06-01"
        assert order.status == MaintenanceStatus.COMPLETED
        assert order.type == MaintenanceType.CORRECTIVE

    def test_fuel_location(self, fleet_file):
        record = load_fleet(fleet_file).fuel_records[0]
        assert record.location == (-23.55, -46.63)
        assert record.price_per_liter == 6.0

    def test_settings(self, fleet_file):
        settings = load_fleet(fleet_file).settings
        assert settings.fleet_name == "Test Fleet"
        assert settings.distance_unit == "mi"
        assert settings.alert_lookahead_days == 10

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        fleet = load_fleet(path)
        assert fleet.vehicles == []
        assert fleet.maintenance == []
        assert fleet.settings.notifications_enabled is True


class TestCreateFleetFile:
    """Tests for create_fleet_file."""

    def test_creates_empty_collections(self, tmp_path):
        path = tmp_path / "new.yaml"
        create_fleet_file(path, Settings(fleet_name="North"))
        data = read_yaml(path)
        assert data["settings"]["fleet_name"] == "North"
        for collection in (VEHICLES, DRIVERS, MAINTENANCE_RECORDS, FUEL_RECORDS):
            assert data[collection] == []

    def test_settings_round_trip(self, tmp_path):
        path = tmp_path / "new.yaml"
        create_fleet_file(path)
        save_settings(path, Settings(notifications_enabled=False, alert_lookahead_days=3))
        settings = load_settings(path)
        assert settings.notifications_enabled is False
        assert settings.alert_lookahead_days == 3


class TestListRecords:
    """Tests for list_records."""

    def test_file_order(self, fleet_file):
        orders = list_records(fleet_file, MAINTENANCE_RECORDS)
        assert [o.id for o in orders] == ["m1", "m2"]

    def test_order_by_descending(self, fleet_file):
        orders = list_records(
            fleet_file, MAINTENANCE_RECORDS, order_by="date", descending=True
        )
        assert [o.id for o in orders] == ["m2", "m1"]

    def test_missing_column_sorts_last(self, fleet_file):
        vehicles = list_records(fleet_file, VEHICLES, order_by="brand")
        assert [v.id for v in vehicles] == ["v1", "v2"]

    def test_unknown_collection(self, fleet_file):
        with pytest.raises(UnknownCollection, match="trailers"):
            list_records(fleet_file, "trailers")


class TestInsertRecords:
    """Tests for insert_records."""

    def test_assigns_ids(self, fleet_file):
        draft = MaintenanceOrder("v2", "Battery", "2024-07-01", cost=300)
        saved = insert_records(fleet_file, MAINTENANCE_RECORDS, [draft])
        assert len(saved) == 1
        assert saved[0].id
        assert saved[0].description == "Battery"
        assert draft.id is None

    def test_persists_rows(self, fleet_file):
        draft = MaintenanceOrder("v2", "Battery", "2024-07-01")
        saved = insert_records(fleet_file, MAINTENANCE_RECORDS, [draft])
        data = read_yaml(fleet_file)
        row = data[MAINTENANCE_RECORDS][-1]
        assert row["id"] == saved[0].id
        assert row["vehicle_id"] == "v2"
        assert row["date"] == "2024-07-01"
        assert row["status"] == "Pending"
        assert "created_at" in row

    def test_batch_from_schedule(self, fleet_file):
        plan = RecurrencePlan("v1", "Oil", "2024-01-01", Periodicity.DAYS_90, 4)
        saved = insert_records(fleet_file, MAINTENANCE_RECORDS, generate_schedule(plan))
        assert len(saved) == 4
        assert len({o.id for o in saved}) == 4
        fleet = load_fleet(fleet_file)
        assert len(fleet.maintenance) == 6
        assert [m.date for m in fleet.maintenance[2:]] == [
            "2024-01-01",
            "2024-03-31",
            "2024-06-29",
            "2024-09-27",
        ]

    def test_empty_batch_is_noop(self, fleet_file):
        before = fleet_file.read_text()
        assert insert_records(fleet_file, MAINTENANCE_RECORDS, []) == []
        assert fleet_file.read_text() == before

    def test_failed_write_stores_nothing(self, fleet_file, monkeypatch):
        """A batch that cannot be written leaves the file unchanged."""
        before = fleet_file.read_text()

        def broken_dump(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(store.yaml, "dump", broken_dump)
        plan = RecurrencePlan("v1", "Oil", "2024-01-01", Periodicity.DAYS_90, 4)
        with pytest.raises(OSError):
            insert_records(fleet_file, MAINTENANCE_RECORDS, generate_schedule(plan))

        assert fleet_file.read_text() == before
        leftovers = [p for p in Path(fleet_file.parent).iterdir() if p != fleet_file]
        assert leftovers == []

    def test_insert_vehicle_and_driver(self, fleet_file):
        vehicle = insert_records(fleet_file, VEHICLES, [Vehicle(None, "NEW-0001")])[0]
        driver = insert_records(fleet_file, DRIVERS, [Driver(None, "Bruno")])[0]
        fleet = load_fleet(fleet_file)
        assert fleet.get_vehicle(vehicle.id).plate == "NEW-0001"
        assert fleet.get_driver(driver.id).name == "Bruno"


class TestUpdateRecord:
    """Tests for update_record."""

    def test_updates_fields(self, fleet_file):
        order = load_fleet(fleet_file).get_order("m2")
        order.status = MaintenanceStatus.IN_PROGRESS
        order.cost = 175.5
        assert update_record(fleet_file, MAINTENANCE_RECORDS, "m2", order) is True

        updated = load_fleet(fleet_file).get_order("m2")
        assert updated.status == MaintenanceStatus.IN_PROGRESS
        assert updated.cost == 175.5

    def test_keeps_id(self, fleet_file):
        order = load_fleet(fleet_file).get_order("m2")
        update_record(fleet_file, MAINTENANCE_RECORDS, "m2", order)
        assert read_yaml(fleet_file)[MAINTENANCE_RECORDS][1]["id"] == "m2"

    def test_unknown_id(self, fleet_file):
        order = MaintenanceOrder("v1", "x", "2024-01-01")
        before = fleet_file.read_text()
        assert update_record(fleet_file, MAINTENANCE_RECORDS, "nope", order) is False
        assert fleet_file.read_text() == before


class TestDeleteRecord:
    """Tests for delete_record."""

    def test_deletes(self, fleet_file):
        assert delete_record(fleet_file, DRIVERS, "d1") is True
        assert load_fleet(fleet_file).drivers == []

    def test_unknown_id(self, fleet_file):
        assert delete_record(fleet_file, DRIVERS, "nope") is False

    def test_unknown_collection(self, fleet_file):
        with pytest.raises(UnknownCollection):
            delete_record(fleet_file, "trailers", "x")


class TestAddFuelRecord:
    """Tests for add_fuel_record."""

    def test_raises_vehicle_mileage(self, fleet_file):
        record = FuelRecord(None, "v1", "d1", "2024-06-20", 121500, 280, 1650)
        saved = add_fuel_record(fleet_file, record)
        assert saved.id
        fleet = load_fleet(fleet_file)
        assert fleet.get_vehicle("v1").mileage == 121500
        assert len(fleet.fuel_records) == 2

    def test_lower_odometer_keeps_mileage(self, fleet_file):
        record = FuelRecord(None, "v1", "d1", "2024-05-20", 110000, 280, 1650)
        add_fuel_record(fleet_file, record)
        assert load_fleet(fleet_file).get_vehicle("v1").mileage == 120000

    def test_unknown_vehicle_still_stored(self, fleet_file):
        record = FuelRecord(None, "ghost", None, "2024-05-20", 10, 20, 100)
        add_fuel_record(fleet_file, record)
        assert len(load_fleet(fleet_file).fuel_records) == 2


INTEGER_IDS_YAML = """
vehicles:
  - id: 1
    plate: ABC-1234
    status: Active
    mileage: 1000
maintenance_records:
  - id: 7
    vehicle_id: 1
    description: Oil change
    cost: 150
    date: '2024-06-12'
    status: Pending
    type: Preventive
fuel_records:
  - id: 3
    vehicle_id: 1
    driver_id: 2
    date: '2024-06-02'
    odometer: 1000
    liters: 50
    total_cost: 300
"""


class TestIntegerIds:
    """Ids written as YAML integers are looked up as strings."""

    @pytest.fixture
    def int_file(self, tmp_path):
        path = tmp_path / "fleet.yaml"
        path.write_text(INTEGER_IDS_YAML)
        return path

    def test_ids_load_as_strings(self, int_file):
        fleet = load_fleet(int_file)
        assert fleet.get_vehicle("1").plate == "ABC-1234"
        assert fleet.get_order("7").vehicle_id == "1"
        record = fleet.fuel_records[0]
        assert (record.id, record.vehicle_id, record.driver_id) == ("3", "1", "2")

    def test_alert_finds_plate(self, int_file):
        alerts = load_fleet(int_file).alerts(today=date(2024, 6, 10))
        assert [a.vehicle_plate for a in alerts] == ["ABC-1234"]

    def test_update_and_delete(self, int_file):
        order = load_fleet(int_file).get_order("7")
        order.status = MaintenanceStatus.COMPLETED
        assert update_record(int_file, MAINTENANCE_RECORDS, "7", order) is True
        assert load_fleet(int_file).get_order("7").status == MaintenanceStatus.COMPLETED
        assert delete_record(int_file, MAINTENANCE_RECORDS, "7") is True
        assert load_fleet(int_file).maintenance == []

    def test_fuel_record_raises_mileage(self, int_file):
        add_fuel_record(int_file, FuelRecord(None, "1", None, "2024-06-20", 1800, 40, 240))
        assert load_fleet(int_file).get_vehicle("1").mileage == 1800


class TestFileMode:
    """Writes keep the permissions of the fleet file."""

    def test_mode_preserved(self, fleet_file):
        fleet_file.chmod(0o644)
        insert_records(
            fleet_file, MAINTENANCE_RECORDS, [MaintenanceOrder("v1", "Oil", "2024-07-01")]
        )
        assert stat.S_IMODE(fleet_file.stat().st_mode) == 0o644

    def test_group_writable_preserved(self, fleet_file):
        fleet_file.chmod(0o664)
        delete_record(fleet_file, DRIVERS, "d1")
        assert stat.S_IMODE(fleet_file.stat().st_mode) == 0o664


class TestUpdateDropsClearedFields:
    """Fields cleared on the record are removed from the stored row."""

    def test_cleared_year_removed(self, fleet_file):
        vehicle = load_fleet(fleet_file).get_vehicle("v1")
        vehicle.year = None
        assert update_record(fleet_file, VEHICLES, "v1", vehicle) is True
        row = read_yaml(fleet_file)[VEHICLES][0]
        assert "year" not in row
        assert row["id"] == "v1"
        assert load_fleet(fleet_file).get_vehicle("v1").year is None

    def test_cleared_location_removed(self, fleet_file):
        record = load_fleet(fleet_file).fuel_records[0]
        record.location = None
        update_record(fleet_file, FUEL_RECORDS, "f1", record)
        assert "location" not in read_yaml(fleet_file)[FUEL_RECORDS][0]

    def test_created_at_kept(self, fleet_file):
        saved = insert_records(fleet_file, DRIVERS, [Driver(None, "Bruno")])[0]
        created_at = read_yaml(fleet_file)[DRIVERS][-1]["created_at"]
        saved.phone = "555-0199"
        update_record(fleet_file, DRIVERS, saved.id, saved)
        row = read_yaml(fleet_file)[DRIVERS][-1]
        assert row["created_at"] == created_at
        assert row["phone"] == "555-0199"
