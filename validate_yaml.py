#!/usr/bin/env python3
"""Validate fleet YAML files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from fleet import FleetError, parse_local_date


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def check_dates(data: dict) -> list[str]:
    """Dates that match the pattern but are not real days (e.g. 2024-02-30)."""
    errors = []
    for collection in ("maintenance_records", "fuel_records"):
        for index, row in enumerate(data.get(collection) or []):
            try:
                parse_local_date(row["date"])
            except FleetError as e:
                errors.append(f"Date error: {e}")
                errors.append(f"  at path: {collection}.{index}.date")
    return errors


def validate_fleet_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single fleet YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.load(f, Loader=yaml.SafeLoader)
        if data is None:
            data = {}
        _stringify_dates(data)
        validate(instance=data, schema=schema)
        errors.extend(check_dates(data))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except Exception as e:
        errors.append(f"Error: {e}")
    return errors


def _stringify_dates(data: dict) -> None:
    """Unquoted YAML dates load as date objects; the store reads them as text."""
    for collection in ("maintenance_records", "fuel_records"):
        for row in data.get(collection) or []:
            if not isinstance(row, dict) or "date" not in row:
                continue
            if not isinstance(row["date"], str):
                row["date"] = str(row["date"])


def main():
    """Validate all fleet YAML files in the fleets/ directory."""
    schema = load_schema()
    fleets_dir = Path(__file__).parent / "fleets"

    if not fleets_dir.exists():
        print(f"Error: fleets directory not found: {fleets_dir}")
        return 1

    yaml_files = list(fleets_dir.glob("*.yaml")) + list(fleets_dir.glob("*.yml"))

    if not yaml_files:
        print(f"Warning: No YAML files found in {fleets_dir}")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_fleet_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
