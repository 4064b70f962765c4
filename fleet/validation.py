"""Validate fleet YAML files against the schema."""
from datetime import date
from pathlib import Path
from typing import Any, List, Union

import yaml
from jsonschema import validate, ValidationError as SchemaError

from .errors import FleetError
from .loader import parse_fleet


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def _dates_to_text(value: Any) -> Any:
    """Unquoted YAML dates load as date objects; the schema expects strings."""
    if isinstance(value, dict):
        return {k: _dates_to_text(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_dates_to_text(v) for v in value]
    if isinstance(value, date):
        return value.isoformat()
    return value


def validate_fleet_file(filepath: Union[str, Path], schema: dict) -> List[str]:
    """Validate a single fleet YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = _dates_to_text(yaml.safe_load(f) or {})
        validate(instance=data, schema=schema)
        errors.extend(parse_fleet(data).validate_references())
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except SchemaError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except (OSError, FleetError) as e:
        errors.append(f"Error: {e}")
    return errors
