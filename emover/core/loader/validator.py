import json
from typing import Any, Dict, List
import jsonschema
from jsonschema import ValidationError as JsonSchemaValidationError
from emover.core.utils.constants import CONFIG_SCHEMA_FILE, SCHEMA_DIR, DEFAULT_ENCODING


class ValidationError(Exception):
    """Raised when the packaged config schema cannot be loaded."""


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load JSON schema file."""
    schema_path = SCHEMA_DIR / schema_name
    try:
        with open(schema_path, 'r', encoding=DEFAULT_ENCODING) as f:
            return json.load(f)
    except FileNotFoundError:
        raise ValidationError(f"Schema file not found: {schema_path}")
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in schema file: {e}")

#user friendly json schema errors
def format_validation_error(error: JsonSchemaValidationError) -> str:
    """Format jsonschema validation error into readable message."""
    field_path = ".".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"

    if error.validator == 'type':
        return f"Invalid type for field '{field_path}': {error.message}"
    elif error.validator == 'additionalProperties':
        return f"Unknown option in '{field_path}': {error.message}"
    elif error.validator in ('minimum', 'maximum'):
        return f"Value out of range for field '{field_path}': {error.message}"
    else:
        return f"Validation error in '{field_path}': {error.message}"


def validate_config_schema(config_data: Any) -> List[str]:
    """Validate config file contents against config.schema.json, returning every error."""
    if not isinstance(config_data, dict):
        return ["Config file must contain a mapping of options"]

    try:
        schema = load_schema(CONFIG_SCHEMA_FILE)
    except ValidationError as e:
        return [str(e)]

    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(config_data), key=lambda e: list(e.absolute_path))
    return [format_validation_error(e) for e in errors]
