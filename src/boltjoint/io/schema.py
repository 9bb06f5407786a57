"""
JSON schema definition and validation for catalog config files.

A config file supplies the thread and material tables that the catalog
builders turn into selectable catalogs:

    {
        "schema_version": "1.0",
        "threads":   {"M10": {"D": 10, "d": 8.16, "P": 1.5}, ...},
        "materials": {"8.8": {"sigmaB": 800, "description": "...", "color": "#3b82f6"}, ...}
    }

These are structural checks that run before Pydantic parsing so that
problems are reported per entry rather than as one validation error.
"""

from numbers import Real
from typing import Any, Dict, List

SCHEMA_VERSION = "1.0"

THREAD_FIELDS = ("D", "d", "P")
MATERIAL_FIELDS = ("sigmaB", "description", "color")


def get_schema_v1() -> Dict:
    """
    Get JSON schema version 1.0 for catalog config files.
    """
    return {
        "schema_version": "1.0",
        "required_sections": [],
        "optional_sections": [
            "threads",
            "materials"
        ],
        "thread_fields": {
            "required": ["d", "P"],
            "optional": ["D"]  # Nominal diameter, display only
        },
        "material_fields": {
            "required": ["sigmaB"],
            "optional": ["description", "color"]
        }
    }


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def detect_schema_version(data: Dict) -> str:
    """
    Detect schema version from config data.

    Only version 1.0 exists; files without an explicit version are treated as 1.0.
    """
    explicit_version = data.get('schema_version')
    if explicit_version:
        return str(explicit_version)
    return "1.0"


def validate_config_schema(data: Dict) -> Dict[str, Any]:
    """
    Validate config data against the catalog schema.

    Missing geometry or strength is a warning, not an error: the catalog
    builders accept incomplete entries and propagate undefined values.

    Args:
        data: Parsed JSON data

    Returns:
        {
            "valid": bool,
            "errors": List[str],
            "warnings": List[str],
            "schema_version": str
        }

    Example:
        >>> result = validate_config_schema({"threads": {"M10": {"d": 8.16, "P": 1.5}}})
        >>> result["valid"]
        True
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(data, dict):
        return {
            "valid": False,
            "errors": ["Config must be a JSON object"],
            "warnings": [],
            "schema_version": "unknown"
        }

    schema_version = detect_schema_version(data)
    if "schema_version" not in data:
        warnings.append("Missing 'schema_version' field (assuming 1.0)")
    elif schema_version != SCHEMA_VERSION:
        warnings.append(f"Schema version {schema_version} != current {SCHEMA_VERSION}")

    if "threads" not in data and "materials" not in data:
        warnings.append("Config has neither 'threads' nor 'materials' section")

    schema = get_schema_v1()
    sections = (
        ("threads", THREAD_FIELDS, schema["thread_fields"]["required"]),
        ("materials", MATERIAL_FIELDS, schema["material_fields"]["required"]),
    )
    for section, fields, required in sections:
        if section not in data:
            continue
        table = data[section]
        if not isinstance(table, dict):
            errors.append(f"Section '{section}' must be an object mapping names to entries")
            continue

        for name, entry in table.items():
            if not isinstance(entry, dict):
                errors.append(f"{section}.{name} must be an object")
                continue
            for field in required:
                if entry.get(field) is None:
                    warnings.append(f"{section}.{name} has no '{field}' (value will be undefined)")
            for field in fields:
                value = entry.get(field)
                if value is None:
                    continue
                if field in ("description", "color"):
                    if not isinstance(value, str):
                        errors.append(f"{section}.{name}.{field} must be a string")
                elif not _is_number(value):
                    errors.append(
                        f"{section}.{name}.{field} must be a number, got {type(value).__name__}"
                    )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "schema_version": schema_version
    }
