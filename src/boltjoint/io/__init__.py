"""
Boltjoint IO - typed models, catalog config loading and schema checks.

Example:
    >>> from boltjoint.io import load_catalogs
    >>>
    >>> # Built-in ISO tables
    >>> threads, materials = load_catalogs()
    >>> threads["M10"].stress_area_mm2
    35.81...
    >>>
    >>> # Tables from a config file
    >>> threads, materials = load_catalogs("bolts.json")
"""

from .loaders import (
    UndefinedValueError,
    ThreadSpec,
    MaterialSpec,
    JointInput,
    JointResult,
    CatalogConfig,
    load_config_json,
    save_config_json,
    default_config,
    load_catalogs,
)

from .schema import (
    SCHEMA_VERSION,
    get_schema_v1,
    detect_schema_version,
    validate_config_schema,
)

__all__ = [
    # Models
    "UndefinedValueError",
    "ThreadSpec",
    "MaterialSpec",
    "JointInput",
    "JointResult",
    "CatalogConfig",

    # Loaders
    "load_config_json",
    "save_config_json",
    "default_config",
    "load_catalogs",

    # Schema
    "SCHEMA_VERSION",
    "get_schema_v1",
    "detect_schema_version",
    "validate_config_schema",
]
