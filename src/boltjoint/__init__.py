"""
Boltjoint - Preloaded bolted joint calculator.

Stress area, preload and the force split between bolt and clamped parts
under an external axial load, with separation and fracture checks.

Example:
    >>> from boltjoint import load_catalogs, analyze_joint
    >>>
    >>> threads, materials = load_catalogs()
    >>> result = analyze_joint(
    ...     threads["M16"], materials["8.8"],
    ...     kb=500, kc=1500, preload_percent=75, external_force=10,
    ... )
    >>> result.is_safe
    True

Note: All imports are lazy-loaded for fast startup.
"""

__version__ = "1.0.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"Danger"}

_CALCULATOR = {
    "calculate_stress_area",
    "calculate_joint_forces",
    "build_thread_catalog",
    "build_material_catalog",
    "analyze_joint",
    "validate_joint",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",
}

_IO = {
    "load_catalogs",
    "load_config_json",
    "save_config_json",
    "JointInput",
    "JointResult",
    "ThreadSpec",
    "MaterialSpec",
    "UndefinedValueError",
}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _CALCULATOR:
        if "calculator" not in _modules:
            from . import calculator
            _modules["calculator"] = calculator
        return getattr(_modules["calculator"], name)

    if name in _IO:
        if "io" not in _modules:
            from . import io
            _modules["io"] = io
        return getattr(_modules["io"], name)

    raise AttributeError(f"module 'boltjoint' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "Danger",

    # Calculator (lazy loaded from calculator)
    "calculate_stress_area",
    "calculate_joint_forces",
    "build_thread_catalog",
    "build_material_catalog",
    "analyze_joint",
    "validate_joint",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",

    # IO (lazy loaded from io)
    "load_catalogs",
    "load_config_json",
    "save_config_json",

    # Models (lazy loaded from io)
    "JointInput",
    "JointResult",
    "ThreadSpec",
    "MaterialSpec",
    "UndefinedValueError",
]
