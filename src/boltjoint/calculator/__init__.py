"""
Bolted Joint Calculator - Engineering calculations for preloaded bolted joints.

This module provides calculator functions for axially loaded bolted joints.
Joint calculations return JointResult models for type safety.

Example:
    >>> from boltjoint.calculator import calculate_stress_area, calculate_joint_forces
    >>>
    >>> As = calculate_stress_area(16, 2)
    >>> result = calculate_joint_forces(
    ...     sigmaB=800, As=As, Kb=500, Kc=1500, preloadPercent=75, externalForce=10
    ... )
    >>> result.load_factor
    0.25
"""

from .core import (
    # Calculation functions
    calculate_stress_area,
    calculate_joint_forces,

    # Catalog builders
    build_thread_catalog,
    build_material_catalog,

    # Catalog selection to result
    analyze_joint,
)

from .constants import (
    CUSTOM_KEY,
    CUSTOM_MATERIAL_COLOR,
    CUSTOM_MATERIAL_DESCRIPTION,
    DEFAULT_THREADS_MM,
    DEFAULT_MATERIALS,
)

from .validation import (
    validate_joint,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from ..enums import Danger

from .output import (
    # Output formatters
    format_value,
    to_json,
    to_markdown,
    to_summary,
)

# Convenience imports
from ..io import JointInput, JointResult, ThreadSpec, MaterialSpec, UndefinedValueError


__all__ = [
    # Constants
    "CUSTOM_KEY",
    "CUSTOM_MATERIAL_COLOR",
    "CUSTOM_MATERIAL_DESCRIPTION",
    "DEFAULT_THREADS_MM",
    "DEFAULT_MATERIALS",

    # Enums
    "Danger",

    # Models
    "JointInput",
    "JointResult",
    "ThreadSpec",
    "MaterialSpec",
    "UndefinedValueError",

    # Calculation functions
    "calculate_stress_area",
    "calculate_joint_forces",
    "build_thread_catalog",
    "build_material_catalog",
    "analyze_joint",

    # Validation
    "validate_joint",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Output formatters
    "format_value",
    "to_json",
    "to_markdown",
    "to_summary",
]
