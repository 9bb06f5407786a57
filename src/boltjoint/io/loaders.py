"""
Typed models and JSON input/output for bolted joint calculations.

Models use engineering symbols as JSON keys (sigmaB, As, Kb, ...) through
Pydantic aliases, and descriptive snake_case attribute names with units in
Python. Either spelling is accepted on input.

Non-finite floats (inf, nan) are accepted everywhere: degenerate joints
produce them and they must survive a round trip through the models.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..enums import Danger

logger = logging.getLogger(__name__)


class UndefinedValueError(ValueError):
    """Raised when a sentinel (user-defined) value is used before it is supplied."""


def _empty_to_none(v):
    # Form inputs arrive as "" when left blank
    if isinstance(v, str) and v.strip() == "":
        return None
    return v


def _number_or_none(v):
    """Float value of v, or None when v is blank or not a number."""
    v = _empty_to_none(v)
    if v is None:
        return None
    try:
        return float(v)
    except (TypeError, ValueError, OverflowError):
        return None


# ============================================================================
# Catalog entries
# ============================================================================

class ThreadSpec(BaseModel):
    """Thread geometry with computed stress area.

    The "Custom" catalog entry has every field set to None: no geometry is
    known until the user supplies it. Use require_stress_area() to unwrap.
    Values that cannot be read as numbers are stored as None.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    major_diameter_mm: Optional[float] = Field(default=None, alias="D")  # Display only
    diameter_mm: Optional[float] = Field(default=None, alias="d")  # Stress area basis
    pitch_mm: Optional[float] = Field(default=None, alias="P")
    stress_area_mm2: Optional[float] = Field(default=None, alias="As")

    @field_validator(
        'major_diameter_mm', 'diameter_mm', 'pitch_mm', 'stress_area_mm2', mode='before'
    )
    @classmethod
    def lenient_number(cls, v):
        return _number_or_none(v)

    @property
    def is_custom(self) -> bool:
        return (
            self.major_diameter_mm is None
            and self.diameter_mm is None
            and self.pitch_mm is None
            and self.stress_area_mm2 is None
        )

    def require_stress_area(self) -> float:
        """Return the stress area, or raise if this is an undefined (custom) thread."""
        if self.stress_area_mm2 is None:
            raise UndefinedValueError(
                "Thread stress area is undefined - supply As for a custom thread"
            )
        return self.stress_area_mm2


class MaterialSpec(BaseModel):
    """Bolt material: tensile strength, description and display colour.

    Values are stored as given and unknown keys are kept, so catalogs are
    copied unchanged. Dump with exclude_unset=True to get the original keys back.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='allow')

    sigma_b_mpa: Any = Field(default=None, alias="sigmaB")
    description: Any = ""
    color: Any = None

    @property
    def is_custom(self) -> bool:
        return _empty_to_none(self.sigma_b_mpa) is None

    def require_strength(self) -> float:
        """Return the tensile strength, or raise if undefined (custom material).

        Raises:
            UndefinedValueError: If sigmaB is missing or blank
            ValueError: If sigmaB is not a number
        """
        if self.is_custom:
            raise UndefinedValueError(
                "Material tensile strength is undefined - supply sigmaB for a custom material"
            )
        try:
            return float(self.sigma_b_mpa)
        except (TypeError, ValueError):
            raise ValueError(f"Material tensile strength is not a number: {self.sigma_b_mpa!r}")


# ============================================================================
# Joint calculation
# ============================================================================

class JointInput(BaseModel):
    """Inputs to a joint force calculation.

    Units: sigmaB [MPa], As [mm²], Kb/Kc [kN/mm], preloadPercent [%],
    externalForce [kN]. No range checks are applied here; see
    calculator.validation for an advisory review.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    sigma_b_mpa: float = Field(alias="sigmaB")
    stress_area_mm2: float = Field(alias="As")
    kb_kn_per_mm: float = Field(alias="Kb")  # Bolt axial stiffness
    kc_kn_per_mm: float = Field(alias="Kc")  # Clamped parts axial stiffness
    preload_percent: float = Field(alias="preloadPercent")
    external_force_kn: float = Field(alias="externalForce")


class JointResult(BaseModel):
    """All quantities derived from one JointInput.

    Fields depending on a zero divisor hold inf or nan rather than failing.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    breaking_load_kn: float = Field(alias="breakingLoad")
    preload_kn: float = Field(alias="W0")
    load_factor: float = Field(alias="phi")
    bolt_force_increase_kn: float = Field(alias="deltaWb")
    clamp_force_decrease_kn: float = Field(alias="deltaWc")
    bolt_force_kn: float = Field(alias="Wb")  # Final bolt tension
    clamp_force_kn: float = Field(alias="Wc")  # Residual clamp force
    bolt_elongation_mm: float = Field(alias="deltaBolt0")
    clamp_compression_mm: float = Field(alias="deltaClamp0")
    additional_deformation_mm: float = Field(alias="deltaDelta")
    loosening_danger: bool = Field(alias="looseningDanger")
    breakage_danger: bool = Field(alias="breakageDanger")
    loosening_force_kn: float = Field(alias="looseningForce")
    breakage_force_kn: float = Field(alias="breakageForce")

    @property
    def dangers(self) -> List[Danger]:
        found = []
        if self.loosening_danger:
            found.append(Danger.LOOSENING)
        if self.breakage_danger:
            found.append(Danger.BREAKAGE)
        return found

    @property
    def is_safe(self) -> bool:
        return not (self.loosening_danger or self.breakage_danger)

    def non_finite_fields(self) -> List[str]:
        """JSON names of numeric fields holding inf or nan."""
        names = []
        for name, info in type(self).model_fields.items():
            value = getattr(self, name)
            if isinstance(value, bool):
                continue
            if not math.isfinite(value):
                names.append(info.alias or name)
        return names


# ============================================================================
# Config file
# ============================================================================

class CatalogConfig(BaseModel):
    """Thread and material tables as stored in a JSON config file."""
    model_config = ConfigDict(extra='ignore')

    schema_version: str = "1.0"
    threads: Dict[str, ThreadSpec] = Field(default_factory=dict)
    materials: Dict[str, MaterialSpec] = Field(default_factory=dict)


def load_config_json(filepath: Union[str, Path]) -> CatalogConfig:
    """
    Load thread and material tables from a JSON config file.

    Args:
        filepath: Path to JSON file with "threads" and/or "materials" sections

    Returns:
        CatalogConfig with raw (unbuilt) tables, in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file fails structural schema checks
        ValidationError: If an entry has fields of the wrong type
    """
    from .schema import validate_config_schema

    filepath = Path(filepath)

    if not filepath.is_file():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, 'r') as f:
        data = json.load(f)

    # Check for 'config' wrapper (some exports have this)
    if isinstance(data, dict) and 'config' in data:
        data = data['config']

    report = validate_config_schema(data)
    if not report["valid"]:
        raise ValueError(
            f"Invalid config {filepath}: " + "; ".join(report["errors"])
        )
    for warning in report["warnings"]:
        logger.warning(f"{filepath}: {warning}")

    config = CatalogConfig.model_validate(data)
    logger.debug(
        f"Loaded {len(config.threads)} threads and {len(config.materials)} materials from {filepath}"
    )
    return config


def save_config_json(config: CatalogConfig, filepath: Union[str, Path]) -> None:
    """
    Save thread and material tables to a JSON config file.

    Computed stress areas and "Custom" sentinels are not written: they are
    regenerated when the catalogs are built.
    """
    from ..calculator.constants import CUSTOM_KEY

    filepath = Path(filepath)

    data: Dict[str, Any] = {"schema_version": config.schema_version}
    data["threads"] = {
        name: spec.model_dump(by_alias=True, exclude={'stress_area_mm2'})
        for name, spec in config.threads.items()
        if name != CUSTOM_KEY
    }
    data["materials"] = {
        name: spec.model_dump(by_alias=True, exclude_unset=True)
        for name, spec in config.materials.items()
        if name != CUSTOM_KEY
    }

    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2)


def default_config() -> CatalogConfig:
    """Built-in ISO metric coarse threads and ISO 898-1 property classes."""
    from ..calculator.constants import DEFAULT_THREADS_MM, DEFAULT_MATERIALS

    return CatalogConfig(
        threads={
            name: ThreadSpec(D=D, d=d, P=P)
            for name, (D, d, P) in DEFAULT_THREADS_MM.items()
        },
        materials={
            name: MaterialSpec(sigmaB=sigma_b, description=description, color=color)
            for name, (sigma_b, description, color) in DEFAULT_MATERIALS.items()
        },
    )


def load_catalogs(
    filepath: Optional[Union[str, Path]] = None
) -> Tuple[Dict[str, ThreadSpec], Dict[str, MaterialSpec]]:
    """
    Build thread and material catalogs ready for selection.

    Args:
        filepath: Optional JSON config file. Built-in tables are used if None.

    Returns:
        (threads, materials), each ending with a "Custom" entry
    """
    from ..calculator.core import build_thread_catalog, build_material_catalog

    config = load_config_json(filepath) if filepath is not None else default_config()
    return (
        build_thread_catalog(config.threads),
        build_material_catalog(config.materials),
    )
