"""
Bolted Joint Calculator - Core Calculations

Pure mathematical functions for an axially loaded, preloaded bolted joint.
Returns typed JointResult / ThreadSpec / MaterialSpec models.

Model: linear spring joint. The bolt (stiffness Kb) and the clamped parts
(stiffness Kc) share an external axial force in proportion to stiffness.

Reference standards:
- ISO 898-1 (tensile stress area, property classes)
- VDI 2230 (load factor, joint diagram)
"""

import logging
import math
from typing import Any, Dict, Mapping, Optional, Union

from ..io import (
    JointInput,
    JointResult,
    MaterialSpec,
    ThreadSpec,
)
from .constants import (
    CUSTOM_KEY,
    CUSTOM_MATERIAL_COLOR,
    CUSTOM_MATERIAL_DESCRIPTION,
    NEWTONS_PER_KILONEWTON,
    PERCENT,
    STRESS_AREA_COEFFICIENT,
    STRESS_AREA_PITCH_FACTOR,
)

logger = logging.getLogger(__name__)

JointInputLike = Union[JointInput, Mapping[str, Any]]


def _divide(numerator: float, denominator: float) -> float:
    """IEEE-754 division: a zero divisor gives ±inf or nan instead of raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _number_or_nan(value: Optional[float]) -> float:
    return math.nan if value is None else float(value)


def calculate_stress_area(d: float, P: float) -> float:
    """
    Calculate tensile stress area of a threaded fastener.

    Formula: As = 0.7854 × (d - 0.9382 × P)²

    No range checks: zero or negative inputs are evaluated as given.

    Args:
        d: Diameter basis (mm)
        P: Thread pitch (mm)

    Returns:
        Stress area (mm²)
    """
    reduced = d - STRESS_AREA_PITCH_FACTOR * P
    # r * r rather than r ** 2: overflow gives inf instead of OverflowError
    return STRESS_AREA_COEFFICIENT * (reduced * reduced)


def calculate_joint_forces(
    joint: Optional[JointInputLike] = None,
    **kwargs: float
) -> JointResult:
    """
    Calculate forces, deformations and risk thresholds of a preloaded joint.

    Accepts a JointInput, a mapping using either JSON keys (sigmaB, As, Kb,
    Kc, preloadPercent, externalForce) or attribute names, or the same
    names as keyword arguments.

    Steps:
        breakingLoad = σB × As / 1000                     [kN]
        W0           = breakingLoad × preload% / 100      initial preload
        φ            = Kb / (Kb + Kc)                     load factor
        ΔWb = F × φ,  ΔWc = F × (1 - φ)
        Wb  = W0 + ΔWb,  Wc = W0 - ΔWc                    final forces
        δb0 = W0 / Kb,  δc0 = W0 / Kc                     preload deformations
        Δδ  = F / (Kb + Kc)                               additional deformation
        loosening when Wc <= 0, breakage when Wb >= breakingLoad
        F_loosening = W0 / (1 - φ)
        F_breakage  = (breakingLoad - W0) / φ

    A zero divisor yields inf or nan in the fields that depend on it; every
    other field is still computed.

    Returns:
        JointResult with all 14 quantities
    """
    if joint is None:
        joint = JointInput.model_validate(kwargs)
    elif not isinstance(joint, JointInput):
        joint = JointInput.model_validate(dict(joint, **kwargs))
    elif kwargs:
        raise TypeError("Pass either a JointInput or keyword arguments, not both")

    sigma_b = joint.sigma_b_mpa
    stress_area = joint.stress_area_mm2
    kb = joint.kb_kn_per_mm
    kc = joint.kc_kn_per_mm
    external_force = joint.external_force_kn

    # Breaking load: σB × As, N to kN
    breaking_load = sigma_b * stress_area / NEWTONS_PER_KILONEWTON

    # Initial preload
    preload = breaking_load * joint.preload_percent / PERCENT

    # Load factor: share of the external force taken by the bolt
    phi = _divide(kb, kb + kc)

    bolt_force_increase = external_force * phi
    clamp_force_decrease = external_force * (1 - phi)

    bolt_force = preload + bolt_force_increase
    clamp_force = preload - clamp_force_decrease

    bolt_elongation = _divide(preload, kb)
    clamp_compression = _divide(preload, kc)
    additional_deformation = _divide(external_force, kb + kc)

    # Comparisons with nan are False, so undefined forces raise no flag
    loosening_danger = clamp_force <= 0
    breakage_danger = bolt_force >= breaking_load

    # External force at which Wc reaches 0 / Wb reaches breaking load
    loosening_force = _divide(preload, 1 - phi)
    breakage_force = _divide(breaking_load - preload, phi)

    result = JointResult(
        breaking_load_kn=breaking_load,
        preload_kn=preload,
        load_factor=phi,
        bolt_force_increase_kn=bolt_force_increase,
        clamp_force_decrease_kn=clamp_force_decrease,
        bolt_force_kn=bolt_force,
        clamp_force_kn=clamp_force,
        bolt_elongation_mm=bolt_elongation,
        clamp_compression_mm=clamp_compression,
        additional_deformation_mm=additional_deformation,
        loosening_danger=loosening_danger,
        breakage_danger=breakage_danger,
        loosening_force_kn=loosening_force,
        breakage_force_kn=breakage_force,
    )

    logger.debug(
        f"Joint: breaking={breaking_load:.3f} kN W0={preload:.3f} kN phi={phi:.4f} "
        f"Wb={bolt_force:.3f} kN Wc={clamp_force:.3f} kN"
    )
    non_finite = result.non_finite_fields()
    if non_finite:
        logger.warning(f"Degenerate joint input, non-finite results: {', '.join(non_finite)}")

    return result


def build_thread_catalog(entries: Mapping[str, Any]) -> Dict[str, ThreadSpec]:
    """
    Build a thread catalog with computed stress areas.

    Input order is preserved. A "Custom" entry with every field undefined is
    always appended last, replacing any "Custom" entry in the input.
    Missing or non-numeric d or P gives an undefined geometry value and a
    nan stress area. Nothing is validated and nothing raises.

    Args:
        entries: Mapping of name to {D, d, P} (dict or ThreadSpec)

    Returns:
        Dict of name to ThreadSpec
    """
    catalog: Dict[str, ThreadSpec] = {}
    for name, entry in entries.items():
        if name == CUSTOM_KEY:
            continue
        spec = entry if isinstance(entry, ThreadSpec) else ThreadSpec.model_validate(entry)
        catalog[name] = ThreadSpec(
            D=spec.major_diameter_mm,
            d=spec.diameter_mm,
            P=spec.pitch_mm,
            As=calculate_stress_area(
                _number_or_nan(spec.diameter_mm),
                _number_or_nan(spec.pitch_mm),
            ),
        )
    catalog[CUSTOM_KEY] = ThreadSpec()

    logger.debug(f"Built thread catalog with {len(catalog) - 1} entries")
    return catalog


def build_material_catalog(entries: Mapping[str, Any]) -> Dict[str, MaterialSpec]:
    """
    Build a material catalog.

    Entries are copied unchanged, in order. A "Custom" entry (undefined
    strength, "User defined", #64748b) is always appended last, replacing
    any "Custom" entry in the input.

    Args:
        entries: Mapping of name to {sigmaB, description, color} (dict or MaterialSpec)

    Returns:
        Dict of name to MaterialSpec
    """
    catalog: Dict[str, MaterialSpec] = {}
    for name, entry in entries.items():
        if name == CUSTOM_KEY:
            continue
        catalog[name] = entry if isinstance(entry, MaterialSpec) else MaterialSpec.model_validate(entry)
    catalog[CUSTOM_KEY] = MaterialSpec(
        sigmaB=None,
        description=CUSTOM_MATERIAL_DESCRIPTION,
        color=CUSTOM_MATERIAL_COLOR,
    )

    logger.debug(f"Built material catalog with {len(catalog) - 1} entries")
    return catalog


def analyze_joint(
    thread: Optional[ThreadSpec],
    material: Optional[MaterialSpec],
    kb: float,
    kc: float,
    preload_percent: float,
    external_force: float,
    *,
    stress_area: Optional[float] = None,
    sigma_b: Optional[float] = None,
) -> JointResult:
    """
    Calculate a joint from catalog selections.

    Explicit stress_area / sigma_b override the selected specs, which is how a
    "Custom" thread or material gets its values.

    Args:
        thread: Selected thread spec (may be the Custom sentinel or None)
        material: Selected material spec (may be the Custom sentinel or None)
        kb: Bolt stiffness (kN/mm)
        kc: Clamped parts stiffness (kN/mm)
        preload_percent: Preload as % of breaking load
        external_force: External axial force (kN)
        stress_area: Override for As (mm²)
        sigma_b: Override for σB (MPa)

    Raises:
        UndefinedValueError: If a value is undefined and no override was given
    """
    if stress_area is None:
        stress_area = (thread or ThreadSpec()).require_stress_area()
    if sigma_b is None:
        sigma_b = (material or MaterialSpec()).require_strength()

    return calculate_joint_forces(
        sigma_b_mpa=sigma_b,
        stress_area_mm2=stress_area,
        kb_kn_per_mm=kb,
        kc_kn_per_mm=kc,
        preload_percent=preload_percent,
        external_force_kn=external_force,
    )
