"""
Bolted Joint Calculator - Input Review

Advisory checks on joint inputs and results. Nothing here blocks a
calculation: calculate_joint_forces() evaluates any input, and degenerate
input shows up as non-finite results. This module explains why.

Accepts both dict inputs (JSON keys or attribute names) and JointInput models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from ..io import JointInput, JointResult
from .constants import PRELOAD_PERCENT_MAX, PRELOAD_PERCENT_MIN


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]


def validate_joint(
    joint: Union[JointInput, Mapping[str, Any]],
    result: Optional[JointResult] = None
) -> ValidationResult:
    """
    Review joint inputs, and optionally the calculated result.

    Args:
        joint: JointInput or mapping of its fields
        result: Optional JointResult from calculate_joint_forces(joint)

    Returns:
        ValidationResult with all findings
    """
    if not isinstance(joint, JointInput):
        joint = JointInput.model_validate(dict(joint))

    messages: List[ValidationMessage] = []

    messages.extend(_validate_stiffness_sum(joint))
    messages.extend(_validate_positive_inputs(joint))
    messages.extend(_validate_preload(joint))
    messages.extend(_validate_external_force(joint))
    if result is not None:
        messages.extend(_validate_result(result))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def _validate_stiffness_sum(joint: JointInput) -> List[ValidationMessage]:
    """Kb + Kc must be non-zero for the load factor to exist"""
    if joint.kb_kn_per_mm + joint.kc_kn_per_mm == 0:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="STIFFNESS_SUM_ZERO",
            message="Bolt and clamped part stiffnesses sum to zero - load factor is undefined",
            suggestion="Enter positive stiffnesses Kb and Kc"
        )]
    return []


def _validate_positive_inputs(joint: JointInput) -> List[ValidationMessage]:
    messages = []
    checks = (
        ("sigmaB", joint.sigma_b_mpa, "MPa"),
        ("As", joint.stress_area_mm2, "mm²"),
        ("Kb", joint.kb_kn_per_mm, "kN/mm"),
        ("Kc", joint.kc_kn_per_mm, "kN/mm"),
    )
    for name, value, unit in checks:
        if not value > 0:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code="NON_POSITIVE_INPUT",
                message=f"{name} = {value} {unit} is not positive - results are not physically meaningful",
                suggestion=f"Use a positive {name}"
            ))
    return messages


def _validate_preload(joint: JointInput) -> List[ValidationMessage]:
    percent = joint.preload_percent
    if not PRELOAD_PERCENT_MIN <= percent <= PRELOAD_PERCENT_MAX:
        return [ValidationMessage(
            severity=Severity.WARNING,
            code="PRELOAD_OUT_OF_RANGE",
            message=f"Preload {percent}% is outside {PRELOAD_PERCENT_MIN:.0f}-{PRELOAD_PERCENT_MAX:.0f}% of breaking load",
            suggestion="Typical preload is 60-80% of breaking load"
        )]
    return []


def _validate_external_force(joint: JointInput) -> List[ValidationMessage]:
    if joint.external_force_kn < 0:
        return [ValidationMessage(
            severity=Severity.INFO,
            code="COMPRESSIVE_EXTERNAL_FORCE",
            message=f"External force {joint.external_force_kn} kN is compressive",
        )]
    return []


def _validate_result(result: JointResult) -> List[ValidationMessage]:
    messages = []

    if result.loosening_danger:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="JOINT_SEPARATION",
            message=f"Residual clamp force {result.clamp_force_kn:.2f} kN - joint separates",
            suggestion=(
                f"Increase preload or keep external force below {result.loosening_force_kn:.2f} kN"
            )
        ))

    if result.breakage_danger:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="BOLT_FRACTURE",
            message=(
                f"Bolt force {result.bolt_force_kn:.2f} kN reaches breaking load "
                f"{result.breaking_load_kn:.2f} kN"
            ),
            suggestion="Use a larger thread or a stronger property class, or reduce preload"
        ))

    non_finite = result.non_finite_fields()
    if non_finite:
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="NON_FINITE_RESULT",
            message=f"Undefined results (division by zero): {', '.join(non_finite)}",
        ))

    return messages
