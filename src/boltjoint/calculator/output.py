"""Output formatters for bolted joint results.

Converts typed JointResult models to JSON, Markdown and plain text.
Non-finite values (from degenerate input) are written as null in JSON
and as "N/A" in text.
"""

import json
import math
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..io import JointInput, JointResult
from ..io.schema import SCHEMA_VERSION

if TYPE_CHECKING:
    from .validation import ValidationResult

NOT_AVAILABLE = "N/A"


def format_value(value: Optional[float], digits: int = 2, unit: str = "") -> str:
    """Format a number for display, "N/A" for None, inf or nan."""
    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE
    text = f"{value:.{digits}f}"
    return f"{text} {unit}" if unit else text


def _finite_or_none(data: Any) -> Any:
    """Replace non-finite floats with None, recursively."""
    if isinstance(data, dict):
        return {k: _finite_or_none(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_finite_or_none(v) for v in data]
    if isinstance(data, float) and not math.isfinite(data):
        return None
    return data


def _model_to_dict(model, exclude_unset: bool = False) -> dict:
    """Convert Pydantic model to a dict keyed by engineering symbols."""
    return _finite_or_none(model.model_dump(by_alias=True, exclude_unset=exclude_unset))


def validation_to_dict(validation: "ValidationResult") -> Dict[str, Any]:
    return {
        "valid": validation.valid,
        "messages": [
            {
                "severity": m.severity.value,
                "code": m.code,
                "message": m.message,
                "suggestion": m.suggestion,
            }
            for m in validation.messages
        ],
    }


def to_json(
    result: JointResult,
    joint_input: Optional[JointInput] = None,
    validation: Optional["ValidationResult"] = None,
    indent: int = 2
) -> str:
    """Convert JointResult to JSON string.

    Args:
        result: JointResult from calculate_joint_forces()
        joint_input: Optional inputs to include for traceability
        validation: Optional validation results to include in output
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string with schema version, result and optional extras
    """
    data: Dict[str, Any] = {"schema_version": SCHEMA_VERSION}
    if joint_input is not None:
        data["input"] = _model_to_dict(joint_input)
    data["result"] = _model_to_dict(result)
    if validation is not None:
        data["validation"] = validation_to_dict(validation)

    return json.dumps(data, indent=indent, allow_nan=False)


def _danger_text(flag: bool) -> str:
    return "YES" if flag else "No"


def to_markdown(
    result: JointResult,
    joint_input: Optional[JointInput] = None,
    validation: Optional["ValidationResult"] = None
) -> str:
    """Convert JointResult to a Markdown report.

    Args:
        result: JointResult from calculate_joint_forces()
        joint_input: Optional inputs, rendered as an input table
        validation: Optional validation results

    Returns:
        Markdown document
    """
    md = "# Bolted Joint Analysis\n\n"

    if joint_input is not None:
        md += "## Input\n\n"
        md += "| Parameter | Value |\n"
        md += "|-----------|-------|\n"
        md += f"| Tensile strength σB | {format_value(joint_input.sigma_b_mpa, 0, 'MPa')} |\n"
        md += f"| Stress area As | {format_value(joint_input.stress_area_mm2, 1, 'mm²')} |\n"
        md += f"| Bolt stiffness Kb | {format_value(joint_input.kb_kn_per_mm, 1, 'kN/mm')} |\n"
        md += f"| Clamped parts stiffness Kc | {format_value(joint_input.kc_kn_per_mm, 1, 'kN/mm')} |\n"
        md += f"| Preload | {format_value(joint_input.preload_percent, 1, '%')} |\n"
        md += f"| External force F | {format_value(joint_input.external_force_kn, 2, 'kN')} |\n"
        md += "\n"

    md += "## Forces\n\n"
    md += "| Quantity | Value |\n"
    md += "|----------|-------|\n"
    md += f"| Breaking load | {format_value(result.breaking_load_kn, 2, 'kN')} |\n"
    md += f"| Preload W0 | {format_value(result.preload_kn, 2, 'kN')} |\n"
    md += f"| Load factor φ | {format_value(result.load_factor, 4)} |\n"
    md += f"| Bolt force increase ΔWb | {format_value(result.bolt_force_increase_kn, 2, 'kN')} |\n"
    md += f"| Clamp force decrease ΔWc | {format_value(result.clamp_force_decrease_kn, 2, 'kN')} |\n"
    md += f"| Final bolt force Wb | {format_value(result.bolt_force_kn, 2, 'kN')} |\n"
    md += f"| Residual clamp force Wc | {format_value(result.clamp_force_kn, 2, 'kN')} |\n"
    md += "\n"

    md += "## Deformations\n\n"
    md += "| Quantity | Value |\n"
    md += "|----------|-------|\n"
    md += f"| Bolt elongation at preload | {format_value(result.bolt_elongation_mm, 4, 'mm')} |\n"
    md += f"| Clamp compression at preload | {format_value(result.clamp_compression_mm, 4, 'mm')} |\n"
    md += f"| Additional deformation under load | {format_value(result.additional_deformation_mm, 4, 'mm')} |\n"
    md += "\n"

    md += "## Safety\n\n"
    md += f"- **Loosening (joint separation):** {_danger_text(result.loosening_danger)}\n"
    md += f"- **Breakage (bolt fracture):** {_danger_text(result.breakage_danger)}\n"
    md += f"- Critical force for loosening: {format_value(result.loosening_force_kn, 2, 'kN')}\n"
    md += f"- Critical force for breakage: {format_value(result.breakage_force_kn, 2, 'kN')}\n"

    if validation:
        md += "\n## Validation\n\n"

        if validation.valid:
            md += "**Status:** ✅ Inputs are valid\n\n"
        else:
            md += "**Status:** ❌ Inputs have errors\n\n"

        if validation.errors:
            md += "### Errors\n\n"
            for msg in validation.errors:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.warnings:
            md += "### Warnings\n\n"
            for msg in validation.warnings:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.infos:
            md += "### Information\n\n"
            for msg in validation.infos:
                md += f"- {msg.message}\n"
            md += "\n"

    md += "\n## Notes\n\n"
    md += "- Forces in kN, deformations in mm, stresses in MPa\n"
    md += "- Linear joint model: bolt and clamped parts act as springs in parallel under external load\n"
    md += "- N/A marks values that are undefined for the given stiffnesses\n"
    md += "\n"

    md += "---\n"
    md += "*Generated by Boltjoint Calculator*\n"

    return md


def to_summary(result: JointResult) -> str:
    """Convert JointResult to formatted text summary.

    Returns:
        Multi-line formatted summary string
    """
    lines = [
        "═══ Bolted Joint ═══",
        f"Breaking load:      {format_value(result.breaking_load_kn, 2, 'kN')}",
        f"Preload W0:         {format_value(result.preload_kn, 2, 'kN')}",
        f"Load factor φ:      {format_value(result.load_factor, 4)}",
        "",
        "Under external load:",
        f"  Bolt force Wb:    {format_value(result.bolt_force_kn, 2, 'kN')}"
        f"  (+{format_value(result.bolt_force_increase_kn, 2)})",
        f"  Clamp force Wc:   {format_value(result.clamp_force_kn, 2, 'kN')}"
        f"  (-{format_value(result.clamp_force_decrease_kn, 2)})",
        "",
        "Deformation:",
        f"  Bolt elongation:   {format_value(result.bolt_elongation_mm, 4, 'mm')}",
        f"  Clamp compression: {format_value(result.clamp_compression_mm, 4, 'mm')}",
        f"  Additional:        {format_value(result.additional_deformation_mm, 4, 'mm')}",
        "",
        f"Loosening danger: {_danger_text(result.loosening_danger)}"
        f" (at {format_value(result.loosening_force_kn, 2, 'kN')})",
        f"Breakage danger:  {_danger_text(result.breakage_danger)}"
        f" (at {format_value(result.breakage_force_kn, 2, 'kN')})",
    ]

    return "\n".join(lines)
