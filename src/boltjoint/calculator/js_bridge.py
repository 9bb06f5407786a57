"""
JavaScript-Python bridge for Pyodide.

Provides a single, clean entry point for all JS->Python calculator calls.
All inputs are validated via Pydantic models before processing.

Usage from JavaScript:
    pyodide.globals.set('input_json', JSON.stringify(inputs));
    const result = await pyodide.runPythonAsync(`
        from boltjoint.calculator.js_bridge import calculate
        calculate(input_json)
    `);
    const output = JSON.parse(result);
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import TypedDict

from ..io import JointInput, MaterialSpec, ThreadSpec, default_config
from .core import (
    build_material_catalog,
    build_thread_catalog,
    calculate_joint_forces,
    calculate_stress_area,
)
from .output import _finite_or_none, _model_to_dict, to_json, to_markdown, to_summary, validation_to_dict
from .validation import validate_joint

logger = logging.getLogger(__name__)

MODES = ("forces", "stress-area", "catalogs")


class ValidationMessageDict(TypedDict, total=False):
    """Type for validation message dictionaries sent to JavaScript."""
    severity: str  # "error", "warning", "info"
    code: str  # e.g., "STIFFNESS_SUM_ZERO"
    message: str
    suggestion: Optional[str]


# ============================================================================
# Input Models (Pydantic validation for JS inputs)
# ============================================================================

class CalculatorInputs(BaseModel):
    """
    All inputs from the calculator UI.

    This is the single source of truth for what JavaScript sends to Python.
    Values typed into the form arrive as "" when left blank; they are None here.
    """
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    # Calculation mode
    mode: str = "forces"  # "forces" | "stress-area" | "catalogs"

    # Catalog selection
    thread: Optional[str] = None  # e.g. "M10", or "Custom"
    material: Optional[str] = None  # e.g. "8.8", or "Custom"

    # Custom thread geometry (used when As is not given directly)
    diameter_mm: Optional[float] = Field(default=None, alias="d")
    pitch_mm: Optional[float] = Field(default=None, alias="P")

    # Joint parameters; explicit sigmaB / As override the selection
    sigma_b_mpa: Optional[float] = Field(default=None, alias="sigmaB")
    stress_area_mm2: Optional[float] = Field(default=None, alias="As")
    kb_kn_per_mm: Optional[float] = Field(default=None, alias="Kb")
    kc_kn_per_mm: Optional[float] = Field(default=None, alias="Kc")
    preload_percent: Optional[float] = Field(default=None, alias="preloadPercent")
    external_force_kn: Optional[float] = Field(default=None, alias="externalForce")

    # Optional tables (defaults to built-in ISO tables)
    threads: Optional[Dict[str, Dict[str, Any]]] = None
    materials: Optional[Dict[str, Dict[str, Any]]] = None

    @field_validator('mode', mode='before')
    @classmethod
    def normalize_mode(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator(
        'thread', 'material', 'diameter_mm', 'pitch_mm', 'sigma_b_mpa', 'stress_area_mm2',
        'kb_kn_per_mm', 'kc_kn_per_mm', 'preload_percent', 'external_force_kn',
        mode='before'
    )
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


# ============================================================================
# Output Models
# ============================================================================

class CalculatorOutput(BaseModel):
    """Output from calculate() - matches what JS expects."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None

    # Forces mode: result keyed by engineering symbol, non-finite as null
    result: Optional[Dict[str, Any]] = None
    result_json: Optional[str] = None

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[ValidationMessageDict] = Field(default_factory=list)

    # Stress-area mode
    stress_area_mm2: Optional[float] = None

    # Catalogs mode
    threads: Optional[Dict[str, Dict[str, Any]]] = None
    materials: Optional[Dict[str, Dict[str, Any]]] = None


# ============================================================================
# Main Entry Point
# ============================================================================

def calculate(input_json: str) -> str:
    """
    Single entry point for all calculator operations from JavaScript.

    Args:
        input_json: JSON string with CalculatorInputs structure

    Returns:
        JSON string with CalculatorOutput structure
    """
    try:
        data = json.loads(input_json)
        inputs = CalculatorInputs.model_validate(data)

        if inputs.mode == "stress-area":
            output = _stress_area(inputs)
        elif inputs.mode == "catalogs":
            output = _catalogs(inputs)
        elif inputs.mode == "forces":
            output = _forces(inputs)
        else:
            raise ValueError(f"Unknown mode: {inputs.mode} (expected one of {', '.join(MODES)})")

        return output.model_dump_json()

    except json.JSONDecodeError as e:
        return CalculatorOutput(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except Exception as e:
        logger.debug(f"Calculation failed: {e}")
        return CalculatorOutput(
            success=False,
            error=str(e)
        ).model_dump_json()


def _build_catalogs(inputs: CalculatorInputs) -> Tuple[Dict[str, ThreadSpec], Dict[str, MaterialSpec]]:
    """Build catalogs from supplied tables, falling back to the built-in ones."""
    defaults = default_config()
    threads = inputs.threads if inputs.threads is not None else defaults.threads
    materials = inputs.materials if inputs.materials is not None else defaults.materials
    return build_thread_catalog(threads), build_material_catalog(materials)


def _stress_area(inputs: CalculatorInputs) -> CalculatorOutput:
    if inputs.diameter_mm is None or inputs.pitch_mm is None:
        raise ValueError("d and P are required for stress-area mode")
    stress_area = calculate_stress_area(inputs.diameter_mm, inputs.pitch_mm)
    return CalculatorOutput(success=True, stress_area_mm2=_finite_or_none(stress_area))


def _catalogs(inputs: CalculatorInputs) -> CalculatorOutput:
    threads, materials = _build_catalogs(inputs)
    return CalculatorOutput(
        success=True,
        threads={name: _model_to_dict(spec) for name, spec in threads.items()},
        materials={name: _model_to_dict(spec, exclude_unset=True) for name, spec in materials.items()},
    )


def _resolve_stress_area(inputs: CalculatorInputs, threads: Dict[str, ThreadSpec]) -> float:
    """Explicit As, then custom d/P, then the selected catalog thread."""
    if inputs.stress_area_mm2 is not None:
        return inputs.stress_area_mm2
    if inputs.diameter_mm is not None and inputs.pitch_mm is not None:
        return calculate_stress_area(inputs.diameter_mm, inputs.pitch_mm)
    if inputs.thread is None:
        raise ValueError("Select a thread or enter As (or d and P)")
    if inputs.thread not in threads:
        raise ValueError(f"Unknown thread: {inputs.thread}")
    return threads[inputs.thread].require_stress_area()


def _resolve_strength(inputs: CalculatorInputs, materials: Dict[str, MaterialSpec]) -> float:
    """Explicit sigmaB, then the selected catalog material."""
    if inputs.sigma_b_mpa is not None:
        return inputs.sigma_b_mpa
    if inputs.material is None:
        raise ValueError("Select a material or enter sigmaB")
    if inputs.material not in materials:
        raise ValueError(f"Unknown material: {inputs.material}")
    return materials[inputs.material].require_strength()


def _forces(inputs: CalculatorInputs) -> CalculatorOutput:
    required = {
        "Kb": inputs.kb_kn_per_mm,
        "Kc": inputs.kc_kn_per_mm,
        "preloadPercent": inputs.preload_percent,
        "externalForce": inputs.external_force_kn,
    }
    missing = [name for name, value in required.items() if value is None]
    if missing:
        raise ValueError(f"{', '.join(missing)} required for forces mode")

    threads, materials = _build_catalogs(inputs)

    joint = JointInput(
        sigma_b_mpa=_resolve_strength(inputs, materials),
        stress_area_mm2=_resolve_stress_area(inputs, threads),
        kb_kn_per_mm=inputs.kb_kn_per_mm,
        kc_kn_per_mm=inputs.kc_kn_per_mm,
        preload_percent=inputs.preload_percent,
        external_force_kn=inputs.external_force_kn,
    )
    result = calculate_joint_forces(joint)
    validation = validate_joint(joint, result)

    return CalculatorOutput(
        success=True,
        result=_model_to_dict(result),
        result_json=to_json(result, joint_input=joint, validation=validation),
        summary=to_summary(result),
        markdown=to_markdown(result, joint_input=joint, validation=validation),
        valid=validation.valid,
        messages=validation_to_dict(validation)["messages"],
    )
