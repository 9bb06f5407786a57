"""
Engineering constants for bolted joint calculations.

This module centralizes all numerical constants and default tables used in the
calculator, validation and catalog modules. Each constant is documented with
its source (ISO standard or engineering convention).

MODIFICATION GUIDELINES:
- Never change ISO constants without updating the standard reference
- The stress area coefficients are kept at their published 4-decimal values
  so results match hand calculations and existing tables
- Always include units in constant names (_MM, _MPA, _KN, _PERCENT)

Constants are grouped by category:
- ISO 898-1: Stress area formula
- Unit convention: mm / MPa / kN
- Catalog sentinel
- ISO 261 / ISO 724: Default metric coarse thread table
- ISO 898-1: Default property class table
"""

from typing import Dict, Tuple

# =============================================================================
# ISO 898-1 - Tensile Stress Area
# =============================================================================

# As = 0.7854 × (d - 0.9382 × P)²
# 0.7854 is the published 4-decimal value of π/4. Do not replace with math.pi / 4.
STRESS_AREA_COEFFICIENT: float = 0.7854

# 0.9382 × P = mean of pitch and minor diameter reductions for ISO basic profile
STRESS_AREA_PITCH_FACTOR: float = 0.9382

# =============================================================================
# Unit Convention
# =============================================================================

# σB [MPa = N/mm²] × As [mm²] = N, divided by this to get kN
NEWTONS_PER_KILONEWTON: float = 1000.0

# Preload is given as a percentage of breaking load
PERCENT: float = 100.0

# Practical preload range (engineering judgment, used for advisory review only)
PRELOAD_PERCENT_MIN: float = 0.0
PRELOAD_PERCENT_MAX: float = 100.0

# =============================================================================
# Catalog Sentinel
# =============================================================================

# Key of the user-defined entry appended to every catalog
CUSTOM_KEY: str = "Custom"
CUSTOM_MATERIAL_DESCRIPTION: str = "User defined"
CUSTOM_MATERIAL_COLOR: str = "#64748b"

# =============================================================================
# ISO 261 / ISO 724 - Metric Coarse Threads
# =============================================================================

# name: (D nominal major diameter, d minor diameter basis, P pitch), all mm
DEFAULT_THREADS_MM: Dict[str, Tuple[float, float, float]] = {
    "M3": (3.0, 2.387, 0.5),
    "M4": (4.0, 3.141, 0.7),
    "M5": (5.0, 4.019, 0.8),
    "M6": (6.0, 4.773, 1.0),
    "M8": (8.0, 6.466, 1.25),
    "M10": (10.0, 8.160, 1.5),
    "M12": (12.0, 9.853, 1.75),
    "M14": (14.0, 11.546, 2.0),
    "M16": (16.0, 13.546, 2.0),
    "M20": (20.0, 16.933, 2.5),
    "M24": (24.0, 20.319, 3.0),
    "M30": (30.0, 25.706, 3.5),
    "M36": (36.0, 31.093, 4.0),
}

# =============================================================================
# ISO 898-1 - Property Classes (nominal tensile strength)
# =============================================================================

# name: (σB MPa, description, display colour)
DEFAULT_MATERIALS: Dict[str, Tuple[float, str, str]] = {
    "4.6": (400.0, "Low carbon steel", "#94a3b8"),
    "4.8": (420.0, "Low carbon steel, cold worked", "#a1a1aa"),
    "5.6": (500.0, "Medium carbon steel", "#78716c"),
    "5.8": (520.0, "Medium carbon steel, cold worked", "#a8a29e"),
    "6.8": (600.0, "Medium carbon steel, cold worked", "#d6d3d1"),
    "8.8": (800.0, "Medium carbon steel, quenched and tempered", "#3b82f6"),
    "9.8": (900.0, "Medium carbon steel, quenched and tempered", "#6366f1"),
    "10.9": (1000.0, "Alloy steel, quenched and tempered", "#f59e0b"),
    "12.9": (1200.0, "Alloy steel, quenched and tempered", "#ef4444"),
}
