"""Type-safe enums for the bolted joint calculator."""

from enum import Enum


class Danger(Enum):
    """Failure mode flagged by a joint calculation"""
    LOOSENING = "loosening"  # Residual clamp force <= 0, joint separates
    BREAKAGE = "breakage"  # Bolt force >= breaking load, bolt fractures
