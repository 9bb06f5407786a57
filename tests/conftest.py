"""
Pytest configuration and shared fixtures for boltjoint tests.
"""

import json
import pytest


# ─── Joint inputs ────────────────────────────────────────────────────────


def _example_joint():
    """M16-ish 8.8 bolt, stiff clamped parts, moderate external load."""
    return {
        "sigmaB": 800,
        "As": 157.9,
        "Kb": 500,
        "Kc": 1500,
        "preloadPercent": 75,
        "externalForce": 10,
    }


@pytest.fixture
def example_joint():
    """Joint input dict keyed by engineering symbols."""
    return _example_joint()


@pytest.fixture
def example_result(example_joint):
    """JointResult for example_joint."""
    from boltjoint.calculator import calculate_joint_forces
    return calculate_joint_forces(example_joint)


@pytest.fixture
def separating_joint():
    """Soft bolt, stiff parts: separates at 105 kN, breaks only at 316 kN."""
    data = _example_joint()
    data["Kb"] = 200
    data["Kc"] = 1800
    data["externalForce"] = 200
    return data


# ─── Config files ────────────────────────────────────────────────────────


def _sample_config():
    return {
        "schema_version": "1.0",
        "threads": {
            "M10": {"D": 10, "d": 8.16, "P": 1.5},
            "M12": {"D": 12, "d": 9.853, "P": 1.75},
        },
        "materials": {
            "8.8": {"sigmaB": 800, "description": "Quenched and tempered", "color": "#3b82f6"},
            "10.9": {"sigmaB": 1000, "description": "Alloy steel", "color": "#f59e0b"},
        },
    }


@pytest.fixture
def sample_config():
    """Config dict with two threads and two materials."""
    return _sample_config()


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Temporary JSON config file with sample_config."""
    path = tmp_path / "bolts.json"
    with open(path, 'w') as f:
        json.dump(sample_config, f)
    return path
