"""
Tests for the IO module - config loading, saving and schema checks.
"""

import json
import math

import pytest
from pydantic import ValidationError

from boltjoint import (
    load_catalogs,
    load_config_json,
    save_config_json,
    JointInput,
    JointResult,
    ThreadSpec,
    MaterialSpec,
)
from boltjoint.io import (
    CatalogConfig,
    SCHEMA_VERSION,
    default_config,
    detect_schema_version,
    validate_config_schema,
)
from boltjoint.calculator.constants import DEFAULT_THREADS_MM, DEFAULT_MATERIALS


class TestLoadConfigJson:
    """Tests for load_config_json."""

    def test_load_valid(self, config_file):
        config = load_config_json(config_file)
        assert isinstance(config, CatalogConfig)
        assert list(config.threads) == ["M10", "M12"]
        assert list(config.materials) == ["8.8", "10.9"]
        assert config.threads["M10"].diameter_mm == 8.16
        assert config.materials["8.8"].sigma_b_mpa == 800

    def test_load_str_path(self, config_file):
        config = load_config_json(str(config_file))
        assert "M12" in config.threads

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_json(tmp_path / "nope.json")

    def test_directory_is_not_a_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_json(tmp_path)

    def test_wrapped_config(self, tmp_path, sample_config):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"config": sample_config}))
        config = load_config_json(path)
        assert "M10" in config.threads

    def test_non_numeric_field_rejected(self, tmp_path, sample_config):
        sample_config["threads"]["M10"]["P"] = "fine"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(sample_config))
        with pytest.raises(ValueError, match="threads.M10.P"):
            load_config_json(path)

    def test_section_not_object_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"threads": ["M10"]}))
        with pytest.raises(ValueError):
            load_config_json(path)

    def test_incomplete_entry_logged(self, tmp_path, caplog):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"schema_version": "1.0", "threads": {"M10": {"D": 10}}}))
        with caplog.at_level("WARNING", logger="boltjoint.io.loaders"):
            config = load_config_json(path)
        assert config.threads["M10"].diameter_mm is None
        assert "no 'd'" in caplog.text


class TestSaveConfigJson:
    """Tests for save_config_json."""

    def test_round_trip(self, tmp_path, config_file):
        config = load_config_json(config_file)
        out = tmp_path / "saved.json"
        save_config_json(config, out)
        assert load_config_json(out) == config

    def test_custom_and_stress_area_not_written(self, tmp_path):
        threads, materials = load_catalogs()
        config = CatalogConfig(threads=threads, materials=materials)
        out = tmp_path / "saved.json"
        save_config_json(config, out)

        data = json.loads(out.read_text())
        assert data["schema_version"] == SCHEMA_VERSION
        assert "Custom" not in data["threads"]
        assert "Custom" not in data["materials"]
        assert "As" not in data["threads"]["M10"]
        assert set(data["threads"]["M10"]) == {"D", "d", "P"}


    def test_partial_material_keeps_keys(self, tmp_path):
        config = CatalogConfig.model_validate({"materials": {"8.8": {"sigmaB": 800}}})
        out = tmp_path / "saved.json"
        save_config_json(config, out)
        assert json.loads(out.read_text())["materials"] == {"8.8": {"sigmaB": 800}}


class TestLoadCatalogs:
    """Tests for load_catalogs."""

    def test_defaults(self):
        threads, materials = load_catalogs()
        assert list(threads) == list(DEFAULT_THREADS_MM) + ["Custom"]
        assert list(materials) == list(DEFAULT_MATERIALS) + ["Custom"]
        assert threads["M10"].stress_area_mm2 == pytest.approx(35.81, abs=0.01)
        assert materials["8.8"].sigma_b_mpa == 800

    def test_from_file(self, config_file):
        threads, materials = load_catalogs(config_file)
        assert list(threads) == ["M10", "M12", "Custom"]
        assert list(materials) == ["8.8", "10.9", "Custom"]
        assert materials["Custom"].color == "#64748b"

    def test_default_config_matches_tables(self):
        config = default_config()
        M10 = config.threads["M10"]
        assert (M10.major_diameter_mm, M10.diameter_mm, M10.pitch_mm) == DEFAULT_THREADS_MM["M10"]


class TestSchema:
    """Tests for validate_config_schema / detect_schema_version."""

    def test_valid(self, sample_config):
        report = validate_config_schema(sample_config)
        assert report["valid"] is True
        assert report["errors"] == []
        assert report["warnings"] == []
        assert report["schema_version"] == "1.0"

    def test_missing_version_warns(self, sample_config):
        del sample_config["schema_version"]
        report = validate_config_schema(sample_config)
        assert report["valid"] is True
        assert any("schema_version" in w for w in report["warnings"])

    def test_other_version_warns(self, sample_config):
        sample_config["schema_version"] = "9.9"
        report = validate_config_schema(sample_config)
        assert report["schema_version"] == "9.9"
        assert report["warnings"]

    def test_not_an_object(self):
        report = validate_config_schema([1, 2])
        assert report["valid"] is False

    def test_bool_is_not_a_number(self, sample_config):
        sample_config["materials"]["8.8"]["sigmaB"] = True
        report = validate_config_schema(sample_config)
        assert report["valid"] is False

    def test_colour_must_be_string(self, sample_config):
        sample_config["materials"]["8.8"]["color"] = 123
        report = validate_config_schema(sample_config)
        assert report["valid"] is False

    def test_missing_strength_warns(self, sample_config):
        del sample_config["materials"]["10.9"]["sigmaB"]
        report = validate_config_schema(sample_config)
        assert report["valid"] is True
        assert any("materials.10.9" in w for w in report["warnings"])

    def test_empty_config_warns(self):
        report = validate_config_schema({"schema_version": "1.0"})
        assert report["valid"] is True
        assert report["warnings"]

    def test_detect_version(self):
        assert detect_schema_version({}) == "1.0"
        assert detect_schema_version({"schema_version": 2}) == "2"


class TestModels:
    """Tests for Pydantic model aliases and non-finite tolerance."""

    def test_joint_input_accepts_both_spellings(self, example_joint):
        by_alias = JointInput.model_validate(example_joint)
        by_name = JointInput(
            sigma_b_mpa=800, stress_area_mm2=157.9, kb_kn_per_mm=500,
            kc_kn_per_mm=1500, preload_percent=75, external_force_kn=10,
        )
        assert by_alias == by_name

    def test_joint_input_dump_uses_symbols(self, example_joint):
        dumped = JointInput.model_validate(example_joint).model_dump(by_alias=True)
        assert set(dumped) == set(example_joint)

    def test_joint_input_frozen(self, example_joint):
        joint = JointInput.model_validate(example_joint)
        with pytest.raises(ValidationError):
            joint.kb_kn_per_mm = 1.0

    def test_result_holds_non_finite(self, example_result):
        data = example_result.model_dump()
        data["load_factor"] = math.nan
        data["loosening_force_kn"] = math.inf
        result = JointResult(**data)
        assert math.isnan(result.load_factor)
        assert result.non_finite_fields() == ["phi", "looseningForce"]

    def test_result_field_count(self, example_result):
        assert len(example_result.model_dump()) == 14

    def test_thread_spec_aliases(self):
        spec = ThreadSpec.model_validate({"D": 10, "d": 8.16, "P": 1.5})
        assert spec.model_dump(by_alias=True) == {"D": 10, "d": 8.16, "P": 1.5, "As": None}

    def test_material_spec_defaults(self):
        spec = MaterialSpec()
        assert spec.sigma_b_mpa is None
        assert spec.description == ""
        assert spec.color is None
