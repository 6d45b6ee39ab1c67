"""Tests for the engine configuration schema.

Covers:
  - default config validity
  - field-level validation (ranges, literals)
  - JSON loading
"""

import json

import pytest
from pydantic import ValidationError

from protozoa.config.defaults import default_config, load_config
from protozoa.config.schema import (
    EngineConfig,
    EvolutionOptions,
    GenerationConfig,
    LoggingConfig,
)


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_default_config_is_valid(self):
        cfg = default_config()
        assert cfg.generation.total_particles == 500
        assert cfg.evolution.mutation_intensity == 0.5
        assert cfg.evolution.max_mutations_per_event == 3
        assert cfg.evolution.enable_exotic_mutations is False
        assert cfg.evolution.enable_subclass_mutations is True
        assert cfg.history.storage_dir is None

    def test_default_matches_bare_model(self):
        assert default_config() == EngineConfig()

    def test_storage_dir_is_path(self, tmp_path):
        assert default_config(storage_dir=str(tmp_path)).history.storage_dir == tmp_path


# ---------------------------------------------------------------------------
# Field validation
# ---------------------------------------------------------------------------

class TestFieldValidation:
    def test_total_particles_below_base_rejected(self):
        with pytest.raises(ValidationError):
            GenerationConfig(total_particles=199)

    @pytest.mark.parametrize("intensity", [-0.1, 1.1])
    def test_intensity_range(self, intensity):
        with pytest.raises(ValidationError):
            EvolutionOptions(mutation_intensity=intensity)

    @pytest.mark.parametrize("cap", [0, 11])
    def test_max_mutations_range(self, cap):
        with pytest.raises(ValidationError):
            EvolutionOptions(max_mutations_per_event=cap)

    def test_log_level_is_uppercased(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class TestLoadConfig:
    def test_round_trips_through_json(self, tmp_path):
        path = tmp_path / "engine.json"
        path.write_text(default_config().model_dump_json(), encoding="utf-8")
        assert load_config(path) == default_config()

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"evolution": {"enable_exotic_mutations": True}}), encoding="utf-8")
        cfg = load_config(path)
        assert cfg.evolution.enable_exotic_mutations is True
        assert cfg.generation.total_particles == 500

    def test_invalid_file_rejected(self, tmp_path):
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"generation": {"total_particles": 10}}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)
