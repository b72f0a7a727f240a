"""
Tests for namesake.core.config — NamesakeConfig and threshold validation.
"""

import dataclasses

import pytest
from namesake.core.config import (
    DEFAULT_SIMILARITY_THRESHOLD,
    NamesakeConfig,
    validate_threshold,
)
from namesake.exceptions import ConfigError


# =============================================================================
# validate_threshold
# =============================================================================

class TestValidateThreshold:
    """Threshold must lie in (0.0, 1.0]."""

    @pytest.mark.parametrize("value", [0.01, 0.5, 0.75, 1.0, 1])
    def test_accepts_valid_values(self, value):
        assert validate_threshold(value) == float(value)

    @pytest.mark.parametrize("value", [0.0, -1.0, 1.0001, 2, float("nan"), float("inf")])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(ConfigError, match="outside the valid range"):
            validate_threshold(value)

    @pytest.mark.parametrize("value", ["0.8", None, True])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ConfigError, match="must be a number"):
            validate_threshold(value)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_threshold(0.0)


# =============================================================================
# NamesakeConfig
# =============================================================================

class TestNamesakeConfig:
    """Verify NamesakeConfig dataclass and its methods."""

    def test_defaults(self):
        cfg = NamesakeConfig()
        assert cfg.similarity_threshold == DEFAULT_SIMILARITY_THRESHOLD == 0.75
        assert cfg.propagate_nested is False
        assert ".py" in cfg.target_extensions
        for d in ("__pycache__", ".git", "dist", "build"):
            assert d in cfg.exclude_dirs

    def test_is_frozen(self):
        cfg = NamesakeConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.similarity_threshold = 0.5

    def test_validate_succeeds_with_defaults(self):
        assert NamesakeConfig().validate() is True

    def test_validate_rejects_threshold(self):
        with pytest.raises(ConfigError):
            NamesakeConfig(similarity_threshold=1.5).validate()

    def test_validate_rejects_log_level(self):
        with pytest.raises(ConfigError, match="Unknown log level"):
            NamesakeConfig(log_level="CHATTY").validate()

    def test_validate_rejects_workers(self):
        with pytest.raises(ConfigError, match="max_workers"):
            NamesakeConfig(max_workers=0).validate()

    def test_validate_rejects_file_size(self):
        with pytest.raises(ConfigError, match="max_file_size_mb"):
            NamesakeConfig(max_file_size_mb=0).validate()


class TestConfigFromEnv:
    """Environment-driven construction."""

    def test_from_env_defaults(self):
        cfg = NamesakeConfig.from_env()
        assert cfg.similarity_threshold == 0.75
        assert cfg.log_level == "INFO"

    def test_from_env_reads_threshold(self, monkeypatch):
        monkeypatch.setenv("NAMESAKE_SIMILARITY_THRESHOLD", "0.9")
        assert NamesakeConfig.from_env().similarity_threshold == 0.9

    @pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("off", False)])
    def test_from_env_reads_nested(self, monkeypatch, raw, expected):
        monkeypatch.setenv("NAMESAKE_PROPAGATE_NESTED", raw)
        assert NamesakeConfig.from_env().propagate_nested is expected

    def test_from_env_reads_workers_and_level(self, monkeypatch):
        monkeypatch.setenv("NAMESAKE_MAX_WORKERS", "2")
        monkeypatch.setenv("NAMESAKE_LOG_LEVEL", "debug")
        cfg = NamesakeConfig.from_env()
        assert cfg.max_workers == 2
        assert cfg.log_level == "DEBUG"

    def test_from_env_rejects_bad_threshold(self, monkeypatch):
        monkeypatch.setenv("NAMESAKE_SIMILARITY_THRESHOLD", "high")
        with pytest.raises(ConfigError, match="NAMESAKE_SIMILARITY_THRESHOLD"):
            NamesakeConfig.from_env()

    def test_from_env_rejects_bad_workers(self, monkeypatch):
        monkeypatch.setenv("NAMESAKE_MAX_WORKERS", "many")
        with pytest.raises(ConfigError, match="NAMESAKE_MAX_WORKERS"):
            NamesakeConfig.from_env()

    def test_out_of_range_env_threshold_not_clamped(self, monkeypatch):
        monkeypatch.setenv("NAMESAKE_SIMILARITY_THRESHOLD", "1.2")
        cfg = NamesakeConfig.from_env()
        assert cfg.similarity_threshold == 1.2
        with pytest.raises(ConfigError):
            cfg.validate()
