"""Tests for configuration loading and validation."""

from dataclasses import replace

import pytest

from saathi.config import AppConfig, DialogConfig, SessionConfig, _validate_config


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig()
        _validate_config(config)  # should not raise

    def test_default_eviction_is_bounded(self):
        assert SessionConfig().eviction_policy in ("ttl", "lru")

    def test_invalid_eviction_policy(self):
        config = replace(AppConfig(), session=SessionConfig(eviction_policy="forever"))
        with pytest.raises(ValueError, match="SESSION_EVICTION_POLICY"):
            _validate_config(config)

    def test_invalid_ttl(self):
        config = replace(AppConfig(), session=SessionConfig(eviction_policy="ttl", ttl_seconds=0))
        with pytest.raises(ValueError, match="SESSION_TTL_SECONDS"):
            _validate_config(config)

    def test_invalid_max_sessions(self):
        config = replace(AppConfig(), session=SessionConfig(eviction_policy="lru", max_sessions=0))
        with pytest.raises(ValueError, match="SESSION_MAX_SESSIONS"):
            _validate_config(config)

    def test_blank_default_driver(self):
        config = replace(AppConfig(), dialog=DialogConfig(default_driver_id="  "))
        with pytest.raises(ValueError, match="DEFAULT_DRIVER_ID"):
            _validate_config(config)

    def test_safe_int_parsing(self):
        from saathi.config import _safe_int

        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_bad_value(self, monkeypatch):
        from saathi.config import _safe_int

        monkeypatch.setenv("SAATHI_TEST_INT", "many")
        with pytest.raises(ValueError, match="SAATHI_TEST_INT"):
            _safe_int("SAATHI_TEST_INT", "1")

    def test_safe_float_parsing(self):
        from saathi.config import _safe_float

        assert _safe_float("NONEXISTENT_VAR_12345", "3.14") == pytest.approx(3.14)
