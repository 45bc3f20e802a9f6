"""Tests for config validation."""

import pytest

from resume_insights.config import load_config


class TestConfigValidation:
    def test_valid_defaults(self, tmp_path):
        """Default config passes validation without raising."""
        config = load_config(tmp_path / "missing.yaml")
        assert config.gemini.timeout == 30
        assert config.credentials.slots == 5

    def test_invalid_timeout(self, tmp_path):
        """timeout of 0 (below minimum of 1) raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("gemini:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_negative_retry_wait(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("gemini:\n  retry_wait_seconds: -1\n")
        with pytest.raises(ValueError, match="retry_wait_seconds"):
            load_config(yaml)

    def test_invalid_max_bytes(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("upload:\n  max_bytes: 0\n")
        with pytest.raises(ValueError, match="max_bytes"):
            load_config(yaml)

    def test_invalid_slots(self, tmp_path):
        """slots above 50 raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("credentials:\n  slots: 99\n")
        with pytest.raises(ValueError, match="slots"):
            load_config(yaml)

    def test_unknown_key_rejected(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("gemini:\n  temperature: 0.5\n")
        with pytest.raises(TypeError):
            load_config(yaml)
