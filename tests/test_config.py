"""Tests for environment-driven Settings."""

import pytest
from pydantic import ValidationError

from verse_api.config import Settings


class TestSettings:

    def test_port_defaults_to_8080(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        assert Settings(_env_file=None).port == 8080

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")
        assert Settings(_env_file=None).port == 9090

    def test_pool_ceiling(self):
        s = Settings(_env_file=None, db_pool_size=5, db_max_overflow=20)
        assert s.pool_ceiling == 25

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")
