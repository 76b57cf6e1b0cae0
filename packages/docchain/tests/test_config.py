"""Tests for Settings"""

import logging

import pytest

from docchain.config import Settings, configure_logging


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.storage_provider == "memory"
        assert settings.default_namespace == "documents"
        assert settings.pipeline_stages == ["not_found", "json", "storage"]
        assert settings.storage_timeout_seconds is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("STORAGE_PROVIDER", "s3")
        monkeypatch.setenv("S3_KEY_PREFIX", "uptime/")
        monkeypatch.setenv("PIPELINE_STAGES", '["json", "storage"]')
        monkeypatch.setenv("STORAGE_TIMEOUT_SECONDS", "2.5")

        settings = Settings()

        assert settings.storage_provider == "s3"
        assert settings.s3_key_prefix == "uptime/"
        assert settings.pipeline_stages == ["json", "storage"]
        assert settings.storage_timeout_seconds == 2.5

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError):
            Settings(storage_timeout_seconds=0)

    def test_validate_s3_requires_region_or_endpoint(self):
        settings = Settings(storage_provider="s3", aws_region="", s3_endpoint_url=None)

        with pytest.raises(ValueError, match="AWS_REGION or S3_ENDPOINT_URL"):
            settings.validate_storage_config()

    def test_validate_passes_for_defaults(self):
        Settings().validate_storage_config()


def test_configure_logging_sets_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging(Settings(log_level="debug"))

    assert calls["level"] == "DEBUG"
