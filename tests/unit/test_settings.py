"""
Unit tests for configuration loading and validation.
"""

import pytest

from s3m.config.settings import (
    ConfigValidationError,
    Settings,
    get_settings,
    load_settings,
)


class TestSettingsFromEnvironment:

    def test_nested_bucket_settings_are_read(self, monkeypatch):
        monkeypatch.setenv("S3M_ACCESS_KEY_ID", "AKID")
        monkeypatch.setenv("S3M_SECRET_ACCESS_KEY", "secret")
        monkeypatch.setenv("S3M_BUCKET__NAME", "my-bucket")
        monkeypatch.setenv("S3M_BUCKET__ENDPOINT", "https://minio.local")
        monkeypatch.setenv("S3M_BUCKET__REGION", "auto")
        monkeypatch.setenv("S3M_BUCKET__PREFIX", "direct")
        monkeypatch.setenv("S3M_AUTOENDPOINT", "true")

        settings = Settings(_env_file=None)

        assert settings.access_key_id == "AKID"
        assert settings.secret_access_key == "secret"
        assert settings.bucket.name == "my-bucket"
        assert settings.bucket.endpoint == "https://minio.local"
        assert settings.bucket.region == "auto"
        assert settings.bucket.prefix == "direct"
        assert settings.autoendpoint is True

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.autoendpoint is False
        assert settings.bucket.region is None
        assert settings.bucket.prefix == ""
        assert settings.log_level == "INFO"


class TestValidation:

    def test_all_blank_fields_are_reported_together(self):
        settings = Settings(_env_file=None)

        assert settings.validate_required_fields() == [
            "S3M_ACCESS_KEY_ID",
            "S3M_SECRET_ACCESS_KEY",
            "S3M_BUCKET__NAME",
            "S3M_BUCKET__ENDPOINT",
        ]

    def test_whitespace_counts_as_blank(self, make_settings):
        settings = make_settings(access_key_id="   ")

        assert settings.validate_required_fields() == ["S3M_ACCESS_KEY_ID"]

    def test_valid_settings_have_no_missing_fields(self, make_settings):
        assert make_settings().validate_required_fields() == []

    def test_region_is_optional(self, make_settings):
        settings = make_settings(bucket={"region": None})

        assert settings.validate_required_fields() == []

    def test_ensure_valid_raises_with_field_list(self, make_settings):
        settings = make_settings(bucket={"name": "", "endpoint": ""})

        with pytest.raises(ConfigValidationError) as exc_info:
            settings.ensure_valid()

        assert exc_info.value.missing_fields == ["S3M_BUCKET__NAME", "S3M_BUCKET__ENDPOINT"]
        assert "S3M_BUCKET__NAME" in str(exc_info.value)

    def test_unknown_log_level_is_reported(self, make_settings):
        settings = make_settings(log_level="LOUD")

        assert settings.validate_required_fields() == ["S3M_LOG_LEVEL"]
        with pytest.raises(ConfigValidationError, match="S3M_LOG_LEVEL"):
            settings.ensure_valid()

    @pytest.mark.parametrize("level", ["debug", "WARNING", " error "])
    def test_known_log_levels_are_accepted_in_any_case(self, make_settings, level):
        assert make_settings(log_level=level).validate_required_fields() == []

    def test_load_settings_fails_on_empty_environment(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            load_settings()

        assert len(exc_info.value.missing_fields) == 4

    def test_load_settings_returns_valid_settings(self, monkeypatch):
        monkeypatch.setenv("S3M_ACCESS_KEY_ID", "AKID")
        monkeypatch.setenv("S3M_SECRET_ACCESS_KEY", "secret")
        monkeypatch.setenv("S3M_BUCKET__NAME", "my-bucket")
        monkeypatch.setenv("S3M_BUCKET__ENDPOINT", "https://minio.local")

        assert load_settings().bucket.name == "my-bucket"


class TestGetSettings:

    def test_settings_are_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestCorsOrigins:

    def test_wildcard(self, make_settings):
        assert make_settings().cors_origins_list == ["*"]

    def test_comma_separated(self, make_settings):
        settings = make_settings(cors_origins="https://a.test, https://b.test,")
        assert settings.cors_origins_list == ["https://a.test", "https://b.test"]
