"""Tests for Settings configuration."""

import pytest
from pydantic import ValidationError


class TestSettings:
    """Test Settings class."""

    def test_settings_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings should load values from environment variables."""
        monkeypatch.setenv("GCP_PROJECT_ID", "test-project")
        monkeypatch.setenv("USERNAME", "admin")
        monkeypatch.setenv("SITE_NAME", "MyTV")
        monkeypatch.setenv("SUBSCRIPTION_TIMEOUT_SECONDS", "10")

        from src.config.settings import Settings

        settings = Settings()

        assert settings.GCP_PROJECT_ID == "test-project"
        assert settings.USERNAME == "admin"
        assert settings.SITE_NAME == "MyTV"
        assert settings.SUBSCRIPTION_TIMEOUT_SECONDS == 10

    def test_settings_missing_required_raises_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Settings should raise ValidationError when required vars are missing."""
        monkeypatch.delenv("GCP_PROJECT_ID", raising=False)
        monkeypatch.delenv("USERNAME", raising=False)

        from src.config.settings import Settings

        with pytest.raises(ValidationError):
            # _env_file=None으로 .env 파일 로딩 비활성화
            Settings(_env_file=None)

    def test_settings_is_local_property(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """is_local should return True when FIRESTORE_EMULATOR_HOST is set."""
        monkeypatch.setenv("GCP_PROJECT_ID", "test-project")
        monkeypatch.setenv("USERNAME", "owner")
        monkeypatch.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8086")

        from src.config.settings import Settings

        settings = Settings()
        assert settings.is_local is True

    def test_settings_is_local_false_when_no_emulator(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """is_local should return False when FIRESTORE_EMULATOR_HOST is not set."""
        monkeypatch.setenv("GCP_PROJECT_ID", "test-project")
        monkeypatch.setenv("USERNAME", "owner")
        monkeypatch.delenv("FIRESTORE_EMULATOR_HOST", raising=False)

        from src.config.settings import Settings

        # _env_file=None으로 .env 파일 로딩 비활성화 (FIRESTORE_EMULATOR_HOST 방지)
        settings = Settings(_env_file=None)
        assert settings.is_local is False

    def test_settings_site_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Site defaults should match the documented values."""
        monkeypatch.setenv("GCP_PROJECT_ID", "test-project")
        monkeypatch.setenv("USERNAME", "owner")
        for name in ("SITE_NAME", "SEARCH_MAX_PAGE", "SUBSCRIPTION_TIMEOUT_SECONDS"):
            monkeypatch.delenv(name, raising=False)

        from src.config.settings import Settings

        settings = Settings(_env_file=None)
        assert settings.SITE_NAME == "aithyTV"
        assert settings.SEARCH_MAX_PAGE == 5
        assert settings.SUBSCRIPTION_TIMEOUT_SECONDS == 30
        assert settings.FLUID_SEARCH is True


class TestDefaultSiteConfig:
    """Test default_site_config."""

    def test_built_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Initial site settings should come from environment values."""
        monkeypatch.setenv("GCP_PROJECT_ID", "test-project")
        monkeypatch.setenv("USERNAME", "owner")
        monkeypatch.setenv("SITE_NAME", "MyTV")
        monkeypatch.setenv("DOUBAN_PROXY_TYPE", "cors-proxy")
        monkeypatch.setenv("DISABLE_YELLOW_FILTER", "true")

        from src.config.settings import Settings

        site = Settings(_env_file=None).default_site_config()

        assert site.site_name == "MyTV"
        assert site.douban_proxy_type == "cors-proxy"
        assert site.disable_yellow_filter is True
        assert site.site_interface_cache_time == 7200
        assert site.show_adult_content is False
        assert site.tmdb_language == "zh-CN"
