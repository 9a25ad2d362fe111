"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.models.admin_config import DEFAULT_CACHE_TIME, SiteConfig

DEFAULT_ANNOUNCEMENT = (
    "本网站仅提供影视信息搜索服务，所有内容均来自第三方网站。"
    "本站不存储任何视频资源，不对任何内容的准确性、合法性、完整性负责。"
)


class Settings(BaseSettings):
    """Application configuration from environment variables.

    All required settings must be provided via environment variables or .env file.
    Optional settings have default values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Google Cloud Platform
    # -------------------------------------------------------------------------
    GCP_PROJECT_ID: str

    # Firestore Emulator (local development)
    FIRESTORE_EMULATOR_HOST: str | None = None

    # -------------------------------------------------------------------------
    # Owner
    # -------------------------------------------------------------------------
    USERNAME: str
    """사이트 소유자 계정 (owner 권한은 항상 이 계정 1명)"""

    # -------------------------------------------------------------------------
    # Site defaults (초기화 시에만 사용, 이후는 관리자 설정이 우선)
    # -------------------------------------------------------------------------
    SITE_NAME: str = "aithyTV"
    ANNOUNCEMENT: str = DEFAULT_ANNOUNCEMENT
    SEARCH_MAX_PAGE: int = 5
    DOUBAN_PROXY_TYPE: str = "direct"
    DOUBAN_PROXY: str = ""
    DOUBAN_IMAGE_PROXY_TYPE: str = "server"
    DOUBAN_IMAGE_PROXY: str = ""
    DISABLE_YELLOW_FILTER: bool = False
    FLUID_SEARCH: bool = True
    TMDB_API_KEY: str = ""

    # -------------------------------------------------------------------------
    # Subscription
    # -------------------------------------------------------------------------
    SUBSCRIPTION_TIMEOUT_SECONDS: int = 30
    """구독 URL 조회 타임아웃"""

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    LOG_JSON: bool = True

    @property
    def is_local(self) -> bool:
        """Check if running in local development mode."""
        return self.FIRESTORE_EMULATOR_HOST is not None

    def default_site_config(self) -> SiteConfig:
        """Build the initial site settings from the environment.

        Returns:
            SiteConfig with environment-derived values.
        """
        return SiteConfig(
            site_name=self.SITE_NAME,
            announcement=self.ANNOUNCEMENT,
            search_downstream_max_page=self.SEARCH_MAX_PAGE,
            site_interface_cache_time=DEFAULT_CACHE_TIME,
            douban_proxy_type=self.DOUBAN_PROXY_TYPE,
            douban_proxy=self.DOUBAN_PROXY,
            douban_image_proxy_type=self.DOUBAN_IMAGE_PROXY_TYPE,
            douban_image_proxy=self.DOUBAN_IMAGE_PROXY,
            disable_yellow_filter=self.DISABLE_YELLOW_FILTER,
            show_adult_content=False,
            fluid_search=self.FLUID_SEARCH,
            tmdb_api_key=self.TMDB_API_KEY,
            tmdb_language="zh-CN",
            enable_tmdb_actor_search=False,
        )


# Singleton instance (lazy initialization)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore[call-arg]
    return _settings
