"""Domain models for the video source hub.

This module exports all Pydantic models used across the application.
"""

from src.models.admin_config import (
    DEFAULT_CACHE_TIME,
    AdminConfig,
    ConfigSubscription,
    SiteConfig,
)
from src.models.feature_config import (
    AIRecommendConfig,
    CronConfig,
    DoubanConfig,
    DownloadConfig,
    NetDiskConfig,
    OIDCAuthConfig,
    OIDCProvider,
    ShortDramaConfig,
    TVBoxSecurityConfig,
    VideoProxyConfig,
    YouTubeConfig,
)
from src.models.source_config import (
    CustomCategory,
    LiveConfig,
    MediaType,
    Provenance,
    SourceConfig,
)
from src.models.subscription import (
    ParsedSubscription,
    SubscribedApiSite,
    SubscribedCategory,
    SubscribedLive,
)
from src.models.user import UserConfig, UserProfile, UserRecord, UserRole, UserTag

__all__ = [
    "AIRecommendConfig",
    "AdminConfig",
    "ConfigSubscription",
    "CronConfig",
    "CustomCategory",
    "DEFAULT_CACHE_TIME",
    "DoubanConfig",
    "DownloadConfig",
    "LiveConfig",
    "MediaType",
    "NetDiskConfig",
    "OIDCAuthConfig",
    "OIDCProvider",
    "ParsedSubscription",
    "Provenance",
    "ShortDramaConfig",
    "SiteConfig",
    "SourceConfig",
    "SubscribedApiSite",
    "SubscribedCategory",
    "SubscribedLive",
    "TVBoxSecurityConfig",
    "UserConfig",
    "UserProfile",
    "UserRecord",
    "UserRole",
    "UserTag",
    "VideoProxyConfig",
    "YouTubeConfig",
]
