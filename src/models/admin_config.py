"""Admin configuration document.

사이트 전체에서 하나뿐인 관리 설정 문서입니다.
구독 파일 원문, 사이트 설정, 사용자 설정, 소스/카테고리/라이브 컬렉션과 기능별 설정 블록을 담습니다.
"""

from typing import Any

import structlog
from pydantic import BaseModel, Field, ValidationError, model_validator

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
from src.models.source_config import CustomCategory, LiveConfig, SourceConfig
from src.models.user import UserConfig, UserRecord, UserTag

logger = structlog.get_logger(__name__)

DEFAULT_CACHE_TIME = 7200

# 저장된 문서가 손상되었을 때 항목 단위로 검증하는 컬렉션 필드
COLLECTION_MODELS: dict[str, type[BaseModel]] = {
    "source_config": SourceConfig,
    "custom_categories": CustomCategory,
    "live_config": LiveConfig,
}


def _valid_items(
    value: Any, model: type[BaseModel], field: str
) -> list[BaseModel]:
    """리스트 항목을 하나씩 검증하고 실패한 항목만 제거."""
    if not isinstance(value, list):
        return []

    items: list[BaseModel] = []
    for index, item in enumerate(value):
        if isinstance(item, model):
            items.append(item)
            continue
        try:
            items.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "stored_item_dropped",
                field=field,
                index=index,
                error_count=e.error_count(),
            )
    return items


def _valid_section(
    value: Any, model: type[BaseModel], field: str
) -> BaseModel | None:
    """섹션을 검증하고 실패하면 None (기본값/self-check에 맡김)."""
    if isinstance(value, model):
        return value
    if not isinstance(value, dict):
        return None
    try:
        return model.model_validate(value)
    except ValidationError as e:
        logger.warning(
            "stored_section_dropped", field=field, error_count=e.error_count()
        )
        return None


class ConfigSubscription(BaseModel):
    """구독 URL 메타데이터."""

    url: str = ""
    auto_update: bool = False
    last_check: str = Field("", description="마지막 확인 시간 (ISO 8601)")


class SiteConfig(BaseModel):
    """사이트 전역 설정."""

    site_name: str = "aithyTV"
    announcement: str = ""
    search_downstream_max_page: int = 5
    site_interface_cache_time: int = DEFAULT_CACHE_TIME
    douban_proxy_type: str = "direct"
    douban_proxy: str = ""
    douban_image_proxy_type: str = "server"
    douban_image_proxy: str = ""
    disable_yellow_filter: bool = False
    show_adult_content: bool = Field(False, description="전역 성인 콘텐츠 기본값")
    fluid_search: bool = True
    tmdb_api_key: str = ""
    tmdb_language: str = "zh-CN"
    enable_tmdb_actor_search: bool = False


# 검증에 실패하면 "없음"으로 취급하는 섹션 필드
SECTION_MODELS: dict[str, type[BaseModel]] = {
    "config_subscription": ConfigSubscription,
    "site_config": SiteConfig,
    "net_disk_config": NetDiskConfig,
    "ai_recommend_config": AIRecommendConfig,
    "youtube_config": YouTubeConfig,
    "short_drama_config": ShortDramaConfig,
    "download_config": DownloadConfig,
    "douban_config": DoubanConfig,
    "cron_config": CronConfig,
    "video_proxy_config": VideoProxyConfig,
    "tvbox_security_config": TVBoxSecurityConfig,
    "oidc_auth_config": OIDCAuthConfig,
}


def _coerce_user_config(value: Any) -> UserConfig | None:
    """사용자/그룹 레코드는 하나씩 검증, 나머지 필드가 잘못되면 기본값."""
    if isinstance(value, UserConfig):
        return value
    if not isinstance(value, dict):
        return None

    users = _valid_items(value.get("users"), UserRecord, "user_config.users")
    tags = _valid_items(value.get("tags"), UserTag, "user_config.tags")
    allow_register = value.get("allow_register")
    try:
        return UserConfig.model_validate(
            {"allow_register": allow_register, "users": users, "tags": tags}
            if allow_register is not None
            else {"users": users, "tags": tags}
        )
    except ValidationError:
        logger.warning("stored_section_dropped", field="user_config.allow_register")
        return UserConfig(users=users, tags=tags)


class AdminConfig(BaseModel):
    """관리 설정 문서.

    Firestore Collection: admin_config (단일 문서)
    """

    config_file: str = Field("", description="구독 파일 원문")
    config_subscription: ConfigSubscription = Field(
        default_factory=ConfigSubscription
    )
    site_config: SiteConfig = Field(default_factory=SiteConfig)
    user_config: UserConfig | None = None

    source_config: list[SourceConfig] = Field(default_factory=list)
    custom_categories: list[CustomCategory] = Field(default_factory=list)
    live_config: list[LiveConfig] = Field(default_factory=list)

    # 기능별 설정 블록 (누락 시 self-check가 기본값으로 채움)
    net_disk_config: NetDiskConfig | None = None
    ai_recommend_config: AIRecommendConfig | None = None
    youtube_config: YouTubeConfig | None = None
    short_drama_config: ShortDramaConfig | None = None
    download_config: DownloadConfig | None = None
    douban_config: DoubanConfig | None = None
    cron_config: CronConfig | None = None

    video_proxy_config: VideoProxyConfig | None = None
    tvbox_security_config: TVBoxSecurityConfig | None = None

    # OIDC: 구버전 단일 설정과 신버전 다중 Provider 목록
    oidc_auth_config: OIDCAuthConfig | None = None
    oidc_providers: list[OIDCProvider] | None = None

    @model_validator(mode="before")
    @classmethod
    def coerce_damaged_sections(cls, data: Any) -> Any:
        """손상된 저장 문서를 검증 가능한 형태로 보정.

        레코드 하나가 잘못되었다고 문서 전체를 버리지 않습니다.

        - 컬렉션 필드가 리스트가 아니면 빈 리스트
        - 검증에 실패한 리스트 항목만 제거 (사용자/그룹 포함)
        - 검증에 실패한 섹션은 제거 (기본값/self-check에 맡김)
        """
        if not isinstance(data, dict):
            return data

        data = dict(data)
        for field, model in COLLECTION_MODELS.items():
            data[field] = _valid_items(data.get(field), model, field)

        if "user_config" in data:
            user_config = _coerce_user_config(data["user_config"])
            if user_config is None:
                del data["user_config"]
            else:
                data["user_config"] = user_config

        for field, model in SECTION_MODELS.items():
            if field not in data:
                continue
            section = _valid_section(data[field], model, field)
            if section is None:
                del data[field]
            else:
                data[field] = section

        providers = data.get("oidc_providers")
        if providers is not None:
            if isinstance(providers, list):
                data["oidc_providers"] = _valid_items(
                    providers, OIDCProvider, "oidc_providers"
                )
            else:
                del data["oidc_providers"]

        return data

    model_config = {
        "json_schema_extra": {
            "example": {
                "config_file": '{"api_site": {}}',
                "config_subscription": {
                    "url": "https://example.com/config.json",
                    "auto_update": True,
                    "last_check": "2025-12-26T09:00:00+00:00",
                },
                "site_config": {"site_name": "aithyTV"},
                "source_config": [],
                "custom_categories": [],
                "live_config": [],
            }
        }
    }
