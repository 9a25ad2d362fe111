"""Config service: entry points for reading and mutating the admin config.

모든 호출은 저장소에서 최신 문서를 새로 읽습니다 (프로세스 내 캐시 없음).
동시 저장은 잠금 없이 마지막 쓰기가 우선합니다.
"""

from datetime import UTC, datetime
from typing import Any

import structlog

from src.models.admin_config import DEFAULT_CACHE_TIME, AdminConfig, SiteConfig
from src.models.feature_config import TVBoxSecurityConfig
from src.models.source_config import SourceConfig
from src.repositories.admin_config_repo import AdminConfigRepository
from src.repositories.user_repo import UserRepository
from src.services import permission_resolver
from src.services.config_reconciler import build_initial_config, reconcile_config_file
from src.services.config_self_check import self_check

logger = structlog.get_logger(__name__)


class ConfigService:
    """관리 설정 조회/수정 서비스."""

    def __init__(
        self,
        config_repo: AdminConfigRepository,
        user_repo: UserRepository,
        owner_username: str,
        default_site_config: SiteConfig,
    ) -> None:
        """ConfigService 초기화.

        Args:
            config_repo: 관리 설정 리포지토리
            user_repo: 사용자 리포지토리
            owner_username: 사이트 소유자 계정
            default_site_config: 초기화 시 사용할 사이트 설정
        """
        self.config_repo = config_repo
        self.user_repo = user_repo
        self.owner_username = owner_username
        self.default_site_config = default_site_config

    # ========================================================================
    # 조회
    # ========================================================================

    def _load(self) -> AdminConfig | None:
        try:
            return self.config_repo.load()
        except Exception as e:
            logger.error("admin_config_load_failed", error=str(e))
            return None

    def _list_usernames(self) -> list[str]:
        try:
            return self.user_repo.list_usernames()
        except Exception as e:
            logger.error("user_list_load_failed", error=str(e))
            return []

    def _initial_config(
        self, previous: AdminConfig | None = None
    ) -> AdminConfig:
        return build_initial_config(
            config_file=previous.config_file if previous else "",
            subscription_meta=previous.config_subscription if previous else None,
            site_config=self.default_site_config,
            usernames=self._list_usernames(),
            owner_username=self.owner_username,
        )

    def get_config(self) -> AdminConfig:
        """최신 관리 설정 조회 (자가 점검 적용).

        저장된 문서가 없으면 기본값으로 초기화합니다 (저장은 하지 않음).

        Returns:
            점검된 관리 설정.
        """
        config = self._load()
        if config is None:
            logger.info("admin_config_initialized")
            config = self._initial_config()
        return self_check(config, self.user_repo, self.owner_username)

    def get_cache_time(self) -> int:
        """인터페이스 캐시 시간 (초)."""
        return self.get_config().site_config.site_interface_cache_time or (
            DEFAULT_CACHE_TIME
        )

    # ========================================================================
    # 수정
    # ========================================================================

    def save_config(self, config: AdminConfig) -> AdminConfig:
        """관리자 수정 사항 저장.

        Args:
            config: 수정된 관리 설정.

        Returns:
            점검 후 저장된 설정.
        """
        checked = self_check(config, self.user_repo, self.owner_username)
        self.config_repo.save(checked)
        logger.info("admin_config_saved")
        return checked

    def update_config_file(self, raw_text: str) -> AdminConfig:
        """구독 파일 원문을 교체하고 병합 후 저장.

        Args:
            raw_text: 새 구독 파일 원문.

        Returns:
            병합 후 저장된 설정.
        """
        config = self.get_config()
        config.config_file = raw_text
        merged = reconcile_config_file(config)
        self.config_repo.save(merged)
        logger.info("config_file_updated", size=len(raw_text))
        return merged

    def refresh_subscription(self, fetched_text: str) -> AdminConfig:
        """구독 URL에서 가져온 원문으로 병합 후 저장.

        Args:
            fetched_text: 구독 URL 응답 원문.

        Returns:
            병합 후 저장된 설정.
        """
        config = self.get_config()
        config.config_file = fetched_text
        config.config_subscription.last_check = datetime.now(UTC).isoformat()
        merged = reconcile_config_file(config)
        self.config_repo.save(merged)
        logger.info(
            "subscription_refreshed",
            url=merged.config_subscription.url,
            source_count=len(merged.source_config),
        )
        return merged

    def reset_config(self) -> AdminConfig:
        """관리 설정 초기화.

        구독 원문과 구독 메타데이터를 제외한 모든 수동 수정 사항을 버립니다.

        Returns:
            초기화 후 저장된 설정.
        """
        previous = self._load()
        config = self._initial_config(previous)
        self.config_repo.save(config)
        logger.info("admin_config_reset")
        return config

    # ========================================================================
    # 권한
    # ========================================================================

    def get_available_sources(self, username: str | None = None) -> list[SourceConfig]:
        """사용자에게 보이는 소스 목록."""
        return permission_resolver.resolve_visible_sources(
            self.get_config(), username, self.owner_username
        )

    def has_feature(self, username: str, feature: str) -> bool:
        """특수 기능 사용 권한.

        owner는 저장소를 읽지 않고 허용하며, 저장소 오류 시 owner만 허용합니다.
        """
        if username == self.owner_username:
            return True
        try:
            config = self.get_config()
        except Exception as e:
            logger.error("feature_check_failed", username=username, error=str(e))
            return False
        return permission_resolver.has_feature(
            config, username, feature, self.owner_username
        )

    def get_tvbox_user_config(self, username: str) -> dict[str, Any]:
        """TVBox 설정 화면용 사용자별 정보.

        Args:
            username: 요청 사용자.

        Returns:
            보안 설정, 사이트 이름, 사용자 토큰/소스, 선택 가능한 전체 소스.
        """
        config = self.get_config()
        security = config.tvbox_security_config or TVBoxSecurityConfig()
        user = (
            config.user_config.find_user(username) if config.user_config else None
        )

        return {
            "security_config": security.model_dump(mode="json"),
            "site_name": config.site_config.site_name or "aithyTV",
            "user_token": (user.tvbox_token if user else None) or "",
            "user_enabled_sources": (user.tvbox_enabled_sources if user else None)
            or [],
            "all_sources": [
                {"key": s.key, "name": s.name}
                for s in config.source_config
                if not s.disabled
            ],
        }
