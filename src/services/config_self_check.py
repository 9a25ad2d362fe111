"""Config self-check (idempotent repair).

설정을 읽을 때마다 실행되는 유일한 일관성 복구 단계입니다.
같은 저장소 상태에서 두 번 실행해도 결과가 같아야 합니다 (고정점).
"""

from collections.abc import Callable, Hashable
from typing import TypeVar

import structlog

from src.models.admin_config import AdminConfig
from src.models.feature_config import (
    AIRecommendConfig,
    CronConfig,
    DoubanConfig,
    DownloadConfig,
    NetDiskConfig,
    ShortDramaConfig,
    YouTubeConfig,
)
from src.models.user import UserConfig, UserRecord, UserRole
from src.repositories.user_repo import UserRepository
from src.services.config_migrations import run_migrations

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# 누락 시 기본값으로 채울 기능 설정 블록
DEFAULT_SECTIONS: dict[str, Callable[[], object]] = {
    "net_disk_config": NetDiskConfig,
    "ai_recommend_config": AIRecommendConfig,
    "youtube_config": YouTubeConfig,
    "short_drama_config": ShortDramaConfig,
    "download_config": DownloadConfig,
    "douban_config": DoubanConfig,
    "cron_config": CronConfig,
}


def dedupe_by_key(items: list[T], key: Callable[[T], Hashable]) -> list[T]:
    """키 기준 중복 제거 (첫 번째 항목 유지, 순서 보존)."""
    seen: set[Hashable] = set()
    unique: list[T] = []
    for item in items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        unique.append(item)
    return unique


def _synthesize_user(
    username: str, user_repo: UserRepository, owner_username: str
) -> UserRecord:
    """문서에 없는 가입 사용자의 레코드를 저장소 프로필로 생성."""
    role = UserRole.OWNER if username == owner_username else UserRole.USER
    # created_at은 프로필 값만 사용 (없으면 None)
    record = UserRecord(username=username, role=role)

    try:
        profile = user_repo.get_profile(username)
    except Exception as e:
        logger.warning("user_profile_load_failed", username=username, error=str(e))
        return record

    if profile is None:
        return record

    if profile.created_at is not None:
        record.created_at = profile.created_at
    record.oidc_sub = profile.oidc_sub
    record.role = profile.role or role
    record.banned = bool(profile.banned)
    if profile.tags:
        record.tags = list(profile.tags)
    if profile.enabled_apis:
        record.enabled_apis = list(profile.enabled_apis)
    return record


def _refresh_users(
    user_config: UserConfig, user_repo: UserRepository, owner_username: str
) -> None:
    """사용자 목록을 저장소의 가입자 목록으로 재구성.

    기존 레코드는 그대로 유지되고, 저장소에 없는 사용자는 제거됩니다.
    저장소 조회에 실패하면 기존 목록을 유지합니다.
    """
    try:
        usernames = user_repo.list_usernames()
    except Exception as e:
        logger.error("user_list_load_failed", error=str(e))
        return

    refreshed: list[UserRecord] = []
    for username in usernames:
        existing = user_config.find_user(username)
        if existing is not None:
            refreshed.append(existing)
        else:
            refreshed.append(_synthesize_user(username, user_repo, owner_username))
            logger.info("user_record_synthesized", username=username)

    user_config.users = refreshed


def _enforce_single_owner(user_config: UserConfig, owner_username: str) -> None:
    """owner는 환경변수로 지정된 계정 하나뿐이도록 보정."""
    users = dedupe_by_key(user_config.users, lambda u: u.username)
    previous_owner = next((u for u in users if u.username == owner_username), None)

    others: list[UserRecord] = []
    for user in users:
        if user.username == owner_username:
            continue
        if user.role == UserRole.OWNER:
            logger.warning("extra_owner_demoted", username=user.username)
            user.role = UserRole.USER
        others.append(user)

    owner = UserRecord(
        username=owner_username,
        role=UserRole.OWNER,
        banned=False,
        enabled_apis=previous_owner.enabled_apis if previous_owner else None,
        tags=previous_owner.tags if previous_owner else None,
    )
    user_config.users = [owner, *others]


def self_check(
    config: AdminConfig, user_repo: UserRepository, owner_username: str
) -> AdminConfig:
    """관리 설정 자가 점검 및 복구.

    - 누락된 섹션을 기본값으로 생성
    - 사용자 목록을 저장소 가입자 목록과 동기화
    - 스키마 마이그레이션 적용
    - owner 단일성 보장
    - 소스/카테고리/라이브 중복 제거

    입력 문서는 변경하지 않으며 예외를 던지지 않습니다.

    Args:
        config: 점검할 관리 설정.
        user_repo: 가입자 목록/프로필 조회용 Repository.
        owner_username: 사이트 소유자 계정.

    Returns:
        복구된 새 관리 설정.
    """
    checked = config.model_copy(deep=True)

    if checked.user_config is None:
        checked.user_config = UserConfig()
    _refresh_users(checked.user_config, user_repo, owner_username)

    for field, factory in DEFAULT_SECTIONS.items():
        if getattr(checked, field) is None:
            setattr(checked, field, factory())
            logger.debug("config_section_defaulted", section=field)

    run_migrations(checked)

    _enforce_single_owner(checked.user_config, owner_username)

    checked.source_config = dedupe_by_key(checked.source_config, lambda s: s.key)
    checked.custom_categories = dedupe_by_key(
        checked.custom_categories, lambda c: c.identity
    )
    checked.live_config = dedupe_by_key(checked.live_config, lambda live: live.key)

    return checked
