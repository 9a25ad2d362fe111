"""Subscription reconciliation engine.

구독 파일과 관리자가 수정한 설정을 병합합니다.

병합 규칙 (소스/카테고리/라이브 공통, identity key 기준):
1. 현재 문서의 컬렉션으로 키 → 레코드 맵 생성 (수동 수정 사항 보존)
2. 구독에 존재하는 키 집합 계산
3. provenance=subscription 이면서 구독에 없는 레코드 제거 (manual은 절대 제거하지 않음)
4. 구독 항목 upsert: 기존 레코드는 upstream 필드만 갱신, 없으면 새로 추가
5. 기존 레코드(원래 순서) → 새 레코드(구독 순서) 순으로 리스트 복원

같은 구독으로 두 번 적용해도 결과가 같습니다 (멱등).
"""

from collections.abc import Callable, Hashable
from typing import TypeVar

import structlog

from src.models.admin_config import AdminConfig, ConfigSubscription, SiteConfig
from src.models.source_config import (
    CustomCategory,
    LiveConfig,
    Provenance,
    SourceConfig,
)
from src.models.subscription import (
    ParsedSubscription,
    SubscribedApiSite,
    SubscribedCategory,
    SubscribedLive,
)
from src.models.user import UserConfig, UserRecord, UserRole
from src.services.subscription_parser import parse_subscription

logger = structlog.get_logger(__name__)

R = TypeVar("R", SourceConfig, CustomCategory, LiveConfig)
E = TypeVar("E", SubscribedApiSite, SubscribedCategory, SubscribedLive)


def merge_collection(
    current: list[R],
    incoming: list[E],
    record_key: Callable[[R], Hashable],
    entry_key: Callable[[E], Hashable],
    update_record: Callable[[R, E], R],
    create_record: Callable[[E], R],
) -> list[R]:
    """provenance를 고려한 키 기반 병합.

    Args:
        current: 현재 문서의 레코드 목록.
        incoming: 구독 항목 목록.
        record_key: 레코드의 identity key.
        entry_key: 구독 항목의 identity key.
        update_record: 기존 레코드에 upstream 필드를 덮어쓴 새 레코드 반환.
        create_record: 구독 항목으로 새 레코드 생성.

    Returns:
        병합된 레코드 목록.
    """
    merged: dict[Hashable, R] = {}
    for record in current:
        merged.setdefault(record_key(record), record)

    incoming_keys = {entry_key(entry) for entry in incoming}
    stale_keys = [
        key
        for key, record in merged.items()
        if record.provenance == Provenance.SUBSCRIPTION and key not in incoming_keys
    ]
    for key in stale_keys:
        del merged[key]

    for entry in incoming:
        key = entry_key(entry)
        existing = merged.get(key)
        if existing is not None:
            merged[key] = update_record(existing, entry)
        else:
            merged[key] = create_record(entry)

    return list(merged.values())


# ============================================================================
# 컬렉션별 upstream 필드 / 기본값
# ============================================================================


def _update_source(record: SourceConfig, site: SubscribedApiSite) -> SourceConfig:
    # provenance, type, is_adult, disabled는 관리자 설정 유지
    return record.model_copy(
        update={"name": site.name, "api": site.api, "detail": site.detail}
    )


def _create_source(site: SubscribedApiSite) -> SourceConfig:
    return SourceConfig(
        key=site.key,
        name=site.name,
        api=site.api,
        detail=site.detail,
        provenance=Provenance.SUBSCRIPTION,
        disabled=False,
        type="vod",
    )


def _update_category(
    record: CustomCategory, category: SubscribedCategory
) -> CustomCategory:
    return record.model_copy(
        update={
            "name": category.name or category.query,
            "query": category.query,
            "type": category.type,
        }
    )


def _create_category(category: SubscribedCategory) -> CustomCategory:
    return CustomCategory(
        name=category.name or category.query,
        type=category.type,
        query=category.query,
        provenance=Provenance.SUBSCRIPTION,
        disabled=False,
    )


def _update_live(record: LiveConfig, live: SubscribedLive) -> LiveConfig:
    # channel_number, disabled, provenance는 관리자 설정 유지
    return record.model_copy(
        update={"name": live.name, "url": live.url, "ua": live.ua, "epg": live.epg}
    )


def _create_live(live: SubscribedLive) -> LiveConfig:
    return LiveConfig(
        key=live.key,
        name=live.name,
        url=live.url,
        ua=live.ua,
        epg=live.epg,
        is_tvbox=live.is_tvbox,
        channel_number=0,
        provenance=Provenance.SUBSCRIPTION,
        disabled=False,
    )


def reconcile(current: AdminConfig, subscription: ParsedSubscription) -> AdminConfig:
    """구독을 현재 설정에 병합.

    입력 문서는 변경하지 않습니다.

    Args:
        current: 현재 관리 설정.
        subscription: 파싱된 구독.

    Returns:
        병합된 새 관리 설정.
    """
    config = current.model_copy(deep=True)

    config.source_config = merge_collection(
        config.source_config,
        subscription.api_sites,
        record_key=lambda s: s.key,
        entry_key=lambda s: s.key,
        update_record=_update_source,
        create_record=_create_source,
    )
    config.custom_categories = merge_collection(
        config.custom_categories,
        subscription.custom_categories,
        record_key=lambda c: c.identity,
        entry_key=lambda c: c.identity,
        update_record=_update_category,
        create_record=_create_category,
    )
    config.live_config = merge_collection(
        config.live_config,
        subscription.lives,
        record_key=lambda live: live.key,
        entry_key=lambda live: live.key,
        update_record=_update_live,
        create_record=_create_live,
    )

    logger.info(
        "config_reconciled",
        source_count=len(config.source_config),
        category_count=len(config.custom_categories),
        live_count=len(config.live_config),
        subscription_empty=subscription.is_empty,
    )
    return config


def reconcile_config_file(current: AdminConfig) -> AdminConfig:
    """문서에 저장된 구독 원문(config_file)을 다시 파싱하여 병합."""
    return reconcile(current, parse_subscription(current.config_file))


def build_initial_config(
    config_file: str,
    subscription_meta: ConfigSubscription | None,
    site_config: SiteConfig,
    usernames: list[str],
    owner_username: str,
) -> AdminConfig:
    """기본값으로 새 관리 설정 생성.

    최초 접근 시 또는 관리자 초기화 시 사용됩니다.
    구독 원문과 구독 메타데이터만 이전 설정에서 이어받습니다.

    Args:
        config_file: 구독 파일 원문.
        subscription_meta: 구독 URL 메타데이터.
        site_config: 환경변수 기반 사이트 설정.
        usernames: Entity Store의 사용자 이름 목록.
        owner_username: 사이트 소유자 계정.

    Returns:
        초기화된 관리 설정.
    """
    subscription = parse_subscription(config_file)

    users = [UserRecord(username=owner_username, role=UserRole.OWNER)]
    users.extend(
        UserRecord(username=username, role=UserRole.USER)
        for username in usernames
        if username != owner_username
    )

    site = site_config.model_copy()
    if subscription.cache_time:
        site.site_interface_cache_time = subscription.cache_time

    empty = AdminConfig(
        config_file=config_file,
        config_subscription=subscription_meta or ConfigSubscription(),
        site_config=site,
        user_config=UserConfig(allow_register=True, users=users),
    )
    return reconcile(empty, subscription)
