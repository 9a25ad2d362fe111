"""Subscription file parser.

구독 파일 원문(JSON)을 정규화된 ParsedSubscription으로 변환합니다.
손상된 입력은 예외 없이 빈 구독으로 처리됩니다.
"""

import json
from typing import Any

import structlog
from pydantic import ValidationError

from src.models.subscription import (
    ParsedSubscription,
    SubscribedApiSite,
    SubscribedCategory,
    SubscribedLive,
)

logger = structlog.get_logger(__name__)


def _keyed_entries(section: Any) -> list[tuple[str, dict[str, Any]]]:
    """{key: {...}} 형태의 섹션을 (key, entry) 목록으로 변환."""
    if not isinstance(section, dict):
        return []
    return [
        (str(key), entry) for key, entry in section.items() if isinstance(entry, dict)
    ]


def _parse_api_sites(section: Any) -> list[SubscribedApiSite]:
    sites: list[SubscribedApiSite] = []
    for key, entry in _keyed_entries(section):
        try:
            sites.append(
                SubscribedApiSite(
                    key=key,
                    name=entry.get("name"),
                    api=entry.get("api"),
                    detail=entry.get("detail"),
                )
            )
        except ValidationError:
            logger.debug("subscription_api_site_skipped", key=key)
    return sites


def _parse_categories(section: Any) -> list[SubscribedCategory]:
    if not isinstance(section, list):
        return []

    categories: list[SubscribedCategory] = []
    for entry in section:
        if not isinstance(entry, dict):
            continue
        try:
            categories.append(
                SubscribedCategory(
                    name=entry.get("name"),
                    type=entry.get("type"),
                    query=entry.get("query"),
                )
            )
        except ValidationError:
            logger.debug("subscription_category_skipped", query=entry.get("query"))
    return categories


def _parse_lives(section: Any) -> list[SubscribedLive]:
    lives: list[SubscribedLive] = []
    for key, entry in _keyed_entries(section):
        try:
            lives.append(
                SubscribedLive(
                    key=key,
                    name=entry.get("name"),
                    url=entry.get("url"),
                    ua=entry.get("ua"),
                    epg=entry.get("epg"),
                    is_tvbox=entry.get("isTvBox"),
                )
            )
        except ValidationError:
            logger.debug("subscription_live_skipped", key=key)
    return lives


def _parse_cache_time(value: Any) -> int | None:
    # bool은 int의 하위 타입이므로 제외
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return None


def parse_subscription(raw_text: str | None) -> ParsedSubscription:
    """구독 파일 원문 파싱.

    Args:
        raw_text: 구독 파일 원문 (JSON).

    Returns:
        정규화된 구독. JSON이 아니거나 최상위가 객체가 아니면 빈 구독.
    """
    if not raw_text or not raw_text.strip():
        return ParsedSubscription()

    try:
        data = json.loads(raw_text)
    except (ValueError, TypeError) as e:
        logger.warning("subscription_parse_failed", error=str(e))
        return ParsedSubscription()

    if not isinstance(data, dict):
        logger.warning("subscription_root_not_object", root_type=type(data).__name__)
        return ParsedSubscription()

    parsed = ParsedSubscription(
        api_sites=_parse_api_sites(data.get("api_site")),
        custom_categories=_parse_categories(data.get("custom_category")),
        lives=_parse_lives(data.get("lives")),
        cache_time=_parse_cache_time(data.get("cache_time")),
    )

    logger.debug(
        "subscription_parsed",
        api_site_count=len(parsed.api_sites),
        category_count=len(parsed.custom_categories),
        live_count=len(parsed.lives),
    )
    return parsed
