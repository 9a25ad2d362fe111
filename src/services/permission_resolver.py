"""Per-user source visibility and feature entitlement.

사용자 → 사용자 그룹(tag) → 전역 순서로 권한을 계산합니다.
모든 함수는 순수 함수이며 저장소에 접근하지 않습니다.
"""

import re
from enum import Enum
from urllib.parse import quote, unquote, urlparse

import structlog

from src.models.admin_config import AdminConfig
from src.models.source_config import SourceConfig
from src.models.user import UserRecord, UserRole, UserTag

logger = structlog.get_logger(__name__)

# 이 접두 라벨이면 호스트의 끝에서 두 번째 라벨을 사용 (caiji.xxx.com → xxx)
GENERIC_HOST_PREFIXES = {"caiji", "api", "cj", "www"}

# 이전 프록시가 적용된 URL의 원본 주소 파라미터
PROXIED_URL_PATTERN = re.compile(r"[?&]url=([^&]+)")

NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]")


class SpecialFeature(str, Enum):
    """관리자가 사용자/그룹 단위로 허용하는 특수 기능."""

    AI_RECOMMEND = "ai-recommend"
    YOUTUBE_SEARCH = "youtube-search"


def _user_tags(config: AdminConfig, user: UserRecord) -> list[UserTag]:
    """사용자가 속한 그룹 중 실제로 정의된 그룹 목록."""
    if not user.tags or config.user_config is None:
        return []
    tags = (config.user_config.find_tag(name) for name in user.tags)
    return [tag for tag in tags if tag is not None]


def _find_user(config: AdminConfig, username: str | None) -> UserRecord | None:
    if not username or config.user_config is None:
        return None
    return config.user_config.find_user(username)


def _is_owner(
    config: AdminConfig, username: str | None, owner_username: str | None
) -> bool:
    """지정된 owner 계정이거나 문서에서 owner 역할을 가진 사용자."""
    if not username:
        return False
    if owner_username and username == owner_username:
        return True
    user = _find_user(config, username)
    return user is not None and user.role == UserRole.OWNER


def resolve_show_adult_content(
    config: AdminConfig,
    username: str | None,
    owner_username: str | None = None,
) -> bool:
    """성인 콘텐츠 표시 여부 계산.

    우선순위 (첫 매칭 규칙 적용):
    1. owner → 허용
    2. 사용자 개별 설정
    3. 소속 그룹 중 하나라도 허용 → 허용 (합집합)
    4. 소속 그룹 중 하나라도 명시적 거부 → 거부
    5. 전역 설정

    Args:
        config: 관리 설정.
        username: 요청 사용자 (없으면 전역 설정).
        owner_username: 사이트 소유자 계정 (없으면 문서의 owner 역할로 판단).

    Returns:
        성인 콘텐츠 표시 여부.
    """
    if _is_owner(config, username, owner_username):
        return True

    global_default = config.site_config.show_adult_content
    user = _find_user(config, username)
    if user is None:
        return global_default

    if user.show_adult_content is not None:
        return user.show_adult_content

    tags = _user_tags(config, user)
    if any(tag.show_adult_content is True for tag in tags):
        return True
    if any(tag.show_adult_content is False for tag in tags):
        return False

    return global_default


def extract_source_id(api_url: str, fallback_key: str = "", name: str = "") -> str:
    """API 주소의 호스트 이름으로 프록시 라우팅용 소스 ID 생성.

    - caiji/api/cj/www 접두 + 라벨 3개 이상: 끝에서 두 번째 라벨
    - 그 외: 첫 라벨에서 zyapi/zy/api 접미 제거
    - 호스트를 얻을 수 없으면 소스 키 (없으면 이름의 영숫자)

    Args:
        api_url: 실제 API 주소.
        fallback_key: 호스트를 얻을 수 없을 때 쓸 소스 키.
        name: 소스 키도 없을 때 쓸 소스 이름.

    Returns:
        영문 소문자/숫자로 된 소스 ID.
    """
    try:
        hostname = urlparse(api_url).hostname
    except ValueError:
        hostname = None

    if not hostname:
        return fallback_key or NON_ALNUM_PATTERN.sub("", name)

    parts = hostname.split(".")
    if len(parts) >= 3 and parts[0] in GENERIC_HOST_PREFIXES:
        return NON_ALNUM_PATTERN.sub("", parts[-2].lower())

    label = parts[0].lower()
    label = re.sub(r"zyapi$", "", label)
    label = re.sub(r"zy$", "", label)
    label = re.sub(r"api$", "", label)
    return NON_ALNUM_PATTERN.sub("", label) or "source"


def apply_video_proxy(
    sources: list[SourceConfig], config: AdminConfig
) -> list[SourceConfig]:
    """전역 프록시가 켜져 있으면 모든 소스의 API 주소를 프록시 주소로 교체.

    Args:
        sources: 대상 소스 목록.
        config: 관리 설정.

    Returns:
        API 주소가 교체된 소스 복사본 목록 (프록시 꺼짐이면 입력 그대로).
    """
    proxy = config.video_proxy_config
    if proxy is None or not proxy.enabled or not proxy.proxy_url:
        return sources

    proxy_base = proxy.proxy_url.rstrip("/")
    proxied: list[SourceConfig] = []
    for source in sources:
        real_api = source.api
        match = PROXIED_URL_PATTERN.search(source.api)
        if match:
            # 이미 다른 프록시로 감싸진 주소는 원본으로 되돌린 뒤 다시 적용
            real_api = unquote(match.group(1))

        source_id = extract_source_id(real_api, source.key, source.name)
        api = f"{proxy_base}/p/{source_id}?url={quote(real_api, safe='')}"
        proxied.append(source.model_copy(update={"api": api}))

    logger.debug("video_proxy_applied", source_count=len(proxied))
    return proxied


def resolve_visible_sources(
    config: AdminConfig,
    username: str | None = None,
    owner_username: str | None = None,
) -> list[SourceConfig]:
    """사용자에게 보이는 소스 목록 계산.

    1. 비활성 소스 제외, 성인 콘텐츠 불가면 성인 소스 제외
    2. 사용자 enabled_apis가 있으면 그 목록으로 제한
    3. 없으면 소속 그룹 enabled_apis의 합집합으로 제한
    4. 둘 다 없으면 제한 없음
    5. 전역 프록시 적용

    Args:
        config: 관리 설정.
        username: 요청 사용자 (없거나 미등록이면 사용자별 제한 없음).
        owner_username: 사이트 소유자 계정 (없으면 문서의 owner 역할로 판단).

    Returns:
        표시 가능한 소스 목록 (원래 순서 유지).
    """
    show_adult = resolve_show_adult_content(config, username, owner_username)
    available = [
        s
        for s in config.source_config
        if not s.disabled and (show_adult or not s.is_adult)
    ]

    user = _find_user(config, username)
    if user is None:
        return apply_video_proxy(available, config)

    if user.enabled_apis:
        allowed = set(user.enabled_apis)
        return apply_video_proxy([s for s in available if s.key in allowed], config)

    allowed_from_tags: set[str] = set()
    for tag in _user_tags(config, user):
        allowed_from_tags.update(tag.enabled_apis or [])
    if allowed_from_tags:
        return apply_video_proxy(
            [s for s in available if s.key in allowed_from_tags], config
        )

    return apply_video_proxy(available, config)


def has_feature(
    config: AdminConfig,
    username: str,
    feature: str,
    owner_username: str | None = None,
) -> bool:
    """특수 기능 사용 권한 확인.

    owner → 등록되지 않은 사용자(거부) → admin → 사용자 허용 목록 → 그룹 허용 목록 순.

    Args:
        config: 관리 설정.
        username: 사용자 이름.
        feature: 기능 키 (예: ai-recommend).
        owner_username: 사이트 소유자 계정 (없으면 문서의 owner 역할로 판단).

    Returns:
        사용 가능 여부.
    """
    if _is_owner(config, username, owner_username):
        return True

    user = _find_user(config, username)
    if user is None:
        return False

    if user.role == UserRole.ADMIN:
        return True

    if user.enabled_apis and feature in user.enabled_apis:
        return True

    return any(
        tag.enabled_apis and feature in tag.enabled_apis
        for tag in _user_tags(config, user)
    )
