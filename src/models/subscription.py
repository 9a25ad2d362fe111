"""Parsed subscription file models.

구독 파일(api_site / custom_category / lives)을 정규화한 결과입니다.
"""

from pydantic import BaseModel, Field

from src.models.source_config import MediaType


class SubscribedApiSite(BaseModel):
    """구독 파일의 api_site 항목."""

    key: str
    name: str
    api: str
    detail: str | None = None


class SubscribedCategory(BaseModel):
    """구독 파일의 custom_category 항목."""

    name: str | None = None
    type: MediaType
    query: str

    @property
    def identity(self) -> tuple[str, str]:
        """Composite identity key, same shape as CustomCategory.identity."""
        return (self.query, self.type.value)


class SubscribedLive(BaseModel):
    """구독 파일의 lives 항목."""

    key: str
    name: str
    url: str
    ua: str | None = None
    epg: str | None = None
    is_tvbox: bool | None = None


class ParsedSubscription(BaseModel):
    """정규화된 구독 파일.

    파싱 실패 시 모든 컬렉션이 빈 상태로 반환됩니다.
    """

    api_sites: list[SubscribedApiSite] = Field(default_factory=list)
    custom_categories: list[SubscribedCategory] = Field(default_factory=list)
    lives: list[SubscribedLive] = Field(default_factory=list)
    cache_time: int | None = Field(None, description="인터페이스 캐시 시간 (초)")

    @property
    def is_empty(self) -> bool:
        """True when the subscription carries no records at all."""
        return not (self.api_sites or self.custom_categories or self.lives)
