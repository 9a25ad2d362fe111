"""Video source, custom category and live channel records.

관리 설정 문서 안의 세 컬렉션(비디오 소스, 사용자 정의 카테고리, 라이브 채널)을 정의합니다.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Provenance(str, Enum):
    """레코드 출처.

    subscription 출처 레코드만 구독에서 사라졌을 때 자동 삭제됩니다.
    """

    SUBSCRIPTION = "subscription"  # 구독 파일에서 가져옴
    MANUAL = "manual"  # 관리자가 직접 추가


class MediaType(str, Enum):
    """카테고리 미디어 타입."""

    MOVIE = "movie"
    TV = "tv"


class SourceConfig(BaseModel):
    """비디오 검색/상세 API 소스.

    Identity key: key
    """

    key: str = Field(..., description="고유 키")
    name: str = Field(..., description="소스 이름")
    api: str = Field(..., description="검색 API 엔드포인트")
    detail: str | None = Field(None, description="상세 API 엔드포인트")
    provenance: Provenance = Field(Provenance.MANUAL, description="출처")
    is_adult: bool = Field(False, description="성인 콘텐츠 소스 여부")
    disabled: bool = Field(False, description="비활성화 여부")
    type: str = Field("vod", description="소스 종류 (vod/shortdrama)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "key": "heimuer",
                "name": "黑木耳",
                "api": "https://json.heimuer.xyz/api.php/provide/vod",
                "provenance": "subscription",
                "is_adult": False,
                "disabled": False,
                "type": "vod",
            }
        }
    }


class CustomCategory(BaseModel):
    """사용자 정의 카테고리.

    Identity key: (query, type)
    """

    name: str | None = Field(None, description="표시 이름 (없으면 query)")
    type: MediaType = Field(..., description="미디어 타입 (movie/tv)")
    query: str = Field(..., description="검색어")
    provenance: Provenance = Field(Provenance.MANUAL, description="출처")
    disabled: bool = Field(False, description="비활성화 여부")

    @property
    def identity(self) -> tuple[str, str]:
        """Composite identity key."""
        return (self.query, self.type.value)


class LiveConfig(BaseModel):
    """라이브 채널 소스 (m3u/txt 목록).

    Identity key: key
    """

    key: str = Field(..., description="고유 키")
    name: str = Field(..., description="채널 소스 이름")
    url: str = Field(..., description="채널 목록 URL")
    ua: str | None = Field(None, description="요청 User-Agent")
    epg: str | None = Field(None, description="EPG(편성표) URL")
    is_tvbox: bool | None = Field(None, description="TVBox 형식 여부")
    channel_number: int = Field(0, ge=0, description="채널 수")
    provenance: Provenance = Field(Provenance.MANUAL, description="출처")
    disabled: bool = Field(False, description="비활성화 여부")
