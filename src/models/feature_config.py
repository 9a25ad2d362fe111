"""Named feature sub-configuration blocks.

각 블록의 기본값은 자가 점검(self-check)이 누락된 섹션을 채울 때 그대로 사용됩니다.
"""

from pydantic import BaseModel, Field

DEFAULT_YOUTUBE_REGIONS = ["US", "CN", "JP", "KR", "GB", "DE", "FR"]
DEFAULT_YOUTUBE_CATEGORIES = [
    "Film & Animation",
    "Music",
    "Gaming",
    "News & Politics",
    "Entertainment",
]


class NetDiskConfig(BaseModel):
    """네트워크 디스크 검색 설정."""

    enabled: bool = True
    pansou_url: str = "https://so.252035.xyz"
    timeout: int = Field(30, description="초 단위")
    enabled_cloud_types: list[str] = Field(
        default_factory=lambda: ["baidu", "aliyun", "quark"]
    )


class AIRecommendConfig(BaseModel):
    """AI 추천 설정."""

    enabled: bool = False
    api_url: str = "https://api.openai.com/v1"
    api_key: str = ""
    model: str = "gpt-3.5-turbo"
    temperature: float = 0.7
    max_tokens: int = 3000


class YouTubeConfig(BaseModel):
    """YouTube 검색 설정."""

    enabled: bool = False
    api_key: str = ""
    enable_demo: bool = True
    max_results: int = 25
    enabled_regions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_YOUTUBE_REGIONS)
    )
    enabled_categories: list[str] = Field(
        default_factory=lambda: list(DEFAULT_YOUTUBE_CATEGORIES)
    )


class ShortDramaConfig(BaseModel):
    """숏드라마 API 설정."""

    primary_api_url: str = "https://wwzy.tv/api.php/provide/vod"
    alternative_api_url: str = ""
    enable_alternative: bool = False


class DownloadConfig(BaseModel):
    """다운로드 기능 설정."""

    enabled: bool = True


class DoubanConfig(BaseModel):
    """Douban 크롤링 설정."""

    enable_puppeteer: bool = False  # headless 브라우저 렌더링


class CronConfig(BaseModel):
    """정기 갱신 작업 설정."""

    enable_auto_refresh: bool = True
    max_records_per_run: int = 100
    only_refresh_recent: bool = True
    recent_days: int = 30
    only_refresh_ongoing: bool = True


class VideoProxyConfig(BaseModel):
    """소스 API 프록시 설정."""

    enabled: bool = False
    proxy_url: str = ""


class TVBoxSecurityConfig(BaseModel):
    """TVBox 설정 엔드포인트 보안 설정."""

    enable_auth: bool = False
    token: str = ""
    enable_ip_whitelist: bool = False
    allowed_ips: list[str] = Field(default_factory=list)
    enable_rate_limit: bool = False
    rate_limit: int = 60


class OIDCAuthConfig(BaseModel):
    """단일 OIDC Provider 설정 (구버전 형식, 마이그레이션 후에도 보존)."""

    enabled: bool = False
    enable_registration: bool = False
    issuer: str = ""
    authorization_endpoint: str = ""
    token_endpoint: str = ""
    user_info_endpoint: str = ""
    client_id: str = ""
    client_secret: str = ""
    button_text: str = ""
    min_trust_level: int = 0


class OIDCProvider(OIDCAuthConfig):
    """다중 OIDC Provider 목록의 항목."""

    id: str
    name: str
