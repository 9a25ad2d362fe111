"""User, user group (tag) and stored profile models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """사용자 역할."""

    OWNER = "owner"  # 환경변수로 지정된 단 한 명
    ADMIN = "admin"
    USER = "user"


class UserRecord(BaseModel):
    """관리 설정 문서 안의 사용자 설정.

    enabled_apis는 소스 키와 특수 기능 키(ai-recommend 등)를 함께 담는 허용 목록입니다.
    """

    username: str = Field(..., description="사용자 이름 (고유)")
    role: UserRole = Field(UserRole.USER, description="역할")
    banned: bool = Field(False, description="차단 여부")
    created_at: datetime | None = Field(None, description="가입 시간")
    oidc_sub: str | None = Field(None, description="OIDC subject ID")
    tags: list[str] | None = Field(None, description="소속 사용자 그룹")
    enabled_apis: list[str] | None = Field(None, description="허용 소스/기능 목록")
    show_adult_content: bool | None = Field(
        None, description="성인 콘텐츠 표시 (None = 그룹/전역 설정 따름)"
    )
    tvbox_token: str | None = Field(None, description="TVBox 개인 토큰")
    tvbox_enabled_sources: list[str] | None = Field(
        None, description="TVBox에 노출할 소스 키"
    )


class UserTag(BaseModel):
    """사용자 그룹 (Tag)."""

    name: str = Field(..., description="그룹 이름 (고유)")
    enabled_apis: list[str] | None = Field(None, description="허용 소스/기능 목록")
    show_adult_content: bool | None = Field(None, description="성인 콘텐츠 표시")


class UserConfig(BaseModel):
    """사용자 관련 설정 섹션."""

    allow_register: bool = Field(True, description="자가 가입 허용")
    users: list[UserRecord] = Field(default_factory=list)
    tags: list[UserTag] = Field(default_factory=list)

    def find_user(self, username: str) -> UserRecord | None:
        """Find a user record by username."""
        return next((u for u in self.users if u.username == username), None)

    def find_tag(self, name: str) -> UserTag | None:
        """Find a user group by name."""
        return next((t for t in self.tags if t.name == name), None)


class UserProfile(BaseModel):
    """Entity Store에 저장된 사용자 프로필.

    Firestore Collection: users (document ID = username)
    """

    created_at: datetime | None = None
    oidc_sub: str | None = None
    tags: list[str] | None = None
    role: UserRole | None = None
    banned: bool | None = None
    enabled_apis: list[str] | None = None

    model_config = {"extra": "ignore"}
