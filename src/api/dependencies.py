"""Shared request-scoped helpers for API routers."""

from fastapi import Request

from src.adapters.firestore_client import FirestoreClient
from src.config.logging import bind_request_user
from src.config.settings import Settings, get_settings
from src.repositories.admin_config_repo import AdminConfigRepository
from src.repositories.user_repo import UserRepository
from src.services.config_service import ConfigService

# 인증은 앞단(리버스 프록시/세션 미들웨어)에서 처리하고 사용자 이름만 전달받음
USERNAME_HEADER = "X-Username"


def _settings(request: Request | None) -> Settings:
    if request and hasattr(request.app.state, "settings"):
        return request.app.state.settings  # type: ignore[no-any-return]
    return get_settings()


def get_config_service(request: Request | None = None) -> ConfigService:
    """요청마다 새 ConfigService 생성."""
    settings = _settings(request)
    if request and hasattr(request.app.state, "firestore"):
        firestore = request.app.state.firestore
    else:
        firestore = FirestoreClient(project_id=settings.GCP_PROJECT_ID)

    return ConfigService(
        config_repo=AdminConfigRepository(firestore),
        user_repo=UserRepository(firestore),
        owner_username=settings.USERNAME,
        default_site_config=settings.default_site_config(),
    )


def get_request_username(request: Request) -> str | None:
    """요청 헤더의 사용자 이름 (로그 컨텍스트에도 바인딩)."""
    username = request.headers.get(USERNAME_HEADER) or None
    bind_request_user(username)
    return username
