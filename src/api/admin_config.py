"""Admin config API endpoints.

관리 설정 조회/저장, 구독 갱신, 초기화 API입니다.
"""

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from src.adapters.subscription_client import SubscriptionClient, SubscriptionFetchError
from src.api.dependencies import get_config_service, get_request_username
from src.config.settings import get_settings
from src.models.admin_config import AdminConfig

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/admin/config", tags=["admin"])


class ConfigFileRequest(BaseModel):
    """구독 파일 원문 교체 요청."""

    config_file: str = Field(..., description="구독 파일 원문 (JSON)")


class SubscriptionRefreshRequest(BaseModel):
    """구독 갱신 요청."""

    url: str | None = Field(None, description="새 구독 URL (없으면 저장된 URL)")
    auto_update: bool | None = Field(None, description="자동 갱신 여부")


def get_subscription_client(request: Request | None = None) -> SubscriptionClient:
    """SubscriptionClient 인스턴스 생성."""
    if request and hasattr(request.app.state, "subscription_client"):
        return request.app.state.subscription_client  # type: ignore[no-any-return]
    settings = get_settings()
    return SubscriptionClient(timeout_seconds=settings.SUBSCRIPTION_TIMEOUT_SECONDS)


@router.get("")
async def get_admin_config(request: Request) -> dict[str, Any]:
    """전체 관리 설정 조회."""
    get_request_username(request)
    service = get_config_service(request)
    return service.get_config().model_dump(mode="json")


@router.put("")
async def save_admin_config(request: Request, body: AdminConfig) -> dict[str, Any]:
    """관리 설정 저장 (관리자 수정 사항 반영).

    Args:
        request: FastAPI 요청 객체
        body: 수정된 관리 설정

    Returns:
        점검 후 저장된 설정
    """
    get_request_username(request)
    service = get_config_service(request)
    saved = service.save_config(body)
    return saved.model_dump(mode="json")


@router.post("/file")
async def update_config_file(
    request: Request, body: ConfigFileRequest
) -> dict[str, Any]:
    """구독 파일 원문 교체 후 병합.

    Args:
        request: FastAPI 요청 객체
        body: 구독 파일 원문

    Returns:
        병합 후 저장된 설정
    """
    get_request_username(request)
    service = get_config_service(request)
    merged = service.update_config_file(body.config_file)
    return merged.model_dump(mode="json")


@router.post("/subscription/refresh")
async def refresh_subscription(
    request: Request, body: SubscriptionRefreshRequest | None = None
) -> dict[str, Any]:
    """구독 URL에서 설정 파일을 가져와 병합.

    Args:
        request: FastAPI 요청 객체
        body: 구독 URL 변경 (선택)

    Returns:
        병합 후 저장된 설정
    """
    get_request_username(request)
    service = get_config_service(request)

    if body and (body.url is not None or body.auto_update is not None):
        config = service.get_config()
        if body.url is not None:
            config.config_subscription.url = body.url
        if body.auto_update is not None:
            config.config_subscription.auto_update = body.auto_update
        service.save_config(config)

    url = service.get_config().config_subscription.url
    if not url:
        raise HTTPException(status_code=400, detail="Subscription URL is not set")

    client = get_subscription_client(request)
    try:
        fetched = await client.fetch(url)
    except SubscriptionFetchError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    merged = service.refresh_subscription(fetched)
    return merged.model_dump(mode="json")


@router.post("/reset")
async def reset_admin_config(request: Request) -> dict[str, Any]:
    """관리 설정 초기화 (구독 원문/URL만 유지)."""
    username = get_request_username(request)
    service = get_config_service(request)
    config = service.reset_config()
    logger.warning("admin_config_reset_requested", requested_by=username)
    return config.model_dump(mode="json")
