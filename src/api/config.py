"""User-facing config API endpoints.

사용자별로 보이는 소스와 기능 권한을 조회하는 API입니다.
"""

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from src.api.dependencies import get_config_service, get_request_username
from src.services.permission_resolver import SpecialFeature

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/config", tags=["config"])


class SourceListResponse(BaseModel):
    """소스 목록 응답."""

    sources: list[dict[str, Any]]
    total: int


class FeatureResponse(BaseModel):
    """기능 권한 응답."""

    feature: str
    enabled: bool


@router.get("/sources")
async def list_available_sources(request: Request) -> SourceListResponse:
    """요청 사용자에게 보이는 소스 목록.

    Args:
        request: FastAPI 요청 객체

    Returns:
        소스 목록
    """
    username = get_request_username(request)
    service = get_config_service(request)

    sources = service.get_available_sources(username)

    return SourceListResponse(
        sources=[
            s.model_dump(mode="json", include={"key", "name", "api", "detail"})
            for s in sources
        ],
        total=len(sources),
    )


@router.get("/features/{feature}")
async def get_feature_permission(request: Request, feature: str) -> FeatureResponse:
    """특수 기능 사용 권한 조회.

    Args:
        request: FastAPI 요청 객체
        feature: 기능 키 (ai-recommend/youtube-search)

    Returns:
        기능 권한
    """
    try:
        special_feature = SpecialFeature(feature)
    except ValueError:
        raise HTTPException(status_code=404, detail="Unknown feature") from None

    username = get_request_username(request)
    if not username:
        return FeatureResponse(feature=feature, enabled=False)

    service = get_config_service(request)
    enabled = service.has_feature(username, special_feature.value)

    return FeatureResponse(feature=feature, enabled=enabled)


@router.get("/tvbox")
async def get_tvbox_config(request: Request) -> dict[str, Any]:
    """TVBox 설정 화면용 사용자별 정보.

    Args:
        request: FastAPI 요청 객체

    Returns:
        보안 설정, 사이트 이름, 사용자 토큰, 선택 가능한 소스
    """
    username = get_request_username(request)
    if not username:
        raise HTTPException(status_code=401, detail="Unauthorized")

    service = get_config_service(request)
    return service.get_tvbox_user_config(username)
