"""Tests for user-facing config API endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.models.source_config import SourceConfig


class TestConfigEndpoints:
    """Tests for /config endpoints."""

    @pytest.fixture
    def app(self) -> FastAPI:
        """테스트용 FastAPI 앱."""
        from src.api.config import router

        app = FastAPI()
        app.include_router(router)
        return app

    @pytest.fixture
    def client(self, app: FastAPI) -> TestClient:
        """테스트 클라이언트."""
        return TestClient(app)

    @pytest.fixture
    def mock_service(self) -> MagicMock:
        """Mock ConfigService."""
        return MagicMock()

    def test_list_sources(self, client: TestClient, mock_service: MagicMock) -> None:
        """GET /config/sources 사용자별 소스 목록."""
        mock_service.get_available_sources.return_value = [
            SourceConfig(key="a", name="A", api="http://a", is_adult=True),
            SourceConfig(key="b", name="B", api="http://b", detail="http://b/d"),
        ]

        with patch("src.api.config.get_config_service", return_value=mock_service):
            response = client.get("/config/sources", headers={"X-Username": "alice"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["sources"][0] == {
            "key": "a",
            "name": "A",
            "api": "http://a",
            "detail": None,
        }
        assert data["sources"][1]["detail"] == "http://b/d"
        mock_service.get_available_sources.assert_called_once_with("alice")

    def test_list_sources_anonymous(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        """사용자 헤더가 없으면 전역 기본값으로 조회."""
        mock_service.get_available_sources.return_value = []

        with patch("src.api.config.get_config_service", return_value=mock_service):
            response = client.get("/config/sources")

        assert response.status_code == 200
        assert response.json() == {"sources": [], "total": 0}
        mock_service.get_available_sources.assert_called_once_with(None)

    def test_feature_permission(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        """GET /config/features/{feature} 권한 조회."""
        mock_service.has_feature.return_value = True

        with patch("src.api.config.get_config_service", return_value=mock_service):
            response = client.get(
                "/config/features/ai-recommend", headers={"X-Username": "alice"}
            )

        assert response.status_code == 200
        assert response.json() == {"feature": "ai-recommend", "enabled": True}
        mock_service.has_feature.assert_called_once_with("alice", "ai-recommend")

    def test_feature_unknown(self, client: TestClient) -> None:
        """알 수 없는 기능은 404."""
        response = client.get("/config/features/teleport", headers={"X-Username": "a"})

        assert response.status_code == 404

    def test_feature_anonymous_disabled(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        """비로그인 요청은 저장소 조회 없이 거부."""
        with patch("src.api.config.get_config_service", return_value=mock_service):
            response = client.get("/config/features/youtube-search")

        assert response.status_code == 200
        assert response.json()["enabled"] is False
        mock_service.has_feature.assert_not_called()

    def test_tvbox_config(self, client: TestClient, mock_service: MagicMock) -> None:
        """GET /config/tvbox 사용자별 TVBox 정보."""
        mock_service.get_tvbox_user_config.return_value = {
            "security_config": {"enable_auth": False},
            "site_name": "aithyTV",
            "user_token": "tok",
            "user_enabled_sources": [],
            "all_sources": [{"key": "a", "name": "A"}],
        }

        with patch("src.api.config.get_config_service", return_value=mock_service):
            response = client.get("/config/tvbox", headers={"X-Username": "alice"})

        assert response.status_code == 200
        assert response.json()["user_token"] == "tok"
        mock_service.get_tvbox_user_config.assert_called_once_with("alice")

    def test_tvbox_requires_user(self, client: TestClient) -> None:
        """사용자 헤더가 없으면 401."""
        response = client.get("/config/tvbox")

        assert response.status_code == 401
