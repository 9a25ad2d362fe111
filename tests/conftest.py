"""Pytest configuration and shared fixtures."""

import json
import os
from typing import Any
from unittest.mock import MagicMock

import pytest

from src.models.admin_config import AdminConfig, SiteConfig
from src.models.source_config import Provenance, SourceConfig
from src.models.user import UserConfig, UserRecord, UserRole

OWNER = "owner"


@pytest.fixture(autouse=True)
def set_test_env() -> None:
    """Set test environment variables."""
    os.environ.setdefault("GCP_PROJECT_ID", "test-project")
    os.environ.setdefault("USERNAME", OWNER)
    os.environ.setdefault("FIRESTORE_EMULATOR_HOST", "localhost:8086")


@pytest.fixture
def owner_username() -> str:
    """사이트 소유자 계정."""
    return OWNER


@pytest.fixture
def mock_user_repo() -> MagicMock:
    """Mock UserRepository (가입자: owner, alice, bob)."""
    repo = MagicMock()
    repo.list_usernames.return_value = [OWNER, "alice", "bob"]
    repo.get_profile.return_value = None
    return repo


@pytest.fixture
def subscription_text() -> str:
    """샘플 구독 파일 원문."""
    data: dict[str, Any] = {
        "cache_time": 3600,
        "api_site": {
            "a": {"name": "A", "api": "http://y/a"},
            "b": {"name": "B", "api": "http://y/b", "detail": "http://y/b/detail"},
        },
        "custom_category": [
            {"name": "热门", "type": "movie", "query": "热门"},
            {"type": "tv", "query": "美剧"},
        ],
        "lives": {
            "iptv": {
                "name": "IPTV",
                "url": "http://live/iptv.m3u",
                "ua": "okhttp",
                "epg": "http://live/epg.xml",
            },
        },
    }
    return json.dumps(data, ensure_ascii=False)


@pytest.fixture
def sample_config() -> AdminConfig:
    """owner/alice/bob 사용자와 소스 3개를 가진 설정."""
    return AdminConfig(
        site_config=SiteConfig(site_name="aithyTV"),
        user_config=UserConfig(
            users=[
                UserRecord(username=OWNER, role=UserRole.OWNER),
                UserRecord(username="alice"),
                UserRecord(username="bob"),
            ]
        ),
        source_config=[
            SourceConfig(
                key="s1", name="One", api="http://one.com/api",
                provenance=Provenance.SUBSCRIPTION,
            ),
            SourceConfig(
                key="s2", name="Two", api="http://two.com/api",
                provenance=Provenance.MANUAL,
            ),
            SourceConfig(
                key="s3", name="Three", api="http://three.com/api",
                provenance=Provenance.SUBSCRIPTION,
            ),
        ],
    )
