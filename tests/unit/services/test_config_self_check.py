"""Tests for config self-check."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from src.models.admin_config import AdminConfig
from src.models.feature_config import (
    AIRecommendConfig,
    CronConfig,
    NetDiskConfig,
    OIDCAuthConfig,
    YouTubeConfig,
)
from src.models.source_config import (
    CustomCategory,
    LiveConfig,
    MediaType,
    SourceConfig,
)
from src.models.user import UserConfig, UserProfile, UserRecord, UserRole
from src.services.config_self_check import dedupe_by_key, self_check


class TestSelfCheckSections:
    """누락 섹션 기본값 설치."""

    def test_installs_documented_defaults(
        self, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """빈 문서에 모든 섹션을 기본값으로 생성."""
        result = self_check(AdminConfig(), mock_user_repo, owner_username)

        assert result.user_config is not None
        assert result.user_config.allow_register is True
        assert result.net_disk_config == NetDiskConfig()
        assert result.net_disk_config.timeout == 30
        assert result.net_disk_config.enabled_cloud_types == ["baidu", "aliyun", "quark"]
        assert result.ai_recommend_config is not None
        assert result.ai_recommend_config.enabled is False
        assert result.ai_recommend_config.model == "gpt-3.5-turbo"
        assert result.ai_recommend_config.temperature == 0.7
        assert result.ai_recommend_config.max_tokens == 3000
        assert result.youtube_config is not None
        assert result.youtube_config.enable_demo is True
        assert result.youtube_config.max_results == 25
        assert result.short_drama_config is not None
        assert result.short_drama_config.enable_alternative is False
        assert result.download_config is not None
        assert result.download_config.enabled is True
        assert result.douban_config is not None
        assert result.douban_config.enable_puppeteer is False
        assert result.cron_config == CronConfig()
        assert result.cron_config.max_records_per_run == 100
        assert result.cron_config.recent_days == 30

    def test_existing_sections_untouched(
        self, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """이미 있는 섹션은 변경하지 않음."""
        config = AdminConfig(
            ai_recommend_config=AIRecommendConfig(enabled=True, model="gpt-4o"),
            youtube_config=YouTubeConfig(max_results=50),
        )

        result = self_check(config, mock_user_repo, owner_username)

        assert result.ai_recommend_config is not None
        assert result.ai_recommend_config.model == "gpt-4o"
        assert result.youtube_config is not None
        assert result.youtube_config.max_results == 50


class TestSelfCheckUsers:
    """사용자 목록 동기화와 owner 단일성."""

    def test_synthesizes_missing_users(
        self, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """저장소에만 있는 사용자는 프로필로 레코드 생성."""
        created = datetime(2024, 5, 1, tzinfo=UTC)
        mock_user_repo.get_profile.side_effect = lambda name: (
            UserProfile(
                created_at=created,
                oidc_sub="sub-123",
                tags=["vip"],
                enabled_apis=["s1"],
            )
            if name == "alice"
            else None
        )

        result = self_check(AdminConfig(), mock_user_repo, owner_username)

        assert result.user_config is not None
        alice = result.user_config.find_user("alice")
        assert alice is not None
        assert alice.role == UserRole.USER
        assert alice.created_at == created
        assert alice.oidc_sub == "sub-123"
        assert alice.tags == ["vip"]
        assert alice.enabled_apis == ["s1"]
        bob = result.user_config.find_user("bob")
        assert bob is not None
        assert bob.tags is None
        assert bob.created_at is None

    def test_existing_records_preserved(
        self, sample_config: AdminConfig, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """기존 사용자 레코드는 수정 사항 그대로 유지."""
        assert sample_config.user_config is not None
        sample_config.user_config.users[1] = UserRecord(
            username="alice", role=UserRole.ADMIN, banned=True, show_adult_content=True
        )

        result = self_check(sample_config, mock_user_repo, owner_username)

        assert result.user_config is not None
        alice = result.user_config.find_user("alice")
        assert alice is not None
        assert alice.role == UserRole.ADMIN
        assert alice.banned is True
        assert alice.show_adult_content is True
        mock_user_repo.get_profile.assert_not_called()

    def test_removed_users_are_dropped(
        self, sample_config: AdminConfig, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """저장소에서 사라진 사용자는 제거."""
        mock_user_repo.list_usernames.return_value = ["alice"]

        result = self_check(sample_config, mock_user_repo, owner_username)

        assert result.user_config is not None
        assert [u.username for u in result.user_config.users] == [owner_username, "alice"]

    def test_user_list_failure_keeps_existing(
        self, sample_config: AdminConfig, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """가입자 목록 조회 실패 시 기존 목록 유지."""
        mock_user_repo.list_usernames.side_effect = RuntimeError("firestore down")

        result = self_check(sample_config, mock_user_repo, owner_username)

        assert result.user_config is not None
        assert [u.username for u in result.user_config.users] == [
            owner_username,
            "alice",
            "bob",
        ]

    def test_profile_failure_still_synthesizes(
        self, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """프로필 조회 실패 시 기본 레코드로 생성."""
        mock_user_repo.get_profile.side_effect = RuntimeError("timeout")

        result = self_check(AdminConfig(), mock_user_repo, owner_username)

        assert result.user_config is not None
        bob = result.user_config.find_user("bob")
        assert bob is not None
        assert bob.role == UserRole.USER

    @pytest.mark.parametrize(
        "users",
        [
            [],
            [UserRecord(username="alice", role=UserRole.OWNER)],
            [
                UserRecord(username="alice", role=UserRole.OWNER),
                UserRecord(username="bob", role=UserRole.OWNER),
                UserRecord(username="owner", role=UserRole.USER),
            ],
        ],
    )
    def test_single_owner_invariant(
        self,
        users: list[UserRecord],
        mock_user_repo: MagicMock,
        owner_username: str,
    ) -> None:
        """owner는 항상 정확히 1명이며 지정된 계정."""
        config = AdminConfig(user_config=UserConfig(users=users))

        result = self_check(config, mock_user_repo, owner_username)

        assert result.user_config is not None
        owners = [u for u in result.user_config.users if u.role == UserRole.OWNER]
        assert len(owners) == 1
        assert owners[0].username == owner_username
        assert result.user_config.users[0].username == owner_username

    def test_owner_not_in_store_is_still_present(
        self, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """owner가 가입자 목록에 없어도 맨 앞에 추가."""
        mock_user_repo.list_usernames.return_value = ["alice"]

        result = self_check(AdminConfig(), mock_user_repo, owner_username)

        assert result.user_config is not None
        assert [u.username for u in result.user_config.users] == [owner_username, "alice"]

    def test_owner_keeps_only_apis_and_tags(
        self, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """owner 레코드는 새로 만들되 enabled_apis/tags만 이어받음."""
        config = AdminConfig(
            user_config=UserConfig(
                users=[
                    UserRecord(
                        username=owner_username,
                        role=UserRole.USER,
                        banned=True,
                        enabled_apis=["s1"],
                        tags=["vip"],
                        show_adult_content=False,
                    )
                ]
            )
        )

        result = self_check(config, mock_user_repo, owner_username)

        assert result.user_config is not None
        owner = result.user_config.users[0]
        assert owner.role == UserRole.OWNER
        assert owner.banned is False
        assert owner.enabled_apis == ["s1"]
        assert owner.tags == ["vip"]
        assert owner.show_adult_content is None

    def test_duplicate_usernames_first_wins(
        self, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """중복 사용자 이름은 첫 번째 레코드 유지."""
        mock_user_repo.list_usernames.side_effect = RuntimeError("keep existing")
        config = AdminConfig(
            user_config=UserConfig(
                users=[
                    UserRecord(username="alice", role=UserRole.ADMIN),
                    UserRecord(username="alice", role=UserRole.USER),
                ]
            )
        )

        result = self_check(config, mock_user_repo, owner_username)

        assert result.user_config is not None
        alices = [u for u in result.user_config.users if u.username == "alice"]
        assert len(alices) == 1
        assert alices[0].role == UserRole.ADMIN


class TestSelfCheckCollections:
    """컬렉션 중복 제거."""

    def test_dedupes_collections(
        self, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """키 기준 첫 번째 항목만 유지."""
        config = AdminConfig(
            source_config=[
                SourceConfig(key="a", name="A1", api="http://a1"),
                SourceConfig(key="b", name="B", api="http://b"),
                SourceConfig(key="a", name="A2", api="http://a2"),
            ],
            custom_categories=[
                CustomCategory(type=MediaType.TV, query="q", name="first"),
                CustomCategory(type=MediaType.MOVIE, query="q"),
                CustomCategory(type=MediaType.TV, query="q", name="second"),
            ],
            live_config=[
                LiveConfig(key="l", name="L1", url="http://l1"),
                LiveConfig(key="l", name="L2", url="http://l2"),
            ],
        )

        result = self_check(config, mock_user_repo, owner_username)

        assert [s.name for s in result.source_config] == ["A1", "B"]
        assert [c.name for c in result.custom_categories] == ["first", None]
        assert [live.name for live in result.live_config] == ["L1"]

    def test_dedupe_by_key_preserves_order(self) -> None:
        """dedupe_by_key는 순서 보존."""
        assert dedupe_by_key([3, 1, 3, 2, 1], lambda x: x) == [3, 1, 2]


class TestSelfCheckFixedPoint:
    """같은 저장소 상태에서 두 번 실행해도 결과가 같음."""

    def test_fixed_point(
        self, sample_config: AdminConfig, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """self_check(self_check(D)) == self_check(D)."""
        mock_user_repo.list_usernames.return_value = [owner_username, "alice", "carol"]
        sample_config.oidc_auth_config = OIDCAuthConfig(issuer="https://github.com")
        sample_config.source_config.append(sample_config.source_config[0])

        once = self_check(sample_config, mock_user_repo, owner_username)
        twice = self_check(once, mock_user_repo, owner_username)

        assert twice == once

    def test_synthesized_users_stable_across_reads(
        self, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """저장되지 않은 문서를 여러 번 읽어도 합성된 사용자가 동일."""
        first = self_check(AdminConfig(), mock_user_repo, owner_username)
        second = self_check(AdminConfig(), mock_user_repo, owner_username)

        assert first == second

    def test_input_not_mutated(
        self, sample_config: AdminConfig, mock_user_repo: MagicMock, owner_username: str
    ) -> None:
        """입력 문서는 변경되지 않음."""
        before = sample_config.model_copy(deep=True)

        self_check(sample_config, mock_user_repo, owner_username)

        assert sample_config == before
