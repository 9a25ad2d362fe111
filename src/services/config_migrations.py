"""Config schema migrations.

self-check가 매번 실행하는 마이그레이션 목록입니다.
각 단계는 감지 조건(is_pending)이 참일 때만 적용되며, 적용 후에는 조건이 거짓이 되어야 합니다.
새 마이그레이션은 MIGRATIONS 끝에 추가합니다.
"""

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from src.models.admin_config import AdminConfig
from src.models.feature_config import OIDCProvider

logger = structlog.get_logger(__name__)

# issuer URL 부분 문자열 → provider ID (앞에서부터 첫 매칭)
OIDC_ISSUER_PROVIDER_IDS: list[tuple[tuple[str, ...], str]] = [
    (("google", "accounts.google.com"), "google"),
    (("github",), "github"),
    (("microsoft", "login.microsoftonline.com"), "microsoft"),
    (("linux.do", "connect.linux.do"), "linuxdo"),
]


@dataclass(frozen=True)
class ConfigMigration:
    """감지 조건으로 보호되는 1회성 마이그레이션."""

    name: str
    is_pending: Callable[[AdminConfig], bool]
    apply: Callable[[AdminConfig], None]


def infer_oidc_provider_id(issuer: str | None) -> str:
    """issuer URL로 provider ID 추론.

    Args:
        issuer: OIDC issuer URL.

    Returns:
        google/github/microsoft/linuxdo 중 하나, 없으면 custom.
    """
    normalized = (issuer or "").lower()
    for needles, provider_id in OIDC_ISSUER_PROVIDER_IDS:
        if any(needle in normalized for needle in needles):
            return provider_id
    return "custom"


def _oidc_single_provider_pending(config: AdminConfig) -> bool:
    return config.oidc_auth_config is not None and config.oidc_providers is None


def _migrate_oidc_single_provider(config: AdminConfig) -> None:
    legacy = config.oidc_auth_config
    if legacy is None:
        return

    provider_id = infer_oidc_provider_id(legacy.issuer)
    config.oidc_providers = [
        OIDCProvider(
            **legacy.model_dump(),
            id=provider_id,
            name=legacy.button_text or provider_id.upper(),
        )
    ]
    # 롤백 대비: oidc_auth_config는 삭제하지 않음
    logger.info("oidc_config_migrated", provider_id=provider_id)


MIGRATIONS: list[ConfigMigration] = [
    ConfigMigration(
        name="oidc_single_to_multi_provider",
        is_pending=_oidc_single_provider_pending,
        apply=_migrate_oidc_single_provider,
    ),
]


def run_migrations(
    config: AdminConfig, migrations: list[ConfigMigration] | None = None
) -> list[str]:
    """대기 중인 마이그레이션을 순서대로 적용 (config를 직접 수정).

    Args:
        config: 마이그레이션할 설정.
        migrations: 적용할 목록 (기본값: MIGRATIONS).

    Returns:
        실제로 적용된 마이그레이션 이름 목록.
    """
    applied: list[str] = []
    for migration in MIGRATIONS if migrations is None else migrations:
        if not migration.is_pending(config):
            continue
        migration.apply(config)
        applied.append(migration.name)
        logger.info("config_migration_applied", migration=migration.name)
    return applied
