"""Business logic services."""

from src.services.config_reconciler import build_initial_config, reconcile
from src.services.config_self_check import self_check
from src.services.config_service import ConfigService
from src.services.permission_resolver import (
    SpecialFeature,
    has_feature,
    resolve_show_adult_content,
    resolve_visible_sources,
)
from src.services.subscription_parser import parse_subscription

__all__ = [
    "ConfigService",
    "SpecialFeature",
    "build_initial_config",
    "has_feature",
    "parse_subscription",
    "reconcile",
    "resolve_show_adult_content",
    "resolve_visible_sources",
    "self_check",
]
