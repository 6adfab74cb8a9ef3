"""Lazy migration of users from a legacy Cognito user pool."""

from app.migration.attributes import map_attributes
from app.migration.config import LegacyDirectoryConfig
from app.migration.credentials import credential_provider_from_config
from app.migration.legacy_directory import LegacyDirectoryClient
from app.migration.legacy_directory import LegacyUser
from app.migration.responses import build_response
from app.migration.router import route_trigger
from app.migration.triggers import TriggerKind

__all__ = [
    "LegacyDirectoryClient",
    "LegacyDirectoryConfig",
    "LegacyUser",
    "TriggerKind",
    "build_response",
    "credential_provider_from_config",
    "map_attributes",
    "route_trigger",
]
