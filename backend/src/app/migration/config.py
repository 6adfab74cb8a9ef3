"""Connection settings for the legacy Cognito user pool."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping
from typing import Optional

from app.exceptions import ConfigurationError


@dataclass(frozen=True)
class LegacyDirectoryConfig:
    """Where the legacy user pool lives and how to reach it.

    Attributes:
        region: AWS region of the legacy user pool.
        user_pool_id: ID of the pool users are migrated from.
        client_id: App client in the legacy pool allowing
            ADMIN_USER_PASSWORD_AUTH.
        role_arn: Optional role to assume when the pool lives in another
            account.
        external_id: Optional external ID required by the role's trust
            policy.
    """

    region: Optional[str]
    user_pool_id: str
    client_id: str
    role_arn: Optional[str] = None
    external_id: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "LegacyDirectoryConfig":
        """Build the configuration from environment variables.

        Raises:
            ConfigurationError: If the pool or client ID is not set.
        """
        env = os.environ if environ is None else environ

        user_pool_id = env.get("OLD_USER_POOL_ID", "").strip()
        if not user_pool_id:
            raise ConfigurationError("OLD_USER_POOL_ID")
        client_id = env.get("OLD_CLIENT_ID", "").strip()
        if not client_id:
            raise ConfigurationError("OLD_CLIENT_ID")

        return cls(
            region=env.get("OLD_USER_POOL_REGION") or env.get("AWS_REGION") or None,
            user_pool_id=user_pool_id,
            client_id=client_id,
            role_arn=env.get("OLD_ROLE_ARN") or None,
            external_id=env.get("OLD_EXTERNAL_ID") or None,
        )
