"""Client for the legacy Cognito user pool.

Only two operations are needed for lazy migration: verifying a
password and reading a user's attributes. Every failure from the legacy
pool is reported as "not found" so that callers cannot tell a wrong
password from an unknown username.

SECURITY NOTES:
- Passwords are never logged
- Only the AWS error code is logged, never the service's error message
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from types import MappingProxyType
from typing import Any
from typing import Mapping
from typing import Optional

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from app.migration.config import LegacyDirectoryConfig
from app.migration.credentials import CredentialProvider
from app.utils.logging import get_logger
from app.utils.logging import hash_for_correlation

logger = get_logger(__name__)

ADMIN_PASSWORD_AUTH_FLOW = "ADMIN_USER_PASSWORD_AUTH"


@dataclass(frozen=True)
class LegacyUser:
    """A user record read from the legacy pool."""

    user_name: str
    attributes: Mapping[str, Optional[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "attributes", MappingProxyType(dict(self.attributes))
        )


def _attributes_from_response(
    entries: Optional[list[dict[str, Any]]],
) -> dict[str, Optional[str]]:
    attributes: dict[str, Optional[str]] = {}
    for entry in entries or []:
        name = entry.get("Name")
        if name:
            attributes[name] = entry.get("Value")
    return attributes


def _error_code(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code", "ClientError")
    return type(exc).__name__


class LegacyDirectoryClient:
    """Authenticate and look up users in the legacy user pool."""

    def __init__(
        self,
        config: LegacyDirectoryConfig,
        credentials: CredentialProvider,
    ):
        self._config = config
        self._credentials = credentials
        self._cognito: Any = None

    def _client(self) -> Any:
        if self._cognito is None:
            self._cognito = self._credentials.client(
                "cognito-idp", region_name=self._config.region
            )
        return self._cognito

    def authenticate(self, username: str, password: str) -> Optional[LegacyUser]:
        """Verify the password, then return the full user record.

        Returns None if either the authentication or the lookup fails.
        """
        user_ref = hash_for_correlation(username)
        logger.info("Authenticating legacy user", extra={"user_ref": user_ref})

        try:
            response = self._client().admin_initiate_auth(
                AuthFlow=ADMIN_PASSWORD_AUTH_FLOW,
                AuthParameters={"USERNAME": username, "PASSWORD": password},
                ClientId=self._config.client_id,
                UserPoolId=self._config.user_pool_id,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.warning(
                "Legacy authentication failed",
                extra={"user_ref": user_ref, "error": _error_code(exc)},
            )
            return None

        # A pending challenge still means the password was accepted.
        challenge = response.get("ChallengeName")
        if challenge:
            logger.info(
                "Legacy authentication returned a challenge",
                extra={"user_ref": user_ref, "challenge": challenge},
            )

        return self.lookup(username)

    def lookup(self, username: str) -> Optional[LegacyUser]:
        """Return the user's record, or None if it cannot be read."""
        user_ref = hash_for_correlation(username)
        logger.info("Looking up legacy user", extra={"user_ref": user_ref})

        try:
            response = self._client().admin_get_user(
                UserPoolId=self._config.user_pool_id,
                Username=username,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.warning(
                "Legacy lookup failed",
                extra={"user_ref": user_ref, "error": _error_code(exc)},
            )
            return None

        user = LegacyUser(
            user_name=response.get("Username") or username,
            attributes=_attributes_from_response(response.get("UserAttributes")),
        )
        logger.debug(
            "Legacy user found",
            extra={"user_ref": user_ref, "attribute_names": sorted(user.attributes)},
        )
        return user
