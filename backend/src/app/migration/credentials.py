"""Credential providers for reaching the legacy user pool.

The default provider uses the Lambda's own credentials. When the legacy
pool lives in another account, ``AssumedRoleCredentials`` assumes a role
through STS and builds the client from the temporary credentials.
"""

from __future__ import annotations

from typing import Any
from typing import Optional
from typing import Protocol

from app.migration.config import LegacyDirectoryConfig
from app.services.aws_clients import build_client
from app.services.aws_clients import get_client
from app.services.aws_clients import get_sts_client
from app.utils.logging import get_logger

logger = get_logger(__name__)

# STS rejects session names longer than 64 characters.
_MAX_SESSION_NAME_LENGTH = 64
_DEFAULT_SESSION_NAME = "user-migration"


class CredentialProvider(Protocol):
    """Anything able to produce a boto3 client for the legacy pool."""

    def client(self, service: str, region_name: Optional[str]) -> Any:
        ...


class AmbientCredentials:
    """Use the credentials already available to the function."""

    def client(self, service: str, region_name: Optional[str]) -> Any:
        return get_client(service, region_name=region_name)


class AssumedRoleCredentials:
    """Assume ``role_arn`` and build clients from the temporary credentials."""

    def __init__(
        self,
        role_arn: str,
        session_name: str,
        external_id: Optional[str] = None,
    ):
        self.role_arn = role_arn
        self.session_name = (session_name or _DEFAULT_SESSION_NAME)[
            :_MAX_SESSION_NAME_LENGTH
        ]
        self.external_id = external_id

    def client(self, service: str, region_name: Optional[str]) -> Any:
        params: dict[str, Any] = {
            "RoleArn": self.role_arn,
            "RoleSessionName": self.session_name,
        }
        if self.external_id:
            params["ExternalId"] = self.external_id

        response = get_sts_client(region_name).assume_role(**params)
        logger.debug(
            "Assumed legacy directory role",
            extra={"role_arn": self.role_arn, "session_name": self.session_name},
        )
        return build_client(service, response["Credentials"], region_name=region_name)


def credential_provider_from_config(
    config: LegacyDirectoryConfig,
    session_name: str,
) -> CredentialProvider:
    """Pick the credential provider the configuration asks for."""
    if config.role_arn:
        return AssumedRoleCredentials(
            role_arn=config.role_arn,
            session_name=session_name,
            external_id=config.external_id,
        )
    return AmbientCredentials()
