"""Custom exception classes for the migration trigger.

This module provides domain-specific exception classes that carry a
reason code and an HTTP-style status code. Failures raised out of the
Lambda expose only the reason code so that legacy directory internals
never reach the end user.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from typing import Optional


class ReasonCode(str, Enum):
    """Reason codes reported when a migration attempt fails."""

    BAD_CREDENTIALS = "BadCredentials"
    MISSING_REQUIRED_ATTRIBUTE = "MissingRequiredAttribute"
    UNSUPPORTED_TRIGGER_SOURCE = "UnsupportedTriggerSource"


class AppError(Exception):
    """Base exception for application errors.

    All application-specific exceptions should inherit from this class.
    Each exception carries a status code and optional details.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP-style status code (default 500).
        detail: Optional additional context.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serializable body."""
        result: dict[str, Any] = {"error": self.message}
        if self.detail:
            result["detail"] = self.detail
        return result


class ConfigurationError(AppError):
    """Raised when required configuration is missing.

    Use when environment variables or settings are not properly configured.
    """

    def __init__(self, config_name: str):
        super().__init__(
            f"Missing required configuration: {config_name}",
            status_code=500,
        )
        self.config_name = config_name


class MigrationError(AppError):
    """Base class for a failed migration attempt.

    The message is always the bare reason code. Anything more specific
    is kept on the instance for logging and is never serialized.
    """

    def __init__(self, reason: ReasonCode, status_code: int):
        super().__init__(reason.value, status_code=status_code)
        self.reason = reason


class BadCredentialsError(MigrationError):
    """Raised when the legacy directory rejects or cannot find the user.

    Wrong passwords and unknown usernames are deliberately
    indistinguishable.
    """

    def __init__(self) -> None:
        super().__init__(ReasonCode.BAD_CREDENTIALS, status_code=401)


class MissingRequiredAttributeError(MigrationError):
    """Raised when a legacy record lacks an attribute the new pool requires."""

    def __init__(self, attribute: str):
        super().__init__(ReasonCode.MISSING_REQUIRED_ATTRIBUTE, status_code=500)
        self.attribute = attribute


class UnsupportedTriggerSourceError(MigrationError):
    """Raised when the trigger source is not a user migration flow."""

    def __init__(self, trigger_source: Optional[str]):
        super().__init__(ReasonCode.UNSUPPORTED_TRIGGER_SOURCE, status_code=400)
        self.trigger_source = trigger_source


class MigrationFailed(Exception):
    """Terminal failure signal raised out of the Lambda handler.

    Cognito treats any raised exception as a failed migration. The
    message carries only the reason code.
    """

    def __init__(self, reason: ReasonCode):
        super().__init__(reason.value)
        self.reason = reason
