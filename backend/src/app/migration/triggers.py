"""Cognito user migration trigger sources."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class TriggerKind(str, Enum):
    AUTHENTICATION = "UserMigration_Authentication"
    FORGOT_PASSWORD = "UserMigration_ForgotPassword"

    @classmethod
    def parse(cls, trigger_source: Optional[str]) -> Optional["TriggerKind"]:
        """Return the matching kind, or None for any other source."""
        for kind in cls:
            if kind.value == trigger_source:
                return kind
        return None
