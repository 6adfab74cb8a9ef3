"""Build the response section of a user migration trigger."""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import MutableMapping

from app.migration.triggers import TriggerKind

FINAL_USER_STATUS_CONFIRMED = "CONFIRMED"
MESSAGE_ACTION_SUPPRESS = "SUPPRESS"


def build_response(
    kind: TriggerKind,
    attributes: Mapping[str, str],
) -> dict[str, Any]:
    """Return the response for a successful migration of ``kind``.

    Only a password sign-in confirms the user; a forgot-password
    migration leaves the status for Cognito to decide.
    """
    response: dict[str, Any] = {
        "userAttributes": dict(attributes),
        "messageAction": MESSAGE_ACTION_SUPPRESS,
    }
    if kind is TriggerKind.AUTHENTICATION:
        response["finalUserStatus"] = FINAL_USER_STATUS_CONFIRMED
    return response


def apply_response(
    event: MutableMapping[str, Any],
    response: Mapping[str, Any],
) -> MutableMapping[str, Any]:
    """Write ``response`` into ``event["response"]`` and return the event."""
    target = event.get("response")
    if not isinstance(target, dict):
        target = {}
        event["response"] = target
    if "finalUserStatus" not in response:
        target.pop("finalUserStatus", None)
    target.update(response)
    return event
