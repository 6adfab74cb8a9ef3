"""Dispatch user migration trigger events.

Each flow either returns the populated event or raises a
``MigrationError``. The dispatch table selects a single flow, so one
invocation can never produce more than one outcome.
"""

from __future__ import annotations

from typing import Any
from typing import Callable
from typing import MutableMapping
from typing import Optional
from typing import Protocol

from app.exceptions import BadCredentialsError
from app.exceptions import UnsupportedTriggerSourceError
from app.migration.attributes import map_attributes
from app.migration.legacy_directory import LegacyUser
from app.migration.responses import apply_response
from app.migration.responses import build_response
from app.migration.triggers import TriggerKind
from app.utils.logging import get_logger
from app.utils.logging import mask_email

logger = get_logger(__name__)

TriggerEvent = MutableMapping[str, Any]


class LegacyDirectory(Protocol):
    def authenticate(self, username: str, password: str) -> Optional[LegacyUser]:
        ...

    def lookup(self, username: str) -> Optional[LegacyUser]:
        ...


def _migrate(
    kind: TriggerKind,
    event: TriggerEvent,
    user: Optional[LegacyUser],
) -> TriggerEvent:
    if user is None:
        raise BadCredentialsError()
    response = build_response(kind, map_attributes(user))
    logger.info(
        f"Migrating {mask_email(response['userAttributes']['email'])}",
        extra={
            "trigger_source": kind.value,
            "attribute_names": sorted(response["userAttributes"]),
        },
    )
    return apply_response(event, response)


def _on_authentication(
    event: TriggerEvent,
    directory: LegacyDirectory,
) -> TriggerEvent:
    username = event.get("userName")
    password = (event.get("request") or {}).get("password")
    if not username or not password:
        raise BadCredentialsError()
    user = directory.authenticate(username, password)
    return _migrate(TriggerKind.AUTHENTICATION, event, user)


def _on_forgot_password(
    event: TriggerEvent,
    directory: LegacyDirectory,
) -> TriggerEvent:
    username = event.get("userName")
    if not username:
        raise BadCredentialsError()
    user = directory.lookup(username)
    return _migrate(TriggerKind.FORGOT_PASSWORD, event, user)


_FLOWS: dict[TriggerKind, Callable[[TriggerEvent, LegacyDirectory], TriggerEvent]] = {
    TriggerKind.AUTHENTICATION: _on_authentication,
    TriggerKind.FORGOT_PASSWORD: _on_forgot_password,
}


def route_trigger(event: TriggerEvent, directory: LegacyDirectory) -> TriggerEvent:
    """Run the migration flow for ``event`` and return the populated event.

    Raises:
        BadCredentialsError: The legacy pool rejected or could not find
            the user.
        MissingRequiredAttributeError: The legacy record is incomplete.
        UnsupportedTriggerSourceError: The trigger source is not a user
            migration flow.
    """
    trigger_source = event.get("triggerSource")
    kind = TriggerKind.parse(trigger_source)
    if kind is None:
        raise UnsupportedTriggerSourceError(trigger_source)
    return _FLOWS[kind](event, directory)
