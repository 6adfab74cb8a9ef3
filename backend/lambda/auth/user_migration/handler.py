"""Cognito User Migration trigger.

This Lambda migrates users lazily from a legacy user pool. When a user
who does not exist yet signs in or starts a password reset, the user is
authenticated or looked up in the legacy pool and created in the new
pool with the same attributes.

SECURITY NOTES:
- Passwords are never logged
- Failures surface only a reason code, never legacy pool error details
"""

from __future__ import annotations

import time
from typing import Any
from typing import MutableMapping

from app.exceptions import MigrationError
from app.exceptions import MigrationFailed
from app.migration import LegacyDirectoryClient
from app.migration import LegacyDirectoryConfig
from app.migration import credential_provider_from_config
from app.migration import route_trigger
from app.utils.logging import clear_request_context
from app.utils.logging import configure_logging
from app.utils.logging import get_logger
from app.utils.logging import log_trigger_event
from app.utils.logging import log_trigger_outcome
from app.utils.logging import set_request_context

configure_logging()
logger = get_logger(__name__)


def lambda_handler(
    event: MutableMapping[str, Any],
    context: Any,
) -> MutableMapping[str, Any]:
    """Migrate the user named in the event, or raise MigrationFailed."""
    request_id = getattr(context, "aws_request_id", "") or ""
    set_request_context(req_id=request_id)
    started = time.monotonic()
    trigger_source = event.get("triggerSource")

    try:
        log_trigger_event(logger, event)

        config = LegacyDirectoryConfig.from_env()
        credentials = credential_provider_from_config(config, session_name=request_id)
        directory = LegacyDirectoryClient(config, credentials)

        try:
            result = route_trigger(event, directory)
        except MigrationError as exc:
            log_trigger_outcome(
                logger,
                trigger_source,
                reason=exc.reason.value,
                duration_ms=(time.monotonic() - started) * 1000,
            )
            raise MigrationFailed(exc.reason) from None

        log_trigger_outcome(
            logger,
            trigger_source,
            duration_ms=(time.monotonic() - started) * 1000,
        )
        return result
    finally:
        clear_request_context()
