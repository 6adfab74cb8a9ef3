"""Utility modules for the migration trigger."""

from app.utils.logging import clear_request_context
from app.utils.logging import configure_logging
from app.utils.logging import get_logger
from app.utils.logging import hash_for_correlation
from app.utils.logging import mask_email
from app.utils.logging import mask_pii
from app.utils.logging import set_request_context

__all__ = [
    "clear_request_context",
    "configure_logging",
    "get_logger",
    "hash_for_correlation",
    "mask_email",
    "mask_pii",
    "set_request_context",
]
