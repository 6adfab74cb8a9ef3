"""Map legacy user records onto the new pool's attribute schema."""

from __future__ import annotations

from app.exceptions import MissingRequiredAttributeError
from app.migration.legacy_directory import LegacyUser

REQUIRED_ATTRIBUTES = ("email", "preferred_username")
LEGACY_SUB_ATTRIBUTE = "sub"
OLD_SUB_ATTRIBUTE = "custom:old_sub"


def map_attributes(user: LegacyUser) -> dict[str, str]:
    """Return the attributes the new pool should create the user with.

    The legacy ``sub`` is kept as ``custom:old_sub`` and never copied
    as ``sub``; the new pool assigns its own.

    Raises:
        MissingRequiredAttributeError: If ``email`` or
            ``preferred_username`` is absent or empty.
    """
    for name in REQUIRED_ATTRIBUTES:
        if not user.attributes.get(name):
            raise MissingRequiredAttributeError(name)

    attributes = {
        name: value for name, value in user.attributes.items() if value is not None
    }
    old_sub = attributes.pop(LEGACY_SUB_ATTRIBUTE, None)
    if old_sub is not None:
        attributes[OLD_SUB_ATTRIBUTE] = old_sub
    return attributes
