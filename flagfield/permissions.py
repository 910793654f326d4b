"""
Permission bitfields.

PermissionsBitField is a BitField over the Discord permission flags, with one
extra rule: Administrator implicitly grants every other permission.

The override is asymmetric on purpose:
- has(), any() and missing() honor it, so an administrator passes every check
- to_array() ignores it and lists only the bits that are literally set

    perms = PermissionsBitField(PermissionFlagsBits.Administrator)
    perms.has('SendMessages')   # True
    perms.to_array()            # ['Administrator']

Pass check_admin=False to any query to test the literal bits instead.
"""

from __future__ import annotations

from typing import Dict, Final, List

from .core import BitField, BitFieldResolvable
from .flags import (
    ALL,
    DEFAULT,
    PERMISSION_ALIASES,
    PERMISSION_FLAGS,
    STAGE_MODERATOR,
    PermissionFlagsBits,
)


class PermissionsBitField(BitField):
    """
    Data structure that makes it easy to interact with a permission bitfield.

    Permission values use bits above 32, so they are wide: to_json() returns
    a decimal string, which is how permissions are transmitted and stored.

    Renamed permissions keep their former name as an alias:
    'ManageEmojisAndStickers' resolves to ManageGuildExpressions, but only
    the current name appears in to_array() and serialize().
    """

    Flags = PERMISSION_FLAGS
    Aliases = PERMISSION_ALIASES
    DefaultBit = 0
    Wide = True

    # Every permission combined
    All: Final[int] = ALL
    # Default permissions for regular members
    Default: Final[int] = DEFAULT
    # Permissions required for moderators of stage channels
    StageModerator: Final[int] = STAGE_MODERATOR

    __slots__ = ()

    def _is_admin(self) -> bool:
        return super().has(PermissionFlagsBits.Administrator)

    def has(self, permission: BitFieldResolvable, check_admin: bool = True) -> bool:
        """
        Check whether the bitfield has a permission, or all of multiple permissions.

        Args:
            permission: Permission(s) to check for
            check_admin: Whether Administrator overrides the check
        """
        bit = self.resolve(permission)
        return (check_admin and self._is_admin()) or super().has(bit)

    def any(self, permission: BitFieldResolvable, check_admin: bool = True) -> bool:
        """
        Check whether the bitfield has a permission, or any of multiple permissions.

        Args:
            permission: Permission(s) to check for
            check_admin: Whether Administrator overrides the check
        """
        bit = self.resolve(permission)
        return (check_admin and self._is_admin()) or super().any(bit)

    def missing(self, bits: BitFieldResolvable, check_admin: bool = True) -> List[str]:
        """
        Get the names of all given permissions that are missing from the bitfield.

        An administrator is never missing anything unless check_admin is False.
        """
        bits = self.resolve(bits)
        if check_admin and self._is_admin():
            return []
        return super().missing(bits)

    def serialize(self, check_admin: bool = True) -> Dict[str, bool]:
        return super().serialize(check_admin)

    def to_array(self) -> List[str]:
        """Get the names of the permissions that are literally set."""
        return super().to_array(False)
