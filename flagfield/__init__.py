"""
flagfield - Bitfields over named flag registries, with Discord-style permissions.

This package provides:
- A generic BitField engine over an ordered registry of single-bit flags
- Resolution of ints, digit strings, flag names, instances and lists of them
- Union/difference, membership tests, enumeration and serialization
- Copy-on-write freezing for values shared between callers
- PermissionsBitField, where Administrator grants every other permission

Basic Usage:
    import flagfield

    perms = flagfield.PermissionsBitField(['ViewChannel', 'SendMessages'])
    perms.has('SendMessages')          # True
    perms.missing(['ViewChannel', 'ManageMessages'])  # ['ManageMessages']

    # Mutators change the instance in place...
    perms.add('AttachFiles')

    # ...unless it is frozen, in which case they return a new instance
    base = flagfield.PermissionsBitField(
        flagfield.PermissionsBitField.Default
    ).freeze()
    moderator = base.add('ManageMessages')
    assert base is not moderator

    perms.to_json()   # '35840' - wide bitfields serialize as strings

Defining a bitfield:
    class Features(flagfield.BitField):
        Flags = {'Search': 1 << 0, 'Export': 1 << 1}

Key Concepts:
    - BitField: Base class; configured by Flags, DefaultBit and Wide
    - resolve(): Turns any resolvable into an integer, or raises
      UnresolvableInputError
    - freeze(): Marks an instance immutable; mutators then return copies
    - check_admin: Permission queries honor Administrator unless disabled;
      to_array() always lists the literal bits
"""

from .core import BitField, BitFieldMeta, BitFieldResolvable
from .exceptions import (
    ConfigurationError,
    FlagFieldError,
    RegistryError,
    UnresolvableInputError,
)
from .flags import (
    ALL,
    DEFAULT,
    PERMISSION_ALIASES,
    PERMISSION_FLAGS,
    STAGE_MODERATOR,
    PermissionFlagsBits,
)
from .permissions import PermissionsBitField
from .registry import (
    MAX_SAFE_INTEGER,
    build_aliases,
    build_registry,
    is_reverse_lookup,
    union,
)

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "BitField",
    "BitFieldMeta",
    "BitFieldResolvable",
    "PermissionsBitField",
    # Registries
    "build_registry",
    "build_aliases",
    "is_reverse_lookup",
    "union",
    "MAX_SAFE_INTEGER",
    # Flags
    "PermissionFlagsBits",
    "PERMISSION_FLAGS",
    "PERMISSION_ALIASES",
    "ALL",
    "DEFAULT",
    "STAGE_MODERATOR",
    # Exceptions
    "FlagFieldError",
    "ConfigurationError",
    "UnresolvableInputError",
    "RegistryError",
]
