"""
Flag registries: ordered, read-only tables of flag name -> bit value.

A registry can be built from:
- a mapping of names to integers
- an IntFlag/IntEnum class (members in declaration order)
- a plain class of int constants, like the Flags classes in this package

Usage:
    class Color:
        Red = 1 << 0
        Green = 1 << 1
        Blue = 1 << 2

    registry = build_registry(Color)
    list(registry)   # ['Red', 'Green', 'Blue']
"""

from __future__ import annotations

import enum
import logging
import re
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple

from .exceptions import RegistryError

logger = logging.getLogger(__name__)

# Largest integer every JSON consumer represents exactly
MAX_SAFE_INTEGER = 2 ** 53 - 1

EMPTY_REGISTRY: Mapping[str, int] = MappingProxyType({})
EMPTY_ALIASES: Mapping[str, str] = MappingProxyType({})

# ASCII decimal digits only; numeric strings and reverse-lookup keys share it
DIGITS = re.compile(r'[0-9]+')


def is_reverse_lookup(name: str) -> bool:
    """True for decimal-string keys, which are value -> name lookups rather than flags."""
    return isinstance(name, str) and DIGITS.fullmatch(name) is not None


def _entries(source: Any) -> Iterable[Tuple[str, Any]]:
    if isinstance(source, Mapping):
        return source.items()
    if isinstance(source, type) and issubclass(source, enum.Enum):
        return ((name, member.value) for name, member in source.__members__.items())
    if isinstance(source, type):
        return (
            (name, value) for name, value in vars(source).items()
            if not name.startswith('_') and name[:1].isupper()
            and isinstance(value, int)
        )
    raise RegistryError(repr(source), "registry source must be a mapping, an enum or a class of int constants")


def build_registry(source: Any, wide: bool = True) -> Mapping[str, int]:
    """
    Build a validated, read-only registry.

    Args:
        source: A mapping, an enum class or a class of int constants
        wide: Whether values may exceed MAX_SAFE_INTEGER

    Returns:
        A MappingProxyType preserving declaration order

    Raises:
        RegistryError: If a value is not a non-negative power of two (or zero),
            or if two names share a bit
    """
    flags: Dict[str, int] = {}
    owners: Dict[int, str] = {}

    for name, value in _entries(source):
        if is_reverse_lookup(name):
            continue
        if not isinstance(name, str):
            raise RegistryError(repr(name), "flag names must be strings")
        if isinstance(value, bool) or not isinstance(value, int):
            raise RegistryError(name, f"value {value!r} is not an integer")
        value = int(value)
        if value < 0:
            raise RegistryError(name, f"value {value} is negative")
        if value & (value - 1):
            raise RegistryError(name, f"value {value:#x} is not a single bit")
        if not wide and value > MAX_SAFE_INTEGER:
            raise RegistryError(name, f"value {value:#x} does not fit a narrow bitfield")
        if value and value in owners:
            raise RegistryError(name, f"bit {value:#x} is already taken by {owners[value]!r}")
        if value:
            owners[value] = name
        flags[name] = value

    logger.debug("Built flag registry with %d entries", len(flags))
    return MappingProxyType(flags)


def union(registry: Mapping[str, int]) -> int:
    """Bitwise OR of every value in the registry."""
    total = 0
    for value in registry.values():
        total |= value
    return total


def build_aliases(aliases: Mapping[str, str], registry: Mapping[str, int]) -> Mapping[str, str]:
    """
    Build a read-only table of alternative names for registry flags.

    Aliases resolve like the flag they point at but are never enumerated,
    which keeps one name per bit in to_array() and serialize().

    Raises:
        RegistryError: If an alias shadows a flag or points at an unknown one
    """
    checked: Dict[str, str] = {}
    for alias, target in aliases.items():
        if alias in registry:
            raise RegistryError(alias, "alias shadows a flag of the same name")
        if target not in registry:
            raise RegistryError(alias, f"alias target {target!r} is not a flag")
        checked[alias] = target
    return MappingProxyType(checked)
