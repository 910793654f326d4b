"""
Custom exceptions for the flagfield package.
"""

from typing import Any, Optional


class FlagFieldError(Exception):
    """Base exception for all flagfield-related errors."""
    pass


class UnresolvableInputError(FlagFieldError, ValueError):
    """
    Raised when a value cannot be resolved to a bitfield.

    A resolvable is an integer of the engine's kind, a string of digits,
    a flag name, an instance of the engine, or a list/tuple of resolvables.
    Anything else (unknown names, negative or oversized integers, floats,
    None) ends up here instead of silently contributing nothing to a
    bitwise operation.
    """

    def __init__(self, value: Any, bitfield: str, message: Optional[str] = None):
        self.value = value
        self.bitfield = bitfield
        msg = message or f"Cannot resolve {value!r} to a {bitfield} bitfield"
        super().__init__(msg)


class ConfigurationError(FlagFieldError, TypeError):
    """Raised when a BitField class is configured with an invalid setting."""

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"Invalid {setting} setting: {message}")


class RegistryError(ConfigurationError):
    """Raised when a flag registry breaks its invariants."""

    def __init__(self, name: str, message: str):
        self.name = name
        self.setting = 'Flags'
        FlagFieldError.__init__(self, f"Invalid flag {name!r}: {message}")
