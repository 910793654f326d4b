"""
Core bitfield infrastructure: the BitField metaclass and the generic engine.

A BitField wraps a single integer in which each bit denotes a named flag.
The flag names come from a registry declared on the class:

    class Features(BitField):
        Flags = {'Search': 1 << 0, 'Export': 1 << 1, 'Audit': 1 << 2}

    features = Features(['Search', 'Audit'])
    features.has('Export')          # False
    features.add('Export').to_array()  # ['Search', 'Export', 'Audit']

Class-level configuration:
- Flags: registry source (mapping, enum or class of int constants)
- DefaultBit: the zero value, used when no bits are given
- Wide: whether values may exceed MAX_SAFE_INTEGER (serialized as strings)
- Aliases: extra names that resolve to a flag but are never enumerated
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Dict, Iterator, List, Mapping, Tuple, Union

from .exceptions import ConfigurationError, UnresolvableInputError
from .registry import (
    DIGITS,
    EMPTY_ALIASES,
    EMPTY_REGISTRY,
    MAX_SAFE_INTEGER,
    build_aliases,
    build_registry,
)

logger = logging.getLogger(__name__)

# Anything resolve() accepts
BitFieldResolvable = Union[int, str, 'BitField', List[Any], Tuple[Any, ...]]


class BitFieldMeta(type):
    """
    Metaclass for BitField that:
    - Normalizes the Flags declaration into a validated, read-only registry
    - Checks that every alias points at a flag
    - Validates DefaultBit against the engine's kind
    """

    def __new__(
        mcs,
        name: str,
        bases: tuple,
        namespace: Dict[str, Any],
        **kwargs
    ) -> BitFieldMeta:
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        # Inherited registries were validated when the parent was created,
        # unless the subclass narrows the kind
        if 'Flags' in namespace or 'Wide' in namespace:
            cls.Flags = build_registry(cls.Flags, wide=cls.Wide)
        if 'Flags' in namespace or 'Aliases' in namespace:
            cls.Aliases = build_aliases(cls.Aliases, cls.Flags)

        default = cls.DefaultBit
        if isinstance(default, bool) or not isinstance(default, int) or default < 0:
            raise ConfigurationError('DefaultBit', f"{default!r} is not a non-negative integer")
        if not cls._fits(default):
            raise ConfigurationError('DefaultBit', f"{default:#x} does not fit a narrow bitfield")

        logger.debug(
            "Created bitfield %s with %d flags (%s)",
            name, len(cls.Flags), 'wide' if cls.Wide else 'narrow',
        )
        return cls


@functools.total_ordering
class BitField(metaclass=BitFieldMeta):
    """
    Base class for bitfields over a flag registry.

    Instances are mutable: add() and remove() change the instance and return
    it for chaining. After freeze(), every mutator returns a new instance and
    the frozen one never changes, so it can be shared safely.
    """

    Flags: Mapping[str, int] = EMPTY_REGISTRY
    Aliases: Mapping[str, str] = EMPTY_ALIASES
    DefaultBit: int = 0
    Wide: bool = False

    __slots__ = ('_bitfield', '_frozen')

    def __init__(self, bits: BitFieldResolvable = None):
        """
        Args:
            bits: Bit(s) to read from; DefaultBit when omitted

        Raises:
            UnresolvableInputError: If bits cannot be resolved
        """
        self._bitfield: int = self.DefaultBit if bits is None else self.resolve(bits)
        self._frozen: bool = False

    @classmethod
    def resolve(cls, bit: BitFieldResolvable) -> int:
        """
        Resolve a bit, a name or a collection of them to its integer form.

        Accepted forms, checked in order:
        - an integer of this engine's kind (>= DefaultBit)
        - an instance of any BitField
        - a list or tuple of resolvables, OR-ed together
        - a string of decimal digits
        - a flag name from the registry, or one of its aliases

        Raises:
            UnresolvableInputError: If the input (or any element of a
                list/tuple) matches none of the above
        """
        if isinstance(bit, int) and not isinstance(bit, bool):
            if bit >= cls.DefaultBit and cls._fits(bit):
                return int(bit)
        elif isinstance(bit, BitField):
            if cls._fits(bit.bitfield):
                return bit.bitfield
        elif isinstance(bit, (list, tuple)):
            total = cls.DefaultBit
            for item in bit:
                total |= cls.resolve(item)
            return total
        elif isinstance(bit, str):
            if DIGITS.fullmatch(bit):
                value = int(bit)
                if value >= cls.DefaultBit and cls._fits(value):
                    return value
            elif bit in cls.Flags:
                return cls.Flags[bit]
            elif bit in cls.Aliases:
                return cls.Flags[cls.Aliases[bit]]

        logger.debug("%s could not resolve %r", cls.__name__, bit)
        raise UnresolvableInputError(bit, cls.__name__)

    @classmethod
    def _fits(cls, value: int) -> bool:
        return cls.Wide or value <= MAX_SAFE_INTEGER

    @property
    def bitfield(self) -> int:
        """The packed bits."""
        return self._bitfield

    @property
    def frozen(self) -> bool:
        return self._frozen

    # Queries

    def any(self, bit: BitFieldResolvable) -> bool:
        """Check whether the bitfield has a bit, or any of multiple bits."""
        return (self._bitfield & self.resolve(bit)) != 0

    def equals(self, bit: BitFieldResolvable) -> bool:
        """Check whether the bitfield equals the resolved bits exactly."""
        return self._bitfield == self.resolve(bit)

    def has(self, bit: BitFieldResolvable) -> bool:
        """Check whether the bitfield has a bit, or all of multiple bits."""
        bit = self.resolve(bit)
        return (self._bitfield & bit) == bit

    def missing(self, bits: BitFieldResolvable, *has_params: Any) -> List[str]:
        """
        Get the names of all given bits that are missing from the bitfield.

        Args:
            bits: Bit(s) to check for
            *has_params: Extra arguments for has(), if the subclass takes any

        Returns:
            Flag names in registry order
        """
        return type(self)(bits).remove(self).to_array(*has_params)

    # Mutators

    def freeze(self) -> BitField:
        """Freeze these bits, making them immutable. Returns self, not a copy."""
        self._frozen = True
        return self

    def add(self, *bits: BitFieldResolvable) -> BitField:
        """
        Add bits to these ones.

        Returns:
            These bits, or a new BitField if this one is frozen
        """
        total = self._union(bits)
        if self._frozen:
            return self._from_bitfield(self._bitfield | total)
        self._bitfield |= total
        return self

    def remove(self, *bits: BitFieldResolvable) -> BitField:
        """
        Remove bits from these.

        Returns:
            These bits, or a new BitField if this one is frozen
        """
        total = self._union(bits)
        if self._frozen:
            return self._from_bitfield(self._bitfield & ~total)
        self._bitfield &= ~total
        return self

    def copy(self) -> BitField:
        """Return an unfrozen copy of these bits."""
        return self._from_bitfield(self._bitfield)

    @classmethod
    def _from_bitfield(cls, value: int) -> BitField:
        # Values computed from resolved bits skip resolution
        instance = cls.__new__(cls)
        instance._bitfield = value
        instance._frozen = False
        return instance

    def _union(self, bits: Tuple[BitFieldResolvable, ...]) -> int:
        # Resolve everything before touching the bitfield, so a bad
        # argument leaves the instance unchanged. Starts from 0 so remove()
        # never clears DefaultBit bits nobody asked for
        total = 0
        for bit in bits:
            total |= self.resolve(bit)
        return total

    # Serialization

    def serialize(self, *has_params: Any) -> Dict[str, bool]:
        """Map every flag name to whether the bit is available."""
        return {
            name: self.has(value, *has_params)
            for name, value in self.Flags.items()
        }

    def to_array(self, *has_params: Any) -> List[str]:
        """Get the names of the available bits, in registry order."""
        return [name for name in self.Flags if self.has(name, *has_params)]

    def to_json(self) -> Union[int, str]:
        """The bitfield as a JSON-safe scalar: an int, or a decimal string if wide."""
        return str(self._bitfield) if self.Wide else self._bitfield

    def value_of(self) -> int:
        return self._bitfield

    # Python protocols

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_array())

    def __contains__(self, bit: BitFieldResolvable) -> bool:
        return self.has(bit)

    def __int__(self) -> int:
        return self._bitfield

    def __index__(self) -> int:
        return self._bitfield

    def __eq__(self, other: object) -> bool:
        # Other engines are never equal, whatever their raw value
        if type(other) is type(self):
            return self._bitfield == other._bitfield
        if isinstance(other, int) and not isinstance(other, bool):
            return self._bitfield == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if type(other) is type(self):
            return self._bitfield < other._bitfield
        if isinstance(other, int) and not isinstance(other, bool):
            return self._bitfield < other
        return NotImplemented

    # Mutable until frozen
    __hash__ = None

    def __repr__(self) -> str:
        names = self.to_array()
        if self.resolve(names) == self._bitfield:
            return f"{type(self).__name__}({names!r})"
        return f"{type(self).__name__}({self._bitfield:#x})"

    # pydantic integration

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        """
        Let BitField subclasses be used as pydantic model fields.

        Any resolvable is accepted on validation; JSON output is to_json().
        The JSON schema comes from __get_pydantic_json_schema__.
        """
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: instance.to_json(),
                when_used='json',
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> BitField:
        if isinstance(value, cls):
            return value
        return cls(cls.resolve(value))

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> Dict[str, Any]:
        """
        JSON schema for BitField fields.

        Serialized values are decimal strings for wide engines and integers
        for narrow ones; validation also takes flag names and arrays.
        """
        integer: Dict[str, Any] = {'type': 'integer', 'minimum': cls.DefaultBit}
        if not cls.Wide:
            integer['maximum'] = MAX_SAFE_INTEGER
        string: Dict[str, Any] = {'type': 'string', 'pattern': '^[0-9]+$'}

        if handler.mode == 'serialization':
            return string if cls.Wide else integer

        scalars: List[Dict[str, Any]] = [integer, string]
        names = list(cls.Flags) + list(cls.Aliases)
        if names:
            scalars.append({'enum': names})
        return {'anyOf': [*scalars, {'type': 'array', 'items': {'anyOf': scalars}}]}
