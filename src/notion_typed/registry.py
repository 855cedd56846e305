"""Variant registry: one dispatch table per discriminated family.

Every polymorphic wire record (blocks, rich text, property values, ...) is
decoded by looking its discriminant up here. Model modules register their
variant classes at import time with the ``register`` decorator; the package
freezes the registry once all models are imported.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import RegistryError
from .wire import Location, wire_fields

logger = logging.getLogger("notion-typed")


@dataclass(frozen=True)
class Family:
    """Descriptor for one family of discriminated records.

    Attributes:
        name: Registry name of the family (e.g. "block").
        discriminant: Envelope key holding the variant tag, or None for
            families whose tag is derived from the document structure.
        fallback: Tag used when the discriminant is not registered. None
            means unknown tags are an error.
        nested: Whether variant payloads live under a key named after the
            tag (``{"type": "paragraph", "paragraph": {...}}``). False for
            families whose fields all sit at the top level.
        peek: Optional function extracting the tag from a raw document,
            used instead of reading ``discriminant``.
    """
    name: str
    discriminant: Optional[str] = "type"
    fallback: Optional[str] = None
    nested: bool = True
    peek: Optional[Callable[[dict], Any]] = None


class VariantRegistry:
    """Maps (family, discriminant value) to the variant class that decodes it."""

    def __init__(self):
        self._families: dict[str, Family] = {}
        self._variants: dict[str, dict[str, type]] = {}
        self._frozen = False

    def define(
        self,
        name: str,
        discriminant: Optional[str] = "type",
        fallback: Optional[str] = None,
        nested: bool = True,
        peek: Optional[Callable[[dict], Any]] = None,
    ) -> Family:
        """Declare a new family. Declaring the same name twice is an error."""
        self._check_writable()
        if name in self._families:
            raise RegistryError(f"Family already defined: {name}")
        if discriminant is None and peek is None:
            raise RegistryError(f"Family {name} needs a discriminant or a peek function")
        family = Family(name, discriminant, fallback, nested, peek)
        self._families[name] = family
        self._variants[name] = {}
        return family

    def register(self, family: str, value: str, shape: type) -> None:
        """Register ``shape`` as the variant for ``value`` in ``family``.

        Raises:
            RegistryError: Unknown family, duplicate value, frozen registry,
                or a shape whose field layout cannot be encoded.
        """
        self._check_writable()
        if family not in self._families:
            raise RegistryError(f"Unknown family: {family}")
        table = self._variants[family]
        if value in table:
            raise RegistryError(
                f"Duplicate {family} variant {value!r}: "
                f"{table[value].__name__} already registered, got {shape.__name__}"
            )
        _check_shape(shape)
        table[value] = shape

    def lookup(self, family: str, value: str) -> Optional[type]:
        """Return the variant class for ``value``, or None when not registered."""
        return self._variants[family].get(value)

    def family(self, name: str) -> Family:
        try:
            return self._families[name]
        except KeyError:
            raise RegistryError(f"Unknown family: {name}") from None

    def families(self) -> list[str]:
        """Names of the defined families, in definition order."""
        return list(self._families)

    def values(self, family: str) -> list[str]:
        """Registered discriminant values of a family, in registration order."""
        return list(self._variants[family])

    def freeze(self) -> None:
        """Make the registry read-only."""
        if not self._frozen:
            logger.debug(
                f"Variant registry frozen: "
                f"{sum(len(t) for t in self._variants.values())} variants "
                f"in {len(self._families)} families"
            )
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise RegistryError("Variant registry is frozen")


def _check_shape(shape: type) -> None:
    """Reject shapes mixing a whole-value payload with keyed payload fields."""
    locations = {spec.location for _, spec in wire_fields(shape)}
    if Location.VALUE in locations and Location.PAYLOAD in locations:
        raise RegistryError(
            f"{shape.__name__} mixes value and keyed payload fields"
        )


REGISTRY = VariantRegistry()


def register(family: str, *values: str, registry: VariantRegistry = REGISTRY):
    """Class decorator registering a variant for one or more discriminant values.

    Sets ``TYPE`` to the first value unless the class body defines it.
    """
    def decorator(cls):
        if "TYPE" not in cls.__dict__:
            cls.TYPE = values[0]
        for value in values:
            registry.register(family, value, cls)
        return cls
    return decorator
