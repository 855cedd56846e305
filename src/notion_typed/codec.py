"""Two-phase decoder and symmetric encoder for discriminated records.

Decoding a polymorphic value happens in two steps:

1. peek: read only the discriminant of the raw document;
2. materialize: look the discriminant up in the variant registry and build
   the matching dataclass from the same already-parsed document.

Encoding walks the same field descriptors in reverse, so that
``decode(family, encode(v)) == v`` for every variant.
"""

import json
import logging
from typing import Any, Union

from .errors import DecodeError, UnknownTypeError
from .registry import REGISTRY, Family, VariantRegistry
from .wire import Location, has_default, wire_fields

logger = logging.getLogger("notion-typed")


class Decoder:
    """Decodes generic JSON trees into registered variant classes."""

    def __init__(self, registry: VariantRegistry = REGISTRY):
        self.registry = registry

    def peek(self, family: Family, raw: Any, path: str = "$") -> str:
        """Phase 1: extract the discriminant value of ``raw``.

        Raises:
            DecodeError: ``raw`` is not an object, or the discriminant is
                missing or not a string.
        """
        if not isinstance(raw, dict):
            raise DecodeError(f"Expected {family.name} object, got {type(raw).__name__}", path)
        if family.peek is not None:
            discriminant = family.peek(raw)
            if not isinstance(discriminant, str):
                raise DecodeError(f"Cannot determine {family.name} variant", path)
            return discriminant
        discriminant = raw.get(family.discriminant)
        if discriminant is None:
            raise DecodeError(f"Missing {family.name} discriminant {family.discriminant!r}", path)
        if not isinstance(discriminant, str):
            raise DecodeError(
                f"{family.name} discriminant {family.discriminant!r} must be a string", path
            )
        return discriminant

    def decode(self, family_name: str, raw: Any, path: str = "$") -> Any:
        """Decode one discriminated record of ``family_name``.

        Unknown discriminants resolve to the family fallback when it has one
        (the ``unsupported`` block); otherwise they raise UnknownTypeError.
        """
        family = self.registry.family(family_name)
        discriminant = self.peek(family, raw, path)

        shape = self.registry.lookup(family.name, discriminant)
        if shape is None:
            if family.fallback is None:
                raise UnknownTypeError(family.name, discriminant, path)
            logger.debug(
                f"Unsupported {family.name} type {discriminant!r} at {path}, "
                f"decoding as {family.fallback!r}"
            )
            shape = self.registry.lookup(family.name, family.fallback)

        return self._materialize(shape, raw, discriminant, family, path)

    def decode_record(self, cls: type, raw: Any, path: str = "$") -> Any:
        """Decode a plain record (no discriminant) into ``cls``."""
        if not isinstance(raw, dict):
            raise DecodeError(f"Expected {cls.__name__} object, got {type(raw).__name__}", path)
        return self._materialize(cls, raw, None, None, path)

    def decode_json(self, family_name: str, data: Union[bytes, str]) -> Any:
        """Parse JSON text, then decode it as ``family_name``."""
        return self.decode(family_name, parse_json(data))

    def _materialize(self, cls, raw, discriminant, family, path):
        """Phase 2: build ``cls`` from the whole raw document."""
        nested = family is not None and family.nested and discriminant is not None
        container = None
        kwargs = {}

        for f, spec in wire_fields(cls):
            if spec.location is Location.TAG:
                kwargs[f.name] = discriminant
                continue

            if spec.location is Location.VALUE:
                source, key, where = raw, discriminant, path
            elif spec.location is Location.PAYLOAD and nested:
                if container is None:
                    container = self._payload_container(raw, discriminant, path)
                source, key, where = container, spec.key or f.name, f"{path}.{discriminant}"
            else:
                source, key, where = raw, spec.key or f.name, path

            item = source.get(key)
            if item is None and has_default(f):
                continue
            if key not in source:
                raise DecodeError(f"Missing required field {key!r}", where)
            kwargs[f.name] = spec.codec.decode(item, self, f"{where}.{key}")

        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Cannot build {cls.__name__}: {e}", path) from e

    @staticmethod
    def _payload_container(raw: dict, discriminant: str, path: str) -> dict:
        container = raw.get(discriminant)
        if container is None:
            return {}
        if not isinstance(container, dict):
            raise DecodeError(f"Expected object under {discriminant!r}", path)
        return container


class Encoder:
    """Encodes variants and records back into wire documents."""

    def __init__(self, registry: VariantRegistry = REGISTRY):
        self.registry = registry

    def encode(self, obj: Any) -> dict:
        """Encode a variant or plain record.

        The discriminant is written from the variant's ``type``; payload
        fields go under the tag; None-valued envelope and payload fields are
        omitted, while a None whole-value payload is written as ``null``.
        """
        cls = type(obj)
        family = self.registry.family(cls.FAMILY) if cls.FAMILY else None
        discriminant = obj.type if family is not None else None

        out: dict = {}
        if family is not None and family.discriminant and discriminant is not None:
            out[family.discriminant] = discriminant

        specs = wire_fields(cls)
        nested = family is not None and family.nested and discriminant is not None
        container = None
        if nested and not any(spec.location is Location.VALUE for _, spec in specs):
            container = out[discriminant] = {}

        for f, spec in specs:
            if spec.location is Location.TAG:
                continue
            item = getattr(obj, f.name)
            if spec.location is Location.VALUE:
                out[discriminant] = spec.codec.encode(item, self)
                continue
            if spec.omits(item):
                continue
            target = container if spec.location is Location.PAYLOAD and nested else out
            target[spec.key or f.name] = spec.codec.encode(item, self)

        return out


def parse_json(data: Union[bytes, str]) -> Any:
    """Parse a response body, turning malformed JSON into DecodeError."""
    try:
        return json.loads(data)
    except ValueError as e:
        raise DecodeError(f"Invalid JSON: {e}") from e


_decoder = Decoder()
_encoder = Encoder()


def decode(family: str, raw: Any) -> Any:
    """Decode ``raw`` as a record of ``family`` with the default registry."""
    return _decoder.decode(family, raw)


def decode_record(cls: type, raw: Any) -> Any:
    return _decoder.decode_record(cls, raw)


def decode_json(family: str, data: Union[bytes, str]) -> Any:
    return _decoder.decode_json(family, data)


def encode(obj: Any) -> dict:
    """Encode ``obj`` with the default registry."""
    return _encoder.encode(obj)
