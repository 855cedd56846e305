"""Field descriptors and value codecs describing a variant's wire shape.

A variant class is a frozen dataclass whose fields say where they live on the
wire:

- ``envelope()``: a top-level key shared by the family (``id``, ``href``...)
- ``payload()``: a key inside the object nested under the tag
  (``{"paragraph": {"text": [...]}}``)
- ``value()``: the whole value nested under the tag
  (``{"checkbox": true}``)
- ``tag()``: receives the discriminant itself

Each field also names a codec for its value. Codecs only need the
``decode``/``encode`` hooks of the decoder and encoder in ``codec.py``, so this
module does not import them.
"""

import copy
from dataclasses import MISSING, Field, field, fields
from enum import Enum, auto
from functools import lru_cache
from typing import Any, ClassVar, Optional

from .errors import DecodeError

WIRE = "notion_wire"


class Location(Enum):
    """Where a field's value lives in the wire document."""
    ENVELOPE = auto()
    PAYLOAD = auto()
    VALUE = auto()
    TAG = auto()


class Codec:
    """Converts one field value between its wire form and its Python form."""

    def decode(self, raw: Any, decoder: Any, path: str) -> Any:
        raise NotImplementedError

    def encode(self, value: Any, encoder: Any) -> Any:
        raise NotImplementedError


def _json_type(raw: Any) -> str:
    if raw is None:
        return "null"
    if isinstance(raw, bool):
        return "boolean"
    if isinstance(raw, (int, float)):
        return "number"
    if isinstance(raw, str):
        return "string"
    if isinstance(raw, list):
        return "array"
    if isinstance(raw, dict):
        return "object"
    return type(raw).__name__


class Scalar(Codec):
    """A JSON scalar checked against the accepted Python types."""

    def __init__(self, *types: type, name: str):
        self.types = types
        self.name = name

    def decode(self, raw, decoder, path):
        # bool is an int subclass; only accept it where booleans are expected
        if isinstance(raw, bool) and bool not in self.types:
            raise DecodeError(f"Expected {self.name}, got boolean", path)
        if not isinstance(raw, self.types):
            raise DecodeError(f"Expected {self.name}, got {_json_type(raw)}", path)
        return raw

    def encode(self, value, encoder):
        return value


class RawJSON(Codec):
    """Any JSON value, kept as the generic tree."""

    def decode(self, raw, decoder, path):
        return copy.deepcopy(raw)

    def encode(self, value, encoder):
        return copy.deepcopy(value)


class Nullable(Codec):
    """Wraps a codec so that ``null`` maps to None in both directions."""

    def __init__(self, inner: Codec):
        self.inner = inner

    def decode(self, raw, decoder, path):
        if raw is None:
            return None
        return self.inner.decode(raw, decoder, path)

    def encode(self, value, encoder):
        if value is None:
            return None
        return self.inner.encode(value, encoder)


class ListOf(Codec):
    """A JSON array, decoded element by element in order."""

    def __init__(self, inner: Codec):
        self.inner = inner

    def decode(self, raw, decoder, path):
        if not isinstance(raw, list):
            raise DecodeError(f"Expected array, got {_json_type(raw)}", path)
        return [self.inner.decode(item, decoder, f"{path}[{i}]") for i, item in enumerate(raw)]

    def encode(self, value, encoder):
        return [self.inner.encode(item, encoder) for item in value]


class MapOf(Codec):
    """A JSON object used as a string-keyed map."""

    def __init__(self, inner: Codec):
        self.inner = inner

    def decode(self, raw, decoder, path):
        if not isinstance(raw, dict):
            raise DecodeError(f"Expected object, got {_json_type(raw)}", path)
        return {key: self.inner.decode(item, decoder, f"{path}.{key}") for key, item in raw.items()}

    def encode(self, value, encoder):
        return {key: self.inner.encode(item, encoder) for key, item in value.items()}


class Record(Codec):
    """A plain (non-discriminated) nested record."""

    def __init__(self, cls: type):
        self.cls = cls

    def decode(self, raw, decoder, path):
        return decoder.decode_record(self.cls, raw, path)

    def encode(self, value, encoder):
        return encoder.encode(value)


class OneOf(Codec):
    """A discriminated record of ``family``, decoded in two phases.

    When ``expect`` is given, the decoded variant must be an instance of it.
    """

    def __init__(self, family: str, expect: Optional[type] = None):
        self.family = family
        self.expect = expect

    def decode(self, raw, decoder, path):
        result = decoder.decode(self.family, raw, path)
        if self.expect is not None and not isinstance(result, self.expect):
            raise DecodeError(
                f"Expected {self.expect.__name__}, got {type(result).__name__}", path
            )
        return result

    def encode(self, value, encoder):
        return encoder.encode(value)


STRING = Scalar(str, name="string")
NUMBER = Scalar(int, float, name="number")
INTEGER = Scalar(int, name="integer")
BOOLEAN = Scalar(bool, name="boolean")
ANY = RawJSON()


class WireSpec:
    """Wire placement of one dataclass field."""

    __slots__ = ("location", "key", "codec", "omit_empty")

    def __init__(self, location: Location, key: Optional[str], codec: Codec, omit_empty: bool):
        self.location = location
        self.key = key
        self.codec = codec
        self.omit_empty = omit_empty

    def omits(self, value: Any) -> bool:
        """Whether ``value`` is left out of the encoded document."""
        if value is None:
            return True
        return self.omit_empty and value is not False and not value


def _wire_field(location, key, codec, omit_empty, kwargs) -> Field:
    metadata = {WIRE: WireSpec(location, key, codec or ANY, omit_empty)}
    return field(metadata=metadata, **kwargs)


def envelope(key: Optional[str] = None, codec: Optional[Codec] = None, *, omit_empty: bool = False, **kwargs):
    """A top-level key of the document. ``key`` defaults to the field name."""
    return _wire_field(Location.ENVELOPE, key, codec, omit_empty, kwargs)


def payload(key: Optional[str] = None, codec: Optional[Codec] = None, *, omit_empty: bool = False, **kwargs):
    """A key inside the object nested under the variant tag."""
    return _wire_field(Location.PAYLOAD, key, codec, omit_empty, kwargs)


def value(codec: Optional[Codec] = None, **kwargs):
    """The whole value nested under the variant tag (encoded even when None)."""
    return _wire_field(Location.VALUE, None, codec, False, kwargs)


def tag(**kwargs):
    """Receives the discriminant value the variant was decoded from."""
    return _wire_field(Location.TAG, None, STRING, False, kwargs)


@lru_cache(maxsize=None)
def wire_fields(cls: type) -> tuple[tuple[Field, WireSpec], ...]:
    """The wire-mapped fields of a dataclass, in declaration order."""
    return tuple((f, f.metadata[WIRE]) for f in fields(cls) if WIRE in f.metadata)


def has_default(f: Field) -> bool:
    return f.default is not MISSING or f.default_factory is not MISSING


class WireModel:
    """Base class of every wire record.

    ``FAMILY`` names the registry family of discriminated records; plain
    records leave it None. ``TYPE`` is the discriminant value, set by the
    ``register`` decorator. ``WRITABLE`` is False for variants the API only
    ever returns (computed values, unsupported blocks).

    Records are frozen: fields cannot be reassigned. List and dict fields
    hold fresh containers built by the decoder (never the caller's input),
    but the containers themselves are ordinary lists and dicts, so records
    holding them are not hashable.
    """

    FAMILY: ClassVar[Optional[str]] = None
    TYPE: ClassVar[Optional[str]] = None
    WRITABLE: ClassVar[bool] = True

    @property
    def type(self) -> Optional[str]:
        """The discriminant value of this variant."""
        return self.TYPE

    def to_wire(self) -> dict:
        """Encode to the wire document (see ``codec.encode``)."""
        from .codec import encode
        return encode(self)

    @classmethod
    def from_wire(cls, raw: Any):
        """Decode ``raw`` and check that the result is an instance of ``cls``."""
        from .codec import decode, decode_record
        if cls.FAMILY is None:
            return decode_record(cls, raw)
        result = decode(cls.FAMILY, raw)
        if not isinstance(result, cls):
            raise DecodeError(f"Expected {cls.__name__}, got {type(result).__name__}")
        return result
