import io
import logging
import struct
from enum import Enum
from typing import Any, TypeVar

from tagsio.core.codec import primitive
from tagsio.core.io.bounded import BoundedSource
from tagsio.core.io.exact import read_exact, skip_exact
from tagsio.core.models.attribute import Attribute
from tagsio.core.models.config import CodecConfig, DEFAULT_CONFIG
from tagsio.core.models.errors import (
    DecodeError,
    EndOfInput,
    TypeMismatch,
    UnknownEnumVariant,
)
from tagsio.core.models.tag import AttributeTag, FIXED_WIDTHS, StringEncoding
from tagsio.core.ports.host import SReadable
from tagsio.core.ports.stream import ByteSource
from tagsio.core.schema.schema import schema_of

E = TypeVar("E", bound=Enum)
T = TypeVar("T", bound=SReadable)


class SReader:
    """
    Reads primitives and tagged AttributeSequences from a byte source.

    Every read goes through `read_exact`, so sources that hand out fewer
    bytes per call than requested (sockets, pipes, chunked transports) are
    handled transparently. Running out of input before a value is complete
    raises EndOfInput; there is no partial-value recovery.

    `read_object` runs the tag loop until END:
      - a named tag is matched to a read accessor by name only; its kind
        must match the wire tag (TypeMismatch otherwise), NULL calls the
        setter with None;
      - an unknown name still has its value bytes consumed, so the rest of
        the stream stays in sync;
      - CUSTOM hands the object's `custom_read` hook a nested SReader bound
        to exactly the announced region, then skips whatever the hook left.

    An aborted decode leaves the target object with whatever earlier
    setters applied; callers must treat it as unreliable.
    """
    def __init__(
        self,
        source: ByteSource,
        config: CodecConfig | None = None,
        *,
        depth: int = 0
    ) -> None:
        self._source = source
        self._config = config or DEFAULT_CONFIG
        self._depth = depth
        self._buf = bytearray(8)
        self._view = memoryview(self._buf)
        self._logger = logging.getLogger("core.codec.reader")

    @classmethod
    def from_bytes(cls, data: bytes, config: CodecConfig | None = None) -> "SReader":
        return cls(io.BytesIO(data), config)

    @property
    def source(self) -> ByteSource:
        return self._source

    @property
    def config(self) -> CodecConfig:
        return self._config

    @property
    def depth(self) -> int:
        return self._depth

    def _unpack(self, layout: struct.Struct) -> Any:
        got = read_exact(self._source, self._view[:layout.size])
        if got < layout.size:
            raise EndOfInput(layout.size, got)
        return layout.unpack_from(self._buf)[0]

    def read_raw(self, count: int) -> bytes:
        data = bytearray(count)
        got = read_exact(self._source, memoryview(data))
        if got < count:
            raise EndOfInput(count, got)
        return bytes(data)

    def skip_raw(self, count: int) -> None:
        skipped = skip_exact(self._source, count)
        if skipped < count:
            raise EndOfInput(count, skipped)

    def read_byte(self) -> int:
        return self._unpack(primitive.BYTE)

    def read_short(self) -> int:
        return self._unpack(primitive.SHORT)

    def read_int(self) -> int:
        return self._unpack(primitive.INT32)

    def read_long(self) -> int:
        return self._unpack(primitive.INT64)

    def read_float(self) -> float:
        return primitive.bits_to_float(self._unpack(primitive.INT32))

    def read_double(self) -> float:
        return self._unpack(primitive.FLOAT64)

    def read_boolean(self) -> bool:
        return self.read_byte() == 1

    def read_char(self) -> str:
        return chr(self._unpack(primitive.CHAR))

    def _read_length(self) -> int | None:
        length = self.read_int()
        if length == primitive.NULL_LENGTH:
            return None
        if length < 0:
            raise DecodeError(f"Invalid length prefix {length}")
        if length > self._config.max_array_length:
            raise DecodeError(
                f"Length {length} exceeds the limit of {self._config.max_array_length}"
            )
        return length

    def read_byte_array(self) -> bytes | None:
        length = self._read_length()
        if length is None:
            return None
        if length == 0:
            return b""
        return self.read_raw(length)

    def read_string(self) -> str | None:
        if self._config.string_encoding is StringEncoding.utf16:
            return self._read_utf16()

        data = self.read_byte_array()
        if data is None:
            return None

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Invalid UTF-8 string: {exc}") from exc

    def _read_utf16(self) -> str | None:
        units = self._read_length()
        if units is None:
            return None
        if units == 0:
            return ""
        return self.read_raw(units * 2).decode("utf-16-be", "surrogatepass")

    def read_enum(self, enum_type: type[E]) -> E:
        name = self.read_string()
        try:
            return enum_type[name]
        except KeyError:
            raise UnknownEnumVariant(enum_type, name) from None

    def read_tag(self) -> AttributeTag:
        value = self.read_byte()
        tag = AttributeTag.parse(value)
        if tag is None:
            raise DecodeError(f"Invalid attribute tag {value}")
        return tag

    def read_value(self, tag: AttributeTag, enum_type: type[Enum] | None = None) -> Any:
        """
        Decode one value of the kind selected by `tag`. Without an
        `enum_type`, ENUM values come back as their variant name.
        """
        if tag is AttributeTag.ENUM and enum_type is not None:
            return self.read_enum(enum_type)

        method = _VALUE_READERS.get(tag)
        if method is None:
            raise DecodeError(f"{tag!r} does not carry a value")
        return method(self)

    def skip_value(self, tag: AttributeTag) -> None:
        """
        Consume the value bytes of `tag` without interpreting them.
        Strings are skipped by length, never decoded.
        """
        width = FIXED_WIDTHS.get(tag)
        if width is not None:
            self.skip_raw(width)
            return

        if tag not in (AttributeTag.STRING, AttributeTag.ENUM):
            raise DecodeError(f"{tag!r} does not carry a value")

        length = self._read_length()
        if length:
            if self._config.string_encoding is StringEncoding.utf16:
                length *= 2
            self.skip_raw(length)

    def _read_name(self) -> str:
        name = self.read_string()
        if name is None:
            raise DecodeError("Attribute name is null")
        return name

    def read_object(self, obj: T) -> T:
        """
        Decode one AttributeSequence into `obj` and return it.
        """
        if self._depth > self._config.max_depth:
            raise DecodeError(f"Objects nested deeper than {self._config.max_depth} custom blocks")

        schema = schema_of(obj)

        while True:
            tag = self.read_tag()

            if tag is AttributeTag.END:
                return obj

            if tag is AttributeTag.CUSTOM:
                self._read_custom(obj)
                continue

            name = self._read_name()
            accessor = schema.resolve_reader(name)

            if accessor is None:
                if tag is not AttributeTag.NULL:
                    self.skip_value(tag)
                self._logger.debug(f"{schema.name}: skipped unknown attribute '{name}' ({tag.name})")
                continue

            if tag is AttributeTag.NULL:
                accessor.setter(obj, None)
                continue

            if tag is not accessor.tag:
                raise TypeMismatch(name, accessor.tag, tag)

            accessor.setter(obj, self.read_value(tag, accessor.enum_type))

    def _read_custom(self, obj: SReadable) -> None:
        # A null region is treated like an empty one.
        length = self._read_length() or 0
        region = BoundedSource(self._source, length)
        hook = getattr(obj, "custom_read", None)

        if hook is None:
            self._logger.debug(f"{type(obj).__qualname__}: no custom_read hook, skipping {length} bytes")
        else:
            hook(SReader(region, self._config, depth=self._depth + 1))
            if region.remaining:
                self._logger.debug(
                    f"{type(obj).__qualname__}: custom_read left {region.remaining} of {length} bytes"
                )

        region.drain()

    def read_attributes(self) -> list[Attribute]:
        """
        Decode one AttributeSequence without a schema.

        Returns every entry in wire order. ENUM values are returned as
        their variant name and the Custom block as its raw bytes.
        """
        attributes: list[Attribute] = []

        while True:
            tag = self.read_tag()

            if tag is AttributeTag.END:
                return attributes

            if tag is AttributeTag.CUSTOM:
                attributes.append(Attribute(None, tag, self.read_byte_array() or b""))
                continue

            name = self._read_name()
            value = None if tag is AttributeTag.NULL else self.read_value(tag)
            attributes.append(Attribute(name, tag, value))

    def at_end(self) -> bool:
        """
        True when the source has no further bytes. Consumes one byte
        otherwise, so only use it once decoding is finished.
        """
        return read_exact(self._source, self._view[:1]) == 0

    def close(self) -> None:
        close = getattr(self._source, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "SReader":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


_VALUE_READERS = {
    AttributeTag.BYTE: SReader.read_byte,
    AttributeTag.SHORT: SReader.read_short,
    AttributeTag.INT32: SReader.read_int,
    AttributeTag.INT64: SReader.read_long,
    AttributeTag.FLOAT32: SReader.read_float,
    AttributeTag.FLOAT64: SReader.read_double,
    AttributeTag.BOOLEAN: SReader.read_boolean,
    AttributeTag.CHAR: SReader.read_char,
    AttributeTag.STRING: SReader.read_string,
    AttributeTag.ENUM: SReader.read_string,
}
