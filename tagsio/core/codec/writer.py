import io
import logging
import struct
from enum import Enum
from typing import Any

from tagsio.core.codec import primitive
from tagsio.core.io.exact import write_all
from tagsio.core.models.config import CodecConfig, DEFAULT_CONFIG
from tagsio.core.models.errors import EncodeError
from tagsio.core.models.tag import AttributeTag, StringEncoding
from tagsio.core.ports.host import SWriteable
from tagsio.core.ports.stream import ByteSink
from tagsio.core.schema.accessor import WriteAccessor
from tagsio.core.schema.schema import schema_of


class SWriter:
    """
    Writes primitives and tagged AttributeSequences to a byte sink.

    Every multi-byte value is big-endian. Floats are written as their exact
    IEEE-754 bit pattern, so NaN payloads and signed zeros survive. Strings
    are written as their UTF-8 bytes framed like a ByteArray (or in the
    legacy UTF-16 layout when the config asks for it).

    `write_object` emits one AttributeSequence: every registered write
    accessor in registration order, then the optional Custom block, then
    END. The Custom block is produced by the object's `custom_write` hook
    against a nested SWriter backed by an isolated buffer, and is left out
    entirely when the hook writes nothing.

    The writer owns a small scratch buffer and is not meant to be shared
    between threads. Sink errors propagate unchanged.
    """
    def __init__(
        self,
        sink: ByteSink,
        config: CodecConfig | None = None,
        *,
        depth: int = 0
    ) -> None:
        self._sink = sink
        self._config = config or DEFAULT_CONFIG
        self._depth = depth
        self._buf = bytearray(8)
        self._logger = logging.getLogger("core.codec.writer")

    @property
    def sink(self) -> ByteSink:
        return self._sink

    @property
    def config(self) -> CodecConfig:
        return self._config

    @property
    def depth(self) -> int:
        return self._depth

    def _pack(self, layout: struct.Struct, value: Any, kind: str) -> None:
        try:
            layout.pack_into(self._buf, 0, value)
        except (struct.error, OverflowError, TypeError) as exc:
            raise EncodeError(f"Cannot encode {value!r} as {kind}: {exc}") from exc
        write_all(self._sink, memoryview(self._buf)[:layout.size])

    def write_raw(self, data: bytes | bytearray | memoryview) -> None:
        write_all(self._sink, data)

    def write_byte(self, value: int) -> None:
        self._pack(primitive.BYTE, value, "BYTE")

    def write_short(self, value: int) -> None:
        self._pack(primitive.SHORT, value, "SHORT")

    def write_int(self, value: int) -> None:
        self._pack(primitive.INT32, value, "INT32")

    def write_long(self, value: int) -> None:
        self._pack(primitive.INT64, value, "INT64")

    def write_float(self, value: float) -> None:
        try:
            bits = primitive.float_to_bits(value)
        except (struct.error, OverflowError, TypeError) as exc:
            raise EncodeError(f"Cannot encode {value!r} as FLOAT32: {exc}") from exc
        self._pack(primitive.INT32, bits, "FLOAT32")

    def write_double(self, value: float) -> None:
        self._pack(primitive.FLOAT64, value, "FLOAT64")

    def write_boolean(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise EncodeError(f"Cannot encode {value!r} as BOOLEAN")
        self.write_byte(1 if value else 0)

    def write_char(self, value: str) -> None:
        if not isinstance(value, str) or len(value) != 1 or ord(value) > 0xFFFF:
            raise EncodeError(f"Cannot encode {value!r} as CHAR: expected one UTF-16 code unit")
        self._pack(primitive.CHAR, ord(value), "CHAR")

    def write_byte_array(self, data: bytes | bytearray | memoryview | None) -> None:
        """
        Int32 length then the raw bytes. None is written as length -1 and
        is distinct from an empty array (length 0).
        """
        if data is None:
            self.write_int(primitive.NULL_LENGTH)
            return

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise EncodeError(f"Cannot encode {type(data).__name__} as a byte array")

        view = memoryview(data).cast("B")
        if len(view) > primitive.MAX_LENGTH:
            raise EncodeError(f"Byte array too large: {len(view)} bytes")

        self.write_int(len(view))
        if view:
            write_all(self._sink, view)

    def write_string(self, value: str | None) -> None:
        if value is not None and not isinstance(value, str):
            raise EncodeError(f"Cannot encode {type(value).__name__} as STRING")

        if self._config.string_encoding is StringEncoding.utf16:
            self._write_utf16(value)
            return

        if value is None:
            self.write_byte_array(None)
            return

        try:
            data = value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodeError(f"Cannot encode {value!r} as UTF-8: {exc}") from exc
        self.write_byte_array(data)

    def _write_utf16(self, value: str | None) -> None:
        # Legacy layout: count of UTF-16 code units, then the units.
        if value is None:
            self.write_int(primitive.NULL_LENGTH)
            return

        data = value.encode("utf-16-be", "surrogatepass")
        self.write_int(len(data) // 2)
        if data:
            write_all(self._sink, data)

    def write_enum(self, value: Enum) -> None:
        if not isinstance(value, Enum):
            raise EncodeError(f"Cannot encode {value!r} as ENUM")
        self.write_string(value.name)

    def write_tag(self, tag: AttributeTag) -> None:
        self.write_byte(int(tag))

    def write_value(self, tag: AttributeTag, value: Any) -> None:
        """Write `value` in the encoding selected by `tag` (a primitive tag)."""
        method = _VALUE_WRITERS.get(tag)
        if method is None:
            raise EncodeError(f"{tag!r} does not carry a value")
        method(self, value)

    def write_attribute(self, accessor: WriteAccessor, value: Any) -> None:
        if value is None:
            self.write_tag(AttributeTag.NULL)
            self.write_string(accessor.name)
            return

        if accessor.enum_type is not None and not isinstance(value, accessor.enum_type):
            raise EncodeError(
                f"Attribute '{accessor.name}': {value!r} is not a {accessor.enum_type.__name__}"
            )

        self.write_tag(accessor.tag)
        self.write_string(accessor.name)
        try:
            self.write_value(accessor.tag, value)
        except EncodeError as exc:
            raise EncodeError(f"Attribute '{accessor.name}': {exc}") from exc

    def write_object(self, obj: SWriteable) -> None:
        """
        Encode `obj` as one AttributeSequence.

        Fails only on sink errors or on a value that cannot be represented
        in its declared kind (EncodeError).
        """
        if self._depth > self._config.max_depth:
            raise EncodeError(f"Objects nested deeper than {self._config.max_depth} custom blocks")

        schema = schema_of(obj)

        for accessor in schema.writers():
            self.write_attribute(accessor, accessor.getter(obj))

        hook = getattr(obj, "custom_write", None)
        if hook is not None:
            payload = self._custom_payload(hook)
            if payload:
                self._logger.debug(f"{schema.name}: custom block of {len(payload)} bytes")
                self.write_tag(AttributeTag.CUSTOM)
                self.write_byte_array(payload)

        self.write_tag(AttributeTag.END)

    def _custom_payload(self, hook: Any) -> bytes:
        buffer = io.BytesIO()
        hook(SWriter(buffer, self._config, depth=self._depth + 1))
        return buffer.getvalue()

    def close(self) -> None:
        close = getattr(self._sink, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "SWriter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


_VALUE_WRITERS = {
    AttributeTag.BYTE: SWriter.write_byte,
    AttributeTag.SHORT: SWriter.write_short,
    AttributeTag.INT32: SWriter.write_int,
    AttributeTag.INT64: SWriter.write_long,
    AttributeTag.FLOAT32: SWriter.write_float,
    AttributeTag.FLOAT64: SWriter.write_double,
    AttributeTag.BOOLEAN: SWriter.write_boolean,
    AttributeTag.CHAR: SWriter.write_char,
    AttributeTag.STRING: SWriter.write_string,
    AttributeTag.ENUM: SWriter.write_enum,
}
