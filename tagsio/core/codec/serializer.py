import io
from typing import Callable

from tagsio.core.codec.reader import SReader
from tagsio.core.codec.writer import SWriter
from tagsio.core.models.config import CodecConfig
from tagsio.core.models.errors import DecodeError
from tagsio.core.ports.host import SReadable, SWriteable
from tagsio.core.ports.serializer import Serializer


class TaggedSerializer(Serializer):
    """
    Serializer backed by the tagged attribute protocol.

    `serialize` encodes one object into a standalone byte string holding
    exactly one AttributeSequence. `deserialize` builds a fresh object with
    `factory` and decodes into it; bytes left over after END are rejected.
    """
    def __init__(
        self,
        factory: Callable[[], SReadable],
        config: CodecConfig | None = None
    ) -> None:
        self._factory = factory
        self._config = config

    def serialize(self, obj: SWriteable) -> bytes:
        buffer = io.BytesIO()
        SWriter(buffer, self._config).write_object(obj)
        return buffer.getvalue()

    def deserialize(self, data: bytes) -> SReadable:
        reader = SReader.from_bytes(data, self._config)
        obj = reader.read_object(self._factory())
        if not reader.at_end():
            raise DecodeError("Trailing bytes after END")
        return obj
