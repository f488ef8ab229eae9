from typing import Protocol, ClassVar, TYPE_CHECKING

if TYPE_CHECKING:
    from tagsio.core.codec.reader import SReader
    from tagsio.core.codec.writer import SWriter
    from tagsio.core.schema.schema import Schema


class SWriteable(Protocol):
    """
    A host object the codec can encode.

    The type exposes its registered accessors as `sio_schema`. The
    optional `custom_write` hook receives a nested SWriter backed by an
    isolated buffer; whatever it writes ends up in the Custom block.
    """
    sio_schema: ClassVar["Schema"]

    def custom_write(self, writer: "SWriter") -> None:
        """Optional. Write free-form content for the Custom block."""


class SReadable(Protocol):
    """
    A host object the codec can decode into.

    The optional `custom_read` hook receives a nested SReader that is
    bounded to the Custom block; it cannot read past the block.
    """
    sio_schema: ClassVar["Schema"]

    def custom_read(self, reader: "SReader") -> None:
        """Optional. Read back what `custom_write` produced."""
