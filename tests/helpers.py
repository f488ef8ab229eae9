import io
from dataclasses import dataclass, field
from enum import Enum

from tagsio.core.codec.reader import SReader
from tagsio.core.codec.writer import SWriter
from tagsio.core.models.config import CodecConfig
from tagsio.core.models.tag import AttributeTag
from tagsio.core.schema.schema import Schema


class Color(Enum):
    RED = 1
    GREEN = 2
    BLUE = 3


@dataclass
class Person:
    id: int | None = None
    name: str | None = None
    active: bool | None = None

    sio_schema = Schema("Person")
    sio_schema.field("id", AttributeTag.INT32)
    sio_schema.field("name", AttributeTag.STRING)
    sio_schema.field("active", AttributeTag.BOOLEAN)


@dataclass
class Employee(Person):
    level: int | None = None

    sio_schema = Schema("Employee", extends=Person.sio_schema)
    sio_schema.field("level", AttributeTag.SHORT)


@dataclass
class Gadget:
    tiny: int | None = None
    small: int | None = None
    medium: int | None = None
    large: int | None = None
    single: float | None = None
    double: float | None = None
    flag: bool | None = None
    letter: str | None = None
    label: str | None = None
    color: Color | None = None

    sio_schema = Schema("Gadget")
    sio_schema.field("tiny", AttributeTag.BYTE)
    sio_schema.field("small", AttributeTag.SHORT)
    sio_schema.field("medium", AttributeTag.INT32)
    sio_schema.field("large", AttributeTag.INT64)
    sio_schema.field("single", AttributeTag.FLOAT32)
    sio_schema.field("double", AttributeTag.FLOAT64)
    sio_schema.field("flag", AttributeTag.BOOLEAN)
    sio_schema.field("letter", AttributeTag.CHAR)
    sio_schema.field("label", AttributeTag.STRING)
    sio_schema.field("color", AttributeTag.ENUM, enum_type=Color)


class Account:
    sio_schema = Schema("Account")

    def __init__(self, owner: str | None = None, balance: int | None = None) -> None:
        self._owner = owner
        self._balance = balance

    @sio_schema.writer("owner", AttributeTag.STRING)
    def get_owner(self):
        return self._owner

    @sio_schema.reader("owner", AttributeTag.STRING)
    def set_owner(self, value):
        self._owner = value

    @sio_schema.writer("balance", AttributeTag.INT64)
    def get_balance(self):
        return self._balance

    @sio_schema.reader("balance", AttributeTag.INT64)
    def set_balance(self, value):
        self._balance = value


@dataclass
class KnownA:
    knownA: int | None = None

    sio_schema = Schema("KnownA")
    sio_schema.field("knownA", AttributeTag.INT32)


@dataclass
class Flagged:
    flag: bool | None = None

    sio_schema = Schema("Flagged")
    sio_schema.field("flag", AttributeTag.BOOLEAN)


@dataclass
class Team:
    name: str | None = None
    members: list[Person] = field(default_factory=list)

    sio_schema = Schema("Team")
    sio_schema.field("name", AttributeTag.STRING)

    def custom_write(self, writer: SWriter) -> None:
        if not self.members:
            return
        writer.write_int(len(self.members))
        for member in self.members:
            writer.write_object(member)

    def custom_read(self, reader: SReader) -> None:
        count = reader.read_int()
        self.members = [reader.read_object(Person()) for _ in range(count)]


@dataclass
class Node:
    value: int | None = None
    child: "Node | None" = None

    sio_schema = Schema("Node")
    sio_schema.field("value", AttributeTag.INT32)

    def custom_write(self, writer: SWriter) -> None:
        if self.child is not None:
            writer.write_object(self.child)

    def custom_read(self, reader: SReader) -> None:
        self.child = reader.read_object(Node())

    def depth(self) -> int:
        return 1 + (self.child.depth() if self.child else 0)


def chain(length: int) -> Node:
    root = Node(value=0)
    current = root
    for i in range(1, length):
        current.child = Node(value=i)
        current = current.child
    return root


@dataclass
class Greedy:
    """Reads twice what its custom block holds."""
    payload: bytes | None = None

    sio_schema = Schema("Greedy")

    def custom_write(self, writer: SWriter) -> None:
        writer.write_raw(self.payload or b"")

    def custom_read(self, reader: SReader) -> None:
        self.payload = reader.read_raw(2 * reader.source.limit)


@dataclass
class Lazy:
    """Writes a custom block but never reads it back."""
    tag: int | None = None
    calls: int = 0

    sio_schema = Schema("Lazy")
    sio_schema.field("tag", AttributeTag.INT32)

    def custom_write(self, writer: SWriter) -> None:
        writer.write_string("ignored on purpose")

    def custom_read(self, reader: SReader) -> None:
        self.calls += 1


@dataclass
class Silent:
    calls: int = 0

    sio_schema = Schema("Silent")
    sio_schema.field("calls", AttributeTag.INT32)

    def custom_write(self, writer: SWriter) -> None:
        return None


def encode(obj, config: CodecConfig | None = None) -> bytes:
    buffer = io.BytesIO()
    SWriter(buffer, config).write_object(obj)
    return buffer.getvalue()


def encode_with(build, config: CodecConfig | None = None) -> bytes:
    """Run `build(writer)` against a fresh in-memory writer, return the bytes."""
    buffer = io.BytesIO()
    build(SWriter(buffer, config))
    return buffer.getvalue()
