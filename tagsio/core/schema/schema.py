import operator
from enum import Enum
from typing import Any, Callable

from tagsio.core.models.errors import MalformedAccessor
from tagsio.core.models.tag import AttributeTag
from tagsio.core.schema.accessor import Getter, ReadAccessor, Setter, WriteAccessor


class Schema:
    """
    Explicit, ordered registry of the attributes of one host type.

    Write accessors are kept in registration order, which is the order
    attributes appear on the wire. Read accessors are looked up by name
    only, so decoding does not depend on that order.

    Registration happens once, usually in the class body:

        class Person:
            sio_schema = Schema("Person")
            sio_schema.field("id", AttributeTag.INT32)

            @sio_schema.writer("name", AttributeTag.STRING)
            def get_name(self):
                return self._name

            @sio_schema.reader("name", AttributeTag.STRING)
            def set_name(self, value):
                self._name = value

    Any misconfiguration (unsupported kind, wrong arity, a name registered
    twice on the same side) raises MalformedAccessor immediately, so it
    never surfaces halfway through a stream.

    A schema built with `extends` reads its parent on every lookup, so
    accessors registered on the parent later are still inherited. Parent
    attributes come first on the wire. A name the child registered itself
    shadows one the parent registers afterwards.
    """

    def __init__(self, name: str, extends: "Schema | None" = None) -> None:
        self.name = name
        self._parent = extends
        self._writers: dict[str, WriteAccessor] = {}
        self._readers: dict[str, ReadAccessor] = {}

    def _writer_map(self) -> dict[str, WriteAccessor]:
        writers = self._parent._writer_map() if self._parent is not None else {}
        writers.update(self._writers)
        return writers

    def _reader_map(self) -> dict[str, ReadAccessor]:
        readers = self._parent._reader_map() if self._parent is not None else {}
        readers.update(self._readers)
        return readers

    def add_writer(self, accessor: WriteAccessor) -> None:
        if accessor.name in self._writer_map():
            raise MalformedAccessor(
                f"Write accessor already registered for '{accessor.name}' in {self.name}"
            )
        self._writers[accessor.name] = accessor

    def add_reader(self, accessor: ReadAccessor) -> None:
        if self.resolve_reader(accessor.name) is not None:
            raise MalformedAccessor(
                f"Read accessor already registered for '{accessor.name}' in {self.name}"
            )
        self._readers[accessor.name] = accessor

    def writer(
        self,
        name: str,
        tag: AttributeTag,
        enum_type: type[Enum] | None = None
    ) -> Callable[[Getter], Getter]:
        def decorator(func: Getter) -> Getter:
            self.add_writer(WriteAccessor(name, tag, func, enum_type))
            return func

        return decorator

    def reader(
        self,
        name: str,
        tag: AttributeTag,
        enum_type: type[Enum] | None = None
    ) -> Callable[[Setter], Setter]:
        def decorator(func: Setter) -> Setter:
            self.add_reader(ReadAccessor(name, tag, func, enum_type))
            return func

        return decorator

    def field(
        self,
        name: str,
        tag: AttributeTag,
        attr: str | None = None,
        enum_type: type[Enum] | None = None
    ) -> None:
        """
        Register both sides of an attribute stored as a plain instance
        attribute (`attr`, defaulting to the attribute name).
        """
        attr = attr or name
        getter = operator.attrgetter(attr)

        def setter(obj: Any, value: Any) -> None:
            setattr(obj, attr, value)

        self.add_writer(WriteAccessor(name, tag, getter, enum_type))
        self.add_reader(ReadAccessor(name, tag, setter, enum_type))

    def writers(self) -> list[WriteAccessor]:
        return list(self._writer_map().values())

    def readers(self) -> dict[str, ReadAccessor]:
        return self._reader_map()

    def resolve_reader(self, name: str) -> ReadAccessor | None:
        accessor = self._readers.get(name)
        if accessor is None and self._parent is not None:
            return self._parent.resolve_reader(name)
        return accessor

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, writers={list(self._writer_map())}, readers={list(self._reader_map())})"


def schema_of(obj: Any) -> Schema:
    schema = getattr(type(obj), "sio_schema", None)
    if not isinstance(schema, Schema):
        raise MalformedAccessor(f"{type(obj).__qualname__} has no registered sio_schema")
    return schema
