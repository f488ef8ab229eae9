import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from tagsio.core.models.errors import MalformedAccessor
from tagsio.core.models.tag import AttributeTag, PRIMITIVE_TAGS


Getter = Callable[[Any], Any]
"""
Called with the host object, returns the attribute value or None.
"""

Setter = Callable[[Any, Any], None]
"""
Called with the host object and the decoded value (None for NULL).
"""


def _check_tag(name: str, tag: Any, enum_type: type | None) -> None:
    if not isinstance(name, str) or not name:
        raise MalformedAccessor(f"Invalid attribute name: {name!r}")

    if not isinstance(tag, AttributeTag) or tag not in PRIMITIVE_TAGS:
        raise MalformedAccessor(f"Attribute '{name}': unsupported kind {tag!r}")

    if tag is AttributeTag.ENUM:
        if not (isinstance(enum_type, type) and issubclass(enum_type, Enum)):
            raise MalformedAccessor(f"Attribute '{name}': ENUM requires an Enum type")
    elif enum_type is not None:
        raise MalformedAccessor(f"Attribute '{name}': enum_type given for {tag.name}")


def _check_arity(name: str, func: Any, arity: int, role: str) -> None:
    if not callable(func):
        raise MalformedAccessor(f"Attribute '{name}': {role} is not callable")

    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins without an introspectable signature
        return

    try:
        signature.bind(*([None] * arity))
    except TypeError:
        raise MalformedAccessor(
            f"Attribute '{name}': {role} {getattr(func, '__qualname__', func)!s} "
            f"must accept exactly {arity} positional argument(s)"
        ) from None


@dataclass(frozen=True)
class WriteAccessor:
    name: str
    tag: AttributeTag
    getter: Getter
    enum_type: type[Enum] | None = None

    def __post_init__(self) -> None:
        _check_tag(self.name, self.tag, self.enum_type)
        _check_arity(self.name, self.getter, 1, "getter")


@dataclass(frozen=True)
class ReadAccessor:
    name: str
    tag: AttributeTag
    setter: Setter
    enum_type: type[Enum] | None = None

    def __post_init__(self) -> None:
        _check_tag(self.name, self.tag, self.enum_type)
        _check_arity(self.name, self.setter, 2, "setter")
