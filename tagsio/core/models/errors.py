from typing import Any


class SioError(Exception):
    """Base class for every error raised by the codec itself."""


class DecodeError(SioError, ValueError):
    """
    The byte stream cannot be decoded. Fatal for the current decode call:
    the target object keeps whatever earlier setters applied and must be
    treated as unreliable.
    """


class EndOfInput(DecodeError, EOFError):
    def __init__(self, requested: int, obtained: int) -> None:
        super().__init__(
            f"End of input: requested {requested} bytes, got {obtained}"
        )
        self.requested = requested
        self.obtained = obtained


class TypeMismatch(DecodeError):
    def __init__(self, attribute: str, expected: Any, actual: Any) -> None:
        super().__init__(
            f"Attribute '{attribute}': expected {expected.name}, got {actual.name}"
        )
        self.attribute = attribute
        self.expected = expected
        self.actual = actual


class UnknownEnumVariant(DecodeError):
    def __init__(self, enum_type: type, name: str | None) -> None:
        super().__init__(f"{enum_type.__name__} has no variant named {name!r}")
        self.enum_type = enum_type
        self.name = name


class EncodeError(SioError, ValueError):
    """A value cannot be represented in the kind its accessor declares."""


class MalformedAccessor(SioError, TypeError):
    """
    An accessor or schema is misconfigured. Raised at registration time,
    or when an object without a schema is handed to the codec.
    """
