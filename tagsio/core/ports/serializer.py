from typing import Protocol, Any


class Serializer(Protocol):
    """
    Defines the interface for turning a host object into one complete
    encoded byte string and back.

    Implementations must be:
    - deterministic (same object state, same bytes)
    - strict (malformed or trailing input is an error, never ignored)
    """

    def serialize(self, obj: Any) -> bytes:
        """Encode a host object into a self-contained byte string."""

    def deserialize(self, data: bytes) -> Any:
        """Decode a byte string produced by `serialize` into a new object."""
