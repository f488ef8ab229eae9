from typing import Protocol


class ByteSource(Protocol):
    """
    Minimal byte-oriented input consumed by SReader.

    Files, `socket.makefile("rb")`, pipes and `io.BytesIO` all satisfy it.
    A single call may legitimately return fewer bytes than requested;
    callers must never assume otherwise.
    """

    def read(self, size: int = -1, /) -> bytes | None:
        """
        Return at most `size` bytes. An empty result (or None) means the
        source has nothing more to give.
        """


class ByteSink(Protocol):
    """
    Minimal byte-oriented output consumed by SWriter.
    """

    def write(self, data: bytes, /) -> int | None:
        """
        Write `data`. Buffered sinks return None or len(data); raw sinks
        may return a smaller count, in which case the rest is offered
        again by the caller.
        """
