from tagsio.core.io.exact import skip_exact
from tagsio.core.models.errors import EndOfInput
from tagsio.core.ports.stream import ByteSource


class BoundedSource:
    """
    A byte-count-limited cursor over another source.

    Used to frame a Custom block: the nested reader sees at most `limit`
    bytes, and a hook that reads too far gets an end-of-input instead of
    the outer sequence's bytes. After the hook returns, `drain()` consumes
    whatever it left unread so the outer cursor lands exactly past the
    region.

    The bounded source never closes the outer one.
    """
    def __init__(self, source: ByteSource, limit: int) -> None:
        if limit < 0:
            raise ValueError("limit must be non-negative")
        self._source = source
        self._limit = limit
        self._consumed = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def remaining(self) -> int:
        return self._limit - self._consumed

    def read(self, size: int = -1, /) -> bytes:
        if size is None or size < 0 or size > self.remaining:
            size = self.remaining
        if size == 0:
            return b""

        data = self._source.read(size) or b""
        self._consumed += len(data)
        return data

    def readinto(self, buffer, /) -> int:
        view = memoryview(buffer).cast("B")
        size = min(len(view), self.remaining)
        if size == 0:
            return 0

        readinto = getattr(self._source, "readinto", None)
        if readinto is not None:
            n = readinto(view[:size]) or 0
        else:
            data = self._source.read(size) or b""
            n = len(data)
            view[:n] = data

        self._consumed += n
        return n

    def drain(self) -> None:
        remaining = self.remaining
        if remaining == 0:
            return

        skipped = skip_exact(self._source, remaining)
        self._consumed += skipped
        if skipped < remaining:
            raise EndOfInput(remaining, skipped)
