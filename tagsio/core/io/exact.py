from tagsio.core.ports.stream import ByteSink, ByteSource

SKIP_CHUNK_SIZE = 8192


def read_exact(source: ByteSource, view: memoryview) -> int:
    """
    Fill `view` from `source`, pulling as many times as needed.

    A single pull may return fewer bytes than asked for (sockets, pipes,
    chunked transports do this routinely), so the loop only stops once the
    view is full or the source reports exhaustion with an empty result.

    Returns the number of bytes obtained. It is smaller than len(view)
    only at end of input; raising is left to the caller, which knows what
    it was trying to decode.
    """
    wanted = len(view)
    got = 0
    readinto = getattr(source, "readinto", None)

    while got < wanted:
        if readinto is not None:
            n = readinto(view[got:])
            if not n:
                break
            got += n
        else:
            chunk = source.read(wanted - got)
            if not chunk:
                break
            n = len(chunk)
            view[got:got + n] = chunk
            got += n

    return got


def skip_exact(source: ByteSource, count: int) -> int:
    """
    Consume and discard `count` bytes from `source`.

    Same contract as `read_exact`: returns how many bytes were actually
    consumed, which is smaller than `count` only at end of input.
    """
    scratch = memoryview(bytearray(min(count, SKIP_CHUNK_SIZE)))
    skipped = 0

    while skipped < count:
        step = min(count - skipped, len(scratch))
        n = read_exact(source, scratch[:step])
        skipped += n
        if n < step:
            break

    return skipped


def write_all(sink: ByteSink, data: bytes | bytearray | memoryview) -> None:
    """
    Write every byte of `data` to `sink`.

    Buffered sinks accept everything at once and return None or the full
    length. Raw sinks may report a partial write; the remainder is offered
    again until nothing is left.
    """
    view = memoryview(data)
    while view:
        n = sink.write(view)
        if n is None or n >= len(view):
            return
        if n == 0:
            raise OSError("Sink accepted no bytes")
        view = view[n:]
