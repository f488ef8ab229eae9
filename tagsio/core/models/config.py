from dataclasses import dataclass

from tagsio.core.models.tag import StringEncoding


@dataclass(frozen=True)
class CodecConfig:
    """
    Static configuration shared by an SReader/SWriter and every nested
    reader or writer it creates for Custom blocks.
    """
    string_encoding: StringEncoding = StringEncoding.utf8
    """
    Layout used for strings and attribute names. Both ends of a stream
    must agree on it.
    """

    max_array_length: int = 16 * 1024 * 1024  # 16MB
    """
    Largest ByteArray/String length accepted on decode. Checked against
    the length prefix before anything is allocated.
    """

    max_depth: int = 32
    """
    Maximum nesting of Custom blocks, on both encode and decode.
    """


DEFAULT_CONFIG = CodecConfig()
