from enum import IntEnum, StrEnum


class AttributeTag(IntEnum):
    """
    Wire kind of one attribute, written as a single byte in front of it.

    END and CUSTOM carry no attribute name. NULL carries a name but no
    value bytes. Every other tag maps to exactly one primitive encoding,
    so the width of a value is always known from its tag alone.

    Values below CUSTOM are reserved for primitive kinds.
    """
    END     = 0
    NULL    = 1
    BYTE    = 2
    SHORT   = 3
    INT32   = 4
    INT64   = 5
    FLOAT32 = 6
    FLOAT64 = 7
    BOOLEAN = 8
    CHAR    = 9
    STRING  = 10
    ENUM    = 11
    CUSTOM  = 50

    @property
    def is_named(self) -> bool:
        return self not in (AttributeTag.END, AttributeTag.CUSTOM)

    @property
    def is_primitive(self) -> bool:
        return self in PRIMITIVE_TAGS

    @classmethod
    def parse(cls, value: int) -> "AttributeTag | None":
        try:
            return cls(value)
        except ValueError:
            return None


PRIMITIVE_TAGS = frozenset({
    AttributeTag.BYTE,
    AttributeTag.SHORT,
    AttributeTag.INT32,
    AttributeTag.INT64,
    AttributeTag.FLOAT32,
    AttributeTag.FLOAT64,
    AttributeTag.BOOLEAN,
    AttributeTag.CHAR,
    AttributeTag.STRING,
    AttributeTag.ENUM,
})


FIXED_WIDTHS: dict[AttributeTag, int] = {
    AttributeTag.BYTE: 1,
    AttributeTag.SHORT: 2,
    AttributeTag.INT32: 4,
    AttributeTag.INT64: 8,
    AttributeTag.FLOAT32: 4,
    AttributeTag.FLOAT64: 8,
    AttributeTag.BOOLEAN: 1,
    AttributeTag.CHAR: 2,
}


class StringEncoding(StrEnum):
    """
    How strings (attribute names included) are laid out on the wire.

    utf8  → the UTF-8 bytes framed as a ByteArray (canonical).
    utf16 → Int32 count of UTF-16 code units followed by two bytes per
            unit. Kept for reading and writing old data; the two layouts
            are not wire compatible.
    """
    utf8 = "utf8"
    utf16 = "utf16"
