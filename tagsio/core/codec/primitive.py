import math
import struct

# Big-endian ("network order") layouts of every fixed-width primitive.
BYTE = struct.Struct(">b")
SHORT = struct.Struct(">h")
INT32 = struct.Struct(">i")
INT64 = struct.Struct(">q")
FLOAT32 = struct.Struct(">f")
FLOAT64 = struct.Struct(">d")
CHAR = struct.Struct(">H")

UINT32 = struct.Struct(">I")
UINT64 = struct.Struct(">Q")

NULL_LENGTH = -1
MAX_LENGTH = (1 << 31) - 1

F32_SIGN = 0x80000000
F32_EXPONENT = 0x7F800000
F32_MANTISSA = 0x007FFFFF
F32_QUIET = 0x00400000


def float_to_bits(value: float) -> int:
    """
    IEEE-754 single precision bit pattern of `value`, as a signed Int32.

    NaN is narrowed by hand from its double bits (sign, top 23 mantissa
    bits): struct's own conversion sets the quiet bit of signalling NaNs
    on interpreters before 3.14.
    """
    if math.isnan(value):
        wide = UINT64.unpack(FLOAT64.pack(value))[0]
        # a payload living only in the low 29 bits must not turn into Inf
        mantissa = (wide >> 29) & F32_MANTISSA or F32_QUIET
        bits = (wide >> 32) & F32_SIGN | F32_EXPONENT | mantissa
        return INT32.unpack(UINT32.pack(bits))[0]
    return INT32.unpack(FLOAT32.pack(value))[0]


def bits_to_float(bits: int) -> float:
    """
    Inverse of `float_to_bits`. NaN patterns are widened to a double
    holding the same sign and payload, so they narrow back unchanged.
    """
    bits &= 0xFFFFFFFF
    if bits & F32_EXPONENT == F32_EXPONENT and bits & F32_MANTISSA:
        wide = (bits & F32_SIGN) << 32 | 0x7FF << 52 | (bits & F32_MANTISSA) << 29
        return FLOAT64.unpack(UINT64.pack(wide))[0]
    return FLOAT32.unpack(UINT32.pack(bits))[0]


def double_to_bits(value: float) -> int:
    """IEEE-754 double precision bit pattern of `value`, as a signed Int64."""
    return INT64.unpack(FLOAT64.pack(value))[0]


def bits_to_double(bits: int) -> float:
    return FLOAT64.unpack(INT64.pack(bits))[0]
