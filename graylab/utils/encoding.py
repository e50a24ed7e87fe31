"""
Binary and Gray code encoding utilities.

Integer conversions between natural binary and reflected binary (Gray) code,
Hamming distance, zero-padded rendering, and the bit-array variants used by
the step-by-step conversion walk-throughs.

Standard binary: incrementing a value can flip many bits at once
    (0111 -> 1000 flips all four).

Gray code: incrementing a value flips exactly one bit, including the
    wrap from 2^n - 1 back to 0 (the code is cyclic).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


MIN_BITS = 1
MAX_BITS = 12


# ---------------------------------------------------------------------------
# Integer conversions
# ---------------------------------------------------------------------------

def binary_to_gray(value: int) -> int:
    """
    Convert a non-negative integer to its Gray code.

    Formula: G = B XOR (B >> 1)

    Examples:
        >>> binary_to_gray(10)
        15
        >>> binary_to_gray(15)
        8
    """
    if value < 0:
        raise ValueError(f"binary_to_gray expects a non-negative integer, got {value}")
    return value ^ (value >> 1)


def gray_to_binary(gray: int) -> int:
    """
    Convert a Gray code back to its natural binary value.

    Each output bit is the XOR of all input bits at and above its position,
    so XOR-accumulating successive right shifts recovers the value.

    Examples:
        >>> gray_to_binary(15)
        10
    """
    if gray < 0:
        raise ValueError(f"gray_to_binary expects a non-negative integer, got {gray}")
    value = 0
    while gray:
        value ^= gray
        gray >>= 1
    return value


def hamming_distance(a: int, b: int) -> int:
    """Number of bit positions where a and b differ."""
    x = a ^ b
    count = 0
    while x:
        x &= x - 1  # clear lowest set bit
        count += 1
    return count


def pad_binary(value: int, width: int) -> str:
    """
    Render value in base 2, left-padded with zeros to `width` characters.

    A value that needs more than `width` bits is returned at its natural
    length; the string is never truncated.

    Examples:
        >>> pad_binary(5, 4)
        '0101'
        >>> pad_binary(37, 4)
        '100101'
    """
    if value < 0:
        raise ValueError(f"pad_binary expects a non-negative integer, got {value}")
    return format(value, "b").zfill(max(width, 0))


def clamp_bit_width(bits: int) -> int:
    """Clamp a bit width into [MIN_BITS, MAX_BITS]."""
    return int(clamp(bits, MIN_BITS, MAX_BITS))


def max_value(bits: int) -> int:
    """Largest value representable in `bits` bits (2^n - 1)."""
    return (1 << bits) - 1


# ---------------------------------------------------------------------------
# Vectorised helpers (NumPy)
# ---------------------------------------------------------------------------

def gray_codes(values: NDArray[np.int64]) -> NDArray[np.int64]:
    """Element-wise Gray code of a non-negative integer array."""
    values = np.asarray(values, dtype=np.int64)
    return values ^ (values >> 1)


def popcount(values: NDArray[np.int64]) -> NDArray[np.int64]:
    """Element-wise count of set bits of a non-negative integer array."""
    x = np.asarray(values, dtype=np.int64).copy()
    counts = np.zeros_like(x)
    while np.any(x):
        counts += x & 1
        x >>= 1
    return counts


# ---------------------------------------------------------------------------
# Bit-array conversions (MSB first)
# ---------------------------------------------------------------------------

def string_to_bits(bit_string: str) -> NDArray[np.uint8]:
    """Convert a '0'/'1' string to a bit array (MSB first)."""
    return np.frombuffer(bit_string.encode("ascii"), dtype=np.uint8) - ord("0")


def bits_to_string(bits: NDArray[np.uint8]) -> str:
    """Convert a bit array back to a '0'/'1' string."""
    return "".join(str(int(b)) for b in bits)


def binary_to_gray_bits(bits: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """
    Convert a standard binary bit array to a Gray code bit array.

    Algorithm: gray[0] = binary[0]; gray[i] = binary[i-1] XOR binary[i]
    """
    if len(bits) == 0:
        return np.array([], dtype=np.uint8)
    gray = np.empty_like(bits)
    gray[0] = bits[0]
    gray[1:] = bits[:-1] ^ bits[1:]
    return gray


def gray_to_binary_bits(gray: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """
    Convert a Gray code bit array to a standard binary bit array.

    Algorithm: binary[0] = gray[0]; binary[i] = binary[i-1] XOR gray[i]
    """
    if len(gray) == 0:
        return np.array([], dtype=np.uint8)
    binary = np.empty_like(gray)
    binary[0] = gray[0]
    for i in range(1, len(gray)):
        binary[i] = binary[i - 1] ^ gray[i]
    return binary


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a value to [low, high]."""
    return max(low, min(high, value))
