"""
Scalar helpers shared by the vector types.

Components are IEEE-754 binary32 values held as ``numpy.float32`` scalars.
"""

import numpy as np

F32 = np.float32

ZERO = F32(0.0)
ONE = F32(1.0)
HALF = F32(0.5)
INFINITY = F32(np.inf)
NAN = F32(np.nan)
EPSILON = np.finfo(np.float32).eps # 2**-23


def to_f32(value) -> np.float32:
    """Coerces a real number to a float32 scalar."""
    if isinstance(value, np.float32):
        return value
    # float() would parse text, and numpy would turn None into NaN
    if isinstance(value, (str, bytes, bytearray)) or value is None:
        raise TypeError(f"Expected a real number, got {type(value).__name__}.")
    with np.errstate(all="ignore"):
        return F32(float(value))


def fmin(a: np.float32, b: np.float32) -> np.float32:
    """Smaller of two values. If exactly one is NaN, the other is returned."""
    return np.fmin(a, b)


def fmax(a: np.float32, b: np.float32) -> np.float32:
    """Larger of two values. If exactly one is NaN, the other is returned."""
    return np.fmax(a, b)


def round_half_away(value: np.float32) -> np.float32:
    """Rounds to the nearest integer, ties away from zero (2.5 -> 3.0, -2.5 -> -3.0)."""
    if not np.isfinite(value):
        return value
    truncated = np.trunc(value)
    # value - truncated is exact for binary32
    if np.abs(value - truncated) >= HALF:
        truncated = truncated + np.copysign(ONE, value)
    return truncated


def trunc(value: np.float32) -> np.float32:
    return np.trunc(value)


def floor(value: np.float32) -> np.float32:
    return np.floor(value)


def ceil(value: np.float32) -> np.float32:
    return np.ceil(value)
