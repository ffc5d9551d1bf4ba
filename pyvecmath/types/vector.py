import logging
import numbers
import operator
import struct
import dataclasses

import numpy as np

from . import scalar
from .scalar import to_f32
from .matrix import matrix_rows

logger = logging.getLogger(__name__)

_ZERO = scalar.ZERO # Read-only stand-in for components a lower arity does not have


def _component_index(index) -> int:
    """Validates an index into the 0~3 component space."""
    i = operator.index(index)
    if not 0 <= i < 4:
        logger.error(f"Component index {i} is out of range 0~3")
        raise IndexError(f"index must be between 0~3, but {i}")
    return i


def _permute_index(index) -> int:
    """Validates an index into the 0~7 space used by permute (4~7 name the other operand)."""
    i = operator.index(index)
    if not 0 <= i < 8:
        logger.error(f"Permute index {i} is out of range 0~7")
        raise IndexError(f"permute index must be between 0~7, but {i}")
    return i


def _check_bounds(axis: str, low: np.float32, high: np.float32) -> None:
    # NaN bounds fail as well
    if not low < high:
        logger.error(f"Invalid clamp bounds on {axis}: min={low}, max={high}")
        raise ValueError(f"clamp requires min.{axis} < max.{axis}, but {low} >= {high}")


class Vector:
    """
    The capability set shared by Vector2, Vector3 and Vector4.

    Every arity provides: the canonical constructors zero(), one(), infinity(),
    nan(), epsilon() and replicate(value); indexed component reads; the
    element-wise operators + - * / and unary -, plus scaling by a scalar;
    swizzle, permute, transform, min, max, round, trunc, floor, ceil, clamp,
    multiply_add and splat_x/y/z/w.

    Components are float32. All operations return new vectors.
    """
    __slots__ = ()

    # numpy scalars on the left of an operator must defer to our reflected methods
    __array_ufunc__ = None

    SIZE = 0
    _FORMAT = ""

    def __setattr__(self, name, value):
        # Runs for the dataclass __init__ as well, so components are always float32
        object.__setattr__(self, name, to_f32(value))

    def __len__(self) -> int:
        return self.SIZE

    def __str__(self) -> str:
        return "<" + ", ".join(f"{c:.2f}" for c in self) + ">"

    def _require_same(self, other, operation: str) -> None:
        if not isinstance(other, type(self)):
            raise TypeError(f"{operation} requires a {type(self).__name__}, got {type(other).__name__}.")

    def _select(self, other, index) -> np.float32:
        """Component `index` of the pair (self, other) in permute's 0~7 index space."""
        i = _permute_index(index)
        if i < 4:
            return self[i]
        return other[i - 4]

    def multiply_add(self, mul, add):
        """Returns self * mul + add, rounded after the multiply and after the add."""
        self._require_same(mul, "multiply_add")
        self._require_same(add, "multiply_add")
        return self * mul + add

    def to_tuple(self) -> tuple:
        """The components as plain Python floats."""
        return tuple(float(c) for c in self)

    def to_bytes(self) -> bytes:
        """Packs the components as little-endian float32."""
        return struct.pack(self._FORMAT, *self)

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0):
        """Unpacks a vector of this arity from little-endian float32 data."""
        size = struct.calcsize(cls._FORMAT)
        if len(data) - offset < size:
            raise ValueError(f"Not enough bytes to unpack {cls.__name__}. Need {size}.")
        return cls(*struct.unpack_from(cls._FORMAT, data, offset))


@dataclasses.dataclass(slots=True)
class Vector2(Vector):
    """A 2D float32 vector with X and Y components."""
    x: float = 0.0
    y: float = 0.0

    SIZE = 2
    _FORMAT = "<ff"

    def __repr__(self) -> str:
        return f"Vector2(x={float(self.x)}, y={float(self.y)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return bool(self.x == other.x and self.y == other.y)

    def __getitem__(self, index) -> np.float32:
        i = _component_index(index)
        if i == 0:
            return self.x
        if i == 1:
            return self.y
        return _ZERO

    def __iter__(self):
        yield self.x
        yield self.y

    @staticmethod
    def zero() -> "Vector2":
        return Vector2(scalar.ZERO, scalar.ZERO)

    @staticmethod
    def one() -> "Vector2":
        return Vector2(scalar.ONE, scalar.ONE)

    @staticmethod
    def infinity() -> "Vector2":
        return Vector2(scalar.INFINITY, scalar.INFINITY)

    @staticmethod
    def nan() -> "Vector2":
        return Vector2(scalar.NAN, scalar.NAN)

    @staticmethod
    def epsilon() -> "Vector2":
        return Vector2(scalar.EPSILON, scalar.EPSILON)

    @staticmethod
    def replicate(value: float) -> "Vector2":
        value = to_f32(value)
        return Vector2(value, value)

    def __add__(self, other: "Vector2") -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        with np.errstate(all="ignore"):
            return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        if not isinstance(other, Vector2):
            return NotImplemented
        with np.errstate(all="ignore"):
            return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other) -> "Vector2":
        if isinstance(other, Vector2):
            with np.errstate(all="ignore"):
                return Vector2(self.x * other.x, self.y * other.y)
        if isinstance(other, numbers.Real):
            s = to_f32(other)
            with np.errstate(all="ignore"):
                return Vector2(self.x * s, self.y * s)
        return NotImplemented

    def __rmul__(self, scalar_value: float) -> "Vector2":
        if not isinstance(scalar_value, numbers.Real):
            return NotImplemented
        return self.__mul__(scalar_value)

    def __truediv__(self, other) -> "Vector2":
        if isinstance(other, Vector2):
            with np.errstate(all="ignore"):
                return Vector2(self.x / other.x, self.y / other.y)
        if isinstance(other, numbers.Real):
            s = to_f32(other)
            with np.errstate(all="ignore"):
                return Vector2(self.x / s, self.y / s)
        return NotImplemented

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def swizzle(self, e0: int, e1: int, e2: int = 0, e3: int = 0) -> "Vector2":
        """Reorders components: result.x = self[e0], result.y = self[e1]. e2 and e3 are ignored."""
        return Vector2(self[e0], self[e1])

    def permute(self, other: "Vector2", permute_x: int, permute_y: int,
                permute_z: int = 0, permute_w: int = 0) -> "Vector2":
        """Picks each component from self (indices 0~3) or other (indices 4~7)."""
        self._require_same(other, "permute")
        return Vector2(self._select(other, permute_x), self._select(other, permute_y))

    def transform(self, matrix) -> "Vector2":
        """Transforms as a point (z = 0, w = 1): rows 0, 1 and the translation row 3 contribute."""
        m = matrix_rows(matrix)
        with np.errstate(all="ignore"):
            x = self.x * m[0][0] + self.y * m[1][0] + m[3][0]
            y = self.x * m[0][1] + self.y * m[1][1] + m[3][1]
        return Vector2(x, y)

    def min(self, other: "Vector2") -> "Vector2":
        self._require_same(other, "min")
        return Vector2(scalar.fmin(self.x, other.x), scalar.fmin(self.y, other.y))

    def max(self, other: "Vector2") -> "Vector2":
        self._require_same(other, "max")
        return Vector2(scalar.fmax(self.x, other.x), scalar.fmax(self.y, other.y))

    def round(self) -> "Vector2":
        return Vector2(scalar.round_half_away(self.x), scalar.round_half_away(self.y))

    def trunc(self) -> "Vector2":
        return Vector2(scalar.trunc(self.x), scalar.trunc(self.y))

    def floor(self) -> "Vector2":
        return Vector2(scalar.floor(self.x), scalar.floor(self.y))

    def ceil(self) -> "Vector2":
        return Vector2(scalar.ceil(self.x), scalar.ceil(self.y))

    def clamp(self, min_bound: "Vector2", max_bound: "Vector2") -> "Vector2":
        """Clamps each component into [min_bound, max_bound]. Bounds must be strictly ordered."""
        self._require_same(min_bound, "clamp")
        self._require_same(max_bound, "clamp")
        _check_bounds("x", min_bound.x, max_bound.x)
        _check_bounds("y", min_bound.y, max_bound.y)
        return self.max(min_bound).min(max_bound)

    def splat_x(self) -> "Vector2":
        return Vector2(self.x, self.x)

    def splat_y(self) -> "Vector2":
        return Vector2(self.y, self.y)

    def splat_z(self) -> "Vector2":
        return Vector2(_ZERO, _ZERO)

    def splat_w(self) -> "Vector2":
        return Vector2(_ZERO, _ZERO)


@dataclasses.dataclass(slots=True)
class Vector3(Vector):
    """A 3D float32 vector with X, Y, and Z components."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    SIZE = 3
    _FORMAT = "<fff"

    def __repr__(self) -> str:
        return f"Vector3(x={float(self.x)}, y={float(self.y)}, z={float(self.z)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return bool(self.x == other.x and self.y == other.y and self.z == other.z)

    def __getitem__(self, index) -> np.float32:
        i = _component_index(index)
        if i == 0:
            return self.x
        if i == 1:
            return self.y
        if i == 2:
            return self.z
        return _ZERO

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    @staticmethod
    def zero() -> "Vector3":
        return Vector3(scalar.ZERO, scalar.ZERO, scalar.ZERO)

    @staticmethod
    def one() -> "Vector3":
        return Vector3(scalar.ONE, scalar.ONE, scalar.ONE)

    @staticmethod
    def infinity() -> "Vector3":
        return Vector3(scalar.INFINITY, scalar.INFINITY, scalar.INFINITY)

    @staticmethod
    def nan() -> "Vector3":
        return Vector3(scalar.NAN, scalar.NAN, scalar.NAN)

    @staticmethod
    def epsilon() -> "Vector3":
        return Vector3(scalar.EPSILON, scalar.EPSILON, scalar.EPSILON)

    @staticmethod
    def replicate(value: float) -> "Vector3":
        value = to_f32(value)
        return Vector3(value, value, value)

    def __add__(self, other: "Vector3") -> "Vector3":
        if not isinstance(other, Vector3):
            return NotImplemented
        with np.errstate(all="ignore"):
            return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        if not isinstance(other, Vector3):
            return NotImplemented
        with np.errstate(all="ignore"):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other) -> "Vector3":
        if isinstance(other, Vector3):
            with np.errstate(all="ignore"):
                return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, numbers.Real):
            s = to_f32(other)
            with np.errstate(all="ignore"):
                return Vector3(self.x * s, self.y * s, self.z * s)
        return NotImplemented

    def __rmul__(self, scalar_value: float) -> "Vector3":
        if not isinstance(scalar_value, numbers.Real):
            return NotImplemented
        return self.__mul__(scalar_value)

    def __truediv__(self, other) -> "Vector3":
        if isinstance(other, Vector3):
            with np.errstate(all="ignore"):
                return Vector3(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, numbers.Real):
            s = to_f32(other)
            with np.errstate(all="ignore"):
                return Vector3(self.x / s, self.y / s, self.z / s)
        return NotImplemented

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def swizzle(self, e0: int, e1: int, e2: int, e3: int = 0) -> "Vector3":
        """Reorders components by index; e3 is ignored."""
        return Vector3(self[e0], self[e1], self[e2])

    def permute(self, other: "Vector3", permute_x: int, permute_y: int,
                permute_z: int, permute_w: int = 0) -> "Vector3":
        """Picks each component from self (indices 0~3) or other (indices 4~7)."""
        self._require_same(other, "permute")
        return Vector3(
            self._select(other, permute_x),
            self._select(other, permute_y),
            self._select(other, permute_z),
        )

    def transform(self, matrix) -> "Vector3":
        """Transforms as a point (w = 1): rows 0~2 and the translation row 3 contribute."""
        m = matrix_rows(matrix)
        with np.errstate(all="ignore"):
            x = self.x * m[0][0] + self.y * m[1][0] + self.z * m[2][0] + m[3][0]
            y = self.x * m[0][1] + self.y * m[1][1] + self.z * m[2][1] + m[3][1]
            z = self.x * m[0][2] + self.y * m[1][2] + self.z * m[2][2] + m[3][2]
        return Vector3(x, y, z)

    def min(self, other: "Vector3") -> "Vector3":
        self._require_same(other, "min")
        return Vector3(
            scalar.fmin(self.x, other.x),
            scalar.fmin(self.y, other.y),
            scalar.fmin(self.z, other.z),
        )

    def max(self, other: "Vector3") -> "Vector3":
        self._require_same(other, "max")
        return Vector3(
            scalar.fmax(self.x, other.x),
            scalar.fmax(self.y, other.y),
            scalar.fmax(self.z, other.z),
        )

    def round(self) -> "Vector3":
        return Vector3(
            scalar.round_half_away(self.x),
            scalar.round_half_away(self.y),
            scalar.round_half_away(self.z),
        )

    def trunc(self) -> "Vector3":
        return Vector3(scalar.trunc(self.x), scalar.trunc(self.y), scalar.trunc(self.z))

    def floor(self) -> "Vector3":
        return Vector3(scalar.floor(self.x), scalar.floor(self.y), scalar.floor(self.z))

    def ceil(self) -> "Vector3":
        return Vector3(scalar.ceil(self.x), scalar.ceil(self.y), scalar.ceil(self.z))

    def clamp(self, min_bound: "Vector3", max_bound: "Vector3") -> "Vector3":
        """Clamps each component into [min_bound, max_bound]. Bounds must be strictly ordered."""
        self._require_same(min_bound, "clamp")
        self._require_same(max_bound, "clamp")
        _check_bounds("x", min_bound.x, max_bound.x)
        _check_bounds("y", min_bound.y, max_bound.y)
        _check_bounds("z", min_bound.z, max_bound.z)
        return self.max(min_bound).min(max_bound)

    def splat_x(self) -> "Vector3":
        return Vector3(self.x, self.x, self.x)

    def splat_y(self) -> "Vector3":
        return Vector3(self.y, self.y, self.y)

    def splat_z(self) -> "Vector3":
        return Vector3(self.z, self.z, self.z)

    def splat_w(self) -> "Vector3":
        return Vector3(_ZERO, _ZERO, _ZERO)


@dataclasses.dataclass(slots=True)
class Vector4(Vector):
    """A 4D float32 vector with X, Y, Z, and W components."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    SIZE = 4
    _FORMAT = "<ffff"

    def __repr__(self) -> str:
        return f"Vector4(x={float(self.x)}, y={float(self.y)}, z={float(self.z)}, w={float(self.w)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector4):
            return NotImplemented
        return bool(self.x == other.x and self.y == other.y and self.z == other.z and self.w == other.w)

    def __getitem__(self, index) -> np.float32:
        i = _component_index(index)
        if i == 0:
            return self.x
        if i == 1:
            return self.y
        if i == 2:
            return self.z
        return self.w

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    @staticmethod
    def zero() -> "Vector4":
        return Vector4(scalar.ZERO, scalar.ZERO, scalar.ZERO, scalar.ZERO)

    @staticmethod
    def one() -> "Vector4":
        return Vector4(scalar.ONE, scalar.ONE, scalar.ONE, scalar.ONE)

    @staticmethod
    def infinity() -> "Vector4":
        return Vector4(scalar.INFINITY, scalar.INFINITY, scalar.INFINITY, scalar.INFINITY)

    @staticmethod
    def nan() -> "Vector4":
        return Vector4(scalar.NAN, scalar.NAN, scalar.NAN, scalar.NAN)

    @staticmethod
    def epsilon() -> "Vector4":
        return Vector4(scalar.EPSILON, scalar.EPSILON, scalar.EPSILON, scalar.EPSILON)

    @staticmethod
    def replicate(value: float) -> "Vector4":
        value = to_f32(value)
        return Vector4(value, value, value, value)

    def __add__(self, other: "Vector4") -> "Vector4":
        if not isinstance(other, Vector4):
            return NotImplemented
        with np.errstate(all="ignore"):
            return Vector4(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: "Vector4") -> "Vector4":
        if not isinstance(other, Vector4):
            return NotImplemented
        with np.errstate(all="ignore"):
            return Vector4(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __mul__(self, other) -> "Vector4":
        if isinstance(other, Vector4):
            with np.errstate(all="ignore"):
                return Vector4(self.x * other.x, self.y * other.y, self.z * other.z, self.w * other.w)
        if isinstance(other, numbers.Real):
            s = to_f32(other)
            with np.errstate(all="ignore"):
                return Vector4(self.x * s, self.y * s, self.z * s, self.w * s)
        return NotImplemented

    def __rmul__(self, scalar_value: float) -> "Vector4":
        if not isinstance(scalar_value, numbers.Real):
            return NotImplemented
        return self.__mul__(scalar_value)

    def __truediv__(self, other) -> "Vector4":
        if isinstance(other, Vector4):
            with np.errstate(all="ignore"):
                return Vector4(self.x / other.x, self.y / other.y, self.z / other.z, self.w / other.w)
        if isinstance(other, numbers.Real):
            s = to_f32(other)
            with np.errstate(all="ignore"):
                return Vector4(self.x / s, self.y / s, self.z / s, self.w / s)
        return NotImplemented

    def __neg__(self) -> "Vector4":
        return Vector4(-self.x, -self.y, -self.z, -self.w)

    def swizzle(self, e0: int, e1: int, e2: int, e3: int) -> "Vector4":
        """Reorders components: result = (self[e0], self[e1], self[e2], self[e3])."""
        return Vector4(self[e0], self[e1], self[e2], self[e3])

    def permute(self, other: "Vector4", permute_x: int, permute_y: int,
                permute_z: int, permute_w: int) -> "Vector4":
        """
        Picks each component from self (indices 0~3) or other (indices 4~7).

        For example a.permute(b, 0, 4, 1, 5) interleaves the x and y components
        of a and b.
        """
        self._require_same(other, "permute")
        return Vector4(
            self._select(other, permute_x),
            self._select(other, permute_y),
            self._select(other, permute_z),
            self._select(other, permute_w),
        )

    def transform(self, matrix) -> "Vector4":
        """
        Row vector times matrix, using the vector's own w as the weight of row 3.
        Unlike Vector2/Vector3 this is not forced to be a point, so w = 0 skips
        the translation row.
        """
        m = matrix_rows(matrix)
        with np.errstate(all="ignore"):
            x = self.x * m[0][0] + self.y * m[1][0] + self.z * m[2][0] + self.w * m[3][0]
            y = self.x * m[0][1] + self.y * m[1][1] + self.z * m[2][1] + self.w * m[3][1]
            z = self.x * m[0][2] + self.y * m[1][2] + self.z * m[2][2] + self.w * m[3][2]
            w = self.x * m[0][3] + self.y * m[1][3] + self.z * m[2][3] + self.w * m[3][3]
        return Vector4(x, y, z, w)

    def min(self, other: "Vector4") -> "Vector4":
        self._require_same(other, "min")
        return Vector4(
            scalar.fmin(self.x, other.x),
            scalar.fmin(self.y, other.y),
            scalar.fmin(self.z, other.z),
            scalar.fmin(self.w, other.w),
        )

    def max(self, other: "Vector4") -> "Vector4":
        self._require_same(other, "max")
        return Vector4(
            scalar.fmax(self.x, other.x),
            scalar.fmax(self.y, other.y),
            scalar.fmax(self.z, other.z),
            scalar.fmax(self.w, other.w),
        )

    def round(self) -> "Vector4":
        return Vector4(
            scalar.round_half_away(self.x),
            scalar.round_half_away(self.y),
            scalar.round_half_away(self.z),
            scalar.round_half_away(self.w),
        )

    def trunc(self) -> "Vector4":
        return Vector4(scalar.trunc(self.x), scalar.trunc(self.y), scalar.trunc(self.z), scalar.trunc(self.w))

    def floor(self) -> "Vector4":
        return Vector4(scalar.floor(self.x), scalar.floor(self.y), scalar.floor(self.z), scalar.floor(self.w))

    def ceil(self) -> "Vector4":
        return Vector4(scalar.ceil(self.x), scalar.ceil(self.y), scalar.ceil(self.z), scalar.ceil(self.w))

    def clamp(self, min_bound: "Vector4", max_bound: "Vector4") -> "Vector4":
        """Clamps each component into [min_bound, max_bound]. Bounds must be strictly ordered."""
        self._require_same(min_bound, "clamp")
        self._require_same(max_bound, "clamp")
        _check_bounds("x", min_bound.x, max_bound.x)
        _check_bounds("y", min_bound.y, max_bound.y)
        _check_bounds("z", min_bound.z, max_bound.z)
        _check_bounds("w", min_bound.w, max_bound.w)
        return self.max(min_bound).min(max_bound)

    def splat_x(self) -> "Vector4":
        return Vector4(self.x, self.x, self.x, self.x)

    def splat_y(self) -> "Vector4":
        return Vector4(self.y, self.y, self.y, self.y)

    def splat_z(self) -> "Vector4":
        return Vector4(self.z, self.z, self.z, self.z)

    def splat_w(self) -> "Vector4":
        return Vector4(self.w, self.w, self.w, self.w)
