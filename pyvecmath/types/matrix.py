import logging
import operator
import struct
import dataclasses

import numpy as np

from .scalar import to_f32

logger = logging.getLogger(__name__)


@dataclasses.dataclass(slots=True)
class Matrix4:
    """
    A 4x4 float32 matrix for transforming row vectors (vector * matrix).
    Values are stored and initialized in row-major order:
    M11, M12, M13, M14,
    M21, M22, M23, M24,
    M31, M32, M33, M34,
    M41, M42, M43, M44
    Rows 1~3 hold the basis vectors and row 4 the translation.
    Indexing is zero based: matrix[row][col] is M{row+1}{col+1}.
    """
    M11: float = 1.0; M12: float = 0.0; M13: float = 0.0; M14: float = 0.0
    M21: float = 0.0; M22: float = 1.0; M23: float = 0.0; M24: float = 0.0
    M31: float = 0.0; M32: float = 0.0; M33: float = 1.0; M34: float = 0.0
    M41: float = 0.0; M42: float = 0.0; M43: float = 0.0; M44: float = 1.0

    def __setattr__(self, name, value):
        object.__setattr__(self, name, to_f32(value))

    def _to_list_row_major(self) -> list:
        return [
            self.M11, self.M12, self.M13, self.M14,
            self.M21, self.M22, self.M23, self.M24,
            self.M31, self.M32, self.M33, self.M34,
            self.M41, self.M42, self.M43, self.M44,
        ]

    def rows(self) -> tuple:
        """The four rows as tuples of float32."""
        return (
            (self.M11, self.M12, self.M13, self.M14),
            (self.M21, self.M22, self.M23, self.M24),
            (self.M31, self.M32, self.M33, self.M34),
            (self.M41, self.M42, self.M43, self.M44),
        )

    def __getitem__(self, row) -> tuple:
        row = operator.index(row)
        if not 0 <= row < 4:
            raise IndexError(f"row must be between 0~3, but {row}")
        return self.rows()[row]

    @classmethod
    def from_list(cls, elements) -> "Matrix4":
        """Creates a Matrix4 from 16 values in row-major order."""
        elements = list(elements)
        if len(elements) != 16:
            raise ValueError("List must contain 16 elements.")
        return cls(*elements)

    @classmethod
    def from_rows(cls, rows) -> "Matrix4":
        """Creates a Matrix4 from anything indexable as rows[row][col] (nested lists, 4x4 arrays)."""
        return cls.from_list(rows[r][c] for r in range(4) for c in range(4))

    @staticmethod
    def identity() -> "Matrix4":
        return Matrix4()

    @staticmethod
    def translation(x: float, y: float, z: float) -> "Matrix4":
        return Matrix4(M41=x, M42=y, M43=z)

    @staticmethod
    def scale(x: float, y: float, z: float) -> "Matrix4":
        return Matrix4(M11=x, M22=y, M33=z)

    def transpose(self) -> "Matrix4":
        return Matrix4(
            self.M11, self.M21, self.M31, self.M41,
            self.M12, self.M22, self.M32, self.M42,
            self.M13, self.M23, self.M33, self.M43,
            self.M14, self.M24, self.M34, self.M44
        )

    def __str__(self) -> str:
        return "\n".join(
            "[" + ", ".join(f"{value:.3f}" for value in row) + "]" for row in self.rows()
        )

    def __repr__(self) -> str:
        values = ", ".join(
            f"{field.name}={float(getattr(self, field.name))}" for field in dataclasses.fields(self)
        )
        return f"Matrix4({values})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        # Element-wise so NaN never compares equal
        return all(a == b for a, b in zip(self._to_list_row_major(), other._to_list_row_major()))

    def __mul__(self, other):
        """
        Matrix product. With row vectors, v.transform(a * b) applies a first,
        then b.
        """
        if not isinstance(other, Matrix4):
            return NotImplemented
        a = self.rows()
        b = other.rows()
        with np.errstate(all="ignore"):
            elements = [
                a[r][0] * b[0][c] + a[r][1] * b[1][c] + a[r][2] * b[2][c] + a[r][3] * b[3][c]
                for r in range(4)
                for c in range(4)
            ]
        return Matrix4.from_list(elements)

    def to_bytes(self) -> bytes:
        """Packs matrix into 16 floats (64 bytes) in row-major order."""
        return struct.pack('<16f', *self._to_list_row_major())

    @staticmethod
    def from_bytes(data: bytes, offset: int = 0) -> "Matrix4":
        if len(data) - offset < 64:
            raise ValueError("Not enough bytes to unpack Matrix4. Need 64.")
        return Matrix4.from_list(struct.unpack_from('<16f', data, offset))


def matrix_rows(matrix) -> tuple:
    """
    Returns the rows of `matrix` as float32 tuples. Accepts a Matrix4 or any
    object indexable as matrix[row][col].
    """
    if isinstance(matrix, Matrix4):
        return matrix.rows()
    logger.debug(f"Coercing {type(matrix).__name__} to Matrix4 rows")
    return Matrix4.from_rows(matrix).rows()
