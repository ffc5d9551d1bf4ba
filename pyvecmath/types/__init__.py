# Main __init__.py for the types sub-package

from .scalar import EPSILON
from .vector import Vector, Vector2, Vector3, Vector4
from .matrix import Matrix4


__all__ = [
    "EPSILON", "Vector", "Vector2", "Vector3", "Vector4", "Matrix4",
]
