"""pyvecmath: fixed-size float32 vectors (2, 3 and 4 components) for graphics-style math."""

__version__ = "0.1.0"

from .types import EPSILON, Vector, Vector2, Vector3, Vector4, Matrix4

__all__ = ["EPSILON", "Vector", "Vector2", "Vector3", "Vector4", "Matrix4", "__version__"]
