# hyperray/core/math4d.py
"""
Core vector type for 4D Euclidean space.
Designed for CPU-side camera math - packed to float32 for the GPU.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .bivector import Bivector4


# Anything shorter than this is treated as zero length.
EPSILON = 1e-12


class DegenerateGeometryError(ValueError):
    """Raised when a geometric operation has no defined result for its input
    (normalizing a zero-length value, shortest arc between opposite vectors)."""


# =============================================================================
# Vector Type
# =============================================================================

@dataclass(frozen=True)
class Vec4:
    """4D vector (x, y, z, w). All four axes are spatial."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def __add__(self, other: Vec4) -> Vec4:
        return Vec4(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Vec4) -> Vec4:
        return Vec4(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __mul__(self, scalar: float) -> Vec4:
        return Vec4(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    def __rmul__(self, scalar: float) -> Vec4:
        return self.__mul__(scalar)

    def __neg__(self) -> Vec4:
        return Vec4(-self.x, -self.y, -self.z, -self.w)

    def dot(self, other: Vec4) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vec4:
        ln = self.length()
        if ln < EPSILON:
            raise DegenerateGeometryError("cannot normalize a zero-length vector")
        return Vec4(self.x / ln, self.y / ln, self.z / ln, self.w / ln)

    def wedge(self, other: Vec4) -> Bivector4:
        return wedge(self, other)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    @staticmethod
    def from_tuple(t) -> Vec4:
        x, y, z, w = t
        return Vec4(float(x), float(y), float(z), float(w))

    @staticmethod
    def unit_x() -> Vec4:
        return Vec4(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def unit_y() -> Vec4:
        return Vec4(0.0, 1.0, 0.0, 0.0)

    @staticmethod
    def unit_z() -> Vec4:
        return Vec4(0.0, 0.0, 1.0, 0.0)

    @staticmethod
    def unit_w() -> Vec4:
        return Vec4(0.0, 0.0, 0.0, 1.0)


def wedge(a: Vec4, b: Vec4) -> Bivector4:
    """Outer product a ^ b: the oriented plane spanned by a then b."""
    from .bivector import Bivector4

    return Bivector4(
        xy=a.x * b.y - b.x * a.y,
        xz=a.x * b.z - b.x * a.z,
        xw=a.x * b.w - b.x * a.w,
        yz=a.y * b.z - b.y * a.z,
        yw=a.y * b.w - b.y * a.w,
        zw=a.z * b.w - b.z * a.w,
    )
