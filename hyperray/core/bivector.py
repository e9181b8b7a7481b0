# hyperray/core/bivector.py
"""
Oriented planes in 4D (bivectors).

A Bivector4 holds one component per unordered pair of axes. The sign is the
orientation of the plane, the magnitude its area. Values are immutable.
"""

from __future__ import annotations
import itertools
import math
from dataclasses import dataclass
from typing import Dict, Tuple

from .math4d import EPSILON, DegenerateGeometryError


AXES = "xyzw"

# Component order, also the order of to_tuple()/from_tuple().
COMPONENTS = ("xy", "xz", "xw", "yz", "yw", "zw")


@dataclass(frozen=True)
class Bivector4:
    """Oriented plane value: xy, xz, xw, yz, yw, zw."""
    xy: float = 0.0
    xz: float = 0.0
    xw: float = 0.0
    yz: float = 0.0
    yw: float = 0.0
    zw: float = 0.0

    @classmethod
    def unit(cls, first: str, second: str) -> Bivector4:
        """
        Unit plane rotating `first` toward `second`.

        plane(i, j) for i before j in x, y, z, w is 1 at that component;
        plane(j, i) is its negation.
        """
        if first not in AXES or second not in AXES:
            raise ValueError(f"Unknown axis in plane {first!r}{second!r}")
        if first == second:
            raise ValueError(f"A plane needs two distinct axes, got {first!r}{second!r}")
        if AXES.index(first) < AXES.index(second):
            return cls(**{first + second: 1.0})
        return -cls.unit(second, first)

    def __neg__(self) -> Bivector4:
        return Bivector4(-self.xy, -self.xz, -self.xw, -self.yz, -self.yw, -self.zw)

    def __add__(self, other: Bivector4) -> Bivector4:
        return Bivector4(
            self.xy + other.xy, self.xz + other.xz, self.xw + other.xw,
            self.yz + other.yz, self.yw + other.yw, self.zw + other.zw,
        )

    def __sub__(self, other: Bivector4) -> Bivector4:
        return self + (-other)

    def __mul__(self, scalar: float) -> Bivector4:
        return Bivector4(
            self.xy * scalar, self.xz * scalar, self.xw * scalar,
            self.yz * scalar, self.yw * scalar, self.zw * scalar,
        )

    def __rmul__(self, scalar: float) -> Bivector4:
        return self.__mul__(scalar)

    def length_squared(self) -> float:
        return (
            self.xy * self.xy + self.xz * self.xz + self.xw * self.xw
            + self.yz * self.yz + self.yw * self.yw + self.zw * self.zw
        )

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> Bivector4:
        ln = self.length()
        if ln < EPSILON:
            raise DegenerateGeometryError("cannot normalize a zero bivector")
        return self * (1.0 / ln)

    def to_tuple(self) -> Tuple[float, ...]:
        return (self.xy, self.xz, self.xw, self.yz, self.yw, self.zw)

    @staticmethod
    def from_tuple(t) -> Bivector4:
        return Bivector4(*(float(v) for v in t))


Bivector4.ZERO = Bivector4()

# XY, XZ, XW, YX, ... WZ, built from the antisymmetry rule.
UNIT_PLANES: Dict[str, Bivector4] = {
    (a + b).upper(): Bivector4.unit(a, b) for a, b in itertools.permutations(AXES, 2)
}

for _name, _plane in UNIT_PLANES.items():
    setattr(Bivector4, _name, _plane)
del _name, _plane
