# hyperray/core/rotor.py
"""
Rotors - rotations of 4D space.

A rotor is an element of the even subalgebra of 4D geometric algebra:
a scalar, a bivector and a pseudoscalar (xyzw). Single-plane rotations
have no xyzw part; it only appears when rotations in two disjoint planes
(e.g. yz and xw) are composed.

R and -R describe the same rotation. Rotors act on vectors through the
sandwich product R v ~R.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .bivector import Bivector4
from .math4d import EPSILON, DegenerateGeometryError, Vec4


@dataclass(frozen=True)
class Rotor4:
    """Unit rotor: s + bv + xyzw * e1234."""
    s: float = 1.0
    bv: Bivector4 = field(default_factory=Bivector4)
    xyzw: float = 0.0

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @staticmethod
    def from_angle_plane(angle: float, plane: Bivector4) -> Rotor4:
        """
        Rotation by `angle` radians within `plane`.

        Bivector4.unit(a, b) rotates axis a toward axis b for positive angles.
        The plane may be off unit length but must not be zero.
        """
        if plane.length_squared() < EPSILON * EPSILON:
            raise DegenerateGeometryError("rotation plane must be nonzero")
        half_angle = angle * 0.5
        return Rotor4(
            s=math.cos(half_angle),
            bv=plane.normalized() * -math.sin(half_angle),
        ).normalized()

    @staticmethod
    def from_rotation_between(
        from_: Vec4,
        to: Vec4,
        fallback_plane: Optional[Bivector4] = None,
    ) -> Rotor4:
        """
        Shortest-arc rotation taking unit vector `from_` onto unit vector `to`.

        Opposite vectors have no unique shortest arc. Pass `fallback_plane`
        (a plane containing `from_`) to get the half turn in that plane;
        without it a DegenerateGeometryError is raised.
        """
        rotor = Rotor4(s=1.0 + to.dot(from_), bv=to.wedge(from_))
        if rotor.length_squared() < EPSILON:
            if fallback_plane is None:
                raise DegenerateGeometryError(
                    "vectors are opposite; supply fallback_plane for the half turn"
                )
            return Rotor4.from_angle_plane(math.pi, fallback_plane)
        return rotor.normalized()

    # -------------------------------------------------------------------------
    # Norm
    # -------------------------------------------------------------------------

    def length_squared(self) -> float:
        return self.s * self.s + self.bv.length_squared() + self.xyzw * self.xyzw

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> Rotor4:
        ln = self.length()
        if ln < EPSILON:
            raise DegenerateGeometryError("cannot normalize a zero rotor")
        inv = 1.0 / ln
        return Rotor4(self.s * inv, self.bv * inv, self.xyzw * inv)

    def conjugate(self) -> Rotor4:
        """Reverse: the inverse rotation of a unit rotor."""
        return Rotor4(self.s, -self.bv, self.xyzw)

    # -------------------------------------------------------------------------
    # Composition
    # -------------------------------------------------------------------------

    def __mul__(self, other: Rotor4) -> Rotor4:
        """Geometric product. (a * b) applies b first, then a."""
        if not isinstance(other, Rotor4):
            return NotImplemented

        a0, a = self.s, self.bv
        b0, b = other.s, other.bv
        a4, b4 = self.xyzw, other.xyzw

        s = (
            a0 * b0
            - a.xy * b.xy - a.xz * b.xz - a.xw * b.xw
            - a.yz * b.yz - a.yw * b.yw - a.zw * b.zw
            + a4 * b4
        )
        xy = (
            a0 * b.xy + a.xy * b0
            - a.xz * b.yz + a.yz * b.xz - a.xw * b.yw + a.yw * b.xw
            - (a4 * b.zw + a.zw * b4)
        )
        xz = (
            a0 * b.xz + a.xz * b0
            + a.xy * b.yz - a.yz * b.xy - a.xw * b.zw + a.zw * b.xw
            + (a4 * b.yw + a.yw * b4)
        )
        xw = (
            a0 * b.xw + a.xw * b0
            + a.xy * b.yw - a.yw * b.xy + a.xz * b.zw - a.zw * b.xz
            - (a4 * b.yz + a.yz * b4)
        )
        yz = (
            a0 * b.yz + a.yz * b0
            - a.xy * b.xz + a.xz * b.xy - a.yw * b.zw + a.zw * b.yw
            - (a4 * b.xw + a.xw * b4)
        )
        yw = (
            a0 * b.yw + a.yw * b0
            - a.xy * b.xw + a.xw * b.xy + a.yz * b.zw - a.zw * b.yz
            + (a4 * b.xz + a.xz * b4)
        )
        zw = (
            a0 * b.zw + a.zw * b0
            - a.xz * b.xw + a.xw * b.xz - a.yz * b.yw + a.yw * b.yz
            - (a4 * b.xy + a.xy * b4)
        )
        xyzw = (
            a0 * b4 + a4 * b0
            + a.xy * b.zw + a.zw * b.xy
            - a.xz * b.yw - a.yw * b.xz
            + a.xw * b.yz + a.yz * b.xw
        )
        return Rotor4(s, Bivector4(xy, xz, xw, yz, yw, zw), xyzw)

    def rotate_by(self, other: Rotor4) -> Rotor4:
        """
        Compose with `other`, which is applied first (in this rotor's frame).

        a.rotate_by(b).rotate_vec(v) == a.rotate_vec(b.rotate_vec(v))
        The result is renormalized so chains of compositions don't drift.
        """
        return (self * other).normalized()

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------

    def rotate_vec(self, v: Vec4) -> Vec4:
        """Sandwich product R v ~R, expanded in closed form."""
        s, q = self.s, self.xyzw
        b = self.bv

        # R v: vector part
        x = s * v.x + b.xy * v.y + b.xz * v.z + b.xw * v.w
        y = s * v.y - b.xy * v.x + b.yz * v.z + b.yw * v.w
        z = s * v.z - b.xz * v.x - b.yz * v.y + b.zw * v.w
        w = s * v.w - b.xw * v.x - b.yw * v.y - b.zw * v.z

        # R v: trivector part
        xyz = b.xy * v.z - b.xz * v.y + b.yz * v.x + q * v.w
        xyw = b.xy * v.w - b.xw * v.y + b.yw * v.x - q * v.z
        xzw = b.xz * v.w - b.xw * v.z + b.zw * v.x + q * v.y
        yzw = b.yz * v.w - b.yw * v.z + b.zw * v.y - q * v.x

        # (R v) ~R: vector part only, the trivector part cancels for unit rotors
        return Vec4(
            x * s + y * b.xy + z * b.xz + w * b.xw + xyz * b.yz + xyw * b.yw + xzw * b.zw + yzw * q,
            y * s - x * b.xy + z * b.yz + w * b.yw - xyz * b.xz - xyw * b.xw + yzw * b.zw - xzw * q,
            z * s - x * b.xz - y * b.yz + w * b.zw + xyz * b.xy - xzw * b.xw - yzw * b.yw + xyw * q,
            w * s - x * b.xw - y * b.yw - z * b.zw + xyw * b.xy + xzw * b.xz + yzw * b.yz - xyz * q,
        )

    def to_tuple(self) -> Tuple[float, ...]:
        return (self.s,) + self.bv.to_tuple() + (self.xyzw,)


Rotor4.IDENTITY = Rotor4()
