# hyperray/scene/objects.py
"""
Scene records: hyperspheres, hyperplanes and materials.

Records are immutable. The Scene replaces a record to edit it, which keeps
the validation in one place.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from ..core.math4d import Vec4

Color = Tuple[float, float, float]


@dataclass(frozen=True)
class Material:
    base_color: Color = (0.9, 0.9, 0.9)
    emissive_color: Color = (0.0, 0.0, 0.0)
    emission_strength: float = 0.0

    def to_dict(self) -> dict:
        return {
            'base_color': list(self.base_color),
            'emissive_color': list(self.emissive_color),
            'emission_strength': self.emission_strength,
        }

    @staticmethod
    def from_dict(data: dict) -> Material:
        return Material(
            base_color=tuple(data.get('base_color', (0.9, 0.9, 0.9))),
            emissive_color=tuple(data.get('emissive_color', (0.0, 0.0, 0.0))),
            emission_strength=float(data.get('emission_strength', 0.0)),
        )


@dataclass(frozen=True)
class HyperSphere:
    center: Vec4 = field(default_factory=Vec4)
    radius: float = 1.0
    material: int = 0

    def to_dict(self) -> dict:
        return {
            'center': list(self.center.to_tuple()),
            'radius': self.radius,
            'material': self.material,
        }

    @staticmethod
    def from_dict(data: dict) -> HyperSphere:
        return HyperSphere(
            center=Vec4.from_tuple(data.get('center', (0, 0, 0, 0))),
            radius=float(data.get('radius', 1.0)),
            material=int(data.get('material', 0)),
        )


@dataclass(frozen=True)
class HyperPlane:
    point: Vec4 = field(default_factory=Vec4)
    normal: Vec4 = field(default_factory=Vec4.unit_y)
    material: int = 0

    def to_dict(self) -> dict:
        return {
            'point': list(self.point.to_tuple()),
            'normal': list(self.normal.to_tuple()),
            'material': self.material,
        }

    @staticmethod
    def from_dict(data: dict) -> HyperPlane:
        return HyperPlane(
            point=Vec4.from_tuple(data.get('point', (0, 0, 0, 0))),
            normal=Vec4.from_tuple(data.get('normal', (0, 1, 0, 0))),
            material=int(data.get('material', 0)),
        )
