# hyperray/scene/camera.py
"""
Camera4D - position, four orientation angles and the ray settings the kernel reads.

Orientation is never stored as vectors. Every frame the four angles are
turned into one rotor, and forward/right/up are the images of +z/+x/+y.

Rotation planes, applied to a camera-local vector in this order:
    w_pitch  ZW  (+z toward +w)
    w_yaw    XW  (+x toward +w)
    pitch    ZY  (+z toward +y)
    yaw      ZX  (+z toward +x)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import NamedTuple
import math

from ..core.bivector import Bivector4
from ..core.math4d import Vec4
from ..core.rotor import Rotor4


TAU = 2.0 * math.pi

YAW_PLANE = Bivector4.ZX
PITCH_PLANE = Bivector4.ZY
W_YAW_PLANE = Bivector4.XW
W_PITCH_PLANE = Bivector4.ZW


def wrap_angle(angle: float) -> float:
    """Wrap into [0, 2*pi)."""
    wrapped = math.fmod(angle, TAU)
    if wrapped < 0.0:
        wrapped += TAU
    # fmod of a tiny negative value can round up to exactly TAU
    return 0.0 if wrapped >= TAU else wrapped


class CameraBasis(NamedTuple):
    forward: Vec4
    right: Vec4
    up: Vec4


def orientation(yaw: float, pitch: float, w_yaw: float, w_pitch: float) -> Rotor4:
    """Compose the four elementary rotations into one rotor."""
    return (
        Rotor4.from_angle_plane(yaw, YAW_PLANE)
        .rotate_by(Rotor4.from_angle_plane(pitch, PITCH_PLANE))
        .rotate_by(Rotor4.from_angle_plane(w_yaw, W_YAW_PLANE))
        .rotate_by(Rotor4.from_angle_plane(w_pitch, W_PITCH_PLANE))
    )


def basis_from_rotor(rotation: Rotor4) -> CameraBasis:
    return CameraBasis(
        forward=rotation.rotate_vec(Vec4.unit_z()),
        right=rotation.rotate_vec(Vec4.unit_x()),
        up=rotation.rotate_vec(Vec4.unit_y()),
    )


@dataclass
class Camera4D:
    """
    Mutable camera state edited by the controller and the scene editor.

    Call clamp() after changing fields directly; Scene.edit_camera and
    CameraController do it for you.
    """
    position: Vec4 = field(default_factory=lambda: Vec4(0.0, 1.0, -3.0, 0.0))
    yaw: float = 0.0
    pitch: float = 0.0
    w_yaw: float = 0.0
    w_pitch: float = 0.0
    fov: float = math.radians(90.0)
    min_distance: float = 0.01
    max_distance: float = 1000.0
    bounce_count: int = 5
    sample_count: int = 1

    def rotation(self) -> Rotor4:
        return orientation(self.yaw, self.pitch, self.w_yaw, self.w_pitch)

    def basis(self) -> CameraBasis:
        return basis_from_rotor(self.rotation())

    def clamp(self) -> Camera4D:
        """Wrap the angles and enforce the ray-setting limits."""
        self.yaw = wrap_angle(self.yaw)
        self.pitch = wrap_angle(self.pitch)
        self.w_yaw = wrap_angle(self.w_yaw)
        self.w_pitch = wrap_angle(self.w_pitch)
        self.fov = wrap_angle(self.fov)
        self.min_distance = max(float(self.min_distance), 0.0)
        self.max_distance = max(float(self.max_distance), self.min_distance)
        self.bounce_count = max(int(self.bounce_count), 1)
        self.sample_count = max(int(self.sample_count), 1)
        return self

    def to_dict(self) -> dict:
        return {
            'position': self.position.to_tuple(),
            'yaw': self.yaw,
            'pitch': self.pitch,
            'w_yaw': self.w_yaw,
            'w_pitch': self.w_pitch,
            'fov': self.fov,
            'min_distance': self.min_distance,
            'max_distance': self.max_distance,
            'bounce_count': self.bounce_count,
            'sample_count': self.sample_count,
        }

    @staticmethod
    def from_dict(data: dict) -> Camera4D:
        defaults = Camera4D()
        camera = Camera4D(
            position=Vec4.from_tuple(data.get('position', defaults.position.to_tuple())),
            yaw=data.get('yaw', 0.0),
            pitch=data.get('pitch', 0.0),
            w_yaw=data.get('w_yaw', 0.0),
            w_pitch=data.get('w_pitch', 0.0),
            fov=data.get('fov', defaults.fov),
            min_distance=data.get('min_distance', defaults.min_distance),
            max_distance=data.get('max_distance', defaults.max_distance),
            bounce_count=data.get('bounce_count', defaults.bounce_count),
            sample_count=data.get('sample_count', defaults.sample_count),
        )
        return camera.clamp()
