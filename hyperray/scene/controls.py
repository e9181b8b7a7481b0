# hyperray/scene/controls.py
"""
Keyboard camera controls.

Six keys translate along the camera basis; four arrow keys turn yaw/pitch,
or w_yaw/w_pitch while the modifier (shift) is held. Rates are per second
and scaled by the frame's dt, so motion doesn't depend on frame rate.
"""

from __future__ import annotations
from typing import AbstractSet, Dict, FrozenSet, Optional, Set, Tuple

from ..config import ControlConfig
from .camera import Camera4D


# key -> (basis axis, sign)
TRANSLATION_KEYS: Dict[str, Tuple[str, float]] = {
    "W": ("forward", +1.0),
    "S": ("forward", -1.0),
    "D": ("right", +1.0),
    "A": ("right", -1.0),
    "E": ("up", +1.0),
    "Q": ("up", -1.0),
}

# key -> (angle without modifier, angle with modifier, sign)
ROTATION_KEYS: Dict[str, Tuple[str, str, float]] = {
    "UP": ("pitch", "w_pitch", +1.0),
    "DOWN": ("pitch", "w_pitch", -1.0),
    "RIGHT": ("yaw", "w_yaw", +1.0),
    "LEFT": ("yaw", "w_yaw", -1.0),
}

# Either shift key switches the arrows to the w angles.
MODIFIER_KEYS = ("LEFT_SHIFT", "RIGHT_SHIFT")

# Every key name the controller reacts to
CONTROL_KEYS = tuple(TRANSLATION_KEYS) + tuple(ROTATION_KEYS) + MODIFIER_KEYS


class HeldKeys:
    """
    Key names currently held down, fed from press and release events.

    The modifier comes from the shift keys themselves rather than from the
    modifier flags of other key events, so releasing shift always ends it.
    """

    def __init__(self):
        self._down: Set[str] = set()

    def press(self, name: str):
        self._down.add(name)

    def release(self, name: str):
        self._down.discard(name)

    @property
    def keys_down(self) -> FrozenSet[str]:
        return frozenset(self._down)

    @property
    def modifier(self) -> bool:
        return any(key in self._down for key in MODIFIER_KEYS)


class CameraController:
    """Applies held keys to a Camera4D once per frame."""

    def __init__(self, config: Optional[ControlConfig] = None):
        self.config = config or ControlConfig()

    def update(
        self,
        camera: Camera4D,
        keys_down: AbstractSet[str],
        modifier: bool,
        dt: float,
    ) -> bool:
        """Returns True if the camera moved or turned."""
        if not keys_down or dt <= 0.0:
            return False

        changed = False

        # Translation uses the basis from the start of the frame.
        basis = camera.basis()
        step = self.config.move_speed * dt
        for key, (axis, sign) in TRANSLATION_KEYS.items():
            if key in keys_down:
                camera.position = camera.position + getattr(basis, axis) * (sign * step)
                changed = True

        turn = self.config.rotation_speed * dt
        for key, (plain, shifted, sign) in ROTATION_KEYS.items():
            if key in keys_down:
                angle = shifted if modifier else plain
                setattr(camera, angle, getattr(camera, angle) + sign * turn)
                changed = True

        if changed:
            camera.clamp()
        return changed
