from .camera import Camera4D, CameraBasis, orientation, wrap_angle
from .controls import CameraController, HeldKeys
from .objects import HyperPlane, HyperSphere, Material
from .scene import NamedCollection, Scene, default_scene

__all__ = [
    "Camera4D",
    "CameraBasis",
    "orientation",
    "wrap_angle",
    "CameraController",
    "HeldKeys",
    "HyperPlane",
    "HyperSphere",
    "Material",
    "NamedCollection",
    "Scene",
    "default_scene",
]
