from .math4d import Vec4, wedge, DegenerateGeometryError
from .bivector import Bivector4, UNIT_PLANES
from .rotor import Rotor4
from .frame import FrameState
from .signal import SignalBridge, Connection

__all__ = [
    "Vec4",
    "wedge",
    "DegenerateGeometryError",
    "Bivector4",
    "UNIT_PLANES",
    "Rotor4",
    "FrameState",
    "SignalBridge",
    "Connection",
]
