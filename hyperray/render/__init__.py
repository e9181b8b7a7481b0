from .layout import (
    ARRAY_HEADER_SIZE,
    HYPER_PLANES,
    HYPER_SPHERES,
    MATERIALS,
    RecordLayout,
    pack_camera,
    read_count,
)
from .mirror import BindingSet, MirrorState, StorageMirror

# RayTracer pulls in moderngl; import it from hyperray.render.renderer.

__all__ = [
    "ARRAY_HEADER_SIZE",
    "HYPER_PLANES",
    "HYPER_SPHERES",
    "MATERIALS",
    "RecordLayout",
    "pack_camera",
    "read_count",
    "BindingSet",
    "MirrorState",
    "StorageMirror",
]
