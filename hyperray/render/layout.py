# hyperray/render/layout.py
"""
Byte layouts shared with the ray-tracing kernel.

The camera is a std140 uniform block; the three scene arrays are std430
storage blocks of the form

    uint count;          // offset 0, padded to 16
    Record data[];       // offset 16, fixed stride

Field order, offsets and strides here must match ray_tracing.comp exactly.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

import numpy as np

from ..scene.camera import Camera4D, CameraBasis
from ..scene.objects import HyperPlane, HyperSphere, Material

T = TypeVar("T")

ARRAY_HEADER_SIZE = 16


# =============================================================================
# Record dtypes
# =============================================================================

CAMERA_DTYPE = np.dtype({
    "names": [
        "position", "forward", "right", "up",
        "fov", "min_distance", "max_distance", "bounce_count", "sample_count",
    ],
    "formats": [
        "(4,)<f4", "(4,)<f4", "(4,)<f4", "(4,)<f4",
        "<f4", "<f4", "<f4", "<u4", "<u4",
    ],
    "offsets": [0, 16, 32, 48, 64, 68, 72, 76, 80],
    "itemsize": 96,
})

HYPER_SPHERE_DTYPE = np.dtype({
    "names": ["center", "radius", "material"],
    "formats": ["(4,)<f4", "<f4", "<u4"],
    "offsets": [0, 16, 20],
    "itemsize": 32,
})

HYPER_PLANE_DTYPE = np.dtype({
    "names": ["point", "normal", "material"],
    "formats": ["(4,)<f4", "(4,)<f4", "<u4"],
    "offsets": [0, 16, 32],
    "itemsize": 48,
})

# vec3 aligns to 16 in both std140 and std430; the float packs into the
# last slot of emissive_color's vec4.
MATERIAL_DTYPE = np.dtype({
    "names": ["base_color", "emissive_color", "emission_strength"],
    "formats": ["(3,)<f4", "(3,)<f4", "<f4"],
    "offsets": [0, 16, 28],
    "itemsize": 32,
})


def pack_camera(camera: Camera4D, basis: CameraBasis) -> bytes:
    record = np.zeros(1, dtype=CAMERA_DTYPE)
    record["position"] = camera.position.to_tuple()
    record["forward"] = basis.forward.to_tuple()
    record["right"] = basis.right.to_tuple()
    record["up"] = basis.up.to_tuple()
    record["fov"] = camera.fov
    record["min_distance"] = camera.min_distance
    record["max_distance"] = camera.max_distance
    record["bounce_count"] = camera.bounce_count
    record["sample_count"] = camera.sample_count
    return record.tobytes()


# =============================================================================
# Variable-length arrays
# =============================================================================

@dataclass(frozen=True)
class RecordLayout(Generic[T]):
    """
    How one scene sequence is laid out on the GPU: a count header followed
    by `dtype`-shaped records produced by `to_row`.
    """
    name: str
    dtype: np.dtype
    to_row: Callable[[T], tuple]

    @property
    def stride(self) -> int:
        return self.dtype.itemsize

    @property
    def min_size(self) -> int:
        """Smallest legal binding: the header plus one record."""
        return ARRAY_HEADER_SIZE + self.stride

    def payload_size(self, count: int) -> int:
        return ARRAY_HEADER_SIZE + max(count, 1) * self.stride

    def serialize(self, records: Sequence[T]) -> bytes:
        """
        Header + records. An empty sequence still carries one zeroed record
        so the payload never drops below min_size.
        """
        count = len(records)
        header = np.zeros(ARRAY_HEADER_SIZE // 4, dtype="<u4")
        header[0] = count

        body = np.zeros(max(count, 1), dtype=self.dtype)
        for i, record in enumerate(records):
            body[i] = self.to_row(record)

        return header.tobytes() + body.tobytes()


def _hyper_sphere_row(sphere: HyperSphere) -> tuple:
    return (sphere.center.to_tuple(), sphere.radius, sphere.material)


def _hyper_plane_row(plane: HyperPlane) -> tuple:
    return (plane.point.to_tuple(), plane.normal.to_tuple(), plane.material)


def _material_row(material: Material) -> tuple:
    return (material.base_color, material.emissive_color, material.emission_strength)


HYPER_SPHERES: RecordLayout[HyperSphere] = RecordLayout(
    "hyper_spheres", HYPER_SPHERE_DTYPE, _hyper_sphere_row
)
HYPER_PLANES: RecordLayout[HyperPlane] = RecordLayout(
    "hyper_planes", HYPER_PLANE_DTYPE, _hyper_plane_row
)
MATERIALS: RecordLayout[Material] = RecordLayout(
    "materials", MATERIAL_DTYPE, _material_row
)


def read_count(payload: bytes) -> int:
    """Element count from a serialized array payload."""
    return int(np.frombuffer(payload, dtype="<u4", count=1)[0])
