# hyperray/scene/scene.py
"""
Scene - camera, hyperspheres, hyperplanes and materials.

This is the editor boundary: a UI (or a script) edits the scene only through
these methods, which keep the records valid and the name lists in step.

Materials are append-only, so material indices held by records never dangle.
"""

from __future__ import annotations
from dataclasses import fields as dataclass_fields, replace
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar
import json
import logging

from ..core.math4d import Vec4
from ..core.signal import (
    SignalBridge,
    SIGNAL_OBJECT_ADDED, SIGNAL_OBJECT_REMOVED, SIGNAL_OBJECT_CHANGED,
    SIGNAL_MATERIAL_ADDED, SIGNAL_MATERIAL_CHANGED, SIGNAL_CAMERA_CHANGED,
    SIGNAL_SCENE_LOADED,
)
from .camera import Camera4D
from .objects import HyperPlane, HyperSphere, Material

logger = logging.getLogger(__name__)

T = TypeVar("T")

KIND_HYPER_SPHERE = "hyper_sphere"
KIND_HYPER_PLANE = "hyper_plane"

DEFAULT_HYPER_SPHERE_NAME = "Default Hyper Sphere"
DEFAULT_HYPER_PLANE_NAME = "Default Hyper Plane"

CAMERA_FIELDS = frozenset(f.name for f in dataclass_fields(Camera4D))


# =============================================================================
# Named Collection
# =============================================================================

class NamedCollection(Generic[T]):
    """
    Ordered records with a parallel list of display names.

    Both lists change together in every mutating method, so
    len(records) == len(names) always holds.
    """

    def __init__(self):
        self._records: List[T] = []
        self._names: List[str] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Tuple[T, str]]:
        return iter(zip(self._records, self._names))

    def __getitem__(self, index: int) -> T:
        return self._records[index]

    @property
    def records(self) -> Tuple[T, ...]:
        return tuple(self._records)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._names)

    def name(self, index: int) -> str:
        return self._names[index]

    def append(self, record: T, name: str) -> int:
        self._records.append(record)
        self._names.append(name)
        return len(self._records) - 1

    def replace(self, index: int, record: T):
        self._records[index] = record

    def rename(self, index: int, name: str):
        self._names[index] = name

    def remove(self, index: int) -> Tuple[T, str]:
        # Index both lists before mutating either, so a bad index changes nothing.
        record, name = self._records[index], self._names[index]
        del self._records[index]
        del self._names[index]
        return record, name


# =============================================================================
# Scene
# =============================================================================

class Scene:
    """Everything the kernel renders, plus the edit API over it."""

    def __init__(self, camera: Optional[Camera4D] = None, bridge: SignalBridge = None):
        self.camera = camera if camera is not None else Camera4D()
        self.hyper_spheres: NamedCollection[HyperSphere] = NamedCollection()
        self.hyper_planes: NamedCollection[HyperPlane] = NamedCollection()
        self._materials: List[Material] = []
        self._bridge = bridge

    def bind_bridge(self, bridge: SignalBridge):
        self._bridge = bridge

    def _emit(self, signal: str, *args):
        if self._bridge:
            self._bridge.emit(signal, *args)

    # -------------------------------------------------------------------------
    # Camera
    # -------------------------------------------------------------------------

    def edit_camera(self, **fields) -> Camera4D:
        """
        Set camera fields by name, then re-apply the camera clamps.

        The edit is applied to a copy; the scene keeps its current camera if
        a name is unknown or a value cannot be clamped.
        """
        unknown = set(fields) - CAMERA_FIELDS
        if unknown:
            raise AttributeError(f"Camera4D has no field(s) {sorted(unknown)}")
        if 'position' in fields and not isinstance(fields['position'], Vec4):
            fields['position'] = Vec4.from_tuple(fields['position'])
        self.camera = replace(self.camera, **fields).clamp()
        self._emit(SIGNAL_CAMERA_CHANGED, self.camera)
        return self.camera

    # -------------------------------------------------------------------------
    # Materials
    # -------------------------------------------------------------------------

    @property
    def materials(self) -> Tuple[Material, ...]:
        return tuple(self._materials)

    def add_material(self, material: Optional[Material] = None) -> int:
        self._materials.append(material if material is not None else Material())
        index = len(self._materials) - 1
        self._emit(SIGNAL_MATERIAL_ADDED, index)
        return index

    def update_material(self, index: int, **fields) -> Material:
        for key in ('base_color', 'emissive_color'):
            if key in fields:
                fields[key] = tuple(float(c) for c in fields[key])
        material = replace(self._materials[index], **fields)
        self._materials[index] = material
        self._emit(SIGNAL_MATERIAL_CHANGED, index)
        return material

    def _check_material(self, index: int):
        if not 0 <= index < len(self._materials):
            raise ValueError(
                f"material index {index} out of range (have {len(self._materials)})"
            )

    # -------------------------------------------------------------------------
    # Hyperspheres
    # -------------------------------------------------------------------------

    def _valid_sphere(self, sphere: HyperSphere) -> HyperSphere:
        if sphere.radius <= 0.0:
            raise ValueError(f"hypersphere radius must be positive, got {sphere.radius}")
        self._check_material(sphere.material)
        return sphere

    def add_hyper_sphere(
        self,
        sphere: Optional[HyperSphere] = None,
        name: str = DEFAULT_HYPER_SPHERE_NAME,
    ) -> int:
        """
        Append a hypersphere. Without a record, a unit sphere at the origin is
        added together with a fresh material of its own.
        """
        if sphere is None:
            sphere = HyperSphere(material=self.add_material())
        index = self.hyper_spheres.append(self._valid_sphere(sphere), name)
        self._emit(SIGNAL_OBJECT_ADDED, KIND_HYPER_SPHERE, index, name)
        return index

    def update_hyper_sphere(self, index: int, **fields) -> HyperSphere:
        if 'center' in fields and not isinstance(fields['center'], Vec4):
            fields['center'] = Vec4.from_tuple(fields['center'])
        sphere = self._valid_sphere(replace(self.hyper_spheres[index], **fields))
        self.hyper_spheres.replace(index, sphere)
        self._emit(SIGNAL_OBJECT_CHANGED, KIND_HYPER_SPHERE, index)
        return sphere

    def rename_hyper_sphere(self, index: int, name: str):
        self.hyper_spheres.rename(index, name)
        self._emit(SIGNAL_OBJECT_CHANGED, KIND_HYPER_SPHERE, index)

    def delete_hyper_sphere(self, index: int) -> HyperSphere:
        sphere, name = self.hyper_spheres.remove(index)
        self._emit(SIGNAL_OBJECT_REMOVED, KIND_HYPER_SPHERE, index, name)
        return sphere

    # -------------------------------------------------------------------------
    # Hyperplanes
    # -------------------------------------------------------------------------

    def _valid_plane(self, plane: HyperPlane) -> HyperPlane:
        self._check_material(plane.material)
        # raises DegenerateGeometryError (a ValueError) for a zero normal
        return replace(plane, normal=plane.normal.normalized())

    def add_hyper_plane(
        self,
        plane: Optional[HyperPlane] = None,
        name: str = DEFAULT_HYPER_PLANE_NAME,
    ) -> int:
        """
        Append a hyperplane. Without a record, a plane through the origin
        facing +y is added together with a fresh material of its own.
        """
        if plane is None:
            plane = HyperPlane(material=self.add_material())
        index = self.hyper_planes.append(self._valid_plane(plane), name)
        self._emit(SIGNAL_OBJECT_ADDED, KIND_HYPER_PLANE, index, name)
        return index

    def update_hyper_plane(self, index: int, **fields) -> HyperPlane:
        for key in ('point', 'normal'):
            if key in fields and not isinstance(fields[key], Vec4):
                fields[key] = Vec4.from_tuple(fields[key])
        plane = self._valid_plane(replace(self.hyper_planes[index], **fields))
        self.hyper_planes.replace(index, plane)
        self._emit(SIGNAL_OBJECT_CHANGED, KIND_HYPER_PLANE, index)
        return plane

    def rename_hyper_plane(self, index: int, name: str):
        self.hyper_planes.rename(index, name)
        self._emit(SIGNAL_OBJECT_CHANGED, KIND_HYPER_PLANE, index)

    def delete_hyper_plane(self, index: int) -> HyperPlane:
        plane, name = self.hyper_planes.remove(index)
        self._emit(SIGNAL_OBJECT_REMOVED, KIND_HYPER_PLANE, index, name)
        return plane

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            'camera': self.camera.to_dict(),
            'materials': [m.to_dict() for m in self._materials],
            'hyper_spheres': [
                dict(s.to_dict(), name=name) for s, name in self.hyper_spheres
            ],
            'hyper_planes': [
                dict(p.to_dict(), name=name) for p, name in self.hyper_planes
            ],
        }

    def from_dict(self, data: dict):
        """
        Replace the whole scene.

        Records are validated into a bridgeless staging scene first (materials
        before objects, so indices check); this scene is only touched once
        everything loaded.
        """
        staged = Scene(camera=Camera4D.from_dict(data.get('camera', {})))
        for material_data in data.get('materials', []):
            staged.add_material(Material.from_dict(material_data))
        for sphere_data in data.get('hyper_spheres', []):
            staged.add_hyper_sphere(
                HyperSphere.from_dict(sphere_data),
                sphere_data.get('name', DEFAULT_HYPER_SPHERE_NAME),
            )
        for plane_data in data.get('hyper_planes', []):
            staged.add_hyper_plane(
                HyperPlane.from_dict(plane_data),
                plane_data.get('name', DEFAULT_HYPER_PLANE_NAME),
            )

        self.camera = staged.camera
        self.hyper_spheres = staged.hyper_spheres
        self.hyper_planes = staged.hyper_planes
        self._materials = staged._materials

    def save(self, path):
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info("Saved scene to %s", path)

    def load(self, path):
        with open(path, 'r') as f:
            data = json.load(f)
        self.from_dict(data)
        logger.info(
            "Loaded scene from %s (%d spheres, %d planes, %d materials)",
            path, len(self.hyper_spheres), len(self.hyper_planes), len(self._materials),
        )
        self._emit(SIGNAL_SCENE_LOADED, path)


def default_scene(bridge: SignalBridge = None) -> Scene:
    """The scene the viewer opens with: an orange hypersphere on green ground."""
    scene = Scene(bridge=bridge)
    orange = scene.add_material(Material(base_color=(0.8, 0.4, 0.1)))
    green = scene.add_material(Material(base_color=(0.1, 0.8, 0.3)))
    scene.add_hyper_sphere(
        HyperSphere(center=Vec4(0.0, 1.0, 0.0, 0.0), radius=1.0, material=orange),
        "Hyper Sphere",
    )
    scene.add_hyper_plane(
        HyperPlane(point=Vec4(), normal=Vec4.unit_y(), material=green),
        "Ground",
    )
    return scene
