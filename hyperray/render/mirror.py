# hyperray/render/mirror.py
"""
GPU mirrors of growable scene arrays.

One StorageMirror per scene sequence. Every frame the sequence is serialized
and reconciled with the GPU buffer:

- payload fits the current capacity  -> write in place at offset 0
- payload is larger                  -> allocate a new buffer of exactly the
                                        payload size, drop the old one, and
                                        invalidate every BindingSet using it

Capacity never shrinks. A BindingSet snapshots which buffer sits at which
binding point; after a reallocation it must be rebuilt before the next
dispatch reads it.

The mirror only needs `ctx.buffer(data=None, reserve=0)` and
`Buffer.write(data, offset=0)` / `release()` / `bind_to_storage_buffer()`,
so any moderngl-compatible context works.
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Dict, Generic, List, Sequence, TypeVar
import logging

from .layout import RecordLayout

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MirrorState(Enum):
    CLEAN = auto()        # every dependent BindingSet points at the current buffer
    INVALIDATED = auto()  # reallocated since a dependent was last rebuilt


class StorageMirror(Generic[T]):
    """A GPU buffer kept in sync with one scene sequence."""

    def __init__(self, ctx, layout: RecordLayout[T], label: str = None):
        self.ctx = ctx
        self.layout = layout
        self.label = label or layout.name
        self.capacity = layout.min_size
        self.buffer = ctx.buffer(reserve=self.capacity)
        self.state = MirrorState.CLEAN
        self.reallocations = 0
        self._dependents: List[BindingSet] = []

    def add_dependent(self, binding_set: BindingSet):
        if binding_set not in self._dependents:
            self._dependents.append(binding_set)

    def sync(self, records: Sequence[T]) -> MirrorState:
        """Serialize `records` and reconcile them with the GPU buffer."""
        return self.write(self.layout.serialize(records))

    def write(self, payload: bytes) -> MirrorState:
        size = len(payload)
        if size <= self.capacity:
            self.buffer.write(payload, offset=0)
            return self.state

        old_capacity = self.capacity
        old_buffer = self.buffer
        self.buffer = self.ctx.buffer(payload)
        self.capacity = size
        old_buffer.release()

        self.reallocations += 1
        self.state = MirrorState.INVALIDATED
        for binding_set in self._dependents:
            binding_set.invalidate()

        logger.debug(
            "%s grew %d -> %d bytes (reallocation #%d)",
            self.label, old_capacity, size, self.reallocations,
        )
        return self.state

    def _dependent_rebuilt(self):
        if all(binding_set.valid for binding_set in self._dependents):
            self.state = MirrorState.CLEAN

    def release(self):
        self.buffer.release()


class BindingSet:
    """
    Storage buffers a dispatch reads, by binding point.

    Built from the mirrors' current buffers. Invalidated by any of them
    reallocating; ensure_valid() rebuilds it (idempotent).
    """

    def __init__(self, label: str, entries: Dict[int, StorageMirror]):
        self.label = label
        self._entries = dict(entries)
        self._buffers: Dict[int, object] = {}
        self.valid = False
        self.rebuilds = 0
        for mirror in self._entries.values():
            mirror.add_dependent(self)
        self.rebuild()

    @property
    def buffers(self) -> Dict[int, object]:
        return dict(self._buffers)

    def invalidate(self):
        self.valid = False

    def rebuild(self):
        self._buffers = {binding: mirror.buffer for binding, mirror in self._entries.items()}
        self.valid = True
        self.rebuilds += 1
        for mirror in self._entries.values():
            mirror._dependent_rebuilt()
        logger.debug("Rebuilt binding set %s (%d)", self.label, self.rebuilds)

    def ensure_valid(self) -> bool:
        """Rebuild if invalidated. Returns True if a rebuild happened."""
        if self.valid:
            return False
        self.rebuild()
        return True

    def bind(self):
        if not self.valid:
            raise RuntimeError(f"binding set {self.label!r} is stale; call ensure_valid() first")
        for binding, buffer in self._buffers.items():
            buffer.bind_to_storage_buffer(binding=binding)
