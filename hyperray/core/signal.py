# hyperray/core/signal.py
"""
SignalBridge - Observer hub that lets the app and tools react to scene edits.

The Scene emits; anything holding the bridge may listen. Handlers run
synchronously inside emit(), on the frame thread.
"""

from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
import itertools
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# Signal Types
# =============================================================================

SIGNAL_OBJECT_ADDED = 'object_added'          # (kind, index, name)
SIGNAL_OBJECT_REMOVED = 'object_removed'      # (kind, index, name)
SIGNAL_OBJECT_CHANGED = 'object_changed'      # (kind, index)
SIGNAL_MATERIAL_ADDED = 'material_added'      # (index,)
SIGNAL_MATERIAL_CHANGED = 'material_changed'  # (index,)
SIGNAL_CAMERA_CHANGED = 'camera_changed'      # (camera,)
SIGNAL_SCENE_LOADED = 'scene_loaded'          # (path,)


# =============================================================================
# Connection Handle
# =============================================================================

@dataclass
class Connection:
    """Returned by connect(); call disconnect() to stop receiving."""
    signal: str
    callback_id: int
    bridge: Optional[SignalBridge] = None

    @property
    def connected(self) -> bool:
        return self.bridge is not None

    def disconnect(self):
        if self.bridge:
            self.bridge._remove(self.signal, self.callback_id)
            self.bridge = None


# =============================================================================
# Signal Bridge
# =============================================================================

class SignalBridge:
    """Routes named signals to connected handlers."""

    def __init__(self):
        self._handlers: Dict[str, Dict[int, Callable]] = defaultdict(dict)
        self._ids = itertools.count()
        self._depth = 0
        self._deferred: List[Tuple[str, int]] = []

    def connect(self, signal: str, handler: Callable) -> Connection:
        callback_id = next(self._ids)
        self._handlers[signal][callback_id] = handler
        return Connection(signal=signal, callback_id=callback_id, bridge=self)

    def emit(self, signal: str, *args, **kwargs):
        handlers = self._handlers.get(signal)
        if not handlers:
            return

        self._depth += 1
        try:
            # Snapshot: handlers may disconnect themselves while we iterate.
            for handler in list(handlers.values()):
                try:
                    handler(*args, **kwargs)
                except Exception:
                    logger.exception("Signal handler failed [%s]", signal)
        finally:
            self._depth -= 1
            if self._depth == 0:
                for sig, cid in self._deferred:
                    self._handlers[sig].pop(cid, None)
                self._deferred.clear()

    def handler_count(self, signal: str) -> int:
        return len(self._handlers.get(signal, ()))

    def _remove(self, signal: str, callback_id: int):
        if self._depth > 0:
            self._deferred.append((signal, callback_id))
        else:
            self._handlers[signal].pop(callback_id, None)
