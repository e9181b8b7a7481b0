# hyperray/core/frame.py
"""
Per-frame clock for the viewer.

The host creates one FrameState with start() and replaces it with next()
every frame; the controller scales motion by `dt`.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class FrameState:
    frame_id: int   # 0 for the state returned by start()
    dt: float       # seconds since the previous frame, never negative
    t: float        # clock reading at the start of this frame

    @classmethod
    def start(cls, now: float) -> FrameState:
        return cls(frame_id=0, dt=0.0, t=now)

    @property
    def fps(self) -> float:
        return 1.0 / max(1e-6, self.dt)

    def next(self, now: float) -> FrameState:
        # a clock that steps backwards yields dt == 0, which the controller ignores
        return FrameState(frame_id=self.frame_id + 1, dt=max(0.0, now - self.t), t=now)
