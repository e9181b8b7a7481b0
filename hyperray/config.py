# hyperray/config.py
"""
Viewer configuration.

Plain dataclasses with the values the viewer ships with. The app builds a
ViewerConfig once at startup; nothing reads configuration files.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
import logging
import math
import os


SHADER_DIR = Path(__file__).resolve().parent / "render" / "shaders"


@dataclass
class ControlConfig:
    move_speed: float = 3.0                          # units per second
    rotation_speed: float = math.radians(90.0) * 1.5  # radians per second


@dataclass
class RendererConfig:
    workgroup_size: Tuple[int, int] = (16, 16)       # must match local_size in the kernel
    shader_path: Path = SHADER_DIR / "ray_tracing.comp"
    clear_color: Tuple[float, float, float, float] = (0.08, 0.09, 0.11, 1.0)


@dataclass
class ViewerConfig:
    title: str = "4D Ray Tracing"
    window_size: Tuple[int, int] = (1280, 720)
    gl_version: Tuple[int, int] = (4, 3)             # compute shaders need 4.3
    log_level: str = "INFO"
    scene_path: Optional[Path] = None
    controls: ControlConfig = field(default_factory=ControlConfig)
    renderer: RendererConfig = field(default_factory=RendererConfig)

    @classmethod
    def from_env(cls, environ=None) -> ViewerConfig:
        """Defaults, overridden by HYPERRAY_LOG_LEVEL and HYPERRAY_SCENE."""
        environ = os.environ if environ is None else environ
        config = cls()
        level = environ.get("HYPERRAY_LOG_LEVEL")
        if level:
            config.log_level = level.upper()
        scene = environ.get("HYPERRAY_SCENE")
        if scene:
            config.scene_path = Path(scene)
        return config

    def configure_logging(self):
        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
