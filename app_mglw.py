"""
hyperray - moderngl-window Host

Opens a window, traces the scene with the compute kernel every frame and
blits the result to the screen.

Keys:
    W/S  A/D  Q/E      move forward/back, left/right, down/up
    arrows             yaw / pitch
    shift + arrows     w-yaw / w-pitch
    F5                 save the scene (to HYPERRAY_SCENE, or scene.json)

Environment:
    HYPERRAY_SCENE      scene JSON to open
    HYPERRAY_LOG_LEVEL  DEBUG shows buffer reallocations and rebuilds
"""

from __future__ import annotations
from pathlib import Path
import logging
import time

import moderngl_window as mglw

from hyperray.config import ViewerConfig
from hyperray.core.frame import FrameState
from hyperray.core.signal import SignalBridge, SIGNAL_OBJECT_ADDED, SIGNAL_OBJECT_REMOVED
from hyperray.render.renderer import RayTracer
from hyperray.scene import CameraController, Scene, default_scene
from hyperray.scene.controls import CONTROL_KEYS, HeldKeys

logger = logging.getLogger("hyperray.app")

CONFIG = ViewerConfig.from_env()

STATS_INTERVAL = 300  # frames


class HyperRayApp(mglw.WindowConfig):
    """Main application window."""

    gl_version = CONFIG.gl_version
    title = CONFIG.title
    window_size = CONFIG.window_size
    resource_dir = "."
    vsync = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.config = CONFIG

        self.bridge = SignalBridge()
        self.bridge.connect(SIGNAL_OBJECT_ADDED, self._on_object_added)
        self.bridge.connect(SIGNAL_OBJECT_REMOVED, self._on_object_removed)
        self.scene = self._load_scene()

        self.controller = CameraController(self.config.controls)
        self.tracer = RayTracer(self.ctx, self.config.renderer)

        # key code -> controller key name; backends without a shift key code skip it
        self._key_names = {
            getattr(self.wnd.keys, name): name
            for name in CONTROL_KEYS
            if hasattr(self.wnd.keys, name)
        }
        self.held = HeldKeys()

        self.frame = FrameState.start(time.perf_counter())

    def _load_scene(self) -> Scene:
        path = self.config.scene_path
        if path is not None and Path(path).exists():
            scene = Scene(bridge=self.bridge)
            scene.load(path)
            return scene
        return default_scene(bridge=self.bridge)

    def _on_object_added(self, kind, index, name):
        logger.debug("Added %s %d (%s)", kind, index, name)

    def _on_object_removed(self, kind, index, name):
        logger.debug("Removed %s %d (%s)", kind, index, name)

    def on_render(self, t: float, frame_time: float):
        """Main render loop."""
        self.frame = self.frame.next(time.perf_counter())

        self.controller.update(
            self.scene.camera, self.held.keys_down, self.held.modifier, self.frame.dt
        )

        w, h = self.wnd.buffer_size
        self.tracer.render(self.scene, w, h)

        self.ctx.screen.use()
        self.ctx.viewport = (0, 0, w, h)
        self.ctx.clear(*self.config.renderer.clear_color)
        self.tracer.blit()

        if self.frame.frame_id % STATS_INTERVAL == 0:
            logger.debug("frame %d %.1f fps %s", self.frame.frame_id, self.frame.fps,
                         self.tracer.get_frame_stats())

    # -------------------------------------------------------------------------
    # Input Handling
    # -------------------------------------------------------------------------

    def on_key_event(self, key, action, modifiers):
        keys = self.wnd.keys
        name = self._key_names.get(key)
        if action == keys.ACTION_PRESS:
            if name is not None:
                self.held.press(name)
            elif key == keys.F5:
                self.scene.save(self.config.scene_path or Path("scene.json"))
        elif action == keys.ACTION_RELEASE and name is not None:
            self.held.release(name)

    def on_close(self):
        self.tracer.release()


def main():
    CONFIG.configure_logging()
    mglw.run_window_config(HyperRayApp)


if __name__ == "__main__":
    main()
