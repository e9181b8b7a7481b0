# hyperray/render/renderer.py
"""
Ray Tracer

Owns the GPU side of the viewer: the compute kernel, the camera uniform,
one StorageMirror per scene array, the output image and the screen blit.

Per frame:
    upload(scene)      camera + arrays -> GPU, rebuild stale binding sets
    dispatch(w, h)     run the kernel over the output image
    blit()             draw the output image to the current framebuffer
"""

from __future__ import annotations
from typing import Dict, Optional, Tuple
import logging
import math

import numpy as np
import moderngl

from ..config import RendererConfig
from ..scene.scene import Scene
from .layout import CAMERA_DTYPE, HYPER_PLANES, HYPER_SPHERES, MATERIALS, pack_camera
from .mirror import BindingSet, StorageMirror

logger = logging.getLogger(__name__)


CAMERA_BINDING = 0
HYPER_SPHERES_BINDING = 1
HYPER_PLANES_BINDING = 2
MATERIALS_BINDING = 3
OUTPUT_IMAGE_UNIT = 0


BLIT_VS = """
#version 330

in vec2 in_pos;
in vec2 in_uv;

out vec2 v_uv;

void main() {
    gl_Position = vec4(in_pos, 0.0, 1.0);
    v_uv = in_uv;
}
"""

BLIT_FS = """
#version 330

in vec2 v_uv;

uniform sampler2D u_tex;

out vec4 fragColor;

void main() {
    fragColor = vec4(texture(u_tex, v_uv).rgb, 1.0);
}
"""


def dispatch_size(width: int, height: int, workgroup: Tuple[int, int]) -> Tuple[int, int]:
    """Workgroup counts covering a width x height image."""
    return (
        max(1, math.ceil(width / workgroup[0])),
        max(1, math.ceil(height / workgroup[1])),
    )


class RayTracer:
    """Compute-shader ray tracer over a Scene."""

    def __init__(self, ctx: moderngl.Context, config: Optional[RendererConfig] = None):
        self.ctx = ctx
        self.config = config or RendererConfig()

        source = self.config.shader_path.read_text()
        self.program = ctx.compute_shader(source)

        self.camera_buffer = ctx.buffer(reserve=CAMERA_DTYPE.itemsize)

        self.hyper_spheres = StorageMirror(ctx, HYPER_SPHERES)
        self.hyper_planes = StorageMirror(ctx, HYPER_PLANES)
        self.materials = StorageMirror(ctx, MATERIALS)

        # Objects and materials are separate groups, as in the kernel.
        self.objects_bindings = BindingSet("objects", {
            HYPER_SPHERES_BINDING: self.hyper_spheres,
            HYPER_PLANES_BINDING: self.hyper_planes,
        })
        self.material_bindings = BindingSet("materials", {
            MATERIALS_BINDING: self.materials,
        })

        self.texture: Optional[moderngl.Texture] = None
        self._create_blitter()

        self._upload_bytes = 0

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def _create_blitter(self):
        self._blit_prog = self.ctx.program(vertex_shader=BLIT_VS, fragment_shader=BLIT_FS)

        # Fullscreen quad: pos.xy, uv.xy
        quad = np.array([
            -1.0, -1.0, 0.0, 0.0,
             1.0, -1.0, 1.0, 0.0,
             1.0,  1.0, 1.0, 1.0,
            -1.0, -1.0, 0.0, 0.0,
             1.0,  1.0, 1.0, 1.0,
            -1.0,  1.0, 0.0, 1.0,
        ], dtype=np.float32)

        self._blit_vbo = self.ctx.buffer(quad.tobytes())
        self._blit_vao = self.ctx.vertex_array(
            self._blit_prog,
            [(self._blit_vbo, "2f 2f", "in_pos", "in_uv")],
        )

    def ensure_texture(self, width: int, height: int) -> moderngl.Texture:
        """(Re)create the output image when the window size changes."""
        width, height = max(1, width), max(1, height)
        if self.texture is not None and self.texture.size == (width, height):
            return self.texture
        if self.texture is not None:
            self.texture.release()
        self.texture = self.ctx.texture((width, height), 4, dtype="f1")
        self.texture.filter = (moderngl.LINEAR, moderngl.LINEAR)
        logger.debug("Output image resized to %dx%d", width, height)
        return self.texture

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def upload(self, scene: Scene) -> Dict[str, int]:
        """Push the scene to the GPU and make every binding set current."""
        camera = scene.camera
        camera_bytes = pack_camera(camera, camera.basis())
        self.camera_buffer.write(camera_bytes)

        sizes = 0
        for mirror, records in (
            (self.hyper_spheres, scene.hyper_spheres.records),
            (self.hyper_planes, scene.hyper_planes.records),
            (self.materials, scene.materials),
        ):
            mirror.sync(records)
            sizes += mirror.layout.payload_size(len(records))

        rebuilt = 0
        for binding_set in (self.objects_bindings, self.material_bindings):
            if binding_set.ensure_valid():
                rebuilt += 1

        self._upload_bytes = len(camera_bytes) + sizes
        return {
            "upload_bytes": self._upload_bytes,
            "rebuilt_binding_sets": rebuilt,
        }

    def dispatch(self, width: int, height: int):
        texture = self.ensure_texture(width, height)

        self.camera_buffer.bind_to_uniform_block(CAMERA_BINDING)
        self.objects_bindings.bind()
        self.material_bindings.bind()
        texture.bind_to_image(OUTPUT_IMAGE_UNIT, read=False, write=True)

        gx, gy = dispatch_size(width, height, self.config.workgroup_size)
        self.program.run(gx, gy, 1)
        self.ctx.memory_barrier()

    def render(self, scene: Scene, width: int, height: int) -> Dict[str, int]:
        stats = self.upload(scene)
        self.dispatch(width, height)
        return stats

    def blit(self):
        if self.texture is None:
            return
        self.texture.use(location=0)
        self._blit_prog["u_tex"].value = 0
        self._blit_vao.render(moderngl.TRIANGLES)

    def get_frame_stats(self) -> Dict[str, int]:
        return {
            "upload_bytes": self._upload_bytes,
            "reallocations": (
                self.hyper_spheres.reallocations
                + self.hyper_planes.reallocations
                + self.materials.reallocations
            ),
            "rebuilds": self.objects_bindings.rebuilds + self.material_bindings.rebuilds,
        }

    def release(self):
        for mirror in (self.hyper_spheres, self.hyper_planes, self.materials):
            mirror.release()
        self.camera_buffer.release()
        if self.texture is not None:
            self.texture.release()
            self.texture = None
        self._blit_vao.release()
        self._blit_vbo.release()
        self._blit_prog.release()
        self.program.release()
