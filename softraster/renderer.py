import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from .camera import Camera
from .framebuffer import Color, Framebuffer
from .obj_loader import Face, Mesh
from .raster import draw_line, rasterize, to_pixel
from .shading import WHITE, FlatShader, SmoothShader, faces_camera, light_intensity
from .texture import Texture, load_texture
from .vecmath import Triangle, Vec3

logger = logging.getLogger(__name__)


# ============================================================
#  Render modes
# ============================================================

RENDER_WIREFRAME = 1
RENDER_FLAT = 2
RENDER_SMOOTH = 3

MODE_NAMES = {
    "wireframe": RENDER_WIREFRAME,
    "flat": RENDER_FLAT,
    "smooth": RENDER_SMOOTH,
}

DEFAULT_LIGHT = Vec3(0.0, 0.0, -1.0)

VecLike = Union[Vec3, Sequence[float]]


@dataclass
class RenderStats:
    faces: int = 0
    drawn: int = 0
    culled: int = 0
    pixels: int = 0


class Renderer:
    """
    One mesh, one directional light, one camera; renders in a single pass.

    Modes:
      - RENDER_WIREFRAME: triangle edges, no depth test, no culling
      - RENDER_FLAT:      one intensity per face from its geometric normal,
                          faces with intensity <= 0 are culled
      - RENDER_SMOOTH:    per-pixel interpolated vertex normals, faces whose
                          averaged normal points away from the camera are culled

    The texture is optional in the filled modes; without one every pixel is
    white scaled by the intensity.
    """

    def __init__(
        self,
        mesh: Mesh,
        texture: Optional[Texture] = None,
        camera: Optional[Camera] = None,
        light_direction: VecLike = DEFAULT_LIGHT,
        mode: int = RENDER_SMOOTH,
        background: Color = (0, 0, 0),
    ):
        if mode not in MODE_NAMES.values():
            raise ValueError(f"Unknown render mode {mode!r}")
        light = light_direction if isinstance(light_direction, Vec3) else Vec3.of(light_direction)
        if light.norm() <= 1e-12:
            raise ValueError("light_direction must be non-zero")
        self.mesh = mesh
        self.texture = texture
        self.camera = camera if camera is not None else Camera()
        self.light_direction = light.normalize()
        self.mode = mode
        self.background = background
        self.last_stats = RenderStats()

    def set_camera(self, eye: VecLike, focus: VecLike, up: VecLike) -> None:
        """Aim the camera and use |eye - focus| as the projection distance."""
        eye = eye if isinstance(eye, Vec3) else Vec3.of(eye)
        focus = focus if isinstance(focus, Vec3) else Vec3.of(focus)
        self.camera.look_at(eye, focus, up)
        self.camera.set_projection((eye - focus).norm())

    def set_texture(self, path: str) -> None:
        self.texture = load_texture(path)

    # ------------------------------------------------------------

    def render(self, width: int, height: int) -> Framebuffer:
        framebuffer = Framebuffer(width, height, self.background)
        self.camera.set_viewport(0.0, 0.0, float(width), float(height))

        stats = RenderStats(faces=len(self.mesh))
        for face in self.mesh:
            if self.mode == RENDER_WIREFRAME:
                self._draw_wireframe(face, framebuffer)
                stats.drawn += 1
                continue

            if self.mode == RENDER_FLAT:
                written = self._draw_flat(face, framebuffer)
            else:
                written = self._draw_smooth(face, framebuffer)
            if written is None:
                stats.culled += 1
            else:
                stats.drawn += 1
                stats.pixels += written

        self.last_stats = stats
        logger.info(
            "Rendered %dx%d: %d faces, %d drawn, %d culled, %d pixels written",
            width, height, stats.faces, stats.drawn, stats.culled, stats.pixels,
        )
        return framebuffer

    def render_to_file(self, path: str, width: int, height: int) -> Framebuffer:
        framebuffer = self.render(width, height)
        framebuffer.save(path)
        return framebuffer

    # ------------------------------------------------------------

    def _face_uvs(self, face: Face):
        return self.mesh.face_uvs(face) if self.texture is not None else None

    def _draw_flat(self, face: Face, framebuffer: Framebuffer) -> Optional[int]:
        triangle = Triangle(*self.mesh.face_verts(face))
        intensity = light_intensity(self.light_direction, triangle.normal())
        if intensity <= 0.0:
            return None

        self.camera.transform(triangle)
        shader = FlatShader(intensity, self._face_uvs(face), self.texture)
        return rasterize(triangle, framebuffer, shader)

    def _draw_smooth(self, face: Face, framebuffer: Framebuffer) -> Optional[int]:
        normals = self.mesh.face_normals(face)
        if not faces_camera(self.camera.view_dir, normals):
            return None

        triangle = Triangle(*self.mesh.face_verts(face))
        self.camera.transform(triangle)
        shader = SmoothShader(self.light_direction, normals, self._face_uvs(face), self.texture)
        return rasterize(triangle, framebuffer, shader)

    def _draw_wireframe(self, face: Face, framebuffer: Framebuffer) -> None:
        triangle = Triangle(*self.mesh.face_verts(face))
        self.camera.transform(triangle)
        corners = triangle.corners()
        if not all(math.isfinite(v) for p in corners for v in (p.x, p.y)):
            return
        a, b, c = (self._clamp_to(framebuffer, p) for p in corners)
        for (x0, y0), (x1, y1) in ((a, b), (b, c), (c, a)):
            draw_line(x0, y0, x1, y1, framebuffer.set_pixel, WHITE)

    @staticmethod
    def _clamp_to(framebuffer: Framebuffer, p: Vec3) -> Tuple[int, int]:
        x, y = to_pixel(p.x, p.y)
        return (
            min(max(x, 0), framebuffer.width - 1),
            min(max(y, 0), framebuffer.height - 1),
        )
