import logging
import math
from typing import Sequence, Union

from .vecmath import Mat4, Triangle, Vec3, Vec4, translate, vec3_to_vec4

logger = logging.getLogger(__name__)

# Viewport maps clip-space z in [-1, 1] onto [0, DEPTH_RANGE]; larger is nearer.
DEPTH_RANGE = 255.0
DEFAULT_FOCAL_DISTANCE = 5.0

VecLike = Union[Vec3, Sequence[float]]


def _as_vec3(v: VecLike) -> Vec3:
    return v if isinstance(v, Vec3) else Vec3.of(v)


def _divide(num: float, w: float) -> float:
    # IEEE-style result for w == 0: the rasterizer drops non-finite corners.
    if w == 0.0:
        return math.copysign(math.inf, num) if num != 0.0 else math.nan
    return num / w


def _perspective_divide(v: Vec4) -> Vec3:
    return Vec3(_divide(v.x, v.w), _divide(v.y, v.w), _divide(v.z, v.w))


class Camera:
    """
    Pinhole camera: model-view, projection and viewport matrices.

    Pipeline for one point p (object space):
      screen = divide(viewport @ projection @ model_view @ (p, 1))

    Conventions:
      - right-handed, the camera looks down its own -Z
      - model-view moves the focus point to the origin, the eye ends up at
        z = +c, c = |eye - focus|
      - projection is the identity plus m[3][2] = -1/c, so w = 1 - z/c and
        the center of projection sits exactly at the eye
      - no clipping; points at or behind the eye give whatever the
        homogeneous divide produces
    """

    def __init__(self, focal_distance: float = DEFAULT_FOCAL_DISTANCE):
        self.model_view = Mat4.identity()
        self.projection = Mat4.identity()
        self.viewport = Mat4.identity()
        self.view_direction = Vec3(0.0, 0.0, -1.0)
        self.focal_distance = focal_distance
        self._mvp = Mat4.identity()
        self.set_projection(focal_distance)
        self.set_viewport(0.0, 0.0, 600.0, 600.0)

    @property
    def view_dir(self) -> Vec3:
        """Unit vector from the eye towards the focus point."""
        return self.view_direction

    def _refresh(self) -> None:
        self._mvp = self.viewport @ self.projection @ self.model_view

    def look_at(self, eye: VecLike, focus: VecLike, up: VecLike) -> None:
        """
        Build the model-view matrix from an orthonormal camera basis.

          z = normalize(eye - focus)   (camera looks down -z)
          x = normalize(up x z)
          y = z x x

        Raises ValueError when eye == focus or up is parallel to the view
        direction (no basis can be built).
        """
        eye, focus, up = _as_vec3(eye), _as_vec3(focus), _as_vec3(up)
        z = (eye - focus).normalize()
        x = up.cross(z).normalize()
        if z.norm() == 0.0 or x.norm() == 0.0:
            raise ValueError(
                f"Cannot build a camera basis from eye={eye}, focus={focus}, up={up}"
            )
        y = z.cross(x).normalize()

        rotation = Mat4.from_rows([
            [x.x, x.y, x.z, 0.0],
            [y.x, y.y, y.z, 0.0],
            [z.x, z.y, z.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])
        self.model_view = rotation @ translate(-focus.x, -focus.y, -focus.z)
        self.view_direction = -z
        self._refresh()
        logger.debug("look_at eye=%s focus=%s up=%s", eye, focus, up)

    def set_projection(self, focal_distance: float) -> None:
        """Pinhole projection with w = 1 - z / focal_distance."""
        if focal_distance == 0.0:
            raise ValueError("focal_distance must be non-zero")
        m = Mat4.identity()
        m.m[3][2] = -1.0 / focal_distance
        self.projection = m
        self.focal_distance = focal_distance
        self._refresh()

    def set_viewport(self, x: float, y: float, width: float, height: float) -> None:
        """
        Map clip space [-1,1]^3 to pixels.

          x: [-1, 1] -> [x, x + width]
          y: [-1, 1] -> [y, y + height]
          z: [-1, 1] -> [0, DEPTH_RANGE]
        """
        half_depth = DEPTH_RANGE / 2.0
        self.viewport = Mat4.from_rows([
            [width / 2.0, 0.0, 0.0, x + width / 2.0],
            [0.0, height / 2.0, 0.0, y + height / 2.0],
            [0.0, 0.0, half_depth, half_depth],
            [0.0, 0.0, 0.0, 1.0],
        ])
        self._refresh()

    def transform_point(self, p: VecLike) -> Vec3:
        """Object space -> (pixel x, pixel y, depth)."""
        return _perspective_divide(self._mvp.mul_vec4(vec3_to_vec4(_as_vec3(p))))

    def transform(self, triangle: Triangle) -> None:
        """Overwrite the triangle's corners with their screen-space coordinates."""
        triangle.a = self.transform_point(triangle.a)
        triangle.b = self.transform_point(triangle.b)
        triangle.c = self.transform_point(triangle.c)
