import logging
from typing import Optional, Sequence

import numpy as np

from .texture import Texture
from .vecmath import Vec3

logger = logging.getLogger(__name__)

# Neutral color used when no texture is bound.
WHITE = (255, 255, 255)


def light_intensity(light_direction: Vec3, normal: Vec3) -> float:
    """Lambert term for a light travelling along light_direction: -(L . N)."""
    return -light_direction.dot(normal)


def average_normal(normals: Sequence[Vec3]) -> Vec3:
    a, b, c = normals
    return (a + b + c).normalize()


def faces_camera(view_direction: Vec3, normals: Sequence[Vec3]) -> bool:
    """True when the averaged vertex normal points back towards the eye."""
    return -view_direction.dot(average_normal(normals)) > 0.0


def _stack(vectors: Sequence[Vec3]) -> np.ndarray:
    return np.array([v.as_tuple() for v in vectors], dtype=np.float64)


class _BaseShader:
    """
    Shaders are callables passed to raster.rasterize: they take an (n, 3)
    array of (s, t, u) weights and return (n, 3) uint8 colors.
    """

    def __init__(self, uvs: Optional[Sequence[Vec3]] = None, texture: Optional[Texture] = None):
        if texture is not None and uvs is None:
            raise ValueError("A textured shader needs per-vertex UVs")
        self.texture = texture
        self.uvs = _stack(uvs) if uvs is not None else None

    def base_colors(self, weights: np.ndarray) -> np.ndarray:
        """Texel (nearest neighbour) or white for each pixel, as float64."""
        if self.texture is None:
            return np.broadcast_to(np.array(WHITE, dtype=np.float64), (len(weights), 3))
        uv = weights @ self.uvs
        return self.texture.sample(uv).astype(np.float64)


class FlatShader(_BaseShader):
    """
    Flat shading: one intensity for the whole triangle.

    intensity is computed once per face by the caller (light . face normal)
    and clamped to [0, 1]; the texel (or white) is scaled by it and
    truncated to uint8.
    """

    def __init__(self, intensity: float, uvs: Optional[Sequence[Vec3]] = None,
                 texture: Optional[Texture] = None):
        super().__init__(uvs, texture)
        self.intensity = min(max(intensity, 0.0), 1.0)

    def __call__(self, weights: np.ndarray) -> np.ndarray:
        return (self.base_colors(weights) * self.intensity).astype(np.uint8)


class SmoothShader(_BaseShader):
    """
    Per-pixel (Gouraud-class) shading.

    For each pixel:
      - normal = normalize(s*n_a + t*n_b + u*n_c)
      - intensity = clamp(-(L . normal), 0, 1)
      - color = texel(s*uv_a + t*uv_b + u*uv_c) * intensity
    """

    def __init__(self, light_direction: Vec3, normals: Sequence[Vec3],
                 uvs: Optional[Sequence[Vec3]] = None, texture: Optional[Texture] = None):
        super().__init__(uvs, texture)
        self.light = np.array(light_direction.as_tuple(), dtype=np.float64)
        self.normals = _stack(normals)

    def intensities(self, weights: np.ndarray) -> np.ndarray:
        n = weights @ self.normals
        lengths = np.linalg.norm(n, axis=1, keepdims=True)
        n = n / np.maximum(lengths, 1e-12)
        return np.clip(-(n @ self.light), 0.0, 1.0)

    def __call__(self, weights: np.ndarray) -> np.ndarray:
        intensity = self.intensities(weights)
        return (self.base_colors(weights) * intensity[:, None]).astype(np.uint8)
