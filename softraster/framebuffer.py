import logging
from typing import Tuple

import numpy as np
from PIL import Image

from .errors import ImageWriteError

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


class Framebuffer:
    """
    Color grid plus parallel depth grid for one render pass.

    Layout:
      - color: shape (W, H, 3), dtype=uint8, indexed [x, y, channel]
      - depth: shape (W, H), dtype=float64, 0.0 = empty
      - origin is bottom-left; to_image() flips to top-left for output

    A pixel is overwritten only when the incoming depth is strictly greater
    than the stored one (larger depth = nearer the camera).
    """

    def __init__(self, width: int, height: int, background: Color = (0, 0, 0)):
        if width < 1 or height < 1:
            raise ValueError(f"Framebuffer requires width and height >= 1, got {width}x{height}")
        self.width = width
        self.height = height
        self.background = tuple(int(c) for c in background)
        self.color = np.empty((width, height, 3), dtype=np.uint8)
        self.depth = np.empty((width, height), dtype=np.float64)
        self.clear()

    def clear(self) -> None:
        self.color[:, :, :] = self.background
        self.depth.fill(0.0)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Plot one pixel without a depth test; out-of-bounds writes are dropped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.color[x, y] = color

    def write(self, xs: np.ndarray, ys: np.ndarray, colors: np.ndarray, depths: np.ndarray) -> None:
        """Store colors and depths for pixels that already passed the depth test."""
        self.color[xs, ys] = colors
        self.depth[xs, ys] = depths

    def covered(self) -> np.ndarray:
        """Boolean (W, H) mask of pixels whose color differs from the background."""
        return np.any(self.color != np.array(self.background, dtype=np.uint8), axis=2)

    def to_image(self) -> Image.Image:
        # [x, y] -> [row, col], then flip rows so y grows downwards.
        rows = np.ascontiguousarray(self.color.transpose(1, 0, 2)[::-1])
        return Image.fromarray(rows)

    def save(self, path: str) -> None:
        try:
            self.to_image().save(path)
        except (OSError, ValueError) as exc:
            raise ImageWriteError(f"Could not write image to {path}: {exc}") from exc
        logger.info("Wrote %dx%d image to %s", self.width, self.height, path)
