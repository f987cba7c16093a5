import logging
from typing import Tuple

import numpy as np
from PIL import Image

from .errors import TextureLoadError

logger = logging.getLogger(__name__)


class Texture:
    """
    Read-only RGB texture.

    pixels has shape (H, W, 3), dtype=uint8, with row 0 at the bottom so
    that v = 0 addresses the bottom edge of the source image.
    """

    def __init__(self, pixels: np.ndarray):
        pixels = np.array(pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"Texture requires a non-empty (H, W, 3) array, got {pixels.shape}")
        self.pixels = pixels
        self.pixels.setflags(write=False)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def pixel_coords(self, uv: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Nearest-neighbour lookup coordinates for an (n, 2+) array of UVs.

        uv * (width, height), truncated towards zero, then clipped into
        [0, width-1] x [0, height-1] so u = 1.0 and interpolation round-off
        stay in bounds.
        """
        uv = np.asarray(uv, dtype=np.float64)
        tx = np.clip((uv[:, 0] * self.width).astype(np.int64), 0, self.width - 1)
        ty = np.clip((uv[:, 1] * self.height).astype(np.int64), 0, self.height - 1)
        return tx, ty

    def sample(self, uv: np.ndarray) -> np.ndarray:
        """Return an (n, 3) uint8 array of texels for an (n, 2+) array of UVs."""
        tx, ty = self.pixel_coords(uv)
        return self.pixels[ty, tx]


def load_texture(path: str) -> Texture:
    """Decode an image file into a Texture, flipped to a bottom-left origin."""
    try:
        with Image.open(path) as image:
            rgb = np.array(image.convert("RGB"), dtype=np.uint8)  # HxWx3
    except (OSError, ValueError) as exc:
        raise TextureLoadError(f"Could not load texture {path}: {exc}") from exc
    logger.info("Loaded texture %s (%dx%d)", path, rgb.shape[1], rgb.shape[0])
    return Texture(np.flipud(rgb).copy())
