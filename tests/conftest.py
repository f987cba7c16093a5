"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from softraster.obj_loader import parse  # noqa: E402

# Corners land on pixels (10,10), (50,10), (30,50) with the default camera
# and a 64x64 viewport: x_pix = 32 * x + 32.
SCREEN_TRIANGLE_OBJ = """\
# one triangle facing +z
v -0.6875 -0.6875 0.0
v 0.5625 -0.6875 0.0
v -0.0625 0.5625 0.0
vt 0.0 0.0
vt 1.0 0.0
vt 0.5 1.0
vn 0.0 0.0 1.0
f 1/1/1 2/2/1 3/3/1
"""

SCREEN_TRIANGLE_PIXELS = ((10.0, 10.0), (50.0, 10.0), (30.0, 50.0))


@pytest.fixture
def triangle_obj_text():
    return SCREEN_TRIANGLE_OBJ


@pytest.fixture
def triangle_mesh():
    return parse(SCREEN_TRIANGLE_OBJ)


@pytest.fixture
def triangle_obj_file(tmp_path):
    path = tmp_path / "triangle.obj"
    path.write_text(SCREEN_TRIANGLE_OBJ, encoding="utf-8")
    return path


@pytest.fixture
def footprint():
    """Return a function computing the (W, H) mask of pixel centers inside a 2D triangle."""

    def _footprint(width, height, corners=SCREEN_TRIANGLE_PIXELS):
        a, b, c = corners
        xs, ys = np.meshgrid(np.arange(width) + 0.5, np.arange(height) + 0.5, indexing="ij")

        def edge(p, q):
            return (q[0] - p[0]) * (ys - p[1]) - (q[1] - p[1]) * (xs - p[0])

        e0, e1, e2 = edge(a, b), edge(b, c), edge(c, a)
        return ((e0 >= 0) & (e1 >= 0) & (e2 >= 0)) | ((e0 <= 0) & (e1 <= 0) & (e2 <= 0))

    return _footprint


def solid(color):
    """Shader returning one fixed color for every pixel."""
    rgb = np.array(color, dtype=np.uint8)
    return lambda weights: np.tile(rgb, (len(weights), 1))


@pytest.fixture
def solid_shader():
    return solid
