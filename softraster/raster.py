import math
from typing import Callable, Tuple

import numpy as np
from numba import njit

from .framebuffer import Framebuffer
from .vecmath import Triangle

# Signed-area denominators below this are treated as zero-area triangles.
DEGENERATE_EPS = 1e-12

# (n, 3) barycentric weights (s, t, u) -> (n, 3) uint8 colors
ShadeFn = Callable[[np.ndarray], np.ndarray]


# ============================================================
#  Numba kernels
# ============================================================

@njit(cache=True)
def barycentric(ax, ay, bx, by, cx, cy, px, py):
    """
    Barycentric weights (s, t, u) of point (px, py) in screen-space triangle
    (A, B, C), using the area-ratio formula:

      den = (by - cy)(ax - cx) + (cx - bx)(ay - cy)
      s   = ((by - cy)(px - cx) + (cx - bx)(py - cy)) / den
      t   = ((cy - ay)(px - cx) + (ax - cx)(py - cy)) / den
      u   = 1 - s - t

    s weights A, t weights B, u weights C. If the triangle is degenerate
    the result is (-1, -1, -1), which every inside test rejects.
    """
    den = (by - cy) * (ax - cx) + (cx - bx) * (ay - cy)
    if abs(den) < DEGENERATE_EPS:
        return -1.0, -1.0, -1.0
    s = ((by - cy) * (px - cx) + (cx - bx) * (py - cy)) / den
    t = ((cy - ay) * (px - cx) + (ax - cx) * (py - cy)) / den
    return s, t, 1.0 - s - t


@njit(cache=True)
def _cover_triangle(depth, ax, ay, az, bx, by, bz, cx, cy, cz):
    """
    Find the pixels a triangle covers and wins the depth test on.

    - bounding box clamped to [0, W-1] x [0, H-1]
    - pixel centers sampled at (x + 0.5, y + 0.5)
    - inside iff s >= 0, t >= 0, s + t <= 1
    - z = s*az + t*bz + u*cz must be strictly greater than depth[x, y]

    depth is only read here; the caller writes winners back.
    Returns (xs, ys, weights, zs) trimmed to the number of winners.
    """
    W, H = depth.shape
    no_i = np.empty(0, dtype=np.int64)
    no_w = np.empty((0, 3), dtype=np.float64)
    no_z = np.empty(0, dtype=np.float64)

    for v in (ax, ay, az, bx, by, bz, cx, cy, cz):
        if not math.isfinite(v):
            return no_i, no_i, no_w, no_z

    den = (by - cy) * (ax - cx) + (cx - bx) * (ay - cy)
    if abs(den) < DEGENERATE_EPS:
        return no_i, no_i, no_w, no_z

    minx = int(max(0.0, math.floor(min(ax, bx, cx))))
    maxx = int(min(W - 1.0, math.ceil(max(ax, bx, cx))))
    miny = int(max(0.0, math.floor(min(ay, by, cy))))
    maxy = int(min(H - 1.0, math.ceil(max(ay, by, cy))))
    if minx > maxx or miny > maxy:
        return no_i, no_i, no_w, no_z

    n = (maxx - minx + 1) * (maxy - miny + 1)
    xs = np.empty(n, dtype=np.int64)
    ys = np.empty(n, dtype=np.int64)
    weights = np.empty((n, 3), dtype=np.float64)
    zs = np.empty(n, dtype=np.float64)
    count = 0

    for y in range(miny, maxy + 1):
        py = y + 0.5
        for x in range(minx, maxx + 1):
            px = x + 0.5
            s, t, u = barycentric(ax, ay, bx, by, cx, cy, px, py)
            if s < 0.0 or t < 0.0 or s + t > 1.0:
                continue

            z = s*az + t*bz + u*cz
            if z <= depth[x, y]:
                continue

            xs[count] = x
            ys[count] = y
            weights[count, 0] = s
            weights[count, 1] = t
            weights[count, 2] = u
            zs[count] = z
            count += 1

    return xs[:count], ys[:count], weights[:count], zs[:count]


# ============================================================
#  Triangle / line rasterization
# ============================================================

def rasterize(triangle: Triangle, framebuffer: Framebuffer, shade: ShadeFn) -> int:
    """
    Fill a screen-space triangle into the framebuffer.

    shade is called once per triangle with the (n, 3) barycentric weights of
    every pixel that passed the depth test and must return (n, 3) uint8
    colors. Each pixel appears at most once per call, so color and depth are
    written together for exactly the pixels that won.

    Degenerate (zero-area) and non-finite triangles write nothing.
    Returns the number of pixels written.
    """
    (x_min, y_min), (x_max, y_max) = triangle.bounding_box()
    if x_max < 0.0 or y_max < 0.0 or x_min >= framebuffer.width or y_min >= framebuffer.height:
        return 0

    a, b, c = triangle.corners()
    xs, ys, weights, depths = _cover_triangle(
        framebuffer.depth,
        float(a.x), float(a.y), float(a.z),
        float(b.x), float(b.y), float(b.z),
        float(c.x), float(c.y), float(c.z),
    )
    if xs.size == 0:
        return 0
    colors = shade(weights)
    framebuffer.write(xs, ys, colors, depths)
    return int(xs.size)


def draw_line(x0, y0, x1, y1, set_pixel, color):
    """
    Bresenham integer line drawing.

    Parameters:
      x0, y0, x1, y1  - endpoints (ints)
      set_pixel(x,y,color) - callback for plotting
      color - RGB tuple

    Used in wireframe mode to draw triangle edges.
    """
    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = abs(y1 - y0)
    error2 = 0
    y = y0
    ystep = 1 if y1 > y0 else -1

    for x in range(x0, x1 + 1):
        if steep:
            set_pixel(y, x, color)
        else:
            set_pixel(x, y, color)
        error2 += 2 * dy
        if error2 > dx:
            y += ystep
            error2 -= 2 * dx


def to_pixel(x: float, y: float) -> Tuple[int, int]:
    """Truncate a screen-space point to integer pixel coordinates."""
    return int(math.floor(x)), int(math.floor(y))
