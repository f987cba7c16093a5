import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


# ============================================================
#  Math primitives
# ============================================================

@dataclass(frozen=True)
class Vec3:
    """
    3D vector for positions, normals and texture coordinates.

    Used in:
      - OBJ vertices (positions), normals (vn) and UVs (vt, z unused)
      - screen-space triangle corners after the camera transform
      - light and view directions

    Immutable: operations return new objects.
    """
    x: float
    y: float
    z: float

    def __add__(self, o): return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)
    def __sub__(self, o): return Vec3(self.x - o.x, self.y - o.y, self.z - o.z)
    def __mul__(self, k: float): return Vec3(self.x * k, self.y * k, self.z * k)
    def __rmul__(self, k: float): return self.__mul__(k)
    def __neg__(self): return Vec3(-self.x, -self.y, -self.z)

    def dot(self, o) -> float:
        """Dot product (scalar product)."""
        return self.x * o.x + self.y * o.y + self.z * o.z

    def cross(self, o):
        """Cross product (vector product)."""
        return Vec3(
            self.y * o.z - self.z * o.y,
            self.z * o.x - self.x * o.z,
            self.x * o.y - self.y * o.x
        )

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalize(self):
        """Return normalized vector (length=1), or the zero vector if too short."""
        n = self.norm()
        if n <= 1e-12:
            return Vec3(0.0, 0.0, 0.0)
        return self * (1.0 / n)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @staticmethod
    def of(values: Sequence[float]) -> "Vec3":
        x, y, z = values
        return Vec3(float(x), float(y), float(z))


@dataclass(frozen=True)
class Vec4:
    """
    4D homogeneous vector.
    Used for matrix multiplication in 3D transforms and projections.
    """
    x: float
    y: float
    z: float
    w: float


class Mat4:
    """
    4x4 matrix (row-major).

    We use Mat4 for:
      - Model-view matrix (look-at basis + translation)
      - Projection matrix (pinhole, single -1/c coefficient)
      - Viewport matrix (clip -> pixel + depth range)

    Multiplication:
      - Matrix @ Matrix => Mat4
      - Matrix.mul_vec4(Vec4) => Vec4
    """
    def __init__(self, m: Optional[List[List[float]]] = None):
        self.m = m if m is not None else [[0.0]*4 for _ in range(4)]

    @staticmethod
    def identity():
        """Create identity matrix."""
        m = Mat4()
        for i in range(4):
            m.m[i][i] = 1.0
        return m

    @staticmethod
    def from_rows(rows: Sequence[Sequence[float]]) -> "Mat4":
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("Mat4 requires 4 rows of 4 values")
        return Mat4([[float(v) for v in row] for row in rows])

    def __matmul__(self, o: "Mat4") -> "Mat4":
        """Matrix multiplication (Mat4 @ Mat4)."""
        r = Mat4()
        for i in range(4):
            for j in range(4):
                s = 0.0
                for k in range(4):
                    s += self.m[i][k] * o.m[k][j]
                r.m[i][j] = s
        return r

    def __eq__(self, o) -> bool:
        return isinstance(o, Mat4) and self.m == o.m

    def __repr__(self) -> str:
        return f"Mat4({self.m!r})"

    def mul_vec4(self, v: Vec4) -> Vec4:
        """Multiply matrix by a Vec4 (Mat4 * Vec4)."""
        x = self.m[0][0]*v.x + self.m[0][1]*v.y + self.m[0][2]*v.z + self.m[0][3]*v.w
        y = self.m[1][0]*v.x + self.m[1][1]*v.y + self.m[1][2]*v.z + self.m[1][3]*v.w
        z = self.m[2][0]*v.x + self.m[2][1]*v.y + self.m[2][2]*v.z + self.m[2][3]*v.w
        w = self.m[3][0]*v.x + self.m[3][1]*v.y + self.m[3][2]*v.z + self.m[3][3]*v.w
        return Vec4(x, y, z, w)


def vec3_to_vec4(v: Vec3, w: float = 1.0) -> Vec4:
    """Convert Vec3 to homogeneous Vec4."""
    return Vec4(v.x, v.y, v.z, w)


def translate(tx, ty, tz) -> Mat4:
    """
    Translation matrix.

    Applies: (x, y, z) -> (x + tx, y + ty, z + tz)
    """
    m = Mat4.identity()
    m.m[0][3] = tx
    m.m[1][3] = ty
    m.m[2][3] = tz
    return m


# ============================================================
#  Triangle
# ============================================================

@dataclass
class Triangle:
    """
    Three corners a, b, c; the order defines the winding.

    Mutable on purpose: Camera.transform overwrites the corners in place
    with screen-space coordinates (x, y in pixels, z = mapped depth).
    """
    a: Vec3
    b: Vec3
    c: Vec3

    def corners(self) -> Tuple[Vec3, Vec3, Vec3]:
        return (self.a, self.b, self.c)

    def normal(self) -> Vec3:
        """Unit normal (b - a) x (c - a); zero vector for degenerate triangles."""
        return (self.b - self.a).cross(self.c - self.a).normalize()

    def bounding_box(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Axis-aligned ((x_min, y_min), (x_max, y_max)) of the x/y components."""
        xs = (self.a.x, self.b.x, self.c.x)
        ys = (self.a.y, self.b.y, self.c.y)
        return (min(xs), min(ys)), (max(xs), max(ys))
