import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import IndexOutOfRange, ParseError
from .vecmath import Vec3

logger = logging.getLogger(__name__)


# ============================================================
#  OBJ loader
# ============================================================

@dataclass(frozen=True)
class Face:
    """
    Single triangle face, indices into the mesh pools:
      - v:  vertex positions
      - vt: texture coords
      - vn: vertex normals

    Indices are 0-based (we subtract 1 when parsing OBJ) and are checked
    against the pools before a Face is built.
    """
    v: Tuple[int, int, int]
    vt: Tuple[int, int, int]
    vn: Tuple[int, int, int]


class Mesh:
    """
    Triangular mesh: shared position / UV / normal pools plus faces.

    Built once by the loader, read-only afterwards.
    """
    def __init__(self, verts: Sequence[Vec3], uvs: Sequence[Vec3],
                 normals: Sequence[Vec3], faces: Sequence[Face]):
        self.verts: Tuple[Vec3, ...] = tuple(verts)
        self.uvs: Tuple[Vec3, ...] = tuple(uvs)
        self.normals: Tuple[Vec3, ...] = tuple(normals)
        self.faces: Tuple[Face, ...] = tuple(faces)

    def __len__(self) -> int:
        return len(self.faces)

    def __iter__(self) -> Iterator[Face]:
        return iter(self.faces)

    def face_verts(self, face: Face) -> Tuple[Vec3, Vec3, Vec3]:
        i0, i1, i2 = face.v
        return self.verts[i0], self.verts[i1], self.verts[i2]

    def face_uvs(self, face: Face) -> Tuple[Vec3, Vec3, Vec3]:
        i0, i1, i2 = face.vt
        return self.uvs[i0], self.uvs[i1], self.uvs[i2]

    def face_normals(self, face: Face) -> Tuple[Vec3, Vec3, Vec3]:
        i0, i1, i2 = face.vn
        return self.normals[i0], self.normals[i1], self.normals[i2]


_POOL_RECORDS = ("v", "vt", "vn")


def _parse_floats(line_number: int, line: str, fields: List[str],
                  minimum: int, maximum: Optional[int] = None) -> List[float]:
    if len(fields) < minimum or (maximum is not None and len(fields) > maximum):
        upper = maximum if maximum is not None else "n"
        raise ParseError(line_number, line, f"expected {minimum}..{upper} numbers, got {len(fields)}")
    try:
        return [float(f) for f in fields]
    except ValueError as exc:
        raise ParseError(line_number, line, "non-numeric field") from exc


def _parse_pool_record(line_number: int, line: str, tag: str, fields: List[str]) -> Vec3:
    """
    Parse one v / vt / vn record.

      v  x y z ...   -> position, trailing fields (w, vertex colors) ignored
      vt u v [w]     -> texture coordinate, z = 0.0 when absent
      vn x y z ...   -> normal, not necessarily unit length, trailing fields ignored
    """
    if tag == "vt":
        values = _parse_floats(line_number, line, fields, 2, 3)
        if len(values) == 2:
            values.append(0.0)
        return Vec3(values[0], values[1], values[2])
    values = _parse_floats(line_number, line, fields, 3)
    return Vec3(values[0], values[1], values[2])


def _parse_face_record(line_number: int, line: str, fields: List[str]) -> List[Tuple[int, int, int]]:
    """Parse `f i/j/k i/j/k i/j/k` into three 1-based (v, vt, vn) triplets."""
    if len(fields) != 3:
        raise ParseError(line_number, line, f"only triangles are supported, got {len(fields)} corners")
    corners = []
    for corner in fields:
        comps = corner.split("/")
        if len(comps) != 3:
            raise ParseError(line_number, line, f"corner {corner!r} is not v/vt/vn")
        try:
            corners.append((int(comps[0]), int(comps[1]), int(comps[2])))
        except ValueError as exc:
            raise ParseError(line_number, line, f"corner {corner!r} has a non-integer index") from exc
    return corners


def _resolve(line_number: int, pool: str, index: int, size: int) -> int:
    if index < 1 or index > size:
        raise IndexOutOfRange(line_number, pool, index, size)
    return index - 1


def parse(text: str) -> Mesh:
    """
    Minimal OBJ parser for triangular meshes.

    Supported:
      v  x y z
      vt u v [w]
      vn x y z
      f  v/vt/vn v/vt/vn v/vt/vn  (triangles only)

    Two passes: the first collects the v / vt / vn pools in file order, the
    second resolves each face against the complete pools. Malformed lines
    are logged and skipped; a face pointing outside a pool raises
    IndexOutOfRange.
    """
    verts: List[Vec3] = []
    uvs: List[Vec3] = []
    normals: List[Vec3] = []
    pools = {"v": verts, "vt": uvs, "vn": normals}
    face_lines: List[Tuple[int, str, List[str]]] = []
    skipped = 0

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        tag = parts[0]
        if tag in _POOL_RECORDS:
            try:
                pools[tag].append(_parse_pool_record(line_number, line, tag, parts[1:]))
            except ParseError as exc:
                logger.debug("Skipping malformed record: %s", exc)
                skipped += 1
        elif tag == "f":
            face_lines.append((line_number, line, parts[1:]))
        else:
            skipped += 1

    faces: List[Face] = []
    for line_number, line, fields in face_lines:
        try:
            corners = _parse_face_record(line_number, line, fields)
        except ParseError as exc:
            logger.debug("Skipping malformed face: %s", exc)
            skipped += 1
            continue
        v_idx = tuple(_resolve(line_number, "v", c[0], len(verts)) for c in corners)
        vt_idx = tuple(_resolve(line_number, "vt", c[1], len(uvs)) for c in corners)
        vn_idx = tuple(_resolve(line_number, "vn", c[2], len(normals)) for c in corners)
        faces.append(Face(v_idx, vt_idx, vn_idx))

    logger.info(
        "Parsed mesh: %d vertices, %d uvs, %d normals, %d faces (%d lines skipped)",
        len(verts), len(uvs), len(normals), len(faces), skipped,
    )
    return Mesh(verts, uvs, normals, faces)


def load(path: str) -> Mesh:
    """Read an OBJ file and parse it."""
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        text = f.read()
    logger.debug("Loaded %s (%d bytes)", path, len(text))
    return parse(text)
