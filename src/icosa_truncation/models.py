"""
Data classes for the truncation solver.

Angles are radians throughout. Points are homogeneous ``(x, y, z, w)`` rows.
"""

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

SECTOR_COUNT = 6
VERTEX_CAPACITY = 20


@dataclass
class SphericalCoord:
    """Physics-convention spherical coordinate.

    Inclination is measured from +z, azimuth from +x in the xy-plane.
    """

    radius: float = 1.0
    azimuth: float = 0.0
    inclination: float = 0.0


@dataclass
class SphericalTriangle:
    """Sides ``a, b, c`` and their opposite angles ``A, B, C``."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    A: float = 0.0
    B: float = 0.0
    C: float = 0.0


@dataclass(frozen=True)
class ReferenceTriangle:
    """The lowest-common-denominator triangle of an icosahedron face.

    ``A`` sits at an icosahedron vertex, ``B`` at the face center and the
    right angle at an edge midpoint. ``c`` is the vertex-to-center arc,
    ``b`` half an edge and ``a`` the center-to-edge arc.
    """

    a: float
    b: float
    c: float
    A: float
    B: float
    C: float = math.pi / 2

    @classmethod
    def from_angles(cls, A: float, B: float) -> 'ReferenceTriangle':
        """Derive the sides of a right spherical triangle from two angles."""
        return cls(
            # cos A = cos a sin B
            a=math.acos(math.cos(A) / math.sin(B)),
            # cos B = cos b sin A
            b=math.acos(math.cos(B) / math.sin(A)),
            # cos c = cot A cot B
            c=math.acos(1.0 / (math.tan(A) * math.tan(B))),
            A=A,
            B=B,
        )

    def degrees(self) -> tuple[float, float, float]:
        """Sides ``(a, b, c)`` in degrees."""
        return math.degrees(self.a), math.degrees(self.b), math.degrees(self.c)


@dataclass
class Vertex:
    """One physical point held in all six symmetric sector positions."""

    points: np.ndarray = field(
        default_factory=lambda: np.full((SECTOR_COUNT, 4), np.nan)
    )
    coords: list[SphericalCoord | None] = field(
        default_factory=lambda: [None] * SECTOR_COUNT
    )

    def is_populated(self, sector: int) -> bool:
        return self.coords[sector] is not None

    @property
    def is_complete(self) -> bool:
        return all(sc is not None for sc in self.coords)

    @property
    def is_empty(self) -> bool:
        return all(sc is None for sc in self.coords)

    def set(self, sector: int, p: np.ndarray, sc: SphericalCoord) -> None:
        """Place the point for a single sector."""
        self.points[sector] = p
        self.coords[sector] = sc

    def clear(self) -> None:
        self.points[:] = np.nan
        self.coords = [None] * SECTOR_COUNT

    def inclination(self, sector: int) -> float:
        sc = self.coords[sector]
        if sc is None:
            raise ValueError(f"Sector {int(sector)} of vertex is not populated")
        return sc.inclination


class VertexTable:
    """Fixed-capacity table of vertices addressed by role."""

    def __init__(self, capacity: int = VERTEX_CAPACITY):
        self._vertices = [Vertex() for _ in range(capacity)]

    def __getitem__(self, role: int) -> Vertex:
        return self._vertices[role]

    def populated(self) -> list[int]:
        """Indices of vertices with at least one placed sector."""
        return [i for i, v in enumerate(self._vertices) if not v.is_empty]

    def point(self, role: int, sector: int) -> np.ndarray:
        return self._vertices[role].points[sector]


@dataclass
class SectorMesh:
    """Triangulated patch produced from a solved configuration.

    Attributes:
        vertices: Nx3 array of vertex positions
        faces: List of triangles (vertex index triples)
        name: Configuration key the mesh came from
    """

    vertices: np.ndarray
    faces: list[list[int]]
    name: str = ''

    def get_edges(self) -> list[tuple[int, int]]:
        """Get unique edges as sorted vertex index pairs."""
        edges = set()
        for face in self.faces:
            n = len(face)
            for i in range(n):
                a, b = face[i], face[(i + 1) % n]
                edges.add((min(a, b), max(a, b)))
        return sorted(edges)

    def euler_characteristic(self) -> int:
        """V - E + F (1 for a disk-shaped patch)."""
        return len(self.vertices) - len(self.get_edges()) + len(self.faces)

    def edge_lengths(self) -> np.ndarray:
        """Chord length of every unique edge."""
        edges = self.get_edges()
        if not edges:
            return np.zeros(0)
        idx = np.array(edges)
        return np.linalg.norm(self.vertices[idx[:, 0]] - self.vertices[idx[:, 1]], axis=1)

    def is_valid(self) -> bool:
        """Check every face is a triangle of distinct in-range indices."""
        n = len(self.vertices)
        if n == 0 or not self.faces:
            return False
        for face in self.faces:
            if len(face) != 3 or len(set(face)) != 3:
                return False
            if any(i < 0 or i >= n for i in face):
                return False
        return bool(np.all(np.isfinite(self.vertices)))

    def to_off(self, precision: int = 9) -> str:
        """Serialize to OFF text."""
        lines = ['OFF', f"{len(self.vertices)} {len(self.faces)} 0"]
        for x, y, z in self.vertices:
            lines.append(f"{x:.{precision}f} {y:.{precision}f} {z:.{precision}f}")
        for face in self.faces:
            lines.append(' '.join([str(len(face))] + [str(i) for i in face]))
        return '\n'.join(lines) + '\n'

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'vertices': self.vertices.tolist(),
            'faces': [list(f) for f in self.faces],
        }
