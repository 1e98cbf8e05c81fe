"""
Truncation Geometry Engine.

Places geodesic vertices on an icosahedron face with spherical trigonometry.
Each placement fills one sector of a vertex and replicates it to the other
five, so every vertex is always held in all six symmetric positions.
"""

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from .config import DEFAULT_SETTINGS, REFERENCE_ANGLE_A, REFERENCE_ANGLE_B, SolverSettings
from .models import ReferenceTriangle, SphericalCoord, VertexTable
from .symmetry import FaceSymmetry, Sector, build_face_symmetry, replicate
from .transforms import spherical_to_cartesian
from .trig import solve_bcC

logger = logging.getLogger(__name__)


@dataclass
class SolverContext:
    """State threaded through a configuration run.

    The symmetry and reference triangle are built once and shared between
    runs; each run gets its own vertex table.
    """

    symmetry: FaceSymmetry
    reference: ReferenceTriangle
    settings: SolverSettings = DEFAULT_SETTINGS
    vertices: VertexTable = field(default_factory=VertexTable)

    @classmethod
    def create(cls, settings: SolverSettings = DEFAULT_SETTINGS) -> 'SolverContext':
        """Build the face symmetry and reference triangle."""
        reference = ReferenceTriangle.from_angles(REFERENCE_ANGLE_A, REFERENCE_ANGLE_B)
        logger.info("Reference triangle a=%f b=%f c=%f", *reference.degrees())
        return cls(symmetry=build_face_symmetry(), reference=reference, settings=settings)

    def new_run(self) -> 'SolverContext':
        """Context sharing the fixed matrices with an empty vertex table."""
        return SolverContext(
            symmetry=self.symmetry,
            reference=self.reference,
            settings=self.settings,
        )

    def inclination(self, role: int, sector: int) -> float:
        return self.vertices[role].inclination(Sector(sector))

    def local_point(self, role: int, sector: int) -> np.ndarray:
        return self.vertices.point(role, Sector(sector))

    def global_points(self, picks: list[tuple[int, int]]) -> np.ndarray:
        """Face-frame positions for a list of ``(role, sector)`` picks."""
        local = np.array([self.local_point(role, sector) for role, sector in picks])
        return self.symmetry.to_global(local)


def place_by_spherical(
    context: SolverContext,
    role: int,
    sector: int,
    azimuth: float,
    inclination: float
) -> None:
    """Place a vertex at a unit spherical coordinate and replicate it."""
    sector = Sector(sector)
    sc = SphericalCoord(radius=1.0, azimuth=azimuth, inclination=inclination)

    vertex = context.vertices[role]
    vertex.clear()
    vertex.set(sector, spherical_to_cartesian(sc), sc)
    replicate(context.symmetry, vertex, sector)


def place_by_triangle(
    context: SolverContext,
    role: int,
    sector: int,
    b: float,
    c: float,
    C: float
) -> None:
    """Place a vertex by solving the oblique triangle ``b, c, C``.

    The solved triangle's ``c`` becomes the inclination and its ``A`` the
    azimuth of the new point.
    """
    st = solve_bcC(b, c, C)
    place_by_spherical(context, role, sector, st.A, st.c)


def place_from_vertex(
    context: SolverContext,
    role: int,
    sector: int,
    source_role: int,
    source_sector: int,
    b: float,
    C: float
) -> None:
    """Place a vertex on the same ring as an already placed one.

    Args:
        context: Solver context
        role: Destination vertex
        sector: Destination sector
        source_role: Vertex whose inclination supplies ``c``
        source_sector: Sector of the source vertex to read
        b: Fixed side of the triangle
        C: Fixed angle opposite ``c``
    """
    place_by_triangle(context, role, sector, b, context.inclination(source_role, source_sector), C)


def level_report(
    context: SolverContext,
    levels: list[list[tuple[int, int]]]
) -> list[tuple[str, list[float]]]:
    """Inclinations in degrees for groups of vertices meant to share a ring.

    Args:
        context: Solved context
        levels: Groups of ``(role, sector)`` picks

    Returns:
        ``(label, inclinations)`` per group, label like ``"2,3 2,2"``
    """
    report = []
    for group in levels:
        label = ' '.join(f"{int(role)},{int(sector)}" for role, sector in group)
        values = [math.degrees(context.inclination(role, sector)) for role, sector in group]
        report.append((label, values))
    return report
