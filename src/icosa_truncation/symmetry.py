"""
Face symmetry for an icosahedron face.

An icosahedron face splits into six LCD triangles ("sectors") that are images
of each other under the dihedral group generated by a 120 degree rotation
about the face normal and a mirror across the normal plane through one corner.

Sectors are numbered counter-clockwise, looking down the face normal in the
face ("global") frame::

                  ^ y
                  |
                  +
                . | .
              .   |   .
            .  3  |  2  .
          .       |       .
        .  4      +     1   .   -----> x
      .        5  |  0        .
    + . . . . . . . . . . . . . +

Vertices are placed in the "local" frame, where the face lies across the
equator with its center at azimuth 0 and the icosahedron vertex above it
at inclination ``atan(2)``.
"""

import logging
import math
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from .models import SECTOR_COUNT, SphericalCoord, Vertex
from .transforms import (
    apply,
    cartesian_to_spherical,
    identity,
    point,
    rotation_matrix_from_triangle,
    scale_matrix,
    spherical_to_cartesian,
)

logger = logging.getLogger(__name__)


class Sector(IntEnum):
    """The six LCD triangles of a face."""

    BOTTOM_RIGHT = 0
    RIGHT_LOWER = 1
    RIGHT_UPPER = 2
    LEFT_UPPER = 3
    LEFT_LOWER = 4
    BOTTOM_LEFT = 5


# Interior point of sector 0 in the face frame, used to classify group elements
SECTOR_PROBE = point(0.25, -0.25 * math.sqrt(3.0), 1.0)


@dataclass(frozen=True)
class FaceSymmetry:
    """Frame matrices and sector-to-sector transforms of one face.

    Attributes:
        local_to_global: Maps local (equatorial) points into the face frame
        global_to_local: Inverse of ``local_to_global``
        sector_rotations: ``(m, mt)`` pairs for 0, 120 and 240 degrees
        mirror: Mirror of the face-frame x axis
        elements: Group element mapping sector 0 onto sector ``k``, per ``k``
        table: 6x6x4x4 array, ``table[i, j]`` maps sector ``i`` to ``j``
    """

    local_to_global: np.ndarray
    global_to_local: np.ndarray
    sector_rotations: tuple[tuple[np.ndarray, np.ndarray], ...]
    mirror: np.ndarray
    elements: tuple[np.ndarray, ...]
    table: np.ndarray

    def transform(self, src: int, dst: int) -> np.ndarray:
        return self.table[Sector(src), Sector(dst)]

    def exchange(self, p: np.ndarray, src: int, dst: int) -> np.ndarray:
        """Move a face-frame point from sector ``src`` to sector ``dst``."""
        return apply(p, self.transform(src, dst))

    def to_global(self, points: np.ndarray) -> np.ndarray:
        return apply(points, self.local_to_global)

    def to_local(self, points: np.ndarray) -> np.ndarray:
        return apply(points, self.global_to_local)

    def closure_error(self) -> float:
        """Largest deviation of ``T[i,j] @ T[j,k]`` from ``T[i,k]``."""
        worst = 0.0
        for i in range(SECTOR_COUNT):
            for j in range(SECTOR_COUNT):
                for k in range(SECTOR_COUNT):
                    composed = self.table[i, j] @ self.table[j, k]
                    worst = max(worst, float(np.max(np.abs(composed - self.table[i, k]))))
        return worst


def face_corners() -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Corners of the equatorial face in the local frame.

    Returns:
        ``(right, top, left)``: lower corner at +36 degrees azimuth, upper
        corner at azimuth 0 and lower corner at -36 degrees
    """
    upper = math.atan(2.0)
    lower = math.pi - upper
    top = spherical_to_cartesian(SphericalCoord(1.0, 0.0, upper))
    left = spherical_to_cartesian(SphericalCoord(1.0, math.radians(-36.0), lower))
    right = spherical_to_cartesian(SphericalCoord(1.0, math.radians(36.0), lower))
    return right, top, left


def build_face_transforms() -> tuple[np.ndarray, np.ndarray]:
    """Local-to-global and global-to-local matrices for the face."""
    right, top, left = face_corners()
    return rotation_matrix_from_triangle(right, top, left)


def build_sector_rotations() -> tuple[tuple[np.ndarray, np.ndarray], ...]:
    """Rotations about the face normal by 0, 120 and 240 degrees.

    Each is read off the edges of a unit equilateral triangle centred on the
    origin, starting the x edge at successive corners.
    """
    h = math.sqrt(3.0)
    corners = [
        point(0.5, -h / 6, 0.0),
        point(0.0, h / 3, 0.0),
        point(-0.5, -h / 6, 0.0),
    ]
    rotations = []
    for k in range(3):
        p0, p1, p2 = corners[k:] + corners[:k]
        rotations.append(rotation_matrix_from_triangle(p0, p1, p2))
    return tuple(rotations)


def generate_group(generators: list[np.ndarray], atol: float = 1e-9) -> list[np.ndarray]:
    """Close a set of matrices under multiplication, identity first."""
    elements = [identity()]
    frontier = [identity()]

    while frontier:
        discovered = []
        for g in frontier:
            for h in generators:
                candidate = g @ h
                if not any(np.allclose(candidate, e, atol=atol) for e in elements):
                    elements.append(candidate)
                    discovered.append(candidate)
        frontier = discovered

    return elements


def sector_of(p: np.ndarray) -> Sector:
    """Sector containing a face-frame point, from its angle about the normal."""
    angle = math.degrees(math.atan2(float(p[1]), float(p[0])))
    return Sector(int(math.floor((angle + 90.0) / 60.0)) % SECTOR_COUNT)


def build_sector_table(
    rotate: np.ndarray,
    mirror: np.ndarray
) -> tuple[tuple[np.ndarray, ...], np.ndarray]:
    """Build the 6x6 sector transform table from two generators.

    The group acts simply transitively on the sectors, so each sector ``k``
    has exactly one element ``G[k]`` carrying sector 0 onto it, and
    ``T[i, j] = inverse(G[i]) @ G[j]``.

    Args:
        rotate: 120 degree rotation about the face normal
        mirror: Mirror across the normal plane through a corner

    Returns:
        ``(elements, table)``
    """
    group = generate_group([rotate, mirror])
    if len(group) != SECTOR_COUNT:
        raise ValueError(f"Generators produce a group of order {len(group)}, expected 6")

    by_sector: dict[Sector, np.ndarray] = {}
    for g in group:
        by_sector[sector_of(apply(SECTOR_PROBE, g))] = g
    if len(by_sector) != SECTOR_COUNT:
        raise ValueError("Group elements do not cover every sector")

    elements = tuple(by_sector[Sector(k)] for k in range(SECTOR_COUNT))

    table = np.empty((SECTOR_COUNT, SECTOR_COUNT, 4, 4))
    for i in range(SECTOR_COUNT):
        for j in range(SECTOR_COUNT):
            # elements are orthogonal: the transpose is the inverse
            table[i, j] = elements[i].T @ elements[j]
        table[i, i] = identity()

    return elements, table


def build_face_symmetry() -> FaceSymmetry:
    """Build every matrix needed to replicate vertices across a face."""
    tm, tmt = build_face_transforms()
    rotations = build_sector_rotations()
    mirror = scale_matrix(-1.0, 1.0, 1.0)

    # mt of the 120 degree basis turns points counter-clockwise by 120 degrees
    elements, table = build_sector_table(rotations[1][1], mirror)

    symmetry = FaceSymmetry(
        local_to_global=tm,
        global_to_local=tmt,
        sector_rotations=rotations,
        mirror=mirror,
        elements=elements,
        table=table,
    )
    logger.debug("Sector table closure error: %.3e", symmetry.closure_error())
    return symmetry


def replicate(symmetry: FaceSymmetry, vertex: Vertex, sector: int) -> Vertex:
    """Fill all six sectors of a vertex from the one in ``sector``.

    The known point is taken to the face frame, copied into each other
    sector with the table, and every copy is brought back to the local
    frame with fresh spherical coordinates.

    Args:
        symmetry: Face symmetry
        vertex: Vertex with ``sector`` populated
        sector: Index of the known sector

    Returns:
        The same vertex, now complete
    """
    sector = Sector(sector)
    if not vertex.is_populated(sector):
        raise ValueError(f"Cannot replicate from unpopulated sector {sector.name}")

    known = symmetry.to_global(vertex.points[sector])

    images = np.empty((SECTOR_COUNT, 4))
    images[sector] = known
    for i in range(SECTOR_COUNT):
        if i == sector:
            continue
        images[i] = symmetry.exchange(known, sector, i)

    local = symmetry.to_local(images)
    for i in range(SECTOR_COUNT):
        vertex.set(i, local[i], cartesian_to_spherical(local[i]))

    return vertex
