"""
Class I truncation configurations, (2,0) through (7,0).

Each configuration is a fixed construction over a vertex table. Vertices are
named by where their sector 0 copy sits in the subdivided face:

- ``CORNER``: the icosahedron vertex at the lower right
- ``EDGE_n``: bottom edge point ``n`` steps from the corner
- ``EDGE_MIDPOINT``: bottom edge midpoint
- ``ROWk_n``: point in row ``k`` above the bottom edge, ``n`` steps in from
  the right edge
- ``CENTER``: face center

Every placement lands vertices on rings of constant inclination about the
local pole (the neighbouring icosahedron vertex), which is what makes the
resulting domes truncatable on planar levels. Frequencies 5 and up need one
or more free angles solved numerically; (7,0) cannot make every ring planar
at once and comes in three variants.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from .config import (
    SEED_5V,
    SEED_6V_A,
    SEED_6V_B,
    SEED_7V_CLOSING,
    SEED_7V_FIRST,
)
from .geometry import (
    SolverContext,
    level_report,
    place_by_spherical,
    place_by_triangle,
    place_from_vertex,
)
from .solver import RootResult, find_root
from .symmetry import Sector

logger = logging.getLogger(__name__)

S0 = Sector.BOTTOM_RIGHT
S1 = Sector.RIGHT_LOWER
S2 = Sector.RIGHT_UPPER
S3 = Sector.LEFT_UPPER
S4 = Sector.LEFT_LOWER
S5 = Sector.BOTTOM_LEFT

# Angle at an icosahedron vertex between the edge to the pole and the
# face edge running down the right side
EDGE_ANGLE = math.radians(144.0)
RIGHT_CORNER_AZIMUTH = math.radians(36.0)


class Vertex2V(IntEnum):
    EDGE_MIDPOINT = 0
    CORNER = 1


class Vertex3V(IntEnum):
    EDGE_1 = 0
    CORNER = 1
    CENTER = 2


class Vertex4V(IntEnum):
    EDGE_MIDPOINT = 0
    EDGE_1 = 1
    CORNER = 2
    ROW1_1 = 3


class Vertex5V(IntEnum):
    EDGE_2 = 0
    EDGE_1 = 1
    CORNER = 2
    ROW1_2 = 3
    ROW1_1 = 4


class Vertex6V(IntEnum):
    EDGE_MIDPOINT = 0
    EDGE_2 = 1
    EDGE_1 = 2
    CORNER = 3
    ROW1_2 = 4
    ROW1_1 = 5
    CENTER = 6


class Vertex7V(IntEnum):
    EDGE_3 = 0
    EDGE_2 = 1
    EDGE_1 = 2
    CORNER = 3
    ROW1_3 = 4
    ROW1_2 = 5
    ROW1_1 = 6
    ROW2_2 = 7


@dataclass(frozen=True)
class Patch:
    """Vertices and triangles covering one sector's worth of the face.

    Attributes:
        picks: Ordered ``(vertex, sector)`` pairs, one per mesh vertex
        faces: Triangles indexing into ``picks``
    """

    picks: tuple[tuple[int, int], ...]
    faces: tuple[tuple[int, int, int], ...]


@dataclass(frozen=True)
class Configuration:
    """A solvable class I configuration."""

    key: str
    name: str
    frequency: int
    variant: str
    description: str
    solve: Callable[[SolverContext], list[RootResult]]
    patch: Patch
    filename: str


def _center(context: SolverContext) -> float:
    """Inclination of the face center."""
    ref = context.reference
    return ref.b * 2 + ref.c


def _edge_midpoint(context: SolverContext) -> float:
    ref = context.reference
    return ref.b * 2 + ref.c + ref.a


def _corner(context: SolverContext) -> float:
    ref = context.reference
    return (ref.c + ref.a) * 2


def _edge(context: SolverContext) -> float:
    """Arc from the pole to the upper icosahedron vertex of the face."""
    return context.reference.b * 2


def _announce(frequency: int, variant: str = '') -> None:
    suffix = f" ({variant})" if variant else ''
    logger.info("Class I Icosahedron (%d,0) - compute truncation configuration%s", frequency, suffix)


# =============================================================================
# Fully determined configurations
# =============================================================================

def solve_2v(context: SolverContext) -> list[RootResult]:
    """Standard 2 frequency icosahedron; no free parameter."""
    V = Vertex2V
    _announce(2)

    place_by_spherical(context, V.EDGE_MIDPOINT, S0, 0.0, _edge_midpoint(context))
    place_by_spherical(context, V.CORNER, S0, RIGHT_CORNER_AZIMUTH, _corner(context))
    return []


def solve_3v(context: SolverContext) -> list[RootResult]:
    """Standard 3 frequency icosahedron; no free parameter."""
    V = Vertex3V
    _announce(3)

    place_by_spherical(context, V.CENTER, S0, 0.0, _center(context))
    place_by_spherical(context, V.CORNER, S0, RIGHT_CORNER_AZIMUTH, _corner(context))
    place_from_vertex(context, V.EDGE_1, S1, V.CENTER, S0, _edge(context), EDGE_ANGLE)
    return []


def solve_4v(context: SolverContext) -> list[RootResult]:
    """Standard 4 frequency icosahedron; no free parameter."""
    V = Vertex4V
    _announce(4)

    place_by_spherical(context, V.CORNER, S0, RIGHT_CORNER_AZIMUTH, _corner(context))
    # right edge midpoint lies on the equator
    place_by_triangle(context, V.EDGE_MIDPOINT, S1, _edge(context), math.pi / 2, EDGE_ANGLE)
    place_by_spherical(context, V.ROW1_1, S2, 0.0, math.pi / 2)
    place_from_vertex(context, V.EDGE_1, S1, V.ROW1_1, S0, _edge(context), EDGE_ANGLE)
    return []


# =============================================================================
# Configurations with free parameters
# =============================================================================

def solve_5v(context: SolverContext) -> list[RootResult]:
    """5 frequency icosahedron with one free inclination offset."""
    V = Vertex5V
    _announce(5)

    def residual(offset: float) -> float:
        place_by_spherical(context, V.ROW1_2, S0, 0.0, _center(context) + offset)
        place_from_vertex(context, V.ROW1_1, S0, V.ROW1_2, S0, _center(context), math.radians(120.0))
        place_from_vertex(context, V.EDGE_1, S1, V.ROW1_2, S0, _edge(context), EDGE_ANGLE)
        place_from_vertex(context, V.EDGE_2, S1, V.ROW1_2, S1, _edge(context), EDGE_ANGLE)
        place_by_spherical(context, V.CORNER, S0, RIGHT_CORNER_AZIMUTH, _corner(context))

        # both must sit on the same ring
        return context.inclination(V.ROW1_1, S2) - context.inclination(V.EDGE_2, S2)

    return [find_root(residual, SEED_5V, context.settings)]


def _build_6v(context: SolverContext) -> None:
    """Place every (6,0) vertex that does not depend on the free azimuth."""
    V = Vertex6V

    place_by_spherical(context, V.EDGE_MIDPOINT, S0, 0.0, _edge_midpoint(context))
    place_by_spherical(context, V.CENTER, S0, 0.0, _center(context))
    place_by_spherical(context, V.CORNER, S0, RIGHT_CORNER_AZIMUTH, _corner(context))

    place_from_vertex(context, V.EDGE_2, S1, V.CENTER, S0, _edge(context), EDGE_ANGLE)
    place_by_spherical(context, V.ROW1_1, S2, 0.0, context.inclination(V.EDGE_2, S2))
    place_from_vertex(context, V.EDGE_1, S1, V.ROW1_1, S0, _edge(context), EDGE_ANGLE)


def _place_6v_row(context: SolverContext, azimuth: float) -> None:
    V = Vertex6V
    place_by_spherical(context, V.ROW1_2, S0, azimuth, context.inclination(V.ROW1_1, S0))


def solve_6v_a(context: SolverContext) -> list[RootResult]:
    """(6,0) with ``ROW1_2`` sharing a ring with ``EDGE_2``."""
    V = Vertex6V
    _announce(6, 'A')
    _build_6v(context)

    def residual(azimuth: float) -> float:
        _place_6v_row(context, azimuth)
        return context.inclination(V.ROW1_2, S1) - context.inclination(V.EDGE_2, S1)

    return [find_root(residual, SEED_6V_A, context.settings)]


def solve_6v_b(context: SolverContext) -> list[RootResult]:
    """(6,0) with ``ROW1_2`` sharing a ring with the edge midpoint."""
    V = Vertex6V
    _announce(6, 'B')
    _build_6v(context)

    def residual(azimuth: float) -> float:
        _place_6v_row(context, azimuth)
        return context.inclination(V.ROW1_2, S2) - context.inclination(V.EDGE_MIDPOINT, S1)

    return [find_root(residual, SEED_6V_B, context.settings)]


def _build_7v(context: SolverContext) -> RootResult:
    """Solve the (7,0) inner ring; everything except ``ROW1_2``."""
    V = Vertex7V
    place_by_spherical(context, V.CORNER, S0, RIGHT_CORNER_AZIMUTH, _corner(context))

    def residual(offset: float) -> float:
        place_by_spherical(context, V.ROW2_2, S2, 0.0, _center(context) - offset)
        place_from_vertex(context, V.ROW1_3, S2, V.ROW2_2, S2, _center(context), math.radians(60.0))
        place_from_vertex(context, V.EDGE_3, S1, V.ROW2_2, S2, _edge(context), EDGE_ANGLE)

        place_from_vertex(context, V.EDGE_2, S1, V.ROW2_2, S1, _edge(context), EDGE_ANGLE)

        place_from_vertex(context, V.ROW1_1, S0, V.ROW1_3, S0, _center(context), math.radians(120.0))
        place_from_vertex(context, V.EDGE_1, S1, V.ROW1_3, S0, _edge(context), EDGE_ANGLE)

        return context.inclination(V.ROW1_1, S2) - context.inclination(V.EDGE_2, S2)

    return find_root(residual, SEED_7V_FIRST, context.settings)


def _close_7v_a(context: SolverContext) -> Callable[[float], float]:
    V = Vertex7V

    def residual(azimuth: float) -> float:
        place_by_spherical(context, V.ROW1_2, S2, azimuth, context.inclination(V.EDGE_3, S2))
        return context.inclination(V.ROW1_2, S1) - context.inclination(V.EDGE_2, S1)

    return residual


def _close_7v_b(context: SolverContext) -> Callable[[float], float]:
    V = Vertex7V

    def residual(azimuth: float) -> float:
        place_by_spherical(context, V.ROW1_2, S2, azimuth, context.inclination(V.EDGE_3, S2))
        return context.inclination(V.ROW1_2, S0) - context.inclination(V.ROW1_3, S0)

    return residual


def _close_7v_c(context: SolverContext) -> Callable[[float], float]:
    V = Vertex7V

    def residual(azimuth: float) -> float:
        place_by_spherical(context, V.ROW1_2, S0, azimuth, context.inclination(V.ROW1_3, S0))
        return context.inclination(V.ROW1_2, S1) - context.inclination(V.EDGE_2, S1)

    return residual


SEVEN_V_LEVELS = [
    [(Vertex7V.EDGE_1, S3), (Vertex7V.EDGE_1, S2)],
    [(Vertex7V.ROW1_1, S2), (Vertex7V.EDGE_2, S2)],
    [(Vertex7V.ROW1_2, S2), (Vertex7V.EDGE_3, S2)],
    [(Vertex7V.ROW2_2, S2), (Vertex7V.ROW1_3, S2), (Vertex7V.EDGE_3, S1)],
    [(Vertex7V.ROW2_2, S1), (Vertex7V.ROW1_2, S1), (Vertex7V.EDGE_2, S1)],
    [(Vertex7V.ROW1_3, S0), (Vertex7V.ROW1_2, S0), (Vertex7V.ROW1_1, S0), (Vertex7V.EDGE_1, S1)],
]

_SEVEN_V_CLOSINGS = {
    'a': _close_7v_a,
    'b': _close_7v_b,
    'c': _close_7v_c,
}


def solve_7v(context: SolverContext, variant: str) -> list[RootResult]:
    """7 frequency icosahedron.

    The first search fixes the inner ring. No single azimuth for ``ROW1_2``
    keeps every ring planar, so each variant closes a different pair.

    Args:
        context: Solver context with an empty vertex table
        variant: 'a', 'b' or 'c'

    Returns:
        Results of the first and closing searches
    """
    if variant not in _SEVEN_V_CLOSINGS:
        raise ValueError(f"Unknown (7,0) variant: {variant}")

    _announce(7, variant.upper())
    first = _build_7v(context)
    closing = find_root(_SEVEN_V_CLOSINGS[variant](context), SEED_7V_CLOSING, context.settings)

    for label, values in level_report(context, SEVEN_V_LEVELS):
        logger.debug(" %-16s %s", label, '  '.join(f"{v:12.9f}" for v in values))

    return [first, closing]


# =============================================================================
# Export patches
# =============================================================================

PATCH_2V = Patch(
    picks=(
        (Vertex2V.EDGE_MIDPOINT, S0),
        (Vertex2V.CORNER, S0),
        (Vertex2V.EDGE_MIDPOINT, S4),
        (Vertex2V.EDGE_MIDPOINT, S1),
    ),
    faces=((0, 1, 3), (0, 3, 2)),
)

PATCH_3V = Patch(
    picks=(
        (Vertex3V.EDGE_1, S5),
        (Vertex3V.EDGE_1, S0),
        (Vertex3V.CORNER, S0),
        (Vertex3V.CENTER, S0),
        (Vertex3V.EDGE_1, S1),
    ),
    faces=((0, 1, 3), (1, 4, 3), (1, 2, 4)),
)

PATCH_4V = Patch(
    picks=(
        (Vertex4V.EDGE_MIDPOINT, S0),
        (Vertex4V.EDGE_1, S0),
        (Vertex4V.CORNER, S0),
        (Vertex4V.ROW1_1, S5),
        (Vertex4V.ROW1_1, S0),
        (Vertex4V.EDGE_1, S1),
        (Vertex4V.ROW1_1, S2),
    ),
    faces=((0, 4, 3), (0, 1, 4), (1, 5, 4), (1, 2, 5), (3, 4, 6)),
)

PATCH_5V = Patch(
    picks=(
        (Vertex5V.EDGE_2, S5),
        (Vertex5V.EDGE_2, S0),
        (Vertex5V.EDGE_1, S0),
        (Vertex5V.CORNER, S0),
        (Vertex5V.ROW1_2, S0),
        (Vertex5V.ROW1_1, S0),
        (Vertex5V.EDGE_1, S1),
        (Vertex5V.ROW1_2, S3),
        (Vertex5V.ROW1_2, S1),
    ),
    faces=(
        (0, 1, 4), (1, 5, 4), (1, 2, 5), (2, 6, 5), (2, 3, 6),
        (4, 5, 8), (4, 8, 7),
    ),
)

PATCH_6V = Patch(
    picks=(
        (Vertex6V.EDGE_MIDPOINT, S0),
        (Vertex6V.EDGE_2, S0),
        (Vertex6V.EDGE_1, S0),
        (Vertex6V.CORNER, S0),
        (Vertex6V.ROW1_2, S5),
        (Vertex6V.ROW1_2, S0),
        (Vertex6V.ROW1_1, S0),
        (Vertex6V.EDGE_1, S1),
        (Vertex6V.CENTER, S0),
        (Vertex6V.ROW1_2, S1),
    ),
    faces=(
        (0, 1, 5), (0, 5, 4), (1, 2, 6), (1, 6, 5), (2, 3, 7),
        (2, 7, 6), (4, 5, 8), (5, 9, 8), (5, 6, 9),
    ),
)

PATCH_7V = Patch(
    picks=(
        (Vertex7V.EDGE_3, S5),
        (Vertex7V.EDGE_3, S0),
        (Vertex7V.EDGE_2, S0),
        (Vertex7V.EDGE_1, S0),
        (Vertex7V.CORNER, S0),
        (Vertex7V.ROW1_3, S0),
        (Vertex7V.ROW1_2, S0),
        (Vertex7V.ROW1_1, S0),
        (Vertex7V.EDGE_1, S1),
        (Vertex7V.ROW2_2, S5),
        (Vertex7V.ROW2_2, S0),
        (Vertex7V.ROW1_2, S1),
        (Vertex7V.ROW2_2, S2),
    ),
    faces=(
        (0, 1, 5), (1, 6, 5), (1, 2, 6), (2, 7, 6), (2, 3, 7), (3, 8, 7), (3, 4, 8),
        (5, 10, 9), (5, 6, 10), (6, 11, 10), (6, 7, 11),
        (9, 10, 12),
    ),
)


# =============================================================================
# Registry
# =============================================================================

CONFIGURATIONS: dict[str, Configuration] = {
    '2,0': Configuration(
        key='2,0', name='Class I (2,0)', frequency=2, variant='',
        description='Standard 2 frequency icosahedron, fully determined',
        solve=solve_2v, patch=PATCH_2V, filename='icosa20',
    ),
    '3,0': Configuration(
        key='3,0', name='Class I (3,0)', frequency=3, variant='',
        description='Standard 3 frequency icosahedron, fully determined',
        solve=solve_3v, patch=PATCH_3V, filename='icosa30',
    ),
    '4,0': Configuration(
        key='4,0', name='Class I (4,0)', frequency=4, variant='',
        description='Standard 4 frequency icosahedron, fully determined',
        solve=solve_4v, patch=PATCH_4V, filename='icosa40',
    ),
    '5,0': Configuration(
        key='5,0', name='Class I (5,0)', frequency=5, variant='',
        description='One free inclination offset, single solution',
        solve=solve_5v, patch=PATCH_5V, filename='icosa50',
    ),
    '6,0a': Configuration(
        key='6,0a', name='Class I (6,0) A', frequency=6, variant='a',
        description='Free azimuth closing the edge-2 ring',
        solve=solve_6v_a, patch=PATCH_6V, filename='icosa60_a',
    ),
    '6,0b': Configuration(
        key='6,0b', name='Class I (6,0) B', frequency=6, variant='b',
        description='Free azimuth closing the edge midpoint ring',
        solve=solve_6v_b, patch=PATCH_6V, filename='icosa60_b',
    ),
    '7,0a': Configuration(
        key='7,0a', name='Class I (7,0) A', frequency=7, variant='a',
        description='Inner ring solved, row 1 closed against edge 2',
        solve=lambda context: solve_7v(context, 'a'), patch=PATCH_7V,
        filename='icosa70_a',
    ),
    '7,0b': Configuration(
        key='7,0b', name='Class I (7,0) B', frequency=7, variant='b',
        description='Inner ring solved, row 1 closed across sector 0',
        solve=lambda context: solve_7v(context, 'b'), patch=PATCH_7V,
        filename='icosa70_b',
    ),
    '7,0c': Configuration(
        key='7,0c', name='Class I (7,0) C', frequency=7, variant='c',
        description='Inner ring solved, row 1 placed from sector 0',
        solve=lambda context: solve_7v(context, 'c'), patch=PATCH_7V,
        filename='icosa70_c',
    ),
}


def get_configuration(key: str) -> Configuration:
    """Get a configuration by key, e.g. '5,0' or '7,0b'.

    Raises:
        ValueError: If the key is unknown
    """
    if key not in CONFIGURATIONS:
        raise ValueError(f"Unknown configuration: {key}")
    return CONFIGURATIONS[key]


def list_configurations() -> list[str]:
    return list(CONFIGURATIONS.keys())


def configurations_for(frequency: int) -> list[Configuration]:
    """All configurations of one frequency, in registry order."""
    return [c for c in CONFIGURATIONS.values() if c.frequency == frequency]


@dataclass
class Solution:
    """A configuration solved in its own context."""

    configuration: Configuration
    context: SolverContext
    roots: list[RootResult]

    @property
    def converged(self) -> bool:
        return all(r.converged for r in self.roots)


def run_configuration(context: SolverContext, key: str) -> Solution:
    """Solve one configuration in a fresh vertex table."""
    configuration = get_configuration(key)
    run = context.new_run()
    roots = configuration.solve(run)
    return Solution(configuration=configuration, context=run, roots=roots)
