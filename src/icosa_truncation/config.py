"""
Solver defaults and global constants.

Every value here can be overridden by passing a different ``SolverSettings``
to the configurations; nothing reads these at import time except as defaults.
"""

import math
from dataclasses import dataclass

# Degeneracy threshold for cartesian -> spherical conversion
ZERO = 1e-14

# Reference (LCD) triangle of an icosahedron face, radians
REFERENCE_ANGLE_A = math.radians(36.0)
REFERENCE_ANGLE_B = math.radians(60.0)

# Root finder defaults
DEFAULT_TOLERANCE = 1e-11
DEFAULT_MAX_ITERATIONS = 200
DEFAULT_INITIAL_STEP = math.radians(0.5)

# Seed angles for the constrained constructions, radians
SEED_5V = math.radians(9.0)
SEED_6V_A = math.radians(5.0)
SEED_6V_B = math.radians(6.0)
SEED_7V_FIRST = math.radians(5.5)
SEED_7V_CLOSING = math.radians(4.0)

# OFF output
OFF_PRECISION = 9
DEFAULT_OUTPUT_DIR = '.'


@dataclass(frozen=True)
class SolverSettings:
    """Convergence settings for the constraint root finder."""

    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    initial_step: float = DEFAULT_INITIAL_STEP


DEFAULT_SETTINGS = SolverSettings()
