"""
Icosa Truncation - Truncatable Class I Geodesic Configurations.

Computes vertex positions for class I (b,0) subdivisions of an icosahedron
face, (2,0) through (7,0), so that vertices fall on planar rings. Uses
spherical trigonometry, face symmetry replication and a one-dimensional
root search where a configuration has free parameters.

Example:
    >>> from icosa_truncation import SolverContext, run_configuration, patch_mesh
    >>>
    >>> context = SolverContext.create()
    >>> solution = run_configuration(context, "3,0")
    >>> mesh = patch_mesh(solution)
    >>> print(len(mesh.vertices), len(mesh.faces))
    5 3
"""

__version__ = "1.0.0"

# Solver context and placement primitives
from .geometry import (
    SolverContext,
    level_report,
    place_by_spherical,
    place_by_triangle,
    place_from_vertex,
)

# Data classes
from .models import (
    ReferenceTriangle,
    SectorMesh,
    SphericalCoord,
    SphericalTriangle,
    Vertex,
    VertexTable,
)

# Settings
from .config import DEFAULT_SETTINGS, SolverSettings

# Symmetry
from .symmetry import FaceSymmetry, Sector, build_face_symmetry, replicate

# Numerics
from .solver import RootResult, find_root
from .trig import solve_bcC

# Configurations
from .configurations import (
    CONFIGURATIONS,
    Configuration,
    Solution,
    get_configuration,
    list_configurations,
    run_configuration,
)

# Export
from .export import assemble_face, export_solution, patch_mesh, write_off

__all__ = [
    # Version
    "__version__",
    # Context and primitives
    "SolverContext",
    "place_by_spherical",
    "place_by_triangle",
    "place_from_vertex",
    "level_report",
    # Data classes
    "ReferenceTriangle",
    "SectorMesh",
    "SphericalCoord",
    "SphericalTriangle",
    "Vertex",
    "VertexTable",
    # Settings
    "SolverSettings",
    "DEFAULT_SETTINGS",
    # Symmetry
    "FaceSymmetry",
    "Sector",
    "build_face_symmetry",
    "replicate",
    # Numerics
    "RootResult",
    "find_root",
    "solve_bcC",
    # Configurations
    "CONFIGURATIONS",
    "Configuration",
    "Solution",
    "get_configuration",
    "list_configurations",
    "run_configuration",
    # Export
    "assemble_face",
    "export_solution",
    "patch_mesh",
    "write_off",
]
