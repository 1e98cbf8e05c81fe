"""
Mesh export for solved configurations.

A configuration's patch is read from the vertex table, moved into the face
frame (z through the face center) and written as an OFF file. The patch can
also be replicated through the six sector transforms into the whole face.
"""

import logging
from pathlib import Path

import numpy as np
from scipy.spatial import cKDTree

from .config import OFF_PRECISION
from .configurations import Solution
from .models import SectorMesh
from .symmetry import FaceSymmetry
from .transforms import apply

logger = logging.getLogger(__name__)


def patch_mesh(solution: Solution) -> SectorMesh:
    """Build the sector patch mesh of a solved configuration."""
    patch = solution.configuration.patch
    points = solution.context.global_points(list(patch.picks))
    return SectorMesh(
        vertices=points[:, :3].copy(),
        faces=[list(f) for f in patch.faces],
        name=solution.configuration.key,
    )


def weld_vertices(
    vertices: np.ndarray,
    tolerance: float = 1e-8
) -> tuple[np.ndarray, np.ndarray]:
    """Merge vertices closer than ``tolerance``.

    Args:
        vertices: Nx3 array of vertex positions
        tolerance: Distance threshold for considering vertices identical

    Returns:
        ``(unique, remap)``: kept vertices and, per input vertex, its index
        into ``unique``
    """
    if len(vertices) == 0:
        return vertices, np.zeros(0, dtype=int)

    tree = cKDTree(vertices)
    remap = np.full(len(vertices), -1, dtype=int)
    keep = []

    for i in range(len(vertices)):
        if remap[i] >= 0:
            continue

        index = len(keep)
        keep.append(i)
        for n in tree.query_ball_point(vertices[i], tolerance):
            if remap[n] < 0:
                remap[n] = index

    return vertices[keep], remap


def assemble_face(
    mesh: SectorMesh,
    symmetry: FaceSymmetry,
    tolerance: float = 1e-8
) -> SectorMesh:
    """Replicate a face-frame patch into all six sectors of the face.

    Mirror images have their winding reversed so every triangle keeps the
    same orientation. Shared vertices are welded and repeated triangles
    dropped.
    """
    homogeneous = np.hstack([mesh.vertices, np.ones((len(mesh.vertices), 1))])
    n = len(mesh.vertices)

    all_vertices = []
    all_faces = []
    for k, element in enumerate(symmetry.elements):
        all_vertices.append(apply(homogeneous, element)[:, :3])
        mirrored = np.linalg.det(element[:3, :3]) < 0
        for face in mesh.faces:
            shifted = [i + k * n for i in face]
            all_faces.append(shifted[::-1] if mirrored else shifted)

    vertices, remap = weld_vertices(np.vstack(all_vertices), tolerance)

    faces = []
    seen = set()
    for face in all_faces:
        welded = [int(remap[i]) for i in face]
        key = tuple(sorted(welded))
        if len(set(welded)) < 3 or key in seen:
            continue
        seen.add(key)
        faces.append(welded)

    return SectorMesh(vertices=vertices, faces=faces, name=f"{mesh.name} face")


def write_off(mesh: SectorMesh, path: str | Path, precision: int = OFF_PRECISION) -> Path | None:
    """Write a mesh as OFF.

    Returns:
        The path written, or None if the file could not be opened
    """
    path = Path(path)
    try:
        with open(path, 'w') as fp:
            fp.write(mesh.to_off(precision))
    except OSError as exc:
        logger.error("Cannot write geometry output %s: %s", path, exc)
        return None

    logger.info("Geometry output: %s", path)
    return path


def export_solution(
    solution: Solution,
    output_dir: str | Path = '.',
    full_face: bool = False
) -> list[Path]:
    """Write the patch (and optionally the whole face) of a solution.

    Args:
        solution: Solved configuration
        output_dir: Directory for the OFF files
        full_face: Also write ``<name>_face.off``

    Returns:
        Paths actually written
    """
    output_dir = Path(output_dir)
    mesh = patch_mesh(solution)
    filename = solution.configuration.filename

    written = []
    path = write_off(mesh, output_dir / f"{filename}.off")
    if path is not None:
        written.append(path)

    if full_face:
        face = assemble_face(mesh, solution.context.symmetry)
        path = write_off(face, output_dir / f"{filename}_face.off")
        if path is not None:
            written.append(path)

    return written
