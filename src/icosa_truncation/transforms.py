"""
Vector, matrix and coordinate transforms.

Points and vectors are homogeneous rows ``(x, y, z, w)``. Matrices are 4x4
and are applied on the right (``v' = v @ M``), so "apply M1 then M2" is the
product ``M1 @ M2``.
"""

import math

import numpy as np

from .config import ZERO
from .models import SphericalCoord

X_AXIS = 'x'
Y_AXIS = 'y'
Z_AXIS = 'z'


def point(x: float, y: float, z: float) -> np.ndarray:
    """Create a homogeneous point."""
    return np.array([x, y, z, 1.0])


def vector(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Direction from point ``a`` to point ``b`` (``l`` component is zero)."""
    v = np.zeros(4)
    v[:3] = b[:3] - a[:3]
    return v


def normalize(v: np.ndarray) -> np.ndarray:
    """Scale a vector to unit length.

    The caller guarantees a non-degenerate vector; a zero vector is not checked.
    """
    out = np.array(v, dtype=np.float64)
    out[:3] = out[:3] / np.sqrt(np.dot(out[:3], out[:3]))
    return out


def cross_product(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Cross product of the xyz parts of two vectors."""
    c = np.zeros(4)
    c[:3] = np.cross(a[:3], b[:3])
    return c


def identity() -> np.ndarray:
    return np.eye(4)


def multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Matrix product ``a @ b`` (apply ``a`` then ``b``)."""
    return a @ b


def transpose(m: np.ndarray) -> np.ndarray:
    return np.array(m).T.copy()


def rotation_matrix(axis: str, angle: float) -> np.ndarray:
    """Create a rotation about a coordinate axis.

    Args:
        axis: One of 'x', 'y', 'z'
        angle: Rotation angle in radians (right-hand rule)

    Returns:
        4x4 rotation matrix for row vectors
    """
    c = math.cos(angle)
    s = math.sin(angle)
    m = identity()

    if axis == X_AXIS:
        m[1, 1] = c
        m[1, 2] = s
        m[2, 1] = -s
        m[2, 2] = c
    elif axis == Y_AXIS:
        m[0, 0] = c
        m[0, 2] = -s
        m[2, 0] = s
        m[2, 2] = c
    elif axis == Z_AXIS:
        m[0, 0] = c
        m[0, 1] = s
        m[1, 0] = -s
        m[1, 1] = c
    else:
        raise ValueError(f"Unknown rotation axis: {axis}")

    return m


def scale_matrix(x: float, y: float, z: float) -> np.ndarray:
    """Create a non-uniform scale matrix. Negative factors mirror an axis."""
    m = identity()
    m[0, 0] = x
    m[1, 1] = y
    m[2, 2] = z
    return m


def apply(points: np.ndarray, m: np.ndarray) -> np.ndarray:
    """Transform one ``(4,)`` point or an ``(N, 4)`` array of points."""
    return np.asarray(points, dtype=np.float64) @ m


def basis_matrix(x: np.ndarray, y: np.ndarray, z: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Assemble a rotation whose columns are the basis ``x, y, z``.

    The basis is orthonormal, so the transpose is the inverse.

    Returns:
        ``(m, mt)``: the rotation and its transpose
    """
    m = identity()
    m[:3, 0] = x[:3]
    m[:3, 1] = y[:3]
    m[:3, 2] = z[:3]
    return m, transpose(m)


def rotation_matrix_from_triangle(
    p0: np.ndarray,
    p1: np.ndarray,
    p2: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    """Build a right-handed frame from a triangle in space.

    The local x axis runs from ``p2`` to ``p0``, y points toward ``p1``
    and z is the triangle normal. Translation is not considered.

    Args:
        p0: First corner
        p1: Second corner (apex)
        p2: Third corner (origin of the x edge)

    Returns:
        ``(m, mt)`` where ``m`` maps into the triangle frame and ``mt`` back
    """
    x = normalize(vector(p2, p0))
    y = normalize(vector(p2, p1))
    z = normalize(cross_product(x, y))
    y = normalize(cross_product(z, x))
    return basis_matrix(x, y, z)


# =============================================================================
# Spherical coordinates
# =============================================================================

def spherical_to_cartesian(sc: SphericalCoord) -> np.ndarray:
    """Convert physics-convention spherical coordinates to a point."""
    sin_incl = math.sin(sc.inclination)
    return point(
        sc.radius * sin_incl * math.cos(sc.azimuth),
        sc.radius * sin_incl * math.sin(sc.azimuth),
        sc.radius * math.cos(sc.inclination),
    )


def azimuth_of(x: float, y: float) -> float:
    """Resolve azimuth from the signs of x and y, in (-pi, pi]."""
    if abs(x) <= ZERO:
        if abs(y) <= ZERO:
            return 0.0
        return math.pi / 2 if y > 0 else -math.pi / 2

    if x > 0:
        if abs(y) <= ZERO:
            return 0.0
        return math.atan(y / x)

    if abs(y) <= ZERO:
        return math.pi
    if y > 0:
        return math.pi + math.atan(y / x)
    return -math.pi + math.atan(y / x)


def cartesian_to_spherical(p: np.ndarray) -> SphericalCoord:
    """Convert a point to physics-convention spherical coordinates.

    A point at the origin has no direction; it maps to zero inclination
    and zero azimuth.
    """
    x, y, z = float(p[0]), float(p[1]), float(p[2])
    radius = math.sqrt(x * x + y * y + z * z)

    if radius <= ZERO:
        return SphericalCoord(radius=radius, azimuth=0.0, inclination=0.0)

    # acos is undefined past +-1 by a rounding error on unit points
    cos_incl = min(1.0, max(-1.0, z / radius))
    return SphericalCoord(
        radius=radius,
        azimuth=azimuth_of(x, y),
        inclination=math.acos(cos_incl),
    )
