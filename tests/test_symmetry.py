"""
Tests for the face frame, sector table and vertex replication.
"""

import math

import numpy as np
import pytest

from icosa_truncation.models import SECTOR_COUNT, SphericalCoord, Vertex
from icosa_truncation.symmetry import (
    SECTOR_PROBE,
    Sector,
    build_sector_table,
    face_corners,
    generate_group,
    replicate,
    sector_of,
)
from icosa_truncation.transforms import (
    apply,
    identity,
    normalize,
    point,
    rotation_matrix,
    scale_matrix,
    spherical_to_cartesian,
)


def _placed_vertex(symmetry, azimuth_deg, inclination_deg, sector=Sector.BOTTOM_RIGHT):
    sc = SphericalCoord(1.0, math.radians(azimuth_deg), math.radians(inclination_deg))
    vertex = Vertex()
    vertex.set(sector, spherical_to_cartesian(sc), sc)
    return replicate(symmetry, vertex, sector)


# =============================================================================
# Face Frame Tests
# =============================================================================

class TestFaceFrame:
    """Test the local <-> global face transforms."""

    def test_orthonormal(self, symmetry):
        """Local-to-global and its inverse multiply to the identity."""
        assert np.allclose(symmetry.local_to_global @ symmetry.global_to_local, identity())

    def test_face_center_on_z(self, symmetry):
        """Face centroid direction becomes +z."""
        right, top, left = face_corners()
        center = point(*normalize(right + top + left)[:3])
        assert np.allclose(symmetry.to_global(center)[:3], [0, 0, 1], atol=1e-12)

    def test_corners_layout(self, symmetry):
        """Apex on +y, lower corners symmetric about the y axis."""
        right, top, left = (symmetry.to_global(p) for p in face_corners())
        assert top[0] == pytest.approx(0.0, abs=1e-12)
        assert top[1] > 0
        assert right[0] > 0 and right[1] < 0
        assert left[0] == pytest.approx(-right[0])
        assert left[1] == pytest.approx(right[1])

    def test_corners_unit_distance(self):
        """Face corners are on the unit sphere."""
        for p in face_corners():
            assert np.linalg.norm(p[:3]) == pytest.approx(1.0)


# =============================================================================
# Sector Table Tests
# =============================================================================

class TestSectorTable:
    """Test the dihedral group and sector transform table."""

    @pytest.mark.parametrize('k', [0, 1, 2])
    def test_rotations_about_normal(self, symmetry, k):
        """Sector rotations are 0, 120 and 240 degrees about z."""
        m, mt = symmetry.sector_rotations[k]
        assert np.allclose(mt, rotation_matrix('z', math.radians(120.0 * k)), atol=1e-12)
        assert np.allclose(m @ mt, identity())

    def test_group_order(self, symmetry):
        """Rotation and mirror generate six elements."""
        group = generate_group([symmetry.sector_rotations[1][1], symmetry.mirror])
        assert len(group) == SECTOR_COUNT
        assert np.allclose(group[0], identity())

    def test_elements_map_probe(self, symmetry):
        """Element k carries the sector 0 probe into sector k."""
        assert sector_of(SECTOR_PROBE) == Sector.BOTTOM_RIGHT
        for k, element in enumerate(symmetry.elements):
            assert sector_of(apply(SECTOR_PROBE, element)) == k

    def test_diagonal_identity(self, symmetry):
        """A sector maps onto itself with the identity."""
        for i in range(SECTOR_COUNT):
            assert np.array_equal(symmetry.transform(i, i), identity())

    def test_closure(self, symmetry):
        """T[i,j] then T[j,k] equals T[i,k]."""
        assert symmetry.closure_error() < 1e-12

    def test_known_entries(self, symmetry):
        """Entries agree with their construction from rotations and mirror."""
        mirror = scale_matrix(-1.0, 1.0, 1.0)
        m1, mt1 = symmetry.sector_rotations[1]
        m2, mt2 = symmetry.sector_rotations[2]

        assert np.allclose(symmetry.transform(0, 5), mirror)
        assert np.allclose(symmetry.transform(0, 2), mt1)
        assert np.allclose(symmetry.transform(0, 4), mt2)
        assert np.allclose(symmetry.transform(1, 0), m1 @ mirror)
        assert np.allclose(symmetry.transform(1, 4), mirror)
        assert np.allclose(symmetry.transform(3, 4), m2 @ mirror @ mt2)

    @pytest.mark.parametrize('src, dst', [(0, 3), (2, 5), (4, 1), (5, 2)])
    def test_exchange_lands_in_sector(self, symmetry, src, dst):
        """Exchanging a sector interior point lands in the target sector."""
        p = apply(SECTOR_PROBE, symmetry.elements[src])
        assert sector_of(symmetry.exchange(p, src, dst)) == dst

    def test_sector_of_boundaries(self):
        """Sectors are 60 degree wedges starting below the x axis."""
        assert sector_of(point(0.1, -1.0, 0.0)) == Sector.BOTTOM_RIGHT
        assert sector_of(point(1.0, 0.0, 0.0)) == Sector.RIGHT_LOWER
        assert sector_of(point(1.0, 1.0, 0.0)) == Sector.RIGHT_UPPER
        assert sector_of(point(-1.0, 1.0, 0.0)) == Sector.LEFT_UPPER
        assert sector_of(point(-1.0, 0.0, 0.0)) == Sector.LEFT_LOWER
        assert sector_of(point(-0.1, -1.0, 0.0)) == Sector.BOTTOM_LEFT

    def test_bad_generators(self):
        """A generator set of the wrong order is rejected."""
        with pytest.raises(ValueError, match="order"):
            build_sector_table(identity(), scale_matrix(-1.0, 1.0, 1.0))


# =============================================================================
# Replication Tests
# =============================================================================

class TestReplicate:
    """Test filling all six sectors of a vertex."""

    def test_fills_every_sector(self, symmetry):
        """Replication completes the vertex on the unit sphere."""
        vertex = _placed_vertex(symmetry, 10.0, 110.0)
        assert vertex.is_complete
        for sc in vertex.coords:
            assert sc.radius == pytest.approx(1.0)

    def test_source_unchanged(self, symmetry):
        """The placed sector keeps its position."""
        expected = spherical_to_cartesian(SphericalCoord(1.0, math.radians(10.0), math.radians(110.0)))
        vertex = _placed_vertex(symmetry, 10.0, 110.0)
        assert np.allclose(vertex.points[Sector.BOTTOM_RIGHT], expected, atol=1e-12)

    def test_images_in_their_sectors(self, symmetry):
        """Copy k of a sector 0 point lies in sector k of the face."""
        vertex = _placed_vertex(symmetry, 10.0, 110.0)
        for k in range(SECTOR_COUNT):
            assert sector_of(symmetry.to_global(vertex.points[k])) == k

    def test_round_trip(self, symmetry):
        """Each copy maps back onto the sector 0 point."""
        vertex = _placed_vertex(symmetry, 10.0, 110.0)
        origin = symmetry.to_global(vertex.points[0])
        for i in range(SECTOR_COUNT):
            back = symmetry.exchange(symmetry.to_global(vertex.points[i]), i, 0)
            assert np.allclose(back, origin, atol=1e-9)

    def test_frame_round_trip(self, symmetry):
        """Local -> global -> local leaves every copy unchanged."""
        vertex = _placed_vertex(symmetry, -20.0, 95.0, Sector.LEFT_UPPER)
        back = symmetry.to_local(symmetry.to_global(vertex.points))
        assert np.allclose(back, vertex.points, atol=1e-9)

    @pytest.mark.parametrize('sector', list(Sector))
    def test_any_source_sector(self, symmetry, sector):
        """Replicating from any copy reproduces the same six points."""
        reference = _placed_vertex(symmetry, 10.0, 110.0)
        p = reference.points[sector].copy()

        vertex = Vertex()
        vertex.set(sector, p, reference.coords[sector])
        replicate(symmetry, vertex, sector)
        assert np.allclose(vertex.points, reference.points, atol=1e-9)

    def test_center_is_fixed(self, context):
        """The face center is its own image in every sector."""
        ref = context.reference
        vertex = _placed_vertex(context.symmetry, 0.0, math.degrees(ref.b * 2 + ref.c))
        assert np.allclose(vertex.points, vertex.points[0], atol=1e-9)

    def test_unpopulated_source(self, symmetry):
        """Replicating from an empty sector is rejected."""
        with pytest.raises(ValueError, match="unpopulated"):
            replicate(symmetry, Vertex(), Sector.RIGHT_UPPER)
