"""Tests for element layout generators."""
import numpy as np
import pytest
from numpy.testing import assert_allclose

from beampatterns.core import ArrayGeometryError
from beampatterns.geometry import (
    bp_con_cylinder,
    bp_con_ring,
    bp_con_sphere,
    bp_con_uniform,
    sphere_elevations,
)


class TestRing:
    """Tests for concentric ring layouts."""

    def test_single_ring_quadrants(self):
        """Four elements step clockwise from the offset."""
        positions = bp_con_ring([1.0], [4], [0.0])
        expected = [[1, 0, 0], [0, -1, 0], [-1, 0, 0], [0, 1, 0]]
        assert_allclose(positions, expected, atol=1e-12)

    @pytest.mark.parametrize(
        "radii, counts, offsets",
        [
            ([1.0], [1], [0.0]),
            ([0.5, 1.0], [3, 5], [0.1, 0.2]),
            ([0.2, 0.4, 0.8], [6, 12, 24], [0.0, np.pi / 12, np.pi / 24]),
        ],
    )
    def test_count_and_plane(self, radii, counts, offsets):
        """Row count is the sum of ring counts and every element has up == 0."""
        positions = bp_con_ring(radii, counts, offsets)
        assert positions.shape == (sum(counts), 3)
        assert np.all(positions[:, 2] == 0.0)

    def test_ring_radii(self):
        """Each ring's elements lie at that ring's radius."""
        positions = bp_con_ring([0.5, 1.0], [3, 5], [0.1, 0.2])
        r = np.hypot(positions[:, 0], positions[:, 1])
        assert_allclose(r[:3], 0.5)
        assert_allclose(r[3:], 1.0)

    def test_offset_rotates_first_element(self):
        positions = bp_con_ring([2.0], [3], [np.pi / 2])
        assert_allclose(positions[0], [0.0, 2.0, 0.0], atol=1e-12)

    def test_inputs_not_mutated(self):
        radii = np.array([1.0, 2.0])
        counts = np.array([2, 3])
        offsets = np.array([0.0, 0.5])
        bp_con_ring(radii, counts, offsets)
        assert_allclose(radii, [1.0, 2.0])
        assert_allclose(offsets, [0.0, 0.5])

    def test_mismatched_lengths_rejected(self):
        with pytest.raises(ArrayGeometryError, match="equal lengths"):
            bp_con_ring([1.0, 2.0], [4], [0.0, 0.0])

    def test_empty_rejected(self):
        with pytest.raises(ArrayGeometryError, match="At least one ring"):
            bp_con_ring([], [], [])

    @pytest.mark.parametrize(
        "radii, counts, match",
        [
            ([0.0], [4], "radii"),
            ([-1.0], [4], "radii"),
            ([1.0], [0], "num_elements"),
            ([1.0], [2.5], "num_elements"),
            ([1.0], [np.inf], "num_elements"),
            ([1.0], [np.nan], "num_elements"),
        ],
    )
    def test_invalid_parameters(self, radii, counts, match):
        with pytest.raises(ArrayGeometryError, match=match):
            bp_con_ring(radii, counts, [0.0])

    @pytest.mark.parametrize("offset", [np.nan, np.inf])
    def test_nonfinite_offset_rejected(self, offset):
        with pytest.raises(ArrayGeometryError, match=r"offsets\[1\]"):
            bp_con_ring([0.5, 1.0], [4, 4], [0.0, offset])


class TestUniform:
    """Tests for rectilinear grid layouts."""

    @pytest.mark.parametrize(
        "args",
        [
            (3, 0.5, 4, 0.25, 2, 1.0),
            (1, 1.0, 1, 1.0, 1, 1.0),
            (5, 0.1, 1, 1.0, 7, 0.3),
        ],
    )
    def test_centroid_at_origin(self, args):
        positions = bp_con_uniform(*args)
        assert positions.shape == (args[0] * args[2] * args[4], 3)
        assert_allclose(positions.mean(axis=0), 0.0, atol=1e-12)

    def test_front_varies_fastest(self):
        """Rows are up-major, then right, then front."""
        positions = bp_con_uniform(3, 0.5, 4, 0.25, 2, 1.0)
        assert_allclose(positions[0], [-0.5, -0.375, -0.5])
        assert_allclose(positions[1], [0.0, -0.375, -0.5])
        assert_allclose(positions[3], [-0.5, -0.125, -0.5])
        assert_allclose(positions[12], [-0.5, -0.375, 0.5])

    def test_spacing(self):
        positions = bp_con_uniform(4, 0.2, 1, 1.0, 1, 1.0)
        assert_allclose(np.diff(positions[:, 0]), 0.2)

    def test_invalid_spacing(self):
        with pytest.raises(ArrayGeometryError, match="spacing_right"):
            bp_con_uniform(2, 0.5, 2, 0.0, 2, 0.5)

    def test_invalid_count(self):
        with pytest.raises(ArrayGeometryError, match="num_e_up"):
            bp_con_uniform(2, 0.5, 2, 0.5, 0, 0.5)


class TestCylinder:
    """Tests for cylindrical layouts."""

    def test_elements_on_cylinder(self):
        positions = bp_con_cylinder(2.0, 6, 3, 0.4)
        assert positions.shape == (18, 3)
        assert_allclose(positions[:, 0] ** 2 + positions[:, 1] ** 2, 4.0)

    def test_levels_centered(self):
        positions = bp_con_cylinder(2.0, 6, 3, 0.4)
        assert_allclose(np.unique(np.round(positions[:, 2], 12)), [-0.4, 0.0, 0.4])
        assert_allclose(positions[:, 2].mean(), 0.0, atol=1e-12)

    def test_azimuth_major_order(self):
        positions = bp_con_cylinder(2.0, 6, 3, 0.4)
        assert_allclose(positions[:3], [[2, 0, -0.4], [2, 0, 0], [2, 0, 0.4]], atol=1e-12)

    def test_negative_sweep(self):
        """Second ring element sits clockwise of the first."""
        positions = bp_con_cylinder(1.0, 4, 1, 1.0)
        assert_allclose(positions[1], [0.0, -1.0, 0.0], atol=1e-12)

    @pytest.mark.parametrize(
        "args, match",
        [
            ((0.0, 6, 3, 0.4), "radius"),
            ((1.0, 0, 3, 0.4), "num_elem_az"),
            ((1.0, 6, 0, 0.4), "num_e_up"),
            ((1.0, 6, 3, -0.4), "spacing_up"),
            ((1.0, np.inf, 3, 0.4), "num_elem_az"),
            ((1.0, 6, 3, 0.4, np.nan), "offset"),
        ],
    )
    def test_invalid_parameters(self, args, match):
        with pytest.raises(ArrayGeometryError, match=match):
            bp_con_cylinder(*args)


class TestSphere:
    """Tests for spherical layouts."""

    def test_elements_on_sphere(self):
        positions = bp_con_sphere(1.5, 6, 4)
        assert positions.shape == (24, 3)
        assert_allclose(np.sum(positions**2, axis=1), 1.5**2)

    def test_latitude_rings(self):
        positions = bp_con_sphere(1.0, 4, 3, -np.pi / 4, np.pi / 4)
        assert_allclose(positions[:4, 2], np.sin(-np.pi / 4))
        assert_allclose(positions[4:8, 2], 0.0, atol=1e-12)
        assert_allclose(positions[8:, 2], np.sin(np.pi / 4))

    def test_single_ring_uses_midpoint(self):
        assert_allclose(sphere_elevations(1, -0.2, 0.6), [0.2])
        positions = bp_con_sphere(1.0, 5, 1, -0.2, 0.6)
        assert_allclose(positions[:, 2], np.sin(0.2))

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ArrayGeometryError, match="exceeds"):
            bp_con_sphere(1.0, 4, 3, 0.5, -0.5)

    def test_invalid_radius(self):
        with pytest.raises(ArrayGeometryError, match="radius"):
            bp_con_sphere(-1.0, 4, 3)
