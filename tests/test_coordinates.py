"""Tests for directions and coordinate conversions."""
import numpy as np
import pytest
from numpy.testing import assert_allclose

from beampatterns.coordinates import (
    FRONT,
    CoordinateSystem,
    UnitDirection,
    as_direction,
    from_cartesian_3d,
    to_cartesian_3d,
)


class TestUnitDirection:
    """Tests for UnitDirection."""

    def test_default_is_front(self):
        assert UnitDirection() == FRONT
        assert FRONT.as_array().tolist() == [1.0, 0.0, 0.0]

    def test_from_angles_degrees(self):
        d = UnitDirection.from_angles(90.0, 0.0, degrees=True)
        assert_allclose(d.as_array(), [0.0, 1.0, 0.0], atol=1e-12)

    def test_from_angles_elevation(self):
        d = UnitDirection.from_angles(0.0, np.pi / 2)
        assert_allclose(d.as_array(), [0.0, 0.0, 1.0], atol=1e-12)

    def test_angles_round_trip(self):
        d = UnitDirection.from_angles(-2.0, 0.4)
        assert d.azimuth == pytest.approx(-2.0)
        assert d.elevation == pytest.approx(0.4)

    def test_from_vector_normalizes(self):
        d = UnitDirection.from_vector([0.0, 3.0, 4.0])
        assert_allclose(d.as_array(), [0.0, 0.6, 0.8])

    def test_from_vector_rejects_zero(self):
        with pytest.raises(ValueError, match="zero"):
            UnitDirection.from_vector([0.0, 0.0, 0.0])

    def test_immutable(self):
        with pytest.raises(AttributeError):
            FRONT.front = 0.0

    def test_negation(self):
        assert -FRONT == UnitDirection(-1.0, 0.0, 0.0)

    def test_not_renormalized(self):
        """Components are stored exactly as given."""
        d = UnitDirection(2.0, 0.0, 0.0)
        assert d.front == 2.0


class TestAsDirection:
    def test_passthrough(self):
        assert as_direction(FRONT) is FRONT

    def test_sequence(self):
        assert as_direction((0, 0, 1)) == UnitDirection(0.0, 0.0, 1.0)

    def test_wrong_length(self):
        with pytest.raises(ValueError, match="3 components"):
            as_direction([1.0, 0.0])


class TestConversions:
    """Tests for Cartesian conversions."""

    POSITIONS = np.array([[1.0, 0.0, 0.0], [0.0, 2.0, 1.0], [-1.0, -1.0, -0.5]])

    @pytest.mark.parametrize(
        "system", [CoordinateSystem.CYLINDRICAL, CoordinateSystem.SPHERICAL]
    )
    def test_round_trip(self, system):
        converted = from_cartesian_3d(self.POSITIONS, system)
        assert_allclose(to_cartesian_3d(converted, system), self.POSITIONS, atol=1e-12)

    def test_polar_drops_up(self):
        polar = from_cartesian_3d(self.POSITIONS, CoordinateSystem.POLAR)
        assert polar.shape == (3, 2)
        assert_allclose(polar[1], [2.0, np.pi / 2])

    def test_cartesian_2d_padded(self):
        result = to_cartesian_3d([[1.0, 2.0]], CoordinateSystem.CARTESIAN)
        assert_allclose(result, [[1.0, 2.0, 0.0]])

    def test_unknown_system(self):
        with pytest.raises(ValueError):
            from_cartesian_3d(self.POSITIONS, "geodetic")
