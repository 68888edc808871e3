import numpy as np

from beampatterns.coordinates import (
    CoordinateSystem,
    as_direction,
    from_cartesian_3d,
    to_cartesian_3d,
)
from beampatterns.core import DEFAULT_SOUND_SPEED, check_sound_speed
from beampatterns.geometry import (
    DEFAULT_MAX_EL_ANGLE,
    DEFAULT_MIN_EL_ANGLE,
    bp_con_cylinder,
    bp_con_ring,
    bp_con_sphere,
    bp_con_uniform,
)
from beampatterns.models import ElementArrayModel


class ArrayGeometry:
    def __init__(self, coordinates, coordinate_system=CoordinateSystem.CARTESIAN):
        """
        Parameters:
        -----------
        coordinates : ndarray
            Shape (n_sensors, 2) or (n_sensors, 3) depending on dimensions
            Coordinates in the specified system
        coordinate_system : CoordinateSystem
            Specifies the format of input coordinates
        """
        positions = to_cartesian_3d(coordinates, coordinate_system)
        positions.flags.writeable = False
        self._positions = positions

    @property
    def sensor_positions(self):
        """Read-only (n_sensors, 3) table of (front, right, up) offsets"""
        return self._positions

    @property
    def center(self):
        """Centroid of the array in Cartesian coordinates"""
        return np.mean(self._positions, axis=0)

    @property
    def dimensions(self):
        """Returns 2 if all up-coordinates are 0, otherwise 3"""
        if np.allclose(self._positions[:, 2], 0):
            return 2
        return 3

    @property
    def n_sensors(self):
        """Number of sensors in the array"""
        return self._positions.shape[0]

    @classmethod
    def ring(cls, radii, num_elements, offsets):
        """Concentric rings in the front/right plane, see ``bp_con_ring``"""
        return cls(bp_con_ring(radii, num_elements, offsets))

    @classmethod
    def uniform(
        cls, num_e_front, spacing_front, num_e_right, spacing_right, num_e_up, spacing_up
    ):
        """Centered rectilinear grid, see ``bp_con_uniform``"""
        return cls(
            bp_con_uniform(
                num_e_front,
                spacing_front,
                num_e_right,
                spacing_right,
                num_e_up,
                spacing_up,
            )
        )

    @classmethod
    def cylinder(cls, radius, num_elem_az, num_e_up, spacing_up, offset=0.0):
        """Stacked rings along the up axis, see ``bp_con_cylinder``"""
        return cls(bp_con_cylinder(radius, num_elem_az, num_e_up, spacing_up, offset))

    @classmethod
    def sphere(
        cls,
        radius,
        num_elem_az,
        num_elem_el,
        min_el_angle=DEFAULT_MIN_EL_ANGLE,
        max_el_angle=DEFAULT_MAX_EL_ANGLE,
    ):
        """Latitude rings on a sphere, see ``bp_con_sphere``"""
        return cls(
            bp_con_sphere(radius, num_elem_az, num_elem_el, min_el_angle, max_el_angle)
        )

    def delays(self, direction, sound_speed=DEFAULT_SOUND_SPEED, reference_point="center"):
        """
        Calculate time delays for a plane wave from the given direction

        Parameters:
        -----------
        direction : UnitDirection or 3-sequence
            Arrival direction in (front, right, up)
        sound_speed : float
            Speed of sound in meters/second
        reference_point : str or ndarray
            Reference point for delay calculation ('center', 'first', or coordinates)

        Returns:
        --------
        delays : ndarray
            Time delays for each sensor in seconds
        """
        check_sound_speed(sound_speed)
        direction_vector = as_direction(direction).as_array()

        if isinstance(reference_point, str) and reference_point == "center":
            ref_pos = self.center
        elif isinstance(reference_point, str) and reference_point == "first":
            ref_pos = self._positions[0]
        else:
            ref_pos = np.asarray(reference_point, dtype=np.float64)

        projections = (self._positions - ref_pos) @ direction_vector

        # Sensors further along the arrival direction see the wavefront first
        return -projections / sound_speed

    def steering_vector(self, frequency, direction, sound_speed=DEFAULT_SOUND_SPEED):
        """
        Plane-wave phasors exp(j k u · r) for each sensor

        Parameters:
        -----------
        frequency : float
            Frequency in Hz
        direction : UnitDirection or 3-sequence
            Arrival direction in (front, right, up)
        sound_speed : float
            Speed of sound in meters/second

        Returns:
        --------
        ndarray, complex, shape (n_sensors,)
        """
        check_sound_speed(sound_speed)
        k0 = 2 * np.pi * frequency / sound_speed
        return np.exp(1j * k0 * (self._positions @ as_direction(direction).as_array()))

    def get_coordinates(self, coordinate_system=CoordinateSystem.CARTESIAN):
        """
        Get sensor coordinates in the specified coordinate system

        Parameters:
        -----------
        coordinate_system : CoordinateSystem
            Desired coordinate system

        Returns:
        --------
        ndarray
            Sensor coordinates in the requested format
        """
        if coordinate_system == CoordinateSystem.CARTESIAN and self.dimensions == 2:
            return self._positions[:, :2].copy()
        return from_cartesian_3d(self._positions, coordinate_system)

    def model(self, back_baffle=False):
        """Beam-pattern model summing over these sensor positions"""
        return ElementArrayModel(self._positions, back_baffle=back_baffle)

    def plot(self, coordinate_system=None, ax=None, show=None, **kwargs):
        """
        Plot the array geometry

        Parameters:
        -----------
        coordinate_system : CoordinateSystem, optional
            System to plot in (defaults to Cartesian)
        ax : matplotlib.axes.Axes, optional
            Axes to plot on, if None a new figure is created
        show : bool, optional
            Whether to show the plot immediately
        **kwargs : dict
            Additional arguments passed to plotting functions

        Returns:
        --------
        ax : matplotlib.axes.Axes
            The axes containing the plot
        """
        from beampatterns.plotting import plot_array_geometry

        if coordinate_system is None:
            coordinate_system = CoordinateSystem.CARTESIAN

        return plot_array_geometry(
            self.get_coordinates(coordinate_system),
            coordinate_system=coordinate_system,
            array_center=self.center,
            ax=ax,
            show=show,
            **kwargs
        )

    def rotate(self, rotation_matrix):
        """New geometry rotated about its centroid by a 3x3 matrix"""
        center = self.center
        rotated = (self._positions - center) @ np.asarray(rotation_matrix).T
        return ArrayGeometry(rotated + center)

    def translate(self, vector):
        """New geometry shifted by a (front, right, up) vector"""
        vector = np.asarray(vector, dtype=np.float64)
        if vector.shape == (2,):
            vector = np.append(vector, 0)
        return ArrayGeometry(self._positions + vector)

    def __len__(self):
        return self.n_sensors

    def __repr__(self):
        return f"ArrayGeometry(n_sensors={self.n_sensors}, dimensions={self.dimensions})"
