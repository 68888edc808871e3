import logging

import numpy as np
import numpy.typing as npt

from beampatterns.coordinates import FRONT, UnitDirection, as_direction
from beampatterns.core import (
    DEFAULT_SOUND_SPEED,
    ArrayGeometryError,
    BeamPatternModel,
    check_sound_speed,
    require_count,
    require_positive,
)
from beampatterns.frequencies import as_frequencies
from beampatterns.geometry import (
    DEFAULT_MAX_EL_ANGLE,
    DEFAULT_MIN_EL_ANGLE,
    bp_con_ring,
    bp_con_sphere,
    bp_con_uniform,
    sphere_elevations,
)

logger = logging.getLogger(__name__)

# Keeps the Dirichlet kernel continuous at zero phase without a branch
DIRICHLET_EPSILON = 1e-200


def _read_only(array):
    array = np.array(array, dtype=np.float64)
    array.flags.writeable = False
    return array


class ElementArrayModel(BeamPatternModel):
    """
    Array of isotropic elements at arbitrary positions.

    The beam level is the power of the normalized phasor sum

        b = |1/N Σ_n exp(j k0 (u_a - u_s) · r_n)|²

    with k0 = 2πf/c.
    """

    def __init__(self, positions, back_baffle: bool = False) -> None:
        """
        Parameters:
        -----------
        positions : ndarray
            Shape (n_elements, 3), (front, right, up) offsets in meters
        back_baffle : bool
            If True, arrivals with front <= 0 have zero gain
        """
        positions = np.asarray(positions, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ArrayGeometryError(
                f"Element positions must have shape (N, 3), got {positions.shape}"
            )
        if positions.shape[0] == 0:
            raise ArrayGeometryError("At least one element is required")
        if not np.all(np.isfinite(positions)):
            raise ArrayGeometryError("Element positions must be finite")

        self._positions = _read_only(positions)
        self.back_baffle = bool(back_baffle)

        logger.debug(f"Constructed {self!r}")

    @property
    def positions(self) -> npt.NDArray[np.float64]:
        return self._positions

    @property
    def n_elements(self) -> int:
        return self._positions.shape[0]

    def beam_level(
        self,
        arrival: UnitDirection,
        frequencies,
        steering: UnitDirection = FRONT,
        sound_speed: float = DEFAULT_SOUND_SPEED,
    ) -> npt.NDArray[np.float64]:
        arrival, frequencies, steering = self._prepare(
            arrival, frequencies, steering, sound_speed
        )
        if self.back_baffle and arrival.front <= 0.0:
            return np.zeros(frequencies.size)

        projection = self._positions @ (arrival.as_array() - steering.as_array())
        k0 = 2 * np.pi * frequencies / sound_speed
        total = np.exp(1j * np.outer(k0, projection)).sum(axis=1)
        return np.abs(total) ** 2 / self.n_elements**2

    def directivity(
        self,
        frequencies,
        steering: UnitDirection = FRONT,
        sound_speed: float = DEFAULT_SOUND_SPEED,
    ) -> npt.NDArray[np.float64]:
        """
        Directivity gain from the pairwise closed form

        Averaging exp(j k u · d) over the sphere gives sin(k|d|)/(k|d|), so
        the mean beam level is

            1/N² Σ_mn exp(-j k u_s · (r_m - r_n)) sinc(k |r_m - r_n|)

        The back-baffled half-space has no such form and is integrated
        numerically instead.
        """
        if self.back_baffle:
            logger.debug("Back baffle enabled, using numerical directivity")
            return super().directivity(frequencies, steering, sound_speed)

        check_sound_speed(sound_speed)
        frequencies = as_frequencies(frequencies)
        steering = as_direction(steering)
        separation = self._positions[:, None, :] - self._positions[None, :, :]
        distance = np.linalg.norm(separation, axis=-1)
        steer_projection = separation @ steering.as_array()

        average = np.zeros(frequencies.size)
        for f_idx, freq in enumerate(frequencies):
            k0 = 2 * np.pi * freq / sound_speed
            # np.sinc is the normalized sin(πx)/(πx)
            terms = np.exp(-1j * k0 * steer_projection) * np.sinc(k0 * distance / np.pi)
            average[f_idx] = terms.sum().real / self.n_elements**2

        return 1.0 / average

    def _describe(self):
        return f"n_elements={self.n_elements}, back_baffle={self.back_baffle}"


class RingArrayModel(ElementArrayModel):
    """Concentric rings of elements in the front/right plane."""

    def __init__(self, radii, num_elements, offsets, back_baffle=False):
        positions = bp_con_ring(radii, num_elements, offsets)
        self.radii = tuple(float(r) for r in np.atleast_1d(radii))
        self.num_elements = tuple(int(n) for n in np.atleast_1d(num_elements))
        self.offsets = tuple(float(o) for o in np.atleast_1d(offsets))
        super().__init__(positions, back_baffle)

    def _describe(self):
        return (
            f"radii={self.radii}, num_elements={self.num_elements}, "
            f"offsets={self.offsets}, back_baffle={self.back_baffle}"
        )


class UniformArrayModel(ElementArrayModel):
    """Centered rectilinear grid of elements."""

    def __init__(
        self,
        num_e_front,
        spacing_front,
        num_e_right,
        spacing_right,
        num_e_up,
        spacing_up,
        back_baffle=False,
    ):
        positions = bp_con_uniform(
            num_e_front, spacing_front, num_e_right, spacing_right, num_e_up, spacing_up
        )
        self.counts = (int(num_e_front), int(num_e_right), int(num_e_up))
        self.spacings = (float(spacing_front), float(spacing_right), float(spacing_up))
        super().__init__(positions, back_baffle)

    def _describe(self):
        return (
            f"counts={self.counts}, spacings={self.spacings}, "
            f"back_baffle={self.back_baffle}"
        )


class CylinderArrayModel(BeamPatternModel):
    """
    Uniform cylindrical array: a ring of M elements of radius R repeated on
    K levels spaced d apart along the up axis.

    The response separates into an azimuth factor, summed over the ring,
    and a closed-form Dirichlet kernel for the vertical line array. The
    returned level is the power |az · el|².
    """

    def __init__(
        self,
        radius: float,
        num_elem_az: int,
        num_elem_el: int,
        spacing_el: float,
        back_baffle: bool = False,
    ) -> None:
        """
        Parameters:
        -----------
        radius : float
            Radius of the cylinder in meters (R)
        num_elem_az : int
            Number of elements around the circle (M)
        num_elem_el : int
            Number of elements along the up axis (K)
        spacing_el : float
            Element spacing along the up axis in meters
        back_baffle : bool
            If True, arrivals with front <= 0 have zero gain
        """
        self.radius = float(require_positive("radius", radius))
        self.num_elem_az = require_count("num_elem_az", num_elem_az)
        self.num_elem_el = require_count("num_elem_el", num_elem_el)
        self.spacing_el = float(require_positive("spacing_el", spacing_el))
        self.back_baffle = bool(back_baffle)

        logger.debug(f"Constructed {self!r}")

    def beam_level(
        self,
        arrival: UnitDirection,
        frequencies,
        steering: UnitDirection = FRONT,
        sound_speed: float = DEFAULT_SOUND_SPEED,
    ) -> npt.NDArray[np.float64]:
        arrival, frequencies, steering = self._prepare(
            arrival, frequencies, steering, sound_speed
        )
        if self.back_baffle and arrival.front <= 0.0:
            return np.zeros(frequencies.size)

        az_factor = self._azimuth_factor(frequencies, arrival, steering, sound_speed)

        # kd = π d f / c * (sin θ_a - sin θ_s)
        kd = np.pi * self.spacing_el / sound_speed * (arrival.up - steering.up)
        kd = kd * frequencies
        el_factor = (np.sin(self.num_elem_el * kd) + DIRICHLET_EPSILON) / (
            self.num_elem_el * np.sin(kd) + DIRICHLET_EPSILON
        )

        return np.abs(az_factor * el_factor) ** 2

    def _azimuth_factor(self, frequencies, arrival, steering, sound_speed):
        """Magnitude of the normalized ring sum for each frequency"""
        cos_theta_a = np.hypot(arrival.front, arrival.right)
        cos_theta_s = np.hypot(steering.front, steering.right)
        phi_a = np.arctan2(arrival.right, arrival.front)
        phi_s = np.arctan2(steering.right, steering.front)

        alpha = 2 * np.pi * np.arange(self.num_elem_az) / self.num_elem_az
        phase_diff = cos_theta_a * np.cos(alpha - phi_a) - cos_theta_s * np.cos(
            alpha - phi_s
        )

        kR = 2 * np.pi * frequencies / sound_speed * self.radius
        total = np.exp(-1j * np.outer(kR, phase_diff)).sum(axis=1)
        return np.abs(total) / self.num_elem_az

    def _describe(self):
        return (
            f"radius={self.radius}, num_elem_az={self.num_elem_az}, "
            f"num_elem_el={self.num_elem_el}, spacing_el={self.spacing_el}, "
            f"back_baffle={self.back_baffle}"
        )


class SphereArrayModel(BeamPatternModel):
    """
    Spherical array of M elements on each of K latitude rings.

    Element (m, k) sits at R (cos θ_k cos φ_m, cos θ_k sin φ_m, sin θ_k) with
    φ_m = 2πm/M and θ_k spaced evenly from ``min_el_angle`` to
    ``max_el_angle``. The beam level is the power of the direct sum over all
    M·K elements.
    """

    def __init__(
        self,
        radius: float,
        num_elem_az: int,
        num_elem_el: int,
        min_el_angle: float = DEFAULT_MIN_EL_ANGLE,
        max_el_angle: float = DEFAULT_MAX_EL_ANGLE,
        back_baffle: bool = False,
    ) -> None:
        self.radius = float(require_positive("radius", radius))
        self.num_elem_az = require_count("num_elem_az", num_elem_az)
        self.num_elem_el = require_count("num_elem_el", num_elem_el)
        self.min_el_angle = float(min_el_angle)
        self.max_el_angle = float(max_el_angle)
        self.back_baffle = bool(back_baffle)

        self._elevations = _read_only(
            sphere_elevations(self.num_elem_el, self.min_el_angle, self.max_el_angle)
        )
        self._unit_positions = _read_only(
            bp_con_sphere(
                1.0,
                self.num_elem_az,
                self.num_elem_el,
                self.min_el_angle,
                self.max_el_angle,
            )
        )

        logger.debug(f"Constructed {self!r}")

    @property
    def elevations(self) -> npt.NDArray[np.float64]:
        """Latitude ring angles θ_k in radians"""
        return self._elevations

    @property
    def n_elements(self) -> int:
        return self.num_elem_az * self.num_elem_el

    def beam_level(
        self,
        arrival: UnitDirection,
        frequencies,
        steering: UnitDirection = FRONT,
        sound_speed: float = DEFAULT_SOUND_SPEED,
    ) -> npt.NDArray[np.float64]:
        arrival, frequencies, steering = self._prepare(
            arrival, frequencies, steering, sound_speed
        )
        if self.back_baffle and arrival.front <= 0.0:
            return np.zeros(frequencies.size)

        projection = self._unit_positions @ (arrival.as_array() - steering.as_array())
        k0R = 2.0 * np.pi * frequencies / sound_speed * self.radius
        total = np.exp(1j * np.outer(k0R, projection)).sum(axis=1)
        return np.abs(total) ** 2 / self.n_elements**2

    def _describe(self):
        return (
            f"radius={self.radius}, num_elem_az={self.num_elem_az}, "
            f"num_elem_el={self.num_elem_el}, min_el_angle={self.min_el_angle}, "
            f"max_el_angle={self.max_el_angle}, back_baffle={self.back_baffle}"
        )


MODEL_TYPES = {
    "ring": RingArrayModel,
    "uniform": UniformArrayModel,
    "cylinder": CylinderArrayModel,
    "sphere": SphereArrayModel,
}


def levels_to_db(levels, floor_db=-300.0):
    """Convert power levels to decibels, clipping zeros at ``floor_db``"""
    levels = np.asarray(levels, dtype=np.float64)
    with np.errstate(divide="ignore"):
        return np.maximum(10 * np.log10(levels), floor_db)
