import numbers
from abc import ABC, abstractmethod

import numpy as np
import numpy.typing as npt

from beampatterns.coordinates import FRONT, UnitDirection, as_direction
from beampatterns.directivity import directivity_by_integration
from beampatterns.frequencies import as_frequencies


DEFAULT_SOUND_SPEED = 1500.0


class ArrayGeometryError(ValueError):
    """Raised when an array model or element layout cannot be constructed."""


class BeamPatternModel(ABC):
    """
    Shared contract for far-field array models.

    A model is immutable once constructed. Every query is a pure function of
    its arguments and the construction parameters, so one instance can be
    shared between threads without locking.
    """

    #: Units of the values returned by ``beam_level``.
    level_units = "power"

    @abstractmethod
    def beam_level(
        self,
        arrival: UnitDirection,
        frequencies,
        steering: UnitDirection = FRONT,
        sound_speed: float = DEFAULT_SOUND_SPEED,
    ) -> npt.NDArray[np.float64]:
        """
        Normalized array gain for one arrival direction

        Parameters:
        -----------
        arrival : UnitDirection
            Direction the plane wave arrives from
        frequencies : FrequencySequence or array_like
            Frequencies in Hz
        steering : UnitDirection
            Direction the array is steered toward
        sound_speed : float
            Speed of sound in meters/second

        Returns:
        --------
        ndarray
            One non-negative gain per frequency, in ``level_units``
        """
        pass

    def directivity(
        self,
        frequencies,
        steering: UnitDirection = FRONT,
        sound_speed: float = DEFAULT_SOUND_SPEED,
    ) -> npt.NDArray[np.float64]:
        """
        Directivity gain per frequency, 4π divided by the integrated beam level.

        Models without a closed form use numerical integration of their own
        ``beam_level`` over the sphere of arrival directions.
        """
        return directivity_by_integration(self, frequencies, steering, sound_speed)

    def beam_pattern(
        self,
        arrivals,
        frequencies,
        steering: UnitDirection = FRONT,
        sound_speed: float = DEFAULT_SOUND_SPEED,
    ) -> npt.NDArray[np.float64]:
        """
        Evaluate ``beam_level`` over several arrival directions

        Returns:
        --------
        ndarray, shape (n_directions, n_frequencies)
        """
        frequencies = as_frequencies(frequencies)
        steering = as_direction(steering)
        levels = np.zeros((len(arrivals), frequencies.size))
        for d_idx, arrival in enumerate(arrivals):
            levels[d_idx] = self.beam_level(
                as_direction(arrival), frequencies, steering, sound_speed
            )
        return levels

    def _prepare(self, arrival, frequencies, steering, sound_speed):
        """Validate and normalize the common query arguments"""
        check_sound_speed(sound_speed)
        return (
            as_direction(arrival),
            as_frequencies(frequencies),
            as_direction(steering),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._describe()})"

    def _describe(self) -> str:
        return ""


def check_sound_speed(sound_speed):
    if not (np.isfinite(sound_speed) and sound_speed > 0):
        raise ValueError(f"Sound speed must be positive, got {sound_speed}")


def require_positive(name, value):
    """Fail fast on non-positive geometry parameters"""
    if not np.isfinite(value) or value <= 0:
        raise ArrayGeometryError(f"{name} must be positive, got {value}")
    return value


def require_finite(name, value):
    """Fail fast on NaN or infinite geometry parameters"""
    if not (isinstance(value, numbers.Real) and np.isfinite(value)):
        raise ArrayGeometryError(f"{name} must be finite, got {value}")
    return value


def require_count(name, value):
    """Fail fast on element counts that are not positive integers"""
    if (
        isinstance(value, (bool, np.bool_))
        or not isinstance(value, numbers.Real)
        or not np.isfinite(value)
        or int(value) != value
        or value <= 0
    ):
        raise ArrayGeometryError(f"{name} must be a positive integer, got {value}")
    return int(value)
