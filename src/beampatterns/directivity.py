"""
Numerical directivity for array models without a closed form.

The beam level is integrated over the unit sphere of arrival directions.
Elevation uses Gauss-Legendre nodes in sin(elevation), which absorbs the
cos(elevation) area element; azimuth is periodic so equally spaced samples
are used.
"""

import logging

import numpy as np
from scipy.special import roots_legendre

from beampatterns.coordinates import FRONT, as_direction
from beampatterns.frequencies import as_frequencies

logger = logging.getLogger(__name__)

DEFAULT_N_ELEVATION = 64
DEFAULT_N_AZIMUTH = 128


def sphere_quadrature(n_elevation=DEFAULT_N_ELEVATION, n_azimuth=DEFAULT_N_AZIMUTH):
    """
    Quadrature grid over the unit sphere

    Returns:
    --------
    directions : ndarray, shape (n_elevation * n_azimuth, 3)
        Unit vectors in (front, right, up), elevation-major
    weights : ndarray, shape (n_elevation * n_azimuth,)
        Weights summing to 1, so a weighted sum is the sphere average
    """
    if n_elevation < 1 or n_azimuth < 1:
        raise ValueError("Quadrature needs at least one node per axis")

    sin_el, el_weights = roots_legendre(n_elevation)
    cos_el = np.sqrt(1.0 - sin_el**2)
    azimuth = 2 * np.pi * np.arange(n_azimuth) / n_azimuth

    directions = np.stack(
        [
            np.outer(cos_el, np.cos(azimuth)),
            np.outer(cos_el, np.sin(azimuth)),
            np.repeat(sin_el[:, None], n_azimuth, axis=1),
        ],
        axis=-1,
    ).reshape(-1, 3)

    # Legendre weights sum to 2 over sin(elevation) in [-1, 1]
    weights = np.repeat(el_weights / 2.0, n_azimuth) / n_azimuth
    return directions, weights


def integrate_beam_level(
    model,
    frequencies,
    steering=FRONT,
    sound_speed=1500.0,
    n_elevation=DEFAULT_N_ELEVATION,
    n_azimuth=DEFAULT_N_AZIMUTH,
):
    """
    Average a model's beam level over all arrival directions

    Parameters:
    -----------
    model : BeamPatternModel
        Any model implementing ``beam_pattern``/``beam_level``
    frequencies : FrequencySequence or array_like
        Frequencies in Hz
    steering : UnitDirection
        Steering direction held fixed during integration
    sound_speed : float
        Speed of sound in meters/second
    n_elevation, n_azimuth : int
        Number of quadrature nodes along each angle

    Returns:
    --------
    ndarray
        (1/4π) ∫ b dΩ for each frequency
    """
    frequencies = as_frequencies(frequencies)
    steering = as_direction(steering)
    directions, weights = sphere_quadrature(n_elevation, n_azimuth)

    logger.debug(
        f"Integrating {type(model).__name__} over {n_elevation}x{n_azimuth} "
        f"directions for {frequencies.size} frequencies"
    )

    levels = model.beam_pattern(directions, frequencies, steering, sound_speed)
    return weights @ levels


def directivity_by_integration(
    model,
    frequencies,
    steering=FRONT,
    sound_speed=1500.0,
    n_elevation=DEFAULT_N_ELEVATION,
    n_azimuth=DEFAULT_N_AZIMUTH,
):
    """Directivity gain 4π / ∫ b dΩ, infinite where the integral vanishes"""
    average = integrate_beam_level(
        model, frequencies, steering, sound_speed, n_elevation, n_azimuth
    )
    with np.errstate(divide="ignore"):
        return 1.0 / average
