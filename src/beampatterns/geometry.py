"""
Element layouts for canonical array shapes.

Every generator returns a new (N, 3) array of (front, right, up) offsets in
meters about the array reference point.
"""

import numpy as np

from beampatterns.core import (
    ArrayGeometryError,
    require_count,
    require_finite,
    require_positive,
)


DEFAULT_MIN_EL_ANGLE = -np.pi / 2 + 1e-6
DEFAULT_MAX_EL_ANGLE = np.pi / 2 - 1e-6


def bp_con_ring(radii, num_elements, offsets):
    """
    Element locations of a circular planar array in the front/right plane

    Parameters:
    -----------
    radii : array_like
        Radius of each ring in meters
    num_elements : array_like of int
        Number of elements in each ring
    offsets : array_like
        Angle in radians of the first element of each ring. Subsequent
        elements step clockwise, toward decreasing angle.

    Returns:
    --------
    ndarray, shape (sum(num_elements), 3)
    """
    radii = np.atleast_1d(np.asarray(radii, dtype=np.float64))
    offsets = np.atleast_1d(np.asarray(offsets, dtype=np.float64))
    counts = np.atleast_1d(np.asarray(num_elements))

    if not (radii.ndim == counts.ndim == offsets.ndim == 1):
        raise ArrayGeometryError("Ring parameters must be one-dimensional")
    if not (len(radii) == len(counts) == len(offsets)):
        raise ArrayGeometryError(
            f"Ring parameters must have equal lengths, got radii={len(radii)}, "
            f"num_elements={len(counts)}, offsets={len(offsets)}"
        )
    if len(radii) == 0:
        raise ArrayGeometryError("At least one ring is required")

    rings = []
    for n, (radius, count, offset) in enumerate(zip(radii, counts, offsets)):
        radius = require_positive(f"radii[{n}]", radius)
        count = require_count(f"num_elements[{n}]", count)
        offset = require_finite(f"offsets[{n}]", offset)
        angles = offset - np.arange(count) * (2 * np.pi / count)

        positions = np.zeros((count, 3))
        positions[:, 0] = radius * np.cos(angles)
        positions[:, 1] = radius * np.sin(angles)
        rings.append(positions)

    return np.concatenate(rings, axis=0)


def bp_con_uniform(
    num_e_front, spacing_front, num_e_right, spacing_right, num_e_up, spacing_up
):
    """
    Element locations of a uniformly spaced array in 3 dimensions

    Each axis is centered about zero. Rows are ordered up-major, then right,
    then front.
    """
    num_e_front = require_count("num_e_front", num_e_front)
    num_e_right = require_count("num_e_right", num_e_right)
    num_e_up = require_count("num_e_up", num_e_up)
    spacing_front = require_positive("spacing_front", spacing_front)
    spacing_right = require_positive("spacing_right", spacing_right)
    spacing_up = require_positive("spacing_up", spacing_up)

    front = (np.arange(num_e_front) - (num_e_front - 1) / 2.0) * spacing_front
    right = (np.arange(num_e_right) - (num_e_right - 1) / 2.0) * spacing_right
    up = (np.arange(num_e_up) - (num_e_up - 1) / 2.0) * spacing_up

    grid_up, grid_right, grid_front = np.meshgrid(up, right, front, indexing="ij")
    return np.column_stack(
        [grid_front.ravel(), grid_right.ravel(), grid_up.ravel()]
    )


def bp_con_cylinder(radius, num_elem_az, num_e_up, spacing_up, offset=0.0):
    """
    Element locations of a cylindrical array

    Parameters:
    -----------
    radius : float
        Radius of the cylinder in meters
    num_elem_az : int
        Number of elements around each ring
    num_e_up : int
        Number of rings stacked along the up axis
    spacing_up : float
        Spacing in meters between rings
    offset : float
        Angle in radians of the first element; angles decrease from there

    Returns:
    --------
    ndarray, shape (num_elem_az * num_e_up, 3)
        Rows ordered azimuth-major, up-minor
    """
    radius = require_positive("radius", radius)
    num_elem_az = require_count("num_elem_az", num_elem_az)
    num_e_up = require_count("num_e_up", num_e_up)
    spacing_up = require_positive("spacing_up", spacing_up)
    offset = require_finite("offset", offset)

    angles = offset - np.arange(num_elem_az) * (2 * np.pi / num_elem_az)
    up = -(num_e_up - 1) * spacing_up / 2 + np.arange(num_e_up) * spacing_up

    positions = np.zeros((num_elem_az * num_e_up, 3))
    positions[:, 0] = np.repeat(radius * np.cos(angles), num_e_up)
    positions[:, 1] = np.repeat(radius * np.sin(angles), num_e_up)
    positions[:, 2] = np.tile(up, num_elem_az)
    return positions


def sphere_elevations(
    num_elem_el, min_el_angle=DEFAULT_MIN_EL_ANGLE, max_el_angle=DEFAULT_MAX_EL_ANGLE
):
    """Latitude ring angles, inclusive of both bounds, midpoint for one ring"""
    num_elem_el = require_count("num_elem_el", num_elem_el)
    if not (np.isfinite(min_el_angle) and np.isfinite(max_el_angle)):
        raise ArrayGeometryError("Elevation bounds must be finite")
    if min_el_angle > max_el_angle:
        raise ArrayGeometryError(
            f"min_el_angle ({min_el_angle}) exceeds max_el_angle ({max_el_angle})"
        )

    if num_elem_el == 1:
        return np.array([(min_el_angle + max_el_angle) / 2.0])
    return np.linspace(min_el_angle, max_el_angle, num_elem_el)


def bp_con_sphere(
    radius,
    num_elem_az,
    num_elem_el,
    min_el_angle=DEFAULT_MIN_EL_ANGLE,
    max_el_angle=DEFAULT_MAX_EL_ANGLE,
):
    """
    Element locations of a spherical array

    ``num_elem_el`` latitude rings of ``num_elem_az`` elements each. Rows are
    ordered elevation-major.
    """
    radius = require_positive("radius", radius)
    num_elem_az = require_count("num_elem_az", num_elem_az)
    elevations = sphere_elevations(num_elem_el, min_el_angle, max_el_angle)
    azimuths = 2.0 * np.pi * np.arange(num_elem_az) / num_elem_az

    el, az = np.meshgrid(elevations, azimuths, indexing="ij")
    return radius * np.column_stack(
        [
            (np.cos(el) * np.cos(az)).ravel(),
            (np.cos(el) * np.sin(az)).ravel(),
            np.sin(el).ravel(),
        ]
    )
