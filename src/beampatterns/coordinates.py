from dataclasses import dataclass
from enum import StrEnum

import numpy as np


class CoordinateSystem(StrEnum):
    CARTESIAN = "cartesian"  # (front, right, up)
    POLAR = "polar"  # 2D only: (r, θ)
    CYLINDRICAL = "cylindrical"  # (r, θ, up)
    SPHERICAL = "spherical"  # (r, θ, φ) where θ is azimuth and φ is elevation


@dataclass(frozen=True)
class UnitDirection:
    """
    Direction of arrival or steering in body coordinates.

    Components are projections onto the front, right and up axes. The
    vector is expected to have unit length; it is never re-normalized here.
    """

    front: float = 1.0
    right: float = 0.0
    up: float = 0.0

    @classmethod
    def from_angles(cls, azimuth, elevation=0.0, degrees=False):
        """
        Build a direction from azimuth and elevation

        Parameters:
        -----------
        azimuth : float
            Angle in the front/right plane, measured from front toward right
        elevation : float
            Angle above the front/right plane, positive toward up
        degrees : bool
            If True, angles are in degrees, otherwise radians
        """
        if degrees:
            azimuth = np.radians(azimuth)
            elevation = np.radians(elevation)
        return cls(
            float(np.cos(elevation) * np.cos(azimuth)),
            float(np.cos(elevation) * np.sin(azimuth)),
            float(np.sin(elevation)),
        )

    @classmethod
    def from_vector(cls, vector):
        """Normalize an arbitrary non-zero 3-vector into a direction"""
        vector = np.asarray(vector, dtype=np.float64)
        if vector.shape != (3,):
            raise ValueError(f"Direction must have 3 components, got {vector.shape}")
        norm = np.linalg.norm(vector)
        if norm == 0 or not np.isfinite(norm):
            raise ValueError("Cannot normalize a zero or non-finite direction")
        return cls(*(float(v) for v in vector / norm))

    @property
    def azimuth(self):
        return float(np.arctan2(self.right, self.front))

    @property
    def elevation(self):
        return float(np.arctan2(self.up, np.hypot(self.front, self.right)))

    def as_array(self):
        return np.array([self.front, self.right, self.up], dtype=np.float64)

    def __neg__(self):
        return UnitDirection(-self.front, -self.right, -self.up)


FRONT = UnitDirection(1.0, 0.0, 0.0)


def as_direction(value):
    """Accept a UnitDirection or any 3-sequence of (front, right, up)"""
    if isinstance(value, UnitDirection):
        return value
    vector = np.asarray(value, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"Direction must have 3 components, got {vector.shape}")
    return UnitDirection(*(float(v) for v in vector))


def to_cartesian_3d(coordinates, system):
    """Convert coordinates to 3D Cartesian"""
    coords = np.asarray(coordinates, dtype=np.float64)
    result = np.zeros((coords.shape[0], 3))

    if system == CoordinateSystem.CARTESIAN:
        if coords.shape[1] == 2:
            # up = 0 by default
            result[:, :2] = coords
        else:
            result[:] = coords

    elif system == CoordinateSystem.POLAR:
        r = coords[:, 0]
        theta = coords[:, 1]
        result[:, 0] = r * np.cos(theta)
        result[:, 1] = r * np.sin(theta)

    elif system == CoordinateSystem.CYLINDRICAL:
        r = coords[:, 0]
        theta = coords[:, 1]
        result[:, 0] = r * np.cos(theta)
        result[:, 1] = r * np.sin(theta)
        if coords.shape[1] > 2:
            result[:, 2] = coords[:, 2]

    elif system == CoordinateSystem.SPHERICAL:
        r = coords[:, 0]
        theta = coords[:, 1]  # azimuth
        if coords.shape[1] > 2:
            phi = coords[:, 2]  # elevation
        else:
            phi = np.zeros_like(r)

        result[:, 0] = r * np.cos(theta) * np.cos(phi)
        result[:, 1] = r * np.sin(theta) * np.cos(phi)
        result[:, 2] = r * np.sin(phi)

    else:
        raise ValueError(f"Unknown coordinate system: {system}")

    return result


def from_cartesian_3d(positions, system):
    """Convert (N, 3) Cartesian positions into the requested system"""
    cart = np.asarray(positions, dtype=np.float64)
    front, right, up = cart[:, 0], cart[:, 1], cart[:, 2]
    r_fr = np.hypot(front, right)

    if system == CoordinateSystem.CARTESIAN:
        return cart.copy()

    if system == CoordinateSystem.POLAR:
        return np.column_stack([r_fr, np.arctan2(right, front)])

    if system == CoordinateSystem.CYLINDRICAL:
        return np.column_stack([r_fr, np.arctan2(right, front), up])

    if system == CoordinateSystem.SPHERICAL:
        return np.column_stack(
            [np.hypot(r_fr, up), np.arctan2(right, front), np.arctan2(up, r_fr)]
        )

    raise ValueError(f"Unknown coordinate system: {system}")
