"""Beam-pattern study configuration management."""
import logging
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Literal, Optional, Union

import yaml

from beampatterns.coordinates import UnitDirection
from beampatterns.core import ArrayGeometryError, BeamPatternModel
from beampatterns.directivity import (
    DEFAULT_N_AZIMUTH,
    DEFAULT_N_ELEVATION,
    directivity_by_integration,
)
from beampatterns.frequencies import DataSequence
from beampatterns.models import MODEL_TYPES, ElementArrayModel

logger = logging.getLogger(__name__)


@dataclass
class BeamPatternConfig:
    """Configuration for an array model and the queries run against it.

    Attributes:
        shape: Array family (ring, uniform, cylinder or sphere)
        radius: Cylinder or sphere radius in meters
        num_elem_az: Elements around each ring (cylinder, sphere)
        num_elem_el: Rings along up (cylinder) or in latitude (sphere)
        spacing_el: Vertical spacing of cylinder rings in meters
        min_el_angle: Lowest sphere latitude in radians
        max_el_angle: Highest sphere latitude in radians
        radii: Ring radii in meters (ring)
        num_elements: Elements per ring (ring)
        offsets: First-element angle per ring in radians (ring)
        counts: Elements along (front, right, up) (uniform)
        spacings: Spacing along (front, right, up) in meters (uniform)
        back_baffle: Zero gain for arrivals from behind the array
        sound_speed: Speed of sound in meters/second
        frequencies: Query frequencies in Hz
        steering: Steering direction as (front, right, up)
        n_elevation: Elevation nodes for numerical directivity
        n_azimuth: Azimuth nodes for numerical directivity
    """

    shape: Literal["ring", "uniform", "cylinder", "sphere"] = "cylinder"

    # Cylinder / sphere
    radius: float = 1.0
    num_elem_az: int = 8
    num_elem_el: int = 4
    spacing_el: float = 0.5
    min_el_angle: float = -math.pi / 2 + 1e-6
    max_el_angle: float = math.pi / 2 - 1e-6

    # Ring
    radii: List[float] = field(default_factory=lambda: [1.0])
    num_elements: List[int] = field(default_factory=lambda: [8])
    offsets: List[float] = field(default_factory=lambda: [0.0])

    # Uniform grid
    counts: List[int] = field(default_factory=lambda: [4, 4, 1])
    spacings: List[float] = field(default_factory=lambda: [0.5, 0.5, 0.5])

    back_baffle: bool = False

    # Queries
    sound_speed: float = 1500.0
    frequencies: List[float] = field(default_factory=lambda: [1000.0])
    steering: List[float] = field(default_factory=lambda: [1.0, 0.0, 0.0])
    n_elevation: int = DEFAULT_N_ELEVATION
    n_azimuth: int = DEFAULT_N_AZIMUTH

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "BeamPatternConfig":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    def validate(self) -> List[str]:
        """Validate configuration parameters.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.shape not in MODEL_TYPES:
            errors.append(
                f"shape must be one of {sorted(MODEL_TYPES)}, got {self.shape!r}"
            )

        if self.shape in ("cylinder", "sphere"):
            if not self.radius > 0:
                errors.append("radius must be positive")
            if not _is_count(self.num_elem_az):
                errors.append("num_elem_az must be a positive integer")
            if not _is_count(self.num_elem_el):
                errors.append("num_elem_el must be a positive integer")

        if self.shape == "cylinder" and not self.spacing_el > 0:
            errors.append("spacing_el must be positive")

        if self.shape == "sphere" and self.min_el_angle > self.max_el_angle:
            errors.append("min_el_angle must not exceed max_el_angle")

        if self.shape == "ring":
            if not (len(self.radii) == len(self.num_elements) == len(self.offsets)):
                errors.append("radii, num_elements and offsets must have equal lengths")
            if not self.radii:
                errors.append("radii must not be empty")
            if any(not r > 0 for r in self.radii):
                errors.append("radii must be positive")
            if any(not _is_count(n) for n in self.num_elements):
                errors.append("num_elements must be positive integers")

        if self.shape == "uniform":
            if len(self.counts) != 3 or len(self.spacings) != 3:
                errors.append("counts and spacings need (front, right, up) values")
            if any(not _is_count(n) for n in self.counts):
                errors.append("counts must be positive integers")
            if any(not s > 0 for s in self.spacings):
                errors.append("spacings must be positive")

        if not self.sound_speed > 0:
            errors.append("sound_speed must be positive")

        if not self.frequencies:
            errors.append("frequencies must not be empty")
        elif any(not f > 0 for f in self.frequencies):
            errors.append("frequencies must be positive")

        if len(self.steering) != 3:
            errors.append("steering must have (front, right, up) components")
        elif not math.isclose(math.hypot(*self.steering), 1.0, rel_tol=1e-6):
            errors.append("steering must be a unit vector")

        if not (_is_count(self.n_elevation) and _is_count(self.n_azimuth)):
            errors.append("n_elevation and n_azimuth must be positive integers")

        return errors

    def build_model(self) -> BeamPatternModel:
        """Construct the configured array model.

        Raises:
            ArrayGeometryError: listing every validation error
        """
        errors = self.validate()
        if errors:
            raise ArrayGeometryError("; ".join(errors))

        model_type = MODEL_TYPES[self.shape]
        if self.shape == "ring":
            model = model_type(
                self.radii, self.num_elements, self.offsets, self.back_baffle
            )
        elif self.shape == "uniform":
            (n_front, n_right, n_up) = self.counts
            (d_front, d_right, d_up) = self.spacings
            model = model_type(
                n_front, d_front, n_right, d_right, n_up, d_up, self.back_baffle
            )
        elif self.shape == "cylinder":
            model = model_type(
                self.radius,
                self.num_elem_az,
                self.num_elem_el,
                self.spacing_el,
                self.back_baffle,
            )
        else:
            model = model_type(
                self.radius,
                self.num_elem_az,
                self.num_elem_el,
                self.min_el_angle,
                self.max_el_angle,
                self.back_baffle,
            )

        logger.info(f"Built {model!r} from configuration")
        return model

    def frequency_sequence(self) -> DataSequence:
        return DataSequence(self.frequencies)

    def steering_direction(self) -> UnitDirection:
        return UnitDirection(*(float(v) for v in self.steering))

    def directivity(self, model: Optional[BeamPatternModel] = None):
        """Directivity of the configured (or given) model at the configured queries"""
        model = model or self.build_model()
        if isinstance(model, ElementArrayModel) and not model.back_baffle:
            return model.directivity(
                self.frequency_sequence(), self.steering_direction(), self.sound_speed
            )
        return directivity_by_integration(
            model,
            self.frequency_sequence(),
            self.steering_direction(),
            self.sound_speed,
            self.n_elevation,
            self.n_azimuth,
        )


def _is_count(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, int) and value > 0
