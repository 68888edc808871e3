"""Shared pytest fixtures for all test modules."""
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from beampatterns.coordinates import UnitDirection
from beampatterns.models import CylinderArrayModel, RingArrayModel, SphereArrayModel


# === Direction Fixtures ===

@pytest.fixture
def front():
    return UnitDirection(1.0, 0.0, 0.0)


@pytest.fixture
def back():
    return UnitDirection(-1.0, 0.0, 0.0)


@pytest.fixture
def oblique():
    """Off-axis direction with components on every axis."""
    return UnitDirection.from_angles(0.4, 0.25)


# === Model Fixtures ===

@pytest.fixture
def cylinder():
    """Reference cylinder: R=1 m, 8 x 4 elements, 0.5 m vertical spacing."""
    return CylinderArrayModel(1.0, 8, 4, 0.5)


@pytest.fixture
def baffled_cylinder():
    return CylinderArrayModel(1.0, 8, 4, 0.5, back_baffle=True)


@pytest.fixture
def sphere():
    return SphereArrayModel(0.5, 8, 5)


@pytest.fixture
def small_ring():
    return RingArrayModel([0.5], [4], [0.0])


@pytest.fixture
def frequencies():
    return np.array([250.0, 500.0, 1000.0, 2000.0])


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
