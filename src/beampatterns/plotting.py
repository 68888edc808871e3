import numpy as np
import matplotlib.pyplot as plt

from beampatterns.coordinates import (
    FRONT,
    CoordinateSystem,
    UnitDirection,
    to_cartesian_3d,
)
from beampatterns.models import levels_to_db

AXIS_LABELS = ("Front", "Right", "Up")


def plot_array_geometry(
    coords,
    coordinate_system=CoordinateSystem.CARTESIAN,
    array_center=None,
    ax=None,
    show=None,
    marker="o",
    color="blue",
    size=50,
    show_center=True,
    show_labels=True,
    title=None,
    equal_aspect=True,
    **kwargs
):
    """
    Scatter sensor positions given in any supported coordinate system

    Polar input is drawn in the front/right plane; cylindrical and spherical
    input, and three-column Cartesian input, get a 3D axes.

    Parameters:
    -----------
    coords : ndarray
        Coordinates in ``coordinate_system``
    coordinate_system : CoordinateSystem
        Format of ``coords``
    array_center : ndarray, optional
        Cartesian center marked with a red cross
    ax : matplotlib.axes.Axes, optional
        Axes to draw on, if None a new figure is created
    show : bool, optional
        Call ``plt.show()`` before returning
    show_labels : bool
        Annotate each sensor with its row index
    title : str, optional
        Defaults to "Array Geometry - <system>"
    equal_aspect : bool
        Use the same scale on every axis

    Returns:
    --------
    ax : matplotlib.axes.Axes
    """
    coords = np.asarray(coords)
    is_3d = coordinate_system in (
        CoordinateSystem.CYLINDRICAL,
        CoordinateSystem.SPHERICAL,
    ) or (coordinate_system == CoordinateSystem.CARTESIAN and coords.shape[1] > 2)
    n_axes = 3 if is_3d else 2
    points = to_cartesian_3d(coords, coordinate_system)[:, :n_axes]

    if ax is None:
        fig = plt.figure(figsize=kwargs.get("figsize", (8, 6)))
        ax = fig.add_subplot(111, projection="3d" if is_3d else None)

    ax.scatter(*points.T, marker=marker, color=color, s=size)
    if show_labels:
        for i, point in enumerate(points):
            ax.text(*point, f" {i}", fontsize=8)
    ax.set_xlabel(AXIS_LABELS[0])
    ax.set_ylabel(AXIS_LABELS[1])
    if is_3d:
        ax.set_zlabel(AXIS_LABELS[2])

    has_center = show_center and array_center is not None
    if has_center:
        center = np.asarray(array_center, dtype=np.float64)[:n_axes]
        ax.scatter(
            *center[:, None], color="red", marker="x", s=size * 1.5, label="Center"
        )

    ax.set_title(title or f"Array Geometry - {coordinate_system.value}")

    if equal_aspect:
        if is_3d:
            _equal_limits_3d(ax, points)
        else:
            ax.set_aspect("equal")

    if has_center:
        ax.legend()

    if show:
        plt.tight_layout()
        plt.show()

    return ax


def _equal_limits_3d(ax, points):
    """Cube-shaped limits around the plotted points"""
    low, high = points.min(axis=0), points.max(axis=0)
    middle = (low + high) / 2
    half = max(np.max(high - low) / 2, 1e-9)
    ax.set_xlim3d(middle[0] - half, middle[0] + half)
    ax.set_ylim3d(middle[1] - half, middle[1] + half)
    ax.set_zlim3d(middle[2] - half, middle[2] + half)
    ax.set_box_aspect((1, 1, 1))


def azimuth_cut(
    model,
    frequency,
    grid_points=360,
    elevation=0.0,
    steering=FRONT,
    sound_speed=1500.0,
):
    """
    Beam level along a cone of constant elevation

    Parameters:
    -----------
    model : BeamPatternModel
        Model to evaluate
    frequency : float
        Frequency in Hz
    grid_points : int
        Number of azimuth samples over [-180, 180) degrees
    elevation : float
        Fixed elevation angle in degrees

    Returns:
    --------
    azimuth_deg : ndarray
    levels : ndarray
        Beam level at each azimuth
    """
    azimuth_deg = np.linspace(-180.0, 180.0, grid_points, endpoint=False)
    arrivals = [
        UnitDirection.from_angles(az, elevation, degrees=True) for az in azimuth_deg
    ]
    levels = model.beam_pattern(arrivals, [frequency], steering, sound_speed)[:, 0]
    return azimuth_deg, levels


def plot_beam_pattern(
    model,
    frequency,
    grid_points=360,
    elevation=0.0,
    steering=FRONT,
    sound_speed=1500.0,
    floor_db=-60.0,
    polar=False,
    ax=None,
    show=None,
    **kwargs
):
    """
    Plot an azimuth cut of a model's beam pattern in dB

    Parameters:
    -----------
    model : BeamPatternModel
        Model to plot pattern for
    frequency : float
        Frequency in Hz
    grid_points : int
        Number of azimuth samples
    elevation : float
        Fixed elevation angle for the cut (in degrees)
    steering : UnitDirection
        Steering direction
    sound_speed : float
        Speed of sound in meters/second
    floor_db : float
        Lowest level drawn
    polar : bool
        Draw on polar axes instead of a Cartesian azimuth axis
    ax : matplotlib.axes.Axes, optional
        Axes to plot on
    show : bool, optional
        Whether to show the plot immediately

    Returns:
    --------
    ax : matplotlib.axes.Axes
        The axes containing the plot
    """
    azimuth_deg, levels = azimuth_cut(
        model, frequency, grid_points, elevation, steering, sound_speed
    )
    levels_db = levels_to_db(levels, floor_db=floor_db)

    if ax is None:
        fig = plt.figure(figsize=kwargs.get("figsize", (8, 6)))
        ax = fig.add_subplot(111, projection="polar" if polar else None)

    if polar:
        ax.plot(np.radians(azimuth_deg), levels_db, color=kwargs.get("color", "C0"))
        ax.set_theta_zero_location("N")
        ax.set_theta_direction(-1)
        ax.set_rlim(floor_db, 0)
    else:
        ax.plot(azimuth_deg, levels_db, color=kwargs.get("color", "C0"))
        ax.set_xlabel("Azimuth (deg)")
        ax.set_ylabel("Beam level (dB)")
        ax.set_xlim(-180, 180)
        ax.set_ylim(floor_db, 3)
        ax.grid(True, alpha=0.3)

    ax.set_title(
        kwargs.get("title", f"{type(model).__name__} - {frequency:g} Hz, el {elevation:g}°")
    )

    if show:
        plt.tight_layout()
        plt.show()

    return ax


def plot_array_comparison(
    arrays,
    labels=None,
    ax=None,
    show=None,
    colors=None,
    **kwargs
):
    """
    Plot multiple arrays for comparison

    Parameters:
    -----------
    arrays : list of ArrayGeometry
        Arrays to compare
    labels : list of str, optional
        Labels for each array
    ax : matplotlib.axes.Axes, optional
        Axes to plot on
    show : bool, optional
        Whether to show the plot immediately
    colors : list, optional
        Colors for each array

    Returns:
    --------
    ax : matplotlib.axes.Axes
        The axes containing the plot
    """
    if labels is None:
        labels = [f"Array {i}" for i in range(len(arrays))]
    if colors is None:
        colors = [f"C{i}" for i in range(len(arrays))]

    for array, label, color in zip(arrays, labels, colors):
        ax = plot_array_geometry(
            array.sensor_positions,
            coordinate_system=CoordinateSystem.CARTESIAN,
            ax=ax,
            show=False,
            color=color,
            show_center=False,
            show_labels=False,
            title=kwargs.get("title", "Array Comparison"),
            **{k: v for k, v in kwargs.items() if k != "title"}
        )
        ax.collections[-1].set_label(label)

    ax.legend()

    if show:
        plt.tight_layout()
        plt.show()

    return ax
