"""
Lander Descent Simulation - Trajectory Visualization

Plots for a single logged descent: height, descent speed, lateral drift and
attitude, fuel and thrust. Every figure is written as a PNG and its path is
returned so callers can list or attach the outputs.
"""

import logging
import os
from dataclasses import dataclass
from typing import List

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for batch processing
import matplotlib.pyplot as plt
import numpy as np

from .telemetry import TrajectoryLog

logger = logging.getLogger(__name__)

PLOT_DPI = 150


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class TrajectoryData:
    """Container for processed trajectory data used in plotting.

    Attributes:
        time: Time array in seconds
        height: Height above ground in metres
        speed_y: Descent speed in m/s (positive = falling)
        speed: Total speed magnitude in m/s
        location: Lateral offset from the target in metres
        speed_x: Lateral speed in m/s
        rotation: Attitude in degrees
        rotation_speed: Attitude rate in deg/s
        fuel: Fuel remaining in kg
        thrust_left: Commanded left thrust in N
        thrust_right: Commanded right thrust in N
    """
    time: np.ndarray
    height: np.ndarray
    speed_y: np.ndarray
    speed: np.ndarray
    location: np.ndarray
    speed_x: np.ndarray
    rotation: np.ndarray
    rotation_speed: np.ndarray
    fuel: np.ndarray
    thrust_left: np.ndarray
    thrust_right: np.ndarray


# =============================================================================
# Configuration
# =============================================================================

def configure_plot_style() -> None:
    """Configure matplotlib defaults for the descent plots."""
    plt.rcParams.update({
        'figure.figsize': (10, 6),
        'figure.dpi': PLOT_DPI,
        'savefig.dpi': PLOT_DPI,
        'axes.grid': True,
        'axes.axisbelow': True,
        'grid.alpha': 0.3,
        'grid.linestyle': '-',
        'grid.linewidth': 0.5,
        'font.size': 11,
        'axes.titlesize': 13,
        'axes.labelsize': 12,
        'legend.fontsize': 10,
        'legend.framealpha': 0.95,
        'lines.linewidth': 1.8,
        'xtick.direction': 'in',
        'ytick.direction': 'in',
    })


# =============================================================================
# Data Processing
# =============================================================================

def extract_log_data(log: TrajectoryLog) -> TrajectoryData:
    """Extract and process trajectory log data for plotting.

    Args:
        log: TrajectoryLog filled by a vehicle run

    Returns:
        TrajectoryData object with processed arrays

    Raises:
        ValueError: If the log holds no samples
    """
    if len(log) == 0:
        raise ValueError("Trajectory log is empty; nothing to plot")

    speed_y = np.array(log.speed_y)
    speed_x = np.array(log.speed_x)

    return TrajectoryData(
        time=np.array(log.time),
        height=np.array(log.height),
        speed_y=speed_y,
        speed=np.hypot(speed_x, speed_y),
        location=np.array(log.location),
        speed_x=speed_x,
        rotation=np.array(log.rotation_deg),
        rotation_speed=np.array(log.rotation_speed_deg),
        fuel=np.array(log.fuel),
        thrust_left=np.array(log.thrust_left),
        thrust_right=np.array(log.thrust_right),
    )


def _save(fig, output_dir: str, name: str) -> str:
    plt.tight_layout()
    path = os.path.join(output_dir, name)
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


# =============================================================================
# Plots
# =============================================================================

def plot_height_profile(data: TrajectoryData, output_dir: str) -> str:
    """Generate height vs time profile plot.

    Args:
        data: TrajectoryData object
        output_dir: Directory to save the plot

    Returns:
        Path to saved plot file
    """
    fig, ax = plt.subplots()

    ax.fill_between(data.time, 0, data.height, alpha=0.25, color='#1f77b4')
    ax.plot(data.time, data.height, 'b-', linewidth=2, label='Height')

    ax.scatter([data.time[0]], [data.height[0]],
               c='green', s=80, marker='o', zorder=5, label='Start')
    ax.scatter([data.time[-1]], [data.height[-1]],
               c='darkorange', s=90, marker='*', zorder=5,
               label=f'Final ({data.height[-1]:.1f} m)')

    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Height (m)')
    ax.set_title('Height Profile', fontweight='bold')
    ax.legend(loc='upper right')
    ax.set_xlim(0, max(data.time[-1], 1e-9))
    ax.set_ylim(0, None)

    return _save(fig, output_dir, '01_height_profile.png')


def plot_speed_profile(data: TrajectoryData, output_dir: str) -> str:
    """Generate descent speed and total speed vs time."""
    fig, ax = plt.subplots()

    ax.plot(data.time, data.speed_y, 'r-', linewidth=2, label='Descent speed')
    ax.plot(data.time, data.speed, 'g--', linewidth=1.5, label='Total speed')

    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Speed (m/s)')
    ax.set_title('Speed Profile', fontweight='bold')
    ax.legend(loc='upper right')

    ax.text(0.02, 0.04, f'Touchdown speed: {data.speed[-1]:.2f} m/s',
            transform=ax.transAxes, fontsize=9,
            bbox=dict(boxstyle='round', facecolor='white', alpha=0.9))

    return _save(fig, output_dir, '02_speed_profile.png')


def plot_height_vs_speed(data: TrajectoryData, output_dir: str) -> str:
    """Phase plot: descent speed against height, the braking curve."""
    fig, ax = plt.subplots()

    ax.plot(data.speed_y, data.height, 'm-', linewidth=2)
    ax.set_xlabel('Descent speed (m/s)')
    ax.set_ylabel('Height (m)')
    ax.set_title('Height vs Descent Speed', fontweight='bold')
    ax.set_ylim(0, None)

    return _save(fig, output_dir, '03_height_vs_speed.png')


def plot_lateral_and_attitude(data: TrajectoryData, output_dir: str) -> str:
    """Generate lateral offset and attitude history on shared time axis."""
    fig, (ax1, ax2) = plt.subplots(2, 1, sharex=True, figsize=(10, 8))

    ax1.plot(data.time, data.location, 'b-', label='Location')
    ax1.axhline(0.0, color='gray', linestyle='--', linewidth=1)
    ax1.set_ylabel('Location (m)')
    ax1.set_title('Lateral Drift', fontweight='bold')
    ax1b = ax1.twinx()
    ax1b.plot(data.time, data.speed_x, 'c--', linewidth=1.2, label='Lateral speed')
    ax1b.set_ylabel('Lateral speed (m/s)')
    ax1b.grid(False)

    ax2.plot(data.time, data.rotation, 'k-', label='Rotation')
    ax2.plot(data.time, data.rotation_speed, 'orange', linewidth=1.2,
             label='Rotation rate (deg/s)')
    ax2.set_xlabel('Time (s)')
    ax2.set_ylabel('Angle (deg)')
    ax2.set_title('Attitude', fontweight='bold')
    ax2.legend(loc='upper right')

    return _save(fig, output_dir, '04_lateral_attitude.png')


def plot_fuel_and_thrust(data: TrajectoryData, output_dir: str) -> str:
    """Generate fuel remaining and per-nozzle thrust history."""
    fig, (ax1, ax2) = plt.subplots(2, 1, sharex=True, figsize=(10, 8))

    ax1.plot(data.time, data.fuel, 'g-', linewidth=2)
    ax1.set_ylabel('Fuel (kg)')
    ax1.set_title('Fuel Remaining', fontweight='bold')
    ax1.set_ylim(0, None)

    ax2.plot(data.time, data.thrust_left / 1000.0, 'b-', label='Left')
    ax2.plot(data.time, data.thrust_right / 1000.0, 'r--', label='Right')
    ax2.set_xlabel('Time (s)')
    ax2.set_ylabel('Thrust (kN)')
    ax2.set_title('Thrust Commands', fontweight='bold')
    ax2.legend(loc='upper right')

    return _save(fig, output_dir, '05_fuel_thrust.png')


def generate_all_plots(log: TrajectoryLog, output_dir: str = "plots") -> List[str]:
    """Generate all descent plots.

    Args:
        log: TrajectoryLog filled by a vehicle run
        output_dir: Directory to save plots (created if doesn't exist)

    Returns:
        List of paths to saved plot files

    Example:
        >>> log = TrajectoryLog()
        >>> vehicle.add_observer(log)
        >>> vehicle.run()
        >>> plot_files = generate_all_plots(log, "output/plots")
    """
    os.makedirs(output_dir, exist_ok=True)
    configure_plot_style()
    data = extract_log_data(log)

    plot_functions = [
        plot_height_profile,
        plot_speed_profile,
        plot_height_vs_speed,
        plot_lateral_and_attitude,
        plot_fuel_and_thrust,
    ]

    saved_files = []
    for plot_func in plot_functions:
        try:
            saved_files.append(plot_func(data, output_dir))
        except Exception as e:
            logger.warning(f"Failed to generate {plot_func.__name__}: {e}")
            plt.close('all')

    return saved_files
