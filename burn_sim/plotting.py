"""
Finite-Burn Simulation - Plots

Apogee history against the target band, and the planar trajectory of the
finite-burn vehicle next to the impulsive reference.
"""

import os
from typing import List

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for batch processing
import matplotlib.pyplot as plt
import numpy as np

from . import constants as C


def plot_apogee_history(result, output_dir: str) -> str:
    """Apogee radius vs time, with the target and acceptance band."""
    log = result.log
    cfg = result.config
    t = np.array(log.time)
    apogee = np.array(log.apogee, dtype=float)

    fig, ax = plt.subplots(figsize=(9, 5))
    ax.plot(t, apogee, color='tab:blue', label='Apogee radius')
    ax.axhline(cfg.target_orbit_radius, color='tab:green', linestyle='--', label='Target radius')
    ax.axhline(cfg.target_orbit_radius - cfg.apogee_tolerance, color='tab:green',
               linestyle=':', alpha=0.6, label='Acceptance threshold')
    ax.set_xlabel('Simulation time (s)')
    ax.set_ylabel('Apogee radius (km)')
    ax.set_title(f"Apogee raise: {cfg.steering_mode.value} / {cfg.burn_mode.value} "
                 f"({result.report.outcome.name})")
    ax.grid(True, alpha=0.3)
    ax.legend(loc='lower right')

    path = os.path.join(output_dir, 'apogee_history.png')
    fig.tight_layout()
    fig.savefig(path, dpi=120)
    plt.close(fig)
    return path


def plot_trajectory(result, output_dir: str) -> str:
    """XY trajectory of both vehicles over the burn."""
    log = result.log

    fig, ax = plt.subplots(figsize=(7, 7))
    ax.add_patch(plt.Circle((0.0, 0.0), C.R_EARTH, color='tab:blue', alpha=0.2))
    ax.plot(log.position_x, log.position_y, color='tab:red', label='Finite burn')
    if log.reference_x:
        ax.plot(log.reference_x, log.reference_y, color='tab:gray',
                linestyle='--', label='Impulsive reference')
    ax.set_aspect('equal')
    ax.set_xlabel('x (km)')
    ax.set_ylabel('y (km)')
    title = 'Trajectory'
    if result.phase_offset_deg is not None:
        title += f" (phase offset {result.phase_offset_deg:.3f} deg)"
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right')

    path = os.path.join(output_dir, 'trajectory.png')
    fig.tight_layout()
    fig.savefig(path, dpi=120)
    plt.close(fig)
    return path


def generate_all_plots(result, output_dir: str) -> List[str]:
    """Generate every plot for an ExperimentResult; returns saved paths."""
    os.makedirs(output_dir, exist_ok=True)
    if len(result.log) == 0:
        return []
    return [
        plot_apogee_history(result, output_dir),
        plot_trajectory(result, output_dir),
    ]
