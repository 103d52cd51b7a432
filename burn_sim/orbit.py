"""
Orbital elements from state vectors.

Only the quantities the burn controller needs are derived: apogee and
perigee radius, eccentricity, semi-major axis, inclination and a phase angle
locating the periapsis (argument of periapsis, or longitude of periapsis for
equatorial orbits).
"""

from typing import NamedTuple

import numpy as np

from . import constants as C

# Below this eccentricity the periapsis direction is undefined
CIRCULAR_ECCENTRICITY = 1e-10

# Below this |sin(i)| the ascending node is undefined
EQUATORIAL_TOLERANCE = 1e-10


class OrbitSnapshot(NamedTuple):
    """Orbit shape and orientation at one instant."""
    apogee_radius: float    # km (inf when unbound)
    eccentricity: float
    phase_angle: float      # rad, [0, 2pi)
    perigee_radius: float   # km
    semi_major_axis: float  # km (negative when hyperbolic, inf when parabolic)
    inclination: float      # rad

    @property
    def is_bound(self) -> bool:
        return self.eccentricity < 1.0


def circular_velocity(radius: float, mu: float = C.MU_EARTH) -> float:
    """Speed of a circular orbit at the given radius (km/s)."""
    return float(np.sqrt(mu / radius))


def orbital_period(semi_major_axis: float, mu: float = C.MU_EARTH) -> float:
    """Period of an elliptical orbit (s)."""
    if semi_major_axis <= 0.0 or not np.isfinite(semi_major_axis):
        raise ValueError(f"Period is undefined for semi-major axis {semi_major_axis}")
    return float(2.0 * np.pi * np.sqrt(semi_major_axis**3 / mu))


def _phase_angle(e_vec: np.ndarray, h_vec: np.ndarray, e: float) -> float:
    if e < CIRCULAR_ECCENTRICITY:
        return 0.0
    h_norm = np.linalg.norm(h_vec)
    node = np.cross(C.Z_AXIS, h_vec)
    node_norm = np.linalg.norm(node)
    if h_norm < C.ZERO_TOLERANCE or node_norm < EQUATORIAL_TOLERANCE * h_norm:
        # Equatorial: longitude of periapsis, measured in the sense of motion
        angle = np.arctan2(e_vec[1], e_vec[0])
        if h_vec[2] < 0.0:
            angle = -angle
    else:
        cos_w = np.clip(np.dot(node, e_vec) / (node_norm * e), -1.0, 1.0)
        angle = np.arccos(cos_w)
        if e_vec[2] < 0.0:
            angle = 2.0 * np.pi - angle
    return float(angle % (2.0 * np.pi))


def compute_orbit_snapshot(r: np.ndarray, v: np.ndarray,
                           mu: float = C.MU_EARTH) -> OrbitSnapshot:
    """
    Compute the orbit snapshot for a position/velocity pair.

        h = r x v
        e = ((|v|^2 - mu/|r|) r - (r.v) v) / mu
        a = -mu / (2E),  E = |v|^2/2 - mu/|r|
        r_apo = a (1 + e),  r_peri = a (1 - e)

    Args:
        r: Position vector (km)
        v: Velocity vector (km/s)
        mu: Gravitational parameter

    Returns:
        OrbitSnapshot

    Raises:
        ValueError: If r is the zero vector
    """
    r = np.asarray(r, dtype=float)
    v = np.asarray(v, dtype=float)
    r_norm = np.linalg.norm(r)
    if r_norm < C.ZERO_TOLERANCE:
        raise ValueError("Orbit is undefined at the central body's centre")

    v_sq = float(np.dot(v, v))
    h_vec = np.cross(r, v)
    h_norm = np.linalg.norm(h_vec)
    e_vec = ((v_sq - mu / r_norm) * r - np.dot(r, v) * v) / mu
    e = float(np.linalg.norm(e_vec))
    energy = 0.5 * v_sq - mu / r_norm

    if abs(energy) < C.ZERO_TOLERANCE:
        a = np.inf
    else:
        a = -mu / (2.0 * energy)

    if e >= 1.0 or energy >= 0.0:
        apogee = np.inf
        perigee = h_norm**2 / (mu * (1.0 + e))
    else:
        apogee = a * (1.0 + e)
        perigee = a * (1.0 - e)

    if h_norm < C.ZERO_TOLERANCE:
        inclination = 0.0
    else:
        inclination = float(np.arccos(np.clip(h_vec[2] / h_norm, -1.0, 1.0)))

    return OrbitSnapshot(
        apogee_radius=float(apogee),
        eccentricity=e,
        phase_angle=_phase_angle(e_vec, h_vec, e),
        perigee_radius=float(perigee),
        semi_major_axis=float(a),
        inclination=inclination,
    )


class OrbitSnapshotProvider:
    """Reads live state from the physics world and returns a fresh snapshot per call."""

    def __init__(self, physics, mu: float = C.MU_EARTH):
        self.physics = physics
        self.mu = mu

    def orbit_snapshot(self, body: str) -> OrbitSnapshot:
        return compute_orbit_snapshot(self.physics.get_position(body),
                                      self.physics.get_velocity(body),
                                      self.mu)
