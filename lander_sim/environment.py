"""
Lander Descent Simulation - Planetary Environment

Describes the body being landed on: surface gravity, atmospheric viscosity
(Stokes drag) and a turbulence model. Turbulence is a random walk on a
persistent impulse vector, so gusts carry momentum from one step to the next.
The impulse belongs to one Environment instance and must be reset at the start
of every run.
"""

from typing import Optional, Tuple

import numpy as np

from . import constants as C
from .validation import check_positive, check_non_negative


class Environment:
    """Planet constants plus the stochastic turbulent-impulse generator."""

    def __init__(self, gravity: float, viscosity: float, turbulence: float,
                 seed: Optional[int] = None):
        """
        Args:
            gravity: Surface gravity (m/s^2)
            viscosity: How objects are slowed by the atmosphere (Pa.s)
            turbulence: How winds buffet a falling object (N)
            seed: Random seed for reproducible turbulence
        """
        check_positive("gravity", gravity)
        check_positive("viscosity", viscosity)
        check_non_negative("turbulence", turbulence)

        self._gravity = float(gravity)
        self._viscosity = float(viscosity)
        self._turbulence = float(turbulence)

        self.rng = np.random.default_rng(seed)
        self._impulse = np.zeros(2)

    @property
    def gravity(self) -> float:
        return self._gravity

    @property
    def viscosity(self) -> float:
        return self._viscosity

    @property
    def turbulence(self) -> float:
        return self._turbulence

    @property
    def impulse(self) -> np.ndarray:
        """Current persistent impulse [x, y] (N), as a copy."""
        return self._impulse.copy()

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Clear the turbulence memory before a new run.

        Args:
            seed: If given, reseed the random source so the run is reproducible
        """
        self._impulse[:] = 0.0
        if seed is not None:
            self.rng = np.random.default_rng(seed)

    def sample_turbulent_impulse(self) -> Tuple[float, float]:
        """
        Perturb and return the persistent turbulent impulse.

        x walks by U(-turbulence, turbulence), y by one tenth of that range.

        Returns:
            (impulse_x, impulse_y) in N
        """
        spread = np.array([1.0, C.VERTICAL_TURBULENCE_RATIO]) * self._turbulence
        self._impulse += self.rng.uniform(-spread, spread)
        return float(self._impulse[0]), float(self._impulse[1])

    def __repr__(self) -> str:
        return (f"Environment(gravity={self._gravity}, viscosity={self._viscosity}, "
                f"turbulence={self._turbulence})")


def create_mars_environment(seed: Optional[int] = None) -> Environment:
    """
    Create Mars.

    Returns:
        A fresh Environment with Mars gravity, viscosity and turbulence
    """
    return Environment(C.MARS_GRAVITY, C.MARS_VISCOSITY, C.MARS_TURBULENCE, seed=seed)


def create_calm_environment(gravity: float = C.MARS_GRAVITY,
                            viscosity: float = C.MARS_VISCOSITY) -> Environment:
    """Create a turbulence-free environment for deterministic runs."""
    return Environment(gravity, viscosity, 0.0)
