"""
Lander Descent Simulation - Configuration

This module provides a SimulationConfig dataclass for dependency injection,
allowing run parameters (timestep, pacing, trial count, seeding) to be passed
without modifying module constants.
"""

from dataclasses import dataclass
from typing import Optional

from . import constants as C


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable configuration for simulation runs.

    Using frozen=True ensures configs cannot be accidentally modified.
    Create new configs via dataclass replace() if needed.

    Section grouping:
      1. Simulation timing
      2. Evaluation
      3. Diagnostics
    """

    # ── 1. Simulation timing ─────────────────────────────────────────────
    dt: float = C.DT
    # Wall-clock sleep between steps (s); independent of dt
    delay: float = C.HEADLESS_DELAY
    # Simulated-time cap for one run (s); None runs until landing or stop()
    max_time: Optional[float] = None

    # ── 2. Evaluation ────────────────────────────────────────────────────
    trials: int = C.DEFAULT_TRIALS
    # Master seed for per-trial turbulence seeds; None draws fresh entropy
    seed: Optional[int] = None

    # ── 3. Diagnostics ───────────────────────────────────────────────────
    # Log full vehicle state every step at DEBUG level
    debug: bool = False

    def __post_init__(self):
        if self.dt <= 0:
            raise ValueError(f"Time step dt must be positive, got {self.dt}")
        if self.delay < 0:
            raise ValueError(f"Pacing delay must be non-negative, got {self.delay}")
        if self.max_time is not None and self.max_time <= 0:
            raise ValueError(f"max_time must be positive, got {self.max_time}")
        if self.trials < 1:
            raise ValueError(f"trials must be at least 1, got {self.trials}")


def create_default_config() -> SimulationConfig:
    """Create a SimulationConfig with default values from constants."""
    return SimulationConfig()


def create_animation_config(**overrides) -> SimulationConfig:
    """Create a config paced for a human viewer."""
    defaults = dict(delay=C.ANIMATION_DELAY)
    defaults.update(overrides)
    return SimulationConfig(**defaults)


def create_test_config(max_time: Optional[float] = 600.0, trials: int = 3,
                       **overrides) -> SimulationConfig:
    """Create a fast, headless config suitable for testing.

    Any keyword arg accepted by SimulationConfig can be passed as an override.
    """
    defaults = dict(max_time=max_time, trials=trials, delay=0.0)
    defaults.update(overrides)
    return SimulationConfig(**defaults)
