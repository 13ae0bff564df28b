"""
Lander Descent Simulation - Type Definitions

Structured return types for fitness scoring and per-step diagnostics.
"""

from typing import TypedDict


class FitnessBreakdown(TypedDict):
    """Itemised fitness of one landed run."""
    speed: float  # Resultant touchdown speed (m/s)
    destroyed: bool  # Speed at or above twice the safe landing speed
    crashed: bool  # Too fast or too wonky, but not destroyed
    baseline: float  # Points awarded for surviving (0 or 80)
    location_penalty: float  # Distance-from-target penalty (points)
    speed_penalty: float  # Excess-speed penalty (points)
    rotation: float  # Wrapped touchdown attitude (rad)
    rotation_penalty: float  # Wonky-landing penalty (points)
    fuel_term: float  # +reward for kept fuel, -penalty for spent fuel (points)
    fitness: float  # Final score, floored at zero


class StepTrace(TypedDict):
    """Diagnostics of one integration step, for debug tracing."""
    fuel_used: float  # kg
    effective_left: float  # N
    effective_right: float  # N
    turbulence_x: float  # N
    turbulence_y: float  # N
