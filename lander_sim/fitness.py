"""
Lander Descent Simulation - Fitness

Scores one completed run for landing accuracy, survivability and fuel economy.
Only meaningful once the lander is on the ground.
"""

import math

from . import constants as C
from .mass import get_fuel_fraction
from .specs import VehicleSpecification
from .state import VehicleSnapshot, wrap_angle
from .types import FitnessBreakdown


def fitness_breakdown(snapshot: VehicleSnapshot,
                      specs: VehicleSpecification) -> FitnessBreakdown:
    """
    Compute the fitness of a touchdown state, term by term.

    - Destroyed (speed >= 2 x safe speed): zero, no partial credit
    - Otherwise 80, minus 50 points per 100 m off target
    - Crashed if too fast (minus 20 per safe-speed unit over) or wonky
      (|rotation| > 0.1 rad, minus 40 per pi rad)
    - Crashed: minus 20 x fraction of fuel spent
    - Clean landing: plus 20 x fraction of fuel kept
    - Floored at zero

    Args:
        snapshot: Lander state at touchdown
        specs: Lander specification

    Returns:
        FitnessBreakdown with every term and the final fitness
    """
    safe = specs.safe_landing_speed
    speed = math.hypot(snapshot.speed_x, snapshot.speed_y)
    rotation = wrap_angle(snapshot.rotation)

    result = FitnessBreakdown(
        speed=speed,
        destroyed=True,
        crashed=True,
        baseline=0.0,
        location_penalty=0.0,
        speed_penalty=0.0,
        rotation=rotation,
        rotation_penalty=0.0,
        fuel_term=0.0,
        fitness=0.0,
    )

    if speed >= C.DESTRUCTION_SPEED_FACTOR * safe:
        return result

    result['destroyed'] = False
    result['baseline'] = C.FITNESS_BASELINE

    # penalise landing in the wrong spot
    result['location_penalty'] = C.LOCATION_PENALTY * abs(snapshot.location) / C.LOCATION_SCALE

    crashed = False

    # penalise landing too fast
    if speed > safe:
        result['speed_penalty'] = C.SPEED_PENALTY * (speed - safe) / safe
        crashed = True

    # penalise landing wonky
    if abs(rotation) > C.ROTATION_TOLERANCE:
        result['rotation_penalty'] = C.ROTATION_PENALTY * abs(rotation) / math.pi
        crashed = True

    # any kind of crash is worse the more fuel was spent; a clean landing
    # is rewarded for the fuel left
    fraction = get_fuel_fraction(specs, snapshot.fuel)
    if crashed:
        result['fuel_term'] = -C.FUEL_WEIGHT * (1.0 - fraction)
    else:
        result['fuel_term'] = C.FUEL_WEIGHT * fraction

    result['crashed'] = crashed
    fitness = (result['baseline'] - result['location_penalty'] - result['speed_penalty']
               - result['rotation_penalty'] + result['fuel_term'])
    result['fitness'] = max(0.0, fitness)
    return result


def compute_fitness(snapshot: VehicleSnapshot, specs: VehicleSpecification) -> float:
    """Fitness of a touchdown state, floored at zero."""
    return fitness_breakdown(snapshot, specs)['fitness']
