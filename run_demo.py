"""Demo script: one paced Mars descent under the braking controller."""
import argparse

import numpy as np

from lander_sim import (
    TrajectoryLog,
    Vehicle,
    create_mars_environment,
    create_mars_lander_specs,
    create_policy,
)
from lander_sim.config import create_animation_config

parser = argparse.ArgumentParser(description=__doc__)
parser.add_argument("--seed", type=int, default=None)
parser.add_argument("--headless", action="store_true", help="Do not pace the run")
args = parser.parse_args()

config = create_animation_config(delay=0.0) if args.headless else create_animation_config()
environment = create_mars_environment()
specs = create_mars_lander_specs()
vehicle = Vehicle(environment, create_policy("braking", environment, specs), specs,
                  config=config)

log = TrajectoryLog()
vehicle.add_observer(log)
vehicle.reset(seed=args.seed)
status = vehicle.run()

print("\n===== DESCENT DETAILS =====")
times = np.array(log.time)
heights = np.array(log.height)
speeds = np.array(log.speed_y)
print(f"Status: {status.name}")
print(f"Steps logged: {len(log)}")
print(f"Time range: {times[0]:.2f}s - {times[-1]:.2f}s")
print(f"Peak descent speed: {np.max(speeds):.1f} m/s")
print(f"Final height: {heights[-1]:.1f} m")

breakdown = vehicle.fitness_breakdown()
print()
print("===== LANDING =====")
print(f"Touchdown speed: {breakdown['speed']:.2f} m/s "
      f"(safe <= {vehicle.safe_landing_speed:.1f})")
print(f"Location: {vehicle.location:.2f} m | Rotation: {breakdown['rotation']:.3f} rad")
print(f"Fuel left: {vehicle.fuel:.1f} / {vehicle.max_fuel:.1f} kg")
print(f"Crashed: {breakdown['crashed']}")
print(f"Fitness: {breakdown['fitness']:.2f}")
