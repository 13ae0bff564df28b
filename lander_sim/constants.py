"""
Lander Descent Simulation - Physical Constants and Default Parameters

This module defines the integration constants, the default planet and lander
parameters (Mars), the fitness weights and the run defaults used throughout
the simulation.
"""

import numpy as np

# =============================================================================
# INTEGRATION
# =============================================================================

# Fixed physics timestep (s). Simulated time is decoupled from wall-clock pacing.
DT = 0.02

# Wall-clock pause between steps (s) when a run is animated for a viewer
ANIMATION_DELAY = 0.05

# Headless / batch evaluation does not sleep between steps
HEADLESS_DELAY = 0.0

# Upper bound on a single wait while paused (s), so stop() is seen promptly
PAUSE_POLL_INTERVAL = 0.05

# =============================================================================
# VEHICLE GEOMETRY
# =============================================================================

# Moment arm of the thrusters about the centre of mass (m).
# Angular acceleration = differential thrust / (mass * ROTATION_RADIUS^2)
ROTATION_RADIUS = 10.0
RR2 = ROTATION_RADIUS * ROTATION_RADIUS

# Stokes drag shape factor: F = STOKES_FACTOR * radius * viscosity * speed
STOKES_FACTOR = 6.0 * np.pi

# Fraction of terminal velocity the lander is moving at when a run starts
INITIAL_SPEED_FRACTION = 0.9

# =============================================================================
# MARS (Planet defaults)
# =============================================================================

MARS_GRAVITY = 3.69        # m/s^2
MARS_VISCOSITY = 0.14      # Pa.s  (viscosity = M g / (v_t 6 pi r))
MARS_TURBULENCE = 50.0     # N

# Vertical turbulence is one tenth of the horizontal range
VERTICAL_TURBULENCE_RATIO = 0.1

# =============================================================================
# MARS LANDER SPECIFICATION
# =============================================================================

LANDER_EMPTY_MASS = 570.0            # kg
LANDER_FUEL_CAPACITY = 190.0         # kg
LANDER_BURN_RATE = 1.0 / 2600.0      # kg/(N.s) = 1 / exhaust gas velocity
LANDER_MAX_THRUST = 400000.0         # N per nozzle
LANDER_RADIUS = 2.0                  # m (a guess)
LANDER_START_HEIGHT = 1500.0         # m
LANDER_SAFE_LANDING_SPEED = 10.0     # m/s

# =============================================================================
# FITNESS
# =============================================================================

FITNESS_BASELINE = 80.0
# Speed at or above this multiple of the safe landing speed scores zero
DESTRUCTION_SPEED_FACTOR = 2.0
LOCATION_PENALTY = 50.0              # points per LOCATION_SCALE metres off target
LOCATION_SCALE = 100.0               # m
SPEED_PENALTY = 20.0                 # points per safe-speed unit over the limit
ROTATION_TOLERANCE = 0.1             # rad, above this the landing is wonky
ROTATION_PENALTY = 40.0              # points per pi rad
FUEL_WEIGHT = 20.0                   # reward kept fuel / penalise spent fuel

# =============================================================================
# EVALUATION
# =============================================================================

DEFAULT_TRIALS = 20
CLI_TRIALS = 100


def print_config():
    """Print the default planet and lander configuration."""
    print("=" * 60)
    print("Mars Lander Configuration")
    print("=" * 60)
    print(f"Gravity: {MARS_GRAVITY:.2f} m/s^2")
    print(f"Viscosity: {MARS_VISCOSITY:.2f} Pa.s")
    print(f"Turbulence: {MARS_TURBULENCE:.1f} N")
    print(f"Empty mass: {LANDER_EMPTY_MASS:,.0f} kg")
    print(f"Fuel capacity: {LANDER_FUEL_CAPACITY:,.0f} kg")
    print(f"Max thrust per nozzle: {LANDER_MAX_THRUST/1e3:.0f} kN")
    print(f"Start height: {LANDER_START_HEIGHT:,.0f} m")
    print(f"Safe landing speed: {LANDER_SAFE_LANDING_SPEED:.1f} m/s")
    print(f"Timestep: {DT} s")
    print("=" * 60)
