import dataclasses
import math

import pytest
import numpy as np
from lander_sim import integrators, dynamics
from lander_sim.environment import create_calm_environment, create_mars_environment
from lander_sim.specs import create_mars_lander_specs
from lander_sim.state import VehicleState

DT = 0.02


@pytest.fixture
def specs():
    return create_mars_lander_specs()

@pytest.fixture
def calm():
    return create_calm_environment()

def make_state(**kwargs):
    defaults = dict(height=1500.0, speed_y=200.0, fuel=190.0)
    defaults.update(kwargs)
    return VehicleState(**defaults)


def test_euler_step_returns_result(specs, calm):
    s = make_state()
    result = integrators.euler_step(s, specs, calm, DT)
    assert isinstance(result.state, VehicleState)
    assert result.state is not s
    assert result.state.steps == 1
    assert result.state.t == pytest.approx(DT)

def test_input_state_not_mutated(specs, calm):
    s = make_state(thrust_left=1000.0, thrust_right=1000.0)
    before = s.copy()
    integrators.euler_step(s, specs, calm, DT)
    assert s == before

@pytest.mark.parametrize('dt', [0.0, -0.02])
def test_non_positive_dt_raises(specs, calm, dt):
    with pytest.raises(ValueError):
        integrators.euler_step(make_state(), specs, calm, dt)

def test_unknown_method_raises(specs, calm):
    with pytest.raises(ValueError):
        integrators.integrate(make_state(), specs, calm, DT, method='rk4')

def test_landed_state_unchanged(specs):
    env = create_mars_environment(seed=0)
    s = make_state(height=0.0, speed_y=5.0)
    result = integrators.euler_step(s, specs, env, DT)
    assert result.state == s
    assert result.turbulence == (0.0, 0.0)
    # no turbulence drawn for a landed vehicle
    assert np.all(env.impulse == 0.0)

def test_touchdown_clamps_height_and_zeroes_thrust(specs, calm):
    s = make_state(height=1.0, speed_y=100.0, thrust_left=500.0, thrust_right=500.0)
    result = integrators.euler_step(s, specs, calm, DT)
    assert result.state.height == 0.0
    assert result.state.thrust_left == 0.0
    assert result.state.thrust_right == 0.0
    # the burn for the final step is still charged
    assert result.fuel_used > 0.0

def test_flame_out_clamps_fuel_and_zeroes_thrust(specs, calm):
    s = make_state(fuel=0.5, thrust_left=1e5, thrust_right=1e5)
    result = integrators.euler_step(s, specs, calm, DT)
    assert result.fuel_used == 0.5
    assert result.state.fuel == 0.0
    assert result.state.thrust_left == 0.0
    assert result.state.thrust_right == 0.0
    # effective thrust scaled down to the fuel that was left
    total = sum(result.effective_thrust)
    assert total == pytest.approx(0.5 / (DT * specs.burn_rate))

def test_height_and_fuel_never_negative(specs):
    env = create_mars_environment(seed=5)
    s = make_state(height=50.0, fuel=3.0, thrust_left=4e5, thrust_right=4e5)
    for _ in range(500):
        s = integrators.euler_step(s, specs, env, DT).state
        assert s.height >= 0.0
        assert s.fuel >= 0.0
    assert s.height == 0.0

def test_location_and_rotation_use_pre_step_speeds(specs, calm):
    s = make_state(speed_x=3.0, rotation_speed=0.5, thrust_left=0.0, thrust_right=1000.0)
    result = integrators.euler_step(s, specs, calm, DT)
    assert result.state.location == pytest.approx(3.0 * DT)
    assert result.state.rotation == pytest.approx(0.5 * DT)
    assert result.state.height == pytest.approx(1500.0 - 200.0 * DT)

def test_differential_thrust_spins_lander(specs, calm):
    s = make_state(thrust_left=1000.0, thrust_right=3000.0)
    result = integrators.euler_step(s, specs, calm, DT)
    mass = specs.empty_mass + s.fuel
    expected = DT * 2000.0 / (mass * 100.0)
    assert result.state.rotation_speed == pytest.approx(expected, rel=1e-9)

def test_free_fall_matches_discrete_solution(specs, calm):
    """Gravity is applied before drag, so each step is v' = (v + g dt)(1 - c dt)."""
    v0 = 200.0
    s = make_state(height=1e5, speed_y=v0)
    c = dynamics.drag_coefficient(calm, specs) / specs.full_mass
    g = calm.gravity
    a = 1.0 - c * DT
    v_fixed = g * a / c

    n = 250
    for _ in range(n):
        s = integrators.euler_step(s, specs, calm, DT).state

    expected = v_fixed + (v0 - v_fixed) * a ** n
    assert s.speed_y == pytest.approx(expected, rel=1e-9)
    assert s.fuel == specs.fuel_capacity
    assert s.speed_x == 0.0

def test_free_fall_matches_stokes_solution(specs, calm):
    v0 = 200.0
    h0 = 1e5
    s = make_state(height=h0, speed_y=v0)
    c = dynamics.drag_coefficient(calm, specs) / specs.full_mass
    v_inf = calm.gravity / c

    n = 500
    for _ in range(n):
        s = integrators.euler_step(s, specs, calm, DT).state

    t = n * DT
    v_exact = v_inf + (v0 - v_inf) * math.exp(-c * t)
    h_exact = h0 - (v_inf * t + (v0 - v_inf) * (1.0 - math.exp(-c * t)) / c)
    assert s.t == pytest.approx(t)
    assert s.speed_y == pytest.approx(v_exact, abs=0.1)
    assert s.height == pytest.approx(h_exact, abs=1.0)

def test_repeat_is_bit_identical(specs):
    def trajectory(seed):
        env = create_mars_environment(seed=seed)
        s = make_state(thrust_left=800.0, thrust_right=900.0)
        out = []
        for _ in range(200):
            s = integrators.euler_step(s, specs, env, DT).state
            out.append(dataclasses.astuple(s))
        return out

    assert trajectory(11) == trajectory(11)
    assert trajectory(11) != trajectory(12)
