"""Tests for the controller contract and stock policies."""

import math

import numpy as np
import pytest
from lander_sim import control
from lander_sim.environment import create_mars_environment
from lander_sim.specs import create_mars_lander_specs
from lander_sim.state import VehicleState


@pytest.fixture
def env():
    return create_mars_environment()

@pytest.fixture
def specs():
    return create_mars_lander_specs()

def make_observation(**kwargs):
    defaults = dict(height=1000.0, speed_y=100.0, location=0.0, speed_x=0.0,
                    rotation=0.0, rotation_speed=0.0, fuel=190.0)
    defaults.update(kwargs)
    return control.Observation(**defaults)


def test_observation_from_state_uses_degrees():
    s = VehicleState(height=10.0, speed_y=2.0, rotation=math.pi / 2,
                     rotation_speed=math.pi, fuel=5.0)
    obs = control.Observation.from_state(s)
    assert obs.height == 10.0
    assert obs.rotation == pytest.approx(90.0)
    assert obs.rotation_speed == pytest.approx(180.0)
    assert obs.fuel == 5.0

def test_observation_is_frozen():
    obs = make_observation()
    with pytest.raises(Exception):
        obs.height = 0.0

def test_stock_policies_satisfy_protocol(env, specs):
    for name in ('zero', 'braking', 'steering'):
        assert isinstance(control.create_policy(name, env, specs), control.ControlPolicy)

def test_create_policy_unknown(env, specs):
    with pytest.raises(ValueError):
        control.create_policy('fuzzy', env, specs)

def test_zero_thrust_policy():
    assert control.ZeroThrustPolicy().get_thrust(make_observation()) == (0.0, 0.0)

def test_constant_thrust_policy():
    p = control.ConstantThrustPolicy(100.0, 200.0)
    cmd = p.get_thrust(make_observation())
    assert cmd.left == 100.0
    assert cmd.right == 200.0

def test_constant_thrust_policy_rejects_negative():
    with pytest.raises(ValueError):
        control.ConstantThrustPolicy(-1.0, 0.0)


# ============================================================================
# FunctionPolicy
# ============================================================================

def test_function_policy_wraps_callable():
    p = control.FunctionPolicy(lambda obs: (obs.height, 2 * obs.height))
    cmd = p.get_thrust(make_observation(height=3.0))
    assert cmd == control.ThrustCommand(3.0, 6.0)

@pytest.mark.parametrize('bad', [None, 5.0, (1.0,), (1.0, 2.0, 3.0), ('a', 'b')])
def test_function_policy_malformed_result(bad):
    p = control.FunctionPolicy(lambda obs: bad, name='broken')
    with pytest.raises(control.ControllerError, match='broken'):
        p.get_thrust(make_observation())

def test_function_policy_default_name():
    def my_controller(obs):
        return 0.0, 0.0
    assert control.FunctionPolicy(my_controller).name == 'my_controller'


# ============================================================================
# BrakingProfilePolicy
# ============================================================================

def test_braking_target_speed(env, specs):
    p = control.BrakingProfilePolicy(env, specs, braking_deceleration=10.0)
    assert p.target_speed(1500.0) == pytest.approx(math.sqrt(2 * 10.0 * 1500.0))
    assert p.target_speed(0.0) == pytest.approx(0.5 * specs.safe_landing_speed)
    assert p.target_speed(-5.0) == p.target_speed(0.0)

def test_braking_no_thrust_when_climbing(env, specs):
    p = control.BrakingProfilePolicy(env, specs)
    assert p.get_thrust(make_observation(speed_y=-1.0)) == (0.0, 0.0)

def test_braking_no_thrust_without_fuel(env, specs):
    p = control.BrakingProfilePolicy(env, specs)
    assert p.get_thrust(make_observation(fuel=0.0)) == (0.0, 0.0)

def test_braking_thrust_clipped_to_max(env, specs):
    p = control.BrakingProfilePolicy(env, specs)
    cmd = p.get_thrust(make_observation(height=10.0, speed_y=10000.0))
    assert cmd.left == specs.max_thrust
    assert cmd.right == specs.max_thrust

def test_braking_symmetric_when_upright(env, specs):
    p = control.BrakingProfilePolicy(env, specs)
    cmd = p.get_thrust(make_observation(height=500.0, speed_y=150.0))
    assert cmd.left == pytest.approx(cmd.right)
    assert 0.0 < cmd.left <= specs.max_thrust

def test_braking_corrects_positive_rotation_with_left_thrust(env, specs):
    p = control.BrakingProfilePolicy(env, specs)
    cmd = p.get_thrust(make_observation(height=500.0, speed_y=150.0, rotation=10.0))
    assert cmd.left > cmd.right
    cmd = p.get_thrust(make_observation(height=500.0, speed_y=150.0, rotation=-10.0))
    assert cmd.right > cmd.left

def test_braking_commands_always_in_range(env, specs):
    p = control.BrakingProfilePolicy(env, specs)
    rng = np.random.default_rng(0)
    for _ in range(200):
        obs = make_observation(height=rng.uniform(0, 2000), speed_y=rng.uniform(-50, 400),
                               rotation=rng.uniform(-180, 180),
                               rotation_speed=rng.uniform(-90, 90),
                               fuel=rng.uniform(0, 190))
        left, right = p.get_thrust(obs)
        assert 0.0 <= left <= specs.max_thrust
        assert 0.0 <= right <= specs.max_thrust


# ============================================================================
# SteeringBalancePolicy
# ============================================================================

def test_steering_balance_split():
    p = control.SteeringBalancePolicy(control.ConstantThrustPolicy(1000.0, 1000.0),
                                      max_thrust=400000.0)
    assert p.get_thrust(make_observation(location=0.0)) == pytest.approx((1000.0, 1000.0))
    assert p.get_thrust(make_observation(location=5.0)) == pytest.approx((980.0, 1020.0))
    assert p.get_thrust(make_observation(location=-5.0)) == pytest.approx((1020.0, 980.0))

def test_steering_balance_respects_max():
    p = control.SteeringBalancePolicy(control.ConstantThrustPolicy(1000.0, 1000.0),
                                      max_thrust=1000.0)
    left, right = p.get_thrust(make_observation(location=5.0))
    assert right == 1000.0
    assert left == pytest.approx(980.0)
