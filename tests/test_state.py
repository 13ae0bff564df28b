import dataclasses
import math

import pytest
import numpy as np
from lander_sim import state

@pytest.fixture
def default_state():
    return state.VehicleState()

@pytest.fixture
def custom_state():
    return state.VehicleState(
        height=1000.0,
        speed_y=50.0,
        location=-3.0,
        speed_x=4.0,
        rotation=0.2,
        rotation_speed=-0.01,
        fuel=120.0,
        thrust_left=1000.0,
        thrust_right=2000.0,
        t=12.5,
        steps=625,
    )

def test_state_defaults(default_state):
    assert default_state.height == 0.0
    assert default_state.fuel == 0.0
    assert default_state.steps == 0
    assert default_state.landed

def test_state_copy(custom_state):
    s2 = custom_state.copy()
    assert s2 == custom_state
    s2.height = 1.0
    assert custom_state.height == 1000.0

def test_state_speed(custom_state):
    assert custom_state.speed == pytest.approx(math.hypot(4.0, 50.0))

def test_state_landed(custom_state):
    assert not custom_state.landed
    custom_state.height = 0.0
    assert custom_state.landed

def test_state_str(custom_state):
    s = str(custom_state)
    assert "h=1000.0m" in s
    assert "fuel=120.00kg" in s

def test_snapshot_values(custom_state):
    snap = custom_state.snapshot()
    assert snap.height == custom_state.height
    assert snap.thrust_right == custom_state.thrust_right
    assert snap.steps == 625
    assert snap.speed == pytest.approx(custom_state.speed)

def test_snapshot_is_frozen(custom_state):
    snap = custom_state.snapshot()
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.height = 0.0

def test_snapshot_detached_from_state(custom_state):
    snap = custom_state.snapshot()
    custom_state.height = 5.0
    assert snap.height == 1000.0

def test_snapshot_to_vector(custom_state):
    vec = custom_state.snapshot().to_vector()
    assert vec.shape == (10,)
    assert vec[0] == 1000.0
    assert vec[-1] == 12.5

def test_snapshot_wrapped_rotation():
    snap = state.VehicleState(rotation=3 * math.pi / 2).snapshot()
    assert snap.wrapped_rotation == pytest.approx(-math.pi / 2)

@pytest.mark.parametrize('angle, expected', [
    (0.0, 0.0),
    (math.pi, math.pi),
    (-math.pi, math.pi),
    (2 * math.pi, 0.0),
    (7 * math.pi / 2, -math.pi / 2),
    (-5 * math.pi / 2, -math.pi / 2),
])
def test_wrap_angle(angle, expected):
    assert state.wrap_angle(angle) == pytest.approx(expected)

def test_wrap_angle_range():
    for a in np.linspace(-20, 20, 101):
        w = state.wrap_angle(float(a))
        assert -math.pi < w <= math.pi
        assert math.isclose(math.cos(w), math.cos(a), abs_tol=1e-9)


def test_wrap_angle_large_input():
    w = state.wrap_angle(1e9)
    assert -math.pi < w <= math.pi
    assert math.isclose(math.cos(w), math.cos(1e9), abs_tol=1e-6)
    assert math.isclose(math.sin(w), math.sin(1e9), abs_tol=1e-6)


def test_wrap_angle_odd_multiple_of_pi_maps_to_pi():
    assert state.wrap_angle(3 * math.pi) == pytest.approx(math.pi)
    assert state.wrap_angle(-3 * math.pi) == pytest.approx(math.pi)


@pytest.mark.parametrize("angle", [math.inf, -math.inf, math.nan])
def test_wrap_angle_non_finite_raises(angle):
    with pytest.raises(ValueError):
        state.wrap_angle(angle)
