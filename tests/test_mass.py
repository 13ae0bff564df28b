import pytest
from lander_sim import mass
from lander_sim.specs import create_mars_lander_specs

DT = 0.02
BURN = 1.0 / 2600.0

def test_compute_fuel_used_normal():
    used = mass.compute_fuel_used(2600.0, DT, BURN, fuel=100.0)
    assert used == pytest.approx(0.02)

def test_compute_fuel_used_zero_thrust():
    assert mass.compute_fuel_used(0.0, DT, BURN, fuel=100.0) == 0.0

def test_compute_fuel_used_clamped_to_tank():
    used = mass.compute_fuel_used(2e5, DT, BURN, fuel=1.0)
    assert used == 1.0

def test_effective_thrust_unclamped():
    used = mass.compute_fuel_used(3000.0, DT, BURN, fuel=100.0)
    left, right = mass.compute_effective_thrust(1000.0, 2000.0, used, DT, BURN)
    assert left == pytest.approx(1000.0)
    assert right == pytest.approx(2000.0)

def test_effective_thrust_scaled_uniformly_when_tank_runs_dry():
    # demand 1.538 kg with only 1 kg left: both channels scaled by the same ratio
    used = mass.compute_fuel_used(2e5, DT, BURN, fuel=1.0)
    left, right = mass.compute_effective_thrust(1e5, 1e5, used, DT, BURN)
    assert left + right == pytest.approx(1.0 / (DT * BURN))
    assert left == pytest.approx(65000.0)
    assert right == pytest.approx(65000.0)

def test_effective_thrust_preserves_ratio():
    used = mass.compute_fuel_used(4e5, DT, BURN, fuel=0.5)
    left, right = mass.compute_effective_thrust(1e5, 3e5, used, DT, BURN)
    assert right / left == pytest.approx(3.0)

def test_effective_thrust_zero_request():
    assert mass.compute_effective_thrust(0.0, 0.0, 0.0, DT, BURN) == (0.0, 0.0)

def test_vehicle_mass():
    specs = create_mars_lander_specs()
    assert mass.vehicle_mass(specs, 190.0) == pytest.approx(760.0)
    assert mass.vehicle_mass(specs, 0.0) == pytest.approx(570.0)

def test_fuel_helpers():
    specs = create_mars_lander_specs()
    assert mass.is_fuel_exhausted(0.0)
    assert not mass.is_fuel_exhausted(0.1)
    assert mass.get_fuel_fraction(specs, 95.0) == pytest.approx(0.5)
    assert mass.get_fuel_fraction(specs, 500.0) == 1.0
