import dataclasses

import pytest
from lander_sim import constants as C
from lander_sim.specs import VehicleSpecification, create_mars_lander_specs
from lander_sim.validation import ValidationError


@pytest.fixture
def specs():
    return create_mars_lander_specs()

def test_mars_lander_specs(specs):
    assert specs.empty_mass == 570.0
    assert specs.fuel_capacity == 190.0
    assert specs.burn_rate == pytest.approx(1.0 / 2600.0)
    assert specs.max_thrust == 400000.0
    assert specs.radius == 2.0
    assert specs.start_height == 1500.0
    assert specs.safe_landing_speed == 10.0

def test_full_mass(specs):
    assert specs.full_mass == pytest.approx(C.LANDER_EMPTY_MASS + C.LANDER_FUEL_CAPACITY)

def test_specs_frozen(specs):
    with pytest.raises(dataclasses.FrozenInstanceError):
        specs.empty_mass = 1.0

def test_values_coerced_to_float():
    s = VehicleSpecification(570, 190, 1, 400000, 2, 1500, 10)
    assert isinstance(s.empty_mass, float)
    assert isinstance(s.start_height, float)

@pytest.mark.parametrize('field', [
    'empty_mass', 'fuel_capacity', 'burn_rate', 'max_thrust',
    'radius', 'start_height', 'safe_landing_speed',
])
def test_non_positive_value_rejected(specs, field):
    with pytest.raises(ValidationError):
        dataclasses.replace(specs, **{field: 0.0})
