import numpy as np
import pytest

from burn_sim import validation
from burn_sim import constants as C


def test_check_vector_finite():
    assert validation.check_vector_finite(np.ones(3)) is True
    with pytest.raises(validation.ValidationError, match="impulse"):
        validation.check_vector_finite(np.array([np.inf, 0.0, 0.0]), "impulse")
    with pytest.raises(validation.ValidationError):
        validation.check_vector_finite(np.array([np.nan, 0.0, 0.0]))


def test_check_position_valid():
    assert validation.check_position_valid(np.array([7000.0, 0.0, 0.0])) is True
    with pytest.raises(validation.ValidationError):
        validation.check_position_valid(np.zeros(3))


def test_specific_energy_circular():
    r = np.array([7000.0, 0.0, 0.0])
    v = np.array([0.0, np.sqrt(C.MU_EARTH / 7000.0), 0.0])
    assert validation.compute_specific_energy(r, v) == pytest.approx(-C.MU_EARTH / 14000.0)


def test_specific_energy_at_origin():
    assert validation.compute_specific_energy(np.zeros(3), np.ones(3)) == 0.0


def test_energy_conservation_check():
    ok = validation.validate_energy_conservation(-28.4700001, -28.47)
    assert ok['valid']
    bad = validation.validate_energy_conservation(-28.0, -28.47)
    assert not bad['valid']
    assert bad['dE'] == pytest.approx(0.47)
    assert bad['relative_error'] == pytest.approx(0.47 / 28.47)


def test_energy_conservation_custom_tolerance():
    assert validation.validate_energy_conservation(-28.0, -28.47, tolerance=0.1)['valid']
