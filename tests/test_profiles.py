import dataclasses

import pytest

from frysim.errors import FrySimError, UnknownProfileError
from frysim.profiles import get_profile, profile_keys


def test_registry_holds_both_systems():
    assert profile_keys() == ("actual", "nuevo")


def test_actual_profile_values():
    p = get_profile("actual")
    assert p.name == "ATFS-75 (Gas)"
    assert p.capacity_liters == 34
    assert p.temp_variance_c == 15
    assert p.oil_loss_rate == pytest.approx(0.30)
    assert p.product_loss_rate == pytest.approx(0.008)
    assert p.has_filtration is False


def test_nuevo_profile_values():
    p = get_profile("nuevo")
    assert p.name == "Western Kitchen 40L"
    assert p.capacity_liters == 40
    assert p.temp_variance_c == 2
    assert p.efficiency == pytest.approx(0.82)
    assert p.has_filtration is True


def test_unknown_profile_raises():
    with pytest.raises(UnknownProfileError) as exc:
        get_profile("turbo")
    assert exc.value.key == "turbo"
    assert isinstance(exc.value, FrySimError)
    assert isinstance(exc.value, KeyError)
    assert "turbo" in str(exc.value)


def test_profiles_are_immutable():
    p = get_profile("nuevo")
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.capacity_liters = 80
    assert get_profile("nuevo") is p
