import logging
import math

import pytest
from _pytest.logging import LogCaptureFixture

from thermoflow.config import ValidationPolicy
from thermoflow.exceptions import ValidationError
from thermoflow.programs.validation import check_energy_components, validate_energy_components
from thermoflow.typing import EnergyComponents


def test_plausible_energies_pass() -> None:
    energies = EnergyComponents(electronic_energy=-76.4, zero_point_energy=0.021)
    assert check_energy_components(energies) == []
    validate_energy_components(energies)


def test_missing_thermochemistry_is_plausible() -> None:
    # a single point has no ZPE; the default of 0.0 must be accepted
    assert check_energy_components(EnergyComponents(electronic_energy=-1.0)) == []


@pytest.mark.parametrize(
    "electronic_energy, expected",
    [
        (1.5, "above"),
        (-20000.0, "below"),
        (math.nan, "not finite"),
        (math.inf, "not finite"),
        (-math.inf, "not finite"),
    ],
)
def test_implausible_electronic_energy(electronic_energy: float, expected: str) -> None:
    reasons = check_energy_components(EnergyComponents(electronic_energy=electronic_energy))
    assert len(reasons) == 1
    assert expected in reasons[0]


def test_negative_zero_point_energy() -> None:
    reasons = check_energy_components(EnergyComponents(electronic_energy=-76.4, zero_point_energy=-0.01))
    assert len(reasons) == 1
    assert "zero-point" in reasons[0]


def test_zero_point_energy_nan() -> None:
    reasons = check_energy_components(EnergyComponents(electronic_energy=-76.4, zero_point_energy=math.nan))
    assert reasons == ["zero-point energy is not a number"]


def test_all_violations_are_reported() -> None:
    energies = EnergyComponents(electronic_energy=5.0, zero_point_energy=-1.0)
    assert len(check_energy_components(energies)) == 2


def test_validate_raises_and_logs(caplog: LogCaptureFixture) -> None:
    energies = EnergyComponents(electronic_energy=5.0)
    with caplog.at_level(logging.ERROR, logger="thermoflow"):
        with pytest.raises(ValidationError, match="from job.log failed validation"):
            validate_energy_components(energies, source="job.log")
    assert "above" in caplog.text


def test_custom_policy() -> None:
    policy = ValidationPolicy(min_electronic_energy=-100.0, max_electronic_energy=-50.0)
    assert check_energy_components(EnergyComponents(electronic_energy=-76.4), policy) == []
    assert check_energy_components(EnergyComponents(electronic_energy=-40.0), policy)
    with pytest.raises(ValidationError):
        validate_energy_components(EnergyComponents(electronic_energy=-150.0), policy)
