from pathlib import Path

import pytest

from thermoflow.programs.gaussian import GaussianProgram
from thermoflow.typing import EnergyComponents

ex_folder = Path(__file__).resolve().parents[2] / "data" / "gaussian"


@pytest.fixture(scope="module")
def gaussian() -> GaussianProgram:
    return GaussianProgram()


@pytest.fixture(scope="module")
def opt_freq_energies(gaussian: GaussianProgram) -> EnergyComponents:
    """Energies of the water opt+freq run, extracted once per module."""
    return gaussian.extract_energies(ex_folder / "h2o_opt_freq.log")
