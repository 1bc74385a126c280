from pathlib import Path

import pytest

from thermoflow.programs.orca import OrcaProgram
from thermoflow.typing import EnergyComponents

ex_folder = Path(__file__).resolve().parents[2] / "data" / "orca"


@pytest.fixture(scope="module")
def orca() -> OrcaProgram:
    return OrcaProgram()


@pytest.fixture(scope="module")
def freq_energies(orca: OrcaProgram) -> EnergyComponents:
    """Energies of the water opt+freq run, extracted once per module."""
    return orca.extract_energies(ex_folder / "h2o_freq.out")
