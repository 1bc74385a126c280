"""Derived thermodynamic quantities and the high-level/low-level composition.

All energies are in Hartree unless converted explicitly with `convert_energy`.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace

from thermoflow.config import CommandContext
from thermoflow.constants import ENERGY_UNITS, GAS_CONSTANT, HARTREE_TO_J_MOL, STANDARD_PRESSURE_PA
from thermoflow.exceptions import ConfigurationError
from thermoflow.typing import CalculationMetadata, EnergyComponents


def compose_energies(low_level: EnergyComponents, high_level: EnergyComponents) -> EnergyComponents:
    """
    Takes every thermal and vibrational field from `low_level` and only the
    electronic energy from `high_level`.

    No validation is performed: both inputs are expected to have passed it already.
    """
    return replace(low_level, electronic_energy=high_level.electronic_energy)


def standard_state_correction(temperature: float, concentration: float = 1.0) -> float:
    """
    Free-energy change (Eh) from the 1 atm gas standard state to `concentration` mol/L.

    dG = RT ln(c RT / P0), with c converted to mol/m^3. About 1.89 kcal/mol at 298.15 K and 1 M.
    """
    if temperature <= 0 or concentration <= 0:
        raise ConfigurationError("Temperature and concentration must be positive.")
    rt = GAS_CONSTANT * temperature  # J/mol
    c_si = concentration * 1000.0  # mol/m^3
    return rt * math.log(c_si * rt / STANDARD_PRESSURE_PA) / HARTREE_TO_J_MOL


def convert_energy(value_eh: float, unit: str) -> float:
    """Convert a Hartree value to "au", "ev", "kcal/mol" or "kj/mol"."""
    try:
        return value_eh * ENERGY_UNITS[unit.lower()]
    except KeyError as e:
        raise ConfigurationError(f"Unknown energy unit '{unit}'") from e


def relative_energies(values: Sequence[float]) -> list[float]:
    """Each value minus the lowest one."""
    if not values:
        return []
    lowest = min(values)
    return [v - lowest for v in values]


_ENERGY_FIELDS = ("scf_energy", "zpe_energy", "thermal_energy", "enthalpy", "gibbs_energy", "gibbs_energy_solution")


@dataclass(frozen=True)
class ThermoSummary:
    """Total energies built from one set of energy components (Eh)."""

    scf_energy: float
    zpe_energy: float  # E + ZPE
    thermal_energy: float  # E + E(thermal)
    enthalpy: float  # E + H(corr)
    gibbs_energy: float  # E + G(corr), gas phase at 1 atm
    gibbs_energy_solution: float  # gibbs_energy shifted to the target concentration
    temperature: float
    concentration: float
    n_imaginary: int = 0
    lowest_frequency: float | None = None

    def in_unit(self, unit: str) -> dict[str, float]:
        """The energy fields converted to `unit`."""
        return {
            name: convert_energy(getattr(self, name), unit)
            for name in _ENERGY_FIELDS
        }


def summarize(
    energies: EnergyComponents,
    context: CommandContext | None = None,
    metadata: CalculationMetadata | None = None,
) -> ThermoSummary:
    """
    Builds total energies from extracted components.

    The Gibbs correction printed by the program is taken at the program's own
    temperature; only the standard-state term uses the target temperature. When
    `context.use_input_temp` is set and metadata is given, the temperature found
    in the file is used instead of `context.temperature`.
    """
    context = context or CommandContext()
    temperature = context.temperature
    if context.use_input_temp and metadata is not None:
        temperature = metadata.temperature

    e_el = energies.electronic_energy
    gibbs = e_el + energies.gibbs_correction
    return ThermoSummary(
        scf_energy=e_el,
        zpe_energy=e_el + energies.zero_point_energy,
        thermal_energy=e_el + energies.thermal_correction,
        enthalpy=e_el + energies.enthalpy_correction,
        gibbs_energy=gibbs,
        gibbs_energy_solution=gibbs + standard_state_correction(temperature, context.concentration),
        temperature=temperature,
        concentration=context.concentration,
        n_imaginary=energies.n_imaginary,
        lowest_frequency=energies.lowest_frequency,
    )
