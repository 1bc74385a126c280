from dataclasses import dataclass, replace
from typing import TypeVar

from thermoflow.constants import (
    DEFAULT_CONCENTRATION_M,
    DEFAULT_TEMPERATURE_K,
    ENERGY_UNITS,
    MAX_FILE_SIZE_MB,
)
from thermoflow.exceptions import ConfigurationError
from thermoflow.utils import logger

T_Context = TypeVar("T_Context", bound="CommandContext")


@dataclass(frozen=True)
class ValidationPolicy:
    """
    Plausibility bounds applied to extracted energies.

    The bounds are backend-specific policy rather than physical law: they assume
    energies in Hartree and are only meaningful for programs reporting in that unit.

    Attributes:
        min_electronic_energy (float): Lowest accepted electronic energy (Eh).
        max_electronic_energy (float): Highest accepted electronic energy (Eh).
        min_zero_point_energy (float): Lowest accepted zero-point energy (Eh).
    """

    min_electronic_energy: float = -10000.0
    max_electronic_energy: float = 0.0
    min_zero_point_energy: float = 0.0

    def __post_init__(self) -> None:
        if self.min_electronic_energy > self.max_electronic_energy:
            raise ConfigurationError(
                f"min_electronic_energy ({self.min_electronic_energy}) must not exceed "
                f"max_electronic_energy ({self.max_electronic_energy})."
            )


DEFAULT_VALIDATION_POLICY = ValidationPolicy()


@dataclass(frozen=True)
class CommandContext:
    """
    Execution parameters supplied by the caller.

    The core reads these values and never mutates them. Use the fluent setters to
    derive a modified copy.

    Attributes:
        temperature (float): Target temperature in Kelvin. Defaults to 298.15.
        concentration (float): Target concentration in mol/L. Defaults to 1.0.
        use_input_temp (bool): Use the temperature printed in each output file instead of `temperature`.
        show_error_details (bool): Surface detailed error descriptions in triage results.
        quiet (bool): Suppress non-essential log output.
        max_file_size_mb (int): Files larger than this are skipped by batch helpers.
        energy_unit (str): Unit for reported energies, one of "au", "ev", "kcal/mol", "kj/mol".
        program (str): Name of the backend to use.
    """

    temperature: float = DEFAULT_TEMPERATURE_K
    concentration: float = DEFAULT_CONCENTRATION_M
    use_input_temp: bool = False
    show_error_details: bool = False
    quiet: bool = False
    max_file_size_mb: int = MAX_FILE_SIZE_MB
    energy_unit: str = "au"
    program: str = "gaussian"

    def __post_init__(self) -> None:
        """
        Validates the context values.

        Raises:
            ConfigurationError: If temperature, concentration or max_file_size_mb is not positive.
            ConfigurationError: If energy_unit is not a known unit.
        """
        if self.temperature <= 0:
            raise ConfigurationError(f"Temperature must be positive, got {self.temperature} K.")
        if self.concentration <= 0:
            raise ConfigurationError(f"Concentration must be positive, got {self.concentration} M.")
        if self.max_file_size_mb <= 0:
            raise ConfigurationError(f"Maximum file size must be positive, got {self.max_file_size_mb} MB.")
        if self.energy_unit.lower() not in ENERGY_UNITS:
            raise ConfigurationError(
                f"Unknown energy unit '{self.energy_unit}'. Allowed: {', '.join(sorted(ENERGY_UNITS))}"
            )

        if self.temperature < 50 or self.temperature > 5000:
            logger.warning(f"Temperature of {self.temperature} K is unusual, please double check.")

    def set_temperature(self: T_Context, temperature: float) -> T_Context:
        """Return a copy of the context with a new temperature (K)."""
        return replace(self, temperature=temperature)

    def set_concentration(self: T_Context, concentration: float) -> T_Context:
        """Return a copy of the context with a new concentration (mol/L)."""
        return replace(self, concentration=concentration)
