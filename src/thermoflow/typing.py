from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from thermoflow.constants import DEFAULT_PRESSURE_ATM, DEFAULT_TEMPERATURE_K


class JobStatus(Enum):
    """Completion state of a calculation, recomputed on every classification."""

    UNKNOWN = "UNKNOWN"  # the file could not be read
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"
    RUNNING = "RUNNING"
    INTERRUPTED = "INTERRUPTED"  # readable, but neither success nor a known failure

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FrequencyIntensity:
    """A vibrational mode with its infrared intensity."""

    frequency: float  # cm^-1
    intensity: float  # km/mol


@dataclass(frozen=True)
class EnergyComponents:
    """Energies and vibrational data extracted from one output file.

    Missing sections leave their fields at the default (0.0, empty, or None).
    Energies are in Hartree, entropy in cal/(mol K), frequencies in cm^-1.
    """

    electronic_energy: float = 0.0
    zero_point_energy: float = 0.0
    thermal_correction: float = 0.0
    enthalpy_correction: float = 0.0
    gibbs_correction: float = 0.0
    entropy: float = 0.0
    nuclear_repulsion: float = 0.0
    frequencies: tuple[float, ...] = ()
    has_imaginary_freq: bool = field(init=False)

    # Optional program-specific corrections
    dispersion_correction: float | None = None
    solvation_energy: float | None = None
    counterpoise_correction: float | None = None

    def __post_init__(self) -> None:
        # frozen: bypass __setattr__ for the normalised and derived fields
        object.__setattr__(self, "frequencies", tuple(self.frequencies))
        object.__setattr__(self, "has_imaginary_freq", any(f < 0 for f in self.frequencies))

    @property
    def n_imaginary(self) -> int:
        return sum(1 for f in self.frequencies if f < 0)

    @property
    def lowest_frequency(self) -> float | None:
        return min(self.frequencies) if self.frequencies else None

    @property
    def has_thermochemistry(self) -> bool:
        """True when any thermal correction was found in the output."""
        return any(
            v != 0.0
            for v in (self.zero_point_energy, self.thermal_correction, self.enthalpy_correction, self.gibbs_correction)
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(electronic_energy={self.electronic_energy:.8f}, "
            f"zero_point_energy={self.zero_point_energy:.6f}, gibbs_correction={self.gibbs_correction:.6f}, "
            f"n_frequencies={len(self.frequencies)}, has_imaginary_freq={self.has_imaginary_freq})"
        )


@dataclass(frozen=True)
class CalculationMetadata:
    """Identification of what was computed and how the job ended."""

    program_version: str = ""
    method: str = ""
    basis_set: str = ""
    keywords: Sequence[str] = ()
    solvent: str | None = None
    temperature: float = DEFAULT_TEMPERATURE_K
    pressure: float = DEFAULT_PRESSURE_ATM
    file_path: str = ""
    status: JobStatus = JobStatus.UNKNOWN

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", tuple(self.keywords))
