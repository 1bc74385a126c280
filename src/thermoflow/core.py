from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import replace
from os import PathLike
from pathlib import Path

from thermoflow.config import DEFAULT_VALIDATION_POLICY, ValidationPolicy
from thermoflow.constants import BANNER_SCAN_LINES
from thermoflow.exceptions import ExtractionError
from thermoflow.programs.validation import validate_energy_components
from thermoflow.thermo import compose_energies
from thermoflow.typing import CalculationMetadata, EnergyComponents, JobStatus
from thermoflow.utils import logger

PathType = str | PathLike[str]


def read_output(path: PathType) -> str:
    """
    Reads a whole output file as text.

    Undecodable bytes are replaced rather than rejected: program banners sometimes
    contain latin-1 characters.

    Raises:
        OSError: If the file does not exist or cannot be read.
        ValueError: If `path` is not a usable file name (e.g. it contains a NUL byte).
    """
    return Path(path).read_text(encoding="utf-8", errors="replace")


class QMProgram(ABC):
    """
    Abstract base class for quantum chemistry program backends.

    A backend turns the text output of one program into `EnergyComponents`,
    `CalculationMetadata` and a `JobStatus`. Subclasses implement the text-level
    hooks (`parse_energies`, `parse_metadata`, `classify`, `render_input`,
    `is_banner`); this class wraps them with file access and the shared failure
    policy:

    - `extract_energies` raises `ExtractionError` on unreadable files and
      `ValidationError` on implausible results.
    - `get_metadata`, `check_job_status`, `is_valid_output` and `create_input`
      never raise.

    Instances hold no per-file state and can be shared between threads.

    Attributes:
        validation_policy (ValidationPolicy): Plausibility bounds used by `validate`.
    """

    validation_policy: ValidationPolicy = DEFAULT_VALIDATION_POLICY

    def __init__(self, validation_policy: ValidationPolicy | None = None) -> None:
        if validation_policy is not None:
            self.validation_policy = validation_policy

    # --- Backend hooks --- #

    @abstractmethod
    def program_name(self) -> str:
        """Stable display name, e.g. "Gaussian"."""
        ...

    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """File suffixes this backend claims, e.g. (".log", ".out")."""
        ...

    @abstractmethod
    def is_banner(self, line: str) -> bool:
        """Whether `line` identifies the program (checked on the first lines of a file)."""
        ...

    @abstractmethod
    def parse_energies(self, text: str) -> EnergyComponents:
        """Extract energy components from output text, defaulting missing fields. Must not validate."""
        ...

    @abstractmethod
    def parse_metadata(self, text: str) -> CalculationMetadata:
        """Extract metadata from output text. Missing fields stay empty."""
        ...

    @abstractmethod
    def classify(self, text: str) -> JobStatus:
        """Classify the completion state of readable output text."""
        ...

    @abstractmethod
    def render_input(self, path: Path, method: str, keywords: Sequence[str]) -> str:
        """Return the content of a minimal input file for this program."""
        ...

    # --- Public contract --- #

    def is_valid_output(self, path: PathType) -> bool:
        """Cheap check for the program banner within the first lines of the file."""
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                for line_number, line in enumerate(f):
                    if line_number >= BANNER_SCAN_LINES:
                        break
                    if self.is_banner(line):
                        return True
        except (OSError, ValueError) as e:
            logger.debug(f"Could not open {path} to check for a {self.program_name()} banner: {e}")
        return False

    def extract_energies(self, path: PathType) -> EnergyComponents:
        """
        Extracts and validates the energy components of an output file.

        Raises:
            ExtractionError: If the file cannot be read.
            ValidationError: If the extracted energies are not physically plausible.
        """
        try:
            text = read_output(path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {path} for energy extraction: {e}")
            raise ExtractionError(f"Failed to extract energies from {path}: {e}") from e

        energies = self.parse_energies(text)
        self.validate(energies, source=str(path))
        logger.info(f"Extracted energies from {path}: {energies!r}")
        return energies

    def get_metadata(self, path: PathType) -> CalculationMetadata:
        """Extracts calculation metadata. A read failure yields empty metadata with ERROR status."""
        try:
            text = read_output(path)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not extract complete metadata from {path}: {e}")
            return CalculationMetadata(file_path=str(path), status=JobStatus.ERROR)

        metadata = self.parse_metadata(text)
        return replace(metadata, file_path=str(path), status=self.classify(text))

    def check_job_status(self, path: PathType) -> JobStatus:
        """Classifies the job. UNKNOWN means the file could not be read at all."""
        try:
            text = read_output(path)
        except (OSError, ValueError) as e:
            logger.debug(f"Could not read {path} for status check: {e}")
            return JobStatus.UNKNOWN
        status = self.classify(text)
        logger.debug(f"Job status of {path}: {status}")
        return status

    def create_input(self, path: PathType, method: str, keywords: Sequence[str] = ()) -> bool:
        """Writes a minimal input skeleton. Returns False if the file cannot be written."""
        target = Path(path)
        try:
            target.write_text(self.render_input(target, method, keywords))
        except (OSError, ValueError) as e:
            logger.error(f"Error creating input file {path}: {e}")
            return False
        logger.info(f"Wrote {self.program_name()} input skeleton to {path}")
        return True

    # --- Shared helpers --- #

    def validate(self, energies: EnergyComponents, source: str = "") -> None:
        """Applies this backend's validation policy. Raises ValidationError on failure."""
        validate_energy_components(energies, self.validation_policy, source=source)

    def claims(self, path: PathType) -> bool:
        """Whether the file suffix is one of `supported_extensions()`. Never applied internally."""
        return Path(path).suffix in self.supported_extensions()

    def calculate_high_level_energy(self, low_level_path: PathType, high_level_path: PathType) -> EnergyComponents:
        """
        Combines a high-level single point with the thermal data of a low-level frequency run.

        Both files are extracted (and validated) independently. The caller is
        responsible for both files describing the same geometry.

        Raises:
            ExtractionError: If either file cannot be read.
            ValidationError: If either file fails validation.
        """
        low_level = self.extract_energies(low_level_path)
        high_level = self.extract_energies(high_level_path)
        return compose_energies(low_level, high_level)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
