from collections.abc import Sequence
from pathlib import Path

from thermoflow.constants import DEFAULT_PRESSURE_ATM, DEFAULT_TEMPERATURE_K, HARTREE_TO_KCAL_MOL
from thermoflow.core import PathType, QMProgram, read_output
from thermoflow.programs.orca.patterns import (
    BANNER_PAT,
    BASIS_PAT,
    CONVERGENCE_ERROR_PATTERNS,
    DISPERSION_ENERGY_PAT,
    ENERGY_FIELDS,
    ENTHALPY_TERM_PAT,
    ENTROPY_TERM_PAT,
    ERROR_PATTERNS,
    FREQUENCY_PAT,
    IR_ROW_PAT,
    IR_SPECTRUM_START_PAT,
    METHOD_PAT,
    NORMAL_TERMINATION_PAT,
    PRESSURE_PAT,
    SIMPLE_INPUT_PAT,
    SOLVATION_ENERGY_PAT,
    SOLVENT_PAT,
    TEMPERATURE_PAT,
    VERSION_PAT,
)
from thermoflow.programs.pattern import (
    extract_fields,
    extract_last_optional,
    extract_last_value,
    extract_optional,
    first_marker,
)
from thermoflow.typing import CalculationMetadata, EnergyComponents, FrequencyIntensity, JobStatus
from thermoflow.utils import logger


class OrcaProgram(QMProgram):
    """
    Backend for ORCA output files.

    ORCA prints its thermochemistry differently from Gaussian; the fields are
    mapped onto the same conventions:

    - thermal_correction is the 'Total correction' (ZPE included)
    - enthalpy_correction adds the kT enthalpy term to it
    - entropy is recovered from the T*S term at the printed temperature
    - translational/rotational zero modes are not reported as frequencies
    """

    def program_name(self) -> str:
        return "ORCA"

    def supported_extensions(self) -> tuple[str, ...]:
        return (".out", ".log")

    def is_banner(self, line: str) -> bool:
        return bool(BANNER_PAT.search(line))

    def parse_energies(self, text: str) -> EnergyComponents:
        values = extract_fields(text, ENERGY_FIELDS)

        enthalpy_term = extract_optional(text, ENTHALPY_TERM_PAT)
        enthalpy_correction = values["thermal_correction"] + enthalpy_term if enthalpy_term is not None else 0.0

        entropy = 0.0
        entropy_term = extract_optional(text, ENTROPY_TERM_PAT)
        temperature = extract_last_value(text, TEMPERATURE_PAT, DEFAULT_TEMPERATURE_K)
        if entropy_term is not None and temperature > 0:
            entropy = entropy_term * HARTREE_TO_KCAL_MOL * 1000.0 / temperature  # cal/(mol K)

        frequencies = tuple(f for f in (float(m.group(1)) for m in FREQUENCY_PAT.finditer(text)) if f != 0.0)
        return EnergyComponents(
            **values,
            enthalpy_correction=enthalpy_correction,
            entropy=entropy,
            frequencies=frequencies,
            dispersion_correction=extract_last_optional(text, DISPERSION_ENERGY_PAT),
            solvation_energy=extract_last_optional(text, SOLVATION_ENERGY_PAT),
        )

    def parse_metadata(self, text: str) -> CalculationMetadata:
        version_match = VERSION_PAT.search(text)
        simple_input = " ".join(m.group(1).strip() for m in SIMPLE_INPUT_PAT.finditer(text))

        method_match = METHOD_PAT.search(simple_input)
        basis_match = BASIS_PAT.search(simple_input)
        level_tokens = {m.group(0).lower() for m in (method_match, basis_match) if m is not None}
        keywords = tuple(token for token in simple_input.split() if token.lower() not in level_tokens)

        solvent_match = SOLVENT_PAT.search(simple_input)
        return CalculationMetadata(
            program_version=f"ORCA {version_match.group(1)}" if version_match else "",
            method=method_match.group(1) if method_match else "",
            basis_set=basis_match.group(1) if basis_match else "",
            keywords=keywords,
            solvent=solvent_match.group(1).lower() if solvent_match else None,
            temperature=extract_last_value(text, TEMPERATURE_PAT, DEFAULT_TEMPERATURE_K),
            pressure=extract_last_value(text, PRESSURE_PAT, DEFAULT_PRESSURE_ATM),
        )

    def classify(self, text: str) -> JobStatus:
        if NORMAL_TERMINATION_PAT.search(text):
            return JobStatus.COMPLETED
        marker = first_marker(text, ERROR_PATTERNS) or first_marker(text, CONVERGENCE_ERROR_PATTERNS)
        if marker is not None:
            logger.debug(f"Found ORCA failure marker: '{marker}'")
            return JobStatus.ERROR
        return JobStatus.INTERRUPTED

    def render_input(self, path: Path, method: str, keywords: Sequence[str]) -> str:
        # fmt:off
        lines = [
            " ".join(["!", method, *keywords]),
            "%pal nprocs 4 end",
            "%maxcore 4000",
            "",
            "* xyz 0 1",
            "C 0.0 0.0 0.0",  # placeholder geometry
            "*",
            "",
        ]
        # fmt:on
        return "\n".join(lines)

    def check_convergence_issues(self, path: PathType) -> bool:
        """True if the output reports an SCF or geometry convergence failure. False if unreadable."""
        try:
            return first_marker(read_output(path), CONVERGENCE_ERROR_PATTERNS) is not None
        except (OSError, ValueError) as e:
            logger.debug(f"Could not read {path} for convergence check: {e}")
            return False

    def extract_frequencies(self, path: PathType) -> list[FrequencyIntensity]:
        """Frequency/IR intensity pairs from the IR SPECTRUM table. Empty if the file cannot be read."""
        try:
            text = read_output(path)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not extract frequency data from {path}: {e}")
            return []

        start = IR_SPECTRUM_START_PAT.search(text)
        if start is None:
            return []
        pairs: list[FrequencyIntensity] = []
        # the table sits between the header and the first blank line after the rows
        for line in text[start.end() :].splitlines():
            match = IR_ROW_PAT.match(line)
            if match:
                pairs.append(FrequencyIntensity(frequency=float(match.group(1)), intensity=float(match.group(2))))
            elif pairs and not line.strip():
                break
        return pairs
