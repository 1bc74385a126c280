from collections.abc import Sequence
from pathlib import Path

from thermoflow.constants import HARTREE_TO_KCAL_MOL
from thermoflow.core import PathType, QMProgram, read_output
from thermoflow.programs.gaussian.frequencies import parse_frequencies, parse_frequency_intensities
from thermoflow.programs.gaussian.patterns import (
    BANNER_NAME_PAT,
    BANNER_TAG_PAT,
    BSSE_ENERGY_PAT,
    DISPERSION_ENERGY_PAT,
    ENERGY_FIELDS,
    SOLVATION_DELTA_G_PAT,
)
from thermoflow.programs.gaussian.route import (
    dispersion_label,
    find_route_section,
    parse_conditions,
    parse_program_version,
    parse_route_section,
)
from thermoflow.programs.gaussian.status import classify_text, find_error_type, has_pcm_failure
from thermoflow.programs.pattern import extract_fields, extract_last_optional
from thermoflow.typing import CalculationMetadata, EnergyComponents, FrequencyIntensity, JobStatus
from thermoflow.utils import logger


class GaussianProgram(QMProgram):
    """Backend for Gaussian (09/16) log files."""

    def program_name(self) -> str:
        return "Gaussian"

    def supported_extensions(self) -> tuple[str, ...]:
        return (".log", ".out", ".LOG", ".OUT")

    def is_banner(self, line: str) -> bool:
        return bool(BANNER_NAME_PAT.search(line) and BANNER_TAG_PAT.search(line))

    def parse_energies(self, text: str) -> EnergyComponents:
        values = extract_fields(text, ENERGY_FIELDS)

        solvation_kcal = extract_last_optional(text, SOLVATION_DELTA_G_PAT)
        return EnergyComponents(
            **values,
            frequencies=parse_frequencies(text),
            dispersion_correction=extract_last_optional(text, DISPERSION_ENERGY_PAT),
            solvation_energy=solvation_kcal / HARTREE_TO_KCAL_MOL if solvation_kcal is not None else None,
            counterpoise_correction=extract_last_optional(text, BSSE_ENERGY_PAT),
        )

    def parse_metadata(self, text: str) -> CalculationMetadata:
        route = parse_route_section(find_route_section(text))
        temperature, pressure = parse_conditions(text)
        return CalculationMetadata(
            program_version=parse_program_version(text),
            method=route.method,
            basis_set=route.basis_set,
            keywords=route.keywords,
            solvent=route.solvent,
            temperature=temperature,
            pressure=pressure,
        )

    def classify(self, text: str) -> JobStatus:
        return classify_text(text)

    def render_input(self, path: Path, method: str, keywords: Sequence[str]) -> str:
        route = " ".join(["#p", method, *keywords])
        # fmt:off
        lines = [
            f"%chk={path.with_suffix('.chk').name}",
            "%mem=4GB",
            "%nprocshared=4",
            route,
            "",
            "Generated by thermoflow",
            "",
            "0 1",  # charge and multiplicity
            "C 0.0 0.0 0.0",  # placeholder geometry
            "",
            "",
        ]
        # fmt:on
        return "\n".join(lines)

    # --- Gaussian-specific helpers --- #

    def check_pcm_convergence(self, path: PathType) -> bool:
        """True if the output reports a PCM convergence failure. False if it cannot be read."""
        try:
            return has_pcm_failure(read_output(path))
        except (OSError, ValueError) as e:
            logger.debug(f"Could not read {path} for PCM check: {e}")
            return False

    def check_error_type(self, path: PathType) -> str:
        """Description of the first recognised error ('' if none or unreadable)."""
        try:
            return find_error_type(read_output(path))
        except (OSError, ValueError) as e:
            logger.debug(f"Could not read {path} for error check: {e}")
            return ""

    def extract_frequencies(self, path: PathType) -> list[FrequencyIntensity]:
        """Frequency/IR intensity pairs in file order. Empty if the file cannot be read."""
        try:
            text = read_output(path)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not extract frequency data from {path}: {e}")
            return []
        return parse_frequency_intensities(text)

    def get_dispersion_type(self, path: PathType) -> str | None:
        """'D3BJ', 'D3' or 'D2' as requested in the route section, None if absent or unreadable."""
        try:
            text = read_output(path)
        except (OSError, ValueError) as e:
            logger.debug(f"Could not read {path} for dispersion check: {e}")
            return None
        route = find_route_section(text)
        return dispersion_label(route) if route else None

    def validate_calculation_type(self, metadata: CalculationMetadata) -> bool:
        """Whether the metadata describes a calculation usable for energy extraction."""
        return bool(metadata.method)
