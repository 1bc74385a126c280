from thermoflow.programs.gaussian.patterns import FREQ_BLOCK_LINE_PAT, FREQUENCIES_LINE_PAT
from thermoflow.typing import FrequencyIntensity
from thermoflow.utils import logger


def _parse_columns(raw: str) -> list[float | None]:
    """Up to three numeric columns; a malformed column becomes None so positions stay aligned."""
    values: list[float | None] = []
    for column in raw.split()[:3]:
        try:
            values.append(float(column))
        except ValueError:
            logger.debug(f"Skipping malformed vibrational column '{column}'")
            values.append(None)
    return values


def parse_frequencies(text: str) -> tuple[float, ...]:
    """All vibrational frequencies (cm^-1) in file order. Imaginary modes are negative."""
    frequencies: list[float] = []
    for match in FREQUENCIES_LINE_PAT.finditer(text):
        frequencies.extend(v for v in _parse_columns(match.group(1)) if v is not None)
    return tuple(frequencies)


def parse_frequency_intensities(text: str) -> list[FrequencyIntensity]:
    """
    Pairs each frequency with its IR intensity.

    Gaussian prints up to three modes per block. Columns are paired by position
    between a block's 'Frequencies --' row and the 'IR Inten --' row that follows
    it, so a block with fewer columns contributes fewer pairs.
    """
    pairs: list[FrequencyIntensity] = []
    pending: list[float | None] | None = None

    for line in text.splitlines():
        match = FREQ_BLOCK_LINE_PAT.match(line)
        if match is None:
            continue
        label, raw = match.groups()
        if label == "Frequencies":
            pending = _parse_columns(raw)
            continue
        if pending is None:
            logger.debug("Found an IR intensity row without a preceding frequency row, skipping.")
            continue
        intensities = _parse_columns(raw)
        for frequency, intensity in zip(pending, intensities):
            if frequency is not None and intensity is not None:
                pairs.append(FrequencyIntensity(frequency=frequency, intensity=intensity))
        pending = None

    return pairs
