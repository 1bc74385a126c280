from pathlib import Path

from thermoflow.programs.gaussian import GaussianProgram
from thermoflow.programs.gaussian.frequencies import parse_frequencies, parse_frequency_intensities
from thermoflow.typing import FrequencyIntensity

ex_folder = Path(__file__).resolve().parents[2] / "data" / "gaussian"


def test_extract_frequencies(gaussian: GaussianProgram) -> None:
    pairs = gaussian.extract_frequencies(ex_folder / "h2o_opt_freq.log")
    assert pairs == [
        FrequencyIntensity(1713.0822, 75.2350),
        FrequencyIntensity(3727.3527, 1.6810),
        FrequencyIntensity(3849.0357, 18.6583),
    ]


def test_partial_last_block(gaussian: GaussianProgram) -> None:
    pairs = gaussian.extract_frequencies(ex_folder / "ts_imaginary.log")
    assert [p.frequency for p in pairs] == [-1523.4711, 211.0832, 389.1204, 812.6670, 1102.0015]
    assert [p.intensity for p in pairs] == [1205.3318, 0.4410, 12.0954, 8.2216, 35.1030]


def test_no_frequencies(gaussian: GaussianProgram, tmp_path: Path) -> None:
    assert gaussian.extract_frequencies(ex_folder / "h2o_sp_high.log") == []
    assert gaussian.extract_frequencies(tmp_path / "missing.log") == []


def test_malformed_column_keeps_positions_aligned() -> None:
    text = (
        " Frequencies --   100.0000    ********   300.0000\n"
        " Red. masses --     1.0000      1.0000     1.0000\n"
        " IR Inten    --     1.0000      2.0000     3.0000\n"
    )
    assert parse_frequencies(text) == (100.0, 300.0)
    assert parse_frequency_intensities(text) == [FrequencyIntensity(100.0, 1.0), FrequencyIntensity(300.0, 3.0)]


def test_intensity_row_without_frequency_row_is_ignored() -> None:
    assert parse_frequency_intensities(" IR Inten    --     1.0000\n") == []


def test_high_precision_block_is_ignored() -> None:
    text = " Frequencies ---  1713.0822\n Frequencies --   1713.08\n"
    assert parse_frequencies(text) == (1713.08,)
