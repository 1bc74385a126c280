import math

import plotly.graph_objects as go

from thermoflow.typing import FrequencyIntensity
from thermoflow.visualize.ir import lorentzian_envelope, plot_ir_spectrum
from thermoflow.visualize.style import SPECTRUM_COLORS

PAIRS = [
    FrequencyIntensity(1713.0822, 75.2350),
    FrequencyIntensity(3727.3527, 1.6810),
    FrequencyIntensity(3849.0357, 18.6583),
]


def test_envelope_peaks_at_mode() -> None:
    grid, envelope = lorentzian_envelope(PAIRS[:1], fwhm=20.0, n_points=401, padding=100.0)
    assert len(grid) == len(envelope) == 401
    assert math.isclose(grid[0], 1613.0822)
    assert math.isclose(grid[-1], 1813.0822)
    # the grid midpoint sits exactly on the mode
    assert math.isclose(envelope[200], 75.2350)
    assert max(envelope) == envelope[200]


def test_envelope_ignores_imaginary_modes() -> None:
    assert lorentzian_envelope([FrequencyIntensity(-500.0, 10.0)]) == ([], [])
    assert lorentzian_envelope([]) == ([], [])


def test_plot_ir_spectrum() -> None:
    fig = plot_ir_spectrum(PAIRS, title="Water")
    assert isinstance(fig, go.Figure)
    assert [trace.name for trace in fig.data] == ["Modes", "Lorentzian (20 cm⁻¹)"]
    assert fig.data[0].line.color == SPECTRUM_COLORS["stick"]
    assert fig.layout.xaxis.autorange == "reversed"
    assert fig.layout.title.text == "Water"


def test_plot_imaginary_modes_separately() -> None:
    pairs = [FrequencyIntensity(-1523.4711, 1205.3318), *PAIRS]
    fig = plot_ir_spectrum(pairs, fwhm=None)
    assert [trace.name for trace in fig.data] == ["Modes", "Imaginary modes"]
    assert list(fig.data[1].x[:2]) == [1523.4711, 1523.4711]


def test_sticks_only() -> None:
    fig = plot_ir_spectrum(PAIRS, fwhm=None, development=True)
    assert len(fig.data) == 1
    assert fig.layout.showlegend is False
    assert fig.layout.plot_bgcolor == "black"
