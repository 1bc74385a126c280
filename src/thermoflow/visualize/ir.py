from collections.abc import Sequence

import plotly.graph_objects as go

from thermoflow.typing import FrequencyIntensity
from thermoflow.visualize.style import SPECTRUM_COLORS, apply_development_style, apply_publication_style


def lorentzian_envelope(
    pairs: Sequence[FrequencyIntensity], fwhm: float = 20.0, n_points: int = 2000, padding: float = 100.0
) -> tuple[list[float], list[float]]:
    """
    Broadens stick intensities into a continuous spectrum.

    Args:
        pairs: Frequency/intensity pairs. Imaginary modes are ignored.
        fwhm: Full width at half maximum of each Lorentzian (cm^-1).
        n_points: Number of grid points.
        padding: Extra range on both sides of the outermost modes (cm^-1).

    Returns:
        The frequency grid and the summed intensities on it.
    """
    real = [p for p in pairs if p.frequency > 0]
    if not real:
        return [], []
    lo = max(0.0, min(p.frequency for p in real) - padding)
    hi = max(p.frequency for p in real) + padding
    step = (hi - lo) / (n_points - 1)
    grid = [lo + i * step for i in range(n_points)]
    half_width = fwhm / 2.0
    envelope = [
        sum(p.intensity * half_width**2 / ((x - p.frequency) ** 2 + half_width**2) for p in real) for x in grid
    ]
    return grid, envelope


def plot_ir_spectrum(
    pairs: Sequence[FrequencyIntensity],
    title: str = "IR Spectrum",
    fwhm: float | None = 20.0,
    development: bool = False,
) -> go.Figure:
    """
    Plots vibrational modes as sticks, optionally with a Lorentzian envelope.

    Imaginary modes are drawn at their absolute frequency in a separate colour.
    The wavenumber axis runs from high to low, as is conventional for IR spectra.

    Args:
        pairs: Frequency/intensity pairs, e.g. from `GaussianProgram.extract_frequencies`.
        title: Title of the plot.
        fwhm: Envelope width in cm^-1, or None for sticks only.
        development: Use the dark development theme instead of the publication style.

    Returns:
        plotly.graph_objects.Figure: The generated Plotly figure.
    """
    fig = go.Figure()

    for label, color_key, modes in (
        ("Modes", "stick", [p for p in pairs if p.frequency >= 0]),
        ("Imaginary modes", "imaginary", [p for p in pairs if p.frequency < 0]),
    ):
        if not modes:
            continue
        x: list[float | None] = []
        y: list[float | None] = []
        for p in modes:
            # one vertical segment per mode, separated by gaps
            x.extend([abs(p.frequency), abs(p.frequency), None])
            y.extend([0.0, p.intensity, None])
        fig.add_trace(go.Scatter(x=x, y=y, mode="lines", name=label, line=dict(color=SPECTRUM_COLORS[color_key])))

    if fwhm is not None:
        grid, envelope = lorentzian_envelope(pairs, fwhm=fwhm)
        if grid:
            fig.add_trace(
                go.Scatter(
                    x=grid, y=envelope, mode="lines", name=f"Lorentzian ({fwhm:g} cm⁻¹)",
                    line=dict(color=SPECTRUM_COLORS["envelope"], width=1.5),
                )
            )

    fig.update_layout(title=title, showlegend=len(fig.data) > 1)
    fig.update_xaxes(title_text="Wavenumber (cm⁻¹)", autorange="reversed")
    fig.update_yaxes(title_text="Intensity (km/mol)")

    if development:
        apply_development_style(fig)
    else:
        apply_publication_style(fig)
    return fig
