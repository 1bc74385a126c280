"""Route section and header parsing for Gaussian output.

Method and basis set are recognised from a small vocabulary. Anything outside it
leaves the field empty, which is not an error.
"""

import re
from dataclasses import dataclass, field

from thermoflow.constants import DEFAULT_PRESSURE_ATM, DEFAULT_TEMPERATURE_K
from thermoflow.programs.gaussian.patterns import (
    BASIS_PAT,
    DISPERSION_LABELS,
    METHOD_PAT,
    PRESSURE_PAT,
    ROUTE_DISPERSION_PAT,
    ROUTE_PREFIX_PAT,
    ROUTE_SEPARATOR_PAT,
    SCRF_PAT,
    SOLVENT_PAT,
    TEMPERATURE_PAT,
    VERSION_PAT,
)
from thermoflow.programs.pattern import extract_last_value
from thermoflow.utils import logger

TOKEN_PAT = re.compile(r"\S+")


@dataclass(frozen=True)
class RouteInfo:
    """What the route section says about the calculation."""

    method: str = ""
    basis_set: str = ""
    keywords: tuple[str, ...] = field(default_factory=tuple)
    solvent: str | None = None
    dispersion: str | None = None


def find_route_section(text: str) -> str:
    """
    Returns the route directive, joined back together if Gaussian wrapped it.

    The route starts at the first line beginning with '#' and runs until the
    dashed separator that follows it. Empty if there is no route.
    """
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if not line.strip().startswith("#"):
            continue
        parts = [line.strip()]
        for continuation in lines[i + 1 :]:
            if ROUTE_SEPARATOR_PAT.match(continuation) or not continuation.strip():
                break
            # Gaussian wraps at a fixed column after a single leading space
            parts.append(continuation[1:] if continuation.startswith(" ") else continuation)
        return "".join(parts).strip()
    return ""


def dispersion_label(route: str) -> str | None:
    """Dispersion correction requested in a route, most specific label first (D3BJ before D3)."""
    match = ROUTE_DISPERSION_PAT.search(route)
    haystack = (match.group(1) if match else route).upper()
    for needles, label in DISPERSION_LABELS:
        if any(needle in haystack for needle in needles):
            return label
    return None


def parse_route_section(route: str) -> RouteInfo:
    """Picks method, basis set, solvent, dispersion and the remaining keywords out of a route string."""
    if not route:
        return RouteInfo()

    method_match = METHOD_PAT.search(route)
    basis_match = BASIS_PAT.search(route)
    method = method_match.group(1) if method_match else ""
    basis = basis_match.group(1) if basis_match else ""

    level_spans = [m.span(1) for m in (method_match, basis_match) if m is not None]
    keywords: list[str] = []
    for token_match in TOKEN_PAT.finditer(route):
        token = token_match.group(0)
        if ROUTE_PREFIX_PAT.match(token):
            continue
        # the token carrying the level of theory, e.g. b3lyp/6-31g(d)
        if any(token_match.start() <= start < token_match.end() for start, _ in level_spans):
            continue
        keywords.append(token)

    solvent: str | None = None
    if SCRF_PAT.search(route):
        solvent_match = SOLVENT_PAT.search(route)
        solvent = solvent_match.group(1).lower() if solvent_match else "water"

    info = RouteInfo(
        method=method,
        basis_set=basis,
        keywords=tuple(keywords),
        solvent=solvent,
        dispersion=dispersion_label(route),
    )
    logger.debug(f"Parsed route '{route}': {info}")
    return info


def parse_program_version(text: str) -> str:
    """'Gaussian 16, Revision C.01' -> 'Gaussian 16 C.01'. Empty if no banner is found."""
    match = VERSION_PAT.search(text)
    if match is None:
        return ""
    return f"Gaussian {match.group(1)} {match.group(2)}"


def parse_conditions(text: str) -> tuple[float, float]:
    """Temperature (K) and pressure (atm) of the last thermochemistry block."""
    temperature = extract_last_value(text, TEMPERATURE_PAT, DEFAULT_TEMPERATURE_K)
    pressure = extract_last_value(text, PRESSURE_PAT, DEFAULT_PRESSURE_ATM)
    return temperature, pressure
