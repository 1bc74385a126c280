from thermoflow.programs.gaussian.program import GaussianProgram
from thermoflow.programs.gaussian.route import RouteInfo, find_route_section, parse_route_section
from thermoflow.programs.gaussian.status import classify_text

__all__ = [
    "GaussianProgram",
    "RouteInfo",
    "find_route_section",
    "parse_route_section",
    "classify_text",
]
