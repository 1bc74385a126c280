"""Compiled patterns for Gaussian output files."""

import re

from thermoflow.programs.pattern import FieldPattern

# --- Identification --- #
BANNER_NAME_PAT = re.compile(r"Gaussian")
BANNER_TAG_PAT = re.compile(r"Revision|Inc\.")
VERSION_PAT = re.compile(r"Gaussian\s+(\d+),?\s+Revision\s+([A-Z]\.\d+)")

# --- Energies --- #
SCF_ENERGY_PAT = re.compile(r"SCF Done:\s+E\([^)]+\)\s*=\s*(-?\d+\.\d+(?:[DE][+-]?\d+)?)")
ZPE_PAT = re.compile(r"Zero-point correction=\s*(-?\d+\.\d+)")
THERMAL_CORRECTION_PAT = re.compile(r"Thermal correction to Energy=\s*(-?\d+\.\d+)")
ENTHALPY_CORRECTION_PAT = re.compile(r"Thermal correction to Enthalpy=\s*(-?\d+\.\d+)")
GIBBS_CORRECTION_PAT = re.compile(r"Thermal correction to Gibbs Free Energy=\s*(-?\d+\.\d+)")
# "Total" row of the E (Thermal) / CV / S table; the third column is the entropy
ENTROPY_PAT = re.compile(
    r"E \(Thermal\)\s+CV\s+S\s*\n[^\n]*\n\s*Total\s+-?\d+\.\d+\s+-?\d+\.\d+\s+(-?\d+\.\d+)"
)
NUCLEAR_REPULSION_PAT = re.compile(r"nuclear repulsion energy\s+(-?\d+\.\d+)\s+Hartrees")

# --- Optional corrections --- #
DISPERSION_ENERGY_PAT = re.compile(r"Dispersion energy=\s*(-?\d+\.\d+)\s+Hartrees")
SOLVATION_DELTA_G_PAT = re.compile(r"DeltaG \(solv\)\s+\(kcal/mol\)\s*=\s*(-?\d+\.\d+)")
BSSE_ENERGY_PAT = re.compile(r"BSSE energy =\s*(-?\d+\.\d+)")

# --- Conditions --- #
TEMPERATURE_PAT = re.compile(r"Temperature\s+(\d+\.\d+)\s+Kelvin\.")
PRESSURE_PAT = re.compile(r"Pressure\s+(\d+\.\d+)\s+Atm\.")

# --- Vibrational analysis --- #
# "---" (high precision modes) is deliberately excluded
FREQUENCIES_LINE_PAT = re.compile(r"^\s*Frequencies --\s+(.*)$", re.MULTILINE)
FREQ_BLOCK_LINE_PAT = re.compile(r"^\s*(Frequencies|IR Inten)\s+--\s+(.*)$")

# --- Job status markers (checked in this order) --- #
NORMAL_TERMINATION_PAT = re.compile(r"Normal termination of Gaussian")
ERROR_PATTERNS = [
    re.compile(r"Error termination"),
    re.compile(r"Fatal Error"),
    re.compile(r"Erroneous write"),
    re.compile(r"File lengths do not match"),
    re.compile(r"Error in internal coordinate system"),
]
PCM_ERROR_PATTERNS = [
    re.compile(r"Convergence failure -- run terminated"),
    re.compile(r"PCM cycles did not converge"),
    re.compile(r"PCM optimization failed"),
]

# Descriptions reported for the first error found, in this order
ERROR_TYPES: list[tuple[str, str]] = [
    ("Error termination", "Error termination"),
    ("Convergence failure", "Convergence failure"),
    ("File lengths do not match", "File length mismatch"),
    ("Fatal Error", "Fatal error"),
]

# --- Route section --- #
ROUTE_SEPARATOR_PAT = re.compile(r"^\s*-{5,}\s*$")
ROUTE_PREFIX_PAT = re.compile(r"^#[pPnNtT]?$")
# fmt:off
METHOD_PAT = re.compile(
    r"(?<![\w-])(?:RO|U|R)?("
    r"CAM-B3LYP|B3LYP|B2PLYPD3|B2PLYP|M06-2X|M062X|M06L|M06|PBE0|PBE1PBE|wB97XD|wB97X|B97D3|"
    r"CCSD\(T\)|CCSD|MP2|G4|G3|CBS-QB3|PM6|HF"
    r")(?![\w+*])",
    re.IGNORECASE,
)
BASIS_PAT = re.compile(
    r"(?<![\w-])("
    r"6-311?\+{0,2}G\*{0,2}(?:\([^)]*\))?|"
    r"(?:aug-)?cc-pV[DTQ5]Z|"
    r"def2-?(?:SVPD?|TZVPP?D?|QZVPP?D?)|"
    r"STO-3G|3-21G"
    r")(?![\w-])",
    re.IGNORECASE,
)
# fmt:on
SOLVENT_PAT = re.compile(r"solvent\s*=\s*([^\s,)]+)", re.IGNORECASE)
SCRF_PAT = re.compile(r"(?<![\w-])scrf\b", re.IGNORECASE)
ROUTE_DISPERSION_PAT = re.compile(r"EmpiricalDispersion\s*=\s*\(?\s*(\w+)", re.IGNORECASE)

# Most specific first: GD3BJ contains GD3
DISPERSION_LABELS: list[tuple[tuple[str, ...], str]] = [
    (("GD3BJ", "D3BJ"), "D3BJ"),
    (("GD3", "D3"), "D3"),
    (("GD2", "D2"), "D2"),
]

# --- Field definitions used by extract_energies --- #
ENERGY_FIELDS = [
    # the final geometry of an optimisation is the one the thermochemistry belongs to
    FieldPattern("electronic_energy", SCF_ENERGY_PAT, occurrence="last", description="Final SCF energy"),
    FieldPattern("zero_point_energy", ZPE_PAT, description="Zero-point vibrational energy"),
    FieldPattern("thermal_correction", THERMAL_CORRECTION_PAT, description="Thermal correction to the energy"),
    FieldPattern("enthalpy_correction", ENTHALPY_CORRECTION_PAT, description="Thermal correction to the enthalpy"),
    FieldPattern("gibbs_correction", GIBBS_CORRECTION_PAT, description="Thermal correction to the Gibbs energy"),
    FieldPattern("entropy", ENTROPY_PAT, description="Total entropy in cal/(mol K)"),
    FieldPattern("nuclear_repulsion", NUCLEAR_REPULSION_PAT, occurrence="last", description="Nuclear repulsion energy"),
]
