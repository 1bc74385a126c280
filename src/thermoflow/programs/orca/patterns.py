"""Compiled patterns for ORCA output files."""

import re

from thermoflow.programs.pattern import FieldPattern

# --- Identification --- #
BANNER_PAT = re.compile(r"O {3}R {3}C {3}A|Program Version \d")
VERSION_PAT = re.compile(r"Program Version (\d+\.\d+(?:\.\d+)?)")
SIMPLE_INPUT_PAT = re.compile(r"^\|\s*\d+>\s*!(.*)$", re.MULTILINE)

# --- Energies --- #
FINAL_ENERGY_PAT = re.compile(r"FINAL SINGLE POINT ENERGY\s+(-?\d+\.\d+)")
ZPE_PAT = re.compile(r"Zero point energy\s+\.\.\.\s+(-?\d+\.\d+) Eh")
# ZPE + vibrational, rotational and translational thermal energy, comparable to Gaussian's
TOTAL_CORRECTION_PAT = re.compile(r"^Total correction\s+(-?\d+\.\d+) Eh", re.MULTILINE)
ENTHALPY_TERM_PAT = re.compile(r"Thermal Enthalpy correction\s+\.\.\.\s+(-?\d+\.\d+) Eh")
GIBBS_CORRECTION_PAT = re.compile(r"G-E\(el\)\s+\.\.\.\s+(-?\d+\.\d+) Eh")
ENTROPY_TERM_PAT = re.compile(r"Final entropy term\s+\.\.\.\s+(-?\d+\.\d+) Eh")
NUCLEAR_REPULSION_PAT = re.compile(r"Nuclear Repulsion\s+:\s+(-?\d+\.\d+) Eh")

# --- Optional corrections --- #
DISPERSION_ENERGY_PAT = re.compile(r"Dispersion correction\s+(-?\d+\.\d+)")
SOLVATION_ENERGY_PAT = re.compile(r"CPCM Dielectric\s*:\s*(-?\d+\.\d+) Eh")

# --- Conditions --- #
TEMPERATURE_PAT = re.compile(r"Temperature\s+\.\.\.\s+(\d+\.\d+) K")
PRESSURE_PAT = re.compile(r"Pressure\s+\.\.\.\s+(\d+\.\d+) atm")

# --- Vibrational analysis --- #
FREQUENCY_PAT = re.compile(r"^\s*\d+:\s+(-?\d+\.\d+) cm\*\*-1", re.MULTILINE)
IR_SPECTRUM_START_PAT = re.compile(r"^IR SPECTRUM\s*$", re.MULTILINE)
IR_ROW_PAT = re.compile(r"^\s*\d+:\s+(-?\d+\.\d+)\s+-?\d+\.\d+\s+(\d+\.\d+)\s")

# --- Job status markers (checked in this order) --- #
NORMAL_TERMINATION_PAT = re.compile(r"\*{4}ORCA TERMINATED NORMALLY\*{4}")
ERROR_PATTERNS = [
    re.compile(r"ORCA finished by error termination"),
    re.compile(r"ORCA finished with error"),
    re.compile(r"TERMINATING THE PROGRAM"),
]
CONVERGENCE_ERROR_PATTERNS = [
    re.compile(r"SCF NOT CONVERGED"),
    re.compile(r"The optimization did not converge"),
]

# --- Simple input vocabulary --- #
# fmt:off
METHOD_PAT = re.compile(
    r"(?<![\w-])(?:U|R|RO)?("
    r"DLPNO-CCSD\(T1?\)|CCSD\(T\)|CCSD|RI-MP2|MP2|CAM-B3LYP|B3LYP|PBE0|PBE|TPSS|r2SCAN-3c|B97-3c|"
    r"wB97X-D3|wB97X-V|wB97M-V|wB97X|M06-2X|M06|B2PLYP|HF-3c|HF"
    r")(?![\w+*])",
    re.IGNORECASE,
)
BASIS_PAT = re.compile(
    r"(?<![\w-])("
    r"(?:ma-)?def2-(?:SVPD?|TZVPP?D?|QZVPP?D?)|"
    r"(?:aug-)?cc-pV[DTQ5]Z|"
    r"6-311?\+{0,2}G\*{0,2}(?:\([^)]*\))?"
    r")(?![\w/-])",
    re.IGNORECASE,
)
# fmt:on
SOLVENT_PAT = re.compile(r"(?:CPCM|SMD)\(([^)\s]+)\)", re.IGNORECASE)

ENERGY_FIELDS = [
    FieldPattern("electronic_energy", FINAL_ENERGY_PAT, occurrence="last", description="Final single point energy"),
    FieldPattern("zero_point_energy", ZPE_PAT, description="Zero-point vibrational energy"),
    FieldPattern("thermal_correction", TOTAL_CORRECTION_PAT, description="ZPE plus thermal energy correction"),
    FieldPattern("gibbs_correction", GIBBS_CORRECTION_PAT, description="G - E(el)"),
    FieldPattern("nuclear_repulsion", NUCLEAR_REPULSION_PAT, occurrence="last", description="Nuclear repulsion energy"),
]
