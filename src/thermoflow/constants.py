"""Physical constants and default values shared by every backend."""

# fmt:off
# --- Physical constants --- #
GAS_CONSTANT = 8.314462618              # J / (mol K)
STANDARD_PRESSURE_PA = 101325.0         # Pa (1 atm)

# --- Unit conversions (from Hartree) --- #
HARTREE_TO_EV = 27.211386245
HARTREE_TO_KCAL_MOL = 627.509474
HARTREE_TO_KJ_MOL = 2625.5002
HARTREE_TO_J_MOL = HARTREE_TO_KJ_MOL * 1000.0

ENERGY_UNITS: dict[str, float] = {
    "au": 1.0,
    "ev": HARTREE_TO_EV,
    "kcal/mol": HARTREE_TO_KCAL_MOL,
    "kj/mol": HARTREE_TO_KJ_MOL,
}

# --- Defaults --- #
DEFAULT_TEMPERATURE_K = 298.15
DEFAULT_PRESSURE_ATM = 1.0
DEFAULT_CONCENTRATION_M = 1.0

# --- Limits --- #
MAX_FILE_SIZE_MB = 100
BANNER_SCAN_LINES = 50
# fmt:on
