import math

from thermoflow.config import DEFAULT_VALIDATION_POLICY, ValidationPolicy
from thermoflow.exceptions import ValidationError
from thermoflow.typing import EnergyComponents
from thermoflow.utils import logger


def check_energy_components(
    energies: EnergyComponents, policy: ValidationPolicy = DEFAULT_VALIDATION_POLICY
) -> list[str]:
    """
    Checks extracted energies for physical plausibility.

    Args:
        energies: The extracted energy components.
        policy: The bounds to apply.

    Returns:
        A list of reasons, one per violated rule. Empty if the energies are plausible.
    """
    reasons: list[str] = []
    e_el = energies.electronic_energy

    if math.isnan(e_el) or math.isinf(e_el):
        reasons.append(f"electronic energy is not finite ({e_el})")
    elif e_el > policy.max_electronic_energy:
        reasons.append(f"electronic energy {e_el} Eh is above {policy.max_electronic_energy} Eh")
    elif e_el < policy.min_electronic_energy:
        reasons.append(f"electronic energy {e_el} Eh is below {policy.min_electronic_energy} Eh")

    zpe = energies.zero_point_energy
    if math.isnan(zpe):
        reasons.append("zero-point energy is not a number")
    elif zpe < policy.min_zero_point_energy:
        reasons.append(f"zero-point energy {zpe} Eh is below {policy.min_zero_point_energy} Eh")

    return reasons


def validate_energy_components(
    energies: EnergyComponents, policy: ValidationPolicy = DEFAULT_VALIDATION_POLICY, source: str = ""
) -> None:
    """
    Raises if the energies fail any plausibility rule.

    Raises:
        ValidationError: Listing every violated rule.
    """
    reasons = check_energy_components(energies, policy)
    if reasons:
        where = f" from {source}" if source else ""
        logger.error(f"Extracted energy components{where} failed validation: {'; '.join(reasons)}")
        raise ValidationError(f"Extracted energy components{where} failed validation: {'; '.join(reasons)}")
