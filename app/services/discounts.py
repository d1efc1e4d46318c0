"""
Discount/surcharge engine.

Applies the rate table's ordered adjustment steps to a coverage ledger. Each
triggered step multiplies every coverage line by its factor and records the
dollar impact:

- `<line>Discount`: the last triggered step's reduction on that line
  (later steps overwrite earlier annotations)
- `<step>Discount`: total reduction of that step across all lines

Steps whose precondition is false leave no trace in the ledger.
"""

from typing import Callable, Dict, List, Tuple
from decimal import Decimal
import logging

from app.schemas import ApplicantSnapshot, ExternalFacts, RatingConfig, VehicleSnapshot
from app.services.rating import DISCOUNT_SUFFIX, ensure_non_negative, is_coverage_key, round_currency

logger = logging.getLogger("auto_rating")

Precondition = Callable[[ApplicantSnapshot, VehicleSnapshot, ExternalFacts], bool]

PRECONDITIONS: Dict[str, Precondition] = {
    "multiPolicy": lambda applicant, vehicle, facts: facts.has_other_policies,
    "goodDriver": lambda applicant, vehicle, facts: facts.is_good_driver,
    "goodStudent": lambda applicant, vehicle, facts: applicant.good_student,
    "antiTheft": lambda applicant, vehicle, facts: vehicle.has_anti_theft,
    "safetyFeatures": lambda applicant, vehicle, facts: vehicle.has_airbags and vehicle.has_anti_lock_brakes,
    "defensiveDriving": lambda applicant, vehicle, facts: applicant.completed_defensive_driving is True,
}

def apply_discount(
    ledger: Dict[str, Decimal],
    factor: Decimal,
    step_name: str
) -> Dict[str, Decimal]:
    """
    Multiply every coverage line by `factor`.

    Args:
        ledger: Current ledger (not modified)
        factor: Multiplicative factor, e.g. 0.9 for 10% off
        step_name: Step name used for the step-level annotation key

    Returns:
        New ledger with discounted lines and annotations
    """
    result = dict(ledger)
    step_total = Decimal("0.00")

    for key, value in ledger.items():
        if not is_coverage_key(key):
            continue
        ensure_non_negative(key, value)
        discounted = value * factor
        reduction = round_currency(value - discounted)

        result[key] = round_currency(ensure_non_negative(key, discounted))
        result[key + DISCOUNT_SUFFIX] = reduction
        step_total += reduction

    result[step_name + DISCOUNT_SUFFIX] = step_total
    return result

def apply_adjustments(
    ledger: Dict[str, Decimal],
    applicant: ApplicantSnapshot,
    vehicle: VehicleSnapshot,
    facts: ExternalFacts,
    config: RatingConfig
) -> Tuple[Dict[str, Decimal], List[str]]:
    """
    Apply all triggered discount steps in rate table order.

    Args:
        ledger: Base ledger from the rate calculator
        applicant: Applicant snapshot
        vehicle: Vehicle snapshot
        facts: Customer lookup answers
        config: Rate table holding the ordered step list

    Returns:
        Tuple of (adjusted_ledger, applied_step_names)

    Raises:
        InternalInconsistency: If a ledger value is or becomes negative
    """
    applied = []
    for step in config.discounts:
        if not PRECONDITIONS[step.name](applicant, vehicle, facts):
            continue
        ledger = apply_discount(ledger, step.factor, step.name)
        applied.append(step.name)
        logger.debug(f"Discount applied | step={step.name} | factor={step.factor}")
    return ledger, applied
