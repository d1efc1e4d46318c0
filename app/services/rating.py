"""
Coverage rate calculator.

Computes an independent base premium for every coverage line in the rate
table. Lines without line-specific rules are charged their flat base rate.
"""

from typing import Callable, Dict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from app.errors import InternalInconsistency
from app.schemas import ApplicantSnapshot, RatingConfig, VehicleSnapshot

CENT = Decimal("0.01")

# Ledger keys that are not coverage lines
TOTAL_PREMIUM_KEY = "totalPremium"
DISCOUNT_SUFFIX = "Discount"

def round_currency(value: Decimal) -> Decimal:
    """Round to cents, half-up."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)

def is_coverage_key(key: str) -> bool:
    """True for coverage line keys, false for discount annotations and the total."""
    return key != TOTAL_PREMIUM_KEY and not key.endswith(DISCOUNT_SUFFIX)

def ensure_non_negative(line: str, value: Decimal) -> Decimal:
    if value < 0:
        raise InternalInconsistency(f"Negative premium for {line}: {value}")
    return value

def calculate_liability_premium(
    base_rate: Decimal,
    applicant: ApplicantSnapshot,
    vehicle: VehicleSnapshot,
    config: RatingConfig,
    today: date
) -> Decimal:
    """
    Liability premium.

    Formula: base * age_factor * experience_factor * credit_factor

    Where:
    - age_factor: 1.5 if age < 25, 1.2 if age > 70
    - experience_factor: 1.3 if licensed < 3 years
    - credit_factor: 1.25 if credit < 600, 0.9 if credit > 750
    """
    factors = config.liability
    rate = base_rate

    if applicant.age < factors.young_driver_age:
        rate *= factors.young_driver_factor
    elif applicant.age > factors.senior_driver_age:
        rate *= factors.senior_driver_factor

    if applicant.years_licensed < factors.new_driver_years:
        rate *= factors.new_driver_factor

    if applicant.credit_score < factors.poor_credit_score:
        rate *= factors.poor_credit_factor
    elif applicant.credit_score > factors.excellent_credit_score:
        rate *= factors.excellent_credit_factor

    return rate

def calculate_collision_premium(
    base_rate: Decimal,
    applicant: ApplicantSnapshot,
    vehicle: VehicleSnapshot,
    config: RatingConfig,
    today: date
) -> Decimal:
    """
    Collision premium.

    Newer vehicles cost more to repair, older ones less. High-performance and
    luxury surcharges stack.
    """
    factors = config.collision
    rate = base_rate

    vehicle_age = today.year - vehicle.model_year
    if vehicle_age < factors.new_vehicle_age:
        rate *= factors.new_vehicle_factor
    elif vehicle_age > factors.old_vehicle_age:
        rate *= factors.old_vehicle_factor

    if vehicle.high_performance:
        rate *= factors.high_performance_factor

    if vehicle.make.strip().upper() in config.luxury_makes:
        rate *= factors.luxury_factor

    return rate

def calculate_comprehensive_premium(
    base_rate: Decimal,
    applicant: ApplicantSnapshot,
    vehicle: VehicleSnapshot,
    config: RatingConfig,
    today: date
) -> Decimal:
    """Comprehensive premium, loaded by vehicle value and convertible body style."""
    factors = config.comprehensive
    rate = base_rate

    price = vehicle.purchase_price
    if price is not None:
        if price > factors.high_value_price:
            rate *= factors.high_value_factor
        elif price > factors.mid_value_price:
            rate *= factors.mid_value_factor

    if vehicle.convertible:
        rate *= factors.convertible_factor

    return rate

LINE_CALCULATORS: Dict[str, Callable[..., Decimal]] = {
    "liability": calculate_liability_premium,
    "collision": calculate_collision_premium,
    "comprehensive": calculate_comprehensive_premium,
}

def calculate_base_rates(
    applicant: ApplicantSnapshot,
    vehicle: VehicleSnapshot,
    config: RatingConfig,
    today: date
) -> Dict[str, Decimal]:
    """
    Calculate pre-discount premiums for every coverage line.

    Args:
        applicant: Applicant snapshot
        vehicle: Vehicle snapshot
        config: Rate table
        today: Rating date, used for vehicle age

    Returns:
        Coverage ledger keyed by line name, values rounded to cents

    Raises:
        InternalInconsistency: If a line premium comes out negative
    """
    ledger: Dict[str, Decimal] = {}
    for line, base_rate in config.base_rates.items():
        calculator = LINE_CALCULATORS.get(line)
        if calculator is None:
            premium = base_rate
        else:
            premium = calculator(base_rate, applicant, vehicle, config, today)
        ledger[line] = round_currency(ensure_non_negative(line, premium))
    return ledger
