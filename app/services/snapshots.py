"""
Applicant snapshot builder.

Turns a raw quote request into the Customer and Vehicle snapshots the rating
pipeline works on. Snapshots are never persisted.
"""

from typing import Tuple
from datetime import date

from app.errors import ValidationError
from app.schemas import ApplicantSnapshot, QuoteRequest, RatingConfig, VehicleSnapshot

MIN_DRIVER_AGE = 16
MAX_DRIVER_AGE = 100
MIN_VEHICLE_YEAR = 1900

def validate_quote_request(request: QuoteRequest, today: date) -> None:
    """
    Reject requests with out-of-range fields.

    Raises:
        ValidationError: age outside [16, 100], vehicle year outside
            [1900, today.year + 1] or blank vehicle make
    """
    if request.customer_age < MIN_DRIVER_AGE:
        raise ValidationError(f"Customer must be at least {MIN_DRIVER_AGE} years old")
    if request.customer_age > MAX_DRIVER_AGE:
        raise ValidationError(f"Customer age {request.customer_age} is not valid")

    max_year = today.year + 1
    if request.vehicle_year < MIN_VEHICLE_YEAR or request.vehicle_year > max_year:
        raise ValidationError(f"Vehicle year must be between {MIN_VEHICLE_YEAR} and {max_year}")

    if not request.vehicle_make or not request.vehicle_make.strip():
        raise ValidationError("Vehicle make is required")

def split_name(full_name: str) -> Tuple[str, str]:
    """Split a full name into (first, last). Last name may be empty."""
    parts = (full_name or "").split(None, 1)
    if not parts:
        return "", ""
    first = parts[0]
    last = parts[1].strip() if len(parts) > 1 else ""
    return first, last

def years_before(today: date, years: int) -> date:
    """Same calendar day `years` years earlier. Feb 29 maps to Feb 28."""
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)

def age_on(born: date, today: date) -> int:
    """Whole years between `born` and `today`."""
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))

def build_applicant(request: QuoteRequest, config: RatingConfig, today: date) -> ApplicantSnapshot:
    first_name, last_name = split_name(request.customer_name)

    # Exact birth month/day is unknown; age is all we have
    date_of_birth = years_before(today, request.customer_age)

    years_licensed = request.years_licensed
    if years_licensed is None:
        years_licensed = config.defaults.years_licensed
    credit_score = request.credit_score
    if credit_score is None:
        credit_score = config.defaults.credit_score

    return ApplicantSnapshot(
        customer_id=request.customer_id,
        first_name=first_name,
        last_name=last_name,
        date_of_birth=date_of_birth,
        age=age_on(date_of_birth, today),
        years_licensed=years_licensed,
        license_issue_date=years_before(today, years_licensed),
        credit_score=credit_score,
        good_student=request.good_student,
        completed_defensive_driving=request.completed_defensive_driving,
    )

def build_vehicle(request: QuoteRequest, config: RatingConfig) -> VehicleSnapshot:
    make = request.vehicle_make.strip()
    make_key = make.upper()

    purchase_price = request.vehicle_purchase_price
    if purchase_price is None:
        purchase_price = config.defaults.vehicle_purchase_price

    return VehicleSnapshot(
        vehicle_id=request.vehicle_id,
        model_year=request.vehicle_year,
        make=make,
        high_performance=make_key in config.high_performance_makes,
        luxury=make_key in config.luxury_makes,
        convertible=request.vehicle_convertible,
        has_anti_theft=request.vehicle_has_anti_theft,
        has_airbags=request.vehicle_has_airbags,
        has_anti_lock_brakes=request.vehicle_has_anti_lock_brakes,
        purchase_price=purchase_price,
    )

def build_snapshots(
    request: QuoteRequest,
    config: RatingConfig,
    today: date
) -> Tuple[ApplicantSnapshot, VehicleSnapshot]:
    """
    Validate a quote request and build its rating snapshots.

    Args:
        request: Incoming quote request
        config: Rate table supplying profile defaults and premium makes
        today: Rating date

    Returns:
        Tuple of (applicant_snapshot, vehicle_snapshot)

    Raises:
        ValidationError: If the request is malformed
    """
    validate_quote_request(request, today)
    return build_applicant(request, config, today), build_vehicle(request, config)
