"""
Quote assembler.
"""

from typing import Dict, List, Optional
from datetime import datetime, timedelta
from decimal import Decimal
import uuid

from app.schemas import ApplicantSnapshot, QuoteResult, RatingConfig, VehicleSnapshot
from app.services.rating import TOTAL_PREMIUM_KEY, ensure_non_negative, is_coverage_key, round_currency

QUOTE_ID_PREFIX = "QUOTE-"

def calculate_total_premium(ledger: Dict[str, Decimal]) -> Decimal:
    """Sum of coverage lines, ignoring discount annotations and any existing total."""
    total = sum((value for key, value in ledger.items() if is_coverage_key(key)), Decimal("0"))
    return round_currency(ensure_non_negative(TOTAL_PREMIUM_KEY, total))

def generate_quote_id() -> str:
    return f"{QUOTE_ID_PREFIX}{uuid.uuid4().hex.upper()}"

def assemble_quote(
    ledger: Dict[str, Decimal],
    applicant: ApplicantSnapshot,
    vehicle: VehicleSnapshot,
    now: datetime,
    config: RatingConfig,
    applied_discounts: Optional[List[str]] = None
) -> QuoteResult:
    """
    Total the ledger and build the final quote record.

    Args:
        ledger: Adjusted coverage ledger
        applicant: Applicant snapshot
        vehicle: Vehicle snapshot
        now: Quote creation time
        config: Rate table (validity period and version)
        applied_discounts: Names of the discount steps that triggered

    Returns:
        Immutable QuoteResult; the ledger copy inside it carries `totalPremium`
    """
    coverages = dict(ledger)
    total_premium = calculate_total_premium(coverages)
    coverages[TOTAL_PREMIUM_KEY] = total_premium

    return QuoteResult(
        quote_id=generate_quote_id(),
        applicant=applicant,
        vehicle=vehicle,
        coverages=coverages,
        total_premium=total_premium,
        created_at=now,
        expiration_date=now + timedelta(days=config.quote_validity_days),
        rate_table_version=config.version,
        applied_discounts=list(applied_discounts or []),
    )
