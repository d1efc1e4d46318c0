"""
Quote generation service.

Request -> snapshots -> base rates -> discounts -> assembled quote.
"""

from typing import Optional
from datetime import datetime, timezone
import logging

from app.cache import rating_config_cache
from app.schemas import QuoteRequest, QuoteResult, RatingConfig
from app.services.assembler import assemble_quote
from app.services.customer_lookup import CustomerLookup, gather_external_facts
from app.services.discounts import apply_adjustments
from app.services.rating import calculate_base_rates
from app.services.snapshots import build_snapshots

logger = logging.getLogger("auto_rating")

def generate_quote(
    request: QuoteRequest,
    lookup: Optional[CustomerLookup] = None,
    config: Optional[RatingConfig] = None,
    now: Optional[datetime] = None
) -> QuoteResult:
    """
    Generate a premium quote.

    Args:
        request: Quote request
        lookup: Customer lookup for multi-policy and good-driver checks
        config: Rate table, defaults to the cached config/rating.yaml
        now: Quote time, defaults to the current UTC time

    Returns:
        Assembled QuoteResult

    Raises:
        ValidationError: If the request is malformed
        InternalInconsistency: If the ledger ends up in an invalid state
    """
    if config is None:
        config = rating_config_cache.get_config()
    if now is None:
        now = datetime.now(timezone.utc)
    today = now.date()

    applicant, vehicle = build_snapshots(request, config, today)
    facts = gather_external_facts(lookup, request.customer_id)

    ledger = calculate_base_rates(applicant, vehicle, config, today)
    ledger, applied = apply_adjustments(ledger, applicant, vehicle, facts, config)
    quote = assemble_quote(ledger, applicant, vehicle, now, config, applied)

    logger.info(
        f"Quote generated | quote_id={quote.quote_id} | "
        f"customer_id={request.customer_id} | total_premium={quote.total_premium} | "
        f"discounts={','.join(applied) or 'none'} | rate_table={config.version}"
    )
    return quote
