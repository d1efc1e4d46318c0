"""
Quotes router for handling auto insurance quote requests.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from app.deps import get_customer_lookup, get_rating_config
from app.errors import ValidationError
from app.schemas import QuoteRequest, QuoteResponse, QuoteResult, RatingConfig
from app.services.customer_lookup import CustomerLookup
from app.services.quote_service import generate_quote
import logging

logger = logging.getLogger("auto_rating")

router = APIRouter()

def to_quote_response(quote: QuoteResult) -> QuoteResponse:
    """Flatten a QuoteResult for JSON clients (money as floats)."""
    return QuoteResponse(
        quote_id=quote.quote_id,
        customer=quote.applicant.model_dump(mode="json"),
        vehicle=quote.vehicle.model_dump(mode="json"),
        coverages={key: float(value) for key, value in quote.coverages.items()},
        total_premium=float(quote.total_premium),
        applied_discounts=quote.applied_discounts,
        rate_table_version=quote.rate_table_version,
        expiration_date=quote.expiration_date,
    )

@router.post("/quotes", response_model=QuoteResponse)
def create_quote(
    request: QuoteRequest,
    request_obj: Request,
    lookup: CustomerLookup = Depends(get_customer_lookup),
    config: RatingConfig = Depends(get_rating_config)
):
    """
    Create a new auto insurance quote.

    Nothing is persisted; the quote is returned to the caller only.
    """
    request_id = getattr(request_obj.state, "request_id", "unknown")
    logger.info(f"Processing quote request | request_id={request_id} | customer_id={request.customer_id}")

    try:
        quote = generate_quote(request, lookup=lookup, config=config)
    except ValidationError as e:
        logger.info(f"Quote rejected | request_id={request_id} | reason={e}")
        raise HTTPException(status_code=400, detail=str(e))

    return to_quote_response(quote)
