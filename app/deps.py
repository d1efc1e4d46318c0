"""
Dependencies for the quote endpoints.
"""

from fastapi import Depends
from sqlmodel import Session

from app.cache import rating_config_cache
from app.db import get_session
from app.schemas import RatingConfig
from app.services.customer_lookup import CustomerLookup, DatabaseCustomerLookup

def get_customer_lookup(session: Session = Depends(get_session)) -> CustomerLookup:
    """Customer lookup bound to the request's database session."""
    return DatabaseCustomerLookup(session)

def get_rating_config() -> RatingConfig:
    """Current rate table from the process-wide cache."""
    return rating_config_cache.get_config()
