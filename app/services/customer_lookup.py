"""
Customer lookup service.

Answers the two questions the discount engine asks about an existing
customer: do they hold other policies, and are they a good driver.
"""

from typing import Optional, Protocol
from sqlmodel import Session, select
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.errors import LookupUnavailable
from app.models import Customer, Policy
from app.schemas import ExternalFacts

logger = logging.getLogger("auto_rating")

MAX_GOOD_DRIVER_VIOLATIONS = 1

class CustomerLookup(Protocol):
    def has_other_policies(self, customer_id: int) -> bool: ...

    def is_good_driver(self, customer_id: int) -> bool: ...

class DatabaseCustomerLookup:
    """Customer lookup backed by the SQLModel tables."""

    def __init__(self, session: Session):
        self.session = session

    def _get_customer(self, customer_id: int) -> Customer:
        try:
            customer = self.session.get(Customer, customer_id)
        except SQLAlchemyError as e:
            raise LookupUnavailable(f"Customer lookup failed for {customer_id}: {e}") from e
        if customer is None:
            raise LookupUnavailable(f"Customer {customer_id} not found")
        return customer

    def has_other_policies(self, customer_id: int) -> bool:
        """True if the customer has any policy record, soft-deleted or not."""
        self._get_customer(customer_id)
        try:
            count = self.session.exec(
                select(func.count()).select_from(Policy).where(Policy.customer_id == customer_id)
            ).one()
        except SQLAlchemyError as e:
            raise LookupUnavailable(f"Policy lookup failed for {customer_id}: {e}") from e
        return count > 0

    def is_good_driver(self, customer_id: int) -> bool:
        """No DUI, no at-fault accidents and at most one violation."""
        customer = self._get_customer(customer_id)
        return (
            not customer.has_dui
            and customer.accident_count == 0
            and customer.violation_count <= MAX_GOOD_DRIVER_VIOLATIONS
        )

def gather_external_facts(
    lookup: Optional[CustomerLookup],
    customer_id: Optional[int]
) -> ExternalFacts:
    """
    Ask the lookup collaborator about a customer.

    A missing customer id or lookup means "no" for both questions. Any
    failure from the collaborator, LookupUnavailable or otherwise, means
    "no" for that question, so a valid request always gets a quote.

    Args:
        lookup: Customer lookup collaborator (may be None)
        customer_id: Durable customer id from the request (may be None)

    Returns:
        ExternalFacts with both answers
    """
    if lookup is None or customer_id is None:
        return ExternalFacts()

    try:
        has_other_policies = lookup.has_other_policies(customer_id)
    except LookupUnavailable as e:
        logger.warning(f"Multi-policy lookup unavailable | customer_id={customer_id} | error={e}")
        has_other_policies = False
    except Exception as e:
        logger.warning(
            f"Multi-policy lookup failed | customer_id={customer_id} | error={e}",
            exc_info=True
        )
        has_other_policies = False

    try:
        is_good_driver = lookup.is_good_driver(customer_id)
    except LookupUnavailable as e:
        logger.warning(f"Good-driver lookup unavailable | customer_id={customer_id} | error={e}")
        is_good_driver = False
    except Exception as e:
        logger.warning(
            f"Good-driver lookup failed | customer_id={customer_id} | error={e}",
            exc_info=True
        )
        is_good_driver = False

    return ExternalFacts(has_other_policies=has_other_policies, is_good_driver=is_good_driver)
