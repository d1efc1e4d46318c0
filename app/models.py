"""
SQLModel database models for customers, vehicles, policies and coverages.

The rating engine only reads these through the customer lookup service.
"""

from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PolicyStatus(str, Enum):
    QUOTED = "QUOTED"
    BOUND = "BOUND"
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"

class Customer(SQLModel, table=True):
    """Customer / driver record."""
    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str
    last_name: str = ""
    email: Optional[str] = Field(default=None, index=True)
    date_of_birth: Optional[date] = None
    driver_license_number: Optional[str] = None
    driver_license_state: Optional[str] = None
    license_issue_date: Optional[date] = None
    has_dui: bool = False
    accident_count: int = 0
    violation_count: int = 0
    is_good_student: bool = False
    credit_score: Optional[int] = None
    active: bool = True  # soft-delete flag
    created_at: datetime = Field(default_factory=utcnow)

class Vehicle(SQLModel, table=True):
    """Vehicle owned by a customer."""
    id: Optional[int] = Field(default=None, primary_key=True)
    customer_id: Optional[int] = Field(default=None, foreign_key="customer.id")
    vin: Optional[str] = Field(default=None, index=True)
    year: int
    make: str
    model: str = "Unknown"
    body_style: Optional[str] = None  # SEDAN, SUV, TRUCK, etc.
    purchase_price: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    has_anti_theft: bool = False
    is_convertible: bool = False
    is_high_performance: bool = False
    is_luxury: bool = False
    safety_features: Optional[str] = None  # Comma-separated list
    active: bool = True
    created_at: datetime = Field(default_factory=utcnow)

class Policy(SQLModel, table=True):
    """Insurance policy held by a customer."""
    id: Optional[int] = Field(default=None, primary_key=True)
    policy_number: str = Field(unique=True, index=True)
    customer_id: int = Field(foreign_key="customer.id", index=True)
    policy_type: str = "AUTO"  # AUTO, HOME, RENTERS, etc.
    status: PolicyStatus = PolicyStatus.QUOTED
    effective_date: Optional[date] = None
    expiration_date: Optional[date] = None
    total_premium: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    active: bool = True
    created_at: datetime = Field(default_factory=utcnow)

class Coverage(SQLModel, table=True):
    """Coverage line attached to a policy."""
    id: Optional[int] = Field(default=None, primary_key=True)
    policy_id: int = Field(foreign_key="policy.id", index=True)
    coverage_type: str  # LIABILITY, COLLISION, COMPREHENSIVE, etc.
    limit_amount: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    deductible_amount: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    premium: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
