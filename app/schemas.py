"""
Pydantic schemas for quote requests, rating snapshots and the rate table.
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing import Any, Optional, List, Dict, Mapping
from types import MappingProxyType
from datetime import date, datetime
from decimal import Decimal

# Discount steps the adjustment engine knows how to evaluate
KNOWN_DISCOUNT_STEPS = (
    "multiPolicy",
    "goodDriver",
    "goodStudent",
    "antiTheft",
    "safetyFeatures",
    "defensiveDriving",
)

# Request schemas
class QuoteRequest(BaseModel):
    """
    Quote request for a single driver and vehicle.

    Range checks (age, vehicle year, make) are done by the snapshot builder so
    that programmatic callers and the HTTP layer get the same ValidationError.
    """
    customer_id: Optional[int] = Field(None, description="Existing customer id, if any")
    customer_name: str = Field(description="Full name, first token is the first name")
    customer_age: int = Field(description="Age in years")
    vehicle_id: Optional[int] = Field(None, description="Existing vehicle id, if any")
    vehicle_year: int = Field(description="Vehicle model year")
    vehicle_make: str = Field("", description="Vehicle manufacturer")

    # Optional richer profile; defaults come from the rate table
    years_licensed: Optional[int] = Field(None, ge=0, le=100)
    credit_score: Optional[int] = Field(None, ge=300, le=850)
    good_student: bool = False
    completed_defensive_driving: Optional[bool] = None
    vehicle_purchase_price: Optional[Decimal] = Field(None, ge=0)
    vehicle_convertible: bool = False
    vehicle_has_anti_theft: bool = False
    vehicle_has_airbags: bool = False
    vehicle_has_anti_lock_brakes: bool = False

# Rating snapshots (ephemeral, never persisted)
class ApplicantSnapshot(BaseModel):
    """Driver attributes used for rating."""
    model_config = ConfigDict(frozen=True)

    customer_id: Optional[int] = None
    first_name: str
    last_name: str
    date_of_birth: date
    age: int
    years_licensed: int
    license_issue_date: date
    credit_score: int
    good_student: bool = False
    completed_defensive_driving: Optional[bool] = None

class VehicleSnapshot(BaseModel):
    """Vehicle attributes used for rating."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    vehicle_id: Optional[int] = None
    model_year: int
    make: str
    high_performance: bool = False
    luxury: bool = False
    convertible: bool = False
    has_anti_theft: bool = False
    has_airbags: bool = False
    has_anti_lock_brakes: bool = False
    purchase_price: Decimal

class ExternalFacts(BaseModel):
    """Answers from the customer lookup collaborator."""
    model_config = ConfigDict(frozen=True)

    has_other_policies: bool = False
    is_good_driver: bool = False

class QuoteResult(BaseModel):
    """Final quote record produced by the assembler."""
    model_config = ConfigDict(frozen=True)

    quote_id: str
    applicant: ApplicantSnapshot
    vehicle: VehicleSnapshot
    coverages: Mapping[str, Decimal]
    total_premium: Decimal
    created_at: datetime
    expiration_date: datetime
    rate_table_version: str
    applied_discounts: List[str] = []

    @field_validator("coverages")
    @classmethod
    def freeze_coverages(cls, value: Mapping[str, Decimal]) -> Mapping[str, Decimal]:
        # Read-only view so the lines cannot drift from total_premium
        return MappingProxyType(dict(value))

    @field_serializer("coverages")
    def serialize_coverages(self, value: Mapping[str, Decimal]) -> Dict[str, Decimal]:
        return dict(value)

# Response schemas
class QuoteResponse(BaseModel):
    """Quote response returned over HTTP."""
    quote_id: str
    customer: Dict[str, Any]
    vehicle: Dict[str, Any]
    coverages: Dict[str, float]
    total_premium: float
    applied_discounts: List[str]
    rate_table_version: str
    expiration_date: datetime

# Rate table schemas
class LiabilityFactors(BaseModel):
    young_driver_age: int
    young_driver_factor: Decimal = Field(gt=0)
    senior_driver_age: int
    senior_driver_factor: Decimal = Field(gt=0)
    new_driver_years: int
    new_driver_factor: Decimal = Field(gt=0)
    poor_credit_score: int
    poor_credit_factor: Decimal = Field(gt=0)
    excellent_credit_score: int
    excellent_credit_factor: Decimal = Field(gt=0)

class CollisionFactors(BaseModel):
    new_vehicle_age: int
    new_vehicle_factor: Decimal = Field(gt=0)
    old_vehicle_age: int
    old_vehicle_factor: Decimal = Field(gt=0)
    high_performance_factor: Decimal = Field(gt=0)
    luxury_factor: Decimal = Field(gt=0)

class ComprehensiveFactors(BaseModel):
    high_value_price: Decimal
    high_value_factor: Decimal = Field(gt=0)
    mid_value_price: Decimal
    mid_value_factor: Decimal = Field(gt=0)
    convertible_factor: Decimal = Field(gt=0)

class RatingDefaults(BaseModel):
    years_licensed: int = 5
    credit_score: int = 700
    vehicle_purchase_price: Decimal = Decimal("25000")

class DiscountStep(BaseModel):
    name: str
    factor: Decimal = Field(gt=0)

    @field_validator("name")
    @classmethod
    def check_known_step(cls, value: str) -> str:
        if value not in KNOWN_DISCOUNT_STEPS:
            raise ValueError(f"Unknown discount step: {value}")
        return value

class RatingConfig(BaseModel):
    """Versioned rate table. Loaded from config/rating.yaml."""
    model_config = ConfigDict(frozen=True)

    version: str
    base_rates: Dict[str, Decimal]
    liability: LiabilityFactors
    collision: CollisionFactors
    comprehensive: ComprehensiveFactors
    high_performance_makes: List[str]
    luxury_makes: List[str]
    defaults: RatingDefaults = RatingDefaults()
    quote_validity_days: int = Field(30, gt=0)
    discounts: List[DiscountStep]

    @field_validator("high_performance_makes", "luxury_makes")
    @classmethod
    def normalize_makes(cls, value: List[str]) -> List[str]:
        return [make.strip().upper() for make in value]

    @field_validator("base_rates")
    @classmethod
    def check_base_rates(cls, value: Dict[str, Decimal]) -> Dict[str, Decimal]:
        for line, rate in value.items():
            if rate < 0:
                raise ValueError(f"Base rate for {line} must not be negative")
        return value
