"""
Database configuration and session management.
"""

from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import make_url
from typing import Generator
from datetime import date
from decimal import Decimal
import os
import json
import logging

# Import all models to ensure they are registered with SQLModel
from app.models import Customer, Vehicle, Policy, Coverage, PolicyStatus

logger = logging.getLogger("auto_rating")

# Database URL - defaults to SQLite for development
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/insurance.db")

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# Create engine
engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)

def create_db_and_tables():
    """Create database tables."""
    url = make_url(DATABASE_URL)
    if url.drivername.startswith("sqlite") and url.database and url.database != ":memory:":
        directory = os.path.dirname(url.database)
        if directory:
            os.makedirs(directory, exist_ok=True)
    SQLModel.metadata.create_all(engine)

def get_session() -> Generator[Session, None, None]:
    """Get database session."""
    with Session(engine) as session:
        yield session

def _parse_date(value):
    return date.fromisoformat(value) if value else None

def load_seed_data(session: Session, seed_file: str = None):
    """Load demo customers, vehicles and policies from config/seed.json."""
    seed_file = seed_file or os.path.join(os.path.dirname(__file__), "config", "seed.json")

    if not os.path.exists(seed_file):
        logger.warning(f"Seed file not found | path={seed_file}")
        return

    with open(seed_file, 'r') as f:
        seed_data = json.load(f)

    for customer_data in seed_data.get("customers", []):
        # Check if customer already exists
        if session.get(Customer, customer_data["id"]) is not None:
            continue

        session.add(Customer(
            id=customer_data["id"],
            first_name=customer_data["first_name"],
            last_name=customer_data.get("last_name", ""),
            email=customer_data.get("email"),
            date_of_birth=_parse_date(customer_data.get("date_of_birth")),
            has_dui=customer_data.get("has_dui", False),
            accident_count=customer_data.get("accident_count", 0),
            violation_count=customer_data.get("violation_count", 0),
            is_good_student=customer_data.get("is_good_student", False),
            credit_score=customer_data.get("credit_score"),
        ))
        session.flush()

        for vehicle_data in customer_data.get("vehicles", []):
            session.add(Vehicle(
                customer_id=customer_data["id"],
                year=vehicle_data["year"],
                make=vehicle_data["make"],
                model=vehicle_data.get("model", "Unknown"),
                purchase_price=Decimal(str(vehicle_data["purchase_price"])) if "purchase_price" in vehicle_data else None,
                has_anti_theft=vehicle_data.get("has_anti_theft", False),
            ))

        for policy_data in customer_data.get("policies", []):
            policy = Policy(
                policy_number=policy_data["policy_number"],
                customer_id=customer_data["id"],
                policy_type=policy_data.get("policy_type", "AUTO"),
                status=PolicyStatus(policy_data.get("status", "ACTIVE")),
                effective_date=_parse_date(policy_data.get("effective_date")),
                expiration_date=_parse_date(policy_data.get("expiration_date")),
                total_premium=Decimal(str(policy_data.get("total_premium", "0"))),
                active=policy_data.get("active", True),
            )
            session.add(policy)
            session.flush()

            for coverage_data in policy_data.get("coverages", []):
                session.add(Coverage(
                    policy_id=policy.id,
                    coverage_type=coverage_data["coverage_type"],
                    premium=Decimal(str(coverage_data.get("premium", "0"))),
                ))

    session.commit()
    logger.info(f"Seed data loaded | customers={len(seed_data.get('customers', []))}")

def initialize_database():
    """Initialize database with tables and seed data."""
    logger.info("Creating database tables...")
    create_db_and_tables()
    with Session(engine) as session:
        load_seed_data(session)
    logger.info("Database initialization complete")
