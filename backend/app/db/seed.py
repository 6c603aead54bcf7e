"""Database seed data for local development.

Usage:
    python -m app.db.seed
"""
import os
from app.db.base import SessionLocal, engine, Base
from app.db import models  # noqa: F401  registers all tables
from app.db.models.blocked_subdomain import BlockedSubdomain
from app.db.models.user import User, UserRole
from app.core.security import get_password_hash
from app.services import dns_providers, system_settings

RESERVED_LABELS = ["www", "mail", "admin", "api", "ns1", "ns2"]


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)
    print("Database tables created.")


def seed_admin(db):
    """Create the admin from SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD if both are set."""
    email = os.getenv("SEED_ADMIN_EMAIL")
    password = os.getenv("SEED_ADMIN_PASSWORD")
    if not email or not password:
        print("SEED_ADMIN_EMAIL/SEED_ADMIN_PASSWORD not set, skipping admin user.")
        return

    existing = db.query(User).filter(User.email == email.lower()).first()
    if existing:
        print(f"User already exists: {email}")
        return

    db.add(User(
        email=email.lower(),
        password_hash=get_password_hash(password),
        full_name="Administrator",
        role=UserRole.ADMIN,
        quota=system_settings.get_default_user_quota(db),
        is_active=True
    ))
    db.commit()
    print(f"Created admin user: {email}")


def seed_blocked_subdomains(db):
    """Reserve common infrastructure labels."""
    for label in RESERVED_LABELS:
        if not db.query(BlockedSubdomain).filter(BlockedSubdomain.subdomain == label).first():
            db.add(BlockedSubdomain(subdomain=label, reason="reserved", is_active=True))
            print(f"Blocked subdomain: {label}")
    db.commit()


def run_seed():
    """Run all seed functions."""
    print("Starting database seeding...")

    create_tables()

    db = SessionLocal()
    try:
        created = system_settings.initialize_settings(db)
        print(f"Created {created} system settings.")
        print(f"Created {dns_providers.initialize_providers(db)} DNS provider entries.")
        seed_admin(db)
        seed_blocked_subdomains(db)
        print("\nDatabase seeding completed successfully!")
    finally:
        db.close()


if __name__ == "__main__":
    run_seed()
