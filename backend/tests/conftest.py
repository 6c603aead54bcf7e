"""Pytest configuration and fixtures."""
import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Point the app at an in-memory database BEFORE importing it
os.environ["DB_TYPE"] = "sqlite"
os.environ["SQLITE_PATH"] = ":memory:"
os.environ["DEBUG"] = "False"
os.environ["ENCRYPTION_KEY"] = "test-encryption-key"

from app.main import app
from app.db import models  # noqa: F401
from app.db.base import Base
from app.api.deps.database import get_db
from app.core.crypto import encrypt_credential_dict
from app.core.security import get_password_hash, create_access_token
from app.db.models.available_domain import AvailableDomain
from app.db.models.dns_account import DnsAccount, DnsProviderType
from app.db.models.user import User, UserRole
from app.services.adapters.dns import factory as provider_factory
from app.services.adapters.dns.mock import MockDNSAdapter

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

CLOUDFLARE_CREDENTIALS = {"apiToken": "test-token"}


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(db_session, email, role, quota=5):
    user = User(
        email=email,
        password_hash=get_password_hash("testpassword"),
        full_name=email.split("@")[0].title(),
        role=role,
        quota=quota,
        is_active=True
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_user(db_session):
    """Create an admin user for testing."""
    return _make_user(db_session, "admin@test.com", UserRole.ADMIN)


@pytest.fixture
def regular_user(db_session):
    """Create a normal user with the default quota."""
    return _make_user(db_session, "user@test.com", UserRole.USER)


@pytest.fixture
def other_user(db_session):
    return _make_user(db_session, "other@test.com", UserRole.USER)


@pytest.fixture
def admin_token(admin_user):
    return create_access_token(data={"sub": admin_user.email})


@pytest.fixture
def user_token(regular_user):
    return create_access_token(data={"sub": regular_user.email})


@pytest.fixture
def auth_headers(admin_token):
    """Authorization headers with admin token."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token):
    """Authorization headers with a normal user's token."""
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def mock_provider(monkeypatch):
    """Route every provider construction to one in-memory adapter."""
    provider = MockDNSAdapter(domains=("example.com", "example.org"))

    def fake_create_dns_provider(provider_type, credentials):
        provider.credentials = dict(credentials)
        return provider

    monkeypatch.setattr(provider_factory, "create_dns_provider", fake_create_dns_provider)
    return provider


@pytest.fixture
def dns_account(db_session):
    """A default Cloudflare account with encrypted test credentials."""
    account = DnsAccount(
        name="Primary Cloudflare",
        provider_type=DnsProviderType.CLOUDFLARE,
        encrypted_credentials=encrypt_credential_dict(CLOUDFLARE_CREDENTIALS),
        is_default=True,
        is_active=True
    )
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def available_domain(db_session, dns_account):
    """Active root domain example.com backed by ``dns_account``."""
    available = AvailableDomain(domain="example.com", dns_account_id=dns_account.account_id, is_active=True)
    db_session.add(available)
    db_session.commit()
    db_session.refresh(available)
    return available
