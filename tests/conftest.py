import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["CRM_ENV"] = session.config.option.env
    os.environ["CRM_DATABASE_URL"] = "memory://"
    os.environ["CRM_BCRYPT_ROUNDS"] = "4"
    os.environ["CRM_JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"

    from shared.config import get_settings
    from shared.domain import crm, init_domain

    get_settings.cache_clear()
    init_domain()
    crm.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from shared.db import drop_db, setup_db
    from shared.domain import crm

    setup_db(crm)

    yield

    drop_db(crm)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    from identity.auth.blacklist import token_blacklist
    from shared.db import reset_data

    reset_data(current_domain)
    token_blacklist.clear()


@pytest.fixture()
def make_user():
    """Persist a user with a real bcrypt hash of ``password``."""
    from protean import current_domain

    from identity.auth.passwords import hash_password
    from identity.user.user import User, UserRole

    def _make_user(name="Jane Doe", email="jane@example.com", password="s3cret-pass", role=UserRole.REGULAR):
        user = User.register(name=name, email=email, password_hash=hash_password(password), role=role)
        current_domain.repository_for(User).add(user)
        return user

    return _make_user


@pytest.fixture()
def user(make_user):
    return make_user()


@pytest.fixture()
def admin(make_user):
    from identity.user.user import UserRole

    return make_user(name="Admin User", email="admin@example.com", password="admin-pass", role=UserRole.ADMIN)


@pytest.fixture()
def make_product():
    from protean import current_domain

    from catalogue.product.product import Product

    def _make_product(name="Wireless Mouse", price=24.99, stock_quantity=10, category="Peripherals", description=""):
        product = Product.create(
            name=name,
            description=description,
            price=price,
            stock_quantity=stock_quantity,
            category=category,
        )
        current_domain.repository_for(Product).add(product)
        return product

    return _make_product


@pytest.fixture()
def auth_headers():
    """Build an ``Authorization`` header carrying a fresh token for ``user``."""
    from identity.auth.tokens import TokenService

    def _auth_headers(user):
        token = TokenService().generate_token(str(user.id), user.email, user.name, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from app import create_app

    return TestClient(create_app())
