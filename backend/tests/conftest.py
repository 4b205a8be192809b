"""Root conftest — shared test configuration and actor fixtures."""

import os

import pytest

# Ensure tests never pick up a developer's data dir
os.environ.setdefault("DATA_DIR", "test-data-unused")
os.environ.setdefault("LOG_FORMAT", "text")

from gigmarket.core.domain_types import Role  # noqa: E402
from gigmarket.models import User  # noqa: E402
from tests.factories import make_user  # noqa: E402


@pytest.fixture
def buyer() -> User:
    return make_user("3", Role.BUYER)


@pytest.fixture
def seller() -> User:
    return make_user("2", Role.SELLER)


@pytest.fixture
def admin() -> User:
    return make_user("1", Role.ADMIN)


@pytest.fixture
def outsider() -> User:
    return make_user("9", Role.BUYER)
