from __future__ import annotations

from datetime import datetime

import pytest

from tests.fakes import InMemoryStore, make_container


@pytest.fixture
def fixed_now() -> datetime:
    # Monday 2025-01-06 08:00 local (UTC+3), before the 08:30 cutoff.
    return datetime(2025, 1, 6, 8, 0, 0)


@pytest.fixture
def store(fixed_now) -> InMemoryStore:
    return InMemoryStore(now=fixed_now)


@pytest.fixture
def container(store):
    return make_container(store)


@pytest.fixture
def admin_id(container) -> int:
    return container.auth_service.signup(
        name="Alice Admin",
        email="alice@example.com",
        phone="+100",
        organization="Acme",
        username="alice",
        password="secret123",
        security_question="Pet?",
        security_answer="rex",
    )
