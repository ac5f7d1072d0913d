"""
Shared fixtures.
The database URL is pinned to an in-memory SQLite database before the
application modules are imported.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "testing")

from datetime import date
from decimal import Decimal

import pytest

from consultdesk.domain.models.client import Client
from consultdesk.domain.models.engagement import BillingMode, Engagement
from consultdesk.domain.models.time_log import TimeLog
from consultdesk.domain.models.value_objects import BillingContact


OWNER_ID = "user-123"


@pytest.fixture
def owner_id():
    return OWNER_ID


@pytest.fixture
def client_entity():
    return Client(
        id=1,
        owner_id=OWNER_ID,
        name="Acme Corp",
        billing_contact=BillingContact(name="Jane Doe", email="billing@acme.com", city="Austin"),
    )


@pytest.fixture
def hourly_engagement():
    return Engagement(
        id=10,
        owner_id=OWNER_ID,
        client_id=1,
        project_name="Data Platform",
        start_date=date(2025, 1, 1),
        end_date=date(2025, 12, 31),
        billing_mode=BillingMode.HOURLY,
        hourly_rate=Decimal("100"),
    )


@pytest.fixture
def project_engagement():
    return Engagement(
        id=20,
        owner_id=OWNER_ID,
        client_id=1,
        project_name="Website Redesign",
        start_date=date(2025, 1, 1),
        end_date=date(2025, 6, 30),
        billing_mode=BillingMode.PROJECT,
        total_cost=Decimal("5000"),
    )


@pytest.fixture
def make_time_log():
    def _make(log_id, engagement_id, log_date, hours, description=None):
        return TimeLog(
            id=log_id,
            owner_id=OWNER_ID,
            engagement_id=engagement_id,
            date=log_date,
            hours=Decimal(str(hours)),
            description=description,
        )
    return _make
