"""
Pytest configuration and shared fixtures.
"""

import os

# Settings are read once at import time; set them before importing portal.
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("SITE_URL", "https://portal.example.com")
os.environ.setdefault("EMAILJS_SERVICE_ID", "service_test")
os.environ.setdefault("EMAILJS_USER_ID", "public_key_test")
os.environ.setdefault("EMAILJS_REQUEST_TEMPLATE_ID", "template_request")
os.environ.setdefault("EMAILJS_ONBOARDING_TEMPLATE_ID", "template_onboarding")

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from portal.core.errors import NotificationError
from portal.repositories.profile_repo import ProfileRepository
from portal.repositories.service_request_repo import ServiceRequestRepository
from portal.schemas.session import Identity
from portal.services.admin_service import AdminService
from portal.services.dashboard_service import DashboardService
from portal.services.notification_service import NotificationDispatcher
from portal.services.onboarding_service import OnboardingService
from portal.services.session_gate import SessionGate
from tests.fakes import FakeSupabase


class TickingClock:
    """Deterministic clock: every call is one second after the last."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


class RecordingSender:
    """Stands in for the EmailJS client; optionally fails every send."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, template_id: str, params: dict) -> None:
        self.calls.append((template_id, params))
        if self.fail:
            raise NotificationError("Failed to send notification: Rate limit exceeded", 429)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def identity():
    return Identity(id=uuid.uuid4(), email="owner@acme.test", access_token="token-owner")


@pytest.fixture
def profile_repo(clock):
    return ProfileRepository(clock=clock)


@pytest.fixture
def request_repo(clock):
    return ServiceRequestRepository(clock=clock)


@pytest.fixture
def gate(profile_repo):
    return SessionGate(profile_repo)


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def failing_sender():
    return RecordingSender(fail=True)


@pytest.fixture
def dispatcher(sender, clock):
    return NotificationDispatcher(sender=sender, clock=clock)


@pytest.fixture
def dashboard_service(gate, profile_repo, request_repo, dispatcher):
    return DashboardService(gate, profile_repo, request_repo, dispatcher, history_limit=10)


@pytest.fixture
def onboarding_service(gate, profile_repo, dispatcher):
    return OnboardingService(gate, profile_repo, dispatcher)


@pytest.fixture
def admin_service(profile_repo, request_repo):
    return AdminService(profile_repo, request_repo)


@pytest.fixture
def onboarded(db, identity):
    """Seed a complete profile for `identity`."""
    db.seed(
        "profiles",
        {
            "user_id": str(identity.id),
            "business_name": "Acme Roasters",
            "business_address": "1 Bean St",
            "point_of_contact": "Dana",
            "phone_number": "555-0100",
            "office_size": 12,
            "email": identity.email,
            "created_at": "2026-01-01T08:00:00+00:00",
            "updated_at": None,
        },
    )
    return db
