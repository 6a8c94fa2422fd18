# portal/routers/deps.py
"""
Shared service instances and their FastAPI providers.

Routers depend on the get_* functions so tests can swap in fakes via
app.dependency_overrides.
"""

from portal.core.auth_gateway import AuthGateway
from portal.core.config import get_settings
from portal.core.supabase_client import supabase_for_token, supabase_public
from portal.repositories.profile_repo import ProfileRepository
from portal.repositories.service_request_repo import ServiceRequestRepository
from portal.services.account_service import AccountService
from portal.services.admin_service import AdminService
from portal.services.dashboard_service import DashboardService
from portal.services.notification_service import NotificationDispatcher
from portal.services.onboarding_service import OnboardingService
from portal.services.session_gate import SessionGate

settings = get_settings()

profile_repo = ProfileRepository()
request_repo = ServiceRequestRepository()
dispatcher = NotificationDispatcher()
gate = SessionGate(profile_repo)

dashboard_service = DashboardService(
    gate,
    profile_repo,
    request_repo,
    dispatcher,
    history_limit=settings.REQUEST_HISTORY_LIMIT,
)
onboarding_service = OnboardingService(gate, profile_repo, dispatcher)
admin_service = AdminService(profile_repo, request_repo)
account_service = AccountService(
    gate,
    gateway_factory=lambda: AuthGateway(supabase_public()),
    db_factory=supabase_for_token,
)


def get_gate() -> SessionGate:
    return gate


def get_dashboard_service() -> DashboardService:
    return dashboard_service


def get_onboarding_service() -> OnboardingService:
    return onboarding_service


def get_admin_service() -> AdminService:
    return admin_service


def get_account_service() -> AccountService:
    return account_service
