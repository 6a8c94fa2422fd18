# portal/routers/onboarding.py
from fastapi import APIRouter, Depends
from supabase import Client

from portal.core.auth import get_current_identity, get_db
from portal.routers.deps import get_onboarding_service
from portal.schemas.profile import OnboardingCreate, OnboardingRead
from portal.schemas.session import Identity
from portal.services.onboarding_service import OnboardingService

router = APIRouter(prefix="/onboarding", tags=["Onboarding"])


@router.get("", response_model=OnboardingRead)
def onboarding_status(
    identity: Identity | None = Depends(get_current_identity),
    client: Client | None = Depends(get_db),
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Where an onboarding-page visitor belongs."""
    return service.status(client, identity)


@router.post("", response_model=OnboardingRead)
def submit_onboarding(
    payload: OnboardingCreate,
    identity: Identity | None = Depends(get_current_identity),
    client: Client | None = Depends(get_db),
    service: OnboardingService = Depends(get_onboarding_service),
):
    """
    Save the business profile (create, or update on duplicate) and
    notify the team.
    """
    return service.submit(client, identity, payload)
