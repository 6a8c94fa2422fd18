# portal/routers/auth.py
from fastapi import APIRouter, Depends

from portal.core.auth import require_identity
from portal.routers.deps import get_account_service
from portal.schemas.account import (
    AccountRead,
    PasswordResetPayload,
    PasswordUpdatePayload,
    RecoverySessionPayload,
    SignInPayload,
    SignOutPayload,
    SignUpPayload,
)
from portal.schemas.session import Identity
from portal.services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/sign-in", response_model=AccountRead)
def sign_in(
    payload: SignInPayload,
    service: AccountService = Depends(get_account_service),
):
    """
    Sign in with email + password.

    The response carries the Supabase session and the page to go to
    next (dashboard, or onboarding when no profile exists yet).
    """
    return service.sign_in(payload)


@router.post("/sign-up", response_model=AccountRead)
def sign_up(
    payload: SignUpPayload,
    service: AccountService = Depends(get_account_service),
):
    """Create an account, then continue to onboarding."""
    return service.sign_up(payload)


@router.post("/sign-out", response_model=AccountRead)
def sign_out(
    payload: SignOutPayload,
    identity: Identity = Depends(require_identity),
    service: AccountService = Depends(get_account_service),
):
    return service.sign_out(identity, payload.refresh_token)


@router.post("/password-reset", response_model=AccountRead)
def request_password_reset(
    payload: PasswordResetPayload,
    service: AccountService = Depends(get_account_service),
):
    """Email a password-reset link pointing at the reset page."""
    return service.request_password_reset(payload.email)


@router.post("/recovery-session", response_model=AccountRead)
def open_recovery_session(
    payload: RecoverySessionPayload,
    service: AccountService = Depends(get_account_service),
):
    """Turn the tokens from a reset link into a session."""
    return service.open_recovery_session(payload)


@router.post("/password", response_model=AccountRead)
def update_password(
    payload: PasswordUpdatePayload,
    identity: Identity = Depends(require_identity),
    service: AccountService = Depends(get_account_service),
):
    return service.update_password(identity, payload)
