# portal/routers/session.py
from fastapi import APIRouter, Depends
from supabase import Client

from portal.core.auth import get_current_identity, get_db
from portal.routers.deps import get_gate
from portal.schemas.session import Identity, SessionRead
from portal.services.session_gate import SessionGate, navigation_for

router = APIRouter(prefix="/session", tags=["Session"])


@router.get("", response_model=SessionRead)
def read_session(
    identity: Identity | None = Depends(get_current_identity),
    client: Client | None = Depends(get_db),
    gate: SessionGate = Depends(get_gate),
):
    """
    Resolve the caller's session and the page they belong on.

      - no token          -> anonymous, login
      - token, no profile -> onboarding
      - token + profile   -> dashboard
    """
    resolution = gate.resolve(client, identity)
    return SessionRead(
        state=resolution.state,
        target=navigation_for(resolution.state),
        email=identity.email if identity else None,
    )
