"""Tests for session resolution and page routing."""

import pytest

from portal.core.errors import BackendError
from portal.schemas.session import NavigationTarget, SessionState
from portal.services.session_gate import navigation_for


def test_no_identity_is_anonymous(gate, db):
    resolution = gate.resolve(db, None)

    assert resolution.state is SessionState.ANONYMOUS
    assert navigation_for(resolution.state) is NavigationTarget.LOGIN


def test_authenticated_without_profile_routes_to_onboarding(gate, db, identity):
    resolution = gate.resolve(db, identity)

    assert resolution.state is SessionState.AUTHENTICATED_NO_PROFILE
    assert resolution.profile is None
    assert navigation_for(resolution.state) is NavigationTarget.ONBOARDING


def test_authenticated_with_profile_routes_to_dashboard(gate, onboarded, identity):
    resolution = gate.resolve(onboarded, identity)

    assert resolution.state is SessionState.AUTHENTICATED_WITH_PROFILE
    assert resolution.profile.business_name == "Acme Roasters"
    assert navigation_for(resolution.state) is NavigationTarget.DASHBOARD


def test_backend_error_propagates_from_resolve(gate, db, identity):
    db.fail("profiles", "select")

    with pytest.raises(BackendError):
        gate.resolve(db, identity)


def test_resolve_target_falls_back_to_dashboard(gate, db, identity):
    db.fail("profiles", "select")

    assert gate.resolve_target(db, identity) is NavigationTarget.DASHBOARD
