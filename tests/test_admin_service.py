"""Tests for the admin panel flow and its local filtering."""

import itertools
import uuid

import pytest

from portal.core.errors import BackendError, NotFoundError
from portal.schemas.service_request import RequestFilter
from portal.services.admin_service import (
    apply_committed,
    business_options,
    filter_requests,
    request_stats,
)


def _create(request_repo, db, business, service_type="coffee-refill"):
    return request_repo.create(
        db,
        {
            "user_id": uuid.uuid4(),
            "business_name": business,
            "business_address": "somewhere",
            "service_type": service_type,
            "service_name": service_type.replace("-", " ").title(),
            "email": "x@y.test",
        },
    )


@pytest.fixture
def seeded(db, request_repo):
    a1 = _create(request_repo, db, "Acme")
    b1 = _create(request_repo, db, "Bolt", "nitrogen-refill")
    a2 = _create(request_repo, db, "Acme", "kegerator-maintenance")
    _create(request_repo, db, "Crux", "nitrogen-refill")
    _create(request_repo, db, "")
    request_repo.update_status(db, b1.id, "in-progress")
    request_repo.update_status(db, a2.id, "completed")
    request_repo.update_status(db, a1.id, "in-progress")
    return db


class TestFiltering:
    def test_empty_filter_returns_everything(self, admin_service, seeded):
        session = admin_service.load(seeded)

        assert filter_requests(session.requests, RequestFilter()) == session.requests

    def test_blank_values_mean_no_constraint(self):
        criteria = RequestFilter(business="", status="", service_type=" ")

        assert criteria.business is None
        assert criteria.status is None
        assert criteria.service_type is None

    def test_filters_are_anded(self, admin_service, seeded):
        session = admin_service.load(seeded)

        rows = filter_requests(
            session.requests, RequestFilter(business="Acme", status="in-progress")
        )

        assert len(rows) == 1
        assert rows[0].service_type == "coffee-refill"

    def test_filter_order_does_not_matter(self, admin_service, seeded):
        session = admin_service.load(seeded)
        single = [
            RequestFilter(business="Acme"),
            RequestFilter(status="in-progress"),
            RequestFilter(service_type="coffee-refill"),
        ]
        combined = filter_requests(
            session.requests,
            RequestFilter(business="Acme", status="in-progress", service_type="coffee-refill"),
        )

        for order in itertools.permutations(single):
            rows = session.requests
            for criteria in order:
                rows = filter_requests(rows, criteria)
            assert rows == combined

    def test_business_options_come_from_requests(self, admin_service, seeded):
        seeded.seed("profiles", {"user_id": str(uuid.uuid4()), "business_name": "Profile Only"})
        session = admin_service.load(seeded)

        options = business_options(session.requests)

        assert sorted(options) == ["Acme", "Bolt", "Crux"]
        assert "Profile Only" not in options

    def test_stats_count_by_status(self, admin_service, seeded):
        session = admin_service.load(seeded)

        stats = request_stats(session.requests)

        assert (stats.total, stats.pending, stats.in_progress, stats.completed) == (5, 2, 2, 1)

    def test_view_counts_filtered_rows(self, admin_service, seeded):
        session = admin_service.load(seeded)

        rows, stats, options = admin_service.view(session, RequestFilter(business="Acme"))

        assert len(rows) == 2
        assert stats.total == 2
        assert len(options) == 3


class TestLoading:
    def test_requests_newest_first_and_businesses_by_name(self, admin_service, seeded):
        seeded.seed(
            "profiles",
            {"user_id": str(uuid.uuid4()), "business_name": "Zed"},
            {"user_id": str(uuid.uuid4()), "business_name": "Alpha"},
        )

        session = admin_service.load(seeded)

        stamps = [r.created_at for r in session.requests]
        assert stamps == sorted(stamps, reverse=True)
        assert [p.business_name for p in session.businesses] == ["Alpha", "Zed"]

    def test_request_load_failure_sets_banner(self, admin_service, db):
        db.fail("service_requests", "select", message="boom")

        session = admin_service.load(db)

        assert session.requests == []
        assert session.banner.message == "Error loading requests: boom"

    def test_business_load_failure_is_independent(self, admin_service, seeded):
        seeded.fail("profiles", "select")

        session = admin_service.load(seeded)

        assert len(session.requests) == 5
        assert session.businesses == []
        assert session.banner is None


class TestStatusUpdate:
    def test_pending_to_completed_with_notes(self, admin_service, request_repo, db):
        created = _create(request_repo, db, "Acme")

        result = admin_service.update_status(db, created.id, "completed", "done")

        listed = {r.id: r for r in request_repo.list_all(db)}[created.id]
        assert listed.status == "completed"
        assert listed.admin_notes == "done"
        assert listed.updated_at > listed.created_at
        assert result.request == listed
        assert result.banner.message == "Request status updated successfully!"

    def test_patches_only_the_matching_record_in_memory(self, admin_service, seeded):
        session = admin_service.load(seeded)
        target = session.requests[2]
        others = [r for r in session.requests if r.id != target.id]
        calls_before = len(seeded.calls)

        result = admin_service.update_status(seeded, target.id, "pending")
        session.requests = apply_committed(session.requests, result.request)

        assert len(seeded.calls) == calls_before + 1
        assert session.requests[2] == result.request
        assert [r for r in session.requests if r.id != target.id] == others

    def test_apply_committed_ignores_unknown_rows(self, admin_service, request_repo, db):
        kept = _create(request_repo, db, "Acme")
        stray = _create(request_repo, db, "Other")

        assert apply_committed([kept], stray) == [kept]

    def test_any_status_can_be_set_in_any_order(self, admin_service, request_repo, db):
        created = _create(request_repo, db, "Acme")

        for status in ["completed", "pending", "in-progress", "pending"]:
            result = admin_service.update_status(db, created.id, status)
            assert result.request.status == status

    def test_unknown_request(self, admin_service, db):
        with pytest.raises(NotFoundError):
            admin_service.update_status(db, "missing", "completed")

    def test_backend_failure_is_prefixed(self, admin_service, request_repo, db):
        created = _create(request_repo, db, "Acme")
        db.fail("service_requests", "update", message="denied")

        with pytest.raises(BackendError) as exc_info:
            admin_service.update_status(db, created.id, "completed")

        assert exc_info.value.message == "Failed to update status: denied"
