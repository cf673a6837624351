"""
Unit Tests: NotificationService

Covers creation with best-effort push dispatch, pagination, the two-stage
id resolver behind mark_read and the idempotent bulk mark_all_read.
"""

from unittest.mock import patch

import pytest

from app.domain.exceptions import ValidationError, NotFoundError
from app.services.notification_service import NotificationService


@pytest.fixture
def service(db):
    return NotificationService(db)


def _create(service, user_id="u1", title="Order shipped", type_="order"):
    return service.create(user_id, type_, title, "Your order is on its way", {"orderId": "o-1"})


class TestCreate:
    def test_create_trims_and_dispatches_push(self, service):
        with patch("app.services.notification_service.send_push_notification_task") as task:
            created = service.create("u1", "offer", "  Big sale  ", "  20% off  ")

        assert created["title"] == "Big sale"
        assert created["message"] == "20% off"
        assert created["isRead"] is False
        task.delay.assert_called_once_with(created["notificationId"], "u1", "Big sale")

    def test_broker_outage_does_not_lose_notification(self, service):
        with patch("app.services.notification_service.send_push_notification_task") as task:
            task.delay.side_effect = ConnectionError("broker down")
            created = _create(service)

        assert service.count_unread("u1") == 1
        assert created["notificationId"]

    def test_eager_task_runs_inline(self, service):
        created = _create(service)

        assert created["data"] == {"orderId": "o-1"}

    def test_invalid_type_rejected(self, service):
        with pytest.raises(ValidationError):
            _create(service, type_="spam")

    def test_blank_title_rejected(self, service):
        with pytest.raises(ValidationError):
            _create(service, title="   ")


class TestList:
    def test_pagination_and_unread_count(self, service):
        for i in range(5):
            _create(service, title=f"n{i}")
        _create(service, user_id="u2")

        page = service.list("u1", page=2, limit=2)

        assert page["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}
        assert len(page["notifications"]) == 2
        assert page["unreadCount"] == 5

    def test_newest_first(self, service):
        _create(service, title="old")
        _create(service, title="new")

        titles = [n["title"] for n in service.list("u1")["notifications"]]
        assert titles == ["new", "old"]

    def test_limit_is_capped(self, service):
        assert service.list("u1", limit=1000)["pagination"]["limit"] == 100

    def test_filters(self, service):
        _create(service, type_="order")
        offer = _create(service, type_="offer")
        service.mark_read(offer["notificationId"])

        assert service.list("u1", type_="offer")["pagination"]["total"] == 1
        assert service.list("u1", unread_only=True)["pagination"]["total"] == 1

    def test_user_required(self, service):
        with pytest.raises(ValidationError):
            service.list(None)


class TestMarkRead:
    def test_mark_read_by_business_id(self, service):
        created = _create(service)

        updated = service.mark_read(created["notificationId"])

        assert updated["isRead"] is True
        assert service.count_unread("u1") == 0

    def test_mark_unread(self, service):
        created = _create(service)
        service.mark_read(created["notificationId"])

        assert service.mark_read(created["notificationId"], is_read=False)["isRead"] is False

    def test_storage_id_fallback(self, service, db):
        created = _create(service)
        pk = service.repo.get_by_business_id(created["notificationId"]).id

        updated = service.mark_read(str(pk))

        assert updated["notificationId"] == created["notificationId"]
        assert updated["isRead"] is True

    def test_unknown_id_is_404_without_mutation(self, service):
        _create(service)

        with pytest.raises(NotFoundError):
            service.mark_read("does-not-exist")

        assert service.count_unread("u1") == 1

    def test_id_required(self, service):
        with pytest.raises(ValidationError):
            service.mark_read("")


class TestMarkAllRead:
    def test_second_call_updates_nothing(self, service):
        _create(service)
        _create(service)
        _create(service, user_id="u2")

        assert service.mark_all_read("u1") == 2
        assert service.mark_all_read("u1") == 0
        assert service.count_unread("u2") == 1
