import pytest

from notifications.models import Notification, NotificationPreference


pytestmark = pytest.mark.django_db


@pytest.fixture
def make_notification(owner):
    def _make_notification(title, **extra):
        return Notification.objects.create(
            recipient=owner,
            category=Notification.Category.DOCUMENT_EXPIRING,
            title=title,
            message="message",
            **extra,
        )

    return _make_notification


def test_mark_as_read_sets_timestamp_once(make_notification):
    notification = make_notification("Document Expired: W-9")

    notification.mark_as_read()
    first_read_at = notification.read_at
    notification.mark_as_read()

    notification.refresh_from_db()
    assert notification.is_read is True
    assert notification.read_at == first_read_at


def test_mark_all_as_read(owner, make_notification):
    make_notification("Document Expired: W-9")
    make_notification("Document Expired: Insurance")

    updated = Notification.mark_all_as_read(owner, category=Notification.Category.DOCUMENT_EXPIRING)

    assert updated == 2
    assert not Notification.objects.filter(is_read=False).exists()


def test_created_on_defaults_to_local_day(make_notification):
    notification = make_notification("Document Expired: W-9")

    assert notification.created_on == notification.created_at.date()


def test_preference_allows_defaults_to_true(owner):
    preference = NotificationPreference(user=owner, preferences={"document_expiring": False})

    assert preference.allows("document_expiring") is False
    assert preference.allows("something_else") is True
    assert preference.as_dict() == {"document_expiring": False}
