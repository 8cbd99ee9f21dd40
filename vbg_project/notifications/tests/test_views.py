import json
from datetime import timedelta

import pytest
from django.core import mail
from django.urls import reverse
from django.utils import timezone

from accounts.models import User
from notifications import scheduler as scheduler_module
from notifications.models import Notification, NotificationPreference


pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def fresh_scheduler(monkeypatch):
    monkeypatch.setattr(scheduler_module, "_scheduler", None)


@pytest.fixture
def admin_session(client, admins):
    client.force_login(admins[0])
    return client


def test_manual_check_returns_summary(admin_session, owner, admins, make_document):
    make_document(owner, timezone.now(), description="Business License")

    response = admin_session.post(reverse("notifications:expiration_check"))

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["documentsScanned"] == 1
    assert data["notificationsCreated"] == 3
    assert data["emailsSent"] == 3
    assert data["emailsFailed"] == 0
    assert data["failures"] == {"dataAccess": 0, "transientDelivery": 0}

    assert len(mail.outbox) == 3
    owner_mail = next(m for m in mail.outbox if m.to == [owner.email])
    assert owner_mail.subject == "Document Expires Today: Business License"
    html, mimetype = owner_mail.alternatives[0]
    assert mimetype == "text/html"
    assert "Business License" in html


def test_manual_check_twice_on_same_day_is_idempotent(admin_session, owner, make_document):
    make_document(owner, timezone.now() + timedelta(days=7))
    url = reverse("notifications:expiration_check")

    admin_session.post(url)
    data = admin_session.post(url).json()

    assert data["notificationsCreated"] == 0
    assert data["emailsSent"] == 0
    assert Notification.objects.count() == 3
    assert len(mail.outbox) == 3


def test_manual_check_requires_admin(client, owner):
    client.force_login(owner)

    response = client.post(reverse("notifications:expiration_check"))

    assert response.status_code == 403
    assert response.json()["success"] is False


def test_manual_check_requires_login(client):
    response = client.post(reverse("notifications:expiration_check"))

    assert response.status_code == 302


def test_manual_check_rejects_get(admin_session):
    response = admin_session.get(reverse("notifications:expiration_check"))

    assert response.status_code == 405


def test_manual_check_hides_internal_errors(admin_session, monkeypatch):
    def explode():
        raise RuntimeError("secret stack detail")

    monkeypatch.setattr(scheduler_module.get_scheduler(), "run_now", explode)

    response = admin_session.post(reverse("notifications:expiration_check"))

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Failed to check expiring documents",
    }


def test_preferences_default_to_allow(client, owner):
    client.force_login(owner)

    response = client.get(reverse("notifications:preferences"))

    assert response.json() == {Notification.Category.DOCUMENT_EXPIRING: True}


def test_preferences_update(client, owner):
    client.force_login(owner)

    response = client.post(
        reverse("notifications:preferences"),
        data=json.dumps({"document_expiring": False}),
        content_type="application/json",
    )

    assert response.status_code == 200
    assert response.json()["preferences"] == {"document_expiring": False}
    preference = NotificationPreference.objects.get(user=owner)
    assert preference.allows("document_expiring") is False


def test_preferences_reject_unknown_types(client, owner):
    client.force_login(owner)

    response = client.post(
        reverse("notifications:preferences"),
        data=json.dumps({"job_updates": False}),
        content_type="application/json",
    )

    assert response.status_code == 400
    assert not NotificationPreference.objects.exists()


def test_preferences_reject_invalid_json(client, owner):
    client.force_login(owner)

    response = client.post(
        reverse("notifications:preferences"),
        data="not json",
        content_type="application/json",
    )

    assert response.status_code == 400


def test_admin_role_is_checked_not_staff_flag(client, make_user):
    staff = make_user("staff", is_staff=True, login_role=User.LoginRole.USER)
    client.force_login(staff)

    response = client.post(reverse("notifications:expiration_check"))

    assert response.status_code == 403
