from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from documents.models import Document


pytestmark = pytest.mark.django_db


def test_expiring_lists_own_documents_within_thirty_days(client, owner, make_user, make_document):
    now = timezone.now()
    soon = make_document(owner, now + timedelta(days=5), description="Insurance")
    make_document(owner, now + timedelta(days=45))
    make_document(owner, now - timedelta(days=1))
    make_document(owner, now + timedelta(days=2), status=Document.Status.DELETED)
    make_document(make_user("someone"), now + timedelta(days=5))
    client.force_login(owner)

    response = client.get(reverse("documents:expiring"))

    assert response.status_code == 200
    data = response.json()
    assert [item["id"] for item in data] == [soon.pk]
    assert data[0]["name"] == "Insurance"
    assert data[0]["days_until_expiry"] == 5


def test_expired_lists_newest_first(client, owner, make_document):
    now = timezone.now()
    older = make_document(owner, now - timedelta(days=10))
    recent = make_document(owner, now - timedelta(days=2))
    make_document(owner, now + timedelta(days=2))
    make_document(owner, None)
    client.force_login(owner)

    data = client.get(reverse("documents:expired")).json()

    assert [item["id"] for item in data] == [recent.pk, older.pk]
    assert data[0]["days_until_expiry"] == -2


def test_listing_requires_login(client):
    assert client.get(reverse("documents:expiring")).status_code == 302


def test_soft_delete_hides_document_from_scans(owner, make_document):
    document = make_document(owner, timezone.now())

    document.soft_delete()

    assert document.status == Document.Status.DELETED
    assert not Document.objects.live().exists()
    assert str(document) == "insurance.pdf"
