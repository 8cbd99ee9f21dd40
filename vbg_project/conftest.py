from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from accounts.models import User
from documents.models import Document
from notifications.exceptions import TransientDeliveryError
from notifications.services.expirations import ExpirationConfig, FixedClock


UTC = ZoneInfo("UTC")


class RecordingTransport:
    """Email transport that records sends and fails for chosen addresses."""

    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.sent = []
        self.attempts = []

    def send(self, to, subject, html, timeout=None):
        self.attempts.append(to)
        if to in self.fail_for:
            raise TransientDeliveryError(f"SMTP timeout for {to}")
        self.sent.append({"to": to, "subject": subject, "html": html, "timeout": timeout})

    def sent_to(self):
        return [message["to"] for message in self.sent]


@pytest.fixture(autouse=True)
def utc_time_zone(settings):
    settings.TIME_ZONE = "UTC"
    settings.ENABLE_SCHEDULER = False


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 1, 9, 0, tzinfo=UTC), tz=UTC)


@pytest.fixture
def config():
    return ExpirationConfig()


@pytest.fixture
def make_transport():
    return RecordingTransport


@pytest.fixture
def transport(make_transport):
    return make_transport()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(username=None, login_role=User.LoginRole.USER, email=None, **extra):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        if email is None:
            email = f"{username}@example.com"
        return User.objects.create_user(
            username=username,
            email=email,
            password="pass1234",
            login_role=login_role,
            **extra,
        )

    return _make_user


@pytest.fixture
def owner(make_user):
    return make_user("owner", first_name="Olivia", last_name="Owner")


@pytest.fixture
def admins(make_user):
    return [
        make_user("admin1", login_role=User.LoginRole.ADMIN),
        make_user("admin2", login_role=User.LoginRole.ADMIN),
    ]


@pytest.fixture
def make_document(db):
    def _make_document(owner, expires_at, **extra):
        extra.setdefault("original_name", "insurance.pdf")
        return Document.objects.create(owner=owner, expires_at=expires_at, **extra)

    return _make_document
