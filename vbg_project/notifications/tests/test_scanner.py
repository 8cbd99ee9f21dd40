from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from documents.models import Document
from notifications.exceptions import DataAccessError
from notifications.services.expirations import DocumentStore, ExpirationScanner
from notifications.services.expirations.scanner import describe_offset

UTC = ZoneInfo("UTC")


pytestmark = pytest.mark.django_db


@pytest.mark.parametrize("k", [7, 3, 1, 0, -3])
def test_document_lands_only_in_its_offset_bucket(clock, owner, make_document, k):
    document = make_document(owner, clock.now() + timedelta(days=k))

    pairs = list(ExpirationScanner(clock).scan())

    assert pairs == [(document, k)]


def test_document_expiring_in_three_days_scenario(clock, owner, make_document):
    document = make_document(owner, datetime(2024, 1, 4, 15, 45, tzinfo=UTC))

    pairs = list(ExpirationScanner(clock).scan(datetime(2024, 1, 1, tzinfo=UTC)))

    assert pairs == [(document, 3)]


def test_day_window_boundaries(clock, owner, make_document):
    start_of_day = make_document(owner, datetime(2024, 1, 2, 0, 0, tzinfo=UTC))
    end_of_day = make_document(owner, datetime(2024, 1, 2, 23, 59, 59, tzinfo=UTC))
    make_document(owner, datetime(2024, 1, 3, 0, 0, tzinfo=UTC))

    pairs = list(ExpirationScanner(clock).scan())

    assert sorted(doc.pk for doc, offset in pairs) == sorted([start_of_day.pk, end_of_day.pk])
    assert {offset for _doc, offset in pairs} == {1}


def test_documents_off_bucket_deleted_or_without_expiry_are_ignored(clock, owner, make_document):
    make_document(owner, clock.now() + timedelta(days=2))
    make_document(owner, clock.now() + timedelta(days=-1))
    make_document(owner, None)
    make_document(owner, clock.now() + timedelta(days=7), status=Document.Status.DELETED)

    assert list(ExpirationScanner(clock).scan()) == []


def test_scan_is_lazy_and_requeries_each_time(clock, owner, make_document):
    scanner = ExpirationScanner(clock)

    assert list(scanner.scan()) == []

    document = make_document(owner, clock.now())

    assert list(scanner.scan()) == [(document, 0)]


class FlakyDocumentStore(DocumentStore):
    def __init__(self, clock, failing_offset):
        self.failing_window = clock.day_window(clock.today() + timedelta(days=failing_offset))

    def find_expiring_between(self, start, end):
        if (start, end) == self.failing_window:
            raise DataAccessError("database is locked")
        return super().find_expiring_between(start, end)


def test_failed_offset_is_skipped_and_scan_continues(clock, owner, make_document):
    make_document(owner, clock.now() + timedelta(days=3))
    tomorrow = make_document(owner, clock.now() + timedelta(days=1))
    today = make_document(owner, clock.now())

    scanner = ExpirationScanner(clock, store=FlakyDocumentStore(clock, failing_offset=3))
    pairs = list(scanner.scan())

    assert pairs == [(tomorrow, 1), (today, 0)]
    assert scanner.failed_offsets == [3]


def test_describe_offset_wording():
    assert describe_offset(7) == "in 7 day(s)"
    assert describe_offset(0) == "today"
    assert describe_offset(-3) == "3 day(s) ago"
