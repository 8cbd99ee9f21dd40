import logging
from datetime import timedelta

from django.db import DatabaseError

from documents.models import Document
from notifications.exceptions import DataAccessError

logger = logging.getLogger(__name__)


# ============================================================
# OFFSET BUCKETS (DAYS RELATIVE TO TODAY)
#   > 0  expires in N days
#   = 0  expires today
#   < 0  expired N days ago
# ============================================================

DEFAULT_OFFSETS = (7, 3, 1, 0, -3)


def describe_offset(offset):
    if offset > 0:
        return f"in {offset} day(s)"
    if offset == 0:
        return "today"
    return f"{abs(offset)} day(s) ago"


class DocumentStore:
    def find_expiring_between(self, start, end):
        """Live documents with start <= expires_at < end."""
        try:
            return list(Document.objects.expiring_between(start, end))
        except DatabaseError as exc:
            raise DataAccessError(
                f"Could not load documents expiring between {start} and {end}: {exc}"
            ) from exc


class ExpirationScanner:
    """
    Walks the offset buckets and yields (document, offset) pairs.

    Each bucket is one local calendar day, so the buckets never
    overlap and a document lands in at most one of them per scan.
    Calling scan() again re-queries the store.
    """

    def __init__(self, clock, store=None, offsets=DEFAULT_OFFSETS):
        self.clock = clock
        self.store = store or DocumentStore()
        self.offsets = tuple(offsets)
        self.failed_offsets = []

    def scan(self, now=None):
        now = self.clock.localize(now) if now is not None else self.clock.now()
        today = now.date()
        self.failed_offsets = []

        for offset in self.offsets:
            start, end = self.clock.day_window(today + timedelta(days=offset))

            try:
                documents = self.store.find_expiring_between(start, end)
            except DataAccessError:
                logger.exception(
                    "Skipping documents expiring %s: query failed",
                    describe_offset(offset)
                )
                self.failed_offsets.append(offset)
                continue

            logger.info(
                "Found %s documents expiring %s",
                len(documents), describe_offset(offset)
            )

            for document in documents:
                yield document, offset
