import logging

from django.db import DatabaseError

from notifications.exceptions import DataAccessError
from notifications.models import Notification

logger = logging.getLogger(__name__)


class NotificationStore:
    """
    Writes in-app notifications.

    The (recipient, category, title, created_on) unique constraint
    on Notification makes the claim and the insert one atomic step:
    get_or_create falls back to a lookup when a concurrent insert
    wins the race, so two callers can never both see created=True.
    """

    def try_claim_and_insert(self, user_id, category, title, message,
                             day, created_at=None, **extra):
        defaults = {"message": message, **extra}
        if created_at is not None:
            defaults["created_at"] = created_at

        try:
            return Notification.objects.get_or_create(
                recipient_id=user_id,
                category=category,
                title=title,
                created_on=day,
                defaults=defaults,
            )
        except DatabaseError as exc:
            raise DataAccessError(
                f"Could not write notification for user {user_id}: {exc}"
            ) from exc


class DedupGuard:
    """
    Same-day idempotency for notifications.

    The key is (user, type, title, local calendar day), so it resets
    at local midnight no matter when the previous cycle ran.
    """

    def __init__(self, clock, store=None):
        self.clock = clock
        self.store = store or NotificationStore()

    def try_claim(self, user_id, category, title, message, **extra):
        now = self.clock.now()

        notification, created = self.store.try_claim_and_insert(
            user_id,
            category,
            title,
            message,
            day=now.date(),
            created_at=now,
            **extra,
        )

        if not created:
            logger.info(
                "Skipping duplicate notification for user %s: %s",
                user_id, title
            )

        return created, notification
