import logging

from notifications.exceptions import DataAccessError
from notifications.models import Notification

from .clock import Clock
from .config import ExpirationConfig
from .dedup import DedupGuard, NotificationStore
from .fanout import DeliveryResult, NotificationFanout
from .mailer import EmailTransport
from .messages import build_admin_notice, build_owner_notice
from .preferences import PreferenceGate
from .recipients import RecipientResolver, UserStore
from .scanner import DocumentStore, ExpirationScanner

logger = logging.getLogger(__name__)


class CycleSummary:
    """Counters for one expiration cycle, reported to admins."""

    def __init__(self):
        self.documents_scanned = 0
        self.documents_skipped = 0
        self.notifications_created = 0
        self.notifications_skipped = 0
        self.emails_sent = 0
        self.emails_skipped = 0
        self.emails_failed = 0
        self.data_access_failures = 0
        self.failed_offsets = []

    def record(self, result):
        if result.in_app == DeliveryResult.CREATED:
            self.notifications_created += 1
        elif result.in_app == DeliveryResult.SKIPPED:
            self.notifications_skipped += 1
        else:
            self.data_access_failures += 1

        if result.email == DeliveryResult.SENT:
            self.emails_sent += 1
        elif result.email == DeliveryResult.FAILED:
            self.emails_failed += 1
        else:
            self.emails_skipped += 1

    def as_dict(self):
        return {
            "documentsScanned": self.documents_scanned,
            "documentsSkipped": self.documents_skipped,
            "notificationsCreated": self.notifications_created,
            "notificationsSkipped": self.notifications_skipped,
            "emailsSent": self.emails_sent,
            "emailsSkipped": self.emails_skipped,
            "emailsFailed": self.emails_failed,
            "failures": {
                "dataAccess": self.data_access_failures,
                "transientDelivery": self.emails_failed,
            },
            "failedOffsets": list(self.failed_offsets),
        }

    def __str__(self):
        return (
            f"{self.documents_scanned} documents scanned, "
            f"{self.notifications_created} notifications created "
            f"({self.notifications_skipped} already sent today), "
            f"{self.emails_sent} emails sent, "
            f"{self.emails_failed} emails failed"
        )


class ExpirationCycle:
    """
    One full pass: scan offsets, resolve recipients, fan out.

    Collaborators default to the Django-backed implementations and
    can be swapped for fakes.
    """

    def __init__(
        self,
        config=None,
        clock=None,
        document_store=None,
        user_store=None,
        notification_store=None,
        preferences=None,
        transport=None,
    ):
        self.config = config or ExpirationConfig.from_settings()
        self.clock = clock or Clock()
        self.document_store = document_store or DocumentStore()
        self.user_store = user_store or UserStore()
        self.notification_store = notification_store or NotificationStore()
        self.preferences = preferences or PreferenceGate()
        self.transport = transport or EmailTransport()

    def run(self):
        summary = CycleSummary()
        category = Notification.Category.DOCUMENT_EXPIRING

        scanner = ExpirationScanner(
            self.clock,
            store=self.document_store,
            offsets=self.config.offsets,
        )
        # Fresh resolver per cycle so the admin list is reloaded
        resolver = RecipientResolver(store=self.user_store)
        fanout = NotificationFanout(
            dedup=DedupGuard(self.clock, store=self.notification_store),
            preferences=self.preferences,
            transport=self.transport,
            email_timeout=self.config.email_timeout,
            write_attempts=self.config.write_attempts,
        )

        logger.info("Checking for expiring documents...")

        for document, offset in scanner.scan():
            summary.documents_scanned += 1

            try:
                recipients = resolver.resolve(document)
            except DataAccessError:
                logger.exception(
                    "Could not resolve recipients for document %s", document.pk
                )
                summary.data_access_failures += 1
                summary.documents_skipped += 1
                continue

            if recipients is None:
                summary.documents_skipped += 1
                continue

            if recipients.admin_error is not None:
                summary.data_access_failures += 1

            for recipient, is_owner in recipients:
                if is_owner:
                    notice = build_owner_notice(document, offset)
                else:
                    notice = build_admin_notice(document, offset, recipients.owner)

                result = fanout.deliver(
                    recipient,
                    category,
                    notice,
                    is_owner=is_owner,
                    document=document,
                )
                summary.record(result)

            logger.info(
                "Expiry notifications processed for document: %s",
                document.human_label
            )

        summary.failed_offsets = list(scanner.failed_offsets)
        summary.data_access_failures += len(scanner.failed_offsets)

        logger.info("Expiration check finished: %s", summary)
        return summary


def run_expiration_cycle(**kwargs):
    return ExpirationCycle(**kwargs).run()
