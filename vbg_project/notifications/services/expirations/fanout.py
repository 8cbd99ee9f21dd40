import logging

from notifications.exceptions import DataAccessError, TransientDeliveryError

logger = logging.getLogger(__name__)


DEFAULT_EMAIL_TIMEOUT = 10
DEFAULT_WRITE_ATTEMPTS = 2


class DeliveryResult:
    """Outcome of one recipient's delivery, per channel."""

    CREATED = "created"
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"

    def __init__(self, in_app, email, error=None):
        self.in_app = in_app
        self.email = email
        self.error = error

    def __repr__(self):
        return f"<DeliveryResult in_app={self.in_app} email={self.email}>"

    def __eq__(self, other):
        if not isinstance(other, DeliveryResult):
            return NotImplemented
        return (self.in_app, self.email) == (other.in_app, other.email)

    @classmethod
    def skipped(cls):
        return cls(in_app=cls.SKIPPED, email=cls.SKIPPED)


class NotificationFanout:
    """
    Delivers one notice to one recipient: in-app row first, then email.

    The in-app row is the record that the recipient has been told;
    an email failure is recorded but never undoes it.
    """

    def __init__(self, dedup, preferences, transport,
                 email_timeout=DEFAULT_EMAIL_TIMEOUT,
                 write_attempts=DEFAULT_WRITE_ATTEMPTS):
        self.dedup = dedup
        self.preferences = preferences
        self.transport = transport
        self.email_timeout = email_timeout
        self.write_attempts = max(1, write_attempts)

    def deliver(self, recipient, category, notice, is_owner, document=None):
        # --------------------------------------------------
        # 1 + 2. CLAIM AND WRITE THE IN-APP NOTIFICATION
        # --------------------------------------------------
        try:
            created = self._claim(recipient, category, notice, document)
        except DataAccessError as exc:
            logger.error(
                "Could not create notification for user %s (%s): %s",
                recipient.pk, notice.title, exc
            )
            return DeliveryResult(
                in_app=DeliveryResult.FAILED,
                email=DeliveryResult.SKIPPED,
                error=exc,
            )

        if not created:
            return DeliveryResult.skipped()

        # --------------------------------------------------
        # 3. EMAIL (PREFERENCE GATED)
        # --------------------------------------------------
        if not recipient.email:
            return DeliveryResult(
                in_app=DeliveryResult.CREATED,
                email=DeliveryResult.SKIPPED,
            )

        if not self.preferences.allows(recipient.pk, category):
            logger.info(
                "User %s opted out of %s emails", recipient.pk, category
            )
            return DeliveryResult(
                in_app=DeliveryResult.CREATED,
                email=DeliveryResult.SKIPPED,
            )

        # --------------------------------------------------
        # 4. SEND ONCE, NEVER ROLL BACK THE IN-APP ROW
        # --------------------------------------------------
        try:
            self.transport.send(
                recipient.email,
                notice.email_subject,
                notice.email_html,
                timeout=self.email_timeout,
            )
        except TransientDeliveryError as exc:
            logger.warning(
                "Email to %s failed (%s %s): %s",
                recipient.email,
                "owner" if is_owner else "admin",
                recipient.pk,
                exc,
            )
            return DeliveryResult(
                in_app=DeliveryResult.CREATED,
                email=DeliveryResult.FAILED,
                error=exc,
            )

        return DeliveryResult(
            in_app=DeliveryResult.CREATED,
            email=DeliveryResult.SENT,
        )

    def _claim(self, recipient, category, notice, document):
        for attempt in range(1, self.write_attempts + 1):
            try:
                created, _notification = self.dedup.try_claim(
                    recipient.pk,
                    category,
                    notice.title,
                    notice.message,
                    priority=notice.priority,
                    action_url=notice.action_url,
                    document=document,
                )
                return created
            except DataAccessError:
                if attempt == self.write_attempts:
                    raise
                logger.warning(
                    "Retrying notification write for user %s (attempt %s of %s)",
                    recipient.pk, attempt + 1, self.write_attempts
                )
