import logging

from django.conf import settings
from django.core.mail import get_connection, send_mail
from django.utils.html import strip_tags

from notifications.exceptions import TransientDeliveryError

logger = logging.getLogger(__name__)


class EmailTransport:
    """
    Sends one HTML email through Django's configured backend.

    The connection is opened with the caller's timeout. There is
    no retry here; any failure surfaces as TransientDeliveryError.
    """

    def __init__(self, from_email=None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL

    def send(self, to, subject, html, timeout=None):
        try:
            connection = get_connection(timeout=timeout)
            send_mail(
                subject=subject,
                message=strip_tags(html),
                from_email=self.from_email,
                recipient_list=[to],
                html_message=html,
                fail_silently=False,
                connection=connection,
            )
        except Exception as exc:
            raise TransientDeliveryError(
                f"Failed to send email to {to}: {exc}"
            ) from exc

        logger.info("Email sent to %s: %s", to, subject)
