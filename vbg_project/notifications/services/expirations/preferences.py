import logging

from django.db import DatabaseError

from notifications.models import NotificationPreference

logger = logging.getLogger(__name__)


class PreferenceGate:
    """
    Per-user, per-type email opt-out lookup.

    No preference row means "allow". A failed lookup is logged and
    also treated as "allow", so a preference store outage never
    silences expiry warnings.
    """

    def allows(self, user_id, notification_type):
        try:
            preference = (
                NotificationPreference.objects
                .filter(user_id=user_id)
                .first()
            )
        except DatabaseError:
            logger.exception(
                "Preference lookup failed for user %s, defaulting to allow",
                user_id
            )
            return True

        if preference is None:
            return True

        return preference.allows(notification_type)
