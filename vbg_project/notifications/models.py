from django.db import models
from django.conf import settings
from django.utils import timezone

from documents.models import Document


class Notification(models.Model):
    """
    A derived, user-facing notification.
    Notifications are NOT the source of truth; they reflect
    events happening on Documents.
    """

    # =====================================================
    # CATEGORY (notification type, also the preference key)
    # =====================================================
    class Category(models.TextChoices):
        DOCUMENT_EXPIRING = "document_expiring", "Document expiring"

    # =====================================================
    # SEVERITY / PRIORITY (UI + sorting)
    # =====================================================
    class Priority(models.TextChoices):
        INFO = "info", "Info"
        WARNING = "warning", "Warning"
        DANGER = "danger", "Danger"

    # =====================================================
    # CORE RELATIONSHIPS
    # =====================================================
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        help_text="User who receives this notification"
    )

    # =====================================================
    # CLASSIFICATION
    # =====================================================
    category = models.CharField(
        max_length=50,
        choices=Category.choices,
        db_index=True
    )

    priority = models.CharField(
        max_length=20,
        choices=Priority.choices,
        default=Priority.INFO,
        db_index=True
    )

    # =====================================================
    # CONTENT
    # =====================================================
    title = models.CharField(
        max_length=200,
        help_text="Short headline shown in notification list"
    )

    message = models.TextField(
        help_text="Detailed message shown when expanded"
    )

    # =====================================================
    # OPTIONAL CONTEXT
    # =====================================================
    document = models.ForeignKey(
        Document,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications"
    )

    action_url = models.CharField(
        max_length=255,
        blank=True,
        help_text="Optional URL the notification should link to"
    )

    # =====================================================
    # STATE
    # =====================================================
    is_read = models.BooleanField(
        default=False,
        db_index=True
    )

    read_at = models.DateTimeField(
        null=True,
        blank=True
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True
    )

    # Local calendar day of created_at; part of the dedup key
    created_on = models.DateField(
        default=timezone.localdate,
        db_index=True
    )

    # =====================================================
    # DJANGO META
    # =====================================================
    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
            models.Index(fields=["recipient", "category", "is_read"], name="notif_recipient_cat_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["recipient", "category", "title", "created_on"],
                name="unique_notification_per_day",
            ),
        ]

    # =====================================================
    # STRING REPRESENTATION
    # =====================================================
    def __str__(self):
        return (
            f"{self.recipient} | "
            f"{self.category.upper()} | "
            f"{self.title}"
        )

    # =====================================================
    # INSTANCE HELPERS
    # =====================================================
    def mark_as_read(self):
        """Safely mark notification as read."""
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at"])

    # =====================================================
    # BULK HELPERS
    # =====================================================
    @classmethod
    def mark_all_as_read(cls, user, category=None):
        """
        Mark all unread notifications (optionally by category)
        as read for a user.
        """
        qs = cls.objects.filter(recipient=user, is_read=False)
        if category:
            qs = qs.filter(category=category)

        return qs.update(
            is_read=True,
            read_at=timezone.now()
        )


class NotificationPreference(models.Model):
    """
    Per-user opt-out switches, keyed by Notification.Category value.

    A missing row, or a missing key inside `preferences`,
    means the user receives that notification type.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_preference"
    )

    preferences = models.JSONField(default=dict, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Preferences for {self.user}"

    def allows(self, notification_type):
        return bool(self.preferences.get(notification_type, True))

    def as_dict(self):
        return {
            value: self.allows(value)
            for value, _label in Notification.Category.choices
        }
