from django.db import models
from django.conf import settings
from django.utils import timezone


class DocumentQuerySet(models.QuerySet):
    def live(self):
        return self.exclude(status=Document.Status.DELETED)

    def expiring_between(self, start, end):
        """
        Live documents whose expiration falls in [start, end).
        Documents without an expiration date never match.
        """
        return (
            self.live()
            .filter(expires_at__gte=start, expires_at__lt=end)
            .select_related("owner")
        )


class Document(models.Model):
    """
    An uploaded document that may carry an expiration date.

    Expiry state ("expiring", "expired") is always computed against
    the current time and never stored on the row.
    """

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        DELETED = "deleted", "Deleted"

    # =====================================================
    # OWNERSHIP
    # =====================================================
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="documents",
        help_text="User who uploaded the document"
    )

    # =====================================================
    # CONTENT
    # =====================================================
    original_name = models.CharField(max_length=255)
    description = models.CharField(max_length=255, blank=True)
    document_type = models.CharField(max_length=100, blank=True)

    # =====================================================
    # LIFECYCLE
    # =====================================================
    expires_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True
    )

    uploaded_at = models.DateTimeField(default=timezone.now)

    objects = DocumentQuerySet.as_manager()

    class Meta:
        ordering = ["expires_at"]
        indexes = [
            models.Index(fields=["status", "expires_at"], name="document_status_expiry_idx"),
        ]

    def __str__(self):
        return self.human_label

    @property
    def human_label(self):
        return self.description or self.original_name

    def soft_delete(self):
        if self.status != self.Status.DELETED:
            self.status = self.Status.DELETED
            self.save(update_fields=["status"])
