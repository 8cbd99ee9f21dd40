"""
Wording for document expiration notices.

The wording is picked from the sign of the offset bucket:
  offset > 0  -> "expires in N day(s)"
  offset == 0 -> "expires today"
  offset < 0  -> "expired N day(s) ago"
"""

from django.urls import reverse
from django.utils import timezone
from django.utils.html import format_html

from notifications.models import Notification


TITLE_MAX_LENGTH = 200

OWNER_TITLES = {
    "future": "Document Expiring Soon",
    "today": "Document Expires Today",
    "past": "Document Expired",
}

ADMIN_TITLES = {
    "future": "User Document Expiring",
    "today": "User Document Expires Today",
    "past": "User Document Expired",
}


class Notice:
    def __init__(self, title, message, priority, email_subject, email_html,
                 action_url=""):
        self.title = title
        self.message = message
        self.priority = priority
        self.email_subject = email_subject
        self.email_html = email_html
        self.action_url = action_url

    def __repr__(self):
        return f"<Notice {self.title!r}>"


def _phase(offset):
    if offset > 0:
        return "future"
    if offset == 0:
        return "today"
    return "past"


def _priority(offset):
    if offset > 0:
        return Notification.Priority.WARNING
    return Notification.Priority.DANGER


def _title(prefix, label):
    # The label keeps two documents from sharing a title (and a dedup key)
    title = f"{prefix}: {label}"
    if len(title) > TITLE_MAX_LENGTH:
        title = title[:TITLE_MAX_LENGTH - 1] + "…"
    return title


def _expiry_date(document):
    return f"{timezone.localtime(document.expires_at):%A, %d %B %Y}"


def _owner_url(phase):
    if phase == "past":
        return reverse("documents:expired")
    return reverse("documents:expiring")


def _admin_url(document):
    # Unsaved documents have no admin page
    if document.pk is None:
        return ""
    return reverse("admin:documents_document_change", args=[document.pk])


# ============================================================
# OWNER
# ============================================================

def build_owner_notice(document, offset):
    label = document.human_label
    phase = _phase(offset)

    if phase == "past":
        message = (
            f'Your document "{label}" expired {abs(offset)} day(s) ago '
            f"and needs to be updated!"
        )
        subject = f"Document Expired: {label}"
        lead = format_html(
            'Your document "<strong>{}</strong>" expired '
            "<strong>{} day(s) ago</strong>.",
            label, abs(offset),
        )
    elif phase == "today":
        message = f'Your document "{label}" expires TODAY!'
        subject = f"Document Expires Today: {label}"
        lead = format_html(
            'Your document "<strong>{}</strong>" expires <strong>today</strong>.',
            label,
        )
    else:
        message = f'Your document "{label}" expires in {offset} day(s).'
        subject = f"Document Expiring Soon: {label}"
        lead = format_html(
            'Your document "<strong>{}</strong>" will expire in '
            "<strong>{} day(s)</strong>.",
            label, offset,
        )

    owner = document.owner
    html = format_html(
        "<h2>Document Expiration Warning</h2>"
        "<p>Hello {},</p>"
        "<p>{}</p>"
        "<p><strong>Expiration Date:</strong> {}</p>"
        "<p>Please log in to your dashboard to update this document.</p>",
        owner.display_name if owner else "there",
        lead,
        _expiry_date(document),
    )

    return Notice(
        title=_title(OWNER_TITLES[phase], label),
        message=message,
        priority=_priority(offset),
        email_subject=subject,
        email_html=html,
        action_url=_owner_url(phase),
    )


# ============================================================
# ADMIN
# ============================================================

def build_admin_notice(document, offset, owner):
    label = document.human_label
    owner_name = owner.display_name
    phase = _phase(offset)

    if phase == "past":
        message = (
            f'{owner_name}\'s document "{label}" expired '
            f"{abs(offset)} day(s) ago!"
        )
        expiry_text = f"{abs(offset)} day(s) AGO"
        subject = f"User Document EXPIRED: {owner_name}"
        alert = "A user's document has expired and needs immediate attention:"
    elif phase == "today":
        message = f'{owner_name}\'s document "{label}" expires TODAY!'
        expiry_text = "TODAY"
        subject = f"User Document Expiring: {owner_name}"
        alert = "A user's document is expiring soon:"
    else:
        message = f'{owner_name}\'s document "{label}" expires in {offset} day(s).'
        expiry_text = f"{offset} day(s)"
        subject = f"User Document Expiring: {owner_name}"
        alert = "A user's document is expiring soon:"

    html = format_html(
        "<h2>Document Expiration Alert</h2>"
        "<p>{}</p>"
        "<p><strong>User:</strong> {} ({})</p>"
        "<p><strong>Document:</strong> {}</p>"
        "<p><strong>Expires in:</strong> {}</p>"
        "<p><strong>Expiration Date:</strong> {}</p>"
        "<p>Please follow up with the user to ensure the document is updated.</p>",
        alert,
        owner_name,
        owner.email or "no email on file",
        label,
        expiry_text,
        _expiry_date(document),
    )

    return Notice(
        title=_title(ADMIN_TITLES[phase], f"{owner_name} - {label}"),
        message=message,
        priority=_priority(offset),
        email_subject=subject,
        email_html=html,
        action_url=_admin_url(document),
    )
