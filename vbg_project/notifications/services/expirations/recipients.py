import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from notifications.exceptions import DataAccessError

logger = logging.getLogger(__name__)

User = get_user_model()


class UserStore:
    def get_user(self, user_id):
        if user_id is None:
            return None
        try:
            return User.objects.filter(pk=user_id, is_active=True).first()
        except DatabaseError as exc:
            raise DataAccessError(f"Could not load user {user_id}: {exc}") from exc

    def list_admins(self):
        try:
            return list(
                User.objects
                .filter(login_role=User.LoginRole.ADMIN, is_active=True)
                .order_by("id")
            )
        except DatabaseError as exc:
            raise DataAccessError(f"Could not load admin users: {exc}") from exc


class Recipients:
    def __init__(self, owner, admins, admin_error=None):
        self.owner = owner
        self.admins = admins
        # Set when the admin list could not be loaded; the owner is still notified
        self.admin_error = admin_error

    def __iter__(self):
        yield self.owner, True
        for admin in self.admins:
            yield admin, False

    def __len__(self):
        return 1 + len(self.admins)


class RecipientResolver:
    """
    Resolves who hears about a document: its owner plus every admin.

    The admin list is loaded once per resolver, and a resolver lives
    for a single cycle, so promotions and demotions show up on the
    next run.
    """

    def __init__(self, store=None):
        self.store = store or UserStore()
        self._admins = None

    def admins(self):
        if self._admins is None:
            self._admins = self.store.list_admins()
        return self._admins

    def resolve(self, document):
        owner = self.store.get_user(document.owner_id)

        if owner is None:
            logger.warning(
                "Document %s (%s) has no active owner (owner_id=%s), skipping",
                document.pk, document.human_label, document.owner_id
            )
            return None

        try:
            admins = self.admins()
        except DataAccessError as exc:
            logger.error(
                "Could not load admins for document %s, notifying owner only: %s",
                document.pk, exc
            )
            return Recipients(owner=owner, admins=[], admin_error=exc)

        # An admin who owns the document only gets the owner notice
        admins = [admin for admin in admins if admin.pk != owner.pk]

        return Recipients(owner=owner, admins=admins)
