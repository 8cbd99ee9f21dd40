"""
notifications/management/commands/check_expiring_documents.py

Runs one document expiration check from the command line.

Safe to run any number of times: notifications are deduplicated
per recipient and title for the current local day.
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from notifications.scheduler import get_scheduler


class Command(BaseCommand):
    help = "Notify owners and admins about expiring and expired documents"

    def handle(self, *args, **options):
        now = timezone.localtime()

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Starting document expiration check"
            )
        )

        summary = get_scheduler().run_now()

        self.stdout.write(
            self.style.SUCCESS(
                f"[{now:%Y-%m-%d %H:%M:%S}] Completed: {summary}"
            )
        )

        if summary.data_access_failures or summary.emails_failed:
            self.stdout.write(
                self.style.WARNING(
                    f"{summary.data_access_failures} data access failures, "
                    f"{summary.emails_failed} email failures"
                )
            )
