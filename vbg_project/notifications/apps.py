from django.apps import AppConfig
import os
import sys


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"

    def ready(self):
        # --------------------------------------------------
        # Start the expiration scheduler SAFELY
        # --------------------------------------------------
        # Under runserver only the autoreload child serves requests;
        # everywhere else (wsgi, --noreload) ENABLE_SCHEDULER decides
        if "runserver" in sys.argv and os.environ.get("RUN_MAIN") != "true":
            if "--noreload" not in sys.argv:
                return

        from .scheduler import start_scheduler
        start_scheduler()
