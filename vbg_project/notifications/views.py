import json
import logging

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods, require_POST

from notifications.models import Notification, NotificationPreference
from notifications.scheduler import get_scheduler

logger = logging.getLogger(__name__)


def _forbidden():
    return JsonResponse(
        {"success": False, "error": "Admin access required"},
        status=403
    )


@login_required
@require_POST
def run_expiration_check(request):
    """
    Admin-triggered expiration check.

    Runs one full cycle synchronously and returns its summary.
    Running it again on the same day reports zero new notifications.
    """
    if not request.user.is_admin:
        return _forbidden()

    logger.info("Manually triggering expiry check by admin: %s", request.user.email)

    try:
        summary = get_scheduler().run_now()
    except Exception:
        logger.exception("Error running expiry check")
        return JsonResponse(
            {"success": False, "error": "Failed to check expiring documents"},
            status=500
        )

    return JsonResponse({"success": True, **summary.as_dict()})


@login_required
@require_http_methods(["GET", "POST"])
def notification_preferences(request):
    """
    Read or update the current user's notification preferences.

    GET  -> {type: bool, ...} (everything allowed when nothing is stored)
    POST -> JSON body {type: bool, ...}; unknown types are rejected
    """
    preference = (
        NotificationPreference.objects
        .filter(user=request.user)
        .first()
    )

    if request.method == "GET":
        if preference is None:
            preference = NotificationPreference(user=request.user)
        return JsonResponse(preference.as_dict())

    try:
        payload = json.loads(request.body or b"{}")
    except ValueError:
        return JsonResponse(
            {"success": False, "error": "Request body must be JSON"},
            status=400
        )

    if not isinstance(payload, dict):
        return JsonResponse(
            {"success": False, "error": "Request body must be a JSON object"},
            status=400
        )

    known = set(Notification.Category.values)
    unknown = sorted(set(payload) - known)
    if unknown:
        return JsonResponse(
            {"success": False, "error": f"Unknown notification types: {', '.join(unknown)}"},
            status=400
        )

    if preference is None:
        preference = NotificationPreference(user=request.user)

    preference.preferences = {
        **preference.preferences,
        **{key: bool(value) for key, value in payload.items()},
    }
    preference.save()

    return JsonResponse({
        "success": True,
        "message": "Notification preferences updated successfully",
        "preferences": preference.as_dict(),
    })
