from datetime import timedelta

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from .models import Document


EXPIRING_WINDOW_DAYS = 30


def _serialize(document, now):
    days_left = (
        timezone.localdate(document.expires_at) - timezone.localdate(now)
    ).days

    return {
        "id": document.id,
        "name": document.human_label,
        "original_name": document.original_name,
        "document_type": document.document_type,
        "expires_at": document.expires_at.isoformat(),
        "days_until_expiry": days_left,
    }


@login_required
@require_GET
def expiring_documents(request):
    """
    The current user's documents expiring within the next 30 days.
    """
    now = timezone.now()

    qs = (
        Document.objects
        .live()
        .filter(
            owner=request.user,
            expires_at__gte=now,
            expires_at__lte=now + timedelta(days=EXPIRING_WINDOW_DAYS),
        )
        .order_by("expires_at")
    )

    return JsonResponse(
        [_serialize(doc, now) for doc in qs],
        safe=False
    )


@login_required
@require_GET
def expired_documents(request):
    now = timezone.now()

    qs = (
        Document.objects
        .live()
        .filter(
            owner=request.user,
            expires_at__lt=now,
        )
        .order_by("-expires_at")
    )

    return JsonResponse(
        [_serialize(doc, now) for doc in qs],
        safe=False
    )
