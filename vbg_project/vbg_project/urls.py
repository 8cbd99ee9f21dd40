from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # DJANGO ADMIN (STAFF ONLY)
    path("vbg/django/admin/", admin.site.urls),

    # DOCUMENT EXPIRATION NOTIFIER
    path("", include("notifications.urls")),

    # DOCUMENTS
    path("documents/", include("documents.urls")),
]
