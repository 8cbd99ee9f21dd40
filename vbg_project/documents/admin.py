from django.contrib import admin

from .models import Document


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "original_name",
        "description",
        "owner",
        "expires_at",
        "status",
        "uploaded_at",
    )

    list_filter = (
        "status",
        "document_type",
        "expires_at",
    )

    search_fields = (
        "original_name",
        "description",
        "owner__username",
        "owner__email",
    )

    ordering = ("expires_at",)
    list_per_page = 25
