from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from .models import Notification, NotificationPreference


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """
    Admin configuration for in-app notifications
    """

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "id",
        "recipient",
        "category",
        "priority",
        "colored_title",
        "is_read",
        "created_at",
    )

    list_filter = (
        "category",
        "priority",
        "is_read",
        "created_on",
    )

    search_fields = (
        "title",
        "message",
        "recipient__username",
        "recipient__first_name",
        "recipient__last_name",
    )

    ordering = ("-created_at",)
    list_per_page = 25

    # =====================================================
    # FIELDSETS (DETAIL VIEW)
    # =====================================================
    fieldsets = (
        ("Recipient", {
            "fields": ("recipient",),
        }),
        ("Classification", {
            "fields": ("category", "priority"),
        }),
        ("Content", {
            "fields": ("title", "message"),
        }),
        ("Context", {
            "fields": ("document", "action_url"),
        }),
        ("Status", {
            "fields": ("is_read", "read_at", "created_at", "created_on"),
        }),
    )

    readonly_fields = (
        "created_at",
        "created_on",
        "read_at",
    )

    actions = (
        "mark_as_read",
        "mark_as_unread",
    )

    # =====================================================
    # CUSTOM DISPLAY HELPERS
    # =====================================================
    def colored_title(self, obj):
        """
        Color the title based on priority for fast scanning.
        """
        color_map = {
            Notification.Priority.INFO: "#2563eb",     # blue
            Notification.Priority.WARNING: "#f59e0b",  # orange
            Notification.Priority.DANGER: "#dc2626",   # red
        }

        color = color_map.get(obj.priority, "#000000")

        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            color,
            obj.title,
        )

    colored_title.short_description = "Title"

    # =====================================================
    # ADMIN ACTIONS
    # =====================================================
    @admin.action(description="Mark selected notifications as READ")
    def mark_as_read(self, request, queryset):
        queryset.filter(is_read=False).update(is_read=True, read_at=timezone.now())

    @admin.action(description="Mark selected notifications as UNREAD")
    def mark_as_unread(self, request, queryset):
        queryset.update(is_read=False, read_at=None)


@admin.register(NotificationPreference)
class NotificationPreferenceAdmin(admin.ModelAdmin):
    list_display = ("user", "preferences", "updated_at")
    search_fields = ("user__username", "user__email")
    readonly_fields = ("updated_at",)
