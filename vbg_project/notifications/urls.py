from django.urls import path

from . import views

app_name = "notifications"

urlpatterns = [
    path("expiration-check/", views.run_expiration_check, name="expiration_check"),
    path("notifications/preferences/", views.notification_preferences, name="preferences"),
]
