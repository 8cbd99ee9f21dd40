from django.urls import path

from . import views

app_name = "documents"

urlpatterns = [
    path("expiring/", views.expiring_documents, name="expiring"),
    path("expired/", views.expired_documents, name="expired"),
]
