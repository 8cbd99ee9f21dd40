import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Document",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("original_name", models.CharField(max_length=255)),
                ("description", models.CharField(blank=True, max_length=255)),
                ("document_type", models.CharField(blank=True, max_length=100)),
                ("expires_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("status", models.CharField(choices=[("active", "Active"), ("deleted", "Deleted")], db_index=True, default="active", max_length=20)),
                ("uploaded_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("owner", models.ForeignKey(blank=True, help_text="User who uploaded the document", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="documents", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["expires_at"],
                "indexes": [models.Index(fields=["status", "expires_at"], name="document_status_expiry_idx")],
            },
        ),
    ]
