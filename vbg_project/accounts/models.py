from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    class LoginRole(models.TextChoices):
        ADMIN = "admin", "Admin"
        USER = "user", "User"

    position_title = models.CharField(max_length=150, blank=True)

    login_role = models.CharField(
        max_length=20,
        choices=LoginRole.choices,
        default=LoginRole.USER,
        db_index=True,
    )

    contact_number = models.CharField(max_length=20, blank=True)

    @property
    def is_admin(self):
        return self.login_role == self.LoginRole.ADMIN

    @property
    def display_name(self):
        return self.get_full_name() or self.username

    def __str__(self):
        full = self.get_full_name()
        return f"{full} ({self.username})" if full else self.username
