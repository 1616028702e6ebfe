# users/models.py

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class User(AbstractUser):
    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        USER = 'user', 'User'

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    class Meta:
        ordering = ['-created_at']

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN

    def session_payload(self):
        """The identity stored in the session cookie."""
        return {'id': self.pk, 'username': self.username, 'role': self.role}

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"
