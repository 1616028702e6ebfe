# core/models.py

from django.conf import settings
from django.db import models


class AuditLog(models.Model):
    """
    One line of the activity trail: logins, post edits and review decisions.
    ``post_id`` is kept as a plain number so entries outlive deleted posts.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_entries',
        help_text="Who acted; empty for system changes"
    )
    action = models.CharField(max_length=50, db_index=True, help_text="e.g. 'user_login', 'post_edit', 'post_rejected'")
    post_id = models.PositiveIntegerField(null=True, blank=True)
    details = models.TextField(blank=True, default='')
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-timestamp']

    def __str__(self):
        actor = self.user.username if self.user else "system"
        target = f" post #{self.post_id}" if self.post_id else ""
        return f"{self.timestamp:%Y-%m-%d %H:%M} {actor}: {self.action}{target}"
