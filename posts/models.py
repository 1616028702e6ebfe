# posts/models.py

from django.conf import settings
from django.db import models

from .storage import unique_image_name


def split_csv(value):
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(',')
    return [item.strip() for item in items if item and item.strip()]


def post_image_path(instance, filename):
    return unique_image_name(filename)


class Post(models.Model):
    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'
        POSTED = 'posted', 'Posted'

    # Status moves a post may make; POSTED is terminal.
    TRANSITIONS = {
        Status.DRAFT: {Status.PENDING},
        Status.PENDING: {Status.DRAFT, Status.APPROVED, Status.REJECTED},
        Status.APPROVED: {Status.DRAFT, Status.POSTED},
        Status.REJECTED: {Status.PENDING, Status.DRAFT},
        Status.POSTED: set(),
    }

    SOCIAL_PLATFORMS = ['Facebook', 'GBP', 'LinkedIn']

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='posts',
        help_text="The user this post is assigned to"
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_posts',
        limit_choices_to={'role': 'admin'}
    )

    heading = models.CharField(max_length=255)
    caption = models.TextField(help_text="The social media post content")
    hookline = models.CharField(max_length=255)
    cta = models.CharField(max_length=255, verbose_name="Call to action")
    hashtags = models.JSONField(default=list, blank=True)
    social = models.JSONField(default=list, blank=True, help_text="Platforms this post targets")
    image = models.ImageField(upload_to=post_image_path, blank=True, null=True)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    comment = models.TextField(blank=True, null=True, help_text="Reason given when the post was rejected")
    posted_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.heading} for {self.user.username} ({self.get_status_display()})"

    @property
    def has_image(self):
        return bool(self.image)

    @property
    def image_url(self):
        return self.image.url if self.image else None

    @property
    def is_editable(self):
        return self.status != self.Status.POSTED

    def can_transition_to(self, status):
        return status in self.TRANSITIONS.get(self.status, set())

    @classmethod
    def status_counts(cls, queryset):
        counts = {'all': queryset.count()}
        for value, _label in cls.Status.choices:
            counts[value] = queryset.filter(status=value).count()
        return counts
