# core/signals.py

import logging

from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver
from posts.models import Post
from posts.storage import delete_image
from .models import AuditLog
from .session import store_session_user

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def log_user_login(sender, request, user, **kwargs):
    """
    Put the user's identity in the session and record the login.
    """
    if request is not None and hasattr(request, 'session'):
        store_session_user(request, user)

    AuditLog.objects.create(
        user=user,
        action="user_login",
        details=f"User {user.username} logged in."
    )
    logger.info("User %s logged in (%s)", user.username, user.role)


@receiver(user_logged_out)
def log_user_logout(sender, request, user, **kwargs):
    if user is not None:
        logger.info("User %s logged out", user.username)


@receiver(post_save, sender=Post)
def post_save_receiver(sender, instance, created, **kwargs):
    """
    Create AuditLog entries for post changes. Services tag the acting user
    on the instance as ``_actor``.
    """
    post = instance
    actor = getattr(post, '_actor', None)
    update_fields = kwargs.get('update_fields')

    if created:
        action = "post_create"
        details = f"Post '{post.heading}' created for {post.user.username} as {post.status}."
    elif update_fields and 'status' in update_fields:
        action = f"post_{post.status}"
        details = f"Post '{post.heading}' is now {post.get_status_display()}."
        if post.status == Post.Status.REJECTED and post.comment:
            details += f" Comment: {post.comment}"
    else:
        action = "post_edit"
        details = f"Post '{post.heading}' was updated. Status: {post.get_status_display()}."

    AuditLog.objects.create(user=actor, action=action, post_id=post.pk, details=details)


@receiver(post_delete, sender=Post)
def post_delete_receiver(sender, instance, **kwargs):
    """
    Remove the stored image of a deleted post, including posts removed
    through a user cascade. The file goes once the delete commits.
    """
    if instance.image:
        path = instance.image.name
        transaction.on_commit(lambda: delete_image(path))
    AuditLog.objects.create(
        user=getattr(instance, '_actor', None),
        action="post_delete",
        post_id=instance.pk,
        details=f"Post '{instance.heading}' (#{instance.pk}) was deleted."
    )
