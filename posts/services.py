"""
Post lifecycle operations.

Every status change goes through this module so the rules live in one place:

    draft --image attached--> pending --approve--> approved --mark posted--> posted
                                   `--reject (comment)--> rejected --edit--> pending

Views call these functions and turn PostWorkflowError / PermissionDenied
into flash messages.
"""
import logging
from typing import Optional, Union

from django.core.exceptions import PermissionDenied
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.utils import timezone

from .models import Post
from .storage import delete_image, is_post_image, upload_image

logger = logging.getLogger(__name__)

# Marker for "leave the image alone" in edit_post()
UNCHANGED = object()

EDITABLE_FIELDS = ('heading', 'caption', 'hookline', 'cta', 'hashtags', 'social')
REQUIRED_FIELDS = ('heading', 'caption', 'hookline', 'cta')


class PostWorkflowError(Exception):
    """An operation that the post's current status does not allow."""


def _check_required(fields):
    missing = [name for name in REQUIRED_FIELDS if not (fields.get(name) or '').strip()]
    if missing:
        verb = 'is' if len(missing) == 1 else 'are'
        raise PostWorkflowError(f"{', '.join(missing)} {verb} required")


def _move(post, status):
    if post.status == status:
        return
    if not post.can_transition_to(status):
        raise PostWorkflowError(
            f'Cannot move post from "{post.status}" to "{status}".'
        )
    logger.info("Post %s: %s -> %s", post.pk, post.status, status)
    post.status = status


def _ensure_owner(post, user, verb):
    if post.user_id != user.pk:
        logger.warning("User %s tried to %s post %s owned by %s", user.pk, verb, post.pk, post.user_id)
        raise PermissionDenied(f"You don't have permission to {verb} this post")


def status_after_edit(post, had_image, has_image):
    """
    Status a post should take after its content was edited.

    Returns a ``(status, clear_comment)`` pair. An edited rejected post is
    resubmitted (or falls back to draft if its image was removed); otherwise
    attaching the first image submits a draft and removing it withdraws the post.
    """
    if post.status == Post.Status.REJECTED:
        return (Post.Status.PENDING if has_image else Post.Status.DRAFT), True
    if has_image and not had_image:
        return Post.Status.PENDING, False
    if had_image and not has_image:
        return Post.Status.DRAFT, False
    return post.status, False


def _resolve_image(image, post):
    """UploadedFile -> stored path; path string -> validated path; None -> removal."""
    if image is None or image == '':
        return None
    if isinstance(image, UploadedFile):
        return upload_image(image)
    if not is_post_image(image):
        raise PostWorkflowError("Uploaded image could not be found.")
    # A stored image belongs to one post; deleting it must not strip another post.
    others = Post.objects.filter(image=image)
    if post.pk:
        others = others.exclude(pk=post.pk)
    if others.exists():
        logger.warning("Refused image %s for post %s: already attached elsewhere", image, post.pk)
        raise PostWorkflowError("This image is already attached to another post.")
    return image


def _save(post, uploaded):
    """Save the post; an image stored for this save is removed if it fails."""
    try:
        post.save()
    except Exception:
        if uploaded:
            delete_image(uploaded)
        raise


# --- Admin operations ---

def create_post(*, user, created_by=None, **fields):
    """
    Create a post for ``user``. Admin-created posts always start as drafts;
    the assigned user submits them by attaching an image.
    """
    _check_required(fields)
    post = Post(user=user, created_by=created_by, status=Post.Status.DRAFT)
    for name in EDITABLE_FIELDS:
        if name in fields:
            setattr(post, name, fields[name])
    post._actor = created_by
    post.save()
    logger.info("Post %s created for user %s", post.pk, user.pk)
    return post


@transaction.atomic
def edit_post(post, *, editor=None, image=UNCHANGED, **fields):
    """
    Update a post's content and, optionally, its image.

    ``image`` may be an UploadedFile, the storage path returned by the
    upload endpoint, None to remove the current image, or UNCHANGED.
    """
    if not post.is_editable:
        raise PostWorkflowError("Posted posts can no longer be edited.")

    merged = {name: getattr(post, name) for name in REQUIRED_FIELDS}
    merged.update({k: v for k, v in fields.items() if k in REQUIRED_FIELDS})
    _check_required(merged)

    had_image = post.has_image
    old_image = post.image.name if post.image else None

    for name in EDITABLE_FIELDS:
        if name in fields:
            setattr(post, name, fields[name])

    uploaded = None
    if image is not UNCHANGED:
        new_path = _resolve_image(image, post)
        if isinstance(image, UploadedFile):
            uploaded = new_path
        post.image = new_path or None

    status, clear_comment = status_after_edit(post, had_image, post.has_image)
    _move(post, status)
    if clear_comment:
        post.comment = None

    post._actor = editor
    _save(post, uploaded)

    new_image = post.image.name if post.image else None
    if old_image and old_image != new_image:
        transaction.on_commit(lambda: delete_image(old_image))

    return post


def update_post_status(post, status, comment=None, reviewer=None):
    """
    Approve or reject a pending post. A rejection must carry a comment;
    an approval clears any previous one.
    """
    if status not in (Post.Status.APPROVED, Post.Status.REJECTED):
        raise PostWorkflowError("Status must be either 'approved' or 'rejected'")

    if post.status != Post.Status.PENDING:
        raise PostWorkflowError(
            f'Cannot update status. Post is currently "{post.status}". '
            'Only pending posts can be approved or rejected.'
        )

    comment = (comment or '').strip()
    if status == Post.Status.REJECTED and not comment:
        raise PostWorkflowError("A comment is required when rejecting a post.")

    _move(post, status)
    post.comment = comment if status == Post.Status.REJECTED else None
    post._actor = reviewer
    post.save(update_fields=['status', 'comment', 'updated_at'])
    return post


def mark_posted(post, actor=None):
    if post.status != Post.Status.APPROVED:
        raise PostWorkflowError(
            f'Only approved posts can be marked as posted. Post is currently "{post.status}".'
        )
    _move(post, Post.Status.POSTED)
    post.posted_at = timezone.now()
    post._actor = actor
    post.save(update_fields=['status', 'posted_at', 'updated_at'])
    return post


def delete_post(post, actor=None):
    """Delete a post; its stored image is removed by the post_delete signal."""
    if post.status == Post.Status.POSTED:
        raise PostWorkflowError("Posted posts cannot be deleted.")
    logger.info("Post %s deleted by %s", post.pk, getattr(actor, 'pk', None))
    post._actor = actor
    post.delete()


# --- Operations performed by the assigned user ---

def approve_post(post, user):
    _ensure_owner(post, user, 'approve')
    return update_post_status(post, Post.Status.APPROVED, reviewer=user)


def disapprove_post(post, user, comment):
    _ensure_owner(post, user, 'disapprove')
    if not (comment or '').strip():
        raise PostWorkflowError("Comment is required for disapproval")
    return update_post_status(post, Post.Status.REJECTED, comment=comment, reviewer=user)


def create_user_post(user, image: Optional[Union[UploadedFile, str]] = None, **fields):
    """
    A post the user writes for themselves; it goes straight to review when
    an image comes with it.
    """
    _check_required(fields)
    post = Post(user=user, created_by=None)
    for name in EDITABLE_FIELDS:
        if name in fields:
            setattr(post, name, fields[name])
    path = _resolve_image(image, post) if image else None
    post.image = path
    post.status = Post.Status.PENDING if path else Post.Status.DRAFT
    post._actor = user
    _save(post, path if isinstance(image, UploadedFile) else None)
    logger.info("User %s created post %s (%s)", user.pk, post.pk, post.status)
    return post


def edit_user_post(post, user, image=UNCHANGED, **fields):
    _ensure_owner(post, user, 'update')
    return edit_post(post, editor=user, image=image, **fields)


def delete_user_post(post, user):
    _ensure_owner(post, user, 'delete')
    delete_post(post, actor=user)
