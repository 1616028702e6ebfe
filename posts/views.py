# posts/views.py

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required, user_passes_test
from django.core.exceptions import PermissionDenied
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from users.models import User
from . import services
from .forms import DisapproveForm, PostCreationForm, PostImageForm, StatusUpdateForm
from .models import Post
from .storage import ImageUploadError, image_url, upload_image

logger = logging.getLogger(__name__)


# --- Role Check Functions ---
def is_admin(user):
    return user.is_authenticated and user.role == User.Role.ADMIN


def is_user(user):
    return user.is_authenticated and user.role == User.Role.USER


def filter_posts(queryset, params):
    """
    Applies the dashboard filters: ?status=, ?social= and a free text ?q=
    matched against heading, status and social platforms.
    """
    status_filter = params.get('status') or 'all'
    social_filter = params.get('social') or ''
    query = (params.get('q') or '').strip()

    if status_filter != 'all' and status_filter in Post.Status.values:
        queryset = queryset.filter(status=status_filter)
    else:
        status_filter = 'all'

    if social_filter:
        queryset = queryset.filter(social__icontains=social_filter)

    if query:
        queryset = queryset.filter(
            Q(heading__icontains=query) | Q(status__icontains=query) | Q(social__icontains=query)
        )

    filters = {'status': status_filter, 'social': social_filter, 'q': query}
    return queryset, filters


# =============================================================================
# Admin
# =============================================================================

@user_passes_test(is_admin, login_url='core:login')
def admin_dashboard_view(request):
    """
    All posts across users, filterable by status and platform, with
    per-status counts and the user roster.
    """
    base_queryset = Post.objects.select_related('user').order_by('-created_at')
    posts, filters = filter_posts(base_queryset, request.GET)

    context = {
        'posts': posts,
        'status_counts': Post.status_counts(base_queryset),
        'filters': filters,
        'statuses': Post.Status.choices,
        'platforms': Post.SOCIAL_PLATFORMS,
        'users': User.objects.all().order_by('-created_at'),
    }
    return render(request, 'posts/admin_dashboard.html', context)


@user_passes_test(is_admin, login_url='core:login')
def create_post_view(request):
    """
    Admin creates a draft post for a user. ?user=<id> pre-selects the user.
    """
    if request.method == 'POST':
        form = PostCreationForm(request.POST)
        if form.is_valid():
            try:
                post = services.create_post(
                    user=form.cleaned_data['user'],
                    created_by=request.user,
                    **form.content()
                )
            except services.PostWorkflowError as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, f'Draft "{post.heading}" created for {post.user.username}.')
                return redirect('posts_admin:dashboard')
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        initial = {}
        if request.GET.get('user'):
            initial['user'] = request.GET.get('user')
        form = PostCreationForm(initial=initial)

    return render(request, 'posts/create_post.html', {'form': form})


@user_passes_test(is_admin, login_url='core:login')
def view_post_view(request, post_id):
    post = get_object_or_404(Post.objects.select_related('user'), id=post_id)
    context = {
        'post': post,
        'status_form': StatusUpdateForm() if post.status == Post.Status.PENDING else None,
    }
    return render(request, 'posts/post_detail.html', context)


@user_passes_test(is_admin, login_url='core:login')
def edit_post_view(request, post_id):
    """
    Admin edits a post. Status follows the edit: a rejected post is resubmitted,
    attaching an image submits a draft, removing it withdraws the post.
    """
    post = get_object_or_404(Post, id=post_id)

    if not post.is_editable:
        messages.error(request, 'Posted posts can no longer be edited.')
        return redirect('posts_admin:view_post', post_id=post.id)

    if request.method == 'POST':
        form = PostImageForm(request.POST, request.FILES, instance=post)
        if form.is_valid():
            try:
                services.edit_post(post, editor=request.user, image=form.image_change(), **form.content())
            except (services.PostWorkflowError, ImageUploadError) as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, f'Post "{post.heading}" has been updated. Status: {post.get_status_display()}.')
                return redirect('posts_admin:view_post', post_id=post.id)
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = PostImageForm(instance=post)

    return render(request, 'posts/edit_post.html', {'form': form, 'post': post})


@user_passes_test(is_admin, login_url='core:login')
@require_POST
def update_post_status_view(request, post_id):
    """
    Admin approves or rejects a pending post.
    """
    post = get_object_or_404(Post, id=post_id)
    form = StatusUpdateForm(request.POST)

    if not form.is_valid():
        for errors in form.errors.values():
            for error in errors:
                messages.error(request, error)
        return redirect('posts_admin:view_post', post_id=post.id)

    try:
        services.update_post_status(
            post,
            form.cleaned_data['status'],
            comment=form.cleaned_data['comment'],
            reviewer=request.user,
        )
    except services.PostWorkflowError as exc:
        messages.error(request, str(exc))
    else:
        if post.status == Post.Status.APPROVED:
            messages.success(request, f'Post "{post.heading}" has been approved.')
        else:
            messages.warning(request, f'Post "{post.heading}" has been rejected with feedback.')

    return redirect('posts_admin:view_post', post_id=post.id)


@user_passes_test(is_admin, login_url='core:login')
@require_POST
def mark_post_posted_view(request, post_id):
    post = get_object_or_404(Post, id=post_id)
    try:
        services.mark_posted(post, actor=request.user)
    except services.PostWorkflowError as exc:
        messages.info(request, str(exc))
    else:
        messages.success(request, f'Post "{post.heading}" is marked as posted.')
    return redirect('posts_admin:view_post', post_id=post.id)


@user_passes_test(is_admin, login_url='core:login')
def delete_post_view(request, post_id):
    post = get_object_or_404(Post, id=post_id)

    if request.method == 'POST':
        heading = post.heading
        try:
            services.delete_post(post, actor=request.user)
        except services.PostWorkflowError as exc:
            messages.error(request, str(exc))
            return redirect('posts_admin:view_post', post_id=post.id)
        messages.success(request, f'Post "{heading}" has been deleted successfully.')

    # fallback (GET access) – just redirect to list
    return redirect('posts_admin:dashboard')


# =============================================================================
# Assigned user
# =============================================================================

@user_passes_test(is_user, login_url='core:login')
def user_dashboard_view(request):
    """
    The user's posts. Drafts are kept apart: they are waiting for an image
    and are not up for review yet.
    """
    own_posts = Post.objects.filter(user=request.user).order_by('-created_at')
    reviewable = own_posts.exclude(status=Post.Status.DRAFT)
    posts, filters = filter_posts(reviewable, request.GET)

    context = {
        'posts': posts,
        'drafts': own_posts.filter(status=Post.Status.DRAFT),
        'status_counts': Post.status_counts(reviewable),
        'filters': filters,
        'statuses': [choice for choice in Post.Status.choices if choice[0] != Post.Status.DRAFT],
        'platforms': Post.SOCIAL_PLATFORMS,
        'disapprove_form': DisapproveForm(),
    }
    return render(request, 'posts/user_dashboard.html', context)


@user_passes_test(is_user, login_url='core:login')
def user_post_detail_view(request, post_id):
    post = get_object_or_404(Post, id=post_id, user=request.user)
    context = {
        'post': post,
        'disapprove_form': DisapproveForm(),
    }
    return render(request, 'posts/user_post_detail.html', context)


@user_passes_test(is_user, login_url='core:login')
def user_create_post_view(request):
    if request.method == 'POST':
        form = PostImageForm(request.POST, request.FILES)
        if form.is_valid():
            image = form.cleaned_data.get('image') or form.cleaned_data.get('image_path') or None
            try:
                post = services.create_user_post(request.user, image=image, **form.content())
            except (services.PostWorkflowError, ImageUploadError) as exc:
                messages.error(request, str(exc))
            else:
                if post.status == Post.Status.PENDING:
                    messages.success(request, f'Post "{post.heading}" submitted for review.')
                else:
                    messages.info(request, f'Post "{post.heading}" saved as a draft. Attach an image to submit it.')
                return redirect('posts:user_dashboard')
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = PostImageForm()

    return render(request, 'posts/user_post_form.html', {'form': form})


@user_passes_test(is_user, login_url='core:login')
def user_edit_post_view(request, post_id):
    """
    The assigned user edits their post or attaches its image.
    """
    post = get_object_or_404(Post, id=post_id)

    if request.method == 'POST':
        form = PostImageForm(request.POST, request.FILES, instance=post)
        if form.is_valid():
            try:
                services.edit_user_post(post, request.user, image=form.image_change(), **form.content())
            except PermissionDenied as exc:
                messages.error(request, str(exc))
                return redirect('posts:user_dashboard')
            except (services.PostWorkflowError, ImageUploadError) as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, f'Post "{post.heading}" has been updated. Status: {post.get_status_display()}.')
                return redirect('posts:user_dashboard')
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        if post.user_id != request.user.pk:
            messages.error(request, "You don't have permission to update this post")
            return redirect('posts:user_dashboard')
        form = PostImageForm(instance=post)

    return render(request, 'posts/user_post_form.html', {'form': form, 'post': post})


@user_passes_test(is_user, login_url='core:login')
@require_POST
def user_approve_post_view(request, post_id):
    post = get_object_or_404(Post, id=post_id)
    try:
        services.approve_post(post, request.user)
    except (PermissionDenied, services.PostWorkflowError) as exc:
        messages.error(request, str(exc))
    else:
        messages.success(request, 'Post approved successfully')
    return redirect('posts:user_dashboard')


@user_passes_test(is_user, login_url='core:login')
@require_POST
def user_disapprove_post_view(request, post_id):
    post = get_object_or_404(Post, id=post_id)
    form = DisapproveForm(request.POST)

    if not form.is_valid():
        messages.error(request, 'Comment is required for disapproval')
        return redirect('posts:user_dashboard')

    try:
        services.disapprove_post(post, request.user, form.cleaned_data['comment'])
    except (PermissionDenied, services.PostWorkflowError) as exc:
        messages.error(request, str(exc))
    else:
        messages.warning(request, 'Post disapproved successfully')
    return redirect('posts:user_dashboard')


@user_passes_test(is_user, login_url='core:login')
@require_POST
def user_delete_post_view(request, post_id):
    post = get_object_or_404(Post, id=post_id)
    try:
        services.delete_user_post(post, request.user)
    except (PermissionDenied, services.PostWorkflowError) as exc:
        messages.error(request, str(exc))
    else:
        messages.success(request, 'Post deleted successfully')
    return redirect('posts:user_dashboard')


# =============================================================================
# Upload
# =============================================================================

@login_required
@require_POST
def upload_image_view(request):
    """
    Stores one image (multipart field ``file``) and returns its URL and the
    storage path to hand back in a post form's ``image_path``.
    """
    try:
        path = upload_image(request.FILES.get('file'))
    except ImageUploadError as exc:
        return JsonResponse({'success': False, 'error': str(exc)}, status=exc.status_code)

    return JsonResponse({'success': True, 'url': image_url(path), 'path': path})
