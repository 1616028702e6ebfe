# users/views.py

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import user_passes_test
from django.shortcuts import get_object_or_404, redirect, render

from posts.models import Post
from .forms import UserForm
from .models import User

logger = logging.getLogger(__name__)


def is_admin(user):
    return user.is_authenticated and user.role == User.Role.ADMIN


@user_passes_test(is_admin, login_url='core:login')
def user_list_view(request):
    users = User.objects.all().order_by('-created_at')
    return render(request, 'users/user_list.html', {'users': users})


@user_passes_test(is_admin, login_url='core:login')
def user_create_view(request):
    """
    Creates a new account with the default password.
    """
    if request.method == 'POST':
        form = UserForm(request.POST)
        if form.is_valid():
            user = form.save()
            logger.info("Admin %s created user %s (%s)", request.user.username, user.username, user.role)
            messages.success(request, f'User "{user.username}" created. Default password: {settings.DEFAULT_USER_PASSWORD}')
            return redirect('users:user_list')
        messages.error(request, 'Please correct the errors below.')
    else:
        form = UserForm()

    return render(request, 'users/user_form.html', {'form': form})


@user_passes_test(is_admin, login_url='core:login')
def user_detail_view(request, user_id):
    """
    Shows one account and every post assigned to it, newest first.
    """
    account = get_object_or_404(User, id=user_id)
    posts = Post.objects.filter(user=account).order_by('-created_at')

    context = {
        'account': account,
        'posts': posts,
        'status_counts': Post.status_counts(posts),
    }
    return render(request, 'users/user_detail.html', context)


@user_passes_test(is_admin, login_url='core:login')
def user_edit_view(request, user_id):
    account = get_object_or_404(User, id=user_id)

    if request.method == 'POST':
        form = UserForm(request.POST, instance=account)
        if form.is_valid():
            form.save()
            messages.success(request, f'User "{account.username}" has been updated.')
            return redirect('users:user_detail', user_id=account.id)
        messages.error(request, 'Please correct the errors below.')
    else:
        form = UserForm(instance=account)

    return render(request, 'users/user_form.html', {'form': form, 'account': account})


@user_passes_test(is_admin, login_url='core:login')
def user_delete_view(request, user_id):
    """
    Deletes an account together with all of its posts.
    """
    account = get_object_or_404(User, id=user_id)

    if request.method != 'POST':
        return redirect('users:user_detail', user_id=account.id)

    if account.pk == request.user.pk:
        messages.error(request, 'You cannot delete your own account.')
        return redirect('users:user_list')

    username = account.username
    post_count = account.posts.count()
    account.delete()
    logger.info("Admin %s deleted user %s and %d post(s)", request.user.username, username, post_count)
    messages.success(request, f'User "{username}" and all associated posts deleted successfully.')
    return redirect('users:user_list')
