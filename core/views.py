# core/views.py

import logging

from django.contrib import messages
from django.contrib.auth import login, logout
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from users.models import User
from .forms import ChangePasswordForm, LoginForm
from .session import get_current_user

logger = logging.getLogger(__name__)


def dashboard_url_for(role):
    if role == User.Role.ADMIN:
        return 'posts_admin:dashboard'
    return 'posts:user_dashboard'


def home_view(request):
    session_user = get_current_user(request)
    if session_user and request.user.is_authenticated:
        return redirect(dashboard_url_for(session_user.role))
    return redirect('core:login')


def login_view(request):
    """
    Single sign-in page for both roles; each lands on its own dashboard.
    """
    if request.user.is_authenticated:
        return redirect(dashboard_url_for(request.user.role))

    if request.method == 'POST':
        form = LoginForm(request, data=request.POST)
        if form.is_valid():
            user = form.get_user()
            login(request, user)
            messages.success(request, f'Welcome back, {user.username}!')
            return redirect(dashboard_url_for(user.role))
        logger.warning("Failed login for username %r", request.POST.get('username', ''))
        messages.error(request, 'Invalid username or password')
    else:
        form = LoginForm(request)

    return render(request, 'core/login.html', {'form': form})


@require_POST
def logout_view(request):
    logout(request)
    messages.info(request, 'Logged out successfully')
    return redirect('core:login')


@login_required(login_url='core:login')
def change_password_view(request):
    """
    Lets a signed-in user change their password.
    After successful change, user is logged out.
    """
    if request.method == 'POST':
        form = ChangePasswordForm(request.user, request.POST)
        if form.is_valid():
            user = form.save()
            logger.info("User %s changed their password", user.username)
            logout(request)
            messages.success(request, 'Password changed successfully. Please log in again.')
            return redirect('core:login')
        for errors in form.errors.values():
            for error in errors:
                messages.error(request, error)
    else:
        form = ChangePasswordForm(request.user)

    return render(request, 'core/change_password.html', {'form': form})
