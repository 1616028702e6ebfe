# core/middleware.py

import logging

from django.shortcuts import redirect

from .session import get_current_user

logger = logging.getLogger(__name__)

# path prefix -> role allowed in
PROTECTED_PREFIXES = (
    ('/dashboard/admin', 'admin'),
    ('/dashboard/user', 'user'),
)


class DashboardRoleMiddleware:
    """
    Gates the dashboards on the role stored in the session. Anything else,
    /login included, passes through.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path_info

        if not path.startswith('/login'):
            for prefix, role in PROTECTED_PREFIXES:
                if path.startswith(prefix):
                    session_user = get_current_user(request)
                    if session_user is None or session_user.role != role:
                        logger.warning(
                            "Blocked %s for %s",
                            path,
                            session_user.username if session_user else 'anonymous',
                        )
                        return redirect('core:login')
                    break

        return self.get_response(request)
