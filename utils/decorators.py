# utils/decorators.py

from functools import wraps
from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.core.exceptions import PermissionDenied


def admin_required(view_func):
    """Decorator to ensure user is admin or superuser"""
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())

        if not (request.user.is_superuser or request.user.user_type == 'admin'):
            messages.error(request, 'Admin access required.')
            raise PermissionDenied

        return view_func(request, *args, **kwargs)
    return _wrapped_view
