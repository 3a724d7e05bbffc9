# api/permissions.py

from rest_framework import permissions


class IsAdminUserType(permissions.BasePermission):
    """Only admin users (or superusers) can access"""

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and (user.is_superuser or user.user_type == 'admin'))
