"""
API permissions
"""
import logging

from rest_framework.permissions import BasePermission

from apps.accounts.roles import user_is_admin

logger = logging.getLogger(__name__)


class IsStoreAdmin(BasePermission):
    """
    Signed-in user whose profile carries the admin role.
    Anonymous callers get 401; everyone else without the role gets 403.
    """
    message = "Forbidden: Admin access required"

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        allowed = user_is_admin(user)
        if not allowed:
            logger.warning(f"Admin access denied for user {user.pk} on {request.path}")
        return allowed
