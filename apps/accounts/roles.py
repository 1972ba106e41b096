"""
Roles and the admin check

The role set is closed. A missing or blank role reads as customer; anything
else that is not a known role is an error rather than a silent downgrade.
"""
import logging

from apps.core.exceptions import InvalidRoleException

logger = logging.getLogger(__name__)

ADMIN = 'admin'
CUSTOMER = 'customer'

ROLE_CHOICES = [
    (ADMIN, 'Admin'),
    (CUSTOMER, 'Customer'),
]

ROLES = frozenset(value for value, _ in ROLE_CHOICES)


def parse_role(value) -> str:
    """
    Parse a stored or submitted role.

    parse_role(None) -> 'customer'
    parse_role(' Admin ') -> 'admin'
    parse_role('superuser') raises InvalidRoleException
    """
    if value is None:
        return CUSTOMER
    if not isinstance(value, str):
        raise InvalidRoleException(value)

    normalized = value.strip().lower()
    if not normalized:
        return CUSTOMER
    if normalized not in ROLES:
        raise InvalidRoleException(value)
    return normalized


def is_admin(profile) -> bool:
    """True only for an existing profile whose role is admin."""
    if profile is None:
        return False
    try:
        return parse_role(profile.role) == ADMIN
    except InvalidRoleException:
        logger.warning(f"Profile {profile.pk} has unrecognized role {profile.role!r}")
        return False


def user_is_admin(user) -> bool:
    """Resolve the user's profile and apply is_admin."""
    if user is None or not user.is_authenticated:
        return False
    return is_admin(getattr(user, 'profile', None))
