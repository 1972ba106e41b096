"""
Account services: registration, profile upkeep and password changes
"""
import logging
from typing import Dict, Any

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.core.exceptions import ValidationException
from apps.core.utils import (
    is_valid_email,
    is_valid_phone,
    is_valid_postal_code,
    sanitize_input,
    validate_password,
)
from .models import Profile

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('full_name', 'phone', 'address', 'city', 'postal_code', 'country')


def _check_password(password: str) -> None:
    result = validate_password(password)
    if not result.is_valid:
        raise ValidationException(result.errors[0], field='password')


def register_user(email: str, password: str, full_name: str = ''):
    """Create a customer account. The e-mail doubles as the username."""
    email = (email or '').strip().lower()
    if not is_valid_email(email):
        raise ValidationException("Invalid email address", field='email')
    _check_password(password)

    User = get_user_model()
    if User.objects.filter(username=email).exists():
        raise ValidationException("An account with this email already exists", field='email')

    with transaction.atomic():
        user = User.objects.create_user(username=email, email=email, password=password)
        if full_name:
            profile = user.profile
            profile.full_name = sanitize_input(full_name)
            profile.save(update_fields=['full_name', 'updated_at'])

    logger.info(f"Registered user {user.pk}")
    return user


def change_password(user, current_password: str, new_password: str) -> None:
    if not user.check_password(current_password or ''):
        raise ValidationException("Current password is incorrect", field='current_password')
    _check_password(new_password)
    user.set_password(new_password)
    user.save(update_fields=['password'])
    logger.info(f"Password changed for user {user.pk}")


def profile_placeholder(user) -> Dict[str, Any]:
    """Shape returned when no profile row exists."""
    return {
        'id': user.pk,
        'email': user.email,
        'full_name': None,
        'phone': None,
        'address': None,
        'city': None,
        'postal_code': None,
        'country': 'Pakistan',
        'role': None,
        'created_at': None,
        'updated_at': None,
    }


def update_profile(user, data: Dict[str, Any]) -> Profile:
    """
    Create or update the user's profile. Text fields are trimmed; phone and
    postal code are checked only when given.
    """
    values = {}
    for name in PROFILE_FIELDS:
        if name in data:
            value = data[name]
            values[name] = value.strip() if isinstance(value, str) else ''

    if data.get('full_name') and len(values['full_name']) < 2:
        raise ValidationException("Full name must be at least 2 characters", field='full_name')
    if values.get('phone') and not is_valid_phone(values['phone']):
        raise ValidationException("Invalid phone number", field='phone')
    if values.get('postal_code') and not is_valid_postal_code(values['postal_code']):
        raise ValidationException("Invalid postal code", field='postal_code')

    profile, created = Profile.objects.update_or_create(user=user, defaults=values)
    logger.info(f"{'Created' if created else 'Updated'} profile for user {user.pk}")
    return profile
