"""
Accounts Models - customer profiles

The profile's primary key is the auth user, so a profile id is always the
identity id.
"""
from django.conf import settings
from django.db import models

from apps.core.models import TimestampedModel
from .roles import ROLE_CHOICES, CUSTOMER, parse_role


class Profile(TimestampedModel):
    """
    Customer details and role for an auth user.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='profile',
    )
    full_name = models.CharField(max_length=255, blank=True, default='')
    phone = models.CharField(max_length=20, blank=True, default='')
    address = models.TextField(blank=True, default='')
    city = models.CharField(max_length=100, blank=True, default='')
    postal_code = models.CharField(max_length=10, blank=True, default='')
    country = models.CharField(max_length=100, blank=True, default='Pakistan')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=CUSTOMER)

    class Meta:
        db_table = 'accounts_profiles'
        verbose_name = 'Profile'
        verbose_name_plural = 'Profiles'

    def __str__(self):
        return f"{self.full_name or self.user.get_username()} ({self.role})"

    def save(self, *args, **kwargs):
        self.role = parse_role(self.role)
        super().save(*args, **kwargs)

    @property
    def email(self):
        return self.user.email
