"""
Abstract base models shared by the storefront apps
"""
import uuid

from django.db import models


class TimestampedModel(models.Model):
    """
    created_at/updated_at pair. Profile uses this directly since it is keyed on the auth user.
    """
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class BaseModel(TimestampedModel):
    """
    UUID-keyed storefront record, newest first.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta(TimestampedModel.Meta):
        abstract = True
        ordering = ['-created_at']

    def __str__(self):
        return str(self.id)
