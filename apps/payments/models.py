"""
Payments Models - audit trail of admin payment decisions
"""
from django.conf import settings
from django.db import models

from apps.core.models import BaseModel

VERIFIED = 'verified'
REJECTED = 'rejected'

DECISION_CHOICES = [
    (VERIFIED, 'Verified'),
    (REJECTED, 'Rejected'),
]


class PaymentReview(BaseModel):
    """
    One verify/reject decision taken by an admin on an order's payment.
    """
    order = models.ForeignKey('orders.Order', on_delete=models.CASCADE, related_name='payment_reviews')
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='payment_reviews',
    )
    decision = models.CharField(max_length=20, choices=DECISION_CHOICES)
    notes = models.TextField(blank=True, default='')

    class Meta:
        db_table = 'payment_reviews'
        verbose_name = 'Payment Review'
        verbose_name_plural = 'Payment Reviews'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.decision} - order {self.order_id}"
