"""
Payment verification services

Wallet orders wait in awaiting_payment until an admin verifies or rejects the
payment. A rejected payment can be reviewed again.
"""
import logging
from dataclasses import dataclass

from django.db import transaction
from django.db.models import QuerySet

from apps.core.exceptions import InvalidTransitionException, ValidationException
from apps.core.storage import save_payment_proof
from apps.notifications.emails import send_payment_verified, send_payment_rejected
from apps.orders.models import Order
from apps.orders.services import get_order, get_order_for_user
from apps.orders.transitions import (
    AWAITING_PAYMENT,
    PAYMENT_REJECTED,
    PROCESSING,
    REVIEWABLE_STATUSES,
    check_transition,
)
from .models import PaymentReview, VERIFIED, REJECTED

logger = logging.getLogger(__name__)


@dataclass
class ReviewOutcome:
    order: Order
    review: PaymentReview
    notified: bool

    @property
    def message(self) -> str:
        if self.review.decision == VERIFIED:
            return "Payment verified successfully"
        return "Payment rejected"


def pending_payments() -> QuerySet:
    """Orders waiting on verification, oldest first."""
    return (
        Order.objects.filter(status=AWAITING_PAYMENT)
        .select_related('user', 'user__profile')
        .order_by('created_at')
    )


def _review(order_id, target: str, decision: str, reviewer, notes: str) -> PaymentReview:
    with transaction.atomic():
        order = get_order(order_id, for_update=True)
        if order.status not in REVIEWABLE_STATUSES:
            raise InvalidTransitionException(order.status, target)
        check_transition(order.status, target)

        order.status = target
        order.payment_verified = decision == VERIFIED
        order.save(update_fields=['status', 'payment_verified', 'updated_at'])
        review = PaymentReview.objects.create(order=order, reviewer=reviewer, decision=decision, notes=notes or '')

    logger.info(f"Payment {decision} for order {order.id} by admin {getattr(reviewer, 'pk', None)}. Notes: {notes or 'N/A'}")
    return review


def verify_payment(order_id, reviewer, notes: str = '') -> ReviewOutcome:
    """Mark the payment verified and move the order to processing."""
    review = _review(order_id, PROCESSING, VERIFIED, reviewer, notes)
    order = review.order
    notified = send_payment_verified(order, order.user.email)
    return ReviewOutcome(order=order, review=review, notified=notified)


def reject_payment(order_id, reviewer, reason: str) -> ReviewOutcome:
    """Mark the payment rejected; a reason is mandatory and is sent to the customer."""
    reason = (reason or '').strip()
    if not reason:
        raise ValidationException("Rejection reason is required", field='rejectionReason')

    review = _review(order_id, PAYMENT_REJECTED, REJECTED, reviewer, reason)
    order = review.order
    notified = send_payment_rejected(order, order.user.email, reason)
    return ReviewOutcome(order=order, review=review, notified=notified)


def attach_payment_proof(user, order_id, uploaded_file) -> str:
    """Store a proof file for one of the user's own orders and link it."""
    order = get_order_for_user(user, order_id)
    url = save_payment_proof(uploaded_file, user.pk, order.pk)
    order.payment_proof_url = url
    order.save(update_fields=['payment_proof_url', 'updated_at'])
    return url
