"""
Order statuses and the moves allowed between them
"""
from apps.core.exceptions import InvalidTransitionException

PENDING = 'pending'
AWAITING_PAYMENT = 'awaiting_payment'
PAYMENT_VERIFIED = 'payment_verified'
PAYMENT_REJECTED = 'payment_rejected'
PROCESSING = 'processing'
SHIPPED = 'shipped'
DELIVERED = 'delivered'
CANCELLED = 'cancelled'
REFUNDED = 'refunded'

STATUS_CHOICES = [
    (PENDING, 'Pending'),
    (AWAITING_PAYMENT, 'Awaiting Payment'),
    (PAYMENT_VERIFIED, 'Payment Verified'),
    (PAYMENT_REJECTED, 'Payment Rejected'),
    (PROCESSING, 'Processing'),
    (SHIPPED, 'Shipped'),
    (DELIVERED, 'Delivered'),
    (CANCELLED, 'Cancelled'),
    (REFUNDED, 'Refunded'),
]

STATUSES = [value for value, _ in STATUS_CHOICES]

ALLOWED_TRANSITIONS = {
    PENDING: {PROCESSING, CANCELLED},
    AWAITING_PAYMENT: {PAYMENT_VERIFIED, PAYMENT_REJECTED, PROCESSING, CANCELLED},
    PAYMENT_VERIFIED: {PROCESSING, CANCELLED, REFUNDED},
    PAYMENT_REJECTED: {AWAITING_PAYMENT, PROCESSING, CANCELLED},
    PROCESSING: {SHIPPED, CANCELLED, REFUNDED},
    SHIPPED: {DELIVERED},
    DELIVERED: {REFUNDED},
    CANCELLED: set(),
    REFUNDED: set(),
}

FINAL_STATUSES = frozenset(status for status, targets in ALLOWED_TRANSITIONS.items() if not targets)

# Orders in these states are the ones an admin can verify or reject
REVIEWABLE_STATUSES = frozenset({AWAITING_PAYMENT, PAYMENT_REJECTED})

# Statuses counted as earned revenue per payment method
REVENUE_STATUSES = (DELIVERED, SHIPPED, PROCESSING, PAYMENT_VERIFIED)


def can_transition(current: str, target: str) -> bool:
    if current == target:
        return True
    return target in ALLOWED_TRANSITIONS.get(current, set())


def check_transition(current: str, target: str) -> None:
    """Raise InvalidTransitionException unless current -> target is allowed."""
    if target not in ALLOWED_TRANSITIONS:
        raise InvalidTransitionException(current, target)
    if not can_transition(current, target):
        raise InvalidTransitionException(current, target)


def reachable_from(status: str) -> frozenset:
    """Every status an order starting at `status` can end up in, itself included."""
    seen = {status}
    frontier = [status]
    while frontier:
        for target in ALLOWED_TRANSITIONS.get(frontier.pop(), ()):
            if target not in seen:
                seen.add(target)
                frontier.append(target)
    return frozenset(seen)
