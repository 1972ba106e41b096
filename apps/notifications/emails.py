"""
Customer e-mail notifications

Every sender returns True on success. Delivery failures are logged and
reported as False; they never undo the order change that triggered them.
"""
import logging
from smtplib import SMTPException
from typing import Optional

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)

WALLET_NAMES = {
    'jazzcash': 'JazzCash',
    'easypaisa': 'EasyPaisa',
}


def _send(subject: str, template: str, recipient: Optional[str], context: dict) -> bool:
    if not recipient:
        logger.warning(f"Skipping '{subject}' e-mail: no recipient address")
        return False

    store = settings.STORE
    body = render_to_string(template, {**context, 'store': store})
    try:
        send_mail(
            subject=f"{subject} - {store['SITE_NAME']}",
            message=body.strip(),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient],
        )
    except (SMTPException, OSError) as e:
        logger.error(f"Error sending '{subject}' e-mail to {recipient}: {e}")
        return False

    logger.info(f"Sent '{subject}' e-mail to {recipient}")
    return True


def send_order_confirmation(order, recipient: Optional[str]) -> bool:
    return _send(
        'Order Confirmation',
        'notifications/order_confirmation.txt',
        recipient,
        {'order': order, 'wallet_name': WALLET_NAMES.get(order.payment_method, '')},
    )


def send_payment_verified(order, recipient: Optional[str]) -> bool:
    return _send(
        'Payment Verified',
        'notifications/payment_verified.txt',
        recipient,
        {'order': order},
    )


def send_payment_rejected(order, recipient: Optional[str], reason: str) -> bool:
    return _send(
        'Payment Verification Issue',
        'notifications/payment_rejected.txt',
        recipient,
        {'order': order, 'reason': reason},
    )
