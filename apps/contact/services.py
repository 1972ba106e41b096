import logging

from apps.core.utils import sanitize_input
from .models import ContactMessage

logger = logging.getLogger(__name__)


def submit_message(data) -> ContactMessage:
    """Store an already validated contact form submission."""
    message = ContactMessage.objects.create(
        name=sanitize_input(data['name']),
        email=data['email'],
        subject=sanitize_input(data['subject']),
        message=sanitize_input(data['message']),
    )
    logger.info(f"Contact message {message.id} received from {message.email}")
    return message
