"""
File storage helpers for product images and payment proofs

Files go through Django's default storage; the stored name is built from
a folder prefix, a millisecond timestamp and a random suffix.
"""
import logging
import secrets
import string
import time
from dataclasses import dataclass
from typing import FrozenSet, Optional

from django.conf import settings
from django.core.files.storage import default_storage

from .exceptions import UploadException

logger = logging.getLogger(__name__)

_ALPHABET = string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class UploadPolicy:
    content_types: FrozenSet[str]
    max_bytes: int
    type_error: str
    size_error: str


PRODUCT_IMAGE_POLICY = UploadPolicy(
    content_types=frozenset({'image/jpeg', 'image/jpg', 'image/png', 'image/webp'}),
    max_bytes=settings.PRODUCT_IMAGE_MAX_BYTES,
    type_error='Invalid file type. Please upload a JPG, PNG, or WebP image.',
    size_error='File size exceeds 5MB limit. Please upload a smaller image.',
)

PAYMENT_PROOF_POLICY = UploadPolicy(
    content_types=frozenset({'image/jpeg', 'image/jpg', 'image/png', 'application/pdf'}),
    max_bytes=settings.PAYMENT_PROOF_MAX_BYTES,
    type_error='Invalid file type. Please upload a JPG, PNG, or PDF file.',
    size_error='File size exceeds 5MB limit.',
)

PRODUCT_IMAGE_PREFIX = 'product-images/'
PAYMENT_PROOF_PREFIX = 'payment-proofs/'


def _random_suffix(length: int = 13) -> str:
    return ''.join(secrets.choice(_ALPHABET) for _ in range(length))


def _extension(filename: str) -> str:
    return filename.rsplit('.', 1)[-1].lower() if '.' in filename else 'bin'


def validate_upload(uploaded_file, policy: UploadPolicy) -> None:
    if uploaded_file is None:
        raise UploadException('No file provided')
    if uploaded_file.content_type not in policy.content_types:
        raise UploadException(policy.type_error)
    if uploaded_file.size > policy.max_bytes:
        raise UploadException(policy.size_error)


def _save(uploaded_file, name: str) -> str:
    stored_name = default_storage.save(name, uploaded_file)
    logger.info(f"Stored upload {stored_name} ({uploaded_file.size} bytes)")
    return default_storage.url(stored_name)


def save_product_image(uploaded_file) -> str:
    """Validate and store a product image, returning its public URL."""
    validate_upload(uploaded_file, PRODUCT_IMAGE_POLICY)
    name = (
        f"{PRODUCT_IMAGE_PREFIX}{int(time.time() * 1000)}-{_random_suffix()}"
        f".{_extension(uploaded_file.name)}"
    )
    return _save(uploaded_file, name)


def save_payment_proof(uploaded_file, user_id, order_id) -> str:
    """Validate and store a payment proof under the owner's folder."""
    validate_upload(uploaded_file, PAYMENT_PROOF_POLICY)
    name = (
        f"{PAYMENT_PROOF_PREFIX}{user_id}/{order_id}-{int(time.time() * 1000)}-{_random_suffix()}"
        f".{_extension(uploaded_file.name)}"
    )
    return _save(uploaded_file, name)


def storage_name_from_url(url: str, prefix: str = PRODUCT_IMAGE_PREFIX) -> Optional[str]:
    """
    Map a public URL back to its stored name, or None for URLs we do not own.
    """
    if not url or f'/{prefix}' not in url:
        return None
    return prefix + url.split(f'/{prefix}', 1)[1]


def delete_product_image(url: str) -> bool:
    """
    Remove a stored product image. Failures are logged and reported as False.
    """
    name = storage_name_from_url(url)
    if name is None:
        logger.warning(f"Not deleting image with unrecognized URL format: {url}")
        return False
    try:
        default_storage.delete(name)
    except OSError as e:
        logger.error(f"Error deleting image {name}: {e}")
        return False
    return True
