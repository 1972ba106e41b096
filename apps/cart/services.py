"""
Cart mirror services

The client cart is authoritative until checkout; these functions keep the
saved copy in step with it. Every mutation loads the saved rows into a Cart,
applies the change there and writes the result back.
"""
import logging
from typing import Iterable, Dict, Any

from django.db import transaction

from apps.catalog.models import Product
from apps.catalog.services import get_product
from apps.core.exceptions import ValidationException
from .cart import Cart, CartLine
from .models import CartItem

logger = logging.getLogger(__name__)


def load_cart(user) -> Cart:
    """Saved cart with quantities clamped to current stock; sold-out lines are left out."""
    cart = Cart()
    for item in CartItem.objects.filter(user=user).select_related('product').order_by('created_at'):
        product = item.product
        if product.stock <= 0:
            continue
        cart.lines.append(CartLine(product=product, quantity=min(item.quantity, product.stock)))
    return cart


def _persist(user, cart: Cart) -> None:
    keep = [line.product.id for line in cart.lines]
    CartItem.objects.filter(user=user).exclude(product_id__in=keep).delete()
    for line in cart.lines:
        CartItem.objects.update_or_create(
            user=user, product=line.product, defaults={'quantity': line.quantity}
        )


def _parse_quantity(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationException("Quantity must be a whole number", field='quantity')


def add_item(user, product_id, quantity=1) -> Cart:
    quantity = _parse_quantity(quantity)
    if quantity < 1:
        raise ValidationException("Quantity must be at least 1", field='quantity')
    with transaction.atomic():
        cart = load_cart(user)
        cart.add_item(get_product(product_id), quantity)
        _persist(user, cart)
    return cart


def update_item(user, product_id, quantity) -> Cart:
    quantity = _parse_quantity(quantity)
    with transaction.atomic():
        cart = load_cart(user)
        cart.update_quantity(product_id, quantity)
        _persist(user, cart)
    return cart


def remove_item(user, product_id) -> Cart:
    with transaction.atomic():
        cart = load_cart(user)
        cart.remove_item(product_id)
        _persist(user, cart)
    return cart


def clear_cart(user) -> int:
    deleted, _ = CartItem.objects.filter(user=user).delete()
    logger.info(f"Cleared {deleted} saved cart item(s) for user {user.pk}")
    return deleted


def replace_cart(user, items: Iterable[Dict[str, Any]]) -> Cart:
    """
    Overwrite the saved cart with the client's lines. Unknown or sold-out
    products are skipped.
    """
    cart = Cart()
    wanted = list(items)
    products = Product.objects.in_bulk([item['product_id'] for item in wanted])
    for item in wanted:
        product = products.get(item['product_id'])
        if product is None or product.stock <= 0:
            logger.info(f"Skipping unavailable product {item['product_id']} while syncing cart")
            continue
        cart.add_item(product, _parse_quantity(item.get('quantity', 1)))

    with transaction.atomic():
        _persist(user, cart)
    return cart
