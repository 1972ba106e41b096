"""
Order services: checkout, customer order queries and admin status changes
"""
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Tuple

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import F, Q, QuerySet

from apps.cart.cart import CheckoutRates, compute_totals, to_money
from apps.cart.services import load_cart, clear_cart
from apps.catalog.models import Product
from apps.core.exceptions import NotFoundException, OutOfStockException, ValidationException
from apps.core.utils import is_valid_phone, is_valid_postal_code, is_valid_transaction_id
from apps.notifications.emails import send_order_confirmation
from .models import Order, OrderItem, COD, CHECKOUT_PAYMENT_METHODS, WALLET_PAYMENT_METHODS
from .transitions import PENDING, AWAITING_PAYMENT, STATUSES, check_transition

logger = logging.getLogger(__name__)

SHIPPING_ADDRESS_FIELDS = ('fullName', 'phone', 'streetAddress', 'city', 'postalCode', 'country')


@dataclass
class CheckoutRequest:
    """What the customer submits at checkout."""
    shipping_address: Dict[str, Any]
    items: List[Tuple[Any, int]] = field(default_factory=list)
    payment_method: str = COD
    transaction_id: Optional[str] = None
    payment_proof_url: Optional[str] = None
    order_reference: Optional[str] = None


def _clean_address_value(value):
    # Numeric JSON values such as a postal code of 44000 are kept as text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value.strip() if isinstance(value, str) else value


def validate_shipping_address(address: Dict[str, Any]) -> Dict[str, Any]:
    """Trimmed copy of the address; every field is required."""
    if not isinstance(address, dict):
        raise ValidationException("Missing required shipping address fields", field='shippingAddress')

    cleaned = {key: _clean_address_value(value) for key, value in address.items()}
    if any(not cleaned.get(name) for name in SHIPPING_ADDRESS_FIELDS):
        raise ValidationException("Missing required shipping address fields", field='shippingAddress')
    if not is_valid_phone(cleaned['phone']):
        raise ValidationException("Invalid phone number", field='phone')
    if not is_valid_postal_code(cleaned['postalCode']):
        raise ValidationException("Invalid postal code", field='postalCode')
    return cleaned


def _merge_items(items) -> "OrderedDict[str, int]":
    merged = OrderedDict()
    for product_id, quantity in items:
        if quantity < 1:
            raise ValidationException("Quantity must be at least 1", field='quantity')
        key = str(product_id)
        merged[key] = merged.get(key, 0) + quantity
    return merged


class CheckoutService:
    """
    Turns a cart into an order.

    Prices are re-read from the catalog, stock is checked under row locks and
    decremented in the same transaction that writes the order.
    """

    def __init__(self, rates: Optional[CheckoutRates] = None):
        self.rates = rates or CheckoutRates.from_settings()

    def _resolve_items(self, user, request: CheckoutRequest):
        if request.items:
            return _merge_items(request.items)
        # Nothing posted: fall back to the saved cart mirror
        cart = load_cart(user)
        return _merge_items((line.product.id, line.quantity) for line in cart.lines)

    def _validate_payment(self, request: CheckoutRequest) -> str:
        method = request.payment_method or COD
        if method not in CHECKOUT_PAYMENT_METHODS:
            raise ValidationException("Invalid payment method", field='paymentMethod')
        if method in WALLET_PAYMENT_METHODS:
            if not request.transaction_id:
                raise ValidationException("Transaction ID is required", field='transactionId')
            if not is_valid_transaction_id(request.transaction_id):
                raise ValidationException("Invalid transaction ID", field='transactionId')
        return method

    def place_order(self, user, request: CheckoutRequest) -> Order:
        shipping_address = validate_shipping_address(request.shipping_address)
        payment_method = self._validate_payment(request)
        wanted = self._resolve_items(user, request)
        if not wanted:
            raise ValidationException("Cart is empty", field='cartItems')

        if request.order_reference:
            shipping_address['orderReference'] = request.order_reference

        with transaction.atomic():
            try:
                products = Product.objects.select_for_update().in_bulk(list(wanted.keys()))
            except (ValueError, DjangoValidationError):
                raise ValidationException("Invalid product in cart", field='cartItems')
            products = {str(pk): product for pk, product in products.items()}

            lines = []
            for product_id, quantity in wanted.items():
                product = products.get(product_id)
                if product is None:
                    raise ValidationException(f"Product {product_id} not found", field='cartItems')
                if product.stock < quantity:
                    raise OutOfStockException(product.name, product.stock)
                lines.append((product, quantity))

            subtotal = sum((to_money(product.price) * quantity for product, quantity in lines), to_money(0))
            totals = compute_totals(subtotal, payment_method, self.rates)

            order = Order.objects.create(
                user=user,
                subtotal=totals.subtotal,
                tax=totals.tax,
                shipping_fee=totals.shipping_fee,
                cod_fee=totals.cod_fee,
                total_amount=totals.total,
                status=PENDING if payment_method == COD else AWAITING_PAYMENT,
                payment_method=payment_method,
                payment_proof_url=request.payment_proof_url or None,
                transaction_id=(request.transaction_id or '').strip() or None,
                shipping_address=shipping_address,
            )

            for product, quantity in lines:
                OrderItem.objects.create(
                    order=order,
                    product=product,
                    quantity=quantity,
                    price=product.price,
                    product_name=product.name,
                )
                Product.objects.filter(pk=product.pk).update(stock=F('stock') - quantity)

            clear_cart(user)

        logger.info(
            f"Order {order.id} placed by user {user.pk}: {len(lines)} line(s), "
            f"total {order.total_amount}, method {payment_method}, status {order.status}"
        )

        send_order_confirmation(order, user.email)
        return order


def orders_for_user(user) -> QuerySet:
    return Order.objects.filter(user=user).order_by('-created_at')


def get_order_for_user(user, order_id) -> Order:
    """Owner-only lookup. Someone else's order is indistinguishable from a missing one."""
    try:
        return Order.objects.get(pk=order_id, user=user)
    except (Order.DoesNotExist, ValueError, DjangoValidationError):
        raise NotFoundException("Order", order_id)


def get_order(order_id, for_update: bool = False) -> Order:
    queryset = Order.objects.select_related('user', 'user__profile')
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(pk=order_id)
    except (Order.DoesNotExist, ValueError, DjangoValidationError):
        raise NotFoundException("Order", order_id)


def items_for_order(order: Order) -> QuerySet:
    return order.items.select_related('product').order_by('created_at')


def admin_search_orders(params: Dict[str, Any]) -> QuerySet:
    """Back-office listing: status, payment_method, search."""
    queryset = Order.objects.select_related('user', 'user__profile').order_by('-created_at')

    status = params.get('status')
    if status and status != 'all':
        queryset = queryset.filter(status=status)

    payment_method = params.get('payment_method')
    if payment_method and payment_method != 'all':
        queryset = queryset.filter(payment_method=payment_method)

    search = (params.get('search') or '').strip()
    if search:
        queryset = queryset.filter(
            Q(id__icontains=search)
            | Q(user__profile__full_name__icontains=search)
            | Q(user__email__icontains=search)
            | Q(transaction_id__icontains=search)
        )
    return queryset


def update_order_status(order_id, status: str) -> Order:
    """Admin status change, checked against the transition table."""
    if status not in STATUSES:
        raise ValidationException("Invalid status", field='status')

    with transaction.atomic():
        order = get_order(order_id, for_update=True)
        check_transition(order.status, status)
        if order.status == status:
            return order
        previous = order.status
        order.status = status
        order.save(update_fields=['status', 'updated_at'])

    logger.info(f"Order {order.id} status {previous} -> {status}")
    return order
