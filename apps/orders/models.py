"""
Orders Models - placed orders and their line snapshots
"""
from django.conf import settings
from django.db import models

from apps.core.exceptions import ImmutableRecordException
from apps.core.models import BaseModel
from .transitions import STATUS_CHOICES, PENDING

COD = 'cod'
BANK_TRANSFER = 'bank_transfer'
JAZZCASH = 'jazzcash'
EASYPAISA = 'easypaisa'

PAYMENT_METHOD_CHOICES = [
    (COD, 'Cash on Delivery'),
    (BANK_TRANSFER, 'Bank Transfer'),
    (JAZZCASH, 'JazzCash'),
    (EASYPAISA, 'EasyPaisa'),
]

PAYMENT_METHODS = [value for value, _ in PAYMENT_METHOD_CHOICES]

# Methods offered at checkout; bank transfer survives only on older orders
CHECKOUT_PAYMENT_METHODS = (COD, JAZZCASH, EASYPAISA)
WALLET_PAYMENT_METHODS = (JAZZCASH, EASYPAISA)


class Order(BaseModel):
    """
    A customer order. Figures are computed at checkout from current product prices.
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='orders')
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    shipping_fee = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    cod_fee = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default=COD)
    payment_proof_url = models.CharField(max_length=500, blank=True, null=True)
    transaction_id = models.CharField(max_length=50, blank=True, null=True)
    payment_verified = models.BooleanField(default=False)
    shipping_address = models.JSONField(default=dict)

    class Meta:
        db_table = 'orders'
        verbose_name = 'Order'
        verbose_name_plural = 'Orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='orders_status_created_idx'),
            models.Index(fields=['payment_method'], name='orders_payment_method_idx'),
        ]

    def __str__(self):
        return f"Order {self.id} - {self.status} - Rs. {self.total_amount}"

    @property
    def order_reference(self):
        return (self.shipping_address or {}).get('orderReference')


class OrderItem(BaseModel):
    """
    Snapshot of a product line at checkout. Never modified once written.
    """
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items',
    )
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=12, decimal_places=2, help_text="Unit price at checkout")
    product_name = models.CharField(max_length=255)

    class Meta:
        db_table = 'order_items'
        verbose_name = 'Order Item'
        verbose_name_plural = 'Order Items'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity} x {self.product_name}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordException('OrderItem')
        super().save(*args, **kwargs)

    @property
    def line_total(self):
        return self.price * self.quantity
