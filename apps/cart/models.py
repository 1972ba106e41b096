"""
Cart Models - server-side mirror of a signed-in customer's cart
"""
from django.conf import settings
from django.db import models

from apps.core.models import BaseModel


class CartItem(BaseModel):
    """
    One product line of a saved cart.
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='cart_items')
    product = models.ForeignKey('catalog.Product', on_delete=models.CASCADE, related_name='cart_items')
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = 'cart_items'
        verbose_name = 'Cart Item'
        verbose_name_plural = 'Cart Items'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product'], name='unique_cart_item_per_product'),
            models.CheckConstraint(condition=models.Q(quantity__gte=1), name='cart_item_quantity_positive'),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.product_id} for {self.user_id}"
