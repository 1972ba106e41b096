"""
Catalog Models - watches on sale
"""
from django.db import models

from apps.core.models import BaseModel

MENS = "Men's Watches"
WOMENS = "Women's Watches"
LUXURY = "Luxury Collection"
SPORTS = "Sports Watches"

CATEGORY_CHOICES = [
    (MENS, MENS),
    (WOMENS, WOMENS),
    (LUXURY, LUXURY),
    (SPORTS, SPORTS),
]

CATEGORIES = [value for value, _ in CATEGORY_CHOICES]


class Product(BaseModel):
    """
    A watch in the catalog. The first entry of image_urls is the primary image.
    """
    name = models.CharField(max_length=100)
    brand = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.TextField()
    image_urls = models.JSONField(default=list, blank=True)
    stock = models.IntegerField(default=0)
    category = models.CharField(max_length=50, choices=CATEGORY_CHOICES)

    class Meta:
        db_table = 'catalog_products'
        verbose_name = 'Product'
        verbose_name_plural = 'Products'
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gt=0), name='product_price_positive'),
            models.CheckConstraint(condition=models.Q(stock__gte=0), name='product_stock_non_negative'),
        ]

    def __str__(self):
        return f"{self.brand} {self.name} (Rs. {self.price})"

    @property
    def image_url(self):
        return self.image_urls[0] if self.image_urls else None

    @property
    def in_stock(self):
        return self.stock > 0
