"""
Catalog services: product queries and admin product management
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Any, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Q, QuerySet

from apps.core.exceptions import NotFoundException, ValidationException
from apps.core.storage import delete_product_image
from .models import Product, CATEGORIES

logger = logging.getLogger(__name__)

PUBLIC_SORTS = {
    'newest': ['-created_at'],
    'price_asc': ['price', '-created_at'],
    'price_desc': ['-price', '-created_at'],
    'name': ['name'],
}

ADMIN_SORT_FIELDS = ('price', 'stock', 'created_at', 'name')


def _parse_decimal(value, name: str) -> Optional[Decimal]:
    if value in (None, ''):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationException(f"Invalid {name}", field=name)


def get_product(product_id) -> Product:
    try:
        return Product.objects.get(pk=product_id)
    except (Product.DoesNotExist, ValueError, DjangoValidationError):
        raise NotFoundException("Product", product_id)


def search_products(params: Dict[str, Any]) -> QuerySet:
    """
    Storefront listing.

    Supported params: search, category, brand, min_price, max_price,
    in_stock ("true"), sort (newest|price_asc|price_desc|name).
    """
    queryset = Product.objects.all()

    search = (params.get('search') or '').strip()
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) | Q(brand__icontains=search) | Q(description__icontains=search)
        )

    category = params.get('category')
    if category:
        queryset = queryset.filter(category=category)

    brand = params.get('brand')
    if brand:
        queryset = queryset.filter(brand__iexact=brand)

    min_price = _parse_decimal(params.get('min_price'), 'min_price')
    if min_price is not None:
        queryset = queryset.filter(price__gte=min_price)

    max_price = _parse_decimal(params.get('max_price'), 'max_price')
    if max_price is not None:
        queryset = queryset.filter(price__lte=max_price)

    if str(params.get('in_stock', '')).lower() in ('1', 'true', 'yes'):
        queryset = queryset.filter(stock__gt=0)

    ordering = PUBLIC_SORTS.get(params.get('sort') or 'newest', PUBLIC_SORTS['newest'])
    return queryset.order_by(*ordering)


def admin_search_products(params: Dict[str, Any]) -> QuerySet:
    """Back-office listing: category, search, sortBy, sortOrder."""
    queryset = Product.objects.all()

    category = params.get('category')
    if category:
        queryset = queryset.filter(category=category)

    search = (params.get('search') or '').strip()
    if search:
        queryset = queryset.filter(Q(name__icontains=search) | Q(brand__icontains=search))

    sort_by = params.get('sortBy') or 'created_at'
    if sort_by not in ADMIN_SORT_FIELDS:
        sort_by = 'created_at'
    prefix = '' if (params.get('sortOrder') or 'desc') == 'asc' else '-'
    return queryset.order_by(f'{prefix}{sort_by}')


def create_product(data: Dict[str, Any]) -> Product:
    """Create a product from already validated admin input."""
    product = Product.objects.create(
        name=data['name'].strip(),
        brand=data['brand'].strip(),
        price=data['price'],
        description=data['description'].strip(),
        category=data['category'],
        stock=data.get('stock', 0),
        image_urls=list(data['image_urls']),
    )
    logger.info(f"Created product {product.id} ({product.name})")
    return product


def update_product(product: Product, data: Dict[str, Any]) -> Product:
    """
    Apply a partial update. Stored images dropped from image_urls are deleted
    once the update has committed.
    """
    previous_images = list(product.image_urls or [])

    for field in ('name', 'brand', 'description'):
        if field in data:
            setattr(product, field, data[field].strip())
    for field in ('price', 'stock', 'category'):
        if field in data:
            setattr(product, field, data[field])

    if 'image_urls' in data:
        if not data['image_urls']:
            raise ValidationException("At least one product image is required", field='image_urls')
        product.image_urls = list(data['image_urls'])

    if product.category not in CATEGORIES:
        raise ValidationException("Invalid category", field='category')

    product.save()

    removed = [url for url in previous_images if url not in product.image_urls]
    if removed:
        transaction.on_commit(lambda: _delete_images(removed))
    logger.info(f"Updated product {product.id}, removed {len(removed)} image(s)")
    return product


def delete_product(product: Product) -> None:
    """Delete the product and every stored image it references."""
    images = list(product.image_urls or [])
    product_id = product.id
    product.delete()
    transaction.on_commit(lambda: _delete_images(images))
    logger.info(f"Deleted product {product_id} and {len(images)} image(s)")


def _delete_images(urls) -> None:
    for url in urls:
        delete_product_image(url)
