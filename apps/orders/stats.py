"""
Dashboard and customer statistics
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from django.conf import settings
from django.db.models import Count, Sum

from apps.catalog.models import Product
from .models import Order, PAYMENT_METHODS
from .transitions import CANCELLED, AWAITING_PAYMENT, REVENUE_STATUSES

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


@dataclass
class AdminStats:
    total_products: int
    total_orders: int
    total_revenue: Decimal
    pending_payments: int
    low_stock_products: List[Product]
    recent_orders: List[Order]
    revenue_by_payment_method: Dict[str, Decimal]
    orders_by_payment_method: Dict[str, int]


def get_admin_stats(recent_limit: int = 5, low_stock_limit: int = 10) -> AdminStats:
    threshold = settings.STORE['LOW_STOCK_THRESHOLD']

    total_revenue = (
        Order.objects.exclude(status=CANCELLED).aggregate(total=Sum('total_amount'))['total'] or ZERO
    )

    revenue_by_method = {method: ZERO for method in PAYMENT_METHODS}
    revenue_rows = (
        Order.objects.filter(status__in=REVENUE_STATUSES)
        .values('payment_method')
        .annotate(revenue=Sum('total_amount'))
        .order_by()
    )
    for row in revenue_rows:
        revenue_by_method[row['payment_method']] = row['revenue'] or ZERO

    orders_by_method = {method: 0 for method in PAYMENT_METHODS}
    for row in Order.objects.values('payment_method').annotate(count=Count('id')).order_by():
        orders_by_method[row['payment_method']] = row['count']

    stats = AdminStats(
        total_products=Product.objects.count(),
        total_orders=Order.objects.count(),
        total_revenue=total_revenue,
        pending_payments=Order.objects.filter(status=AWAITING_PAYMENT).count(),
        low_stock_products=list(Product.objects.filter(stock__lt=threshold).order_by('stock')[:low_stock_limit]),
        recent_orders=list(
            Order.objects.select_related('user', 'user__profile').order_by('-created_at')[:recent_limit]
        ),
        revenue_by_payment_method=revenue_by_method,
        orders_by_payment_method=orders_by_method,
    )
    logger.debug(f"Admin stats: {stats.total_orders} orders, revenue {stats.total_revenue}")
    return stats


def get_user_stats(user) -> Dict:
    """Order count, lifetime spend and join date for a customer."""
    summary = Order.objects.filter(user=user).aggregate(count=Count('id'), spent=Sum('total_amount'))
    return {
        'totalOrders': summary['count'] or 0,
        'totalSpent': summary['spent'] or ZERO,
        'memberSince': user.date_joined.isoformat(),
    }
