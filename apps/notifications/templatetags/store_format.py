from django import template

from apps.core.formatters import format_price

register = template.Library()


@register.filter
def rupees(value):
    """{{ order.total_amount|rupees }} -> Rs. 2,499"""
    return format_price(value)
