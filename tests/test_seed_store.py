from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from apps.accounts.roles import user_is_admin
from apps.catalog.models import Product
from apps.orders.models import Order, OrderItem
from apps.payments.models import PaymentReview

pytestmark = pytest.mark.django_db


def seed(*extra):
    out = StringIO()
    call_command(
        'seed_store', '--products', '6', '--customers', '3', '--orders', '8', '--seed', '7', *extra, stdout=out
    )
    return out.getvalue()


def test_seed_creates_store_data():
    output = seed()

    assert 'Data Generation Complete!' in output
    assert Product.objects.count() == 6
    assert Order.objects.count() == 8
    assert OrderItem.objects.exists()

    admin = get_user_model().objects.get(username='admin@ticktee-style.pk')
    assert user_is_admin(admin)

    for order in Order.objects.all():
        assert order.shipping_address['phone']
        assert order.total_amount == order.subtotal + order.tax + order.shipping_fee + order.cod_fee
        if order.payment_method == 'cod':
            assert order.status not in ('awaiting_payment', 'payment_verified', 'payment_rejected')
            assert order.payment_verified is False
        else:
            assert order.status != 'pending'

    assert not PaymentReview.objects.filter(order__payment_method='cod').exists()


def test_seed_clear_replaces_data():
    seed()
    seed('--clear')
    assert Product.objects.count() == 6
    assert Order.objects.count() == 8
