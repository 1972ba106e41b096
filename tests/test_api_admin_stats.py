import pytest

from apps.orders.services import CheckoutRequest, CheckoutService, update_order_status
from apps.payments.services import verify_payment

pytestmark = pytest.mark.django_db


@pytest.fixture
def order_history(customer, admin_user, make_product, shipping_address):
    watch = make_product(name='Diver 200M', price='2500.00', stock=10)
    service = CheckoutService()

    def place(quantity, method, transaction_id=None):
        return service.place_order(customer, CheckoutRequest(
            shipping_address=dict(shipping_address),
            items=[(watch.id, quantity)],
            payment_method=method,
            transaction_id=transaction_id,
        ))

    cod = place(1, 'cod')                                 # 3150.00, pending
    jazzcash = place(2, 'jazzcash', 'JC1234567890')       # 5500.00, verified -> processing
    easypaisa = place(1, 'easypaisa', 'EP1234567890')     # 2950.00, cancelled

    verify_payment(jazzcash.id, admin_user)
    update_order_status(easypaisa.id, 'cancelled')
    return {'watch': watch, 'cod': cod, 'jazzcash': jazzcash, 'easypaisa': easypaisa}


def test_dashboard_stats(admin_client, order_history):
    response = admin_client.get('/api/admin/stats/')
    assert response.status_code == 200
    stats = response.json()['stats']

    assert stats['totalProducts'] == 1
    assert stats['totalOrders'] == 3
    assert stats['totalRevenue'] == 8650.0
    assert stats['pendingPayments'] == 0
    assert [p['stock'] for p in stats['lowStockProducts']] == [6]
    assert len(stats['recentOrders']) == 3
    assert stats['revenueByPaymentMethod'] == {
        'cod': 0.0,
        'bank_transfer': 0.0,
        'jazzcash': 5500.0,
        'easypaisa': 0.0,
    }
    assert stats['ordersByPaymentMethod'] == {'cod': 1, 'bank_transfer': 0, 'jazzcash': 1, 'easypaisa': 1}


def test_dashboard_stats_empty_store(admin_client):
    stats = admin_client.get('/api/admin/stats/').json()['stats']
    assert stats['totalOrders'] == 0
    assert stats['totalRevenue'] == 0.0
    assert stats['lowStockProducts'] == []


def test_customer_stats(customer_client, order_history):
    response = customer_client.get('/api/profile/stats/')
    assert response.status_code == 200
    stats = response.json()['stats']
    assert stats['totalOrders'] == 3
    assert stats['totalSpent'] == 11600.0
    assert stats['memberSince']
