import uuid

import pytest

from apps.cart.models import CartItem

pytestmark = pytest.mark.django_db

CART_URL = '/api/cart/'
ITEMS_URL = '/api/cart/items/'


@pytest.fixture
def watch(make_product):
    return make_product(name='Pro Trek', price='2500.00', stock=4)


def add(client, product, quantity=1):
    return client.post(ITEMS_URL, {'product_id': str(product.id), 'quantity': quantity}, format='json')


def test_add_item(customer_client, customer, watch):
    response = add(customer_client, watch, 2)

    assert response.status_code == 201
    data = response.json()
    assert data['total_items'] == 2
    assert data['can_checkout'] is True
    assert data['items'][0]['product']['name'] == 'Pro Trek'
    assert data['items'][0]['line_total'] == 5000.0
    assert data['totals'] == {
        'subtotal': 5000.0,
        'tax': 500.0,
        'shipping_fee': 0.0,
        'cod_fee': 0.0,
        'total': 5500.0,
    }
    assert CartItem.objects.get(user=customer, product=watch).quantity == 2


def test_cod_fee_included_on_request(customer_client, watch):
    add(customer_client, watch)
    totals = customer_client.get(CART_URL, {'payment_method': 'cod'}).json()['totals']
    assert totals['cod_fee'] == 200.0
    assert totals['total'] == 2500.0 + 250.0 + 200.0 + 200.0


def test_adding_again_accumulates_up_to_stock(customer_client, customer, watch):
    add(customer_client, watch, 3)
    response = add(customer_client, watch, 3)
    assert response.json()['total_items'] == 4
    assert CartItem.objects.get(user=customer).quantity == 4


def test_sold_out_product_cannot_be_added(customer_client, make_product):
    sold_out = make_product(name='Moonphase', stock=0)
    response = add(customer_client, sold_out)
    assert response.status_code == 400
    assert response.json() == {'error': 'Insufficient stock for Moonphase. Available: 0'}


def test_unknown_product(customer_client):
    response = customer_client.post(ITEMS_URL, {'product_id': str(uuid.uuid4())}, format='json')
    assert response.status_code == 404


def test_update_quantity_and_remove(customer_client, customer, watch):
    add(customer_client, watch)

    response = customer_client.patch(f'{ITEMS_URL}{watch.id}/', {'quantity': 3}, format='json')
    assert response.json()['total_items'] == 3

    response = customer_client.patch(f'{ITEMS_URL}{watch.id}/', {'quantity': 0}, format='json')
    assert response.json()['items'] == []
    assert not CartItem.objects.filter(user=customer).exists()


def test_delete_item(customer_client, customer, watch, make_product):
    other = make_product(name='Triathlon', brand='Timex', price='3500.00')
    add(customer_client, watch)
    add(customer_client, other)

    response = customer_client.delete(f'{ITEMS_URL}{watch.id}/')
    assert [line['product']['name'] for line in response.json()['items']] == ['Triathlon']


def test_replace_skips_unavailable_products(customer_client, customer, watch, make_product):
    sold_out = make_product(name='Moonphase', stock=0)
    payload = {'items': [
        {'product_id': str(watch.id), 'quantity': 9},
        {'product_id': str(sold_out.id), 'quantity': 1},
        {'product_id': str(uuid.uuid4()), 'quantity': 1},
    ]}
    response = customer_client.put(CART_URL, payload, format='json')

    assert response.status_code == 200
    data = response.json()
    assert [line['quantity'] for line in data['items']] == [4]
    assert CartItem.objects.filter(user=customer).count() == 1


def test_sold_out_lines_drop_out_of_saved_cart(customer_client, watch):
    add(customer_client, watch, 2)
    watch.stock = 0
    watch.save()

    data = customer_client.get(CART_URL).json()
    assert data['items'] == []
    assert data['can_checkout'] is False
    assert data['totals']['total'] == 0.0


def test_clear(customer_client, customer, watch):
    add(customer_client, watch)
    response = customer_client.delete(CART_URL)
    assert response.json() == {'success': True}
    assert not CartItem.objects.filter(user=customer).exists()


def test_cart_is_private(api_client):
    assert api_client.get(CART_URL).status_code == 401
