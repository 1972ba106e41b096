import uuid
from dataclasses import dataclass, field
from decimal import Decimal

import pytest

from apps.cart.cart import Cart, CheckoutRates, compute_totals
from apps.core.exceptions import OutOfStockException

RATES = CheckoutRates(
    tax_rate=Decimal('0.10'),
    shipping_fee=Decimal('200.00'),
    free_shipping_threshold=Decimal('5000.00'),
    cod_fee=Decimal('200.00'),
)


@dataclass
class FakeProduct:
    name: str
    price: Decimal
    stock: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@pytest.fixture
def watch():
    return FakeProduct(name='Diver 200M', price=Decimal('1000.00'), stock=5)


class TestComputeTotals:
    def test_cash_on_delivery_below_threshold(self):
        totals = compute_totals(Decimal('1000'), 'cod', RATES)
        assert totals.subtotal == Decimal('1000.00')
        assert totals.tax == Decimal('100.00')
        assert totals.shipping_fee == Decimal('200.00')
        assert totals.cod_fee == Decimal('200.00')
        assert totals.total == Decimal('1500.00')

    def test_wallet_payment_above_threshold_ships_free(self):
        totals = compute_totals(Decimal('5000'), 'jazzcash', RATES)
        assert totals.shipping_fee == Decimal('0.00')
        assert totals.cod_fee == Decimal('0.00')
        assert totals.total == Decimal('5500.00')

    def test_tax_is_rounded_to_paisa(self):
        totals = compute_totals(Decimal('333.33'), 'easypaisa', RATES)
        assert totals.tax == Decimal('33.33')

    def test_empty_subtotal_is_all_zero(self):
        totals = compute_totals(0, 'cod', RATES)
        assert totals.as_dict() == {
            'subtotal': Decimal('0.00'),
            'tax': Decimal('0.00'),
            'shipping_fee': Decimal('0.00'),
            'cod_fee': Decimal('0.00'),
            'total': Decimal('0.00'),
        }

    def test_rates_read_from_settings(self, settings):
        settings.STORE = {**settings.STORE, 'TAX_RATE': '0.05', 'COD_FEE': '150'}
        totals = compute_totals(Decimal('1000'), 'cod')
        assert totals.tax == Decimal('50.00')
        assert totals.cod_fee == Decimal('150.00')


class TestCart:
    def test_add_accumulates_quantity(self, watch):
        cart = Cart()
        cart.add_item(watch)
        cart.add_item(watch, 2)
        assert len(cart) == 1
        assert cart.get_item_quantity(watch.id) == 3
        assert cart.total_items == 3

    def test_add_clamps_to_stock(self, watch):
        cart = Cart()
        cart.add_item(watch, 10)
        assert cart.get_item_quantity(watch.id) == 5

    def test_add_sold_out_product_raises(self):
        cart = Cart()
        sold_out = FakeProduct(name='Moonphase', price=Decimal('90000'), stock=0)
        with pytest.raises(OutOfStockException) as exc_info:
            cart.add_item(sold_out)
        assert exc_info.value.message == "Insufficient stock for Moonphase. Available: 0"
        assert not cart.can_checkout

    def test_update_quantity_clamps_and_removes(self, watch):
        cart = Cart()
        cart.add_item(watch)
        cart.update_quantity(watch.id, 50)
        assert cart.get_item_quantity(watch.id) == 5

        cart.update_quantity(watch.id, 0)
        assert cart.get_item_quantity(watch.id) == 0
        assert len(cart) == 0

    def test_remove_and_clear(self, watch):
        other = FakeProduct(name='Pearl Dial', price=Decimal('9000'), stock=3)
        cart = Cart()
        cart.add_item(watch)
        cart.add_item(other)

        cart.remove_item(str(watch.id))
        assert [line.product for line in cart.lines] == [other]

        cart.clear()
        assert cart.total_items == 0

    def test_subtotal_and_totals(self, watch):
        other = FakeProduct(name='Pearl Dial', price=Decimal('2500.50'), stock=3)
        cart = Cart()
        cart.add_item(watch, 2)
        cart.add_item(other)

        assert cart.subtotal == Decimal('4500.50')
        totals = cart.totals('jazzcash', RATES)
        assert totals.shipping_fee == Decimal('200.00')
        assert totals.total == Decimal('4500.50') + Decimal('450.05') + Decimal('200.00')
        assert cart.can_checkout
