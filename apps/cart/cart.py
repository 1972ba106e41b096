"""
In-memory shopping cart and checkout arithmetic

subtotal = sum(price * quantity)
tax      = subtotal * tax rate
shipping = 0 when subtotal reaches the free-shipping threshold, else the flat fee
cod fee  = flat fee only for cash on delivery
total    = subtotal + tax + shipping + cod fee

An empty cart totals to zero across the board.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from django.conf import settings

from apps.core.exceptions import OutOfStockException

CENTS = Decimal('0.01')
ZERO = Decimal('0.00')

COD = 'cod'


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CheckoutRates:
    tax_rate: Decimal
    shipping_fee: Decimal
    free_shipping_threshold: Decimal
    cod_fee: Decimal

    @classmethod
    def from_settings(cls) -> "CheckoutRates":
        store = settings.STORE
        return cls(
            tax_rate=Decimal(str(store['TAX_RATE'])),
            shipping_fee=to_money(store['SHIPPING_FEE']),
            free_shipping_threshold=to_money(store['FREE_SHIPPING_THRESHOLD']),
            cod_fee=to_money(store['COD_FEE']),
        )


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    shipping_fee: Decimal = ZERO
    cod_fee: Decimal = ZERO
    total: Decimal = ZERO

    def as_dict(self) -> Dict[str, Decimal]:
        return {
            'subtotal': self.subtotal,
            'tax': self.tax,
            'shipping_fee': self.shipping_fee,
            'cod_fee': self.cod_fee,
            'total': self.total,
        }


def compute_totals(subtotal, payment_method: Optional[str] = None,
                   rates: Optional[CheckoutRates] = None) -> CartTotals:
    """Checkout figures for a given subtotal."""
    subtotal = to_money(subtotal)
    if subtotal <= 0:
        return CartTotals()

    rates = rates or CheckoutRates.from_settings()
    tax = to_money(subtotal * rates.tax_rate)
    shipping = ZERO if subtotal >= rates.free_shipping_threshold else rates.shipping_fee
    cod_fee = rates.cod_fee if payment_method == COD else ZERO
    return CartTotals(
        subtotal=subtotal,
        tax=tax,
        shipping_fee=shipping,
        cod_fee=cod_fee,
        total=subtotal + tax + shipping + cod_fee,
    )


@dataclass
class CartLine:
    """A product snapshot and the quantity wanted."""
    product: object
    quantity: int

    @property
    def product_id(self) -> str:
        return str(self.product.id)

    @property
    def line_total(self) -> Decimal:
        return to_money(self.product.price) * self.quantity


@dataclass
class Cart:
    """
    Ordered list of lines, at most one per product. Quantities stay within
    [1, product.stock].
    """
    lines: List[CartLine] = field(default_factory=list)

    def _find(self, product_id) -> Optional[CartLine]:
        product_id = str(product_id)
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def add_item(self, product, quantity: int = 1) -> CartLine:
        if product.stock <= 0:
            raise OutOfStockException(product.name, product.stock)

        line = self._find(product.id)
        if line is None:
            line = CartLine(product=product, quantity=0)
            self.lines.append(line)
        else:
            line.product = product
        line.quantity = min(max(line.quantity + quantity, 1), product.stock)
        return line

    def remove_item(self, product_id) -> None:
        self.lines = [line for line in self.lines if line.product_id != str(product_id)]

    def update_quantity(self, product_id, quantity: int) -> None:
        """A quantity of zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id)
            return
        line = self._find(product_id)
        if line is not None:
            line.quantity = min(quantity, max(line.product.stock, 1))

    def clear(self) -> None:
        self.lines = []

    def get_item_quantity(self, product_id) -> int:
        line = self._find(product_id)
        return line.quantity if line else 0

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> Decimal:
        return to_money(sum((line.line_total for line in self.lines), ZERO))

    def totals(self, payment_method: Optional[str] = None,
               rates: Optional[CheckoutRates] = None) -> CartTotals:
        return compute_totals(self.subtotal, payment_method, rates)

    @property
    def can_checkout(self) -> bool:
        return bool(self.lines)

    def __len__(self):
        return len(self.lines)
