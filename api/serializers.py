"""
API Serializers for Request/Response handling
"""
from rest_framework import serializers

from apps.accounts.models import Profile
from apps.catalog.models import Product, CATEGORIES
from apps.core.utils import is_valid_product_name
from apps.orders.models import Order, OrderItem
from apps.orders.transitions import STATUSES

REQUIRED_FIELD_ERRORS = {
    'required': 'Missing required fields',
    'blank': 'Missing required fields',
    'null': 'Missing required fields',
}

MAX_PRICE = 10_000_000


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class ProductSerializer(serializers.ModelSerializer):
    """
    Product as shown on the storefront and in the back-office.
    """
    image_url = serializers.CharField(read_only=True, allow_null=True)
    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'brand', 'price', 'description', 'image_url', 'image_urls',
            'stock', 'in_stock', 'category', 'created_at', 'updated_at',
        ]


class ProductSummarySerializer(serializers.ModelSerializer):
    image_url = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = Product
        fields = ['id', 'name', 'brand', 'image_url', 'category']


class ProductWriteSerializer(serializers.Serializer):
    """
    Admin product input. image_url is accepted as a single-image fallback for image_urls.
    """
    name = serializers.CharField(max_length=100, error_messages=REQUIRED_FIELD_ERRORS)
    brand = serializers.CharField(max_length=100, error_messages=REQUIRED_FIELD_ERRORS)
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        error_messages={**REQUIRED_FIELD_ERRORS, 'invalid': 'Price must be a positive number'},
    )
    description = serializers.CharField(error_messages=REQUIRED_FIELD_ERRORS)
    category = serializers.ChoiceField(
        choices=CATEGORIES,
        error_messages={**REQUIRED_FIELD_ERRORS, 'invalid_choice': 'Invalid category'},
    )
    stock = serializers.IntegerField(
        min_value=0,
        max_value=999_999,
        error_messages={
            'required': 'Stock must be a non-negative number',
            'null': 'Stock must be a non-negative number',
            'invalid': 'Stock must be a non-negative number',
            'min_value': 'Stock must be a non-negative number',
            'max_value': 'Stock is too high',
        },
    )
    image_urls = serializers.ListField(
        child=serializers.CharField(max_length=500),
        required=False,
        help_text="Ordered image URLs, first one is primary",
    )
    image_url = serializers.CharField(required=False, allow_blank=True, max_length=500)

    def validate_name(self, value):
        if not is_valid_product_name(value.strip()):
            raise serializers.ValidationError('Invalid product name')
        return value

    def validate_price(self, value):
        if value <= 0:
            raise serializers.ValidationError('Price must be a positive number')
        if value > MAX_PRICE:
            raise serializers.ValidationError('Price is too high')
        return value

    def validate(self, attrs):
        touched = 'image_urls' in attrs or 'image_url' in attrs
        images = attrs.get('image_urls') or ([attrs['image_url']] if attrs.get('image_url') else [])
        attrs.pop('image_url', None)

        if (touched or not self.partial) and not images:
            raise serializers.ValidationError('At least one product image is required')
        if images:
            attrs['image_urls'] = images
        return attrs


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

class SignupSerializer(serializers.Serializer):
    email = serializers.CharField(max_length=254, error_messages={'required': 'Email and password are required'})
    password = serializers.CharField(
        max_length=256,
        trim_whitespace=False,
        error_messages={'required': 'Email and password are required'},
    )
    full_name = serializers.CharField(required=False, allow_blank=True, max_length=255)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(error_messages={'required': 'Email and password are required'})
    password = serializers.CharField(trim_whitespace=False, error_messages={'required': 'Email and password are required'})


class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()
    full_name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()

    def get_full_name(self, user):
        profile = getattr(user, 'profile', None)
        return profile.full_name if profile else None

    def get_role(self, user):
        profile = getattr(user, 'profile', None)
        return profile.role if profile else None


class ProfileSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source='user_id', read_only=True)
    email = serializers.EmailField(read_only=True)

    class Meta:
        model = Profile
        fields = [
            'id', 'email', 'full_name', 'phone', 'address', 'city', 'postal_code',
            'country', 'role', 'created_at', 'updated_at',
        ]
        read_only_fields = ['role', 'created_at', 'updated_at']


class ProfileUpdateSerializer(serializers.Serializer):
    full_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20)
    address = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)
    postal_code = serializers.CharField(required=False, allow_blank=True, max_length=10)
    country = serializers.CharField(required=False, allow_blank=True, max_length=100)


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(trim_whitespace=False)
    new_password = serializers.CharField(trim_whitespace=False)


class UserStatsSerializer(serializers.Serializer):
    totalOrders = serializers.IntegerField()
    totalSpent = serializers.DecimalField(max_digits=14, decimal_places=2)
    memberSince = serializers.CharField()


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------

class CartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField(error_messages={'invalid': 'Invalid product id'})
    quantity = serializers.IntegerField(required=False, default=1, min_value=1)


class CartQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField()


class CartReplaceSerializer(serializers.Serializer):
    items = CartItemInputSerializer(many=True)


def serialize_cart(cart, payment_method=None):
    """Saved cart with its lines and checkout figures."""
    totals = cart.totals(payment_method)
    return {
        'items': [
            {
                'product': ProductSerializer(line.product).data,
                'quantity': line.quantity,
                'line_total': line.line_total,
            }
            for line in cart.lines
        ],
        'total_items': cart.total_items,
        'totals': totals.as_dict(),
        'can_checkout': cart.can_checkout,
    }


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class CheckoutLineSerializer(serializers.Serializer):
    productId = serializers.UUIDField(error_messages={'invalid': 'Invalid product id'})
    quantity = serializers.IntegerField(min_value=1)


class CheckoutSerializer(serializers.Serializer):
    """
    Checkout request. cartItems may be omitted to check out the saved cart.
    """
    cartItems = CheckoutLineSerializer(many=True, required=False)
    shippingAddress = serializers.DictField(error_messages={
        'required': 'Invalid request data',
        'null': 'Invalid request data',
        'not_a_dict': 'Invalid request data',
    })
    paymentMethod = serializers.CharField(required=False, allow_blank=True, default='cod')
    transactionId = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)
    paymentProofUrl = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)
    orderReference = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)


class CheckoutResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    orderId = serializers.UUIDField()
    message = serializers.CharField()


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True, allow_null=True)
    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    product = ProductSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'product_id', 'product_name', 'quantity', 'price', 'line_total', 'product', 'created_at']


class OrderSerializer(serializers.ModelSerializer):
    order_reference = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = Order
        fields = [
            'id', 'status', 'payment_method', 'payment_verified', 'payment_proof_url',
            'transaction_id', 'subtotal', 'tax', 'shipping_fee', 'cod_fee', 'total_amount',
            'shipping_address', 'order_reference', 'created_at', 'updated_at',
        ]


class AdminOrderSerializer(OrderSerializer):
    """Order with the customer's contact details."""
    user_id = serializers.IntegerField(read_only=True)
    customer_name = serializers.SerializerMethodField()
    customer_email = serializers.SerializerMethodField()
    customer_phone = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['user_id', 'customer_name', 'customer_email', 'customer_phone']

    def _profile(self, order):
        return getattr(order.user, 'profile', None)

    def get_customer_name(self, order):
        profile = self._profile(order)
        return (profile.full_name or None) if profile else None

    def get_customer_email(self, order):
        return order.user.email or None

    def get_customer_phone(self, order):
        profile = self._profile(order)
        return (profile.phone or None) if profile else None


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=STATUSES,
        error_messages={'required': 'Status is required', 'invalid_choice': 'Invalid status'},
    )


class VerifyPaymentSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()
    verified = serializers.BooleanField()
    adminNotes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    rejectionReason = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class PaymentProofUploadSerializer(serializers.Serializer):
    orderId = serializers.UUIDField(error_messages={'required': 'Order ID is required'})
    file = serializers.FileField(error_messages={'required': 'No file provided'})


class ImageUploadSerializer(serializers.Serializer):
    file = serializers.FileField(error_messages={'required': 'No file provided'})


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------

REQUIRED_FIELD_MESSAGES = {
    'required': 'All fields are required',
    'blank': 'All fields are required',
    'null': 'All fields are required',
}


class ContactSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, error_messages=REQUIRED_FIELD_MESSAGES)
    email = serializers.EmailField(error_messages={**REQUIRED_FIELD_MESSAGES, 'invalid': 'Invalid email address'})
    subject = serializers.CharField(max_length=255, error_messages=REQUIRED_FIELD_MESSAGES)
    message = serializers.CharField(max_length=5000, error_messages=REQUIRED_FIELD_MESSAGES)


class ClientErrorSerializer(serializers.Serializer):
    """
    Error report posted by the storefront.
    """
    message = serializers.CharField(max_length=2000, error_messages={'required': 'Error message is required'})
    level = serializers.ChoiceField(choices=['error', 'warning', 'info'], required=False, default='error')
    stack = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=10000)
    context = serializers.DictField(required=False, default=dict)
    url = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=2000)
    userAgent = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)


class HealthCheckSerializer(serializers.Serializer):
    status = serializers.CharField()
    timestamp = serializers.CharField()
    service = serializers.CharField()
    database = serializers.CharField()
