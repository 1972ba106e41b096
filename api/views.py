"""
API Views for the TickTee Style storefront

This module provides REST API endpoints for:
- Catalog: product listing and detail
- Auth: signup, login, logout and session lookup
- Profile: customer details, password change and order stats
- Cart: the saved copy of the customer's cart
- Orders: checkout, order history and payment proof upload
- Misc: contact form, client error reports and health check
"""
import logging

from django.apps import apps
from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.db import connection, DatabaseError
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiParameter

from apps.accounts.services import (
    change_password,
    profile_placeholder,
    register_user,
    update_profile,
)
from apps.accounts.models import Profile
from apps.cart import services as cart_services
from apps.catalog.services import get_product, search_products
from apps.contact.services import submit_message
from apps.orders.services import (
    CheckoutRequest,
    CheckoutService,
    get_order_for_user,
    items_for_order,
    orders_for_user,
)
from apps.orders.stats import get_user_stats
from apps.payments.services import attach_payment_proof

from .pagination import paginate
from .serializers import (
    CartItemInputSerializer,
    CartQuantitySerializer,
    CartReplaceSerializer,
    CheckoutResponseSerializer,
    CheckoutSerializer,
    ClientErrorSerializer,
    ContactSerializer,
    HealthCheckSerializer,
    LoginSerializer,
    OrderItemSerializer,
    OrderSerializer,
    PasswordChangeSerializer,
    PaymentProofUploadSerializer,
    ProductSerializer,
    ProfileSerializer,
    ProfileUpdateSerializer,
    SignupSerializer,
    UserSerializer,
    UserStatsSerializer,
    serialize_cart,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = 'TickTee Style API'


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class ProductListView(APIView):
    """
    Storefront product listing with search, filters and sorting.
    """
    permission_classes = [AllowAny]
    rate_limit = 'public'

    @extend_schema(
        parameters=[
            OpenApiParameter('search', str, description="Matches name, brand or description"),
            OpenApiParameter('category', str),
            OpenApiParameter('brand', str),
            OpenApiParameter('min_price', float),
            OpenApiParameter('max_price', float),
            OpenApiParameter('in_stock', bool),
            OpenApiParameter('sort', str, enum=['newest', 'price_asc', 'price_desc', 'name']),
            OpenApiParameter('page', int),
            OpenApiParameter('limit', int),
        ],
        responses={200: ProductSerializer(many=True)},
        description="List products in the catalog"
    )
    def get(self, request):
        products, meta = paginate(search_products(request.query_params), request.query_params)
        return Response({"products": ProductSerializer(products, many=True).data, **meta})


class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    rate_limit = 'public'

    @extend_schema(responses={200: ProductSerializer}, description="Get a single product")
    def get(self, request, product_id):
        product = get_product(product_id)
        return Response({"product": ProductSerializer(product).data})


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class SignupView(APIView):
    """
    Create a customer account and start a session for it.
    """
    permission_classes = [AllowAny]
    rate_limit = 'auth'

    @extend_schema(request=SignupSerializer, responses={201: UserSerializer}, description="Register a customer")
    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = register_user(data['email'], data['password'], data.get('full_name', ''))
        login(request, user, backend='django.contrib.auth.backends.ModelBackend')
        return Response({"user": UserSerializer(user).data}, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]
    rate_limit = 'auth'

    @extend_schema(request=LoginSerializer, responses={200: UserSerializer}, description="Start a session")
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email'].strip().lower()

        user = authenticate(request, username=email, password=serializer.validated_data['password'])
        if user is None:
            logger.info(f"Failed login for {email}")
            raise AuthenticationFailed("Invalid email or password")

        login(request, user)
        return Response({"user": UserSerializer(user).data})


class LogoutView(APIView):
    permission_classes = [AllowAny]
    rate_limit = 'standard'

    @extend_schema(request=None, responses={200: None}, description="End the current session")
    def post(self, request):
        logout(request)
        return Response({"success": True})


class SessionView(APIView):
    @extend_schema(responses={200: UserSerializer}, description="Who is signed in")
    def get(self, request):
        return Response({"user": UserSerializer(request.user).data})


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class ProfileView(APIView):
    """
    The signed-in customer's profile. GET answers with a placeholder when none is stored.
    """

    @extend_schema(responses={200: ProfileSerializer}, description="Get the current user's profile")
    def get(self, request):
        profile = Profile.objects.filter(user=request.user).select_related('user').first()
        data = ProfileSerializer(profile).data if profile else profile_placeholder(request.user)
        return Response({"success": True, "profile": data})

    @extend_schema(request=ProfileUpdateSerializer, responses={200: ProfileSerializer},
                   description="Create or update the current user's profile")
    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        profile = update_profile(request.user, serializer.validated_data)
        return Response({"success": True, "profile": ProfileSerializer(profile).data})


class PasswordChangeView(APIView):
    rate_limit = 'auth'

    @extend_schema(request=PasswordChangeSerializer, responses={200: None}, description="Change password")
    def post(self, request):
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        change_password(
            request.user,
            serializer.validated_data['current_password'],
            serializer.validated_data['new_password'],
        )
        update_session_auth_hash(request, request.user)
        return Response({"success": True, "message": "Password updated successfully"})


class ProfileStatsView(APIView):
    @extend_schema(responses={200: UserStatsSerializer}, description="Order count, total spent and join date")
    def get(self, request):
        stats = get_user_stats(request.user)
        return Response({"success": True, "stats": UserStatsSerializer(stats).data})


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------

class CartView(APIView):
    """
    Saved cart for the signed-in customer.
    """

    @extend_schema(
        parameters=[OpenApiParameter('payment_method', str, description="Include the COD fee when 'cod'")],
        description="Get the saved cart with totals"
    )
    def get(self, request):
        cart = cart_services.load_cart(request.user)
        return Response(serialize_cart(cart, request.query_params.get('payment_method')))

    @extend_schema(request=CartReplaceSerializer, description="Replace the saved cart with the client's cart")
    def put(self, request):
        serializer = CartReplaceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = cart_services.replace_cart(request.user, serializer.validated_data['items'])
        return Response(serialize_cart(cart))

    @extend_schema(request=None, description="Empty the saved cart")
    def delete(self, request):
        cart_services.clear_cart(request.user)
        return Response({"success": True})


class CartItemsView(APIView):
    @extend_schema(request=CartItemInputSerializer, description="Add a product to the saved cart")
    def post(self, request):
        serializer = CartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = cart_services.add_item(
            request.user,
            serializer.validated_data['product_id'],
            serializer.validated_data['quantity'],
        )
        return Response(serialize_cart(cart), status=status.HTTP_201_CREATED)


class CartItemDetailView(APIView):
    @extend_schema(request=CartQuantitySerializer, description="Set a line's quantity (0 removes it)")
    def patch(self, request, product_id):
        serializer = CartQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = cart_services.update_item(request.user, product_id, serializer.validated_data['quantity'])
        return Response(serialize_cart(cart))

    @extend_schema(request=None, description="Remove a product from the saved cart")
    def delete(self, request, product_id):
        cart = cart_services.remove_item(request.user, product_id)
        return Response(serialize_cart(cart))


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class OrderListCreateView(APIView):
    """
    Order history (GET) and checkout (POST).
    """
    rate_limits = {'POST': 'orders'}

    @extend_schema(responses={200: OrderSerializer(many=True)}, description="The current user's orders, newest first")
    def get(self, request):
        orders, meta = paginate(orders_for_user(request.user), request.query_params)
        return Response({"orders": OrderSerializer(orders, many=True).data, **meta})

    @extend_schema(
        request=CheckoutSerializer,
        responses={200: CheckoutResponseSerializer},
        description="Place an order",
        examples=[
            OpenApiExample(
                "Cash on delivery",
                value={
                    "cartItems": [{"productId": "6f1c2a34-8d1e-4f7b-9a55-0b3c2d1e4f56", "quantity": 1}],
                    "shippingAddress": {
                        "fullName": "Ayesha Khan",
                        "phone": "03001234567",
                        "streetAddress": "House 12, Street 4, F-7/2",
                        "city": "Islamabad",
                        "postalCode": "44000",
                        "country": "Pakistan",
                    },
                    "paymentMethod": "cod",
                },
                request_only=True
            ),
        ]
    )
    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        checkout = CheckoutRequest(
            shipping_address=data['shippingAddress'],
            items=[(line['productId'], line['quantity']) for line in data.get('cartItems', [])],
            payment_method=data.get('paymentMethod') or 'cod',
            transaction_id=data.get('transactionId'),
            payment_proof_url=data.get('paymentProofUrl'),
            order_reference=data.get('orderReference'),
        )
        order = CheckoutService().place_order(request.user, checkout)
        return Response({
            "success": True,
            "orderId": str(order.id),
            "message": "Order created successfully",
        })


class OrderDetailView(APIView):
    @extend_schema(responses={200: OrderSerializer}, description="One of the current user's orders with its items")
    def get(self, request, order_id):
        order = get_order_for_user(request.user, order_id)
        return Response({
            "success": True,
            "order": OrderSerializer(order).data,
            "items": OrderItemSerializer(items_for_order(order), many=True).data,
        })


class PaymentProofUploadView(APIView):
    """
    Upload a screenshot or PDF of a wallet payment for one of the user's orders.
    """
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=PaymentProofUploadSerializer, description="Upload a payment proof (JPG, PNG or PDF, max 5MB)")
    def post(self, request):
        serializer = PaymentProofUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        url = attach_payment_proof(
            request.user,
            serializer.validated_data['orderId'],
            serializer.validated_data['file'],
        )
        return Response({"url": url}, status=status.HTTP_201_CREATED)


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------

class ContactView(APIView):
    permission_classes = [AllowAny]
    rate_limit = 'contact'

    @extend_schema(request=ContactSerializer, description="Send a message to the store")
    def post(self, request):
        serializer = ContactSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submit_message(serializer.validated_data)
        return Response({
            "success": True,
            "message": "Thank you for your message. We will get back to you soon.",
        })


class LogErrorView(APIView):
    """
    Collects error reports from the storefront.
    """
    permission_classes = [AllowAny]
    rate_limit = 'contact'
    error_log = None

    def get_error_log(self):
        return self.error_log or apps.get_app_config('core').error_log

    @extend_schema(request=ClientErrorSerializer, description="Record a client-side error")
    def post(self, request):
        serializer = ClientErrorSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = request.user
        self.get_error_log().log(
            data['message'],
            level=data['level'],
            stack=data.get('stack'),
            context=data.get('context') or {},
            url=data.get('url'),
            user_agent=data.get('userAgent') or request.META.get('HTTP_USER_AGENT'),
            user_id=str(user.pk) if user and user.is_authenticated else None,
        )
        return Response({"success": True})


class HealthCheckView(APIView):
    """
    System health check endpoint.

    Returns the status of the API and database connectivity.
    """
    permission_classes = [AllowAny]
    rate_limit = 'public'

    @extend_schema(
        responses={200: HealthCheckSerializer},
        description="Check system health status"
    )
    def get(self, request):
        # Check database connectivity
        db_status = "healthy"
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        except DatabaseError as e:
            logger.error(f"Health check database error: {e}")
            db_status = f"unhealthy: {e}"

        return Response({
            "status": "ok" if db_status == "healthy" else "degraded",
            "timestamp": timezone.now().isoformat(),
            "service": SERVICE_NAME,
            "database": db_status,
        }, status=status.HTTP_200_OK)
