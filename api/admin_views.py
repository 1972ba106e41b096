"""
Admin API Views

Back-office endpoints for products, orders, payment verification and the
dashboard. Every view here requires an authenticated admin.
"""
import logging

from rest_framework import status
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.catalog.services import (
    admin_search_products,
    create_product,
    delete_product,
    get_product,
    update_product,
)
from apps.core.storage import save_product_image
from apps.orders.services import admin_search_orders, get_order, items_for_order, update_order_status
from apps.orders.stats import get_admin_stats
from apps.payments.services import pending_payments, reject_payment, verify_payment

from .pagination import paginate
from .permissions import IsStoreAdmin
from .serializers import (
    AdminOrderSerializer,
    ImageUploadSerializer,
    OrderItemSerializer,
    OrderStatusUpdateSerializer,
    ProductSerializer,
    ProductWriteSerializer,
    VerifyPaymentSerializer,
)

logger = logging.getLogger(__name__)


class AdminAPIView(APIView):
    permission_classes = [IsStoreAdmin]
    rate_limit = 'admin'


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

class AdminProductListView(AdminAPIView):
    """
    List (GET) and create (POST) products.
    """

    @extend_schema(
        parameters=[
            OpenApiParameter('category', str),
            OpenApiParameter('search', str),
            OpenApiParameter('sortBy', str, enum=['price', 'stock', 'created_at', 'name']),
            OpenApiParameter('sortOrder', str, enum=['asc', 'desc']),
            OpenApiParameter('page', int),
            OpenApiParameter('limit', int),
        ],
        responses={200: ProductSerializer(many=True)},
        description="List products for the back-office"
    )
    def get(self, request):
        products, meta = paginate(admin_search_products(request.query_params), request.query_params)
        return Response({"products": ProductSerializer(products, many=True).data, **meta})

    @extend_schema(request=ProductWriteSerializer, responses={201: ProductSerializer}, description="Create a product")
    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = create_product(serializer.validated_data)
        return Response({"product": ProductSerializer(product).data}, status=status.HTTP_201_CREATED)


class AdminProductDetailView(AdminAPIView):
    @extend_schema(responses={200: ProductSerializer}, description="Get a product")
    def get(self, request, product_id):
        return Response({"product": ProductSerializer(get_product(product_id)).data})

    @extend_schema(request=ProductWriteSerializer, responses={200: ProductSerializer},
                   description="Update a product; images no longer listed are deleted from storage")
    def put(self, request, product_id):
        product = get_product(product_id)
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        product = update_product(product, serializer.validated_data)
        return Response({"product": ProductSerializer(product).data})

    @extend_schema(request=None, responses={200: None}, description="Delete a product and its images")
    def delete(self, request, product_id):
        delete_product(get_product(product_id))
        return Response({"success": True, "message": "Product deleted successfully"})


class AdminProductImageUploadView(AdminAPIView):
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=ImageUploadSerializer, description="Upload a product image (JPG, PNG or WebP, max 5MB)")
    def post(self, request):
        serializer = ImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        url = save_product_image(serializer.validated_data['file'])
        return Response({"url": url}, status=status.HTTP_201_CREATED)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class AdminOrderListView(AdminAPIView):
    @extend_schema(
        parameters=[
            OpenApiParameter('status', str),
            OpenApiParameter('payment_method', str),
            OpenApiParameter('search', str, description="Order id, customer name or e-mail, transaction id"),
            OpenApiParameter('page', int),
            OpenApiParameter('limit', int),
        ],
        responses={200: AdminOrderSerializer(many=True)},
        description="List all orders with customer details"
    )
    def get(self, request):
        orders, meta = paginate(admin_search_orders(request.query_params), request.query_params)
        return Response({"orders": AdminOrderSerializer(orders, many=True).data, **meta})


class AdminOrderDetailView(AdminAPIView):
    @extend_schema(responses={200: AdminOrderSerializer}, description="Order with its items")
    def get(self, request, order_id):
        order = get_order(order_id)
        return Response({
            "order": AdminOrderSerializer(order).data,
            "items": OrderItemSerializer(items_for_order(order), many=True).data,
        })

    @extend_schema(request=OrderStatusUpdateSerializer, description="Change an order's status")
    def put(self, request, order_id):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = update_order_status(order_id, serializer.validated_data['status'])
        return Response({
            "success": True,
            "message": f"Order status updated to {order.status}",
            "order": AdminOrderSerializer(order).data,
        })


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

class PendingPaymentsView(AdminAPIView):
    @extend_schema(responses={200: AdminOrderSerializer(many=True)}, description="Orders awaiting payment, oldest first")
    def get(self, request):
        return Response({"orders": AdminOrderSerializer(pending_payments(), many=True).data})


class VerifyPaymentView(AdminAPIView):
    """
    Verify or reject the payment on a wallet order and e-mail the customer.
    """

    @extend_schema(request=VerifyPaymentSerializer, description="Verify or reject an order's payment")
    def post(self, request):
        if not request.data.get('orderId') or request.data.get('verified') is None:
            return Response(
                {"error": "Order ID and verification status are required"},
                status=status.HTTP_400_BAD_REQUEST
            )

        serializer = VerifyPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data['verified']:
            outcome = verify_payment(data['orderId'], request.user, data.get('adminNotes') or '')
        else:
            outcome = reject_payment(data['orderId'], request.user, data.get('rejectionReason') or '')

        if not outcome.notified:
            logger.warning(f"Customer was not notified about payment review of order {outcome.order.id}")

        return Response({"success": True, "message": outcome.message})


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

class AdminStatsView(AdminAPIView):
    @extend_schema(description="Dashboard statistics")
    def get(self, request):
        stats = get_admin_stats()
        return Response({
            "stats": {
                "totalProducts": stats.total_products,
                "totalOrders": stats.total_orders,
                "totalRevenue": stats.total_revenue,
                "pendingPayments": stats.pending_payments,
                "lowStockProducts": ProductSerializer(stats.low_stock_products, many=True).data,
                "recentOrders": AdminOrderSerializer(stats.recent_orders, many=True).data,
                "revenueByPaymentMethod": stats.revenue_by_payment_method,
                "ordersByPaymentMethod": stats.orders_by_payment_method,
            }
        })
