"""
API URL Configuration
"""
from django.urls import path

from . import admin_views
from .views import (
    CartItemDetailView,
    CartItemsView,
    CartView,
    ContactView,
    HealthCheckView,
    LogErrorView,
    LoginView,
    LogoutView,
    OrderDetailView,
    OrderListCreateView,
    PasswordChangeView,
    PaymentProofUploadView,
    ProductDetailView,
    ProductListView,
    ProfileStatsView,
    ProfileView,
    SessionView,
    SignupView,
)

app_name = 'api'

urlpatterns = [
    # Catalog
    path('products/', ProductListView.as_view(), name='product-list'),
    path('products/<str:product_id>/', ProductDetailView.as_view(), name='product-detail'),

    # Auth
    path('auth/signup/', SignupView.as_view(), name='signup'),
    path('auth/login/', LoginView.as_view(), name='login'),
    path('auth/logout/', LogoutView.as_view(), name='logout'),
    path('auth/session/', SessionView.as_view(), name='session'),

    # Profile
    path('profile/', ProfileView.as_view(), name='profile'),
    path('profile/password/', PasswordChangeView.as_view(), name='profile-password'),
    path('profile/stats/', ProfileStatsView.as_view(), name='profile-stats'),

    # Cart
    path('cart/', CartView.as_view(), name='cart'),
    path('cart/items/', CartItemsView.as_view(), name='cart-items'),
    path('cart/items/<str:product_id>/', CartItemDetailView.as_view(), name='cart-item-detail'),

    # Orders
    path('orders/', OrderListCreateView.as_view(), name='order-list'),
    path('orders/<str:order_id>/', OrderDetailView.as_view(), name='order-detail'),
    path('uploads/payment-proof/', PaymentProofUploadView.as_view(), name='payment-proof-upload'),

    # Admin
    path('admin/products/', admin_views.AdminProductListView.as_view(), name='admin-product-list'),
    path('admin/products/<str:product_id>/', admin_views.AdminProductDetailView.as_view(), name='admin-product-detail'),
    path('admin/uploads/product-image/', admin_views.AdminProductImageUploadView.as_view(), name='admin-product-image-upload'),
    path('admin/orders/', admin_views.AdminOrderListView.as_view(), name='admin-order-list'),
    path('admin/orders/<str:order_id>/', admin_views.AdminOrderDetailView.as_view(), name='admin-order-detail'),
    path('admin/pending-payments/', admin_views.PendingPaymentsView.as_view(), name='admin-pending-payments'),
    path('admin/verify-payment/', admin_views.VerifyPaymentView.as_view(), name='admin-verify-payment'),
    path('admin/stats/', admin_views.AdminStatsView.as_view(), name='admin-stats'),

    # Misc
    path('contact/', ContactView.as_view(), name='contact'),
    path('log-error/', LogErrorView.as_view(), name='log-error'),
    path('health/', HealthCheckView.as_view(), name='health'),
]
