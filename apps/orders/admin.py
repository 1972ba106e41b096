from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ('product', 'product_name', 'quantity', 'price')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'status', 'payment_method', 'total_amount', 'payment_verified', 'created_at')
    list_filter = ('status', 'payment_method', 'payment_verified')
    search_fields = ('id', 'user__email', 'transaction_id')
    inlines = [OrderItemInline]
