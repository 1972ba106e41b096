from django.contrib import admin

from .models import PaymentReview


@admin.register(PaymentReview)
class PaymentReviewAdmin(admin.ModelAdmin):
    list_display = ('order', 'decision', 'reviewer', 'created_at')
    list_filter = ('decision',)
    search_fields = ('order__id', 'notes')
