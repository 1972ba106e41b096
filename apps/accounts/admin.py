from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'full_name', 'phone', 'city', 'role', 'created_at')
    list_filter = ('role', 'city')
    search_fields = ('full_name', 'user__email', 'phone')
