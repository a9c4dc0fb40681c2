from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin for viewing registered users. The stored hash is never editable."""

    list_display = ['username', 'created_at']
    search_fields = ['username']
    readonly_fields = ['password_hash', 'created_at']
