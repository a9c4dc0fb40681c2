"""
Django admin configuration for articles.

Articles are normally managed through the article pages; the admin is a
read-mostly view for browsing and bulk clean-up.
"""

from django.contrib import admin

from .models import Article


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    """Admin for browsing and editing articles."""

    list_display = ['title_short', 'author', 'created_at']
    search_fields = ['title', 'description', 'author']
    readonly_fields = ['id', 'created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        (None, {
            'fields': ('id', 'title', 'author'),
        }),
        ('Content', {
            'fields': ('description',),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    @admin.display(description='Title')
    def title_short(self, obj):
        return obj.title[:80] + '…' if len(obj.title) > 80 else obj.title
