"""
URL configuration for the article management site.

    /                       → redirect to the article list
    /articles/              → list, add and edit pages
    /accounts/register/     → user registration
    /admin/                 → Django admin
"""

from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path('', RedirectView.as_view(pattern_name='articles:list', permanent=False), name='home'),
    path('admin/', admin.site.urls),
    path('articles/', include('articles.urls')),
    path('accounts/', include('accounts.urls')),
]
