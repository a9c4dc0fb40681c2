from django.urls import path

from . import views

app_name = 'articles'

urlpatterns = [
    path('', views.ArticleListView.as_view(), name='list'),
    path('add/', views.ArticleAddView.as_view(), name='add'),
    path('<uuid:pk>/edit/', views.ArticleEditView.as_view(), name='edit'),
]
