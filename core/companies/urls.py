"""
URL configuration for Companies (tenants). Super admin only.
"""
from django.urls import path
from core.companies import views

app_name = 'companies'

urlpatterns = [
    path('', views.company_list, name='company_list'),
    path('<int:pk>/', views.company_detail, name='company_detail'),
    path('<int:pk>/status/', views.company_status, name='company_status'),
]
