"""
URL configuration for dashboards.
"""
from django.urls import path

from . import views

app_name = 'dashboard'

urlpatterns = [
    path('super-admin/', views.super_admin_dashboard, name='super_admin_dashboard'),
    path('company/', views.company_dashboard, name='company_dashboard'),
    path('me/', views.my_dashboard, name='my_dashboard'),
]
