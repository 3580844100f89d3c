"""
URL Configuration for Authentication endpoints.
Handles super admin bootstrap, login, logout, current user, password changes
and token refresh. User administration endpoints are in urls.py
"""
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from . import views

app_name = 'auth'

urlpatterns = [
    # Bootstrap and session
    path('super-admin/', views.create_super_admin, name='create_super_admin'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('me/', views.me, name='me'),

    # Password management
    path('change-password/', views.change_password, name='change_password'),

    # Token management
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
