"""
URL Configuration for user administration.
Authentication endpoints are in auth_urls.py
"""
from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Super admin: every user in the system
    path('users/', views.user_list, name='user_list'),
    path('users/<int:user_id>/', views.user_detail, name='user_detail'),
    path('users/<int:user_id>/reset-password/', views.user_reset_password, name='user_reset_password'),

    # Company admin: users of their own company
    path('company-users/', views.company_user_list, name='company_user_list'),
    path('company-users/<int:user_id>/', views.company_user_detail, name='company_user_detail'),
    path('company-users/<int:user_id>/reset-password/', views.company_user_reset_password, name='company_user_reset_password'),
]
