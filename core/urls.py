"""
URL Configuration for Core module.
Tenant administration: companies, user accounts and dashboards.
"""
from django.urls import path, include

app_name = 'core'

urlpatterns = [
    path('companies/', include('core.companies.urls')),
    path('user_accounts/', include('core.user_accounts.urls')),
    path('dashboard/', include('core.dashboard.urls')),
]
