"""
URL configuration for HR Notices module.
"""
from django.urls import path

from . import views

app_name = 'notices'

urlpatterns = [
    # Authoring (company-level users)
    path('', views.notice_list, name='notice_list'),
    path('<int:pk>/', views.notice_detail, name='notice_detail'),

    # Employee feed
    path('me/', views.my_notices, name='my_notices'),
    path('me/<int:pk>/', views.my_notice_detail, name='my_notice_detail'),
    path('me/<int:pk>/read/', views.mark_notice_read, name='mark_notice_read'),
]
