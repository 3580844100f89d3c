"""
URL configuration for HR Leave module.
"""
from django.urls import path

from . import views

app_name = 'leave'

urlpatterns = [
    # Leave types
    path('types/', views.leave_type_list, name='leave_type_list'),
    path('types/<int:pk>/', views.leave_type_detail, name='leave_type_detail'),

    # Own requests
    path('requests/', views.leave_request_create, name='leave_request_create'),
    path('requests/me/', views.my_leave_requests, name='my_leave_requests'),
    path('requests/me/<int:pk>/', views.my_leave_request_detail, name='my_leave_request_detail'),
    path('requests/me/<int:pk>/cancel/', views.cancel_leave_request, name='cancel_leave_request'),

    # Review
    path('requests/admin/', views.leave_request_list, name='leave_request_list'),
    path('requests/admin/<int:pk>/', views.leave_request_detail, name='leave_request_detail'),
    path('requests/admin/<int:pk>/approve/', views.approve_leave_request, name='approve_leave_request'),
    path('requests/admin/<int:pk>/reject/', views.reject_leave_request, name='reject_leave_request'),
]
