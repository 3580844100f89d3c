"""
URL configuration for HR Person module.
"""
from django.urls import path

from . import views

app_name = 'person'

urlpatterns = [
    # Employee endpoints
    path('employees/', views.employee_list, name='employee_list'),
    path('employees/statistics/', views.employee_statistics, name='employee_statistics'),
    path('employees/me/', views.my_profile, name='my_profile'),
    path('employees/<int:pk>/', views.employee_detail, name='employee_detail'),
    path('employees/<int:pk>/status/', views.employee_status, name='employee_status'),
]
