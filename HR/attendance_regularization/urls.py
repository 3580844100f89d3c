"""
URL configuration for HR Attendance Regularization module.
"""
from django.urls import path

from . import views

app_name = 'regularization'

urlpatterns = [
    # Own requests
    path('', views.regularization_create, name='regularization_create'),
    path('me/', views.my_regularizations, name='my_regularizations'),
    path('me/<int:pk>/', views.my_regularization_detail, name='my_regularization_detail'),
    path('me/<int:pk>/cancel/', views.cancel_regularization, name='cancel_regularization'),

    # Review
    path('admin/', views.regularization_list, name='regularization_list'),
    path('admin/<int:pk>/', views.regularization_detail, name='regularization_detail'),
    path('admin/<int:pk>/approve/', views.approve_regularization, name='approve_regularization'),
    path('admin/<int:pk>/reject/', views.reject_regularization, name='reject_regularization'),
]
