"""
URL configuration for HR Work Structures module.
"""
from django.urls import path
from HR.work_structures import views

app_name = 'work_structures'

urlpatterns = [
    # Department endpoints
    path('departments/', views.department_list, name='department_list'),
    path('departments/<int:pk>/', views.department_detail, name='department_detail'),

    # Designation endpoints
    path('designations/', views.designation_list, name='designation_list'),
    path('designations/<int:pk>/', views.designation_detail, name='designation_detail'),

    # Work shift endpoints
    path('work-shifts/', views.work_shift_list, name='work_shift_list'),
    path('work-shifts/<int:pk>/', views.work_shift_detail, name='work_shift_detail'),
]
