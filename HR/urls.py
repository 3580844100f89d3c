"""
HR App - Main URL Configuration
This file routes URLs to the appropriate sub-apps within the HR module.
"""
from django.urls import path, include

app_name = 'hr'

urlpatterns = [
    # Departments, designations, work shifts
    path('work_structures/', include('HR.work_structures.urls')),
    # Employees
    path('person/', include('HR.person.urls')),
    path('attendance/', include('HR.attendance.urls')),
    path('regularizations/', include('HR.attendance_regularization.urls')),
    path('leave/', include('HR.leave.urls')),
    path('notices/', include('HR.notices.urls')),
]
