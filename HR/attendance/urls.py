"""
URL configuration for HR Attendance module.
"""
from django.urls import path

from . import views

app_name = 'attendance'

urlpatterns = [
    path('', views.attendance_list, name='attendance_list'),
    path('check-in/', views.check_in, name='check_in'),
    path('check-out/', views.check_out, name='check_out'),
    path('me/', views.my_attendance, name='my_attendance'),
    path('export/', views.export_attendance, name='export_attendance'),
    path('import/', views.import_attendance, name='import_attendance'),
    path('import/template/', views.import_template, name='import_template'),
    path('mark-absents/', views.mark_absents, name='mark_absents'),
    path('<int:pk>/', views.attendance_detail, name='attendance_detail'),
]
