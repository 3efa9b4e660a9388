"""
URL Configuration for the recruitment app.
Clients, jobs, the current user's assigned jobs, and job assignments.
"""
from django.urls import path
from . import views

app_name = 'recruitment'

urlpatterns = [
    # Client endpoints
    path('clients/', views.client_list, name='client-list'),
    path('clients/<int:pk>/', views.client_detail, name='client-detail'),

    # Job endpoints
    path('jobs/', views.job_list, name='job-list'),
    path('jobs/<int:pk>/', views.job_detail, name='job-detail'),
    path('jobs/<int:pk>/close/', views.job_close, name='job-close'),
    path('my-jobs/', views.my_jobs, name='my-jobs'),

    # External recruiter assignments
    path('job-assignments/', views.job_assignment_list, name='job-assignment-list'),
    path('job-assignments/<int:pk>/', views.job_assignment_detail, name='job-assignment-detail'),
]
