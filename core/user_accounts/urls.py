"""
URL Configuration for the user accounts app.
Handles the current user's profile and administrator user management.
Authentication endpoints are in auth_urls.py
"""
from django.urls import path
from . import views

app_name = 'user_accounts'

urlpatterns = [
    # Current user
    path('me/', views.me, name='me'),
    path('profile/', views.user_profile, name='user_profile'),
    # Admin User Management Endpoints (manage_users page)
    path('admin/users/', views.admin_user_list, name='admin_user_list'),
    path('admin/users/<int:user_id>/', views.admin_user_detail, name='admin_user_detail'),
]
