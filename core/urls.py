"""
URL Configuration for Core module.
This module handles core functionality: user accounts and access control.
"""
from django.urls import path, include

app_name = 'core'

urlpatterns = [
    # User accounts sub-app URLs
    path('user_accounts/', include('core.user_accounts.urls')),

    # Roles and permissions sub-app URLs
    path('access_control/', include('core.access_control.urls')),
]
