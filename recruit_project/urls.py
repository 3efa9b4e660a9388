"""
URL configuration for recruit_project project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('core/', include('core.urls')),
    path('recruitment/', include('recruitment.urls')),

    # Authentication endpoints (login, logout, password, tokens)
    path('auth/', include('core.user_accounts.auth_urls')),
]
