"""
URL Configuration for the access control app.
Handles role and permission administration plus the resolved-permission
endpoints the browser client reads.
"""
from django.urls import path
from . import views

app_name = 'access_control'

urlpatterns = [
    # Permission catalog
    path('permissions/', views.permission_list, name='permission-list'),

    # Role endpoints
    path('roles/', views.role_list, name='role-list'),
    path('roles/<int:pk>/', views.role_detail, name='role-detail'),
    path('roles/<int:pk>/assign-permissions/', views.role_assign_permissions, name='role-assign-permissions'),
    path('roles/<int:pk>/remove-permissions/', views.role_remove_permissions, name='role-remove-permissions'),

    # Role assignments
    path('user-roles/', views.user_role_list, name='user-role-list'),
    path('user-roles/<int:pk>/', views.user_role_detail, name='user-role-detail'),

    # Per-user overrides
    path('overrides/', views.override_list, name='override-list'),
    path('overrides/<int:pk>/', views.override_detail, name='override-detail'),

    # Resolved permissions
    path('me/permissions/', views.my_permissions, name='my-permissions'),
    path('me/navigation/', views.my_navigation, name='my-navigation'),
    path('users/<int:user_id>/permissions/', views.user_permissions, name='user-permissions'),
    path('route-check/', views.route_check, name='route-check'),
]
