from django.contrib import admin
from .models import Permission, Role, RolePermission, UserRole, UserPermissionOverride


@admin.register(Permission)
class PermissionAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'namespace']
    list_filter = ['namespace']
    search_fields = ['code', 'name']


class RolePermissionInline(admin.TabularInline):
    model = RolePermission
    extra = 0
    autocomplete_fields = ['permission']


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'role_type', 'status']
    list_filter = ['role_type', 'status']
    search_fields = ['code', 'name']
    inlines = [RolePermissionInline]


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ['user', 'role', 'assigned_by', 'assigned_at']
    list_filter = ['role__role_type']
    search_fields = ['user__email', 'role__code']
    readonly_fields = ['assigned_at']


@admin.register(UserPermissionOverride)
class UserPermissionOverrideAdmin(admin.ModelAdmin):
    list_display = ['user', 'permission', 'is_granted', 'granted_by', 'updated_at']
    list_filter = ['is_granted', 'permission__namespace']
    search_fields = ['user__email', 'permission__code']
