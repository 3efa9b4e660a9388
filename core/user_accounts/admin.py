from django.contrib import admin
from core.access_control.models import UserRole
from .models import UserAccount


class UserRoleInline(admin.TabularInline):
    model = UserRole
    fk_name = 'user'
    extra = 0
    fields = ['role', 'allowed_job_ids', 'assigned_by', 'assigned_at']
    readonly_fields = ['assigned_at']


@admin.register(UserAccount)
class UserAccountAdmin(admin.ModelAdmin):
    """Admin configuration for UserAccount model"""
    list_display = ['email', 'name', 'phone_number', 'is_active', 'is_staff']
    list_filter = ['is_active', 'is_staff']
    search_fields = ['email', 'name', 'phone_number']
    readonly_fields = ['last_login', 'date_joined']
    inlines = [UserRoleInline]

    fieldsets = (
        ('User Information', {
            'fields': ('email', 'name', 'phone_number')
        }),
        ('Status', {
            'fields': ('is_active', 'is_staff')
        }),
        ('Authentication', {
            'fields': ('password', 'last_login', 'date_joined')
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        """Make the email readonly for super admin users"""
        readonly = list(self.readonly_fields)
        if obj and obj.is_super_admin():
            readonly.append('email')
        return readonly
