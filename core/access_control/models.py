"""
Roles and Permissions Models
Manages role-based access control with page, menu and component permissions.
"""
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from core.base.models import SoftDeleteMixin
from core.base.managers import BaseQuerySet, SoftDeleteQuerySet
from .catalog import Namespace, RoleTypes


class PermissionQuerySet(BaseQuerySet):
    exact_fields = ('code', 'namespace')


class RoleQuerySet(SoftDeleteQuerySet):
    exact_fields = ('code', 'role_type', 'status')


class Permission(models.Model):
    """
    Permission model mirroring the static catalog.
    Each row is one capability token tagged with its namespace
    (page, menu or component). Rows are created by `init_access_data`.
    """
    code = models.CharField(
        max_length=100,
        unique=True,
        db_index=True,
        help_text="Catalog token (e.g., 'view_candidates', 'export_data')"
    )
    name = models.CharField(
        max_length=255,
        help_text="Human-readable name shown in UI"
    )
    namespace = models.CharField(
        max_length=20,
        choices=Namespace.CHOICES,
        db_index=True
    )
    description = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = PermissionQuerySet.as_manager()

    class Meta:
        db_table = 'permissions'
        verbose_name = 'Permission'
        verbose_name_plural = 'Permissions'
        ordering = ['namespace', 'code']

    def __str__(self):
        return f"{self.name} ({self.code})"

    def delete(self, *args, **kwargs):
        """
        Prevent deletion if permission is granted to roles.
        Maintains referential integrity at the application level.
        """
        if self.role_permissions.exists():
            raise ValidationError(
                f"Cannot delete permission '{self.code}' because it is granted to "
                f"{self.role_permissions.count()} role(s)"
            )
        return super().delete(*args, **kwargs)


class Role(SoftDeleteMixin, models.Model):
    """
    Role model. Users hold one or more roles; the role type drives special
    handling (super_admin override, job_viewer scoping, external recruiter
    route restrictions) on top of the explicit permission grants.
    """
    code = models.CharField(max_length=50, unique=True, db_index=True)
    name = models.CharField(max_length=100, unique=True)
    role_type = models.CharField(
        max_length=30,
        choices=RoleTypes.CHOICES,
        default=RoleTypes.USER,
        db_index=True
    )
    description = models.TextField(blank=True, null=True)
    permissions = models.ManyToManyField(
        Permission,
        through='RolePermission',
        related_name='roles',
        blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RoleQuerySet.as_manager()

    class Meta:
        db_table = 'roles'
        verbose_name = 'Role'
        verbose_name_plural = 'Roles'
        ordering = ['name']

    def __str__(self):
        return self.name

    def delete(self, *args, **kwargs):
        """
        Prevent deletion if role is assigned to users.
        """
        if self.user_roles.exists():
            raise ValidationError(
                f"Cannot delete role '{self.name}' because it is assigned to "
                f"{self.user_roles.count()} user(s)"
            )
        return super().delete(*args, **kwargs)

    def permission_codes(self):
        return set(self.role_permissions.values_list('permission__code', flat=True))


class RolePermission(models.Model):
    """
    Junction table granting a permission to a role.
    """
    role = models.ForeignKey(
        Role,
        on_delete=models.CASCADE,
        related_name='role_permissions'
    )
    permission = models.ForeignKey(
        Permission,
        on_delete=models.CASCADE,
        related_name='role_permissions'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'role_permissions'
        verbose_name = 'Role Permission'
        verbose_name_plural = 'Role Permissions'
        unique_together = ('role', 'permission')
        ordering = ['role__name', 'permission__code']

    def __str__(self):
        return f"{self.role.name} - {self.permission.code}"


class UserRole(models.Model):
    """
    Assignment of a role to a user. A user may hold several roles at once.

    allowed_job_ids scopes a job_viewer assignment to specific jobs; it is
    ignored for every other role type.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='user_roles'
    )
    role = models.ForeignKey(
        Role,
        on_delete=models.PROTECT,
        related_name='user_roles'
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_user_roles'
    )
    assigned_at = models.DateTimeField(auto_now_add=True)
    allowed_job_ids = models.JSONField(
        default=list,
        blank=True,
        help_text="Job ids a job_viewer assignment is limited to"
    )

    class Meta:
        db_table = 'user_roles'
        verbose_name = 'User Role'
        verbose_name_plural = 'User Roles'
        unique_together = ('user', 'role')
        ordering = ['user__email', 'role__name']

    def __str__(self):
        return f"{self.user.email} - {self.role.name}"

    def clean(self):
        if not isinstance(self.allowed_job_ids, list):
            raise ValidationError({'allowed_job_ids': 'Must be a list of job ids'})
        if self.assigned_by_id is not None and self.assigned_by_id == self.user_id:
            raise ValidationError("Users cannot assign roles to themselves")


class UserPermissionOverride(models.Model):
    """
    User-specific grant or denial of a single permission.

    Permission Logic:
    1. Roles grant a union of permissions
    2. An override with is_granted=True adds the permission for this user
    3. An override with is_granted=False removes it for this user
    4. super_admin still sees every page and menu regardless of denials
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='permission_overrides'
    )
    permission = models.ForeignKey(
        Permission,
        on_delete=models.CASCADE,
        related_name='user_overrides'
    )
    is_granted = models.BooleanField(default=True)
    granted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='granted_overrides'
    )
    notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_permission_overrides'
        verbose_name = 'User Permission Override'
        verbose_name_plural = 'User Permission Overrides'
        unique_together = ('user', 'permission')
        ordering = ['user__email', 'permission__code']

    def __str__(self):
        verb = 'GRANTED' if self.is_granted else 'DENIED'
        return f"{self.user.email} - {verb} - {self.permission.code}"
