"""
Serializers for Roles and Permissions models.
Handles serialization/deserialization for the admin API endpoints.
"""
from django.db import transaction
from rest_framework import serializers

from .catalog import RoleTypes
from .models import (
    Permission,
    Role,
    RolePermission,
    UserRole,
    UserPermissionOverride,
)


def _resolve_permission_codes(codes):
    """Map permission codes to rows, failing on any unknown code."""
    permissions = list(Permission.objects.filter(code__in=codes))
    missing = set(codes) - {p.code for p in permissions}
    if missing:
        raise serializers.ValidationError(
            f"The following permission codes do not exist: {sorted(missing)}"
        )
    return permissions


class PermissionSerializer(serializers.ModelSerializer):
    """Serializer for Permission model (read-only catalog mirror)."""

    class Meta:
        model = Permission
        fields = ['id', 'code', 'name', 'namespace', 'description']
        read_only_fields = fields


class RoleListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for role lists."""
    permission_count = serializers.IntegerField(source='role_permissions.count', read_only=True)

    class Meta:
        model = Role
        fields = ['id', 'code', 'name', 'role_type', 'status', 'permission_count']
        read_only_fields = fields


class RoleSerializer(serializers.ModelSerializer):
    """
    Serializer for Role model.
    Accepts `permission_codes` on create to grant permissions atomically.
    """
    permissions = serializers.SerializerMethodField()
    permission_codes = serializers.ListField(
        child=serializers.CharField(),
        write_only=True,
        required=False,
        help_text="Permission codes to grant to this role"
    )

    class Meta:
        model = Role
        fields = [
            'id', 'code', 'name', 'role_type', 'description', 'status',
            'permissions', 'permission_codes', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_permissions(self, obj):
        return sorted(obj.permission_codes())

    def validate_permission_codes(self, value):
        _resolve_permission_codes(value)
        return value

    def validate(self, attrs):
        request = self.context.get('request')
        role_type = attrs.get('role_type')
        current_type = getattr(self.instance, 'role_type', None)

        if request and role_type and role_type != current_type:
            if RoleTypes.SUPER_ADMIN in (role_type, current_type) and not request.user.is_super_admin():
                raise serializers.ValidationError(
                    "Only super admins can create or change super_admin roles"
                )

        return attrs

    def create(self, validated_data):
        permission_codes = validated_data.pop('permission_codes', [])
        with transaction.atomic():
            role = Role.objects.create(**validated_data)
            RolePermission.objects.bulk_create([
                RolePermission(role=role, permission=permission)
                for permission in _resolve_permission_codes(permission_codes)
            ])
        return role

    def update(self, instance, validated_data):
        # Grants change through assign-permissions / remove-permissions
        validated_data.pop('permission_codes', None)
        return super().update(instance, validated_data)


class PermissionCodesSerializer(serializers.Serializer):
    """Body of the assign-permissions / remove-permissions endpoints."""
    permission_codes = serializers.ListField(
        child=serializers.CharField(),
        allow_empty=False
    )


class UserRoleSerializer(serializers.ModelSerializer):
    """
    Serializer for UserRole assignments.
    `assigned_by` is always the requesting administrator.
    """
    user_email = serializers.CharField(source='user.email', read_only=True)
    role_code = serializers.CharField(source='role.code', read_only=True)
    role_name = serializers.CharField(source='role.name', read_only=True)
    role_type = serializers.CharField(source='role.role_type', read_only=True)
    assigned_by_email = serializers.CharField(source='assigned_by.email', read_only=True, default=None)
    allowed_job_ids = serializers.ListField(
        child=serializers.CharField(),
        required=False
    )

    class Meta:
        model = UserRole
        fields = [
            'id', 'user', 'user_email', 'role', 'role_code', 'role_name', 'role_type',
            'allowed_job_ids', 'assigned_by_email', 'assigned_at'
        ]
        read_only_fields = ['id', 'assigned_at']
        validators = []

    def validate(self, attrs):
        request = self.context.get('request')
        user = attrs.get('user', getattr(self.instance, 'user', None))
        role = attrs.get('role', getattr(self.instance, 'role', None))

        if request and user and request.user.pk == user.pk:
            raise serializers.ValidationError("Users cannot assign roles to themselves")

        if self.instance is None and UserRole.objects.filter(user=user, role=role).exists():
            raise serializers.ValidationError(
                f"User {user.email} already holds role '{role.code}'"
            )

        if role and role.role_type == RoleTypes.SUPER_ADMIN and request:
            if not request.user.is_super_admin():
                raise serializers.ValidationError(
                    "Only super admins can assign the super_admin role"
                )

        return attrs

    def create(self, validated_data):
        request = self.context.get('request')
        validated_data['assigned_by'] = request.user if request else None
        return super().create(validated_data)


class UserRoleUpdateSerializer(serializers.ModelSerializer):
    """Only the job scope of an existing assignment can be edited."""
    allowed_job_ids = serializers.ListField(child=serializers.CharField())

    class Meta:
        model = UserRole
        fields = ['allowed_job_ids']


class UserPermissionOverrideSerializer(serializers.ModelSerializer):
    """Serializer for per-user permission grants and denials."""
    user_email = serializers.CharField(source='user.email', read_only=True)
    permission = serializers.SlugRelatedField(
        slug_field='code',
        queryset=Permission.objects.all()
    )
    namespace = serializers.CharField(source='permission.namespace', read_only=True)
    granted_by_email = serializers.CharField(source='granted_by.email', read_only=True, default=None)

    class Meta:
        model = UserPermissionOverride
        fields = [
            'id', 'user', 'user_email', 'permission', 'namespace', 'is_granted',
            'notes', 'granted_by_email', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        validators = []

    def validate(self, attrs):
        request = self.context.get('request')
        if request and request.user.pk == attrs['user'].pk:
            raise serializers.ValidationError("Users cannot grant permissions to themselves")
        return attrs

    def create(self, validated_data):
        """Create or replace the user's override for this permission."""
        request = self.context.get('request')
        override, _ = UserPermissionOverride.objects.update_or_create(
            user=validated_data['user'],
            permission=validated_data['permission'],
            defaults={
                'is_granted': validated_data.get('is_granted', True),
                'notes': validated_data.get('notes', ''),
                'granted_by': request.user if request else None,
            }
        )
        return override

