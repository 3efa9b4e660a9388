from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from django.core.validators import EmailValidator, RegexValidator
from .models import UserAccount
from core.access_control.catalog import RoleTypes
from core.access_control.models import Role
import re


phone_regex = RegexValidator(
    regex=r'^(\+?\d{1,3})?[-.\s]?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}$',
    message="Enter a valid phone number"
)


def validate_password_strength(value):
    """Shared password policy for creation and change."""
    if len(value) < 8:
        raise serializers.ValidationError("Password must be at least 8 characters long")

    if not re.search(r'[A-Z]', value):
        raise serializers.ValidationError("Password must contain at least one uppercase letter")

    if not re.search(r'[a-z]', value):
        raise serializers.ValidationError("Password must contain at least one lowercase letter")

    if not re.search(r'\d', value):
        raise serializers.ValidationError("Password must contain at least one number")

    validate_password(value)
    return value


class UserRoleSummarySerializer(serializers.Serializer):
    """Compact role assignment for user payloads."""
    id = serializers.IntegerField(read_only=True)
    role_code = serializers.CharField(source='role.code', read_only=True)
    role_name = serializers.CharField(source='role.name', read_only=True)
    role_type = serializers.CharField(source='role.role_type', read_only=True)
    allowed_job_ids = serializers.JSONField(read_only=True)


class AdminUserCreationSerializer(serializers.ModelSerializer):
    """
    Serializer for administrators creating users and assigning their roles.
    Users are never self-registered; every account is created here.
    """
    password = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    confirm_password = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    role_codes = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        default=list,
        write_only=True
    )

    class Meta:
        model = UserAccount
        fields = ['email', 'name', 'phone_number', 'password', 'confirm_password', 'role_codes']

    def validate_email(self, value):
        """Validate email format"""
        validator = EmailValidator(message="Enter a valid email address")
        validator(value)

        if UserAccount.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already registered")

        return value

    def validate_phone_number(self, value):
        """Validate phone number format"""
        if value:
            phone_regex(value)
        return value

    def validate_password(self, value):
        return validate_password_strength(value)

    def validate_role_codes(self, value):
        """
        Only existing roles may be assigned, and only super admins may hand
        out the super_admin role.
        """
        roles = list(Role.objects.filter(code__in=value))
        missing = set(value) - {role.code for role in roles}
        if missing:
            raise serializers.ValidationError(f"Unknown role code(s): {', '.join(sorted(missing))}")

        request = self.context.get('request')
        if request and any(role.role_type == RoleTypes.SUPER_ADMIN for role in roles):
            if not request.user.is_super_admin():
                raise serializers.ValidationError(
                    "Only super admins can assign the super_admin role"
                )
        return value

    def validate(self, attrs):
        """Validate that passwords match"""
        if attrs['password'] != attrs['confirm_password']:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match"})
        return attrs

    def create(self, validated_data):
        validated_data.pop('confirm_password')
        request = self.context.get('request')

        return UserAccount.objects.create_user(
            email=validated_data['email'],
            name=validated_data['name'],
            phone_number=validated_data.get('phone_number', ''),
            password=validated_data['password'],
            role_codes=validated_data.get('role_codes', []),
            assigned_by=request.user if request else None,
        )


class AdminUserUpdateSerializer(serializers.ModelSerializer):
    """
    Serializer for administrators updating user details.
    Role changes go through the user-roles endpoints.
    """

    class Meta:
        model = UserAccount
        fields = ['email', 'name', 'phone_number', 'is_active']
        read_only_fields = ['email']  # Email cannot be changed

    def validate_phone_number(self, value):
        """Validate phone number format"""
        if value:
            phone_regex(value)
        return value


class UserListSerializer(serializers.ModelSerializer):
    """Serializer for listing users (admin view)"""
    roles = UserRoleSummarySerializer(source='user_roles', many=True, read_only=True)

    class Meta:
        model = UserAccount
        fields = ['id', 'email', 'name', 'phone_number', 'is_active', 'roles']
        read_only_fields = fields


class UserProfileSerializer(serializers.ModelSerializer):
    """Serializer for user profile (users viewing/updating their own profile)"""
    roles = UserRoleSummarySerializer(source='user_roles', many=True, read_only=True)

    class Meta:
        model = UserAccount
        fields = ['id', 'email', 'name', 'phone_number', 'roles']
        read_only_fields = ['id', 'email', 'roles']

    def validate_phone_number(self, value):
        """Validate phone number format"""
        if value:
            phone_regex(value)
        return value


class ChangePasswordSerializer(serializers.Serializer):
    """Serializer for changing password"""
    old_password = serializers.CharField(required=True, write_only=True)
    new_password = serializers.CharField(required=True, write_only=True)
    confirm_password = serializers.CharField(required=True, write_only=True)

    def validate_new_password(self, value):
        return validate_password_strength(value)

    def validate(self, attrs):
        """Validate that new passwords match"""
        if attrs['new_password'] != attrs['confirm_password']:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match"})
        return attrs
