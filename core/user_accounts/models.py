"""
User Account Models
Handles user authentication. Authorization lives in core.access_control:
a user's capabilities come from the roles assigned through UserRole.
"""
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.core.exceptions import PermissionDenied
from django.db import models


class UserAccountManager(BaseUserManager):
    """
    Custom user manager for UserAccount model.
    Handles user creation and optional role assignment.
    """

    def create_user(self, email, name, phone_number='', password=None, role_codes=None,
                    assigned_by=None, **extra_fields):
        """
        Create and save a user, optionally assigning roles.

        Args:
            email: User's email address (used for authentication)
            name: User's full name
            phone_number: User's phone number
            password: User's password (will be hashed)
            role_codes: Codes of roles to assign (e.g. ['user'])
            assigned_by: UserAccount performing the assignment
            **extra_fields: Additional fields to set on the user

        Returns:
            UserAccount: The created user instance
        """
        if not email:
            raise ValueError('Email is required')
        if not name:
            raise ValueError('Name is required')

        email = self.normalize_email(email)

        user = self.model(
            email=email,
            name=name,
            phone_number=phone_number,
            **extra_fields
        )
        user.set_password(password)
        user.save(using=self._db)

        if role_codes:
            user.assign_roles(role_codes, assigned_by=assigned_by)
        return user

    def create_superuser(self, email, name, phone_number='', password=None, **extra_fields):
        """
        Create and save a super admin user.
        Required by Django for the createsuperuser management command.
        """
        from core.access_control.catalog import RoleTypes
        from core.access_control.models import Role

        Role.objects.get_or_create(
            code=RoleTypes.SUPER_ADMIN,
            defaults={'name': 'Super Admin', 'role_type': RoleTypes.SUPER_ADMIN}
        )
        extra_fields.setdefault('is_staff', True)
        return self.create_user(
            email=email,
            name=name,
            phone_number=phone_number,
            password=password,
            role_codes=[RoleTypes.SUPER_ADMIN],
            **extra_fields
        )


class UserAccount(AbstractBaseUser):
    """Custom user model with email authentication"""
    email = models.EmailField(unique=True, db_index=True)
    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=20, blank=True, default='')
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(
        default=False,
        help_text="Can log into the Django admin site"
    )
    date_joined = models.DateTimeField(auto_now_add=True)

    objects = UserAccountManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'user_accounts'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['email']

    def __str__(self):
        return f"{self.name} ({self.email})"

    def role_types(self):
        return set(
            self.user_roles.filter(role__status='active')
            .values_list('role__role_type', flat=True)
        )

    def is_super_admin(self):
        """
        Check if user holds an active super_admin role.

        Returns:
            bool: True if user is super admin, False otherwise
        """
        from core.access_control.catalog import RoleTypes
        return RoleTypes.SUPER_ADMIN in self.role_types()

    def is_admin(self):
        """
        Check if user holds any admin-level role (super_admin, admin, restricted_admin).
        """
        from core.access_control.catalog import RoleTypes
        return bool(self.role_types() & RoleTypes.ADMIN_TYPES)

    def assign_roles(self, role_codes, assigned_by=None):
        """
        Assign roles by code. Existing assignments are left untouched.

        Returns:
            list of newly created UserRole rows
        """
        from core.access_control.models import Role, UserRole

        created_rows = []
        for role in Role.objects.filter(code__in=role_codes):
            user_role, created = UserRole.objects.get_or_create(
                user=self,
                role=role,
                defaults={'assigned_by': assigned_by}
            )
            if created:
                created_rows.append(user_role)
        return created_rows

    # Django admin hooks; the admin site is reserved for staff accounts
    def has_perm(self, perm, obj=None):
        return self.is_active and self.is_staff

    def has_module_perms(self, app_label):
        return self.is_active and self.is_staff

    def delete(self, *args, **kwargs):
        """
        Override delete to prevent deletion of super admin.
        """
        if self.pk and self.is_super_admin():
            raise PermissionDenied(
                "Cannot delete super admin user. Super admin is protected from deletion."
            )
        return super().delete(*args, **kwargs)
