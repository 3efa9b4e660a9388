"""
Cache invalidation hooks.

Any change to role assignments, role grants or user overrides drops the
affected users' cached permission sets so the next request re-resolves.
"""
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .cache import permission_cache
from .models import Role, RolePermission, UserPermissionOverride, UserRole


def _role_user_ids(role_id):
    return UserRole.objects.filter(role_id=role_id).values_list('user_id', flat=True)


@receiver([post_save, post_delete], sender=UserRole)
def invalidate_on_user_role_change(sender, instance, **kwargs):
    permission_cache.invalidate(instance.user_id)


@receiver([post_save, post_delete], sender=UserPermissionOverride)
def invalidate_on_override_change(sender, instance, **kwargs):
    permission_cache.invalidate(instance.user_id)


@receiver([post_save, post_delete], sender=RolePermission)
def invalidate_on_role_permission_change(sender, instance, **kwargs):
    permission_cache.invalidate_many(_role_user_ids(instance.role_id))


@receiver(post_save, sender=Role)
def invalidate_on_role_change(sender, instance, created, **kwargs):
    # role_type or status may have changed
    if not created:
        permission_cache.invalidate_many(_role_user_ids(instance.pk))
