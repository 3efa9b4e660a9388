"""
Service layer for access control.
Loads role assignments from the database and hands them to the pure resolver.
"""
from typing import List, Optional

from .cache import permission_cache
from .catalog import RoleTypes
from .models import UserRole, UserPermissionOverride
from .resolver import (
    EffectivePermissionSet,
    PermissionOverride,
    RoleAssignment,
    normalize_job_ids,
    resolve,
)


def get_user_active_roles(user):
    """
    Get all active roles assigned to a user.

    Returns:
        QuerySet of UserRole rows (role and permissions prefetched)
    """
    if not user or not user.is_authenticated:
        return UserRole.objects.none()

    return (
        UserRole.objects
        .filter(user=user, role__status='active')
        .select_related('role')
        .prefetch_related('role__role_permissions__permission')
    )


def build_assignments(user) -> List[RoleAssignment]:
    """
    Snapshot a user's active role assignments into resolver value objects.

    external_recruiter assignments take their job scope from JobAssignment
    rows; job_viewer assignments from the UserRole.allowed_job_ids list.
    """
    assignments = []
    recruiter_job_ids = None

    for user_role in get_user_active_roles(user):
        role = user_role.role
        allowed_job_ids = frozenset()

        if role.role_type == RoleTypes.JOB_VIEWER:
            allowed_job_ids = normalize_job_ids(user_role.allowed_job_ids)
        elif role.role_type == RoleTypes.EXTERNAL_RECRUITER:
            if recruiter_job_ids is None:
                recruiter_job_ids = _get_assigned_job_ids(user)
            allowed_job_ids = recruiter_job_ids

        assignments.append(RoleAssignment(
            role_type=role.role_type,
            permissions=frozenset(
                rp.permission.code for rp in role.role_permissions.all()
            ),
            allowed_job_ids=allowed_job_ids,
            role_name=role.name,
        ))

    return assignments


def build_overrides(user) -> List[PermissionOverride]:
    if not user or not user.is_authenticated:
        return []
    overrides = UserPermissionOverride.objects.filter(user=user).select_related('permission')
    return [
        PermissionOverride(permission=o.permission.code, is_granted=o.is_granted)
        for o in overrides
    ]


def _get_assigned_job_ids(user):
    from recruitment.models import JobAssignment

    return normalize_job_ids(
        JobAssignment.objects.filter(user=user).values_list('job_id', flat=True)
    )


def compute_effective_permissions(user) -> EffectivePermissionSet:
    """Resolve from the database, bypassing the cache."""
    return resolve(build_assignments(user), build_overrides(user))


def get_effective_permissions(user, cache=None) -> Optional[EffectivePermissionSet]:
    """
    Get the effective permission set for a user.

    Args:
        user: The UserAccount instance (or AnonymousUser / None)
        cache: PermissionCache to consult; defaults to the shared instance.
            Pass NullPermissionCache() to always resolve fresh.

    Returns:
        EffectivePermissionSet, or None when there is no authenticated user
        (callers treat None as "unresolved": pages/menus denied,
        components shown).
    """
    if not user or not user.is_authenticated:
        return None

    cache = cache if cache is not None else permission_cache
    perm_set = cache.get(user.pk)
    if perm_set is None:
        perm_set = compute_effective_permissions(user)
        cache.set(user.pk, perm_set)
    return perm_set


def get_request_permissions(request):
    """
    Effective permissions for the request's user, memoised on the request
    so decorators and the view body resolve once.
    """
    if not hasattr(request, '_effective_permissions'):
        request._effective_permissions = get_effective_permissions(getattr(request, 'user', None))
    return request._effective_permissions
