"""
Permission resolution for role-based access control.

``resolve()`` turns a user's role assignments (plus any per-user overrides)
into an ``EffectivePermissionSet``. It works on plain value objects rather
than ORM rows so it has no side effects and is safe to call concurrently on
every request; ``services.build_assignments`` does the database loading.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .catalog import (
    ALL_MENUS,
    ALL_PAGES,
    Menus,
    Namespace,
    RoleTypes,
    namespace_of,
)

logger = logging.getLogger(__name__)


def normalize_job_ids(job_ids) -> frozenset:
    """Job ids are compared as strings so int pks and JSON strings agree."""
    if not job_ids:
        return frozenset()
    return frozenset(str(job_id) for job_id in job_ids)


@dataclass(frozen=True)
class RoleAssignment:
    """Snapshot of one user-role link: the role's type, its grants, its job scope."""
    role_type: str
    permissions: frozenset = field(default_factory=frozenset)
    allowed_job_ids: frozenset = field(default_factory=frozenset)
    role_name: str = ''


@dataclass(frozen=True)
class PermissionOverride:
    """Per-user grant (is_granted=True) or denial of a single permission."""
    permission: str
    is_granted: bool = True


@dataclass(frozen=True)
class EffectivePermissionSet:
    """
    Derived, per-user view of what the user may do. Never persisted.

    Pages and menus fail closed (absent means denied). Components fail open;
    see ``checks.can_view_component``.
    """
    pages: frozenset = field(default_factory=frozenset)
    menus: frozenset = field(default_factory=frozenset)
    components: frozenset = field(default_factory=frozenset)
    role_types: frozenset = field(default_factory=frozenset)
    can_view_client_names: bool = False
    allowed_job_ids: frozenset = field(default_factory=frozenset)

    @property
    def is_super_admin(self) -> bool:
        return RoleTypes.SUPER_ADMIN in self.role_types

    @property
    def is_admin(self) -> bool:
        return bool(self.role_types & RoleTypes.ADMIN_TYPES)

    @property
    def is_job_viewer(self) -> bool:
        return RoleTypes.JOB_VIEWER in self.role_types

    @property
    def is_external_recruiter(self) -> bool:
        return RoleTypes.EXTERNAL_RECRUITER in self.role_types

    def to_dict(self) -> dict:
        """JSON shape consumed by the browser client."""
        return {
            'pages': sorted(self.pages),
            'menus': sorted(self.menus),
            'components': sorted(self.components),
            'role_types': sorted(self.role_types),
            'can_view_client_names': self.can_view_client_names,
            'allowed_job_ids': sorted(self.allowed_job_ids),
        }


EMPTY_PERMISSION_SET = EffectivePermissionSet()


def resolve(
    assignments: Iterable[RoleAssignment],
    overrides: Optional[Iterable[PermissionOverride]] = None,
) -> EffectivePermissionSet:
    """
    Compute the effective permission set for a user.

    Args:
        assignments: The user's role assignments, each carrying its role type,
            granted permission codes and job scope.
        overrides: Optional per-user grants/denials applied after the role union.

    Returns:
        EffectivePermissionSet. Never raises; no assignments yields the
        empty set (no pages, no menus, components left to their default).

    Logic:
        1. Union page, menu and component grants across all roles, sorted
           into namespaces by the catalog tag
        2. Apply per-user overrides (grant adds, deny removes)
        3. super_admin forces every page and menu on
        4. Client names are visible iff view_client_names ends up granted
        5. Job scope is the union of every assignment's allowed job ids
    """
    buckets = {
        Namespace.PAGE: set(),
        Namespace.MENU: set(),
        Namespace.COMPONENT: set(),
    }
    role_types = set()
    allowed_job_ids = set()

    for assignment in assignments:
        role_types.add(assignment.role_type)
        allowed_job_ids.update(normalize_job_ids(assignment.allowed_job_ids))
        for code in assignment.permissions:
            namespace = namespace_of(code)
            if namespace is None:
                logger.warning(
                    f"Role '{assignment.role_name or assignment.role_type}' grants "
                    f"unknown permission '{code}'; catalog and database are out of sync"
                )
                continue
            buckets[namespace].add(code)

    for override in overrides or ():
        namespace = namespace_of(override.permission)
        if namespace is None:
            logger.warning(f"Ignoring override for unknown permission '{override.permission}'")
            continue
        if override.is_granted:
            buckets[namespace].add(override.permission)
        else:
            buckets[namespace].discard(override.permission)

    pages = buckets[Namespace.PAGE]
    menus = buckets[Namespace.MENU]

    # Universal override, not a union member: ignores denials too
    if RoleTypes.SUPER_ADMIN in role_types:
        pages = set(ALL_PAGES)
        menus = set(ALL_MENUS)

    return EffectivePermissionSet(
        pages=frozenset(pages),
        menus=frozenset(menus),
        components=frozenset(buckets[Namespace.COMPONENT]),
        role_types=frozenset(role_types),
        can_view_client_names=Menus.VIEW_CLIENT_NAMES in menus,
        allowed_job_ids=frozenset(allowed_job_ids),
    )
