"""
Tests for loading effective permissions from the database.
Covers assignment snapshots, job scoping sources, the permission cache and
the signals that invalidate it.
"""
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase, override_settings

from core.access_control.cache import NullPermissionCache, PermissionCache, permission_cache
from core.access_control.catalog import Menus, Pages, RoleTypes
from core.access_control.models import (
    Permission,
    Role,
    RolePermission,
    UserPermissionOverride,
    UserRole,
)
from core.access_control.services import (
    build_assignments,
    compute_effective_permissions,
    get_effective_permissions,
)
from core.base.test_utils import clear_permission_cache, create_user_with_roles, setup_access_data
from recruitment.models import Client, Job, JobAssignment


class BuildAssignmentsTest(TestCase):

    @classmethod
    def setUpTestData(cls):
        setup_access_data()

    def setUp(self):
        clear_permission_cache()

    def test_snapshot_carries_role_grants(self):
        user = create_user_with_roles('staff@example.com', 'user')

        assignments = build_assignments(user)

        self.assertEqual(len(assignments), 1)
        self.assertEqual(assignments[0].role_type, RoleTypes.USER)
        self.assertIn(Pages.CANDIDATES, assignments[0].permissions)
        self.assertEqual(assignments[0].role_name, 'User')

    def test_inactive_roles_are_skipped(self):
        user = create_user_with_roles('staff@example.com', 'user', 'restricted_admin')
        Role.objects.get(code='restricted_admin').deactivate()

        role_types = {a.role_type for a in build_assignments(user)}

        self.assertEqual(role_types, {RoleTypes.USER})

    def test_job_viewer_scope_comes_from_user_role(self):
        user = create_user_with_roles('viewer@example.com', 'job_viewer', allowed_job_ids=[5, '7'])

        perm_set = compute_effective_permissions(user)

        self.assertTrue(perm_set.is_job_viewer)
        self.assertEqual(perm_set.allowed_job_ids, {'5', '7'})

    def test_external_recruiter_scope_comes_from_job_assignments(self):
        user = create_user_with_roles('recruiter@example.com', 'external_recruiter')
        client = Client.objects.create(name='Acme')
        job = Job.objects.create(title='Driver', client=client)
        JobAssignment.objects.create(user=user, job=job)

        perm_set = compute_effective_permissions(user)

        self.assertEqual(perm_set.allowed_job_ids, {str(job.pk)})
        self.assertTrue(perm_set.is_external_recruiter)

    def test_overrides_are_applied(self):
        user = create_user_with_roles('staff@example.com', 'user')
        UserPermissionOverride.objects.create(
            user=user,
            permission=Permission.objects.get(code=Menus.VIEW_CLIENT_NAMES),
            is_granted=False,
        )

        perm_set = compute_effective_permissions(user)

        self.assertFalse(perm_set.can_view_client_names)

    def test_anonymous_user_is_unresolved(self):
        self.assertIsNone(get_effective_permissions(AnonymousUser()))
        self.assertIsNone(get_effective_permissions(None))


class PermissionCacheTest(TestCase):

    @classmethod
    def setUpTestData(cls):
        setup_access_data()

    def setUp(self):
        clear_permission_cache()
        self.user = create_user_with_roles('staff@example.com', 'user')

    def test_resolved_set_is_cached(self):
        first = get_effective_permissions(self.user)
        self.assertEqual(permission_cache.get(self.user.pk), first)

        with self.assertNumQueries(0):
            second = get_effective_permissions(self.user)
        self.assertEqual(first, second)

    def test_null_cache_always_resolves(self):
        cache = NullPermissionCache()
        get_effective_permissions(self.user, cache=cache)
        self.assertIsNone(cache.get(self.user.pk))

    def test_zero_ttl_disables_storage(self):
        cache = PermissionCache(ttl=0)
        get_effective_permissions(self.user, cache=cache)
        self.assertIsNone(cache.get(self.user.pk))

    @override_settings(ACCESS_CONTROL={'PERMISSION_CACHE_PREFIX': 'custom'})
    def test_key_uses_configured_prefix(self):
        self.assertEqual(PermissionCache().key(3), 'custom:3')


class CacheInvalidationTest(TestCase):
    """Role, grant, override and assignment changes drop stale cached sets"""

    @classmethod
    def setUpTestData(cls):
        setup_access_data()

    def setUp(self):
        clear_permission_cache()
        self.user = create_user_with_roles('staff@example.com', 'user')
        get_effective_permissions(self.user)

    def test_new_user_role_invalidates(self):
        UserRole.objects.create(user=self.user, role=Role.objects.get(code='admin'))

        self.assertIsNone(permission_cache.get(self.user.pk))
        self.assertTrue(get_effective_permissions(self.user).is_admin)

    def test_removed_user_role_invalidates(self):
        UserRole.objects.filter(user=self.user).delete()

        self.assertIsNone(permission_cache.get(self.user.pk))
        self.assertEqual(get_effective_permissions(self.user).pages, frozenset())

    def test_role_grant_change_invalidates_every_holder(self):
        other = create_user_with_roles('other@example.com', 'user')
        get_effective_permissions(other)

        RolePermission.objects.create(
            role=Role.objects.get(code='user'),
            permission=Permission.objects.get(code=Menus.EXPORT_DATA),
        )

        self.assertIsNone(permission_cache.get(self.user.pk))
        self.assertIsNone(permission_cache.get(other.pk))
        self.assertIn(Menus.EXPORT_DATA, get_effective_permissions(self.user).menus)

    def test_role_deactivation_invalidates(self):
        Role.objects.get(code='user').deactivate()

        self.assertIsNone(permission_cache.get(self.user.pk))
        self.assertEqual(get_effective_permissions(self.user).role_types, frozenset())

    def test_override_invalidates(self):
        UserPermissionOverride.objects.create(
            user=self.user,
            permission=Permission.objects.get(code=Pages.CANDIDATES),
            is_granted=False,
        )

        self.assertNotIn(Pages.CANDIDATES, get_effective_permissions(self.user).pages)

    def test_job_assignment_invalidates(self):
        recruiter = create_user_with_roles('recruiter@example.com', 'external_recruiter')
        get_effective_permissions(recruiter)
        job = Job.objects.create(title='Driver', client=Client.objects.create(name='Acme'))

        JobAssignment.objects.create(user=recruiter, job=job)

        self.assertEqual(get_effective_permissions(recruiter).allowed_job_ids, {str(job.pk)})
