"""
Tests for permission resolution.
Covers role unions, the super_admin override, per-user overrides and job scoping.
"""
from django.test import SimpleTestCase

from core.access_control.catalog import (
    ALL_MENUS,
    ALL_PAGES,
    Components,
    DEFAULT_ROLE_GRANTS,
    Menus,
    Pages,
    RoleTypes,
)
from core.access_control.checks import can_access_page, can_use_menu, can_view_component
from core.access_control.resolver import (
    EMPTY_PERMISSION_SET,
    PermissionOverride,
    RoleAssignment,
    normalize_job_ids,
    resolve,
)


def assignment(role_type, *permissions, allowed_job_ids=()):
    return RoleAssignment(
        role_type=role_type,
        permissions=frozenset(permissions),
        allowed_job_ids=normalize_job_ids(allowed_job_ids),
    )


class ResolveTest(SimpleTestCase):
    """Test resolve() over plain role assignments"""

    def test_super_admin_sees_every_page_and_menu(self):
        """super_admin forces the whole page and menu catalog, even with no grants"""
        perm_set = resolve([assignment(RoleTypes.SUPER_ADMIN)])

        self.assertEqual(perm_set.pages, ALL_PAGES)
        self.assertEqual(perm_set.menus, ALL_MENUS)
        for page in ALL_PAGES:
            self.assertTrue(can_access_page(perm_set, page))
        for menu in ALL_MENUS:
            self.assertTrue(can_use_menu(perm_set, menu))
        self.assertTrue(perm_set.can_view_client_names)
        self.assertTrue(perm_set.is_super_admin)
        self.assertTrue(perm_set.is_admin)

    def test_zero_roles_fails_closed_for_pages_and_open_for_components(self):
        perm_set = resolve([])

        self.assertEqual(perm_set, EMPTY_PERMISSION_SET)
        self.assertFalse(can_access_page(perm_set, Pages.CANDIDATES))
        self.assertFalse(can_use_menu(perm_set, Menus.EXPORT_DATA))
        self.assertTrue(can_view_component(perm_set, Components.SIDEBAR))
        self.assertFalse(perm_set.can_view_client_names)

    def test_grants_are_unioned_across_roles(self):
        perm_set = resolve([
            assignment(RoleTypes.USER, Pages.CANDIDATES, Components.SIDEBAR),
            assignment(RoleTypes.RESTRICTED_ADMIN, Pages.JOBS, Menus.EXPORT_DATA),
        ])

        self.assertEqual(perm_set.pages, {Pages.CANDIDATES, Pages.JOBS})
        self.assertEqual(perm_set.menus, {Menus.EXPORT_DATA})
        self.assertEqual(perm_set.components, {Components.SIDEBAR})
        self.assertEqual(perm_set.role_types, {RoleTypes.USER, RoleTypes.RESTRICTED_ADMIN})

    def test_tokens_are_bucketed_by_catalog_namespace(self):
        """view_client_names looks like a page token but is a menu"""
        perm_set = resolve([assignment(RoleTypes.USER, Menus.VIEW_CLIENT_NAMES)])

        self.assertIn(Menus.VIEW_CLIENT_NAMES, perm_set.menus)
        self.assertNotIn(Menus.VIEW_CLIENT_NAMES, perm_set.pages)
        self.assertTrue(perm_set.can_view_client_names)

    def test_unknown_permission_is_ignored_and_logged(self):
        with self.assertLogs('core.access_control.resolver', level='WARNING') as logs:
            perm_set = resolve([assignment(RoleTypes.USER, 'view_everything', Pages.JOBS)])

        self.assertEqual(perm_set.pages, {Pages.JOBS})
        self.assertIn('view_everything', logs.output[0])

    def test_client_names_hidden_without_menu_grant(self):
        perm_set = resolve([assignment(RoleTypes.JOB_VIEWER, *DEFAULT_ROLE_GRANTS[RoleTypes.JOB_VIEWER])])
        self.assertFalse(perm_set.can_view_client_names)

    def test_allowed_job_ids_are_unioned_and_normalized(self):
        perm_set = resolve([
            assignment(RoleTypes.JOB_VIEWER, allowed_job_ids=[1, 2]),
            assignment(RoleTypes.JOB_VIEWER, allowed_job_ids=['2', '3']),
        ])
        self.assertEqual(perm_set.allowed_job_ids, {'1', '2', '3'})

    def test_role_type_flags(self):
        perm_set = resolve([assignment(RoleTypes.EXTERNAL_RECRUITER)])

        self.assertTrue(perm_set.is_external_recruiter)
        self.assertFalse(perm_set.is_admin)
        self.assertFalse(perm_set.is_job_viewer)

    def test_to_dict_is_sorted_and_json_ready(self):
        perm_set = resolve([assignment(RoleTypes.USER, Pages.JOBS, Pages.CANDIDATES)])
        data = perm_set.to_dict()

        self.assertEqual(data['pages'], [Pages.CANDIDATES, Pages.JOBS])
        self.assertEqual(data['role_types'], [RoleTypes.USER])
        self.assertEqual(data['allowed_job_ids'], [])
        self.assertFalse(data['can_view_client_names'])


class OverrideTest(SimpleTestCase):
    """Test per-user grants and denials applied after the role union"""

    def test_grant_adds_permission(self):
        perm_set = resolve(
            [assignment(RoleTypes.USER, Pages.CANDIDATES)],
            [PermissionOverride(Menus.EXPORT_DATA, is_granted=True)],
        )
        self.assertIn(Menus.EXPORT_DATA, perm_set.menus)

    def test_denial_removes_role_grant(self):
        perm_set = resolve(
            [assignment(RoleTypes.USER, Pages.CANDIDATES, Menus.VIEW_CLIENT_NAMES)],
            [PermissionOverride(Menus.VIEW_CLIENT_NAMES, is_granted=False)],
        )
        self.assertNotIn(Menus.VIEW_CLIENT_NAMES, perm_set.menus)
        self.assertFalse(perm_set.can_view_client_names)

    def test_super_admin_ignores_page_and_menu_denials(self):
        perm_set = resolve(
            [assignment(RoleTypes.SUPER_ADMIN)],
            [PermissionOverride(Pages.USER_MANAGEMENT, is_granted=False)],
        )
        self.assertIn(Pages.USER_MANAGEMENT, perm_set.pages)

    def test_denied_component_is_hidden(self):
        perm_set = resolve(
            [assignment(RoleTypes.USER, Components.SIDEBAR, Components.NAVBAR)],
            [PermissionOverride(Components.SIDEBAR, is_granted=False)],
        )
        self.assertFalse(can_view_component(perm_set, Components.SIDEBAR))
        self.assertTrue(can_view_component(perm_set, Components.NAVBAR))

    def test_unknown_override_is_ignored(self):
        with self.assertLogs('core.access_control.resolver', level='WARNING'):
            perm_set = resolve(
                [assignment(RoleTypes.USER, Pages.JOBS)],
                [PermissionOverride('not_a_token')],
            )
        self.assertEqual(perm_set.pages, {Pages.JOBS})
