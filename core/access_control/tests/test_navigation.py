from django.test import SimpleTestCase

from core.access_control.catalog import NAV_ICONS, NAVIGATION, Pages, RoleTypes
from core.access_control.navigation import get_allowed_navigation, serialize_navigation
from core.access_control.resolver import RoleAssignment, resolve


class NavigationTest(SimpleTestCase):

    def test_unresolved_user_sees_nothing(self):
        self.assertEqual(get_allowed_navigation(None), [])

    def test_keeps_catalog_order(self):
        """Granting settings before jobs still lists Jobs first"""
        perm_set = resolve([RoleAssignment(
            role_type=RoleTypes.USER,
            permissions=frozenset([Pages.SETTINGS, Pages.JOBS]),
        )])

        entries = get_allowed_navigation(perm_set)

        self.assertEqual([e.name for e in entries], ['Jobs', 'Settings'])

    def test_super_admin_sees_the_whole_catalog(self):
        perm_set = resolve([RoleAssignment(role_type=RoleTypes.SUPER_ADMIN)])
        self.assertEqual(get_allowed_navigation(perm_set), list(NAVIGATION))

    def test_result_is_a_subsequence_of_the_catalog(self):
        perm_set = resolve([RoleAssignment(
            role_type=RoleTypes.USER,
            permissions=frozenset([Pages.REPORTS, Pages.CANDIDATES, Pages.CALENDAR, Pages.MY_JOBS]),
        )])

        entries = get_allowed_navigation(perm_set)
        positions = [NAVIGATION.index(entry) for entry in entries]

        self.assertEqual(positions, sorted(positions))
        self.assertEqual(len(entries), 3)

    def test_catalog_icons_are_registered(self):
        for entry in NAVIGATION:
            self.assertIn(entry.icon, NAV_ICONS)

    def test_serialize_resolves_icon_ids(self):
        perm_set = resolve([RoleAssignment(
            role_type=RoleTypes.USER,
            permissions=frozenset([Pages.JOBS]),
        )])

        data = serialize_navigation(get_allowed_navigation(perm_set))

        self.assertEqual(data, [{
            'permission': Pages.JOBS,
            'name': 'Jobs',
            'path': '/jobs',
            'icon': 'Briefcase',
            'icon_id': 'briefcase',
        }])
