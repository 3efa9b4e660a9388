"""
Tests for client redaction and job filtering.
"""
from django.test import SimpleTestCase

from core.access_control.catalog import Menus, RoleTypes
from core.access_control.redaction import (
    CLIENT_IDENTIFYING_FIELDS,
    filter_client_data,
    filter_jobs,
    strip_client_details,
)
from core.access_control.resolver import EffectivePermissionSet

MARKER = '*** restricted ***'


def client_record():
    return {
        'id': 4,
        'name': 'Acme Corp',
        'contact_name': 'Jane Smith',
        'email': 'jane@acme.example',
        'phone': '+1 555 0100',
        'address': '1 Main Street',
        'industry': 'Logistics',
        'status': 'active',
    }


RESTRICTED = EffectivePermissionSet(role_types=frozenset([RoleTypes.USER]))
VISIBLE = EffectivePermissionSet(
    menus=frozenset([Menus.VIEW_CLIENT_NAMES]),
    role_types=frozenset([RoleTypes.USER]),
    can_view_client_names=True,
)


class FilterClientDataTest(SimpleTestCase):

    def test_redacts_exactly_the_identifying_fields(self):
        original = client_record()
        redacted = filter_client_data(RESTRICTED, original)

        for field_name in CLIENT_IDENTIFYING_FIELDS:
            self.assertEqual(redacted[field_name], MARKER)
        self.assertEqual(redacted['id'], 4)
        self.assertEqual(redacted['industry'], 'Logistics')
        self.assertEqual(redacted['status'], 'active')
        self.assertEqual(len(CLIENT_IDENTIFYING_FIELDS), 5)

    def test_input_is_not_mutated(self):
        original = client_record()
        filter_client_data(RESTRICTED, original)
        self.assertEqual(original['name'], 'Acme Corp')

    def test_is_idempotent(self):
        once = filter_client_data(RESTRICTED, client_record())
        twice = filter_client_data(RESTRICTED, once)
        self.assertEqual(once, twice)

    def test_visible_viewer_gets_client_unchanged(self):
        original = client_record()
        self.assertEqual(filter_client_data(VISIBLE, original), original)

    def test_unresolved_viewer_is_restricted(self):
        self.assertEqual(filter_client_data(None, client_record())['name'], MARKER)

    def test_none_client_passes_through(self):
        self.assertIsNone(filter_client_data(RESTRICTED, None))

    def test_missing_fields_are_not_added(self):
        redacted = filter_client_data(RESTRICTED, {'id': 1, 'name': 'Acme'})
        self.assertEqual(redacted, {'id': 1, 'name': MARKER})


class FilterJobsTest(SimpleTestCase):

    def setUp(self):
        self.jobs = [
            {'id': 1, 'title': 'Driver', 'client': client_record()},
            {'id': 2, 'title': 'Planner', 'client': client_record()},
            {'id': 3, 'title': 'Analyst', 'client': None},
        ]

    def test_job_viewer_keeps_allowed_jobs_in_order(self):
        viewer = EffectivePermissionSet(
            role_types=frozenset([RoleTypes.JOB_VIEWER]),
            allowed_job_ids=frozenset(['1', '3']),
        )

        filtered = filter_jobs(viewer, self.jobs)

        self.assertEqual([job['id'] for job in filtered], [1, 3])
        self.assertEqual(filtered[0]['client']['name'], MARKER)
        self.assertIsNone(filtered[1]['client'])

    def test_job_viewer_with_empty_allow_list_sees_nothing(self):
        viewer = EffectivePermissionSet(role_types=frozenset([RoleTypes.JOB_VIEWER]))
        self.assertEqual(filter_jobs(viewer, self.jobs), [])

    def test_other_roles_are_not_scoped(self):
        filtered = filter_jobs(RESTRICTED, self.jobs)
        self.assertEqual([job['id'] for job in filtered], [1, 2, 3])
        self.assertEqual(filtered[1]['client']['email'], MARKER)

    def test_visible_viewer_gets_jobs_unchanged(self):
        self.assertEqual(filter_jobs(VISIBLE, self.jobs), self.jobs)

    def test_is_idempotent(self):
        viewer = EffectivePermissionSet(
            role_types=frozenset([RoleTypes.JOB_VIEWER]),
            allowed_job_ids=frozenset(['2']),
        )
        once = filter_jobs(viewer, self.jobs)
        self.assertEqual(filter_jobs(viewer, once), once)

    def test_input_jobs_are_not_mutated(self):
        filter_jobs(RESTRICTED, self.jobs)
        self.assertEqual(self.jobs[0]['client']['name'], 'Acme Corp')


class StripClientDetailsTest(SimpleTestCase):

    def test_removes_client_keys(self):
        jobs = [{'id': 1, 'title': 'Driver', 'client': client_record(), 'client_id': 4}]
        self.assertEqual(strip_client_details(jobs), [{'id': 1, 'title': 'Driver'}])
