from django.test import SimpleTestCase, override_settings

from core.access_control.catalog import RoleTypes
from core.access_control.resolver import EffectivePermissionSet
from core.access_control.route_guard import (
    GuardAction,
    GuardState,
    RouteGuard,
    evaluate_route,
)

RECRUITER = EffectivePermissionSet(role_types=frozenset([RoleTypes.EXTERNAL_RECRUITER]))
STAFF = EffectivePermissionSet(role_types=frozenset([RoleTypes.USER]))


class ExternalRecruiterGuardTest(SimpleTestCase):
    """Restricted state: allow-list of prefixes, everything else redirects"""

    def setUp(self):
        self.guard = RouteGuard()

    def test_blocked_path_redirects_to_landing(self):
        decision = self.guard.evaluate('/candidates', RECRUITER)

        self.assertEqual(decision.action, GuardAction.REDIRECT)
        self.assertEqual(decision.redirect_to, '/my-jobs')
        self.assertEqual(decision.state, GuardState.RESTRICTED)

    def test_nested_allowed_path_is_allowed(self):
        decision = self.guard.evaluate('/my-jobs/123', RECRUITER)
        self.assertEqual(decision.action, GuardAction.ALLOW)

    def test_root_redirects(self):
        decision = self.guard.evaluate('/', RECRUITER)
        self.assertTrue(decision.is_redirect)

    def test_landing_path_is_allowed_so_redirect_does_not_loop(self):
        first = self.guard.evaluate('/candidates', RECRUITER)
        second = self.guard.evaluate(first.redirect_to, RECRUITER)
        self.assertEqual(second.action, GuardAction.ALLOW)

    def test_prefix_match_respects_segments(self):
        self.assertTrue(self.guard.evaluate('/my-jobs-archive', RECRUITER).is_redirect)
        self.assertEqual(self.guard.evaluate('/upload-candidate/7', RECRUITER).action, GuardAction.ALLOW)

    def test_query_and_fragment_are_ignored(self):
        decision = self.guard.evaluate('/my-jobs?page=2#top', RECRUITER)
        self.assertEqual(decision.action, GuardAction.ALLOW)
        self.assertEqual(decision.path, '/my-jobs')

    def test_trailing_slash_is_ignored(self):
        self.assertEqual(self.guard.evaluate('/my-jobs/', RECRUITER).action, GuardAction.ALLOW)

    def test_redirect_is_logged(self):
        with self.assertLogs('core.access_control.route_guard', level='WARNING') as logs:
            self.guard.evaluate('/clients', RECRUITER)
        self.assertIn('/clients', logs.output[0])

    def test_landing_outside_allow_list_is_still_allowed(self):
        guard = RouteGuard(allowed_prefixes=['/login'], landing_path='/welcome')
        self.assertEqual(guard.evaluate('/welcome', RECRUITER).action, GuardAction.ALLOW)
        self.assertEqual(guard.evaluate('/candidates', RECRUITER).redirect_to, '/welcome')

    def test_root_landing_does_not_loop(self):
        guard = RouteGuard(allowed_prefixes=['/my-jobs'], landing_path='/')
        self.assertEqual(guard.evaluate('/', RECRUITER).action, GuardAction.ALLOW)
        self.assertEqual(guard.evaluate('/candidates', RECRUITER).redirect_to, '/')


class OtherStatesTest(SimpleTestCase):

    def test_unauthenticated_defers(self):
        decision = RouteGuard().evaluate('/candidates', None, is_authenticated=False)
        self.assertEqual(decision.action, GuardAction.DEFER)
        self.assertEqual(decision.state, GuardState.UNAUTHENTICATED)
        self.assertIsNone(decision.redirect_to)

    def test_unrestricted_user_is_always_allowed(self):
        decision = RouteGuard().evaluate('/candidates', STAFF)
        self.assertEqual(decision.action, GuardAction.ALLOW)
        self.assertEqual(decision.state, GuardState.UNRESTRICTED)

    def test_to_dict(self):
        decision = RouteGuard().evaluate('/clients', RECRUITER)
        self.assertEqual(decision.to_dict(), {
            'action': 'redirect',
            'state': 'restricted',
            'path': '/clients',
            'redirect_to': '/my-jobs',
        })


class ConfiguredGuardTest(SimpleTestCase):

    @override_settings(ACCESS_CONTROL={
        'EXTERNAL_RECRUITER_ALLOWED_PATHS': ('/portal',),
        'EXTERNAL_RECRUITER_LANDING_PATH': '/portal/home',
    })
    def test_allow_list_and_landing_come_from_settings(self):
        self.assertEqual(evaluate_route('/portal/jobs', RECRUITER).action, GuardAction.ALLOW)
        self.assertEqual(evaluate_route('/my-jobs', RECRUITER).redirect_to, '/portal/home')
