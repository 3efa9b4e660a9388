"""
Tests for the recruitment API.
Client redaction, job scoping and external recruiter assignments as seen
through the endpoints.
"""
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from core.access_control.catalog import Menus
from core.access_control.models import Permission, UserPermissionOverride
from core.base.test_utils import clear_permission_cache, create_user_with_roles, setup_access_data
from recruitment.models import Client, Job, JobAssignment

MARKER = '*** restricted ***'


class RecruitmentAPITestCase(APITestCase):

    @classmethod
    def setUpTestData(cls):
        setup_access_data()
        cls.acme = Client.objects.create(
            name='Acme Corp',
            contact_name='Jane Smith',
            email='jane@acme.example',
            phone='+1 555 0100',
            address='1 Main Street',
            industry='Logistics',
        )
        cls.globex = Client.objects.create(name='Globex', industry='Energy')
        cls.driver = Job.objects.create(title='Driver', location='Leeds', client=cls.acme)
        cls.planner = Job.objects.create(title='Planner', location='York', client=cls.acme)
        cls.engineer = Job.objects.create(title='Engineer', client=cls.globex)

    def setUp(self):
        clear_permission_cache()
        self.client = APIClient()


class ClientAPITest(RecruitmentAPITestCase):

    def setUp(self):
        super().setUp()
        self.admin = create_user_with_roles('admin@example.com', 'restricted_admin')

    def test_list_clients_with_names(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get('/recruitment/clients/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        results = response.data['data']['results']
        self.assertEqual([c['name'] for c in results], ['Acme Corp', 'Globex'])

    def test_client_names_redacted_without_menu_permission(self):
        UserPermissionOverride.objects.create(
            user=self.admin,
            permission=Permission.objects.get(code=Menus.VIEW_CLIENT_NAMES),
            is_granted=False,
        )
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(f'/recruitment/clients/{self.acme.pk}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        for field_name in ('name', 'contact_name', 'email', 'phone', 'address'):
            self.assertEqual(response.data[field_name], MARKER)
        self.assertEqual(response.data['industry'], 'Logistics')
        self.assertEqual(response.data['id'], self.acme.pk)

    def test_create_client(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post('/recruitment/clients/', {
            'name': 'Initech',
            'industry': 'Software',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Client.objects.get(name='Initech').created_by, self.admin)

    def test_delete_is_denied_without_page(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(f'/recruitment/clients/{self.acme.pk}/')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['required_permission'], {'page': 'delete_clients'})

    def test_delete_deactivates(self):
        root = create_user_with_roles('root@example.com', 'super_admin')
        self.client.force_authenticate(user=root)

        response = self.client.delete(f'/recruitment/clients/{self.globex.pk}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.globex.refresh_from_db()
        self.assertFalse(self.globex.is_active)
        self.assertEqual(
            self.client.get(f'/recruitment/clients/{self.globex.pk}/').status_code,
            status.HTTP_404_NOT_FOUND
        )

    def test_regular_user_has_no_clients_page(self):
        staff = create_user_with_roles('staff@example.com', 'user')
        self.client.force_authenticate(user=staff)

        response = self.client.get('/recruitment/clients/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class JobAPITest(RecruitmentAPITestCase):

    def test_job_viewer_sees_only_allowed_jobs(self):
        viewer = create_user_with_roles(
            'viewer@example.com', 'job_viewer',
            allowed_job_ids=[self.driver.pk, self.engineer.pk]
        )
        self.client.force_authenticate(user=viewer)

        response = self.client.get('/recruitment/jobs/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        results = response.data['data']['results']
        self.assertEqual(response.data['data']['count'], 2)
        self.assertEqual({job['id'] for job in results}, {self.driver.pk, self.engineer.pk})
        self.assertTrue(all(job['client']['name'] == MARKER for job in results))

    def test_job_viewer_with_empty_scope_sees_nothing(self):
        viewer = create_user_with_roles('viewer@example.com', 'job_viewer')
        self.client.force_authenticate(user=viewer)

        response = self.client.get('/recruitment/jobs/')
        self.assertEqual(response.data['data']['count'], 0)

    def test_job_outside_scope_is_not_found(self):
        viewer = create_user_with_roles('viewer@example.com', 'job_viewer', allowed_job_ids=[self.driver.pk])
        self.client.force_authenticate(user=viewer)

        self.assertEqual(
            self.client.get(f'/recruitment/jobs/{self.driver.pk}/').status_code,
            status.HTTP_200_OK
        )
        self.assertEqual(
            self.client.get(f'/recruitment/jobs/{self.planner.pk}/').status_code,
            status.HTTP_404_NOT_FOUND
        )

    def test_regular_user_sees_client_names(self):
        staff = create_user_with_roles('staff@example.com', 'user')
        self.client.force_authenticate(user=staff)

        response = self.client.get('/recruitment/jobs/', {'client': self.acme.pk})

        names = {job['client']['name'] for job in response.data['data']['results']}
        self.assertEqual(names, {'Acme Corp'})

    def test_filters(self):
        staff = create_user_with_roles('staff@example.com', 'user')
        self.client.force_authenticate(user=staff)

        response = self.client.get('/recruitment/jobs/', {'search': 'york'})
        self.assertEqual([job['title'] for job in response.data['data']['results']], ['Planner'])

    def test_create_job(self):
        admin = create_user_with_roles('admin@example.com', 'admin')
        self.client.force_authenticate(user=admin)

        response = self.client.post('/recruitment/jobs/', {
            'title': 'Warehouse Lead',
            'client_id': self.acme.pk,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['client']['name'], 'Acme Corp')

    def test_create_job_outside_own_job_scope(self):
        creator = create_user_with_roles('lead@example.com', 'admin', 'job_viewer')
        self.client.force_authenticate(user=creator)

        response = self.client.post('/recruitment/jobs/', {
            'title': 'Night Planner',
            'client_id': self.acme.pk,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['title'], 'Night Planner')
        self.assertEqual(response.data['client']['name'], 'Acme Corp')
        self.assertEqual(
            self.client.get(f"/recruitment/jobs/{response.data['id']}/").status_code,
            status.HTTP_404_NOT_FOUND
        )

    def test_close_job(self):
        admin = create_user_with_roles('admin@example.com', 'admin')
        self.client.force_authenticate(user=admin)

        response = self.client.post(f'/recruitment/jobs/{self.planner.pk}/close/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], Job.JobStatus.CLOSED)
        response = self.client.post(f'/recruitment/jobs/{self.planner.pk}/close/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_close_job_requires_menu(self):
        staff = create_user_with_roles('staff@example.com', 'user')
        self.client.force_authenticate(user=staff)

        response = self.client.post(f'/recruitment/jobs/{self.planner.pk}/close/')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['required_permission'], {'menu': Menus.CLOSE_JOB})

    def test_create_job_for_inactive_client(self):
        admin = create_user_with_roles('admin@example.com', 'admin')
        self.client.force_authenticate(user=admin)
        self.globex.deactivate()

        response = self.client.post('/recruitment/jobs/', {
            'title': 'Operator',
            'client_id': self.globex.pk,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class MyJobsAPITest(RecruitmentAPITestCase):

    def setUp(self):
        super().setUp()
        self.recruiter = create_user_with_roles('recruiter@partner.example', 'external_recruiter')
        JobAssignment.objects.create(user=self.recruiter, job=self.driver)
        JobAssignment.objects.create(user=self.recruiter, job=self.engineer)

    def test_recruiter_sees_assigned_jobs_without_client(self):
        self.client.force_authenticate(user=self.recruiter)

        response = self.client.get('/recruitment/my-jobs/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        results = response.data['data']['results']
        self.assertEqual({job['id'] for job in results}, {self.driver.pk, self.engineer.pk})
        self.assertTrue(all('client' not in job for job in results))

    def test_closed_jobs_are_hidden(self):
        self.engineer.status = Job.JobStatus.CLOSED
        self.engineer.save()
        self.client.force_authenticate(user=self.recruiter)

        response = self.client.get('/recruitment/my-jobs/')

        self.assertEqual([job['id'] for job in response.data['data']['results']], [self.driver.pk])

    def test_recruiter_cannot_list_all_jobs(self):
        self.client.force_authenticate(user=self.recruiter)
        response = self.client.get('/recruitment/jobs/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class JobAssignmentAPITest(RecruitmentAPITestCase):

    def setUp(self):
        super().setUp()
        self.root = create_user_with_roles('root@example.com', 'super_admin')
        self.recruiter = create_user_with_roles('recruiter@partner.example', 'external_recruiter')
        self.client.force_authenticate(user=self.root)

    def test_assign_job(self):
        response = self.client.post('/recruitment/job-assignments/', {
            'user': self.recruiter.pk,
            'job': self.planner.pk,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['assigned_by_email'], 'root@example.com')
        self.assertTrue(JobAssignment.objects.filter(user=self.recruiter, job=self.planner).exists())

    def test_only_external_recruiters_receive_jobs(self):
        staff = create_user_with_roles('staff@example.com', 'user')
        response = self.client.post('/recruitment/job-assignments/', {
            'user': staff.pk,
            'job': self.planner.pk,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('user', response.data)

    def test_closed_job_cannot_be_assigned(self):
        self.planner.status = Job.JobStatus.CLOSED
        self.planner.save()

        response = self.client.post('/recruitment/job-assignments/', {
            'user': self.recruiter.pk,
            'job': self.planner.pk,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('job', response.data)

    def test_unassign_job(self):
        assignment = JobAssignment.objects.create(user=self.recruiter, job=self.driver)

        response = self.client.delete(f'/recruitment/job-assignments/{assignment.pk}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(JobAssignment.objects.filter(pk=assignment.pk).exists())

    def test_admin_without_page_is_denied(self):
        admin = create_user_with_roles('admin@example.com', 'admin')
        self.client.force_authenticate(user=admin)

        response = self.client.get('/recruitment/job-assignments/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
