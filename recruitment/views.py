"""
API Views for clients, jobs and external-recruiter job assignments.

Every payload leaves through the redaction filter: client-identifying fields
are masked for viewers without view_client_names, job viewers only see
their allowed jobs, and external recruiters never see the client at all.
"""
import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.access_control.catalog import Menus, Pages
from core.access_control.checks import can_view_job
from core.access_control.decorators import (
    require_any_page_permission,
    require_menu_permission,
    require_page_permission,
)
from core.access_control.redaction import filter_client_data, filter_jobs, strip_client_details
from core.access_control.services import get_request_permissions
from recruit_project.pagination import auto_paginate

from .models import Client, Job, JobAssignment
from .serializers import ClientSerializer, JobSerializer, JobAssignmentSerializer

logger = logging.getLogger(__name__)


# ============================================================================
# Client API Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_page_permission({'GET': Pages.CLIENTS, 'POST': Pages.CREATE_CLIENT})
@auto_paginate
def client_list(request):
    """
    List active clients or create a new client.

    GET /recruitment/clients/
    - Query params: search (name, contact or email), industry
    POST /recruitment/clients/
    - Request body: ClientSerializer fields
    """
    perm_set = get_request_permissions(request)

    if request.method == 'GET':
        clients = Client.objects.active().filter_by_search_params(request.query_params)
        data = [
            filter_client_data(perm_set, client)
            for client in ClientSerializer(clients, many=True).data
        ]
        return Response(data, status=status.HTTP_200_OK)

    serializer = ClientSerializer(data=request.data)
    if serializer.is_valid():
        client = serializer.save(created_by=request.user, updated_by=request.user)
        return Response(
            filter_client_data(perm_set, ClientSerializer(client).data),
            status=status.HTTP_201_CREATED
        )
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_page_permission({
    'GET': Pages.CLIENTS,
    'PUT': Pages.EDIT_CLIENT,
    'PATCH': Pages.EDIT_CLIENT,
    'DELETE': Pages.DELETE_CLIENT,
})
def client_detail(request, pk):
    """
    Retrieve, update, or deactivate a client.
    DELETE is a soft delete; the client's jobs keep their history.
    """
    client = get_object_or_404(Client.objects.active(), pk=pk)
    perm_set = get_request_permissions(request)

    if request.method == 'GET':
        return Response(
            filter_client_data(perm_set, ClientSerializer(client).data),
            status=status.HTTP_200_OK
        )

    if request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = ClientSerializer(client, data=request.data, partial=partial)
        if serializer.is_valid():
            client = serializer.save(updated_by=request.user)
            return Response(
                filter_client_data(perm_set, ClientSerializer(client).data),
                status=status.HTTP_200_OK
            )
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    client.deactivate()
    logger.info(f"Client {client.pk} deactivated by {request.user.email}")
    return Response(status=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Job API Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_page_permission({'GET': Pages.JOBS, 'POST': Pages.CREATE_JOB})
@auto_paginate
def job_list(request):
    """
    List jobs or create a new job.

    GET /recruitment/jobs/
    - Query params: status, client (id), search (title or location)
    - Job viewers only receive their allowed jobs
    POST /recruitment/jobs/
    - Request body: JobSerializer fields with client_id
    """
    perm_set = get_request_permissions(request)

    if request.method == 'GET':
        jobs = Job.objects.select_related('client')

        job_status = request.query_params.get('status')
        if job_status:
            jobs = jobs.filter(status=job_status)

        client_id = request.query_params.get('client')
        if client_id:
            jobs = jobs.filter(client_id=client_id)

        search = request.query_params.get('search')
        if search:
            jobs = jobs.filter(Q(title__icontains=search) | Q(location__icontains=search))

        data = filter_jobs(perm_set, JobSerializer(jobs, many=True).data)
        return Response(data, status=status.HTTP_200_OK)

    serializer = JobSerializer(data=request.data)
    if serializer.is_valid():
        job = serializer.save(created_by=request.user, updated_by=request.user)
        # The creator sees the new job even when it lies outside their job scope
        data = dict(JobSerializer(job).data)
        data['client'] = filter_client_data(perm_set, data['client'])
        return Response(
            data,
            status=status.HTTP_201_CREATED
        )
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_page_permission({
    'GET': Pages.JOBS,
    'PUT': Pages.EDIT_JOB,
    'PATCH': Pages.EDIT_JOB,
    'DELETE': Pages.DELETE_JOB,
})
def job_detail(request, pk):
    """
    Retrieve, update, or delete a job.
    Jobs outside a job viewer's scope answer 404, as if they did not exist.
    """
    perm_set = get_request_permissions(request)
    if not can_view_job(perm_set, pk):
        return Response({'error': 'Job not found'}, status=status.HTTP_404_NOT_FOUND)

    job = get_object_or_404(Job.objects.select_related('client'), pk=pk)

    if request.method == 'GET':
        return Response(filter_jobs(perm_set, [JobSerializer(job).data])[0], status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = JobSerializer(job, data=request.data, partial=partial)
        if serializer.is_valid():
            job = serializer.save(updated_by=request.user)
            return Response(filter_jobs(perm_set, [JobSerializer(job).data])[0], status=status.HTTP_200_OK)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    job.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@require_menu_permission(Menus.CLOSE_JOB)
def job_close(request, pk):
    """
    Close a job. Closed jobs drop out of my-jobs and cannot be assigned.

    POST /recruitment/jobs/{id}/close/
    """
    perm_set = get_request_permissions(request)
    if not can_view_job(perm_set, pk):
        return Response({'error': 'Job not found'}, status=status.HTTP_404_NOT_FOUND)

    job = get_object_or_404(Job.objects.select_related('client'), pk=pk)
    if job.status == Job.JobStatus.CLOSED:
        return Response({'error': 'Job is already closed'}, status=status.HTTP_400_BAD_REQUEST)

    job.status = Job.JobStatus.CLOSED
    job.updated_by = request.user
    job.save(update_fields=['status', 'updated_by', 'updated_at'])
    logger.info(f"Job {job.pk} closed by {request.user.email}")
    return Response(filter_jobs(perm_set, [JobSerializer(job).data])[0], status=status.HTTP_200_OK)


@api_view(['GET'])
@require_page_permission(Pages.MY_JOBS)
@auto_paginate
def my_jobs(request):
    """
    Jobs assigned to the signed-in user.

    GET /recruitment/my-jobs/
    - External recruiters receive the jobs without any client block
    """
    perm_set = get_request_permissions(request)
    jobs = (
        Job.objects.select_related('client')
        .filter(assignments__user=request.user)
        .exclude(status=Job.JobStatus.CLOSED)
    )
    data = JobSerializer(jobs, many=True).data

    if perm_set.is_external_recruiter:
        data = strip_client_details(data)
    else:
        data = filter_jobs(perm_set, data)
    return Response(data, status=status.HTTP_200_OK)


# ============================================================================
# External recruiter job assignments
# ============================================================================

@api_view(['GET', 'POST'])
@require_any_page_permission(Pages.EXTERNAL_RECRUITERS, Pages.USER_MANAGEMENT)
@auto_paginate
def job_assignment_list(request):
    """
    List or create job assignments for external recruiters.

    GET /recruitment/job-assignments/?user=<id>&job=<id>
    POST /recruitment/job-assignments/
    - Request body: { "user": 7, "job": 3 }
    """
    if request.method == 'GET':
        assignments = JobAssignment.objects.select_related('user', 'job', 'assigned_by')

        user_id = request.query_params.get('user')
        if user_id:
            assignments = assignments.filter(user_id=user_id)

        job_id = request.query_params.get('job')
        if job_id:
            assignments = assignments.filter(job_id=job_id)

        serializer = JobAssignmentSerializer(assignments, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = JobAssignmentSerializer(data=request.data, context={'request': request})
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['DELETE'])
@require_any_page_permission(Pages.EXTERNAL_RECRUITERS, Pages.USER_MANAGEMENT)
def job_assignment_detail(request, pk):
    assignment = get_object_or_404(JobAssignment, pk=pk)
    assignment.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)
