"""
Data redaction for restricted viewers.

Works on serialized records (dicts produced by DRF serializers) and returns
new dicts; inputs are never mutated. Every function here is idempotent:
running it over its own output changes nothing.
"""
from .checks import job_scope
from .conf import access_settings


CLIENT_IDENTIFYING_FIELDS = ('name', 'contact_name', 'email', 'phone', 'address')


def can_view_client_names(perm_set):
    return perm_set is not None and perm_set.can_view_client_names


def filter_client_data(perm_set, client):
    """
    Blank out client-identifying fields when the viewer may not see them.

    Args:
        perm_set: EffectivePermissionSet or None (None is treated as restricted)
        client: Client mapping or None

    Returns:
        The client unchanged when visible or None; otherwise a copy with
        name, contact_name, email, phone and address set to the redaction
        marker and every other key untouched.
    """
    if client is None or can_view_client_names(perm_set):
        return client

    marker = access_settings.REDACTION_MARKER
    redacted = dict(client)
    for field_name in CLIENT_IDENTIFYING_FIELDS:
        if field_name in redacted:
            redacted[field_name] = marker
    return redacted


def filter_jobs(perm_set, jobs):
    """
    Restrict and redact a job list for the viewer.

    1. Job viewers only keep jobs whose id is in their allow-list
    2. If client names are hidden, each job's embedded 'client' is redacted

    Input order is preserved.
    """
    scope = job_scope(perm_set)
    if scope is not None:
        jobs = [job for job in jobs if str(job.get('id')) in scope]

    if can_view_client_names(perm_set):
        return list(jobs)

    filtered = []
    for job in jobs:
        if job.get('client') is not None:
            job = dict(job)
            job['client'] = filter_client_data(perm_set, job['client'])
        filtered.append(job)
    return filtered


def strip_client_details(jobs):
    """
    Drop the client block entirely (external recruiters never see who the
    client is, not even a redacted placeholder).
    """
    return [
        {key: value for key, value in job.items() if key not in ('client', 'client_id')}
        for job in jobs
    ]
