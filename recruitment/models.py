"""
Recruitment Models
Clients, the jobs they open, and the jobs handed to external recruiters.
Only the fields the access-control layer projects or scopes are kept here.
"""
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from core.base.models import AuditMixin, SoftDeleteMixin
from core.base.managers import SoftDeleteQuerySet


class ClientQuerySet(SoftDeleteQuerySet):
    exact_fields = ('industry',)
    contains_fields = ()
    search_fields = ('name', 'contact_name', 'email')


class Client(AuditMixin, SoftDeleteMixin, models.Model):
    """
    A hiring company. name, contact_name, email, phone and address identify
    the client and are redacted for viewers without view_client_names.
    """
    name = models.CharField(max_length=255)
    contact_name = models.CharField(max_length=255, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    phone = models.CharField(max_length=50, blank=True, default='')
    address = models.TextField(blank=True, default='')
    industry = models.CharField(max_length=100, blank=True, default='')
    notes = models.TextField(blank=True, default='')

    objects = ClientQuerySet.as_manager()

    class Meta:
        db_table = 'clients'
        verbose_name = 'Client'
        verbose_name_plural = 'Clients'
        ordering = ['name']

    def __str__(self):
        return self.name


class Job(AuditMixin, models.Model):
    """A vacancy opened by a client."""

    class JobStatus(models.TextChoices):
        ACTIVE = 'active', 'Active'
        PAUSED = 'paused', 'Paused'
        CLOSED = 'closed', 'Closed'

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    location = models.CharField(max_length=255, blank=True, default='')
    status = models.CharField(
        max_length=10,
        choices=JobStatus.choices,
        default=JobStatus.ACTIVE,
        db_index=True
    )
    client = models.ForeignKey(
        Client,
        on_delete=models.PROTECT,
        related_name='jobs'
    )

    class Meta:
        db_table = 'jobs'
        verbose_name = 'Job'
        verbose_name_plural = 'Jobs'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.client.name})"


class JobAssignment(models.Model):
    """
    A job handed to an external recruiter. The recruiter's job scope and
    their my-jobs list are built from these rows.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='job_assignments'
    )
    job = models.ForeignKey(
        Job,
        on_delete=models.CASCADE,
        related_name='assignments'
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_jobs'
    )
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'job_assignments'
        verbose_name = 'Job Assignment'
        verbose_name_plural = 'Job Assignments'
        unique_together = ('user', 'job')
        ordering = ['-assigned_at']

    def __str__(self):
        return f"{self.user.email} - {self.job.title}"

    def clean(self):
        if self.job_id and self.job.status == Job.JobStatus.CLOSED:
            raise ValidationError({'job': 'Closed jobs cannot be assigned'})
