from django.db import models
from django.conf import settings


class StatusChoices(models.TextChoices):
    """Lifecycle status shared by roles and clients."""
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'


class AuditMixin(models.Model):
    """
    Who created or last changed a record, and when.

    created_by / updated_by are filled by the views from request.user
    (serializer.save(created_by=request.user, ...)); records created by
    management commands leave them empty.
    """
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_created',
        help_text="User who created this record"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_updated',
        help_text="User who last updated this record"
    )

    class Meta:
        abstract = True


class SoftDeleteMixin(models.Model):
    """
    Records that are switched off rather than removed.

    An inactive role stops contributing permissions to its holders; an
    inactive client drops out of listings and cannot receive new jobs, while
    its existing jobs keep pointing at it.
    """
    status = models.CharField(
        max_length=10,
        choices=StatusChoices.choices,
        default=StatusChoices.ACTIVE,
        help_text="Set to inactive instead of deleting"
    )

    class Meta:
        abstract = True

    @property
    def is_active(self):
        return self.status == StatusChoices.ACTIVE

    def deactivate(self):
        self.status = StatusChoices.INACTIVE
        self.save(update_fields=['status'])
