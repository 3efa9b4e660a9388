"""
Job assignments feed an external recruiter's job scope, so any change drops
that recruiter's cached permission set.
"""
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from core.access_control.cache import permission_cache
from .models import JobAssignment


@receiver([post_save, post_delete], sender=JobAssignment)
def invalidate_on_job_assignment_change(sender, instance, **kwargs):
    permission_cache.invalidate(instance.user_id)
