"""
Core Base Module

Provides shared base classes and mixins for the recruitment modules.

Exports:
    Basic Utilities:
        - StatusChoices: Standard ACTIVE/INACTIVE status choices

    Individual Feature Mixins:
        - AuditMixin: Adds created_at, updated_at, created_by, updated_by
        - SoftDeleteMixin: Adds status + soft delete behavior

    Managers & QuerySets:
        - BaseQuerySet: Base queryset with filter_by_search_params
        - SoftDeleteQuerySet: QuerySet with active()/inactive() filters

Usage:
    from core.base import AuditMixin, SoftDeleteMixin
    from core.base.managers import SoftDeleteQuerySet

    class Client(AuditMixin, SoftDeleteMixin, models.Model):
        name = models.CharField(max_length=255)
        objects = SoftDeleteQuerySet.as_manager()
"""

from core.base.models import (
    StatusChoices,
    AuditMixin,
    SoftDeleteMixin,
)

from core.base.managers import (
    BaseQuerySet,
    SoftDeleteQuerySet,
)

__all__ = [
    # Basic Utilities
    'StatusChoices',

    # Individual Feature Mixins
    'AuditMixin',
    'SoftDeleteMixin',

    # Managers & QuerySets
    'BaseQuerySet',
    'SoftDeleteQuerySet',
]
