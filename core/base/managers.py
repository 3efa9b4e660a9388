"""
Shared querysets for list endpoints.

List views accept `search` plus a few exact-match query parameters. Each
queryset declares which columns those map to, so a view only has to call
`filter_by_search_params(request.query_params)`.

    Permission.objects.filter_by_search_params({'search': 'client'})
    Client.objects.active().filter_by_search_params({'industry': 'logistics'})
"""
from django.db import models
from django.db.models import Q

from core.base.models import StatusChoices


class BaseQuerySet(models.QuerySet):
    # query param -> case-insensitive exact match on the column of the same name
    exact_fields = ('code',)
    # query param -> case-insensitive contains on the column of the same name
    contains_fields = ('name',)
    # columns the free-text `search` param is matched against
    search_fields = ('code', 'name')

    def search(self, term):
        if not term:
            return self
        condition = Q()
        for field_name in self.search_fields:
            condition |= Q(**{f'{field_name}__icontains': term})
        return self.filter(condition)

    def filter_by_search_params(self, query_params):
        """
        Apply the declared exact, contains and search filters.
        Empty or missing parameters are ignored.
        """
        queryset = self

        for field_name in self.exact_fields:
            value = query_params.get(field_name)
            if value:
                queryset = queryset.filter(**{f'{field_name}__iexact': value})

        for field_name in self.contains_fields:
            value = query_params.get(field_name)
            if value:
                queryset = queryset.filter(**{f'{field_name}__icontains': value})

        return queryset.search(query_params.get('search'))


class SoftDeleteQuerySet(BaseQuerySet):
    """QuerySet for models carrying SoftDeleteMixin.status."""

    def active(self):
        return self.filter(status=StatusChoices.ACTIVE)

    def inactive(self):
        return self.filter(status=StatusChoices.INACTIVE)
