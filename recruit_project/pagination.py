"""
Pagination for function-based list views.

List views return `Response(serializer.data)` and stay unaware of paging;
`auto_paginate` slices GET list bodies after the view has run. Paging happens
after access control filtering (job scoping, client redaction), so `count`
is always the number of records the caller may actually see.
"""
from functools import wraps

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """
    ?page=<n>&page_size=<m>, 20 per page by default, at most 100.

    The paginated body is already enveloped:
    {"status": "success", "message": "", "data": {"count", "next", "previous", "results"}}
    """
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response({
            'status': 'success',
            'message': '',
            'data': {
                'count': self.page.paginator.count,
                'next': self.get_next_link(),
                'previous': self.get_previous_link(),
                'results': data,
            }
        })


def auto_paginate(view_func):
    """
    Paginate GET responses whose body is a list.

    Place it under @api_view and the permission decorator:

        @api_view(['GET', 'POST'])
        @require_page_permission(Pages.JOBS)
        @auto_paginate
        def job_list(request):
            ...

    Non-list bodies, error responses and other methods pass through untouched.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        response = view_func(request, *args, **kwargs)

        if (
            request.method == 'GET'
            and isinstance(response, Response)
            and response.status_code < 400
            and isinstance(response.data, list)
        ):
            paginator = StandardResultsSetPagination()
            page = paginator.paginate_queryset(response.data, request)
            if page is not None:
                return paginator.get_paginated_response(page)

        return response

    return wrapper
