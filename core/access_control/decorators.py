"""
Permission decorators for function-based views.
"""
from functools import wraps
from rest_framework.response import Response
from rest_framework import status

from .checks import can_access_page, can_use_menu
from .services import get_request_permissions


def _authentication_required():
    return Response(
        {'error': 'Authentication required'},
        status=status.HTTP_401_UNAUTHORIZED
    )


def _permission_denied(detail, required):
    return Response(
        {
            'error': 'Permission denied',
            'detail': detail,
            'required_permission': required
        },
        status=status.HTTP_403_FORBIDDEN
    )


def _page_for_method(page, method):
    if isinstance(page, dict):
        return page.get(method)
    return page


def require_page_permission(page):
    """
    Decorator to check a page permission for function-based views.

    Args:
        page: The page token (e.g., 'view_jobs'), or a dict mapping HTTP
            methods to page tokens. Methods missing from the dict are denied.

    Usage:
        # Same page for every method
        @api_view(['GET'])
        @require_page_permission(Pages.JOBS)
        def job_list(request):
            ...

        # Page per method
        @api_view(['GET', 'POST'])
        @require_page_permission({'GET': Pages.CLIENTS, 'POST': Pages.CREATE_CLIENT})
        def client_list(request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _authentication_required()

            required = _page_for_method(page, request.method)
            perm_set = get_request_permissions(request)
            if required is None or not can_access_page(perm_set, required):
                return _permission_denied(
                    f"You do not have access to page '{required}'",
                    {'page': required}
                )

            return view_func(request, *args, **kwargs)

        # Add metadata for introspection/documentation
        wrapper.required_page = page
        return wrapper
    return decorator


def require_menu_permission(menu):
    """
    Decorator to check a menu (action) permission.

    Usage:
        @api_view(['POST'])
        @require_menu_permission(Menus.EXPORT_DATA)
        def export_jobs(request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _authentication_required()

            perm_set = get_request_permissions(request)
            if not can_use_menu(perm_set, menu):
                return _permission_denied(
                    f"You are not allowed to use '{menu}'",
                    {'menu': menu}
                )

            return view_func(request, *args, **kwargs)

        wrapper.required_menu = menu
        return wrapper
    return decorator


def require_any_page_permission(*pages):
    """
    Decorator that checks if user has ANY of the specified pages (OR logic).

    Usage:
        @api_view(['GET'])
        @require_any_page_permission(Pages.JOBS, Pages.MY_JOBS)
        def job_detail(request, pk):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _authentication_required()

            perm_set = get_request_permissions(request)
            if any(can_access_page(perm_set, page) for page in pages):
                return view_func(request, *args, **kwargs)

            return _permission_denied(
                'You need at least one of the following permissions',
                {'pages': list(pages)}
            )

        wrapper.required_pages = pages
        return wrapper
    return decorator


def require_role_type(*role_types):
    """
    Decorator that requires the user to hold a role of one of the given types.

    Usage:
        @api_view(['GET'])
        @require_role_type(RoleTypes.SUPER_ADMIN, RoleTypes.ADMIN)
        def user_permissions(request, user_id):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _authentication_required()

            perm_set = get_request_permissions(request)
            if perm_set is None or not (perm_set.role_types & set(role_types)):
                return _permission_denied(
                    'Your role does not allow this operation',
                    {'role_types': list(role_types)}
                )

            return view_func(request, *args, **kwargs)

        wrapper.required_role_types = role_types
        return wrapper
    return decorator
