"""
API Views for Roles and Permissions.
Provides REST API endpoints for managing role-based access control and for
the browser to read the current user's resolved permissions.
"""
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from recruit_project.pagination import auto_paginate

from .catalog import Pages
from .decorators import require_page_permission
from .models import (
    Permission,
    Role,
    RolePermission,
    UserRole,
    UserPermissionOverride,
)
from .navigation import get_allowed_navigation, serialize_navigation
from .route_guard import evaluate_route
from .serializers import (
    PermissionSerializer,
    PermissionCodesSerializer,
    RoleSerializer,
    RoleListSerializer,
    UserRoleSerializer,
    UserRoleUpdateSerializer,
    UserPermissionOverrideSerializer,
)
from .services import get_effective_permissions, get_request_permissions

User = get_user_model()


# ============================================================================
# Permission catalog
# ============================================================================

@api_view(['GET'])
@require_page_permission(Pages.USER_MANAGEMENT)
@auto_paginate
def permission_list(request):
    """
    List catalog permissions.

    GET /core/access_control/permissions/
    - Query params:
        - namespace: page | menu | component
        - code, name, search: standard filters
    """
    permissions = Permission.objects.filter_by_search_params(request.query_params)
    serializer = PermissionSerializer(permissions, many=True)
    return Response(serializer.data, status=status.HTTP_200_OK)


# ============================================================================
# Role API Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_page_permission(Pages.USER_MANAGEMENT)
@auto_paginate
def role_list(request):
    """
    List all roles or create a new role.

    GET /core/access_control/roles/
    - Query params: role_type, status, code, name, search

    POST /core/access_control/roles/
    - Request body: RoleSerializer fields, optional permission_codes
    """
    if request.method == 'GET':
        roles = Role.objects.prefetch_related('role_permissions').filter_by_search_params(
            request.query_params
        )
        serializer = RoleListSerializer(roles, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = RoleSerializer(data=request.data, context={'request': request})
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_page_permission(Pages.USER_MANAGEMENT)
def role_detail(request, pk):
    """
    Retrieve, update, or delete a specific role.

    DELETE refuses roles that are still assigned to users; deactivate them
    with PATCH {"status": "inactive"} instead.
    """
    role = get_object_or_404(Role, pk=pk)

    if request.method == 'GET':
        serializer = RoleSerializer(role)
        return Response(serializer.data, status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = RoleSerializer(role, data=request.data, partial=partial, context={'request': request})
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data, status=status.HTTP_200_OK)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        role.delete()
    except ValidationError as e:
        return Response({'error': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@require_page_permission(Pages.USER_MANAGEMENT)
def role_assign_permissions(request, pk):
    """
    Grant one or more permissions to a role.

    POST /core/access_control/roles/{id}/assign-permissions/
    - Request body: { "permission_codes": ["view_jobs", "export_data"] }
    """
    role = get_object_or_404(Role, pk=pk)
    serializer = PermissionCodesSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    codes = serializer.validated_data['permission_codes']
    permissions = Permission.objects.filter(code__in=codes)
    not_found = sorted(set(codes) - set(permissions.values_list('code', flat=True)))

    assigned = []
    with transaction.atomic():
        for permission in permissions:
            _, created = RolePermission.objects.get_or_create(role=role, permission=permission)
            if created:
                assigned.append(permission.code)

    return Response({
        'message': f'{len(assigned)} permission(s) assigned to {role.name}',
        'assigned': sorted(assigned),
        'not_found': not_found,
        'permissions': sorted(role.permission_codes()),
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@require_page_permission(Pages.USER_MANAGEMENT)
def role_remove_permissions(request, pk):
    """
    Revoke one or more permissions from a role.

    POST /core/access_control/roles/{id}/remove-permissions/
    - Request body: { "permission_codes": [...] }
    """
    role = get_object_or_404(Role, pk=pk)
    serializer = PermissionCodesSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    codes = serializer.validated_data['permission_codes']
    grants = RolePermission.objects.filter(role=role, permission__code__in=codes)
    removed = sorted(grants.values_list('permission__code', flat=True))
    grants.delete()

    return Response({
        'message': f'{len(removed)} permission(s) removed from {role.name}',
        'removed': removed,
        'not_found': sorted(set(codes) - set(removed)),
        'permissions': sorted(role.permission_codes()),
    }, status=status.HTTP_200_OK)


# ============================================================================
# User Role assignment API Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_page_permission(Pages.USER_MANAGEMENT)
@auto_paginate
def user_role_list(request):
    """
    List role assignments or assign a role to a user.

    GET /core/access_control/user-roles/
    - Query params: user (id), role (code), role_type

    POST /core/access_control/user-roles/
    - Request body: { "user": 5, "role": 2, "allowed_job_ids": ["12"] }
    """
    if request.method == 'GET':
        user_roles = UserRole.objects.select_related('user', 'role', 'assigned_by')

        user_id = request.query_params.get('user')
        if user_id:
            user_roles = user_roles.filter(user_id=user_id)

        role_code = request.query_params.get('role')
        if role_code:
            user_roles = user_roles.filter(role__code=role_code)

        role_type = request.query_params.get('role_type')
        if role_type:
            user_roles = user_roles.filter(role__role_type=role_type)

        serializer = UserRoleSerializer(user_roles, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = UserRoleSerializer(data=request.data, context={'request': request})
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PATCH', 'DELETE'])
@require_page_permission(Pages.USER_MANAGEMENT)
def user_role_detail(request, pk):
    """
    Retrieve a role assignment, edit its job scope, or revoke it.

    PATCH /core/access_control/user-roles/{id}/
    - Request body: { "allowed_job_ids": ["12", "15"] }
    """
    user_role = get_object_or_404(
        UserRole.objects.select_related('user', 'role', 'assigned_by'),
        pk=pk
    )

    if request.method == 'GET':
        return Response(UserRoleSerializer(user_role).data, status=status.HTTP_200_OK)

    if user_role.user_id == request.user.pk:
        return Response(
            {'error': 'You cannot change your own role assignment'},
            status=status.HTTP_403_FORBIDDEN
        )

    if request.method == 'PATCH':
        serializer = UserRoleUpdateSerializer(user_role, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(UserRoleSerializer(user_role).data, status=status.HTTP_200_OK)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    user_role.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


# ============================================================================
# User permission overrides
# ============================================================================

@api_view(['GET', 'POST'])
@require_page_permission(Pages.USER_MANAGEMENT)
@auto_paginate
def override_list(request):
    """
    List per-user overrides or create/replace one.

    GET /core/access_control/overrides/?user=<id>
    POST /core/access_control/overrides/
    - Request body: { "user": 5, "permission": "export_data", "is_granted": false, "notes": "..." }
    """
    if request.method == 'GET':
        overrides = UserPermissionOverride.objects.select_related('user', 'permission', 'granted_by')

        user_id = request.query_params.get('user')
        if user_id:
            overrides = overrides.filter(user_id=user_id)

        serializer = UserPermissionOverrideSerializer(overrides, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = UserPermissionOverrideSerializer(data=request.data, context={'request': request})
    if serializer.is_valid():
        override = serializer.save()
        return Response(
            UserPermissionOverrideSerializer(override).data,
            status=status.HTTP_201_CREATED
        )
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'DELETE'])
@require_page_permission(Pages.USER_MANAGEMENT)
def override_detail(request, pk):
    override = get_object_or_404(UserPermissionOverride, pk=pk)

    if request.method == 'GET':
        return Response(UserPermissionOverrideSerializer(override).data, status=status.HTTP_200_OK)

    override.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Resolved permissions (consumed by the browser)
# ============================================================================

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_permissions(request):
    """
    Effective permissions of the signed-in user.

    GET /core/access_control/me/permissions/
    """
    perm_set = get_request_permissions(request)
    return Response({
        'user_id': request.user.pk,
        'permissions': perm_set.to_dict(),
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_permissions(request, user_id):
    """
    Effective permissions of any user. Users may read their own;
    reading someone else's requires an admin role.

    GET /core/access_control/users/{id}/permissions/
    """
    perm_set = get_request_permissions(request)
    if str(request.user.pk) != str(user_id) and not perm_set.is_admin:
        return Response(
            {
                'error': 'Permission denied',
                'detail': 'You can only access your own permissions'
            },
            status=status.HTTP_403_FORBIDDEN
        )

    target_user = get_object_or_404(User, pk=user_id)
    target_perm_set = get_effective_permissions(target_user)
    return Response({
        'user_id': target_user.pk,
        'email': target_user.email,
        'permissions': target_perm_set.to_dict(),
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_navigation(request):
    """
    Navigation entries the signed-in user may see, in display order.

    GET /core/access_control/me/navigation/
    """
    entries = get_allowed_navigation(get_request_permissions(request))
    return Response(serialize_navigation(entries), status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([AllowAny])
def route_check(request):
    """
    Route guard decision for a browser path.
    Anonymous callers get `defer` so the login redirect stays with the client.

    GET /core/access_control/route-check/?path=/candidates
    """
    path = request.query_params.get('path')
    if not path:
        return Response(
            {'error': 'The path query parameter is required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    is_authenticated = request.user.is_authenticated
    perm_set = get_request_permissions(request) if is_authenticated else None
    decision = evaluate_route(path, perm_set, is_authenticated=is_authenticated)
    return Response(decision.to_dict(), status=status.HTTP_200_OK)
