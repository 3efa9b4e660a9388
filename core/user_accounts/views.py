"""
API Views for User Account management and authentication.
Provides REST API endpoints for login, profile management, and user administration.
Accounts are created by administrators; there is no self-registration.
"""
import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from django.contrib.auth import authenticate
from django.core.exceptions import PermissionDenied
from django.db.models import Q

from core.access_control.catalog import Pages, RoleTypes
from core.access_control.decorators import require_page_permission
from core.access_control.services import get_request_permissions
from recruit_project.pagination import auto_paginate
from .models import UserAccount
from .serializers import (
    UserProfileSerializer,
    ChangePasswordSerializer,
    AdminUserCreationSerializer,
    AdminUserUpdateSerializer,
    UserListSerializer,
)

logger = logging.getLogger(__name__)


def _user_payload(user):
    return {
        'id': user.id,
        'email': user.email,
        'name': user.name,
        'role_types': sorted(user.role_types()),
    }


# ============================================================================
# Public Authentication Views
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    Public endpoint for user login.
    Authenticates user and returns JWT tokens.

    POST /auth/login/
    - Request body: { "email": "...", "password": "..." }
    - Returns: User data and JWT tokens
    """
    email = request.data.get('email')
    password = request.data.get('password')

    if not email or not password:
        return Response(
            {'error': 'Please provide both email and password'},
            status=status.HTTP_400_BAD_REQUEST
        )

    user = authenticate(request, username=email, password=password)

    if user is None:
        logger.info(f"Failed login attempt for {email}")
        return Response(
            {'error': 'Invalid credentials'},
            status=status.HTTP_401_UNAUTHORIZED
        )

    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Login successful',
        'user': _user_payload(user),
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token)
        }
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """
    Authenticated endpoint for logout.
    Blacklists the refresh token.

    POST /auth/logout/
    - Request body: { "refresh": "..." }
    """
    refresh_token = request.data.get('refresh')
    if not refresh_token:
        return Response(
            {'error': 'Refresh token is required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        RefreshToken(refresh_token).blacklist()
    except TokenError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({
        'message': 'Logout successful'
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    """
    Authenticated endpoint for changing own password.

    POST /auth/change-password/
    - Request body: { "old_password", "new_password", "confirm_password" }
    """
    serializer = ChangePasswordSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    user = request.user

    if not user.check_password(serializer.validated_data['old_password']):
        return Response(
            {'error': 'Old password is incorrect'},
            status=status.HTTP_400_BAD_REQUEST
        )

    user.set_password(serializer.validated_data['new_password'])
    user.save()

    return Response({
        'message': 'Password changed successfully'
    }, status=status.HTTP_200_OK)


# ============================================================================
# Current User Views
# ============================================================================

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    """
    The signed-in user together with their resolved permissions.
    The browser calls this once after login to drive pages, menus and components.

    GET /core/user_accounts/me/
    """
    perm_set = get_request_permissions(request)
    return Response({
        'user': _user_payload(request.user),
        'permissions': perm_set.to_dict() if perm_set is not None else None,
    }, status=status.HTTP_200_OK)


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def user_profile(request):
    """
    Authenticated endpoint for viewing and updating own profile.
    Users can only change their name and phone number.

    GET /core/user_accounts/profile/
    PUT/PATCH /core/user_accounts/profile/
    - Request body: { "name", "phone_number" }
    """
    user = request.user

    if request.method == 'GET':
        serializer = UserProfileSerializer(user)
        return Response(serializer.data, status=status.HTTP_200_OK)

    partial = request.method == 'PATCH'
    serializer = UserProfileSerializer(user, data=request.data, partial=partial)

    if serializer.is_valid():
        serializer.save()
        return Response({
            'message': 'Profile updated successfully',
            'user': serializer.data
        }, status=status.HTTP_200_OK)

    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


# ============================================================================
# Admin User Management Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_page_permission(Pages.USER_MANAGEMENT)
@auto_paginate
def admin_user_list(request):
    """
    Admin endpoint for listing and creating users.

    GET /core/user_accounts/admin/users/
    - Query params: search (matches email or name), role_type
    POST /core/user_accounts/admin/users/
    - Request body: AdminUserCreationSerializer fields
    """
    if request.method == 'GET':
        users = UserAccount.objects.prefetch_related('user_roles__role')

        search = request.query_params.get('search')
        if search:
            users = users.filter(Q(email__icontains=search) | Q(name__icontains=search))

        role_type = request.query_params.get('role_type')
        if role_type:
            users = users.filter(user_roles__role__role_type=role_type).distinct()

        serializer = UserListSerializer(users.order_by('email'), many=True)
        return Response(serializer.data)

    serializer = AdminUserCreationSerializer(
        data=request.data,
        context={'request': request}
    )

    if serializer.is_valid():
        user = serializer.save()
        logger.info(f"User {user.email} created by {request.user.email}")
        return Response({
            'message': 'User created successfully',
            'user': UserListSerializer(user).data
        }, status=status.HTTP_201_CREATED)

    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_page_permission(Pages.USER_MANAGEMENT)
def admin_user_detail(request, user_id):
    """
    Admin endpoint for viewing, updating, and deleting specific users.

    Only super admins may manage other super admins' accounts, and nobody
    may delete a super admin or themselves.

    GET/PUT/PATCH/DELETE /core/user_accounts/admin/users/<id>/
    """
    try:
        target_user = UserAccount.objects.get(pk=user_id)
    except UserAccount.DoesNotExist:
        return Response(
            {'error': 'User not found'},
            status=status.HTTP_404_NOT_FOUND
        )

    perm_set = get_request_permissions(request)
    target_is_super_admin = RoleTypes.SUPER_ADMIN in target_user.role_types()

    if target_is_super_admin and not perm_set.is_super_admin:
        return Response(
            {'error': 'You do not have permission to manage super admin users'},
            status=status.HTTP_403_FORBIDDEN
        )

    if request.method == 'GET':
        serializer = UserListSerializer(target_user)
        return Response(serializer.data, status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = AdminUserUpdateSerializer(
            target_user,
            data=request.data,
            partial=partial,
            context={'request': request}
        )

        if serializer.is_valid():
            serializer.save()
            return Response({
                'message': 'User updated successfully',
                'user': UserListSerializer(target_user).data
            }, status=status.HTTP_200_OK)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    # DELETE
    if request.user.id == target_user.id:
        return Response(
            {'error': 'Cannot delete your own account'},
            status=status.HTTP_403_FORBIDDEN
        )

    try:
        target_user.delete()
    except PermissionDenied as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_403_FORBIDDEN
        )

    logger.info(f"User {target_user.email} deleted by {request.user.email}")
    return Response({
        'message': f'User {target_user.email} deleted successfully'
    }, status=status.HTTP_200_OK)
