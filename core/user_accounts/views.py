"""
API Views for authentication and user administration.

- Public/auth: super admin bootstrap, login, logout, me, change password
- Super admin: system-wide user management
- Company admin: user management inside their own company
"""
import logging

from django.conf import settings
from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from django.core.exceptions import PermissionDenied, ValidationError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from hrm_project.pagination import auto_paginate
from hrm_project.response_formatter import success_response, error_response
from .decorators import require_roles
from .models import UserRole
from .serializers import (
    SuperAdminCreateSerializer,
    LoginSerializer,
    ChangePasswordSerializer,
    UserReadSerializer,
    MeSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
    CompanyUserCreateSerializer,
    CompanyUserUpdateSerializer,
)
from .services import AuthService, UserService, CompanyUserService

logger = logging.getLogger(__name__)


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else ' '.join(e.messages)


def _set_auth_cookie(response, access_token):
    cookie = settings.AUTH_COOKIE
    response.set_cookie(
        cookie['NAME'],
        str(access_token),
        max_age=cookie['MAX_AGE'],
        httponly=True,
        secure=cookie['SECURE'],
        samesite=cookie['SAMESITE'],
    )


# ============================================================================
# Public Authentication Views
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def create_super_admin(request):
    """
    Public bootstrap endpoint. Only works while no super admin exists.

    POST /auth/super-admin/
    - Request body: { "email", "password", "name"?, "phone_number"? }
    """
    serializer = SuperAdminCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    user = AuthService.create_super_admin(serializer.to_dto())
    return success_response(
        data=UserReadSerializer(user).data,
        message='Super admin created successfully',
        status_code=status.HTTP_201_CREATED
    )


@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    Authenticate and issue JWT tokens.

    POST /auth/login/
    - Request body: { "email": "...", "password": "..." }
    - Returns: user data and tokens; also sets the HttpOnly access_token cookie
    """
    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    user = authenticate(
        request,
        username=serializer.validated_data['email'].lower(),
        password=serializer.validated_data['password']
    )

    if user is None:
        return error_response('Invalid credentials', status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        AuthService.check_company_access(user)
    except PermissionDenied as e:
        return error_response(str(e), status_code=status.HTTP_403_FORBIDDEN)

    update_last_login(None, user)
    refresh = RefreshToken.for_user(user)

    response = success_response(
        data={
            'user': MeSerializer(user).data,
            'tokens': {
                'refresh': str(refresh),
                'access': str(refresh.access_token)
            }
        },
        message='Login successful'
    )
    _set_auth_cookie(response, refresh.access_token)
    logger.info("User %s logged in", user.email)
    return response


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """
    Blacklist the refresh token (when supplied) and clear the auth cookie.

    POST /auth/logout/
    - Request body: { "refresh"?: "..." }
    """
    refresh_token = request.data.get('refresh')
    if refresh_token:
        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError as e:
            return error_response(str(e), status_code=status.HTTP_400_BAD_REQUEST)

    response = success_response(message='Logout successful')
    response.delete_cookie(settings.AUTH_COOKIE['NAME'], samesite=settings.AUTH_COOKIE['SAMESITE'])
    return response


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    """
    GET /auth/me/
    - Returns: Current user with company summary
    """
    return Response(MeSerializer(request.user).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    """
    POST /auth/change-password/
    - Request body: { "current_password", "new_password" }
    """
    serializer = ChangePasswordSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        AuthService.change_password(request.user, serializer.to_dto())
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)

    return success_response(message='Password changed successfully')


# ============================================================================
# Super Admin User Management Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_roles(UserRole.SUPER_ADMIN)
@auto_paginate
def user_list(request):
    """
    List or create users across all companies.

    GET /core/user_accounts/users/
    - Filters: role, company_id, is_active, search, sort_by, sort_order

    POST /core/user_accounts/users/
    - Request body: UserCreateSerializer fields
    """
    if request.method == 'GET':
        filters = {
            'role': request.query_params.get('role'),
            'company_id': request.query_params.get('company_id'),
            'is_active': request.query_params.get('is_active'),
            'search': request.query_params.get('search'),
            'sort_by': request.query_params.get('sort_by'),
            'sort_order': request.query_params.get('sort_order'),
        }
        users = UserService.list_users(filters)
        serializer = UserReadSerializer(users, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = UserCreateSerializer(data=request.data)
    if serializer.is_valid():
        try:
            user = UserService.create_user(request.user, serializer.to_dto())
            return Response(UserReadSerializer(user).data, status=status.HTTP_201_CREATED)
        except ValidationError as e:
            return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_roles(UserRole.SUPER_ADMIN)
def user_detail(request, user_id):
    """
    Retrieve, update or delete a user.

    DELETE refuses to remove the caller or the last active super admin.
    """
    if request.method == 'GET':
        user = UserService.get_user(user_id)
        return Response(UserReadSerializer(user).data, status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        data = request.data.copy()
        data['user_id'] = user_id

        serializer = UserUpdateSerializer(data=data)
        if serializer.is_valid():
            try:
                user = UserService.update_user(request.user, serializer.to_dto())
                return Response(UserReadSerializer(user).data, status=status.HTTP_200_OK)
            except ValidationError as e:
                return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        UserService.delete_user(request.user, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@require_roles(UserRole.SUPER_ADMIN)
def user_reset_password(request, user_id):
    """
    POST /core/user_accounts/users/<id>/reset-password/
    - Returns: the generated password (shown once)
    """
    user, new_password = UserService.reset_password(request.user, user_id)
    return success_response(
        data={
            'user': UserReadSerializer(user).data,
            'temporary_password': new_password,
        },
        message=f'Password reset successfully for {user.email}. User should change it after logging in.'
    )


# ============================================================================
# Company Admin User Management Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_roles(UserRole.COMPANY_ADMIN)
@auto_paginate
def company_user_list(request):
    """
    List or create users of the caller's company.

    GET /core/user_accounts/company-users/
    - Filters: role, is_active, search, sort_by, sort_order

    POST /core/user_accounts/company-users/
    - Roles: hr_manager, manager, employee
    """
    if request.method == 'GET':
        filters = {
            'role': request.query_params.get('role'),
            'is_active': request.query_params.get('is_active'),
            'search': request.query_params.get('search'),
            'sort_by': request.query_params.get('sort_by'),
            'sort_order': request.query_params.get('sort_order'),
        }
        users = CompanyUserService.list_users(request.user, filters)
        serializer = UserReadSerializer(users, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = CompanyUserCreateSerializer(data=request.data)
    if serializer.is_valid():
        try:
            user = CompanyUserService.create_user(request.user, serializer.to_dto())
            return Response(UserReadSerializer(user).data, status=status.HTTP_201_CREATED)
        except ValidationError as e:
            return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH'])
@require_roles(UserRole.COMPANY_ADMIN)
def company_user_detail(request, user_id):
    """
    Retrieve or update a user of the caller's company.
    """
    if request.method == 'GET':
        user = CompanyUserService.get_user(request.user, user_id)
        return Response(UserReadSerializer(user).data, status=status.HTTP_200_OK)

    data = request.data.copy()
    data['user_id'] = user_id

    serializer = CompanyUserUpdateSerializer(data=data)
    if serializer.is_valid():
        try:
            user = CompanyUserService.update_user(request.user, serializer.to_dto())
            return Response(UserReadSerializer(user).data, status=status.HTTP_200_OK)
        except ValidationError as e:
            return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@require_roles(UserRole.COMPANY_ADMIN)
def company_user_reset_password(request, user_id):
    """
    POST /core/user_accounts/company-users/<id>/reset-password/
    """
    user, new_password = CompanyUserService.reset_password(request.user, user_id)
    return success_response(
        data={
            'user': UserReadSerializer(user).data,
            'temporary_password': new_password,
        },
        message=f'Password reset successfully for {user.email}. User should change it after logging in.'
    )
