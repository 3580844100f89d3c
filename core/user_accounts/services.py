"""
User Account Services - Business Logic Layer

- AuthService: super admin bootstrap, sign-in checks, password changes
- UserService: system-wide user administration (super admin)
- CompanyUserService: user administration inside one company (company admin)

Every role change, deactivation or deletion of a super admin goes through
UserService.ensure_not_last_super_admin.
"""
import logging
import secrets
import string

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import models, transaction
from django.http import Http404

from core.base.exceptions import ConflictError
from core.companies.models import Company, CompanyStatus
from core.user_accounts.dtos import (
    SuperAdminCreateDTO,
    ChangePasswordDTO,
    UserCreateDTO,
    UserUpdateDTO,
    CompanyUserCreateDTO,
    CompanyUserUpdateDTO,
)
from core.user_accounts.models import (
    CustomUser,
    UserRole,
    COMPANY_ASSIGNABLE_ROLES,
    LAST_SUPER_ADMIN_MESSAGE,
)

logger = logging.getLogger(__name__)

PASSWORD_SYMBOLS = '!@#$%^&*()_+-=[]{}|;:,.<>?'

USER_SORT_FIELDS = ('created_at', 'email', 'name', 'last_login', 'updated_at')


def generate_password(length=12):
    """
    Random password with at least one upper, lower, digit and symbol.

    Lengths below 8 are raised to 8.
    """
    length = max(length, 8)
    pools = [string.ascii_uppercase, string.ascii_lowercase, string.digits, PASSWORD_SYMBOLS]
    alphabet = ''.join(pools)

    chars = [secrets.choice(pool) for pool in pools]
    chars += [secrets.choice(alphabet) for _ in range(length - len(chars))]

    secrets.SystemRandom().shuffle(chars)
    return ''.join(chars)


def _email_taken(email, exclude_pk=None):
    queryset = CustomUser.objects.filter(email__iexact=email)
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)
    return queryset.exists()


def _parse_bool(value):
    if value is None or value == '' or isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ('true', '1', 'yes'):
        return True
    if lowered in ('false', '0', 'no'):
        return False
    return None


class AuthService:
    """Service for authentication workflows"""

    @staticmethod
    @transaction.atomic
    def create_super_admin(dto: SuperAdminCreateDTO) -> CustomUser:
        """
        Bootstrap the single super admin account.

        Raises:
            ConflictError: If a super admin already exists or email is taken
        """
        if CustomUser.objects.super_admins().exists():
            raise ConflictError('Super admin already exists')

        if _email_taken(dto.email):
            raise ConflictError(f'User with email "{dto.email}" already exists')

        user = CustomUser.objects.create_superuser(
            email=dto.email,
            name=dto.name,
            password=dto.password,
            phone_number=dto.phone_number,
        )
        logger.info("Super admin bootstrapped: %s", user.email)
        return user

    @staticmethod
    def check_company_access(user):
        """
        Refuse sign-in for users of suspended or archived companies.

        Raises:
            PermissionDenied: If the user's company is not active
        """
        company = user.company
        if company is None:
            return
        if company.status == CompanyStatus.SUSPENDED:
            raise PermissionDenied("Your company account has been suspended. Please contact support.")
        if company.status == CompanyStatus.ARCHIVED:
            raise PermissionDenied("Your company account has been archived. Please contact support.")

    @staticmethod
    def change_password(user, dto: ChangePasswordDTO) -> CustomUser:
        if not user.check_password(dto.current_password):
            raise ValidationError({'current_password': 'Current password is incorrect'})

        if dto.current_password == dto.new_password:
            raise ValidationError({'new_password': 'New password must be different from the current password'})

        user.set_password(dto.new_password)
        user.save(update_fields=['password', 'updated_at'])
        logger.info("Password changed for user %s", user.email)
        return user


class UserService:
    """Service for system-wide user administration (super admin only)"""

    @staticmethod
    def list_users(filters: dict = None) -> models.QuerySet:
        """
        List users with flexible filtering.

        Args:
            filters: Dictionary of filters
                - role: UserRole value
                - company_id: ID
                - is_active: 'true' / 'false'
                - search: email or name contains
                - sort_by / sort_order

        Returns:
            QuerySet of CustomUser objects
        """
        filters = filters or {}
        queryset = CustomUser.objects.select_related('company')

        role = filters.get('role')
        if role:
            queryset = queryset.filter(role=role)

        company_id = filters.get('company_id')
        if company_id:
            queryset = queryset.filter(company_id=company_id)

        is_active = _parse_bool(filters.get('is_active'))
        if isinstance(is_active, bool):
            queryset = queryset.filter(is_active=is_active)

        search = filters.get('search')
        if search:
            queryset = queryset.filter(
                models.Q(email__icontains=search) | models.Q(name__icontains=search)
            )

        sort_by = filters.get('sort_by')
        field = sort_by if sort_by in USER_SORT_FIELDS else 'created_at'
        prefix = '' if (filters.get('sort_order') or '').lower() == 'asc' else '-'
        return queryset.order_by(f'{prefix}{field}', f'{prefix}pk')

    @staticmethod
    def get_user(user_id) -> CustomUser:
        try:
            return CustomUser.objects.select_related('company').get(pk=user_id)
        except CustomUser.DoesNotExist:
            raise Http404(f'User with ID "{user_id}" not found')

    @staticmethod
    def ensure_not_last_super_admin(target: CustomUser, new_role=None, new_is_active=None, deleting=False):
        """
        Block any change that would leave the system without an active super admin.

        Raises:
            ValidationError: If target is the last active super admin and would
                lose the role, be deactivated, or be deleted
        """
        if not (target.is_super_admin() and target.is_active):
            return

        losing_role = new_role is not None and new_role != UserRole.SUPER_ADMIN
        deactivating = new_is_active is False
        if not (losing_role or deactivating or deleting):
            return

        others = CustomUser.objects.active_super_admins().exclude(pk=target.pk)
        if not others.exists():
            raise ValidationError(LAST_SUPER_ADMIN_MESSAGE)

    @staticmethod
    @transaction.atomic
    def create_user(actor, dto: UserCreateDTO) -> CustomUser:
        """
        Create a user of any role.

        Non super admin roles must belong to an existing company; super admins
        never carry a company.
        """
        if _email_taken(dto.email):
            raise ConflictError(f'User with email "{dto.email}" already exists')

        company = None
        if dto.role == UserRole.SUPER_ADMIN:
            if dto.company_id:
                raise ValidationError({'company_id': 'Super admins cannot belong to a company'})
        else:
            if not dto.company_id:
                raise ValidationError({'company_id': 'Company is required for this role'})
            try:
                company = Company.objects.get(pk=dto.company_id)
            except Company.DoesNotExist:
                raise Http404(f'Company with ID "{dto.company_id}" not found')

        user = CustomUser.objects.create_user(
            email=dto.email,
            name=dto.name,
            password=dto.password,
            role=dto.role,
            phone_number=dto.phone_number,
            company=company,
            is_active=dto.is_active,
        )
        logger.info("User %s (%s) created by %s", user.email, user.role, actor.email)
        return user

    @staticmethod
    @transaction.atomic
    def update_user(actor, dto: UserUpdateDTO) -> CustomUser:
        user = UserService.get_user(dto.user_id)

        if dto.email is not None and dto.email.lower() != user.email:
            if _email_taken(dto.email, exclude_pk=user.pk):
                raise ConflictError(f'User with email "{dto.email}" already exists')
            user.email = dto.email.lower()

        if dto.role is not None or dto.is_active is not None:
            UserService.ensure_not_last_super_admin(
                user, new_role=dto.role, new_is_active=dto.is_active
            )

        if dto.role is not None and dto.role != user.role:
            if dto.role == UserRole.SUPER_ADMIN and user.company_id is not None:
                raise ValidationError({'role': 'Users of a company cannot be promoted to super admin'})
            if dto.role != UserRole.SUPER_ADMIN and user.company_id is None:
                raise ValidationError({'role': 'A user without a company can only be a super admin'})
            user.role = dto.role

        if dto.name is not None:
            user.name = dto.name
        if dto.phone_number is not None:
            user.phone_number = dto.phone_number
        if dto.is_active is not None:
            user.is_active = dto.is_active

        user.save()
        return user

    @staticmethod
    @transaction.atomic
    def delete_user(actor, user_id):
        user = UserService.get_user(user_id)

        if user.pk == actor.pk:
            raise ValidationError('You cannot delete your own account')

        UserService.ensure_not_last_super_admin(user, deleting=True)

        if getattr(user, 'employee', None) is not None:
            raise ValidationError(
                'User is linked to an employee record. Terminate or delete the employee instead.'
            )

        email = user.email
        user.delete()
        logger.info("User %s deleted by %s", email, actor.email)

    @staticmethod
    @transaction.atomic
    def reset_password(actor, user_id):
        """
        Replace the user's password with a generated one.

        Returns:
            tuple: (user, new_password); the password is only returned once
        """
        user = UserService.get_user(user_id)
        new_password = generate_password()
        user.set_password(new_password)
        user.save(update_fields=['password', 'updated_at'])
        logger.info("Password reset for user %s by %s", user.email, actor.email)
        return user, new_password


class CompanyUserService:
    """Service for user administration inside the caller's company"""

    @staticmethod
    def list_users(actor, filters: dict = None) -> models.QuerySet:
        filters = dict(filters or {})
        filters['company_id'] = actor.company_id
        return UserService.list_users(filters)

    @staticmethod
    def get_user(actor, user_id) -> CustomUser:
        """
        Fetch a user and verify it belongs to the actor's company.

        Raises:
            Http404: If no such user
            PermissionDenied: If the user belongs to another company
        """
        user = UserService.get_user(user_id)
        if user.company_id != actor.company_id:
            raise PermissionDenied('You can only manage users from your own company')
        return user

    @staticmethod
    def _validate_role(role):
        if role not in COMPANY_ASSIGNABLE_ROLES:
            allowed = ', '.join(COMPANY_ASSIGNABLE_ROLES)
            raise ValidationError({'role': f'Role must be one of: {allowed}'})

    @staticmethod
    @transaction.atomic
    def create_user(actor, dto: CompanyUserCreateDTO) -> CustomUser:
        company = actor.company
        if company.status != CompanyStatus.ACTIVE:
            raise ValidationError('Cannot create users for a suspended or archived company')

        CompanyUserService._validate_role(dto.role)

        if _email_taken(dto.email):
            raise ConflictError(f'User with email "{dto.email}" already exists')

        user = CustomUser.objects.create_user(
            email=dto.email,
            name=dto.name,
            password=dto.password,
            role=dto.role,
            phone_number=dto.phone_number,
            company=company,
            is_active=dto.is_active,
        )
        logger.info("Company user %s (%s) created in %s by %s", user.email, user.role, company.name, actor.email)
        return user

    @staticmethod
    @transaction.atomic
    def update_user(actor, dto: CompanyUserUpdateDTO) -> CustomUser:
        user = CompanyUserService.get_user(actor, dto.user_id)

        if dto.role is not None:
            CompanyUserService._validate_role(dto.role)
            user.role = dto.role
        if dto.name is not None:
            user.name = dto.name
        if dto.phone_number is not None:
            user.phone_number = dto.phone_number
        if dto.is_active is not None:
            user.is_active = dto.is_active

        user.save()
        return user

    @staticmethod
    @transaction.atomic
    def reset_password(actor, user_id):
        user = CompanyUserService.get_user(actor, user_id)
        new_password = generate_password()
        user.set_password(new_password)
        user.save(update_fields=['password', 'updated_at'])
        logger.info("Password reset for company user %s by %s", user.email, actor.email)
        return user, new_password
