"""
Company Service - Business Logic Layer

Handles the tenant lifecycle:
- Company + first company admin creation (single transaction)
- Profile updates with name/code uniqueness
- Status transitions (active / suspended / archived)
- Deletion of companies without users
"""
import logging

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import Count, Q
from django.http import Http404

from core.base.exceptions import ConflictError
from core.base.uploads import store_image
from core.companies.dtos import (
    CompanyWithAdminCreateDTO,
    CompanyUpdateDTO,
    CompanyStatusUpdateDTO,
)
from core.companies.models import Company
from core.user_accounts.models import CustomUser, UserRole

logger = logging.getLogger(__name__)

COMPANY_SORT_FIELDS = ('created_at', 'name', 'code', 'status', 'updated_at')


class CompanyService:
    """Service for Company business logic"""

    @staticmethod
    def list_companies(filters: dict = None) -> models.QuerySet:
        """
        List companies with their user counts.

        Args:
            filters: Dictionary of filters
                - search: name or code contains
                - status: active / suspended / archived
                - sort_by / sort_order

        Returns:
            QuerySet of Company objects annotated with user_count
        """
        filters = filters or {}
        queryset = Company.objects.annotate(user_count=Count('users', distinct=True))

        status = filters.get('status')
        if status:
            queryset = queryset.filter(status=status)

        queryset = queryset.search(filters.get('search'), ['name', 'code'])

        return queryset.apply_sorting(
            filters.get('sort_by'),
            filters.get('sort_order'),
            COMPANY_SORT_FIELDS
        )

    @staticmethod
    def get_company(company_id) -> Company:
        try:
            return Company.objects.annotate(
                user_count=Count('users', distinct=True),
                employee_count=Count('employees', distinct=True),
                active_employee_count=Count(
                    'employees', filter=Q(employees__status='active'), distinct=True
                ),
            ).get(pk=company_id)
        except Company.DoesNotExist:
            raise Http404(f'Company with ID "{company_id}" not found')

    @staticmethod
    def get_admin(company: Company):
        """First company admin of the company, or None"""
        return company.users.filter(role=UserRole.COMPANY_ADMIN).order_by('created_at').first()

    @staticmethod
    def _ensure_unique(name=None, code=None, exclude_pk=None):
        queryset = Company.objects.all()
        if exclude_pk is not None:
            queryset = queryset.exclude(pk=exclude_pk)

        if name and queryset.filter(name__iexact=name).exists():
            raise ConflictError(f'Company with name "{name}" already exists')

        if code and queryset.filter(code__iexact=code).exists():
            raise ConflictError(f'Company with code "{code}" already exists')

    @staticmethod
    @transaction.atomic
    def create_with_admin(user, dto: CompanyWithAdminCreateDTO):
        """
        Create a company and its company admin atomically.

        Returns:
            tuple: (company, admin_user)

        Raises:
            ConflictError: If company name/code or admin email already exist
        """
        CompanyService._ensure_unique(name=dto.company_name, code=dto.company_code)

        if CustomUser.objects.filter(email__iexact=dto.admin_email).exists():
            raise ConflictError(f'User with email "{dto.admin_email}" already exists')

        company = Company(
            name=dto.company_name,
            code=dto.company_code or None,
            logo_url=dto.logo_url,
            industry=dto.industry,
            address=dto.address,
            city=dto.city,
            country=dto.country,
            plan_expires_at=dto.plan_expires_at,
            max_employees=dto.max_employees,
        )
        company.full_clean()
        if dto.logo:
            company.logo_url = store_image(dto.logo, 'companies', 'company')
        company.save()

        admin = CustomUser.objects.create_user(
            email=dto.admin_email,
            name=dto.admin_name,
            password=dto.admin_password,
            role=UserRole.COMPANY_ADMIN,
            phone_number=dto.admin_phone,
            company=company,
        )

        logger.info("Company %s created with admin %s by %s", company.name, admin.email, user.email)
        return company, admin

    @staticmethod
    @transaction.atomic
    def update(user, dto: CompanyUpdateDTO) -> Company:
        company = CompanyService.get_company(dto.company_id)

        CompanyService._ensure_unique(
            name=dto.name if dto.name and dto.name != company.name else None,
            code=dto.code if dto.code and dto.code != company.code else None,
            exclude_pk=company.pk
        )

        for field in (
            'name', 'code', 'logo_url', 'industry', 'address', 'city',
            'country', 'plan_expires_at', 'max_employees'
        ):
            value = getattr(dto, field)
            if value is not None:
                setattr(company, field, value)
        if dto.logo:
            company.logo_url = store_image(dto.logo, 'companies', 'company')

        company.full_clean(validate_unique=False)
        company.save()
        return company

    @staticmethod
    @transaction.atomic
    def update_status(user, dto: CompanyStatusUpdateDTO) -> Company:
        company = CompanyService.get_company(dto.company_id)
        previous = company.status
        company.status = dto.status
        company.save(update_fields=['status', 'updated_at'])
        logger.info(
            "Company %s status changed %s -> %s by %s",
            company.name, previous, company.status, user.email
        )
        return company

    @staticmethod
    @transaction.atomic
    def delete(user, company_id):
        """
        Delete a company that has no users.

        Raises:
            ValidationError: If users still belong to the company
        """
        company = CompanyService.get_company(company_id)
        if company.user_count:
            raise ValidationError(
                f'Cannot delete company. {company.user_count} user(s) belong to this company. '
                'Archive it instead.'
            )
        name = company.name
        company.delete()
        logger.info("Company %s deleted by %s", name, user.email)
