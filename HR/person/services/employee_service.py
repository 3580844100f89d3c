"""
Employee Service - Business Logic Layer

Handles the employee lifecycle inside one company:
- Creation (employee + login user in one transaction)
- Updates with placement checks (department / designation / work shift)
- Status changes, soft and hard deletion
- Statistics and own profile

Every read and write is scoped to the caller's company.
"""
import logging
import re

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.db.models import Avg, Count, QuerySet
from django.http import Http404
from django.utils import timezone

from core.base.exceptions import ConflictError
from core.base.tenancy import require_company, require_active_company
from core.base.uploads import store_image
from core.user_accounts.models import CustomUser, UserRole
from HR.person.dtos import EmployeeCreateDTO, EmployeeUpdateDTO, EmployeeStatusUpdateDTO
from HR.person.models import Employee, EmployeeStatus
from HR.work_structures.models import Department, Designation, WorkShift

logger = logging.getLogger(__name__)

EMPLOYEE_SORT_FIELDS = ('created_at', 'first_name', 'last_name', 'employee_code', 'join_date')

EMPLOYEE_SEARCH_FIELDS = ('first_name', 'last_name', 'employee_code', 'user__email', 'work_email')

PLACEMENTS = (
    ('department_id', 'department', Department, 'department'),
    ('designation_id', 'designation', Designation, 'designation'),
    ('work_shift_id', 'work_shift', WorkShift, 'work shift'),
)


def generate_employee_code(company) -> str:
    """
    Next free code for company: prefix + 3-digit number (ACME001, EMP014...).

    The prefix is the company code upper-cased, or EMP when the company has
    no code. Numbering continues from the highest existing code.
    """
    prefix = company.code.upper() if company.code else 'EMP'
    codes = Employee.objects.filter(
        company=company, employee_code__startswith=prefix
    ).values_list('employee_code', flat=True)

    highest = 0
    for code in codes:
        match = re.fullmatch(rf'{re.escape(prefix)}(\d+)', code)
        if match:
            highest = max(highest, int(match.group(1)))

    return f'{prefix}{highest + 1:03d}'


class EmployeeService:
    """Service layer for employee lifecycle management"""

    @staticmethod
    def _resolve_placement(company, model, pk, label):
        """
        Load a department / designation / work shift for company.

        Raises:
            Http404: If it does not exist
            PermissionDenied: If it belongs to another company
            ValidationError: If it is inactive
        """
        try:
            obj = model.objects.get(pk=pk)
        except model.DoesNotExist:
            raise Http404(f'{label.capitalize()} with ID "{pk}" not found')
        if obj.company_id != company.id:
            raise PermissionDenied(f'{label.capitalize()} does not belong to your company')
        if not obj.is_active:
            raise ValidationError(f'Cannot assign employee to an inactive {label}')
        return obj

    @staticmethod
    def list_employees(user, filters: dict = None) -> QuerySet:
        """
        List employees of the caller's company.

        Args:
            filters: Dictionary of filters
                - search: name, code or email contains
                - department_id / designation_id / work_shift_id
                - status / employment_type
                - join_date_from / join_date_to
                - sort_by / sort_order
        """
        filters = filters or {}
        company = require_company(user)

        queryset = Employee.objects.for_company(company.id).with_relations()

        for key in ('department_id', 'designation_id', 'work_shift_id', 'status', 'employment_type'):
            if filters.get(key):
                queryset = queryset.filter(**{key: filters[key]})

        if filters.get('join_date_from'):
            queryset = queryset.filter(join_date__gte=filters['join_date_from'])
        if filters.get('join_date_to'):
            queryset = queryset.filter(join_date__lte=filters['join_date_to'])

        queryset = queryset.search(filters.get('search'), EMPLOYEE_SEARCH_FIELDS)
        return queryset.apply_sorting(filters.get('sort_by'), filters.get('sort_order'), EMPLOYEE_SORT_FIELDS)

    @staticmethod
    def get_employee(user, employee_id) -> Employee:
        company = require_company(user)
        try:
            employee = Employee.objects.with_relations().get(pk=employee_id)
        except Employee.DoesNotExist:
            raise Http404(f'Employee with ID "{employee_id}" not found')

        if employee.company_id != company.id:
            raise PermissionDenied('You can only access employees from your own company')
        return employee

    @staticmethod
    @transaction.atomic
    def create(user, dto: EmployeeCreateDTO) -> Employee:
        """
        Create an employee and its login user (role employee).

        Validates:
        - company active and below its max_employees limit (active employees)
        - email not used by any user
        - employee_code unique in the company (generated when omitted)
        - placements belong to the company and are active
        """
        company = require_active_company(user, 'employees')

        if company.max_employees:
            active_count = Employee.objects.for_company(company.id).active().count()
            if active_count >= company.max_employees:
                raise ValidationError(
                    f'Company has reached the maximum employee limit of {company.max_employees}. '
                    f'Currently has {active_count} active employees.'
                )

        email = dto.email.lower()
        if CustomUser.objects.filter(email__iexact=email).exists():
            raise ConflictError(f'User with email "{email}" already exists')

        if dto.employee_code:
            code = dto.employee_code
            if Employee.objects.for_company(company.id).filter(employee_code=code).exists():
                raise ConflictError(f'Employee with code "{code}" already exists in your company')
        else:
            code = generate_employee_code(company)

        placements = {}
        for id_field, attr, model, label in PLACEMENTS:
            pk = getattr(dto, id_field)
            placements[attr] = EmployeeService._resolve_placement(company, model, pk, label) if pk else None

        login = CustomUser.objects.create_user(
            email=email,
            name=' '.join(part for part in [dto.first_name, dto.middle_name, dto.last_name] if part),
            password=dto.password,
            role=UserRole.EMPLOYEE,
            company=company,
            phone_number=dto.phone,
        )

        employee = Employee(
            company=company,
            user=login,
            employee_code=code,
            first_name=dto.first_name,
            middle_name=dto.middle_name,
            last_name=dto.last_name,
            gender=dto.gender,
            date_of_birth=dto.date_of_birth,
            join_date=dto.join_date or timezone.localdate(),
            probation_end=dto.probation_end,
            employment_type=dto.employment_type,
            work_email=dto.work_email,
            personal_email=dto.personal_email,
            phone=dto.phone,
            address=dto.address,
            emergency_contact_name=dto.emergency_contact_name,
            emergency_contact_phone=dto.emergency_contact_phone,
            base_salary=dto.base_salary,
            image_url=dto.image_url,
            status=EmployeeStatus.ACTIVE,
            created_by=user,
            updated_by=user,
            **placements
        )
        employee.full_clean(validate_unique=False, validate_constraints=False)
        if dto.image:
            employee.image_url = store_image(dto.image, 'employees', 'employee')
        employee.save()

        logger.info("Employee %s created in %s by %s", employee.employee_code, company.name, user.email)
        return employee

    @staticmethod
    @transaction.atomic
    def update(user, dto: EmployeeUpdateDTO) -> Employee:
        """
        Update employee fields; name and phone are mirrored to the login user.

        A placement id of 0 clears that placement.
        """
        employee = EmployeeService.get_employee(user, dto.employee_id)

        for id_field, attr, model, label in PLACEMENTS:
            pk = getattr(dto, id_field)
            if pk is None:
                continue
            setattr(employee, attr, EmployeeService._resolve_placement(employee.company, model, pk, label) if pk else None)

        plain_fields = [
            'first_name', 'middle_name', 'last_name', 'employment_type', 'gender',
            'date_of_birth', 'join_date', 'probation_end', 'work_email', 'personal_email',
            'phone', 'address', 'emergency_contact_name', 'emergency_contact_phone',
            'base_salary', 'image_url',
        ]
        for field in plain_fields:
            value = getattr(dto, field)
            if value is not None:
                setattr(employee, field, value)
        if dto.image:
            employee.image_url = store_image(dto.image, 'employees', 'employee')

        employee.updated_by = user
        employee.full_clean(validate_unique=False, validate_constraints=False)
        employee.save()

        login = employee.user
        sync = {}
        if any(getattr(dto, f) is not None for f in ('first_name', 'middle_name', 'last_name')):
            sync['name'] = employee.full_name
        if dto.phone is not None:
            sync['phone_number'] = dto.phone
        if sync:
            for field, value in sync.items():
                setattr(login, field, value)
            login.save(update_fields=list(sync) + ['updated_at'])

        return employee

    @staticmethod
    @transaction.atomic
    def update_status(user, dto: EmployeeStatusUpdateDTO) -> Employee:
        """
        Move an employee between active / on_leave / terminated.

        terminated deactivates the login user; active reactivates it.
        """
        employee = EmployeeService.get_employee(user, dto.employee_id)
        employee.status = dto.status
        employee.updated_by = user
        employee.save(update_fields=['status', 'updated_by', 'updated_at'])

        login = employee.user
        if dto.status == EmployeeStatus.TERMINATED and login.is_active:
            login.is_active = False
            login.save(update_fields=['is_active', 'updated_at'])
        elif dto.status == EmployeeStatus.ACTIVE and not login.is_active:
            login.is_active = True
            login.save(update_fields=['is_active', 'updated_at'])

        logger.info("Employee %s status set to %s by %s", employee.employee_code, dto.status, user.email)
        return employee

    @staticmethod
    @transaction.atomic
    def delete(user, employee_id, hard=False):
        """
        Soft delete (terminate + deactivate user) or hard delete.

        Raises:
            PermissionDenied: Hard delete requested by anyone but a company admin
        """
        employee = EmployeeService.get_employee(user, employee_id)

        if not hard:
            EmployeeService.update_status(
                user, EmployeeStatusUpdateDTO(employee_id=employee.id, status=EmployeeStatus.TERMINATED)
            )
            return

        if user.role != UserRole.COMPANY_ADMIN:
            raise PermissionDenied('Only company admins can permanently delete employees')

        code = employee.employee_code
        # Cascades to the employee row and its attendance / leave history
        employee.user.delete()
        logger.warning("Employee %s permanently deleted by %s", code, user.email)

    @staticmethod
    def statistics(user) -> dict:
        """
        Headcount figures for the caller's company.

        Breakdowns by department, designation and employment type count
        active employees only.
        """
        company = require_company(user)
        employees = Employee.objects.for_company(company.id)
        active = employees.active()

        by_status = {row['status']: row['count'] for row in employees.values('status').annotate(count=Count('id'))}

        today = timezone.localdate()
        average = active.filter(base_salary__isnull=False).aggregate(avg=Avg('base_salary'))['avg']

        return {
            'summary': {
                'total_employees': employees.count(),
                'total_active': by_status.get(EmployeeStatus.ACTIVE, 0),
                'total_on_leave': by_status.get(EmployeeStatus.ON_LEAVE, 0),
                'total_terminated': by_status.get(EmployeeStatus.TERMINATED, 0),
                'new_hires_this_month': employees.filter(join_date__gte=today.replace(day=1)).count(),
                'average_salary': round(float(average), 2) if average is not None else 0,
            },
            'by_status': [
                {'status': key, 'count': value} for key, value in sorted(by_status.items())
            ],
            'by_department': [
                {
                    'department_id': row['department_id'],
                    'department_name': row['department__name'] or 'Unassigned',
                    'department_code': row['department__code'],
                    'count': row['count'],
                }
                for row in active.values('department_id', 'department__name', 'department__code')
                .annotate(count=Count('id')).order_by('-count', 'department__name')
            ],
            'by_designation': [
                {
                    'designation_id': row['designation_id'],
                    'designation_name': row['designation__name'] or 'Unassigned',
                    'designation_code': row['designation__code'],
                    'count': row['count'],
                }
                for row in active.values('designation_id', 'designation__name', 'designation__code')
                .annotate(count=Count('id')).order_by('-count', 'designation__name')
            ],
            'by_employment_type': [
                {'employment_type': row['employment_type'], 'count': row['count']}
                for row in active.values('employment_type').annotate(count=Count('id')).order_by('employment_type')
            ],
        }

    @staticmethod
    def my_profile(user) -> Employee:
        """
        Raises:
            Http404: If the user has no employee record
        """
        try:
            return Employee.objects.with_relations().get(user=user)
        except Employee.DoesNotExist:
            raise Http404('Employee profile not found')
