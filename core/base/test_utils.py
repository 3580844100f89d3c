"""
Shared fixtures for the HRM test suites.

Usage:
    from core.base.test_utils import make_company, make_user, make_employee

    company = make_company('Acme', code='ACME')
    admin = make_user('admin@acme.test', role=UserRole.COMPANY_ADMIN, company=company)
"""
from datetime import date, time

from django.contrib.auth import get_user_model

from core.companies.models import Company
from core.user_accounts.models import UserRole

User = get_user_model()

DEFAULT_PASSWORD = 'Passw0rd!23'


def make_company(name='Acme Corp', code='ACME', **extra):
    return Company.objects.create(name=name, code=code, **extra)


def make_user(email, role=UserRole.EMPLOYEE, company=None, password=DEFAULT_PASSWORD, name=None, **extra):
    return User.objects.create_user(
        email=email,
        name=name or email.split('@')[0].title(),
        password=password,
        role=role,
        company=company,
        **extra
    )


def make_super_admin(email='root@hrm.test', password=DEFAULT_PASSWORD):
    return make_user(email, role=UserRole.SUPER_ADMIN, password=password, name='Root')


def make_company_admin(company, email=None):
    return make_user(email or f'admin@{company.code.lower()}.test', role=UserRole.COMPANY_ADMIN, company=company)


def make_shift(company, name='Day', start=time(9, 0), end=time(17, 0), **extra):
    from HR.work_structures.models import WorkShift
    return WorkShift.objects.create(company=company, name=name, start_time=start, end_time=end, **extra)


def make_department(company, name='Engineering', **extra):
    from HR.work_structures.models import Department
    return Department.objects.create(company=company, name=name, **extra)


def make_designation(company, name='Engineer', **extra):
    from HR.work_structures.models import Designation
    return Designation.objects.create(company=company, name=name, **extra)


def make_employee(company, email, code=None, user=None, work_shift=None, role=UserRole.EMPLOYEE, **extra):
    """
    Create an Employee together with its login user.

    Pass user to attach the record to an existing account (e.g. an HR manager
    who is also an employee).
    """
    from HR.person.models import Employee

    if user is None:
        user = make_user(email, role=role, company=company)
    count = Employee.objects.filter(company=company).count()
    values = {
        'first_name': user.name or 'Test',
        'last_name': 'Employee',
        'join_date': date(2024, 1, 1),
        'work_email': email,
    }
    values.update(extra)
    return Employee.objects.create(
        company=company,
        user=user,
        employee_code=code or f'{(company.code or "EMP").upper()}{count + 1:03d}',
        work_shift=work_shift,
        **values
    )
