from django.conf import settings
from django.db import models

from core.base.managers import BaseQuerySet
from core.base.models import AuditMixin


class Gender(models.TextChoices):
    MALE = 'male', 'Male'
    FEMALE = 'female', 'Female'
    OTHER = 'other', 'Other'


class EmploymentType(models.TextChoices):
    FULL_TIME = 'full_time', 'Full Time'
    PART_TIME = 'part_time', 'Part Time'
    CONTRACT = 'contract', 'Contract'
    INTERN = 'intern', 'Intern'


class EmployeeStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    ON_LEAVE = 'on_leave', 'On Leave'
    TERMINATED = 'terminated', 'Terminated'


class EmployeeQuerySet(BaseQuerySet):

    def active(self):
        return self.filter(status=EmployeeStatus.ACTIVE)

    def with_relations(self):
        return self.select_related('company', 'user', 'department', 'designation', 'work_shift')


class Employee(AuditMixin, models.Model):
    """
    Employment record of a company member.

    Every employee owns exactly one login user (role employee unless an
    existing company user was linked). Terminating the employee deactivates
    that user.
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='employees'
    )
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='employee'
    )
    employee_code = models.CharField(max_length=50)

    # Name
    first_name = models.CharField(max_length=80)
    middle_name = models.CharField(max_length=80, blank=True, default='')
    last_name = models.CharField(max_length=80)

    # Placement
    department = models.ForeignKey(
        'work_structures.Department',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='employees'
    )
    designation = models.ForeignKey(
        'work_structures.Designation',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='employees'
    )
    work_shift = models.ForeignKey(
        'work_structures.WorkShift',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='employees'
    )

    # Personal
    gender = models.CharField(max_length=10, choices=Gender.choices, blank=True, default='')
    date_of_birth = models.DateField(null=True, blank=True)

    # Employment
    join_date = models.DateField()
    probation_end = models.DateField(null=True, blank=True)
    employment_type = models.CharField(
        max_length=20,
        choices=EmploymentType.choices,
        default=EmploymentType.FULL_TIME
    )
    base_salary = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=EmployeeStatus.choices,
        default=EmployeeStatus.ACTIVE,
        db_index=True
    )

    # Contact
    work_email = models.EmailField(blank=True, default='')
    personal_email = models.EmailField(blank=True, default='')
    phone = models.CharField(max_length=20, blank=True, default='')
    address = models.TextField(blank=True, default='')
    emergency_contact_name = models.CharField(max_length=150, blank=True, default='')
    emergency_contact_phone = models.CharField(max_length=20, blank=True, default='')
    image_url = models.CharField(max_length=500, blank=True, default='')

    objects = EmployeeQuerySet.as_manager()

    class Meta:
        db_table = 'hr_employee'
        verbose_name = 'Employee'
        verbose_name_plural = 'Employees'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['company', 'employee_code'], name='uniq_employee_company_code'),
        ]

    def __str__(self):
        return f"{self.employee_code} - {self.full_name}"

    @property
    def full_name(self):
        return ' '.join(part for part in [self.first_name, self.middle_name, self.last_name] if part)

    @property
    def is_active(self):
        return self.status == EmployeeStatus.ACTIVE
