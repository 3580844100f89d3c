"""
User Account Models
Handles authentication, roles and the tenant link of every user.
"""
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.core.exceptions import PermissionDenied
from django.db import models


class UserRole(models.TextChoices):
    SUPER_ADMIN = 'super_admin', 'Super Admin'
    COMPANY_ADMIN = 'company_admin', 'Company Admin'
    HR_MANAGER = 'hr_manager', 'HR Manager'
    MANAGER = 'manager', 'Manager'
    EMPLOYEE = 'employee', 'Employee'


# Roles that act on behalf of their whole company
COMPANY_LEVEL_ROLES = (UserRole.COMPANY_ADMIN, UserRole.HR_MANAGER, UserRole.MANAGER)

# Roles a company admin may hand out to users of its own company
COMPANY_ASSIGNABLE_ROLES = (UserRole.HR_MANAGER, UserRole.MANAGER, UserRole.EMPLOYEE)

# Roles allowed to maintain HR records (catalogs, employees, attendance)
HR_ADMIN_ROLES = (UserRole.COMPANY_ADMIN, UserRole.HR_MANAGER)

# Every role that belongs to a company
COMPANY_ROLES = COMPANY_LEVEL_ROLES + (UserRole.EMPLOYEE,)


LAST_SUPER_ADMIN_MESSAGE = (
    "Cannot remove the last active super admin. "
    "Create or activate another super admin first."
)


class CustomUserQuerySet(models.QuerySet):

    def super_admins(self):
        return self.filter(role=UserRole.SUPER_ADMIN)

    def active_super_admins(self):
        return self.super_admins().filter(is_active=True)


class CustomUserManager(BaseUserManager.from_queryset(CustomUserQuerySet)):
    """
    Custom user manager for CustomUser model.
    Handles user creation for every role.
    """

    def create_user(self, email, name='', password=None, role=UserRole.EMPLOYEE, **extra_fields):
        """
        Create and save a user.

        Args:
            email: User's email address (used for authentication)
            name: User's full name
            password: Raw password (will be hashed)
            role: One of UserRole
            **extra_fields: Additional fields (company, phone_number, is_active...)

        Returns:
            CustomUser: The created user instance
        """
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email).lower()
        user = self.model(email=email, name=name, role=role, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, name='', password=None, **extra_fields):
        """
        Create and save a super admin user.
        Required by Django for the createsuperuser management command.
        """
        extra_fields.pop('company', None)
        return self.create_user(
            email=email,
            name=name,
            password=password,
            role=UserRole.SUPER_ADMIN,
            **extra_fields
        )


class CustomUser(AbstractBaseUser):
    """Email-authenticated user bound to at most one company"""
    email = models.EmailField(unique=True, db_index=True)
    name = models.CharField(max_length=255, blank=True, default='')
    phone_number = models.CharField(max_length=30, blank=True, default='')
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.EMPLOYEE,
        db_index=True
    )
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.PROTECT,
        related_name='users',
        null=True,
        blank=True,
        help_text="Tenant of the user; empty for super admins"
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'custom_users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.email})" if self.name else self.email

    def is_super_admin(self):
        return self.role == UserRole.SUPER_ADMIN

    # Django admin integration
    @property
    def is_staff(self):
        return self.is_super_admin()

    def has_perm(self, perm, obj=None):
        return self.is_active and self.is_super_admin()

    def has_module_perms(self, app_label):
        return self.is_active and self.is_super_admin()

    def _is_last_active_super_admin(self):
        return not CustomUser.objects.active_super_admins().exclude(pk=self.pk).exists()

    def delete(self, *args, **kwargs):
        """Refuse to delete the last active super admin."""
        if self.is_super_admin() and self.is_active and self._is_last_active_super_admin():
            raise PermissionDenied(LAST_SUPER_ADMIN_MESSAGE)
        return super().delete(*args, **kwargs)

    def save(self, *args, **kwargs):
        """
        Refuse to demote or deactivate the last active super admin.
        """
        if self.pk:
            old_user = CustomUser.objects.filter(pk=self.pk).only('role', 'is_active').first()
            if old_user is not None and old_user.is_super_admin() and old_user.is_active:
                losing_status = not self.is_super_admin() or not self.is_active
                if losing_status and self._is_last_active_super_admin():
                    raise PermissionDenied(LAST_SUPER_ADMIN_MESSAGE)

        return super().save(*args, **kwargs)
