import re

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import RegexValidator
from rest_framework import serializers

from .dtos import (
    SuperAdminCreateDTO,
    ChangePasswordDTO,
    UserCreateDTO,
    UserUpdateDTO,
    CompanyUserCreateDTO,
    CompanyUserUpdateDTO,
)
from .models import CustomUser, UserRole, COMPANY_ASSIGNABLE_ROLES


phone_validator = RegexValidator(
    regex=r'^(\+?\d{1,3})?[-.\s]?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}$',
    message="Enter a valid phone number"
)


def check_password_strength(value):
    """Shared password policy for every endpoint that sets a password"""
    if len(value) < 8:
        raise serializers.ValidationError("Password must be at least 8 characters long")

    if not re.search(r'[A-Z]', value):
        raise serializers.ValidationError("Password must contain at least one uppercase letter")

    if not re.search(r'[a-z]', value):
        raise serializers.ValidationError("Password must contain at least one lowercase letter")

    if not re.search(r'\d', value):
        raise serializers.ValidationError("Password must contain at least one number")

    try:
        validate_password(value)
    except DjangoValidationError as e:
        raise serializers.ValidationError(list(e.messages))
    return value


class PasswordFieldsMixin:
    """validate_password / validate_phone_number hooks shared by write serializers"""

    def validate_password(self, value):
        return check_password_strength(value)

    def validate_phone_number(self, value):
        if value:
            phone_validator(value)
        return value

    def validate_email(self, value):
        return value.lower()


# ============================================================================
# Read serializers
# ============================================================================

class UserReadSerializer(serializers.ModelSerializer):
    """Read serializer for CustomUser"""
    company_id = serializers.IntegerField(read_only=True, allow_null=True)
    company_name = serializers.CharField(source='company.name', read_only=True, default=None)

    class Meta:
        model = CustomUser
        fields = [
            'id', 'email', 'name', 'phone_number', 'role',
            'company_id', 'company_name', 'is_active',
            'last_login', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class MeSerializer(UserReadSerializer):
    """Current user with the tenant summary the dashboard needs"""
    company = serializers.SerializerMethodField()
    employee_id = serializers.SerializerMethodField()

    class Meta(UserReadSerializer.Meta):
        fields = UserReadSerializer.Meta.fields + ['company', 'employee_id']
        read_only_fields = fields

    def get_company(self, obj):
        if obj.company is None:
            return None
        return {
            'id': obj.company.id,
            'name': obj.company.name,
            'code': obj.company.code,
            'status': obj.company.status,
            'logo_url': obj.company.logo_url,
        }

    def get_employee_id(self, obj):
        employee = getattr(obj, 'employee', None)
        return employee.id if employee else None


# ============================================================================
# Auth serializers
# ============================================================================

class SuperAdminCreateSerializer(PasswordFieldsMixin, serializers.Serializer):
    """Write serializer for the super admin bootstrap"""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    phone_number = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')

    def to_dto(self) -> SuperAdminCreateDTO:
        return SuperAdminCreateDTO(**self.validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    new_password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    def validate_new_password(self, value):
        return check_password_strength(value)

    def to_dto(self) -> ChangePasswordDTO:
        return ChangePasswordDTO(**self.validated_data)


# ============================================================================
# Super admin user management
# ============================================================================

class UserCreateSerializer(PasswordFieldsMixin, serializers.Serializer):
    """Write serializer for super admin user creation"""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    role = serializers.ChoiceField(choices=UserRole.choices)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    phone_number = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    company_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    is_active = serializers.BooleanField(required=False, default=True)

    def to_dto(self) -> UserCreateDTO:
        return UserCreateDTO(**self.validated_data)


class UserUpdateSerializer(PasswordFieldsMixin, serializers.Serializer):
    """Write serializer for super admin user updates"""
    user_id = serializers.IntegerField()  # Primary Key
    email = serializers.EmailField(required=False)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=30, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    is_active = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if 'company_id' in self.initial_data:
            raise serializers.ValidationError({'company_id': 'Company of a user cannot be changed'})
        return attrs

    def to_dto(self) -> UserUpdateDTO:
        return UserUpdateDTO(**self.validated_data)


# ============================================================================
# Company admin user management
# ============================================================================

class CompanyUserCreateSerializer(PasswordFieldsMixin, serializers.Serializer):
    """Write serializer for users created by a company admin"""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    role = serializers.ChoiceField(choices=COMPANY_ASSIGNABLE_ROLES, required=False, default=UserRole.EMPLOYEE)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    phone_number = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    is_active = serializers.BooleanField(required=False, default=True)

    def to_dto(self) -> CompanyUserCreateDTO:
        return CompanyUserCreateDTO(**self.validated_data)


class CompanyUserUpdateSerializer(PasswordFieldsMixin, serializers.Serializer):
    """Write serializer for company admin updates"""
    user_id = serializers.IntegerField()  # Primary Key
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=30, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=COMPANY_ASSIGNABLE_ROLES, required=False)
    is_active = serializers.BooleanField(required=False)

    def to_dto(self) -> CompanyUserUpdateDTO:
        return CompanyUserUpdateDTO(**self.validated_data)
