"""
Serializers for Company
"""
from rest_framework import serializers

from core.companies.dtos import (
    CompanyWithAdminCreateDTO,
    CompanyUpdateDTO,
    CompanyStatusUpdateDTO,
)
from core.base.uploads import validate_image
from core.companies.models import Company, CompanyStatus
from core.companies.services import CompanyService
from core.user_accounts.serializers import check_password_strength, phone_validator


class CompanyReadSerializer(serializers.ModelSerializer):
    """Read serializer for Company list rows"""
    user_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Company
        fields = [
            'id', 'name', 'code', 'logo_url', 'industry', 'address', 'city',
            'country', 'plan_expires_at', 'max_employees', 'status',
            'user_count', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class CompanyDetailSerializer(CompanyReadSerializer):
    """Company with admin and headcount details"""
    employee_count = serializers.IntegerField(read_only=True, default=0)
    active_employee_count = serializers.IntegerField(read_only=True, default=0)
    admin_id = serializers.SerializerMethodField()
    admin_name = serializers.SerializerMethodField()
    admin_email = serializers.SerializerMethodField()

    class Meta(CompanyReadSerializer.Meta):
        fields = CompanyReadSerializer.Meta.fields + [
            'employee_count', 'active_employee_count',
            'admin_id', 'admin_name', 'admin_email'
        ]
        read_only_fields = fields

    def _admin(self, obj):
        if not hasattr(obj, '_cached_admin'):
            obj._cached_admin = CompanyService.get_admin(obj)
        return obj._cached_admin

    def get_admin_id(self, obj):
        admin = self._admin(obj)
        return admin.id if admin else None

    def get_admin_name(self, obj):
        admin = self._admin(obj)
        return admin.name if admin else None

    def get_admin_email(self, obj):
        admin = self._admin(obj)
        return admin.email if admin else None


class CompanyWithAdminCreateSerializer(serializers.Serializer):
    """Write serializer for creating a company with its admin"""
    company_name = serializers.CharField(max_length=150)
    company_code = serializers.RegexField(
        r'^[A-Za-z0-9_-]+$',
        max_length=50,
        required=False,
        allow_null=True,
        default=None,
        error_messages={'invalid': 'Code may only contain letters, numbers, hyphens and underscores'}
    )
    admin_email = serializers.EmailField()
    admin_password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    admin_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    admin_phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    logo_url = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    logo = serializers.FileField(required=False, allow_null=True, default=None, write_only=True)
    industry = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    city = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    country = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    plan_expires_at = serializers.DateField(required=False, allow_null=True, default=None)
    max_employees = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=None)

    def validate_admin_password(self, value):
        return check_password_strength(value)

    def validate_admin_phone(self, value):
        if value:
            phone_validator(value)
        return value

    def validate_admin_email(self, value):
        return value.lower()

    def validate_logo(self, value):
        return validate_image(value) if value else value

    def to_dto(self) -> CompanyWithAdminCreateDTO:
        return CompanyWithAdminCreateDTO(**self.validated_data)


class CompanyUpdateSerializer(serializers.Serializer):
    """Write serializer for updating a company"""
    company_id = serializers.IntegerField()  # Primary Key
    name = serializers.CharField(max_length=150, required=False)
    code = serializers.RegexField(r'^[A-Za-z0-9_-]+$', max_length=50, required=False)
    logo_url = serializers.CharField(max_length=500, required=False, allow_blank=True)
    logo = serializers.FileField(required=False, write_only=True)
    industry = serializers.CharField(max_length=100, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)
    plan_expires_at = serializers.DateField(required=False)
    max_employees = serializers.IntegerField(min_value=1, required=False)

    def validate_logo(self, value):
        return validate_image(value)

    def to_dto(self) -> CompanyUpdateDTO:
        return CompanyUpdateDTO(**self.validated_data)


class CompanyStatusSerializer(serializers.Serializer):
    company_id = serializers.IntegerField()
    status = serializers.ChoiceField(choices=CompanyStatus.choices)

    def to_dto(self) -> CompanyStatusUpdateDTO:
        return CompanyStatusUpdateDTO(**self.validated_data)
