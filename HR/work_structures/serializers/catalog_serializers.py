"""
Serializers for Department, Designation and WorkShift
"""
from rest_framework import serializers

from HR.work_structures.dtos import (
    DepartmentCreateDTO,
    DepartmentUpdateDTO,
    DesignationCreateDTO,
    DesignationUpdateDTO,
    WorkShiftCreateDTO,
    WorkShiftUpdateDTO,
)
from HR.work_structures.models import Department, Designation, WorkShift
from HR.work_structures.serializers.fields import ShiftTimeField

CATALOG_READ_FIELDS = [
    'id', 'company', 'name', 'code', 'description', 'is_active',
    'created_at', 'updated_at'
]


class CatalogWriteSerializer(serializers.Serializer):
    """Fields shared by every catalog write serializer"""
    name = serializers.CharField(max_length=100)
    code = serializers.RegexField(
        r'^[A-Za-z0-9_-]+$',
        max_length=30,
        required=False,
        allow_null=True,
        allow_blank=True,
        error_messages={'invalid': 'Code may only contain letters, numbers, hyphens and underscores'}
    )
    description = serializers.CharField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name cannot be blank')
        return value


class CatalogUpdateMixin:
    """Makes every field optional for partial updates"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['name'].required = False


# Department

class DepartmentReadSerializer(serializers.ModelSerializer):
    employee_count = serializers.SerializerMethodField()

    class Meta:
        model = Department
        fields = CATALOG_READ_FIELDS + ['employee_count']
        read_only_fields = fields

    def get_employee_count(self, obj):
        return obj.employees.count()


class DepartmentCreateSerializer(CatalogWriteSerializer):
    def to_dto(self) -> DepartmentCreateDTO:
        return DepartmentCreateDTO(**self.validated_data)


class DepartmentUpdateSerializer(CatalogUpdateMixin, CatalogWriteSerializer):
    department_id = serializers.IntegerField()  # Primary Key

    def to_dto(self) -> DepartmentUpdateDTO:
        return DepartmentUpdateDTO(**self.validated_data)


# Designation

class DesignationReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = Designation
        fields = CATALOG_READ_FIELDS
        read_only_fields = fields


class DesignationCreateSerializer(CatalogWriteSerializer):
    def to_dto(self) -> DesignationCreateDTO:
        return DesignationCreateDTO(**self.validated_data)


class DesignationUpdateSerializer(CatalogUpdateMixin, CatalogWriteSerializer):
    designation_id = serializers.IntegerField()  # Primary Key

    def to_dto(self) -> DesignationUpdateDTO:
        return DesignationUpdateDTO(**self.validated_data)


# Work shift

class WorkShiftReadSerializer(serializers.ModelSerializer):
    start_time = ShiftTimeField(read_only=True)
    end_time = ShiftTimeField(read_only=True)
    is_overnight = serializers.BooleanField(read_only=True)
    duration_minutes = serializers.IntegerField(read_only=True)

    class Meta:
        model = WorkShift
        fields = CATALOG_READ_FIELDS + ['start_time', 'end_time', 'is_overnight', 'duration_minutes']
        read_only_fields = fields


class WorkShiftCreateSerializer(CatalogWriteSerializer):
    start_time = ShiftTimeField()
    end_time = ShiftTimeField()

    def validate(self, attrs):
        if attrs['start_time'] == attrs['end_time']:
            raise serializers.ValidationError({'end_time': 'Shift start time and end time must be different'})
        return attrs

    def to_dto(self) -> WorkShiftCreateDTO:
        return WorkShiftCreateDTO(**self.validated_data)


class WorkShiftUpdateSerializer(CatalogUpdateMixin, CatalogWriteSerializer):
    work_shift_id = serializers.IntegerField()  # Primary Key
    start_time = ShiftTimeField(required=False)
    end_time = ShiftTimeField(required=False)

    def to_dto(self) -> WorkShiftUpdateDTO:
        return WorkShiftUpdateDTO(**self.validated_data)
