"""
Serializers for Employee model
"""
from rest_framework import serializers

from core.base import uploads
from HR.person.dtos import EmployeeCreateDTO, EmployeeUpdateDTO, EmployeeStatusUpdateDTO
from HR.person.models import Employee, EmployeeStatus, EmploymentType, Gender
from HR.work_structures.serializers.fields import ShiftTimeField

PLACEMENT_FIELDS = ('department_id', 'designation_id', 'work_shift_id')


class PlacementSerializer(serializers.Serializer):
    """Compact department / designation representation"""
    id = serializers.IntegerField()
    name = serializers.CharField()
    code = serializers.CharField(allow_null=True)


class ShiftSummarySerializer(PlacementSerializer):
    start_time = ShiftTimeField()
    end_time = ShiftTimeField()


class EmployeeSerializer(serializers.ModelSerializer):
    """Read serializer for Employee model"""
    full_name = serializers.CharField(read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    role = serializers.CharField(source='user.role', read_only=True)
    user_is_active = serializers.BooleanField(source='user.is_active', read_only=True)
    department = PlacementSerializer(read_only=True, allow_null=True)
    designation = PlacementSerializer(read_only=True, allow_null=True)
    work_shift = ShiftSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = Employee
        fields = [
            'id', 'company', 'user_id', 'email', 'role', 'user_is_active',
            'employee_code', 'first_name', 'middle_name', 'last_name', 'full_name',
            'department', 'designation', 'work_shift',
            'gender', 'date_of_birth', 'join_date', 'probation_end', 'employment_type',
            'work_email', 'personal_email', 'phone', 'address',
            'emergency_contact_name', 'emergency_contact_phone',
            'base_salary', 'status', 'image_url', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class EmployeeCreateSerializer(serializers.Serializer):
    """Write serializer for creating an employee with its login user"""
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True, style={'input_type': 'password'})
    first_name = serializers.CharField(max_length=80)
    middle_name = serializers.CharField(max_length=80, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=80)
    employee_code = serializers.RegexField(
        r'^[A-Z0-9_-]+$',
        max_length=50,
        required=False,
        allow_null=True,
        error_messages={
            'invalid': 'Employee code must contain only uppercase letters, numbers, hyphens, or underscores'
        }
    )
    department_id = serializers.IntegerField(required=False, allow_null=True)
    designation_id = serializers.IntegerField(required=False, allow_null=True)
    work_shift_id = serializers.IntegerField(required=False, allow_null=True)
    employment_type = serializers.ChoiceField(choices=EmploymentType.choices, required=False)
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True)
    date_of_birth = serializers.DateField(required=False, allow_null=True)
    join_date = serializers.DateField(required=False, allow_null=True)
    probation_end = serializers.DateField(required=False, allow_null=True)
    work_email = serializers.EmailField(required=False, allow_blank=True)
    personal_email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    emergency_contact_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    emergency_contact_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    base_salary = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True)
    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True)
    image = serializers.FileField(required=False, write_only=True)

    def validate_image(self, value):
        return uploads.validate_image(value)

    def validate(self, attrs):
        if attrs.get('date_of_birth') and attrs.get('join_date') and attrs['date_of_birth'] >= attrs['join_date']:
            raise serializers.ValidationError({'date_of_birth': 'Date of birth must be before the join date'})
        return attrs

    def to_dto(self) -> EmployeeCreateDTO:
        return EmployeeCreateDTO(**self.validated_data)


class EmployeeUpdateSerializer(serializers.Serializer):
    """
    Write serializer for updating an employee.

    Sending null for department_id / designation_id / work_shift_id removes
    the placement.
    """
    employee_id = serializers.IntegerField()  # Primary Key
    first_name = serializers.CharField(max_length=80, required=False)
    middle_name = serializers.CharField(max_length=80, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=80, required=False)
    department_id = serializers.IntegerField(required=False, allow_null=True)
    designation_id = serializers.IntegerField(required=False, allow_null=True)
    work_shift_id = serializers.IntegerField(required=False, allow_null=True)
    employment_type = serializers.ChoiceField(choices=EmploymentType.choices, required=False)
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True)
    date_of_birth = serializers.DateField(required=False)
    join_date = serializers.DateField(required=False)
    probation_end = serializers.DateField(required=False)
    work_email = serializers.EmailField(required=False, allow_blank=True)
    personal_email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    emergency_contact_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    emergency_contact_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    base_salary = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True)
    image = serializers.FileField(required=False, write_only=True)

    def validate_image(self, value):
        return uploads.validate_image(value)

    def to_dto(self) -> EmployeeUpdateDTO:
        data = dict(self.validated_data)
        for field in PLACEMENT_FIELDS:
            if field in data and data[field] is None:
                data[field] = 0
        return EmployeeUpdateDTO(**data)


class EmployeeStatusSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField()
    status = serializers.ChoiceField(choices=EmployeeStatus.choices)

    def to_dto(self) -> EmployeeStatusUpdateDTO:
        return EmployeeStatusUpdateDTO(**self.validated_data)
