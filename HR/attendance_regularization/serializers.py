"""
Serializers for AttendanceRegularization
"""
from rest_framework import serializers

from HR.attendance_regularization.dtos import RegularizationCreateDTO, RegularizationReviewDTO
from HR.attendance_regularization.models import AttendanceRegularization, RegularizationType
from HR.work_structures.serializers.fields import ShiftTimeField


class RegularizationSerializer(serializers.ModelSerializer):
    """Read serializer for AttendanceRegularization model"""
    employee_code = serializers.CharField(source='employee.employee_code', read_only=True)
    employee_name = serializers.CharField(source='employee.full_name', read_only=True)
    requested_check_in_time = ShiftTimeField(read_only=True)
    requested_check_out_time = ShiftTimeField(read_only=True)
    reviewed_by_email = serializers.EmailField(source='reviewed_by.email', read_only=True, default=None)

    class Meta:
        model = AttendanceRegularization
        fields = [
            'id', 'company', 'employee', 'employee_code', 'employee_name', 'attendance_day',
            'date', 'request_type', 'requested_check_in_time', 'requested_check_out_time',
            'reason', 'status', 'before_snapshot', 'after_snapshot',
            'reviewed_by', 'reviewed_by_email', 'reviewed_at', 'review_note',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class RegularizationCreateSerializer(serializers.Serializer):
    date = serializers.DateField()
    request_type = serializers.ChoiceField(choices=RegularizationType.choices)
    requested_check_in_time = ShiftTimeField(required=False, allow_null=True)
    requested_check_out_time = ShiftTimeField(required=False, allow_null=True)
    reason = serializers.CharField()
    employee_id = serializers.IntegerField(required=False, allow_null=True)

    def validate_reason(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Reason cannot be blank')
        return value

    def to_dto(self) -> RegularizationCreateDTO:
        return RegularizationCreateDTO(**self.validated_data)


class RegularizationReviewSerializer(serializers.Serializer):
    regularization_id = serializers.IntegerField()  # Primary Key
    review_note = serializers.CharField(required=False, allow_blank=True, default='')

    def to_dto(self) -> RegularizationReviewDTO:
        return RegularizationReviewDTO(**self.validated_data)
