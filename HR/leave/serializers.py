"""
Serializers for LeaveType and LeaveRequest
"""
from rest_framework import serializers

from HR.leave.dtos import LeaveTypeCreateDTO, LeaveTypeUpdateDTO, LeaveRequestCreateDTO, LeaveReviewDTO
from HR.leave.models import LeaveRequest, LeaveType
from HR.work_structures.serializers.catalog_serializers import (
    CATALOG_READ_FIELDS,
    CatalogUpdateMixin,
    CatalogWriteSerializer,
)


# Leave type

class LeaveTypeReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = LeaveType
        fields = CATALOG_READ_FIELDS
        read_only_fields = fields


class LeaveTypeCreateSerializer(CatalogWriteSerializer):
    def to_dto(self) -> LeaveTypeCreateDTO:
        return LeaveTypeCreateDTO(**self.validated_data)


class LeaveTypeUpdateSerializer(CatalogUpdateMixin, CatalogWriteSerializer):
    leave_type_id = serializers.IntegerField()  # Primary Key

    def to_dto(self) -> LeaveTypeUpdateDTO:
        return LeaveTypeUpdateDTO(**self.validated_data)


# Leave request

class LeaveTypeSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    code = serializers.CharField(allow_null=True)


class LeaveRequestSerializer(serializers.ModelSerializer):
    """Read serializer for LeaveRequest model"""
    employee_code = serializers.CharField(source='employee.employee_code', read_only=True)
    employee_name = serializers.CharField(source='employee.full_name', read_only=True)
    leave_type = LeaveTypeSummarySerializer(read_only=True)
    reviewed_by_email = serializers.EmailField(source='reviewed_by.email', read_only=True, default=None)

    class Meta:
        model = LeaveRequest
        fields = [
            'id', 'company', 'employee', 'employee_code', 'employee_name', 'leave_type',
            'start_date', 'end_date', 'total_days', 'reason', 'status',
            'reviewed_by', 'reviewed_by_email', 'reviewed_at', 'review_note',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class LeaveRequestCreateSerializer(serializers.Serializer):
    leave_type_id = serializers.IntegerField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    reason = serializers.CharField()
    employee_id = serializers.IntegerField(required=False, allow_null=True)

    def validate_reason(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Reason cannot be blank')
        return value

    def to_dto(self) -> LeaveRequestCreateDTO:
        return LeaveRequestCreateDTO(**self.validated_data)


class LeaveReviewSerializer(serializers.Serializer):
    request_id = serializers.IntegerField()  # Primary Key
    review_note = serializers.CharField(required=False, allow_blank=True, default='')

    def to_dto(self) -> LeaveReviewDTO:
        return LeaveReviewDTO(**self.validated_data)
