"""
Serializers for attendance days
"""
from rest_framework import serializers

from HR.attendance.dtos import CheckInOutDTO, ManualAttendanceDTO, AttendanceUpdateDTO
from HR.attendance.models import AttendanceDay, AttendanceStatus
from HR.person.serializers.employee_serializers import ShiftSummarySerializer


class AttendanceEmployeeSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    employee_code = serializers.CharField()
    full_name = serializers.CharField()


class AttendanceDaySerializer(serializers.ModelSerializer):
    """Read serializer for AttendanceDay model"""
    employee = AttendanceEmployeeSerializer(read_only=True)
    work_shift = ShiftSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = AttendanceDay
        fields = [
            'id', 'company', 'employee', 'work_shift', 'date',
            'check_in_time', 'check_out_time', 'status',
            'late_minutes', 'total_work_minutes', 'overtime_minutes',
            'source', 'notes', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class CheckInOutSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField(required=False, allow_null=True)

    def to_dto(self, ip_address=None, user_agent=''):
        return CheckInOutDTO(
            employee_id=self.validated_data.get('employee_id'),
            ip_address=ip_address,
            user_agent=user_agent,
        )


class ManualAttendanceSerializer(serializers.Serializer):
    """Write serializer for manual attendance entry"""
    employee_id = serializers.IntegerField()
    date = serializers.DateField()
    check_in_time = serializers.DateTimeField(required=False, allow_null=True)
    check_out_time = serializers.DateTimeField(required=False, allow_null=True)
    shift_id = serializers.IntegerField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=AttendanceStatus.choices, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def to_dto(self):
        data = self.validated_data
        return ManualAttendanceDTO(
            employee_id=data['employee_id'],
            date=data['date'],
            check_in_time=data.get('check_in_time'),
            check_out_time=data.get('check_out_time'),
            shift_id=data.get('shift_id'),
            status=data.get('status'),
            notes=data.get('notes'),
        )


class AttendanceUpdateSerializer(serializers.Serializer):
    attendance_id = serializers.IntegerField()
    check_in_time = serializers.DateTimeField(required=False, allow_null=True)
    check_out_time = serializers.DateTimeField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=AttendanceStatus.choices, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def to_dto(self):
        data = self.validated_data
        return AttendanceUpdateDTO(
            attendance_id=data['attendance_id'],
            check_in_time=data.get('check_in_time'),
            check_out_time=data.get('check_out_time'),
            status=data.get('status'),
            notes=data.get('notes'),
        )


class MarkAbsentsSerializer(serializers.Serializer):
    date = serializers.DateField(required=False, allow_null=True)
