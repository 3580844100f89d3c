"""
Serializers for Notice
"""
from rest_framework import serializers

from HR.notices.dtos import NoticeCreateDTO, NoticeUpdateDTO
from HR.notices.models import AudienceType, Notice, NoticeAudience, NoticePriority, NoticeRead, NoticeStatus


class NoticeAudienceSerializer(serializers.ModelSerializer):
    class Meta:
        model = NoticeAudience
        fields = ['id', 'audience_type', 'department', 'designation', 'employee', 'work_shift', 'role']
        read_only_fields = fields


class NoticeReadReceiptSerializer(serializers.ModelSerializer):
    employee_code = serializers.CharField(source='employee.employee_code', read_only=True)
    employee_name = serializers.CharField(source='employee.full_name', read_only=True)

    class Meta:
        model = NoticeRead
        fields = ['employee', 'employee_code', 'employee_name', 'read_at']
        read_only_fields = fields


class NoticeSerializer(serializers.ModelSerializer):
    """Admin read serializer for Notice model"""
    audiences = NoticeAudienceSerializer(many=True, read_only=True)
    read_count = serializers.IntegerField(read_only=True, default=0)
    created_by_email = serializers.EmailField(source='created_by.email', read_only=True, default=None)

    class Meta:
        model = Notice
        fields = [
            'id', 'company', 'title', 'body', 'priority', 'status', 'publish_at', 'expires_at',
            'is_company_wide', 'audiences', 'read_count', 'created_by', 'created_by_email',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class NoticeDetailSerializer(NoticeSerializer):
    """Notice with its read receipts"""
    reads = NoticeReadReceiptSerializer(many=True, read_only=True)

    class Meta(NoticeSerializer.Meta):
        fields = NoticeSerializer.Meta.fields + ['reads']
        read_only_fields = fields


class MyNoticeSerializer(serializers.ModelSerializer):
    """Notice as seen by an employee"""
    is_read = serializers.BooleanField(read_only=True, default=False)
    read_at = serializers.DateTimeField(read_only=True, default=None)

    class Meta:
        model = Notice
        fields = [
            'id', 'title', 'body', 'priority', 'publish_at', 'expires_at',
            'is_company_wide', 'is_read', 'read_at', 'created_at'
        ]
        read_only_fields = fields


class AudienceWriteSerializer(serializers.Serializer):
    audience_type = serializers.ChoiceField(choices=AudienceType.choices)
    department_id = serializers.IntegerField(required=False, allow_null=True)
    designation_id = serializers.IntegerField(required=False, allow_null=True)
    employee_id = serializers.IntegerField(required=False, allow_null=True)
    work_shift_id = serializers.IntegerField(required=False, allow_null=True)
    role = serializers.CharField(max_length=20, required=False, allow_blank=True)


class NoticeCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    body = serializers.CharField()
    priority = serializers.ChoiceField(choices=NoticePriority.choices, default=NoticePriority.NORMAL)
    status = serializers.ChoiceField(choices=NoticeStatus.choices, default=NoticeStatus.DRAFT)
    publish_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    expires_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    is_company_wide = serializers.BooleanField(default=True)
    audiences = AudienceWriteSerializer(many=True, required=False)

    def to_dto(self) -> NoticeCreateDTO:
        data = dict(self.validated_data)
        data['audiences'] = [dict(audience) for audience in data.get('audiences', [])]
        return NoticeCreateDTO(**data)


class NoticeUpdateSerializer(serializers.Serializer):
    notice_id = serializers.IntegerField()  # Primary Key
    title = serializers.CharField(max_length=200, required=False)
    body = serializers.CharField(required=False)
    priority = serializers.ChoiceField(choices=NoticePriority.choices, required=False)
    status = serializers.ChoiceField(choices=NoticeStatus.choices, required=False)
    publish_at = serializers.DateTimeField(required=False)
    expires_at = serializers.DateTimeField(required=False)
    is_company_wide = serializers.BooleanField(required=False)
    audiences = AudienceWriteSerializer(many=True, required=False)

    def to_dto(self) -> NoticeUpdateDTO:
        data = dict(self.validated_data)
        if 'audiences' in data:
            data['audiences'] = [dict(audience) for audience in data['audiences']]
        return NoticeUpdateDTO(**data)
