"""
Notice Service - Business Logic Layer

Handles:
- Notice authoring by company-level users, with audience validation
- Admin listing with read counts
- The employee feed: published, in-window notices addressed to the
  employee (company-wide or through a matching audience) and read receipts
"""
import logging
from collections import defaultdict

from dateutil.relativedelta import relativedelta
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Exists, OuterRef, Q, QuerySet, Subquery
from django.http import Http404
from django.utils import timezone

from core.base.tenancy import ensure_same_company, require_company
from core.user_accounts.models import COMPANY_ROLES
from HR.notices.dtos import NoticeCreateDTO, NoticeUpdateDTO
from HR.notices.models import AudienceType, Notice, NoticeAudience, NoticeRead, NoticeStatus
from HR.person.models import Employee
from HR.work_structures.models import Department, Designation, WorkShift

logger = logging.getLogger(__name__)

# audience_type -> (target key, model, plural label)
AUDIENCE_TARGETS = {
    AudienceType.DEPARTMENT: ('department_id', Department, 'departments'),
    AudienceType.DESIGNATION: ('designation_id', Designation, 'designations'),
    AudienceType.EMPLOYEE: ('employee_id', Employee, 'employees'),
    AudienceType.WORK_SHIFT: ('work_shift_id', WorkShift, 'work shifts'),
}

NOTICE_SORT_FIELDS = ('created_at', 'publish_at', 'expires_at', 'title', 'priority')


def _truthy(value):
    return str(value).strip().lower() in ('true', '1', 'yes')


class NoticeService:
    """Service layer for notices"""

    # Authoring

    @staticmethod
    def _audience_rows(company, audiences) -> list:
        """
        Validate audience dicts and return the column values to store.

        Raises:
            ValidationError: Missing target, unknown role, or a target that
                does not belong to the company
        """
        rows = []
        wanted = defaultdict(set)

        for index, audience in enumerate(audiences):
            audience_type = audience.get('audience_type')
            if audience_type == AudienceType.ROLE:
                role = audience.get('role')
                if not role:
                    raise ValidationError(f'audiences[{index}].role is required')
                if role not in COMPANY_ROLES:
                    raise ValidationError(f'audiences[{index}].role "{role}" is not a company role')
                rows.append({'audience_type': audience_type, 'role': role})
                continue

            key, _model, _label = AUDIENCE_TARGETS[audience_type]
            target = audience.get(key)
            if not target:
                raise ValidationError(f'audiences[{index}].{key} is required')
            wanted[audience_type].add(target)
            rows.append({'audience_type': audience_type, key: target})

        for audience_type, ids in wanted.items():
            _key, model, label = AUDIENCE_TARGETS[audience_type]
            if model.objects.filter(company=company, pk__in=ids).count() != len(ids):
                raise ValidationError(f'One or more {label} are invalid')
        return rows

    @staticmethod
    def _replace_audiences(notice, rows):
        NoticeAudience.objects.filter(notice=notice).delete()
        NoticeAudience.objects.bulk_create([NoticeAudience(notice=notice, **row) for row in rows])

    @staticmethod
    def _default_expiry(notice):
        """
        Expiry defaults to one month after publish_at, or after now for a
        notice published without a publish_at.

        Raises:
            ValidationError: If expires_at is not after publish_at
        """
        if notice.expires_at is None:
            base = notice.publish_at
            if base is None and notice.status == NoticeStatus.PUBLISHED:
                base = timezone.now()
            if base is not None:
                notice.expires_at = base + relativedelta(months=1)

        if notice.publish_at and notice.expires_at and notice.expires_at <= notice.publish_at:
            raise ValidationError({'expires_at': 'expires_at must be after publish_at'})

    @staticmethod
    @transaction.atomic
    def create(user, dto: NoticeCreateDTO) -> Notice:
        """
        Create a notice. Giving audiences makes it targeted; a targeted
        notice without audiences is refused.
        """
        company = require_company(user)

        rows = NoticeService._audience_rows(company, dto.audiences)
        is_company_wide = dto.is_company_wide and not rows
        if not is_company_wide and not rows:
            raise ValidationError({'audiences': 'audiences are required when is_company_wide is false'})

        notice = Notice(
            company=company,
            title=dto.title,
            body=dto.body,
            priority=dto.priority,
            status=dto.status,
            publish_at=dto.publish_at,
            expires_at=dto.expires_at,
            is_company_wide=is_company_wide,
            created_by=user,
            updated_by=user,
        )
        NoticeService._default_expiry(notice)
        notice.save()
        NoticeService._replace_audiences(notice, rows)

        logger.info("Notice %s (%s) created in %s by %s", notice.pk, notice.status, company.name, user.email)
        return notice

    @staticmethod
    @transaction.atomic
    def update(user, dto: NoticeUpdateDTO) -> Notice:
        notice = NoticeService.get_notice(user, dto.notice_id)

        for field in ('title', 'body', 'priority', 'status', 'publish_at', 'expires_at', 'is_company_wide'):
            value = getattr(dto, field)
            if value is not None:
                setattr(notice, field, value)

        if dto.audiences is not None:
            rows = NoticeService._audience_rows(notice.company, dto.audiences)
            if rows:
                notice.is_company_wide = False
            NoticeService._replace_audiences(notice, rows)

        if not notice.is_company_wide and not NoticeAudience.objects.filter(notice=notice).exists():
            raise ValidationError({'audiences': 'audiences are required when is_company_wide is false'})

        NoticeService._default_expiry(notice)
        notice.updated_by = user
        notice.save()

        logger.info("Notice %s updated by %s", notice.pk, user.email)
        return NoticeService.get_notice(user, notice.pk)

    @staticmethod
    @transaction.atomic
    def delete(user, notice_id):
        notice = NoticeService.get_notice(user, notice_id)
        notice.delete()
        logger.info("Notice %s deleted by %s", notice_id, user.email)

    # Admin queries

    @staticmethod
    def list_notices(user, filters: dict = None) -> QuerySet:
        """
        Notices of the caller's company with a read_count annotation.

        Args:
            filters: status, priority, is_company_wide, created_by,
                publish_from, publish_to, search (title/body), sort_by,
                sort_order
        """
        filters = filters or {}
        company = require_company(user)

        queryset = (
            Notice.objects.for_company(company.id)
            .select_related('created_by')
            .prefetch_related('audiences')
            .annotate(read_count=Count('reads', distinct=True))
        )

        for key in ('status', 'priority'):
            if filters.get(key):
                queryset = queryset.filter(**{key: filters[key]})
        if filters.get('is_company_wide') not in (None, ''):
            queryset = queryset.filter(is_company_wide=_truthy(filters['is_company_wide']))
        if filters.get('created_by'):
            queryset = queryset.filter(created_by_id=filters['created_by'])
        if filters.get('publish_from'):
            queryset = queryset.filter(publish_at__gte=filters['publish_from'])
        if filters.get('publish_to'):
            queryset = queryset.filter(publish_at__lte=filters['publish_to'])

        queryset = queryset.search(filters.get('search'), ['title', 'body'])
        return queryset.apply_sorting(filters.get('sort_by'), filters.get('sort_order'), NOTICE_SORT_FIELDS)

    @staticmethod
    def get_notice(user, notice_id) -> Notice:
        require_company(user)
        notice = (
            Notice.objects.filter(pk=notice_id)
            .select_related('company', 'created_by')
            .prefetch_related('audiences', 'reads__employee')
            .annotate(read_count=Count('reads', distinct=True))
            .first()
        )
        if notice is None:
            raise Http404('Notice not found')

        ensure_same_company(user, notice, 'notices')
        return notice

    # Employee feed

    @staticmethod
    def _own_employee(user) -> Employee:
        try:
            return Employee.objects.select_related('user').get(user=user)
        except Employee.DoesNotExist:
            raise Http404('Employee profile not found for current user')

    @staticmethod
    def visible_to(employee, now=None) -> QuerySet:
        """
        Published, in-window notices that are company-wide or have an
        audience matching the employee's placement, role or record.
        """
        now = now or timezone.now()

        matches = (
            Q(audiences__audience_type=AudienceType.EMPLOYEE, audiences__employee_id=employee.id)
            | Q(audiences__audience_type=AudienceType.ROLE, audiences__role=employee.user.role)
        )
        for audience_type, attr in (
            (AudienceType.DEPARTMENT, 'department_id'),
            (AudienceType.DESIGNATION, 'designation_id'),
            (AudienceType.WORK_SHIFT, 'work_shift_id'),
        ):
            value = getattr(employee, attr)
            if value:
                matches |= Q(audiences__audience_type=audience_type, **{f'audiences__{attr}': value})

        reads = NoticeRead.objects.filter(notice=OuterRef('pk'), employee=employee)
        return (
            Notice.objects.for_company(employee.company_id)
            .filter(status=NoticeStatus.PUBLISHED)
            .filter(Q(publish_at__isnull=True) | Q(publish_at__lte=now))
            .filter(Q(expires_at__isnull=True) | Q(expires_at__gt=now))
            .filter(Q(is_company_wide=True) | matches)
            .distinct()
            .annotate(is_read=Exists(reads), read_at=Subquery(reads.values('read_at')[:1]))
        )

    @staticmethod
    def my_notices(user, filters: dict = None) -> QuerySet:
        """
        Args:
            filters: search (title/body), unread_only
        """
        filters = filters or {}
        employee = NoticeService._own_employee(user)

        queryset = NoticeService.visible_to(employee).search(filters.get('search'), ['title', 'body'])
        if _truthy(filters.get('unread_only')):
            queryset = queryset.filter(is_read=False)
        return queryset.order_by('-publish_at', '-created_at')

    @staticmethod
    def my_notice(user, notice_id) -> Notice:
        employee = NoticeService._own_employee(user)
        notice = NoticeService.visible_to(employee).filter(pk=notice_id).first()
        if notice is None:
            raise Http404('Notice not found')
        return notice

    @staticmethod
    @transaction.atomic
    def mark_read(user, notice_id) -> NoticeRead:
        """Record a read receipt; marking twice keeps the first read_at."""
        employee = NoticeService._own_employee(user)
        notice = NoticeService.my_notice(user, notice_id)

        receipt, created = NoticeRead.objects.get_or_create(notice=notice, employee=employee)
        if created:
            logger.info("Notice %s read by %s", notice.pk, employee.employee_code)
        return receipt
