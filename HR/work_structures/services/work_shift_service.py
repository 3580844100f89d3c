from django.core.exceptions import ValidationError

from core.base.services import TenantCatalogService
from HR.work_structures.models import WorkShift


class WorkShiftService(TenantCatalogService):
    """
    Service for WorkShift business logic.

    A shift whose end_time is earlier than its start_time runs overnight;
    identical start and end times are rejected.
    """
    model = WorkShift
    label = 'work shift'
    label_plural = 'work shifts'
    pk_field = 'work_shift_id'
    sort_fields = TenantCatalogService.sort_fields + ('start_time', 'end_time')
    editable_fields = TenantCatalogService.editable_fields + ('start_time', 'end_time')

    @classmethod
    def clean_values(cls, values: dict, instance=None) -> dict:
        start = values.get('start_time', getattr(instance, 'start_time', None))
        end = values.get('end_time', getattr(instance, 'end_time', None))
        if start is not None and start == end:
            raise ValidationError({'end_time': 'Shift start time and end time must be different'})
        return values

    @classmethod
    def usage_count(cls, instance) -> int:
        return instance.employees.count()
