from core.base.services import TenantCatalogService
from HR.work_structures.models import Department


class DepartmentService(TenantCatalogService):
    """Service for Department business logic"""
    model = Department
    label = 'department'
    label_plural = 'departments'
    pk_field = 'department_id'

    @classmethod
    def usage_count(cls, instance) -> int:
        return instance.employees.count()
