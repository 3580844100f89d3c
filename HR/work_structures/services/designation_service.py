from core.base.services import TenantCatalogService
from HR.work_structures.models import Designation


class DesignationService(TenantCatalogService):
    """Service for Designation business logic"""
    model = Designation
    label = 'designation'
    label_plural = 'designations'
    pk_field = 'designation_id'

    @classmethod
    def usage_count(cls, instance) -> int:
        return instance.employees.count()
