from .department_service import DepartmentService
from .designation_service import DesignationService
from .work_shift_service import WorkShiftService

__all__ = [
    'DepartmentService',
    'DesignationService',
    'WorkShiftService',
]
