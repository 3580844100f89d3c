from .department import Department
from .designation import Designation
from .work_shift import WorkShift

__all__ = ['Department', 'Designation', 'WorkShift']
