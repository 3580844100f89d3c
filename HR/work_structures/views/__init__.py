from .department_views import (
    department_list,
    department_detail
)
from .designation_views import (
    designation_list,
    designation_detail
)
from .work_shift_views import (
    work_shift_list,
    work_shift_detail
)
