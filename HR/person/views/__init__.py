from .employee_views import (
    employee_list,
    employee_detail,
    employee_status,
    employee_statistics,
    my_profile
)
