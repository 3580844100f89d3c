from .employee_service import EmployeeService, generate_employee_code

__all__ = [
    'EmployeeService',
    'generate_employee_code',
]
