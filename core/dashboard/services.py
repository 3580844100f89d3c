"""
Dashboard Service

Read-only aggregates for the three dashboard audiences:
- super admin: tenants and users across the system
- company-level roles: the caller's company today
- employee: own profile, today's attendance and leave counts
"""
from django.db.models import Count
from django.utils import timezone

from core.base.tenancy import require_company
from core.companies.models import Company, CompanyStatus
from core.user_accounts.models import CustomUser, UserRole
from HR.attendance.models import AttendanceDay, AttendanceStatus
from HR.leave.models import LeaveRequest, LeaveRequestStatus
from HR.person.models import Employee, EmployeeStatus
from HR.work_structures.models import Department

RECENT_COMPANIES_LIMIT = 5


def _counts(queryset, field, choices):
    """{choice: count} for every choice, zero-filled."""
    counts = {value: 0 for value in choices.values}
    for row in queryset.order_by().values(field).annotate(count=Count('id')):
        counts[row[field]] = row['count']
    return counts


class DashboardService:

    @staticmethod
    def super_admin_summary() -> dict:
        companies = _counts(Company.objects.all(), 'status', CompanyStatus)
        users = _counts(CustomUser.objects.all(), 'role', UserRole)

        recent = Company.objects.order_by('-created_at')[:RECENT_COMPANIES_LIMIT]

        return {
            'companies': {'total': sum(companies.values()), 'by_status': companies},
            'users': {'total': sum(users.values()), 'by_role': users},
            'recent_companies': [
                {
                    'id': company.id,
                    'name': company.name,
                    'code': company.code,
                    'status': company.status,
                    'created_at': company.created_at,
                }
                for company in recent
            ],
        }

    @staticmethod
    def company_summary(user) -> dict:
        company = require_company(user)
        today = timezone.localdate()

        employees = _counts(Employee.objects.for_company(company.id), 'status', EmployeeStatus)
        attendance = _counts(
            AttendanceDay.objects.for_company(company.id).filter(date=today), 'status', AttendanceStatus
        )
        recorded = sum(attendance.values())

        return {
            'company': {'id': company.id, 'name': company.name, 'status': company.status},
            'employees': {'total': sum(employees.values()), 'by_status': employees},
            'attendance_today': {
                'date': today.isoformat(),
                'by_status': attendance,
                'not_marked': max(0, employees[EmployeeStatus.ACTIVE] - recorded),
            },
            'pending_leave_requests': LeaveRequest.objects.for_company(company.id).filter(
                status=LeaveRequestStatus.PENDING
            ).count(),
            'department_count': Department.objects.for_company(company.id).active().count(),
        }

    @staticmethod
    def employee_summary(user) -> dict:
        """Own dashboard; profile and attendance are None without an employee record."""
        employee = Employee.objects.with_relations().filter(user=user).first()
        if employee is None:
            return {'profile': None, 'attendance_today': None, 'leave': None}

        today_row = AttendanceDay.objects.filter(employee=employee, date=timezone.localdate()).first()
        leave = _counts(LeaveRequest.objects.filter(employee=employee), 'status', LeaveRequestStatus)

        return {
            'profile': {
                'id': employee.id,
                'employee_code': employee.employee_code,
                'full_name': employee.full_name,
                'department': employee.department.name if employee.department else None,
                'designation': employee.designation.name if employee.designation else None,
                'work_shift': employee.work_shift.name if employee.work_shift else None,
                'status': employee.status,
            },
            'attendance_today': None if today_row is None else {
                'status': today_row.status,
                'check_in_time': today_row.check_in_time,
                'check_out_time': today_row.check_out_time,
                'total_work_minutes': today_row.total_work_minutes,
            },
            'leave': {
                'pending': leave[LeaveRequestStatus.PENDING],
                'approved': leave[LeaveRequestStatus.APPROVED],
            },
        }
