"""
Person Domain

Employee records of a company: the employee profile, its login user,
placement (department, designation, work shift) and status lifecycle.
"""
