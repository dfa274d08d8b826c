from .attendance_log import AttendanceLog
from .employee import Employee
from .location import Location
from .shift import Shift, ShiftAssignment
from .time_off_request import TimeOffRequest

__all__ = ["Location", "Employee", "Shift", "ShiftAssignment", "AttendanceLog", "TimeOffRequest"]
