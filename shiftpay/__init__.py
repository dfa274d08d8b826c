from .aggregation import LocationRollupAggregator, PeriodAggregator
from .daily import DailyEntryBuilder, shift_outcome
from .engine import compute_payroll
from .errors import PayrollError, ValidationError

__all__ = [
    "DailyEntryBuilder",
    "LocationRollupAggregator",
    "PayrollError",
    "PeriodAggregator",
    "ValidationError",
    "compute_payroll",
    "shift_outcome",
]
