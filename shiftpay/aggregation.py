from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping, Set

from .daily import entry_outcome
from .log import get_logger
from .models import (
    DailyPayrollEntry,
    EmployeeRateProfile,
    LocationSummary,
    PayrollSummaryItem,
    ShiftOutcome,
)

logger = get_logger(__name__)


@dataclass
class _EmployeeTotals:
    """Running totals for one employee; owned by a single aggregate() call."""

    profile: EmployeeRateProfile
    entries: List[DailyPayrollEntry] = field(default_factory=list)
    scheduled_hours: float = 0.0
    actual_hours: float = 0.0
    total_amount: float = 0.0
    days_worked: int = 0
    days_confirmed: int = 0
    late_count: int = 0
    late_minutes: int = 0
    worked_dates: Set[date] = field(default_factory=set)
    missed_dates: Set[date] = field(default_factory=set)

    def add(self, entry: DailyPayrollEntry) -> None:
        outcome = entry_outcome(entry)
        self.entries.append(entry)
        self.scheduled_hours += entry.scheduled_hours
        self.actual_hours += entry.actual_hours
        self.total_amount += entry.daily_amount
        if outcome is ShiftOutcome.WORKED:
            self.days_worked += 1
            self.worked_dates.add(entry.shift_date)
            if entry.has_attendance and entry.has_check_out:
                self.days_confirmed += 1
        elif outcome is ShiftOutcome.MISSED:
            self.missed_dates.add(entry.shift_date)
        if entry.is_late:
            self.late_count += 1
            self.late_minutes += entry.late_minutes


class PeriodAggregator:
    """Fold daily entries into one summary per employee."""

    def __init__(self, profiles: Mapping[str, EmployeeRateProfile]) -> None:
        self.profiles = dict(profiles)

    def aggregate(
        self,
        entries: Iterable[DailyPayrollEntry],
        weeks_in_period: int,
        active_without_shifts: Iterable[str] = (),
    ) -> List[PayrollSummaryItem]:
        """One summary per employee with entries, plus those in ``active_without_shifts``.

        The latter cover employees whose only activity in the period is attendance
        outside the schedule or time off; they start from empty totals.
        """

        weeks = max(1, weeks_in_period)
        totals: Dict[str, _EmployeeTotals] = {}
        for entry in entries:
            profile = self.profiles.get(entry.employee_id)
            if profile is None:
                logger.warning("employee_profile_missing", employee_id=entry.employee_id, shift_id=entry.shift_id)
                continue
            if entry.employee_id not in totals:
                totals[entry.employee_id] = _EmployeeTotals(profile=profile)
            totals[entry.employee_id].add(entry)
        for employee_id in active_without_shifts:
            profile = self.profiles.get(employee_id)
            if profile is not None and employee_id not in totals:
                totals[employee_id] = _EmployeeTotals(profile=profile)

        summary = [self._finalise(acc, weeks) for acc in totals.values()]
        summary.sort(key=lambda item: (item.employee_name.lower(), item.employee_id))
        return summary

    @staticmethod
    def _finalise(acc: _EmployeeTotals, weeks: int) -> PayrollSummaryItem:
        profile = acc.profile

        overtime_hours = 0.0
        undertime_hours = 0.0
        diff = acc.actual_hours - acc.scheduled_hours
        if diff > 0:
            overtime_hours = diff
        elif diff < 0 and acc.actual_hours > 0:
            # a no-show is a missing shift, not undertime
            undertime_hours = abs(diff)

        extra_shifts = 0
        missing_shifts = 0
        extra_dates: List[date] = []
        expected_shifts = None
        if profile.expected_shifts_per_week is not None:
            expected_shifts = profile.expected_shifts_per_week * weeks
            shift_diff = acc.days_worked - expected_shifts
            if shift_diff > 0:
                extra_shifts = shift_diff
                # the most recent worked dates are the extra ones
                extra_dates = sorted(acc.worked_dates)[-shift_diff:]
            elif shift_diff < 0:
                missing_shifts = abs(shift_diff)

        overtime_pay = 0.0
        differential = profile.overtime_differential
        if extra_dates and differential > 0:
            extra_set = set(extra_dates)
            for entry in acc.entries:
                if entry.shift_date in extra_set:
                    overtime_pay += entry.paid_hours * differential
        total_amount = acc.total_amount + overtime_pay

        expected_hours = None
        if profile.expected_weekly_hours is not None:
            expected_hours = profile.expected_weekly_hours * weeks

        return PayrollSummaryItem(
            employee_id=profile.employee_id,
            employee_name=profile.full_name,
            role=profile.role,
            home_location_id=profile.home_location_id,
            hourly_rate=profile.hourly_rate,
            overtime_rate=profile.overtime_rate,
            scheduled_hours=acc.scheduled_hours,
            actual_hours=acc.actual_hours,
            overtime_hours=overtime_hours,
            undertime_hours=undertime_hours,
            total_amount=total_amount,
            overtime_pay=overtime_pay,
            days_worked=acc.days_worked,
            late_count=acc.late_count,
            late_minutes=acc.late_minutes,
            extra_shifts=extra_shifts,
            missing_shifts=missing_shifts,
            worked_dates=tuple(sorted(acc.worked_dates)),
            missed_dates=tuple(sorted(acc.missed_dates)),
            extra_shift_dates=tuple(sorted(extra_dates)),
            days_confirmed=acc.days_confirmed,
            expected_shifts=expected_shifts,
            expected_hours=expected_hours,
        )


@dataclass
class _LocationTotals:
    location_name: str
    total_hours: float = 0.0
    total_amount: float = 0.0
    shift_count: int = 0


class LocationRollupAggregator:
    def aggregate(self, entries: Iterable[DailyPayrollEntry]) -> List[LocationSummary]:
        totals: Dict[str, _LocationTotals] = {}
        for entry in entries:
            bucket = totals.setdefault(entry.location_id, _LocationTotals(location_name=entry.location_name))
            bucket.total_hours += entry.paid_hours
            bucket.total_amount += entry.daily_amount
            bucket.shift_count += 1

        rollup = [
            LocationSummary(
                location_id=location_id,
                location_name=bucket.location_name,
                total_hours=bucket.total_hours,
                total_amount=bucket.total_amount,
                shift_count=bucket.shift_count,
            )
            for location_id, bucket in totals.items()
        ]
        rollup.sort(key=lambda item: (item.location_name.lower(), item.location_id))
        return rollup
