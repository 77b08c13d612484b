"""
Per-day pay and surcharges under Colombian labor law.

A month's surcharges are paid with the following month's payroll, hence
``calculate_surcharges_only`` next to the full monthly summary.
"""
import logging
from dataclasses import fields

from dateutil.relativedelta import relativedelta

from config import Config
from services.colombian_holidays import is_holiday_or_sunday, is_saturday, to_date
from services.labor_law import (
    get_minimum_wage,
    get_monthly_hours,
    get_shift_configuration,
    get_sunday_holiday_surcharge_rate,
    is_special_shift,
)
from services.models import MonthlySummary, SurchargesSummary, WorkDay, WorkDayCalculation

logger = logging.getLogger(__name__)

RATES = Config.SURCHARGE_RATES
SPECIAL_RATES = Config.SPECIAL_SHIFT_RATES


class WorkDayHistory:
    """Immutable snapshot of a user's work-day history.

    Rules that depend on other days (position inside a continuous
    incapacidad, six-month vacation average) are computed once per
    snapshot and reused.
    """

    def __init__(self, work_days=()):
        self.work_days = tuple(work_days)
        self._incapacidad_positions = None
        self._month_earnings = {}

    @classmethod
    def of(cls, work_days):
        if isinstance(work_days, cls):
            return work_days
        return cls(work_days or ())

    def __len__(self):
        return len(self.work_days)

    def __iter__(self):
        return iter(self.work_days)

    def incapacidad_position(self, work_day):
        if self._incapacidad_positions is None:
            self._incapacidad_positions = _incapacidad_positions(self.work_days)
        # Without history the day counts as the first of its streak
        return self._incapacidad_positions.get(work_day.id, 1)

    def month_earnings(self, year, month, base_salary):
        """Total earned in the month, vacation days excluded."""
        key = (year, month, base_salary)
        if key not in self._month_earnings:
            self._month_earnings[key] = sum(
                calculate_work_day(wd, base_salary, self).total_pay
                for wd in self.work_days
                if wd.shift_type != 'vacaciones'
                and wd.date.year == year and wd.date.month == month
            )
        return self._month_earnings[key]


def _incapacidad_positions(work_days):
    incapacidades = sorted(
        (wd for wd in work_days if wd.shift_type == 'incapacidad'),
        key=lambda wd: wd.date,
    )

    positions = {}
    position = 0
    previous = None
    for wd in incapacidades:
        if previous is not None and (wd.date - previous).days > 1:
            position = 0
        position += 1
        positions[wd.id] = position
        previous = wd.date
    return positions


def get_incapacidad_day_position(work_day, all_work_days=None):
    return WorkDayHistory.of(all_work_days).incapacidad_position(work_day)


def get_incapacidad_percentage(day_position, base_salary, day):
    if day_position <= 2:
        return SPECIAL_RATES['INCAPACIDAD_DAYS_1_2']
    if day_position <= 90:
        # Sick pay can never fall below the minimum wage
        if base_salary <= get_minimum_wage(day):
            return 1.0
        return SPECIAL_RATES['INCAPACIDAD_DAYS_3_90']
    return SPECIAL_RATES['INCAPACIDAD_DAYS_91_180']


def calculate_vacation_daily_rate(all_work_days, base_salary, reference_date):
    """Vacation day value: average of the last six months / 30.

    Uses the six full calendar months before the vacation date. When
    nothing was earned in that period the base salary / 30 is paid.
    """
    history = WorkDayHistory.of(all_work_days)
    day = to_date(reference_date)

    total = 0.0
    for offset in range(1, 7):
        month = day.replace(day=1) - relativedelta(months=offset)
        total += history.month_earnings(month.year, month.month, base_salary)

    if total == 0:
        return base_salary / 30
    return total / 6 / 30


def calculate_special_shift_pay(work_day, hourly_rate, base_salary, all_work_days=None):
    """Pay for shifts without surcharges (sick leave, leaves, vacation)."""
    shift_type = work_day.shift_type
    regular_hours = work_day.regular_hours

    if shift_type == 'incapacidad':
        position = get_incapacidad_day_position(work_day, all_work_days)
        percentage = get_incapacidad_percentage(position, base_salary, work_day.date)
        return regular_hours * hourly_rate * percentage
    if shift_type == 'arl':
        return regular_hours * hourly_rate * SPECIAL_RATES['ARL']
    if shift_type == 'vacaciones':
        return calculate_vacation_daily_rate(all_work_days, base_salary, work_day.date)
    if shift_type == 'licencia_remunerada':
        return regular_hours * hourly_rate * SPECIAL_RATES['LICENCIA_REMUNERADA']
    if shift_type == 'licencia_no_remunerada':
        return 0.0
    if shift_type == 'descanso':
        # Paid rest day (Art. 172 CST)
        return base_salary / 30
    if shift_type == 'suspendido':
        return 0.0
    return regular_hours * hourly_rate


def calculate_night_surcharges(regular_hours, hourly_rate, day, shift_type, is_holiday):
    """Return ``(night_surcharge, sunday_night_surcharge)``."""
    config = get_shift_configuration(shift_type, day)
    holiday_rate = get_sunday_holiday_surcharge_rate(day)
    night_holiday_rate = RATES['NIGHT'] + holiday_rate

    if shift_type != 'trasnocho':
        # Day shifts reaching into the night window (7pm-9pm since Dec-2025)
        night_hours = min(config.night_hours, regular_hours)
        if night_hours <= 0:
            return 0.0, 0.0
        rate = night_holiday_rate if is_holiday else RATES['NIGHT']
        return night_hours * hourly_rate * rate, 0.0

    if is_holiday:
        return regular_hours * hourly_rate * night_holiday_rate, 0.0

    if is_saturday(day):
        # After midnight it is already Sunday
        before = min(regular_hours, config.night_hours_before_midnight)
        after = max(regular_hours - before, 0)
        return (before * hourly_rate * RATES['NIGHT'],
                after * hourly_rate * night_holiday_rate)

    return regular_hours * hourly_rate * RATES['NIGHT'], 0.0


def calculate_extra_hours(extra_hours, hourly_rate, shift_type, day, is_holiday):
    if not extra_hours:
        return 0.0

    multiplier = RATES['EXTRA_NIGHT'] if shift_type == 'trasnocho' else RATES['EXTRA_DAY']
    if is_holiday:
        multiplier += get_sunday_holiday_surcharge_rate(day)

    return extra_hours * hourly_rate * (1 + multiplier)


def _calculation(work_day, is_holiday, **pay):
    values = {f.name: getattr(work_day, f.name) for f in fields(WorkDay)}
    values['is_holiday'] = is_holiday
    values.update(pay)
    return WorkDayCalculation(**values)


def calculate_work_day(work_day, base_salary=Config.DEFAULT_BASE_SALARY, all_work_days=None):
    """Settle one day: ordinary pay, surcharges and overtime.

    ``is_holiday`` is always recomputed from the Colombian calendar; the
    stored value on the record is ignored.
    """
    day = work_day.date
    shift_type = work_day.shift_type
    regular_hours = work_day.regular_hours
    hourly_rate = base_salary / get_monthly_hours(day)
    is_holiday = is_holiday_or_sunday(day)

    if is_special_shift(shift_type):
        regular_pay = calculate_special_shift_pay(work_day, hourly_rate, base_salary, all_work_days)
        return _calculation(
            work_day, is_holiday,
            regular_pay=regular_pay,
            night_surcharge=0.0,
            sunday_night_surcharge=0.0,
            holiday_surcharge=0.0,
            extra_hours_pay=0.0,
            total_pay=regular_pay,
        )

    regular_pay = regular_hours * hourly_rate

    night_surcharge, sunday_night_surcharge = calculate_night_surcharges(
        regular_hours, hourly_rate, day, shift_type, is_holiday)

    # For trasnocho the holiday rate is already inside the night surcharge
    holiday_surcharge = 0.0
    if is_holiday and shift_type != 'trasnocho':
        holiday_surcharge = regular_hours * hourly_rate * get_sunday_holiday_surcharge_rate(day)

    extra_hours_pay = calculate_extra_hours(
        work_day.extra_hours, hourly_rate, shift_type, day, is_holiday)

    total_pay = regular_pay + night_surcharge + sunday_night_surcharge + holiday_surcharge + extra_hours_pay

    logger.debug("Día %s (%s): ordinario=%.2f recargos=%.2f total=%.2f",
                 day, shift_type, regular_pay, total_pay - regular_pay, total_pay)

    return _calculation(
        work_day, is_holiday,
        regular_pay=regular_pay,
        night_surcharge=night_surcharge,
        sunday_night_surcharge=sunday_night_surcharge,
        holiday_surcharge=holiday_surcharge,
        extra_hours_pay=extra_hours_pay,
        total_pay=total_pay,
    )


def calculate_work_days(work_days, base_salary=Config.DEFAULT_BASE_SALARY, all_work_days=None):
    history = WorkDayHistory.of(work_days if all_work_days is None else all_work_days)
    return [calculate_work_day(wd, base_salary, history) for wd in work_days]


def calculate_monthly_summary(work_days, base_salary=Config.DEFAULT_BASE_SALARY, all_work_days=None):
    summary = MonthlySummary()
    for calc in calculate_work_days(work_days, base_salary, all_work_days):
        summary.total_regular_pay += calc.regular_pay
        summary.total_night_surcharge += calc.night_surcharge
        summary.total_sunday_night_surcharge += calc.sunday_night_surcharge
        summary.total_holiday_surcharge += calc.holiday_surcharge
        summary.total_extra_hours_pay += calc.extra_hours_pay
        summary.total_pay += calc.total_pay
        summary.days_worked += 1
        summary.total_hours += calc.regular_hours + calc.extra_hours
    return summary


def calculate_surcharges_only(work_days, base_salary=Config.DEFAULT_BASE_SALARY, all_work_days=None):
    """Sum surcharges and overtime only, without ordinary pay."""
    summary = SurchargesSummary()
    for calc in calculate_work_days(work_days, base_salary, all_work_days):
        summary.total_night_surcharge += calc.night_surcharge
        summary.total_sunday_night_surcharge += calc.sunday_night_surcharge
        summary.total_holiday_surcharge += calc.holiday_surcharge
        summary.total_extra_hours_pay += calc.extra_hours_pay
        summary.total_surcharges += calc.surcharges
    return summary


def filter_work_days_by_month(work_days, reference_date):
    ref = to_date(reference_date)
    return [wd for wd in work_days if wd.date.year == ref.year and wd.date.month == ref.month]


def previous_month(reference_date):
    return to_date(reference_date).replace(day=1) - relativedelta(months=1)
