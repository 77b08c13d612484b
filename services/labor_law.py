"""
Legal parameters in force on a given date (CST, Ley 2101 de 2021, Ley 2466 de 2025).

Every legal transition is an explicit cut-over date, so days recorded before
a change keep being settled with the rule in force on that day.
"""
import datetime
import logging
from dataclasses import dataclass

from config import Config
from services.colombian_holidays import to_date

logger = logging.getLogger(__name__)

SHIFT_TYPES = (
    'diurno_am',
    'tarde_pm',
    'trasnocho',
    'incapacidad',
    'arl',
    'vacaciones',
    'licencia_remunerada',
    'licencia_no_remunerada',
)

# Older app versions stored these; still readable
LEGACY_SHIFT_TYPES = ('mixto', 'descanso', 'suspendido')

NO_SURCHARGE_SHIFTS = (
    'incapacidad',
    'arl',
    'vacaciones',
    'licencia_remunerada',
    'licencia_no_remunerada',
    'descanso',
    'suspendido',
)

# (start hour, end hour) of each shift
SHIFT_WINDOWS = {
    'diurno_am': (5, 13),
    'tarde_pm': (13, 21),
    'trasnocho': (21, 5),
}
DEFAULT_SHIFT_WINDOW = (6, 14)

_WEEKLY_HOURS_SCHEDULE = [
    (datetime.date.fromisoformat(since), hours)
    for since, hours in Config.WEEKLY_HOURS_SCHEDULE
]
_SUNDAY_HOLIDAY_SCHEDULE = [
    (datetime.date.fromisoformat(since), rate)
    for since, rate in Config.SUNDAY_HOLIDAY_SCHEDULE
]
_NIGHT_LAW_CHANGE = datetime.date.fromisoformat(Config.NIGHT_LAW_CHANGE_DATE)


@dataclass(frozen=True)
class NightShiftHours:
    start_hour: int
    end_hour: int


@dataclass(frozen=True)
class ShiftConfiguration:
    start_hour: int
    end_hour: int
    crosses_midnight: bool
    night_hours_before_midnight: int
    night_hours_after_midnight: int

    @property
    def night_hours(self):
        return self.night_hours_before_midnight + self.night_hours_after_midnight


def _step(value, schedule, default):
    result = default
    for since, step_value in schedule:
        if value >= since:
            result = step_value
        else:
            break
    return result


def get_weekly_hours(value):
    """Maximum weekly hours (Ley 2101 de 2021, gradual reduction)."""
    return _step(to_date(value), _WEEKLY_HOURS_SCHEDULE, Config.WEEKLY_HOURS_BEFORE_REFORM)


def get_monthly_hours(value):
    return round(get_weekly_hours(value) / 6 * 30)


def get_sunday_holiday_surcharge_rate(value):
    """Sunday/holiday surcharge: 80%, 90% from Jul-2026, 100% from Jul-2027."""
    return _step(to_date(value), _SUNDAY_HOLIDAY_SCHEDULE, Config.SUNDAY_HOLIDAY_BASE_RATE)


def get_night_shift_hours(value):
    """Night window: 9pm-6am, 7pm-6am from 2025-12-25 (Ley 2466 de 2025)."""
    if to_date(value) >= _NIGHT_LAW_CHANGE:
        return NightShiftHours(Config.NIGHT_START_NEW, Config.NIGHT_END)
    return NightShiftHours(Config.NIGHT_START_OLD, Config.NIGHT_END)


def _overlap(start, end, window_start, window_end):
    return max(0, min(end, window_end) - max(start, window_start))


def get_shift_configuration(shift_type, value):
    """Shift hours and how many of them fall inside the night window.

    Shifts that do not cross midnight only count the evening part of the
    window (night start until 24h); early hours of the morning shift are
    settled as daytime.
    """
    night = get_night_shift_hours(value)
    start, end = SHIFT_WINDOWS.get(shift_type, DEFAULT_SHIFT_WINDOW)
    crosses_midnight = end < start

    if crosses_midnight:
        before = _overlap(start, 24, night.start_hour, 24)
        after = _overlap(0, end, 0, night.end_hour)
    else:
        before = _overlap(start, end, night.start_hour, 24)
        after = 0

    return ShiftConfiguration(
        start_hour=start,
        end_hour=end,
        crosses_midnight=crosses_midnight,
        night_hours_before_midnight=before,
        night_hours_after_midnight=after,
    )


def get_annual_parameters(year):
    """Minimum wage, transport allowance and UVT published for ``year``.

    Years outside the table fall back to the nearest known year.
    """
    table = Config.ANNUAL_PARAMETERS
    if year in table:
        return dict(table[year])

    nearest = min(table) if year < min(table) else max(table)
    logger.warning("No hay parámetros anuales para %s, se usan los de %s", year, nearest)
    return dict(table[nearest])


def get_minimum_wage(value):
    return get_annual_parameters(to_date(value).year)['minimum_wage']


def is_special_shift(shift_type):
    return shift_type in NO_SURCHARGE_SHIFTS
