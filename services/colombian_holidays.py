"""
Colombian public holidays, 2024-2030.

Fixed holidays repeat every year. Movable holidays (Ley 51 de 1983, "Ley
Emiliani") and the Easter-based ones are stored already moved to their
Monday; they are not computed. For years outside the table only fixed
holidays and Sundays are known, so the table has to be extended by hand
when a new year's calendar is published.
"""
import datetime
import logging
from functools import lru_cache

logger = logging.getLogger(__name__)

FIXED_HOLIDAYS = [
    (1, 1, 'Año Nuevo'),
    (5, 1, 'Día del Trabajo'),
    (7, 20, 'Día de la Independencia'),
    (8, 7, 'Batalla de Boyacá'),
    (12, 8, 'Inmaculada Concepción'),
    (12, 25, 'Navidad'),
]

VARIABLE_HOLIDAYS = {
    2024: [
        (1, 8, 'Día de los Reyes Magos'),
        (3, 25, 'Día de San José'),
        (3, 28, 'Jueves Santo'),
        (3, 29, 'Viernes Santo'),
        (5, 13, 'Día de la Ascensión'),
        (6, 3, 'Corpus Christi'),
        (6, 10, 'Sagrado Corazón'),
        (7, 1, 'San Pedro y San Pablo'),
        (8, 19, 'Asunción de la Virgen'),
        (10, 14, 'Día de la Raza'),
        (11, 4, 'Todos los Santos'),
        (11, 11, 'Independencia de Cartagena'),
    ],
    2025: [
        (1, 6, 'Día de los Reyes Magos'),
        (3, 24, 'Día de San José'),
        (4, 17, 'Jueves Santo'),
        (4, 18, 'Viernes Santo'),
        (6, 2, 'Día de la Ascensión'),
        (6, 23, 'Corpus Christi'),
        (6, 30, 'Sagrado Corazón'),
        (6, 30, 'San Pedro y San Pablo'),
        (8, 18, 'Asunción de la Virgen'),
        (10, 13, 'Día de la Raza'),
        (11, 3, 'Todos los Santos'),
        (11, 17, 'Independencia de Cartagena'),
    ],
    2026: [
        (1, 12, 'Día de los Reyes Magos'),
        (3, 23, 'Día de San José'),
        (4, 2, 'Jueves Santo'),
        (4, 3, 'Viernes Santo'),
        (5, 18, 'Día de la Ascensión'),
        (6, 8, 'Corpus Christi'),
        (6, 15, 'Sagrado Corazón'),
        (6, 29, 'San Pedro y San Pablo'),
        (8, 17, 'Asunción de la Virgen'),
        (10, 12, 'Día de la Raza'),
        (11, 2, 'Todos los Santos'),
        (11, 16, 'Independencia de Cartagena'),
    ],
    2027: [
        (1, 11, 'Día de los Reyes Magos'),
        (3, 22, 'Día de San José'),
        (3, 25, 'Jueves Santo'),
        (3, 26, 'Viernes Santo'),
        (5, 10, 'Día de la Ascensión'),
        (5, 31, 'Corpus Christi'),
        (6, 7, 'Sagrado Corazón'),
        (6, 28, 'San Pedro y San Pablo'),
        (8, 16, 'Asunción de la Virgen'),
        (10, 18, 'Día de la Raza'),
        (11, 1, 'Todos los Santos'),
        (11, 15, 'Independencia de Cartagena'),
    ],
    2028: [
        (1, 10, 'Día de los Reyes Magos'),
        (3, 20, 'Día de San José'),
        (4, 13, 'Jueves Santo'),
        (4, 14, 'Viernes Santo'),
        (5, 29, 'Día de la Ascensión'),
        (6, 19, 'Corpus Christi'),
        (6, 26, 'Sagrado Corazón'),
        (7, 3, 'San Pedro y San Pablo'),
        (8, 21, 'Asunción de la Virgen'),
        (10, 16, 'Día de la Raza'),
        (11, 6, 'Todos los Santos'),
        (11, 13, 'Independencia de Cartagena'),
    ],
    2029: [
        (1, 8, 'Día de los Reyes Magos'),
        (3, 19, 'Día de San José'),
        (3, 29, 'Jueves Santo'),
        (3, 30, 'Viernes Santo'),
        (5, 14, 'Día de la Ascensión'),
        (6, 4, 'Corpus Christi'),
        (6, 11, 'Sagrado Corazón'),
        (7, 2, 'San Pedro y San Pablo'),
        (8, 20, 'Asunción de la Virgen'),
        (10, 15, 'Día de la Raza'),
        (11, 5, 'Todos los Santos'),
        (11, 12, 'Independencia de Cartagena'),
    ],
    2030: [
        (1, 7, 'Día de los Reyes Magos'),
        (3, 25, 'Día de San José'),
        (4, 18, 'Jueves Santo'),
        (4, 19, 'Viernes Santo'),
        (6, 3, 'Día de la Ascensión'),
        (6, 24, 'Corpus Christi'),
        (7, 1, 'Sagrado Corazón'),
        (7, 1, 'San Pedro y San Pablo'),
        (8, 19, 'Asunción de la Virgen'),
        (10, 14, 'Día de la Raza'),
        (11, 4, 'Todos los Santos'),
        (11, 11, 'Independencia de Cartagena'),
    ],
}


def to_date(value):
    """Accept a ``date``/``datetime`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value)[:10])


def is_year_supported(year):
    return year in VARIABLE_HOLIDAYS


@lru_cache(maxsize=None)
def get_colombian_holidays(year):
    """Return ``(date, name)`` pairs for ``year``, fixed holidays first."""
    holidays = [(datetime.date(year, m, d), name) for m, d, name in FIXED_HOLIDAYS]

    variable = VARIABLE_HOLIDAYS.get(year)
    if variable is None:
        logger.warning(
            "Año %s fuera de la tabla de festivos: solo se detectan festivos fijos y domingos", year)
    else:
        holidays.extend((datetime.date(year, m, d), name) for m, d, name in variable)

    return tuple(holidays)


def is_colombian_holiday(value):
    day = to_date(value)
    return any(h == day for h, _ in get_colombian_holidays(day.year))


def is_sunday(value):
    return to_date(value).weekday() == 6


def is_saturday(value):
    return to_date(value).weekday() == 5


def is_holiday_or_sunday(value):
    return is_sunday(value) or is_colombian_holiday(value)


def get_holiday_name(value):
    day = to_date(value)
    for holiday, name in get_colombian_holidays(day.year):
        if holiday == day:
            return name
    return None
