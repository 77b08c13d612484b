import pytest

from services.labor_law import (
    get_annual_parameters,
    get_minimum_wage,
    get_monthly_hours,
    get_night_shift_hours,
    get_shift_configuration,
    get_sunday_holiday_surcharge_rate,
    get_weekly_hours,
    is_special_shift,
)


@pytest.mark.parametrize('day, weekly, monthly', [
    ('2023-07-14', 48, 240),
    ('2023-07-15', 47, 235),
    ('2024-07-14', 47, 235),
    ('2024-07-15', 46, 230),
    ('2025-07-15', 44, 220),
    ('2026-07-14', 44, 220),
    ('2026-07-15', 42, 210),
])
def test_working_hours_schedule(day, weekly, monthly):
    assert get_weekly_hours(day) == weekly
    assert get_monthly_hours(day) == monthly


@pytest.mark.parametrize('day, rate', [
    ('2025-01-15', 0.80),
    ('2026-06-30', 0.80),
    ('2026-07-01', 0.90),
    ('2027-06-30', 0.90),
    ('2027-07-01', 1.00),
    ('2030-01-01', 1.00),
])
def test_sunday_holiday_rate(day, rate):
    assert get_sunday_holiday_surcharge_rate(day) == rate


def test_night_window_moves_on_2025_12_25():
    assert get_night_shift_hours('2025-12-24').start_hour == 21
    assert get_night_shift_hours('2025-12-25').start_hour == 19
    assert get_night_shift_hours('2025-12-25').end_hour == 6


def test_tarde_pm_gains_night_hours_with_new_law():
    old = get_shift_configuration('tarde_pm', '2025-12-24')
    new = get_shift_configuration('tarde_pm', '2025-12-25')
    assert (old.start_hour, old.end_hour) == (13, 21)
    assert old.night_hours == 0
    assert new.night_hours_before_midnight == 2
    assert new.night_hours == 2


@pytest.mark.parametrize('day', ['2025-06-01', '2026-02-01'])
def test_trasnocho_splits_at_midnight(day):
    config = get_shift_configuration('trasnocho', day)
    assert config.crosses_midnight
    assert config.night_hours_before_midnight == 3
    assert config.night_hours_after_midnight == 5


def test_diurno_am_has_no_night_hours():
    assert get_shift_configuration('diurno_am', '2026-02-01').night_hours == 0
    assert get_shift_configuration('vacaciones', '2026-02-01').night_hours == 0


def test_annual_parameters():
    assert get_annual_parameters(2025) == {
        'minimum_wage': 1423500, 'transport_allowance': 200000, 'uvt': 49799}
    assert get_minimum_wage('2026-03-01') == 1750905
    # Out of the table: nearest known year
    assert get_annual_parameters(2035) == get_annual_parameters(2026)
    assert get_annual_parameters(2020) == get_annual_parameters(2024)


def test_special_shifts():
    for shift in ('incapacidad', 'arl', 'vacaciones', 'licencia_remunerada',
                  'licencia_no_remunerada', 'descanso', 'suspendido'):
        assert is_special_shift(shift)
    for shift in ('diurno_am', 'tarde_pm', 'trasnocho', 'mixto'):
        assert not is_special_shift(shift)
