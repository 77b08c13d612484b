import datetime
import itertools
import json

import pytest

from services.models import WorkDay

BASE_SALARY = 2416500

_ids = itertools.count(1)


def make_work_day(date, shift_type='diurno_am', regular_hours=8, extra_hours=0, **kwargs):
    return WorkDay(
        id=kwargs.pop('id', f"wd-{next(_ids)}"),
        date=datetime.date.fromisoformat(date),
        shift_type=shift_type,
        regular_hours=regular_hours,
        extra_hours=extra_hours,
        **kwargs,
    )


@pytest.fixture
def work_day():
    return make_work_day


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / 'nomina_data.json'
    path.write_text(json.dumps({
        'profiles': [
            {'id': 'u1', 'full_name': 'Ana Gómez', 'base_salary': BASE_SALARY},
            {'id': 'u2', 'full_name': 'Luis Pérez', 'base_salary': 1423500,
             'transport_allowance_enabled': False, 'arl_risk_level': 3},
        ],
        'work_days': [
            {'id': 'a1', 'user_id': 'u1', 'date': '2025-08-03', 'shift_type': 'diurno_am',
             'regular_hours': 8, 'extra_hours': 0, 'is_holiday': True, 'notes': None},
            {'id': 'a2', 'user_id': 'u1', 'date': '2025-09-09', 'shift_type': 'diurno_am',
             'regular_hours': 8, 'extra_hours': 2, 'is_holiday': True, 'notes': 'turno largo'},
            {'id': 'a3', 'user_id': 'u1', 'date': '2025-09-13', 'shift_type': 'trasnocho',
             'regular_hours': 8, 'extra_hours': 0, 'is_holiday': False, 'notes': None},
            {'id': 'b1', 'user_id': 'u2', 'date': '2025-09-10', 'shift_type': 'mixto',
             'regular_hours': 8, 'extra_hours': 0, 'is_holiday': False, 'notes': None},
        ],
    }), encoding='utf-8')
    return str(path)
