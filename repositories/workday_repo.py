import datetime
from config import Config
from database.json_store import JsonStoreClient, RecordNotFoundError
from services.colombian_holidays import is_holiday_or_sunday
from services.validators import (
    PayrollConfigInput,
    SalaryInput,
    WorkDayInput,
    to_payroll_config,
    to_work_day,
    validate_date_range,
    validate_input,
)

PAYROLL_CONFIG_FIELDS = tuple(PayrollConfigInput.model_fields)


class WorkDayRepository:
    def __init__(self, client: JsonStoreClient):
        self.client = client

    def _get_profile(self, user_id):
        profiles = self.client.execute('profiles', 'search_read', {'id': user_id})
        if not profiles:
            raise RecordNotFoundError(f"Usuario {user_id} no existe")
        return profiles[0]

    def get_base_salary(self, user_id):
        base_salary = self._get_profile(user_id).get('base_salary')
        if base_salary is None:
            return Config.DEFAULT_BASE_SALARY
        return validate_input(SalaryInput, {'base_salary': base_salary}).base_salary

    def get_employee_name(self, user_id):
        return self._get_profile(user_id).get('full_name') or ''

    def get_payroll_config(self, user_id):
        profile = self._get_profile(user_id)
        values = {key: profile[key] for key in PAYROLL_CONFIG_FIELDS if profile.get(key) is not None}
        return to_payroll_config(values)

    def update_payroll_config(self, user_id, values):
        current = self.get_payroll_config(user_id).to_dict()
        current.update(values)
        config = to_payroll_config(current)
        self.client.execute('profiles', 'write', user_id, config.to_dict())
        return config

    def get_work_days(self, user_id):
        rows = self.client.execute('work_days', 'search_read', {'user_id': user_id}, order='date')
        return [to_work_day(row) for row in rows]

    @staticmethod
    def _to_row(user_id, data):
        work_day = validate_input(WorkDayInput, data)
        return {
            'user_id': user_id,
            'date': work_day.date.isoformat(),
            'shift_type': work_day.shift_type,
            'regular_hours': work_day.regular_hours,
            'extra_hours': work_day.extra_hours,
            # Informational only, recomputed on every read
            'is_holiday': is_holiday_or_sunday(work_day.date),
            'notes': work_day.notes,
        }

    def add_work_day(self, user_id, data):
        self._get_profile(user_id)
        return self.client.execute('work_days', 'create', [self._to_row(user_id, data)])[0]

    def add_work_day_range(self, user_id, start, end, data):
        """Insert one row per calendar day between ``start`` and ``end`` inclusive."""
        self._get_profile(user_id)
        start, end = validate_date_range(start, end)

        rows = []
        day = start
        while day <= end:
            rows.append(self._to_row(user_id, {**data, 'date': day.isoformat()}))
            day += datetime.timedelta(days=1)
        return self.client.execute('work_days', 'create', rows)

    def update_work_day(self, work_day_id, data):
        current = self.client.execute('work_days', 'read', work_day_id)
        row = self._to_row(current['user_id'], data)
        return self.client.execute('work_days', 'write', work_day_id, row)

    def delete_work_day(self, work_day_id):
        return self.client.execute('work_days', 'unlink', work_day_id)
