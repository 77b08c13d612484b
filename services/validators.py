"""
Input validation at the boundary between stored/user data and the engine.

The calculators assume validated input and never re-check ranges.
"""
import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from services.labor_law import LEGACY_SHIFT_TYPES, SHIFT_TYPES
from services.models import PayrollConfig, WorkDay

ShiftType = Literal[
    'diurno_am',
    'tarde_pm',
    'trasnocho',
    'incapacidad',
    'arl',
    'vacaciones',
    'licencia_remunerada',
    'licencia_no_remunerada',
]

MAX_RANGE_DAYS = 366


class InvalidInputError(ValueError):
    pass


class WorkDayInput(BaseModel):
    date: datetime.date
    shift_type: ShiftType
    regular_hours: float = Field(..., ge=0, le=24)
    extra_hours: float = Field(0, ge=0, le=12)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator('date', mode='before')
    @classmethod
    def date_format(cls, value):
        if isinstance(value, str):
            try:
                return datetime.date.fromisoformat(value)
            except ValueError:
                raise ValueError('Formato de fecha inválido') from None
        return value


class DateRangeInput(BaseModel):
    start: datetime.date
    end: datetime.date


class StoredWorkDay(WorkDayInput):
    """A row read back from storage; older rows may carry legacy shift types."""
    id: str
    shift_type: str
    created_at: Optional[datetime.datetime] = None

    @field_validator('shift_type')
    @classmethod
    def known_shift_type(cls, value):
        if value not in SHIFT_TYPES and value not in LEGACY_SHIFT_TYPES:
            raise ValueError(f'Tipo de turno desconocido: {value}')
        return value


class SalaryInput(BaseModel):
    base_salary: float = Field(..., ge=0, le=100000000)


class PayrollConfigInput(BaseModel):
    transport_allowance_enabled: bool = True
    transport_allowance_value: Optional[int] = Field(None, ge=0)
    uvt_value: Optional[int] = Field(None, gt=0)
    arl_risk_level: int = Field(1, ge=1, le=5)
    exonerated: bool = True
    has_dependents: bool = False
    medical_deduction: float = Field(0, ge=0)
    housing_interest: float = Field(0, ge=0)


def validate_input(schema, data):
    """Validate ``data`` against ``schema`` or raise ``InvalidInputError``
    with every field message joined into one string."""
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        messages = []
        for error in e.errors():
            field = '.'.join(str(part) for part in error['loc'])
            message = error['msg'].removeprefix('Value error, ')
            messages.append(f"{field}: {message}" if field else message)
        raise InvalidInputError(', '.join(messages)) from e


def validate_date_range(start, end):
    data = validate_input(DateRangeInput, {'start': start, 'end': end})
    if data.end < data.start:
        raise InvalidInputError('La fecha final es anterior a la inicial')
    if (data.end - data.start).days + 1 > MAX_RANGE_DAYS:
        raise InvalidInputError(f'El rango no puede superar {MAX_RANGE_DAYS} días')
    return data.start, data.end


def to_work_day(row):
    """Build an engine ``WorkDay`` from a stored row. The stored holiday flag is dropped."""
    data = validate_input(StoredWorkDay, row)
    return WorkDay(
        id=data.id,
        date=data.date,
        shift_type=data.shift_type,
        regular_hours=data.regular_hours,
        extra_hours=data.extra_hours,
        notes=data.notes,
        created_at=data.created_at,
    )


def to_payroll_config(values):
    data = validate_input(PayrollConfigInput, values or {})
    return PayrollConfig(**data.model_dump())
