from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class WorkDay:
    id: str
    date: date
    shift_type: str
    regular_hours: float
    extra_hours: float = 0.0
    is_holiday: bool = False
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class WorkDayCalculation(WorkDay):
    regular_pay: float = 0.0
    night_surcharge: float = 0.0
    sunday_night_surcharge: float = 0.0
    holiday_surcharge: float = 0.0
    extra_hours_pay: float = 0.0
    total_pay: float = 0.0

    @property
    def surcharges(self):
        return (self.night_surcharge + self.sunday_night_surcharge
                + self.holiday_surcharge + self.extra_hours_pay)


@dataclass
class MonthlySummary:
    total_regular_pay: float = 0.0
    total_night_surcharge: float = 0.0
    total_sunday_night_surcharge: float = 0.0
    total_holiday_surcharge: float = 0.0
    total_extra_hours_pay: float = 0.0
    total_pay: float = 0.0
    days_worked: int = 0
    total_hours: float = 0.0


@dataclass
class SurchargesSummary:
    total_night_surcharge: float = 0.0
    total_sunday_night_surcharge: float = 0.0
    total_holiday_surcharge: float = 0.0
    total_extra_hours_pay: float = 0.0
    total_surcharges: float = 0.0


@dataclass
class PayrollConfig:
    """Per-user overrides of the legal parameters used by the payroll engine.

    ``None`` for the transport allowance or the UVT means "use the value
    published for the payroll year".
    """
    transport_allowance_enabled: bool = True
    transport_allowance_value: Optional[int] = None
    uvt_value: Optional[int] = None
    arl_risk_level: int = 1
    exonerated: bool = True
    has_dependents: bool = False
    medical_deduction: float = 0.0
    housing_interest: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class WithholdingBreakdown:
    gross_income: int = 0
    non_taxable_income: int = 0
    dependents_deduction: int = 0
    medical_deduction: int = 0
    housing_interest_deduction: int = 0
    exempt_income: int = 0
    deductions_applied: int = 0
    taxable_base: int = 0
    taxable_base_uvt: float = 0.0
    bracket_rate: float = 0.0
    uvt_value: int = 0
    withholding_tax: int = 0


@dataclass
class PayrollCalculation:
    # Earnings
    base_salary: int
    regular_pay: int
    surcharges: int
    transport_allowance: int
    total_earnings: int
    ibc: int

    # Employee deductions
    health_deduction: int
    pension_deduction: int
    fsp_deduction: int
    withholding_tax: int
    total_deductions: int

    # Provisions (informational)
    prima_provision: int
    cesantias_provision: int
    cesantias_interest: int
    vacation_provision: int

    # Employer contributions (informational)
    employer_health: int
    employer_pension: int
    employer_arl: int
    caja_compensacion: int
    sena: int
    icbf: int
    total_employer_contributions: int

    net_pay: int
    withholding: WithholdingBreakdown = field(default_factory=WithholdingBreakdown)

    @property
    def total_provisions(self):
        return (self.prima_provision + self.cesantias_provision
                + self.cesantias_interest + self.vacation_provision)

    def to_dict(self):
        return asdict(self)


@dataclass
class PayCycle:
    """What the worker receives in a month: this month's ordinary pay plus
    the surcharges earned the month before."""
    reference_date: date
    current_month_work_days: list
    previous_month_work_days: list
    current_month_calculations: list
    current_month_regular_pay: float
    previous_month_surcharges: SurchargesSummary
    current_month_surcharges: SurchargesSummary
    monthly_summary: MonthlySummary
    total_to_receive: float
    payroll: PayrollCalculation


@dataclass
class AnnualReport:
    year: int
    cycles: list

    @property
    def total_earnings(self):
        return sum(c.payroll.total_earnings for c in self.cycles)

    @property
    def total_deductions(self):
        return sum(c.payroll.total_deductions for c in self.cycles)

    @property
    def total_net_pay(self):
        return sum(c.payroll.net_pay for c in self.cycles)

    @property
    def total_provisions(self):
        return sum(c.payroll.total_provisions for c in self.cycles)

    @property
    def total_employer_contributions(self):
        return sum(c.payroll.total_employer_contributions for c in self.cycles)
