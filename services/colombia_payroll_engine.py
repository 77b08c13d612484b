import datetime
import logging
from decimal import Decimal, ROUND_HALF_UP

from config import Config
from services.colombian_holidays import to_date
from services.labor_law import get_annual_parameters
from services.models import AnnualReport, PayCycle, PayrollCalculation, PayrollConfig, WithholdingBreakdown
from services.salary_calculator import (
    WorkDayHistory,
    calculate_monthly_summary,
    calculate_surcharges_only,
    calculate_work_days,
    filter_work_days_by_month,
    previous_month,
)

logger = logging.getLogger(__name__)


def round_cop(value):
    """Round to whole pesos, half up."""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class ColombiaPayrollEngine:
    EMPLEADO = Config.PORCENTAJES_EMPLEADO
    EMPLEADOR = Config.PORCENTAJES_EMPLEADOR
    PROVISION = Config.PORCENTAJES_PROVISION

    @staticmethod
    def resolve_parameters(year, config=None):
        config = config or PayrollConfig()
        params = get_annual_parameters(year)
        return {
            'minimum_wage': params['minimum_wage'],
            'transport_allowance': (config.transport_allowance_value
                                    if config.transport_allowance_value is not None
                                    else params['transport_allowance']),
            'uvt': config.uvt_value or params['uvt'],
        }

    @staticmethod
    def calculate_transport_allowance(base_salary, minimum_wage, enabled=True, value=0):
        # Only up to 2 SMLV
        if not enabled:
            return 0
        if base_salary > minimum_wage * Config.TRANSPORT_MAX_SMLV:
            return 0
        return round_cop(value)

    @staticmethod
    def calculate_ibc(regular_pay, surcharges):
        # Transport allowance is not part of the contribution base
        return round_cop(regular_pay) + round_cop(surcharges)

    @staticmethod
    def get_fsp_rate(ibc, minimum_wage):
        multiple = ibc / minimum_wage
        rate = 0.0
        for since, bracket_rate in Config.FSP_TABLE:
            if multiple >= since:
                rate = bracket_rate
            else:
                break
        return rate

    @staticmethod
    def calculate_fsp(ibc, minimum_wage):
        return round_cop(ibc * ColombiaPayrollEngine.get_fsp_rate(ibc, minimum_wage))

    @staticmethod
    def find_withholding_bracket(base_uvt):
        for bracket in Config.WITHHOLDING_TABLE:
            if bracket['from'] <= base_uvt < bracket['to']:
                return bracket
        return Config.WITHHOLDING_TABLE[0]

    @staticmethod
    def calculate_withholding_tax(ibc, health, pension, fsp, uvt_value, config=None):
        """Withholding tax, procedure 1 (Art. 383 E.T.)."""
        config = config or PayrollConfig()
        caps = Config.WITHHOLDING_CAPS_UVT

        non_taxable = health + pension + fsp
        net_income = max(ibc - non_taxable, 0)

        dependents = 0
        if config.has_dependents:
            dependents = round_cop(min(ibc * Config.DEPENDENTS_PERCENTAGE,
                                       caps['DEPENDIENTES'] * uvt_value))
        medical = round_cop(min(config.medical_deduction, caps['MEDICINA_PREPAGADA'] * uvt_value))
        housing = round_cop(min(config.housing_interest, caps['INTERESES_VIVIENDA'] * uvt_value))

        subtotal = max(net_income - dependents - medical - housing, 0)
        exempt = round_cop(min(subtotal * Config.EXEMPT_INCOME_PERCENTAGE,
                               caps['RENTA_EXENTA'] * uvt_value))
        taxable_base = subtotal - exempt
        base_uvt = taxable_base / uvt_value

        bracket = ColombiaPayrollEngine.find_withholding_bracket(base_uvt)
        tax = 0
        if bracket['rate'] > 0:
            tax_uvt = (base_uvt - bracket['from']) * bracket['rate'] + bracket['base']
            tax = max(0, round_cop(tax_uvt * uvt_value))

        return WithholdingBreakdown(
            gross_income=ibc,
            non_taxable_income=non_taxable,
            dependents_deduction=dependents,
            medical_deduction=medical,
            housing_interest_deduction=housing,
            exempt_income=exempt,
            deductions_applied=non_taxable + dependents + medical + housing + exempt,
            taxable_base=taxable_base,
            taxable_base_uvt=round(base_uvt, 2),
            bracket_rate=bracket['rate'],
            uvt_value=uvt_value,
            withholding_tax=tax,
        )

    @staticmethod
    def calculate_employer_contributions(base_salary, ibc, minimum_wage, config=None):
        config = config or PayrollConfig()
        rates = ColombiaPayrollEngine.EMPLEADOR

        health = round_cop(ibc * rates['SALUD'])
        sena = round_cop(ibc * rates['SENA'])
        icbf = round_cop(ibc * rates['ICBF'])

        # Art. 114-1 E.T.
        if config.exonerated and base_salary < minimum_wage * Config.EXONERATION_MAX_SMLV:
            health = sena = icbf = 0

        arl_rate = Config.ARL_RATES.get(config.arl_risk_level, Config.ARL_RATES[1])
        return {
            'employer_health': health,
            'employer_pension': round_cop(ibc * rates['PENSION']),
            'employer_arl': round_cop(ibc * arl_rate),
            'caja_compensacion': round_cop(ibc * rates['CAJA']),
            'sena': sena,
            'icbf': icbf,
        }

    @staticmethod
    def calculate_provisions(base_salary, transport_allowance):
        rates = ColombiaPayrollEngine.PROVISION
        prima = round_cop((base_salary + transport_allowance) * rates['PRIMA'])
        cesantias = round_cop((base_salary + transport_allowance) * rates['CESANTIAS'])
        return {
            'prima_provision': prima,
            'cesantias_provision': cesantias,
            'cesantias_interest': round_cop(cesantias * rates['INTERESES_CESANTIAS'] / 12),
            'vacation_provision': round_cop(base_salary * rates['VACACIONES']),
        }

    @staticmethod
    def calculate_full_payroll(base_salary, regular_pay, surcharges, config=None, *, year):
        """Payslip for one period. ``year`` selects the SMLV, transport allowance
        and UVT in force; it never defaults to the current date."""
        config = config or PayrollConfig()
        params = ColombiaPayrollEngine.resolve_parameters(year, config)
        minimum_wage = params['minimum_wage']
        base_salary = round_cop(base_salary)

        transport = ColombiaPayrollEngine.calculate_transport_allowance(
            base_salary, minimum_wage,
            enabled=config.transport_allowance_enabled,
            value=params['transport_allowance'],
        )

        regular_pay = round_cop(regular_pay)
        surcharges = round_cop(surcharges)
        total_earnings = regular_pay + surcharges + transport
        ibc = ColombiaPayrollEngine.calculate_ibc(regular_pay, surcharges)

        health = round_cop(ibc * ColombiaPayrollEngine.EMPLEADO['SALUD'])
        pension = round_cop(ibc * ColombiaPayrollEngine.EMPLEADO['PENSION'])
        fsp = ColombiaPayrollEngine.calculate_fsp(ibc, minimum_wage)
        withholding = ColombiaPayrollEngine.calculate_withholding_tax(
            ibc, health, pension, fsp, params['uvt'], config)

        total_deductions = health + pension + fsp + withholding.withholding_tax

        provisions = ColombiaPayrollEngine.calculate_provisions(base_salary, transport)
        contributions = ColombiaPayrollEngine.calculate_employer_contributions(
            base_salary, ibc, minimum_wage, config)

        net_pay = total_earnings - total_deductions
        logger.debug("Nómina: devengado=%s deducciones=%s neto=%s",
                     total_earnings, total_deductions, net_pay)

        return PayrollCalculation(
            base_salary=base_salary,
            regular_pay=regular_pay,
            surcharges=surcharges,
            transport_allowance=transport,
            total_earnings=total_earnings,
            ibc=ibc,
            health_deduction=health,
            pension_deduction=pension,
            fsp_deduction=fsp,
            withholding_tax=withholding.withholding_tax,
            total_deductions=total_deductions,
            total_employer_contributions=sum(contributions.values()),
            net_pay=net_pay,
            withholding=withholding,
            **provisions,
            **contributions,
        )

    @staticmethod
    def calculate_pay_cycle(work_days, base_salary, reference_date, config=None):
        """Current month's ordinary pay plus the previous month's surcharges.

        ``work_days`` must be the user's whole history: incapacity streaks
        and the vacation average look outside the month being paid.
        """
        reference_date = to_date(reference_date)
        history = WorkDayHistory.of(work_days)

        current = filter_work_days_by_month(history, reference_date)
        previous = filter_work_days_by_month(history, previous_month(reference_date))

        calculations = calculate_work_days(current, base_salary, history)
        current_regular_pay = sum(calc.regular_pay for calc in calculations)
        previous_surcharges = calculate_surcharges_only(previous, base_salary, history)
        current_surcharges = calculate_surcharges_only(current, base_salary, history)
        summary = calculate_monthly_summary(current, base_salary, history)

        payroll = ColombiaPayrollEngine.calculate_full_payroll(
            base_salary,
            current_regular_pay,
            previous_surcharges.total_surcharges,
            config=config,
            year=reference_date.year,
        )

        return PayCycle(
            reference_date=reference_date,
            current_month_work_days=current,
            previous_month_work_days=previous,
            current_month_calculations=calculations,
            current_month_regular_pay=current_regular_pay,
            previous_month_surcharges=previous_surcharges,
            current_month_surcharges=current_surcharges,
            monthly_summary=summary,
            total_to_receive=current_regular_pay + previous_surcharges.total_surcharges,
            payroll=payroll,
        )

    @staticmethod
    def calculate_annual_report(work_days, base_salary, year, config=None):
        """Twelve pay cycles for ``year``, January through December.

        Each month pays the surcharges of the month before, so January
        reads the previous December.
        """
        history = WorkDayHistory.of(work_days)
        cycles = [
            ColombiaPayrollEngine.calculate_pay_cycle(
                history, base_salary, datetime.date(year, month, 1), config)
            for month in range(1, 13)
        ]
        logger.debug("Reporte anual %s: neto=%s", year, sum(c.payroll.net_pay for c in cycles))
        return AnnualReport(year=year, cycles=cycles)


def calculate_full_payroll(base_salary, regular_pay, surcharges, config=None, *, year):
    return ColombiaPayrollEngine.calculate_full_payroll(
        base_salary, regular_pay, surcharges, config=config, year=year)
