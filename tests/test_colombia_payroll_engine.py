import pytest

from services.colombia_payroll_engine import ColombiaPayrollEngine, calculate_full_payroll, round_cop
from services.models import PayrollConfig

BASE_SALARY = 2416500
SMLV_2025 = 1423500
UVT_2025 = 49799


def test_round_cop_half_up():
    assert round_cop(0.5) == 1
    assert round_cop(2.5) == 3
    assert round_cop(87872.727) == 87873


def test_standard_payslip():
    payroll = calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, year=2025)

    assert payroll.transport_allowance == 200000
    assert payroll.total_earnings == 2616500
    assert payroll.ibc == 2416500
    assert payroll.health_deduction == 96660
    assert payroll.pension_deduction == 96660
    assert payroll.fsp_deduction == 0
    assert payroll.withholding_tax == 0
    assert payroll.total_deductions == 193320
    assert payroll.net_pay == 2423180


def test_surcharges_are_part_of_ibc_but_transport_is_not():
    payroll = calculate_full_payroll(BASE_SALARY, 2000000, 300000.4, year=2025)

    assert payroll.surcharges == 300000
    assert payroll.ibc == 2300000
    assert payroll.total_earnings == 2300000 + 200000
    assert payroll.health_deduction == 92000


def test_transport_allowance_rules():
    assert calculate_full_payroll(2847000, 2847000, 0, year=2025).transport_allowance == 200000
    assert calculate_full_payroll(2847001, 2847001, 0, year=2025).transport_allowance == 0

    disabled = PayrollConfig(transport_allowance_enabled=False)
    assert calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, disabled, year=2025).transport_allowance == 0

    custom = PayrollConfig(transport_allowance_value=250000)
    assert calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, custom, year=2025).transport_allowance == 250000


def test_annual_values_follow_payroll_year():
    payroll = calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, year=2026)
    assert payroll.transport_allowance == 249095
    assert payroll.withholding.uvt_value == 52374


def test_payroll_year_must_be_given():
    with pytest.raises(TypeError):
        calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0)
    with pytest.raises(TypeError):
        ColombiaPayrollEngine.resolve_parameters()


def test_payslip_depends_only_on_inputs():
    first = calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, year=2025)
    second = calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, year=2025)

    assert first == second
    assert ColombiaPayrollEngine.resolve_parameters(2025) == {
        'minimum_wage': SMLV_2025, 'transport_allowance': 200000, 'uvt': UVT_2025}


class TestFsp:
    def test_below_four_minimum_wages(self):
        ibc = round(SMLV_2025 * 3.99)
        assert calculate_full_payroll(ibc, ibc, 0, year=2025).fsp_deduction == 0

    def test_at_four_minimum_wages(self):
        ibc = SMLV_2025 * 4
        payroll = calculate_full_payroll(ibc, ibc, 0, year=2025)
        assert payroll.fsp_deduction == 56940

    @pytest.mark.parametrize('multiple, rate', [
        (4, 0.01), (15.9, 0.01), (16, 0.012), (17.5, 0.014), (18, 0.016),
        (19.5, 0.018), (20, 0.02), (25, 0.02),
    ])
    def test_rate_table(self, multiple, rate):
        assert ColombiaPayrollEngine.get_fsp_rate(SMLV_2025 * multiple, SMLV_2025) == rate


class TestWithholding:
    def test_below_95_uvt_is_zero(self):
        breakdown = ColombiaPayrollEngine.calculate_withholding_tax(
            2416500, 96660, 96660, 0, UVT_2025)

        assert breakdown.taxable_base_uvt < 95
        assert breakdown.bracket_rate == 0
        assert breakdown.withholding_tax == 0

    def test_progressive_bracket(self):
        payroll = calculate_full_payroll(20000000, 20000000, 0, year=2025)
        trail = payroll.withholding

        assert payroll.fsp_deduction == 200000
        assert trail.gross_income == 20000000
        assert trail.non_taxable_income == 1800000
        assert trail.exempt_income == 4550000
        assert trail.taxable_base == 13650000
        assert trail.bracket_rate == 0.28
        expected = ((13650000 / UVT_2025 - 150) * 0.28 + 10) * UVT_2025
        assert payroll.withholding_tax == pytest.approx(expected, abs=1)
        assert trail.deductions_applied == 1800000 + 4550000

    def test_optional_deductions_are_capped(self):
        config = PayrollConfig(has_dependents=True, medical_deduction=1000000, housing_interest=9000000)

        trail = ColombiaPayrollEngine.calculate_withholding_tax(
            20000000, 800000, 800000, 200000, UVT_2025, config)

        assert trail.dependents_deduction == 32 * UVT_2025
        assert trail.medical_deduction == 16 * UVT_2025
        assert trail.housing_interest_deduction == 100 * UVT_2025

    def test_exempt_income_cap(self):
        trail = ColombiaPayrollEngine.calculate_withholding_tax(
            100000000, 4000000, 4000000, 2000000, UVT_2025)
        assert trail.exempt_income == 240 * UVT_2025

    def test_deductions_reduce_withholding(self):
        plain = calculate_full_payroll(20000000, 20000000, 0, year=2025)
        with_dependents = calculate_full_payroll(
            20000000, 20000000, 0, PayrollConfig(has_dependents=True), year=2025)
        assert with_dependents.withholding_tax < plain.withholding_tax


class TestProvisionsAndContributions:
    def test_provisions(self):
        payroll = calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, year=2025)

        assert payroll.prima_provision == 217954
        assert payroll.cesantias_provision == 217954
        assert payroll.cesantias_interest == 2180
        assert payroll.vacation_provision == 100768
        assert payroll.total_provisions == 217954 * 2 + 2180 + 100768

    def test_provisions_never_reduce_net_pay(self):
        payroll = calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, year=2025)
        assert payroll.net_pay == payroll.total_earnings - payroll.total_deductions

    def test_exonerated_employer(self):
        payroll = calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, year=2025)

        assert payroll.employer_health == 0
        assert payroll.sena == 0
        assert payroll.icbf == 0
        assert payroll.employer_pension == 289980
        assert payroll.employer_arl == 12614
        assert payroll.caja_compensacion == 96660
        assert payroll.total_employer_contributions == 289980 + 12614 + 96660

    def test_exoneration_disabled(self):
        config = PayrollConfig(exonerated=False)
        payroll = calculate_full_payroll(BASE_SALARY, BASE_SALARY, 0, config, year=2025)

        assert payroll.employer_health == pytest.approx(205402.5, abs=1)
        assert payroll.sena == 48330
        assert payroll.icbf == 72495

    def test_no_exoneration_above_ten_minimum_wages(self):
        salary = SMLV_2025 * 10
        payroll = calculate_full_payroll(salary, salary, 0, year=2025)
        assert payroll.employer_health > 0
        assert payroll.sena > 0

    @pytest.mark.parametrize('level, rate', [(1, 0.00522), (3, 0.02436), (5, 0.0696)])
    def test_arl_levels(self, level, rate):
        payroll = calculate_full_payroll(2000000, 2000000, 0, PayrollConfig(arl_risk_level=level), year=2025)
        assert payroll.employer_arl == round_cop(2000000 * rate)


def test_all_amounts_are_whole_pesos():
    payroll = calculate_full_payroll(3123456.78, 1234567.891, 98765.4321, year=2025)
    values = payroll.to_dict()
    del values['withholding']
    assert all(isinstance(value, int) for value in values.values())


class TestPayCycle:
    def test_previous_month_surcharges_paid_this_month(self, work_day):
        history = [
            work_day('2025-08-03'),                   # Sunday in August
            work_day('2025-09-09', extra_hours=2),
            work_day('2025-09-13', 'trasnocho'),
        ]

        cycle = ColombiaPayrollEngine.calculate_pay_cycle(history, BASE_SALARY, '2025-09-20')

        hourly = BASE_SALARY / 220
        assert len(cycle.current_month_work_days) == 2
        assert len(cycle.previous_month_work_days) == 1
        assert cycle.current_month_regular_pay == pytest.approx(16 * hourly)
        assert cycle.previous_month_surcharges.total_surcharges == pytest.approx(8 * hourly * 0.8)
        assert cycle.current_month_surcharges.total_extra_hours_pay == pytest.approx(2 * hourly * 1.25)
        assert cycle.total_to_receive == pytest.approx(16 * hourly + 8 * hourly * 0.8)
        assert cycle.payroll.regular_pay == round_cop(16 * hourly)
        assert cycle.payroll.surcharges == round_cop(8 * hourly * 0.8)
        assert cycle.monthly_summary.days_worked == 2

    def test_empty_history(self):
        cycle = ColombiaPayrollEngine.calculate_pay_cycle([], BASE_SALARY, '2025-09-01')
        assert cycle.payroll.total_earnings == 200000
        assert cycle.payroll.net_pay == 200000


class TestAnnualReport:
    def test_each_month_pays_previous_month_surcharges(self, work_day):
        hourly = BASE_SALARY / 230
        history = [
            work_day('2024-12-15'),                   # Sunday, paid in January
            work_day('2025-01-14'),
            work_day('2025-03-02'),                   # Sunday, paid in April
        ]

        report = ColombiaPayrollEngine.calculate_annual_report(history, BASE_SALARY, 2025)

        assert [c.reference_date.month for c in report.cycles] == list(range(1, 13))
        january, march, april = report.cycles[0], report.cycles[2], report.cycles[3]
        assert january.previous_month_surcharges.total_surcharges == pytest.approx(8 * hourly * 0.8)
        assert january.current_month_regular_pay == pytest.approx(8 * hourly)
        assert march.previous_month_surcharges.total_surcharges == 0
        assert march.current_month_surcharges.total_holiday_surcharge == pytest.approx(8 * hourly * 0.8)
        assert april.payroll.surcharges == round_cop(8 * hourly * 0.8)
        assert april.payroll.regular_pay == 0

    def test_totals(self, work_day):
        history = [work_day('2025-01-14'), work_day('2025-06-10', extra_hours=2)]

        report = ColombiaPayrollEngine.calculate_annual_report(history, BASE_SALARY, 2025)

        assert report.year == 2025
        assert report.total_net_pay == sum(c.payroll.net_pay for c in report.cycles)
        assert report.total_earnings - report.total_deductions == report.total_net_pay
        assert report.total_provisions == sum(c.payroll.total_provisions for c in report.cycles)
        assert report.total_employer_contributions == \
            sum(c.payroll.total_employer_contributions for c in report.cycles)
