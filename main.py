import sys
import json
import logging
import traceback
import argparse
import datetime
from config import Config
from database.json_store import JsonStoreClient, RecordNotFoundError
from repositories.workday_repo import WorkDayRepository
from services.colombia_payroll_engine import ColombiaPayrollEngine
from services.colombian_holidays import is_year_supported
from services.payslip_renderer import PayslipRenderer, format_cop
from services.validators import InvalidInputError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Liquidación de nómina por turnos')
    parser.add_argument('--user', required=True, help='ID del usuario en el archivo de datos')
    period = parser.add_mutually_exclusive_group()
    period.add_argument('--month', type=str, default=None,
                        help='Mes a liquidar en formato YYYY-MM (por defecto el mes actual)')
    period.add_argument('--year', type=int, default=None,
                        help='Reporte anual: liquida los 12 meses del año indicado')
    parser.add_argument('--data', type=str, default=None,
                        help=f'Archivo JSON de datos (por defecto {Config.DATA_FILE})')
    parser.add_argument('--html', action='store_true',
                        help='Generar el desprendible en HTML')
    args = parser.parse_args(argv)
    if args.year and args.html:
        parser.error('--html solo aplica a la liquidación de un mes')
    return args


def parse_month(value):
    if not value:
        return datetime.date.today().replace(day=1)
    try:
        return datetime.date.fromisoformat(f"{value}-01")
    except ValueError:
        raise InvalidInputError(f"Mes inválido: {value} (use YYYY-MM)") from None


def print_cycle(cycle):
    print(f"    {'Fecha':<12}{'Turno':<24}{'Horas':>6}{'Extra':>6}{'Ordinario':>14}{'Recargos':>14}{'Total':>14}")
    for calc in sorted(cycle.current_month_calculations, key=lambda c: c.date):
        marker = '*' if calc.is_holiday else ' '
        print(f"    {calc.date.isoformat()}{marker} {calc.shift_type:<24}"
              f"{calc.regular_hours:>6g}{calc.extra_hours:>6g}"
              f"{format_cop(calc.regular_pay):>14}{format_cop(calc.surcharges):>14}"
              f"{format_cop(calc.total_pay):>14}")

    previous = cycle.previous_month_surcharges
    print("\n    Recargos del mes anterior (se pagan este mes):")
    print(f"      Nocturno:            {format_cop(previous.total_night_surcharge)}")
    print(f"      Nocturno dominical:  {format_cop(previous.total_sunday_night_surcharge)}")
    print(f"      Dominical/festivo:   {format_cop(previous.total_holiday_surcharge)}")
    print(f"      Horas extra:         {format_cop(previous.total_extra_hours_pay)}")
    print(f"      Total recargos:      {format_cop(previous.total_surcharges)}")


def print_payroll(payroll):
    print(f"      Pago ordinario:      {format_cop(payroll.regular_pay)}")
    print(f"      Recargos:            {format_cop(payroll.surcharges)}")
    print(f"      Aux. transporte:     {format_cop(payroll.transport_allowance)}")
    print(f"      Total devengado:     {format_cop(payroll.total_earnings)}")
    print(f"      IBC:                 {format_cop(payroll.ibc)}")
    print(f"      Salud:              -{format_cop(payroll.health_deduction)}")
    print(f"      Pensión:            -{format_cop(payroll.pension_deduction)}")
    print(f"      FSP:                -{format_cop(payroll.fsp_deduction)}")
    print(f"      Retención:          -{format_cop(payroll.withholding_tax)}"
          f" ({payroll.withholding.taxable_base_uvt} UVT)")
    print(f"      NETO A PAGAR:        {format_cop(payroll.net_pay)}")
    print(f"      Provisiones (informativo): {format_cop(payroll.total_provisions)}")
    print(f"      Aportes empleador (informativo): {format_cop(payroll.total_employer_contributions)}")


def print_annual_report(report):
    print(f"    {'Mes':<8}{'Devengado':>14}{'Deducciones':>14}{'Neto':>14}{'Provisiones':>14}")
    for cycle in report.cycles:
        payroll = cycle.payroll
        print(f"    {cycle.reference_date.strftime('%Y-%m'):<8}"
              f"{format_cop(payroll.total_earnings):>14}{format_cop(payroll.total_deductions):>14}"
              f"{format_cop(payroll.net_pay):>14}{format_cop(payroll.total_provisions):>14}")
    print(f"    {'TOTAL':<8}"
          f"{format_cop(report.total_earnings):>14}{format_cop(report.total_deductions):>14}"
          f"{format_cop(report.total_net_pay):>14}{format_cop(report.total_provisions):>14}")
    print(f"      Aportes empleador (informativo): {format_cop(report.total_employer_contributions)}")


def warn_unsupported_year(year):
    if not is_year_supported(year):
        print(f"    ⚠️ ADVERTENCIA: el año {year} no está en la tabla de festivos; "
              "solo se reconocen domingos y festivos fijos.")


def run_month(args, repo, work_days, base_salary, payroll_config):
    reference_date = parse_month(args.month)
    print(f"\n--- LIQUIDACIÓN DE NÓMINA ({reference_date.strftime('%Y-%m')}) ---")
    warn_unsupported_year(reference_date.year)

    print("\n>>> FASE 2: Calculando días y recargos...")
    cycle = ColombiaPayrollEngine.calculate_pay_cycle(
        work_days, base_salary, reference_date, payroll_config)
    print_cycle(cycle)

    print("\n>>> FASE 3: Nómina del mes...")
    print_payroll(cycle.payroll)

    if args.html:
        renderer = PayslipRenderer()
        content = renderer.render(cycle, repo.get_employee_name(args.user))
        filename = f"desprendible_{args.user}_{reference_date.strftime('%Y_%m')}.html"
        file_path = renderer.save_to_file(content, filename)
        print(f"\n    📄 Desprendible creado: {file_path}")


def run_year(args, work_days, base_salary, payroll_config):
    year = args.year
    if not datetime.MINYEAR < year <= datetime.MAXYEAR:
        raise InvalidInputError(f"Año inválido: {year}")
    print(f"\n--- REPORTE ANUAL DE NÓMINA ({year}) ---")
    warn_unsupported_year(year)

    print("\n>>> FASE 2: Liquidando los 12 meses...")
    report = ColombiaPayrollEngine.calculate_annual_report(
        work_days, base_salary, year, payroll_config)

    print("\n>>> FASE 3: Resumen anual...")
    print_annual_report(report)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=Config.LOG_LEVEL,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        print(">>> FASE 1: Cargando datos del usuario...")
        client = JsonStoreClient(args.data)
        repo = WorkDayRepository(client)

        work_days = repo.get_work_days(args.user)
        base_salary = repo.get_base_salary(args.user)
        payroll_config = repo.get_payroll_config(args.user)
        print(f"    {len(work_days)} días registrados. Salario base: {format_cop(base_salary)}")

        if args.year:
            run_year(args, work_days, base_salary, payroll_config)
        else:
            run_month(args, repo, work_days, base_salary, payroll_config)

        print("\n--- PROCESO COMPLETADO ---")
        return 0

    except (InvalidInputError, RecordNotFoundError) as e:
        print(f"❌ Error: {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ Error crítico con el archivo de datos: {e}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
