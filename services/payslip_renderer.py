import os
import datetime
from jinja2 import Environment, FileSystemLoader, select_autoescape
from config import Config
from services.colombian_holidays import get_holiday_name

SHIFT_LABELS = {
    'diurno_am': 'Diurno AM',
    'tarde_pm': 'Tarde PM',
    'trasnocho': 'Trasnocho',
    'incapacidad': 'Incapacidad',
    'arl': 'ARL',
    'vacaciones': 'Vacaciones',
    'licencia_remunerada': 'Licencia remunerada',
    'licencia_no_remunerada': 'Licencia no remunerada',
    'mixto': 'Mixto',
    'descanso': 'Descanso',
    'suspendido': 'Suspendido',
}

MONTH_NAMES = ['enero', 'febrero', 'marzo', 'abril', 'mayo', 'junio', 'julio',
               'agosto', 'septiembre', 'octubre', 'noviembre', 'diciembre']


def format_cop(amount):
    """Whole pesos with dot thousands separators: ``$ 1.234.567``."""
    value = int(round(amount or 0))
    sign = '-' if value < 0 else ''
    return f"{sign}$ {abs(value):,}".replace(',', '.')


def format_percentage(value):
    return f"{value * 100:.2f}%"


class PayslipRenderer:
    def __init__(self, templates_dir=None):
        if templates_dir is None:
            templates_dir = os.path.join(
                os.path.dirname(os.path.abspath(__file__)), 'templates')

        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(['html']),
        )
        self.env.filters['cop'] = format_cop
        self.env.filters['percentage'] = format_percentage
        self.env.filters['shift_label'] = lambda value: SHIFT_LABELS.get(value, value)
        self.env.filters['holiday_name'] = get_holiday_name
        self.template = self.env.get_template('desprendible.html')

    def render(self, pay_cycle, employee_name=''):
        reference = pay_cycle.reference_date
        return self.template.render(
            employee_name=employee_name,
            period=f"{MONTH_NAMES[reference.month - 1]} {reference.year}",
            generated_at=datetime.datetime.now().strftime("%Y-%m-%d %H:%M"),
            cycle=pay_cycle,
            payroll=pay_cycle.payroll,
            days=sorted(pay_cycle.current_month_calculations, key=lambda c: c.date),
        )

    def save_to_file(self, content, filename, output_dir=None):
        output_dir = output_dir or Config.OUTPUT_DIR
        os.makedirs(output_dir, exist_ok=True)

        file_path = os.path.join(output_dir, filename)
        with open(file_path, "w", encoding='utf-8') as f:
            f.write(content)
        return file_path
