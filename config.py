import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    DATA_FILE = os.getenv('NOMINA_DATA_FILE', 'nomina_data.json')
    OUTPUT_DIR = os.getenv('NOMINA_OUTPUT_DIR', 'output_payslips')
    DEFAULT_BASE_SALARY = float(os.getenv('NOMINA_DEFAULT_BASE_SALARY', '2416500'))
    LOG_LEVEL = os.getenv('NOMINA_LOG_LEVEL', 'INFO')

    # Minimum wage, transport allowance and UVT per year (annual decrees / DIAN resolution)
    ANNUAL_PARAMETERS = {
        2024: {'minimum_wage': 1300000, 'transport_allowance': 162000, 'uvt': 47065},
        2025: {'minimum_wage': 1423500, 'transport_allowance': 200000, 'uvt': 49799},
        2026: {'minimum_wage': 1750905, 'transport_allowance': 249095, 'uvt': 52374},
    }

    # Art. 168 CST
    SURCHARGE_RATES = {
        'NIGHT': 0.35,
        'EXTRA_DAY': 0.25,
        'EXTRA_NIGHT': 0.75,
    }

    # Ley 2101 de 2021: (effective from, weekly hours)
    WEEKLY_HOURS_SCHEDULE = [
        ('2023-07-15', 47),
        ('2024-07-15', 46),
        ('2025-07-15', 44),
        ('2026-07-15', 42),
    ]
    WEEKLY_HOURS_BEFORE_REFORM = 48

    # Ley 2466 de 2025: (effective from, Sunday/holiday surcharge)
    SUNDAY_HOLIDAY_SCHEDULE = [
        ('2026-07-01', 0.90),
        ('2027-07-01', 1.00),
    ]
    SUNDAY_HOLIDAY_BASE_RATE = 0.80

    NIGHT_LAW_CHANGE_DATE = '2025-12-25'
    NIGHT_START_OLD = 21
    NIGHT_START_NEW = 19
    NIGHT_END = 6

    SPECIAL_SHIFT_RATES = {
        'INCAPACIDAD_DAYS_1_2': 1.0,
        'INCAPACIDAD_DAYS_3_90': 0.6667,
        'INCAPACIDAD_DAYS_91_180': 0.5,
        'ARL': 1.0,
        'LICENCIA_REMUNERADA': 1.0,
        'LICENCIA_NO_REMUNERADA': 0.0,
    }

    PORCENTAJES_EMPLEADO = {
        'SALUD': 0.04,
        'PENSION': 0.04,
    }

    PORCENTAJES_EMPLEADOR = {
        'SALUD': 0.085,
        'PENSION': 0.12,
        'CAJA': 0.04,
        'SENA': 0.02,
        'ICBF': 0.03,
    }

    PORCENTAJES_PROVISION = {
        'PRIMA': 0.0833,
        'CESANTIAS': 0.0833,
        'INTERESES_CESANTIAS': 0.12,
        'VACACIONES': 0.0417,
    }

    ARL_RATES = {
        1: 0.00522,
        2: 0.01044,
        3: 0.02436,
        4: 0.04350,
        5: 0.06960,
    }

    # Fondo de Solidaridad Pensional: (from SMLV multiple, rate)
    FSP_TABLE = [
        (4, 0.010),
        (16, 0.012),
        (17, 0.014),
        (18, 0.016),
        (19, 0.018),
        (20, 0.020),
    ]

    # Art. 383 E.T., ranges in UVT
    WITHHOLDING_TABLE = [
        {'from': 0, 'to': 95, 'rate': 0.0, 'base': 0},
        {'from': 95, 'to': 150, 'rate': 0.19, 'base': 0},
        {'from': 150, 'to': 360, 'rate': 0.28, 'base': 10},
        {'from': 360, 'to': 640, 'rate': 0.33, 'base': 69},
        {'from': 640, 'to': 945, 'rate': 0.35, 'base': 162},
        {'from': 945, 'to': 2300, 'rate': 0.37, 'base': 268},
        {'from': 2300, 'to': float('inf'), 'rate': 0.39, 'base': 770},
    ]

    WITHHOLDING_CAPS_UVT = {
        'DEPENDIENTES': 32,
        'MEDICINA_PREPAGADA': 16,
        'INTERESES_VIVIENDA': 100,
        'RENTA_EXENTA': 240,
    }
    DEPENDENTS_PERCENTAGE = 0.10
    EXEMPT_INCOME_PERCENTAGE = 0.25

    TRANSPORT_MAX_SMLV = 2
    EXONERATION_MAX_SMLV = 10
