# Engine constants
MONTHS_PER_YEAR = 12
SAFE_WITHDRAWAL_RATE = 0.04  # "4% rule", annual
SOLVER_ITERATIONS = 60
SOLVER_LOWER_BOUND = 1.0
SOLVER_UPPER_DIVISOR = 10.0
SOLVER_MAX_WIDENINGS = 200
MAX_HORIZON_YEARS = 100
PROJECTION_CACHE_SIZE = 256

# Default inputs (the values the calculator opens with)
DEFAULTS = {
    "years": 30,
    "annualReturnPct": 10.0,
    "monthlyContribution": 1000.0,
    "inflationPct": 5.0,
    "retirementYears": 25,
    "targetMonthlyIncomeToday": 5000.0,
    "adjustContributionForInflation": True,
}

# Currency display: symbol, separator after symbol, thousands separator
CURRENCY_LOCALES = {
    "pt-BR": {"symbol": "R$", "separator": "\u00a0", "group": "."},
    "en-US": {"symbol": "$", "separator": "", "group": ","},
    "en-GB": {"symbol": "£", "separator": "", "group": ","},
}
DEFAULT_LOCALE = "pt-BR"

# Flask settings; override with RETIREMENT_<NAME> environment variables
FLASK_SETTINGS = {
    "CORS_ORIGINS": [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    "LOG_LEVEL": "INFO",
    "LOCALE": DEFAULT_LOCALE,
}
