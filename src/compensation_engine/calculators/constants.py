"""Business and statutory constants used by the calculators.

Values are fixed by policy; change them only with payroll sign-off.
"""

from decimal import Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")
CENT = Decimal("0.01")

# Salary structure
BASIC_PCT_OF_CTC = Decimal("0.50")

# Provident Fund
PF_WAGE_CEILING_MONTHLY = Decimal("15000")
PF_EMPLOYEE_RATE = Decimal("0.12")
PF_EMPLOYER_RATE = Decimal("0.12")

# State Insurance
ESI_EMPLOYEE_RATE = Decimal("0.0075")
ESI_EMPLOYER_RATE = Decimal("0.0325")

# Gratuity provision, as a share of annual basic
GRATUITY_RATE_ANNUAL = Decimal("0.0481")

# Professional tax default rule: flat amount above a monthly gross threshold
PROFESSIONAL_TAX_THRESHOLD = Decimal("25000")
PROFESSIONAL_TAX_DEFAULT = Decimal("200")

# Convergence loop
MAX_ITERATIONS = 10
CTC_TOLERANCE = Decimal("0.5")

# Payslip pro-ration
DEFAULT_WORKING_DAYS = 26

# GST on contract engagements
GST_RATES = (Decimal("5"), Decimal("12"), Decimal("18"), Decimal("28"))
CONTRACT_GST_PERCENT = Decimal("18")
