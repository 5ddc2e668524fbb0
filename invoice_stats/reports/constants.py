"""
Reporting Constants
Financial conventions shared by every report calculation.
"""

from decimal import Decimal

# Totals are tax-inclusive at 5%
TAX_RATE = Decimal("0.05")
TAX_MULTIPLIER = Decimal("1") + TAX_RATE

# Unpaid invoices older than this many days are reported as overdue
OVERDUE_AFTER_DAYS = 30

ZERO = Decimal("0")
CENTS = Decimal("0.01")

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Status distribution colours
PIE_COLORS = {
    "Paid": "#22c55e",
    "Pending": "#f97316",
    "Overdue": "#ef4444",
}
