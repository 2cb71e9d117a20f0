from zoneinfo import ZoneInfo

from aquabill.models.bill import BillStatus, PaymentStatus
from aquabill.settings import settings

TZ = ZoneInfo(settings.timezone)

HIGH_CONSUMPTION_THRESHOLD = 100  # units
ABNORMAL_CONSUMPTION_MULTIPLIER = 1.5
OVERDUE_THRESHOLD_DAYS = 30
TREND_CHANGE_THRESHOLD = 10  # percent

# (days past bill date, fee rate), checked in order
LATE_FEE_TIERS = ((60, 0.10), (30, 0.05), (15, 0.02))

MONTHS = {
    "01": "January",
    "02": "February",
    "03": "March",
    "04": "April",
    "05": "May",
    "06": "June",
    "07": "July",
    "08": "August",
    "09": "September",
    "10": "October",
    "11": "November",
    "12": "December",
}

STATUS_STYLES = {
    BillStatus.PAID.value: "green",
    BillStatus.UNPAID.value: "white",
    BillStatus.DUE_SOON.value: "yellow",
    BillStatus.OVERDUE.value: "red",
}

OUTSTANDING_STATUSES = (PaymentStatus.UNPAID.value, PaymentStatus.OVERDUE.value)


def format_month(ref: str) -> str:
    if not ref or "-" not in ref:
        return ref or ""
    year, month = ref.split("-")
    return f"{MONTHS.get(month, month)} {year}"


def billing_period(value) -> str | None:
    """Return the 'YYYY-MM' period for a date, or None when missing."""
    if value is None:
        return None
    return f"{value.year}-{value.month:02d}"
