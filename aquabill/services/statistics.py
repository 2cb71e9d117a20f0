"""Summary statistics over meter readings and bills.

Every function here is total: empty, ``None`` or malformed input returns a
zero-valued result instead of raising, so reports and tables can always
render.  Rounding follows the reporting conventions of the dashboard: two
places for most values, three for correlation and trend slope, and a whole
number for the payment rate.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from aquabill.models import round_half_up, to_number
from aquabill.models.bill import Bill, PaymentStatus
from aquabill.models.reading import MeterReading
from aquabill.models.stats import BillingStats, ConsumptionStats, TrendResult

TREND_SLOPE_THRESHOLD = 0.1


def _numbers(values: Iterable | None) -> list[float]:
    if not values:
        return []
    return [to_number(v) for v in values]


def mean(values: Iterable | None) -> float:
    numbers = _numbers(values)
    if not numbers:
        return 0
    return round_half_up(sum(numbers) / len(numbers))


def median(values: Iterable | None) -> float:
    numbers = sorted(_numbers(values))
    if not numbers:
        return 0
    mid = len(numbers) // 2
    if len(numbers) % 2 == 0:
        return round_half_up((numbers[mid - 1] + numbers[mid]) / 2)
    return round_half_up(numbers[mid])


def stddev(values: Iterable | None) -> float:
    """Population standard deviation.

    The variance is taken with ``mean()``, so both the centre and the
    variance are rounded to two places before the square root.
    """
    numbers = _numbers(values)
    if not numbers:
        return 0
    centre = mean(numbers)
    variance = mean([(n - centre) * (n - centre) for n in numbers])
    return round_half_up(math.sqrt(variance))


def percentage_change(old_value, new_value) -> float:
    old_value = to_number(old_value)
    new_value = to_number(new_value)
    if old_value == 0:
        return 100 if new_value > 0 else 0
    return round_half_up((new_value - old_value) / old_value * 100)


def growth_rate(values: Sequence | None) -> float:
    if not values or len(values) < 2:
        return 0
    return percentage_change(values[0], values[-1])


def moving_average(values: Sequence | None, window: int = 3) -> list[float]:
    numbers = _numbers(values)
    window = int(to_number(window))
    if window < 1 or len(numbers) < window:
        return []
    return [mean(numbers[i - window + 1 : i + 1]) for i in range(window - 1, len(numbers))]


def percentile(values: Iterable | None, pct: float) -> float:
    """Percentile by linear interpolation between closest ranks."""
    numbers = sorted(_numbers(values))
    if not numbers:
        return 0
    # percentages outside 0-100 pin to the smallest or largest value
    index = min(max(to_number(pct) / 100, 0), 1) * (len(numbers) - 1)
    lower_index = math.floor(index)
    if index == lower_index:
        return numbers[int(index)]
    lower = numbers[lower_index]
    upper = numbers[math.ceil(index)]
    weight = index - lower_index
    return round_half_up(lower * (1 - weight) + upper * weight)


def correlation(x: Sequence | None, y: Sequence | None) -> float:
    """Pearson correlation coefficient, rounded to three places."""
    if not x or not y or len(x) != len(y):
        return 0
    xs = _numbers(x)
    ys = _numbers(y)
    n = len(xs)
    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(a * b for a, b in zip(xs, ys))
    sum_x2 = sum(a * a for a in xs)
    sum_y2 = sum(b * b for b in ys)

    numerator = n * sum_xy - sum_x * sum_y
    spread = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    # float cancellation can leave a tiny negative spread for constant series
    if not math.isfinite(spread) or spread <= 0:
        return 0
    coefficient = numerator / math.sqrt(spread)
    if not math.isfinite(coefficient):
        return 0
    return round_half_up(coefficient, 3)


def trend(values: Sequence | None) -> TrendResult:
    """Direction of a series from the slope of its least-squares line."""
    numbers = _numbers(values)
    if len(numbers) < 2:
        return TrendResult()

    index = list(range(len(numbers)))
    coefficient = correlation(index, numbers)
    slope = coefficient * (stddev(numbers) / stddev(index))

    label = "stable"
    if slope > TREND_SLOPE_THRESHOLD:
        label = "increasing"
    elif slope < -TREND_SLOPE_THRESHOLD:
        label = "decreasing"

    return TrendResult(trend=label, slope=round_half_up(slope, 3), strength=abs(coefficient))


def consumption_stats(readings: Sequence[MeterReading] | None) -> ConsumptionStats:
    if not readings:
        return ConsumptionStats()

    units = [to_number(r.units_consumed) for r in readings]
    return ConsumptionStats(
        count=len(readings),
        total=sum(units),
        mean=mean(units),
        median=median(units),
        min=min(units),
        max=max(units),
        std_dev=stddev(units),
        q25=percentile(units, 25),
        q75=percentile(units, 75),
    )


def billing_stats(bills: Sequence[Bill] | None) -> BillingStats:
    if not bills:
        return BillingStats()

    amounts = [to_number(b.amount) for b in bills]
    paid = [b for b in bills if b.payment_status == PaymentStatus.PAID.value]
    unpaid = [b for b in bills if b.payment_status == PaymentStatus.UNPAID.value]
    overdue = [b for b in bills if b.payment_status == PaymentStatus.OVERDUE.value]

    return BillingStats(
        total_bills=len(bills),
        total_amount=sum(amounts),
        average_amount=mean(amounts),
        paid_amount=sum(to_number(b.amount) for b in paid),
        unpaid_amount=sum(to_number(b.amount) for b in unpaid),
        overdue_amount=sum(to_number(b.amount) for b in overdue),
        payment_rate=int(round_half_up(len(paid) / len(bills) * 100, 0)),
    )
