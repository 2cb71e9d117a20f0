from __future__ import annotations

import logging
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from aquabill.constants import (
    ABNORMAL_CONSUMPTION_MULTIPLIER,
    HIGH_CONSUMPTION_THRESHOLD,
    TREND_CHANGE_THRESHOLD,
    TZ,
    billing_period,
)
from aquabill.models import round_half_up, to_number
from aquabill.models.reading import MeterReading
from aquabill.models.stats import (
    ConsumptionAlert,
    ConsumptionSummary,
    ConsumptionTrend,
    MonthlyConsumption,
)
from aquabill.repositories.base import ConnectionRepository, ReadingRepository
from aquabill.services import statistics

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(TZ).date()


def is_high_consumption(units_consumed) -> bool:
    return to_number(units_consumed) > HIGH_CONSUMPTION_THRESHOLD


def _within(readings: list[MeterReading], months: int, today: date) -> list[MeterReading]:
    cutoff = today - relativedelta(months=months)
    return [r for r in readings if r.reading_date is not None and r.reading_date >= cutoff]


class ConsumptionService:
    def __init__(self, reading_repo: ReadingRepository, connection_repo: ConnectionRepository) -> None:
        self.reading_repo = reading_repo
        self.connection_repo = connection_repo

    def _recent(self, connection_id: int, months: int, today: date | None) -> list[MeterReading]:
        readings = self.reading_repo.list_by_connection(connection_id)
        return _within(readings, months, today or _today())

    def average_consumption(self, connection_id: int, months: int = 6, today: date | None = None) -> float:
        recent = self._recent(connection_id, months, today)
        if not recent:
            return 0
        return round_half_up(sum(r.units_consumed for r in recent) / len(recent))

    def is_abnormal_consumption(self, units_consumed, connection_id: int, today: date | None = None) -> bool:
        average = self.average_consumption(connection_id, months=3, today=today)
        if average == 0:
            return is_high_consumption(units_consumed)
        return to_number(units_consumed) > average * ABNORMAL_CONSUMPTION_MULTIPLIER

    def consumption_trend(self, connection_id: int, months: int = 6, today: date | None = None) -> ConsumptionTrend:
        recent = sorted(self._recent(connection_id, months, today), key=lambda r: r.reading_date)
        if len(recent) < 2:
            return ConsumptionTrend(readings=len(recent))

        first, last = recent[0], recent[-1]
        change = statistics.percentage_change(first.units_consumed, last.units_consumed)

        label = "stable"
        if change > TREND_CHANGE_THRESHOLD:
            label = "increasing"
        elif change < -TREND_CHANGE_THRESHOLD:
            label = "decreasing"

        return ConsumptionTrend(
            trend=label,
            change=change,
            readings=len(recent),
            first_reading=first.reading_date,
            last_reading=last.reading_date,
        )

    def monthly_consumption(self, user_id: int, months: int = 6, today: date | None = None) -> list[MonthlyConsumption]:
        connection_ids = [c.id for c in self.connection_repo.list_by_user(user_id) if c.id is not None]
        readings = _within(self.reading_repo.list_by_connections(connection_ids), months, today or _today())

        by_month: dict[str, list[float]] = {}
        for reading in readings:
            by_month.setdefault(billing_period(reading.reading_date), []).append(reading.units_consumed)

        return [
            MonthlyConsumption(
                month=month,
                total_consumption=sum(units),
                reading_count=len(units),
                average_consumption=round_half_up(sum(units) / len(units)),
            )
            for month, units in sorted(by_month.items())
        ]

    def check_alert(self, units_consumed, connection_id: int, today: date | None = None) -> ConsumptionAlert:
        high = is_high_consumption(units_consumed)
        abnormal = self.is_abnormal_consumption(units_consumed, connection_id, today)
        if not (high or abnormal):
            return ConsumptionAlert()
        return ConsumptionAlert(
            should_alert=True,
            type="High Consumption",
            message=f"High consumption detected: {units_consumed} units for connection {connection_id}",
            severity="high" if high else "medium",
        )

    def consumption_summary(self, connection_id: int | None = None) -> ConsumptionSummary:
        if connection_id is None:
            readings = self.reading_repo.list_all()
        else:
            readings = self.reading_repo.list_by_connection(connection_id)
        readings = sorted(readings, key=lambda r: (r.reading_date or date.min))
        return ConsumptionSummary(
            stats=statistics.consumption_stats(readings),
            trend=statistics.trend([r.units_consumed for r in readings]),
        )

    def record_reading(self, reading: MeterReading, today: date | None = None) -> tuple[MeterReading, ConsumptionAlert]:
        """Store a reading and check it against the connection's recent usage.

        The alert is computed before the reading is stored so the new value
        does not count towards its own baseline.
        """
        alert = ConsumptionAlert()
        if reading.connection_id is not None:
            alert = self.check_alert(reading.units_consumed, reading.connection_id, today)

        created = self.reading_repo.create(reading)
        logger.info(
            "Reading recorded: id=%s, connection=%s, units=%s",
            created.id,
            created.connection_id,
            created.units_consumed,
        )
        if alert.should_alert:
            logger.warning(alert.message)
        return created, alert
