from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class ConsumptionStats(BaseModel):
    count: int = 0
    total: float = 0
    mean: float = 0
    median: float = 0
    min: float = 0
    max: float = 0
    std_dev: float = 0
    q25: float = 0
    q75: float = 0


class BillingStats(BaseModel):
    total_bills: int = 0
    total_amount: float = 0
    average_amount: float = 0
    paid_amount: float = 0
    unpaid_amount: float = 0
    overdue_amount: float = 0
    payment_rate: int = 0


class TrendResult(BaseModel):
    trend: str = "stable"
    slope: float = 0
    strength: float = 0


class ConsumptionTrend(BaseModel):
    trend: str = "stable"
    change: float = 0
    readings: int = 0
    first_reading: date | None = None
    last_reading: date | None = None


class MonthlyConsumption(BaseModel):
    month: str  # 'YYYY-MM'
    total_consumption: float = 0
    reading_count: int = 0
    average_consumption: float = 0


class ConsumptionAlert(BaseModel):
    should_alert: bool = False
    type: str = ""
    message: str = ""
    severity: str = ""


class ConsumptionSummary(BaseModel):
    stats: ConsumptionStats
    trend: TrendResult
