from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from aquabill.settings import settings


class TariffConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate_per_unit: float = Field(default=5.50, gt=0)
    tax_rate: float = Field(default=0.08, ge=0, lt=1)
    service_charge: float = Field(default=10.00, ge=0)
    due_days: int = Field(default=30, gt=0)


def default_tariff() -> TariffConfig:
    """Tariff built from the AQUABILL_* settings."""
    return TariffConfig(
        rate_per_unit=settings.rate_per_unit,
        tax_rate=settings.tax_rate,
        service_charge=settings.service_charge,
        due_days=settings.due_days,
    )
