from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="AQUABILL_", extra="ignore")

    db_url: str = "sqlite:///aquabill.db"

    rate_per_unit: float = 5.50
    tax_rate: float = 0.08
    service_charge: float = 10.00
    due_days: int = 30
    due_soon_days: int = 7

    timezone: str = "UTC"

    log_level: str = "INFO"
    log_json: bool = False
    log_sql: bool = False


settings = Settings()
