"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "hive-assess"
    debug: bool = False
    log_level: str = "INFO"

    # Scheduling: days until the next action, by risk level
    interval_critical_days: int = 3
    interval_high_days: int = 7
    interval_medium_days: int = 14
    interval_low_days: int = 21
    default_interval_days: int = 14

    # Scheduling: upper bounds by inspection / feeding type
    disease_check_cap_days: int = 7
    treatment_cap_days: int = 5
    emergency_feeding_cap_days: int = 3

    # Risk tie-break, expressed on the percentage-of-maximum scale
    risk_critical_below: float = 30.0
    risk_high_below: float = 50.0
    risk_medium_below: float = 70.0

    model_config = {"env_prefix": "HIVE_ASSESS_"}


settings = Settings()
