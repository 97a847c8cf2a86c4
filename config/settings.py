"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Logging
    log_level: str = "INFO"

    # Grid defaults
    default_variant: str = "refined"  # "baseline" | "refined" | "flat"
    default_range: int = 3  # grid runs from -range to +range
    default_total: int = 36
    max_cells: int = 60  # largest grid the builder lets a researcher lay out

    # Sweep
    sweep_ranges: list[int] = [2, 3, 4, 5, 6]
    sweep_totals: list[int] = [20, 25, 30, 35, 40, 45, 50, 55, 60]
    sweep_pause_seconds: float = 0.01  # yield between iterations so a host loop stays responsive

    # Score bands
    good_score_threshold: int = 80
    fair_score_threshold: int = 60


settings = Settings()
