"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "SHEET_INSIGHTS_",
    }

    # Analysis limits
    max_correlation_columns: int = 50  # numeric columns scanned pairwise
    max_rows: int = 100_000  # larger uploads are rejected with 413
    preview_rows: int = 10

    # API
    cors_origins: str = "*"  # comma-separated

    # Logging
    log_level: str = "INFO"


settings = Settings()
