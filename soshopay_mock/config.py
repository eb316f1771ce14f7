"""Configuration management using Pydantic Settings"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Record store
    database_url: str = "sqlite:///./soshopay_mock.db"
    dataset_path: Path = Path(__file__).resolve().parent / "data" / "db.json"
    seed_on_startup: bool = True

    # Service
    service_name: str = "soshopay-mock"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    # Auth
    country_calling_code: str = "263"  # Zimbabwe
    access_token_ttl_seconds: int = 3600
    refresh_token_ttl_seconds: int = 86400

    # Simulated network latency, 0 disables it
    latency_min_ms: int = 0
    latency_max_ms: int = 0

    receipt_base_url: str = "http://localhost:8080/receipts"


settings = Settings()
