"""Configuration management for bucketfs."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    # "json" or "console"
    log_format: str = "json"
    otel_enabled: bool = False
    otel_service_name: str = "bucketfs"
    otel_exporter_endpoint: str = "http://localhost:4317"

    default_region: str = "us-east-1"
    app_name: str = "bucketfs"

    # Producer side of a listing blocks once this many entries are waiting
    listing_queue_size: int = 1
    listing_poll_interval: float = 0.1

    model_config = {
        "env_prefix": "BUCKETFS_",
        "case_sensitive": False,
    }


settings = Settings()
