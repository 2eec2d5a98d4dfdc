"""Configuration settings for the WAVE quality-control toolkit."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    max_upload_bytes: int = 50 * 1024 * 1024  # Largest WAV accepted by POST /analyze

    # Frame analysis settings
    frame_length_ms: int = 20  # milliseconds per analysis frame
    noise_floor_power: float = 40000.0  # Linear per-sample power, compared before the log
    normalization_fraction: float = 0.75  # Leading share of samples used for DC offset / saturation

    # Logging
    log_level: str = "INFO"

    class Config:
        env_prefix = "WAVQC_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
