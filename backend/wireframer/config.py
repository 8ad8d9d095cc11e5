from pydantic_settings import BaseSettings
from functools import lru_cache
import os


class Settings(BaseSettings):
    anthropic_api_key: str = ""

    # "development" exposes stack traces in failure responses
    environment: str = "production"

    # HTTP server (wireframer.main:run)
    host: str = "0.0.0.0"
    port: int = 8000

    # Generation defaults
    default_model: str = "claude-sonnet-4-5-20250929"
    generation_timeout: int = 120  # seconds
    generation_max_tokens: int = 4000
    generation_temperature: float = 0.3

    # Rendering defaults
    page_load_timeout: int = 30000  # milliseconds
    selector_timeout: int = 10000  # milliseconds
    settle_delay: int = 3000  # milliseconds
    viewport_width: int = 1200
    viewport_height: int = 800
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    )

    # Response envelope
    prompt_preview_chars: int = 500

    # Fill color for generated image placeholders
    placeholder_color: str = "#deecf9"

    class Config:
        # Look for .env in the repo root (two levels up from backend/wireframer/)
        _env_path = os.path.join(os.path.dirname(__file__), "..", "..", ".env")
        env_file = _env_path if os.path.exists(_env_path) else None
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings():
    return Settings()
