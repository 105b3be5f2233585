"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Voice Relay settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        stt_provider: Which speech-to-text backend the relay forwards to.
        deepgram_api_key: Provider credential. Never committed to source.
        default_audio_mime_type: Content type assumed when the client omits one.
        api_base_url: Relay URL used by the Streamlit client.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Speech-to-text provider ---
    stt_provider: str = "deepgram"

    # Deepgram settings
    deepgram_api_key: str = ""  # Required; set DEEPGRAM_API_KEY
    deepgram_base_url: str = "https://api.deepgram.com"
    deepgram_model: str = "nova-2"
    deepgram_smart_format: bool = True
    provider_timeout: float = 60.0  # Seconds to wait for the provider

    # --- Audio ---
    default_audio_mime_type: str = "audio/webm"  # Container recorded by browsers
    fragment_size: int = 32000  # Bytes per captured fragment fed to the recorder

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 8000
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:3000",  # Dev frontend
    ]

    # --- Client ---
    api_base_url: str = "http://localhost:8000"
    client_timeout: float = 90.0


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
