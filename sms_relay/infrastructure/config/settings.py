"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from sms_relay.domain.errors import ConfigurationError


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""
    twilio_validate_signature: bool = False
    openai_api_key: str = ""
    openai_assistant_id: str = ""  # Required, startup aborts without it
    openai_timeout_seconds: int = 30
    lead_notification_phone: str = "+17478375004"
    session_ttl_seconds: int = 86400  # 24 hours default
    session_sweep_interval_seconds: int = 3600
    run_poll_interval_seconds: float = 1.0
    run_max_polls: int = 120

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )


settings = Settings()


def ensure_required_settings(config: Settings = settings) -> None:
    """
    Check settings the process cannot run without.

    Args:
        config: Settings instance to check (defaults to the global settings)

    Raises:
        ConfigurationError: If OPENAI_ASSISTANT_ID is not set
    """
    if not config.openai_assistant_id:
        raise ConfigurationError("OPENAI_ASSISTANT_ID environment variable is not set!")
