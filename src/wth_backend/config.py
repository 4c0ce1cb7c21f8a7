from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_ENV: str = "development"
    APP_PORT: int = 3000

    # Google Calendar OAuth
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_REDIRECT_URI: str = ""
    GOOGLE_REFRESH_TOKEN: str = ""
    GOOGLE_CALENDAR_ID: str = "primary"
    DEFAULT_TZ: str = "Asia/Singapore"

    # LLM used for event breakdowns
    OPENAI_API_KEY: str = ""
    BREAKDOWN_MODEL: str = "gpt-4.1"

    # ElevenLabs conversational AI (outbound calls)
    ELEVEN_API_KEY: str = ""
    ELEVEN_AGENT_ID: str = ""
    ELEVEN_AGENT_PHONE_NUMBER_ID: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()


# Keys each feature needs before it can talk to its provider
CALENDAR_KEYS = ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "GOOGLE_REFRESH_TOKEN")
BREAKDOWN_KEYS = ("OPENAI_API_KEY",)
CALL_KEYS = ("ELEVEN_AGENT_ID", "ELEVEN_AGENT_PHONE_NUMBER_ID")


def missing_settings(*key_names: str, config: Settings = None) -> List[str]:
    """
    Return the names of settings that are unset or blank.

    Args:
        key_names: Setting names to check
        config: Settings instance to inspect (defaults to the module settings)

    Returns:
        List of missing setting names, in the order given
    """
    config = config or settings
    missing_keys = []
    for key_name in key_names:
        key_value = getattr(config, key_name, "")
        if not key_value or str(key_value).strip() == "":
            missing_keys.append(key_name)
    return missing_keys


def validate_required_keys(config: Settings = None) -> List[str]:
    """
    Check every provider key at once.

    Nothing is fatal here: each route reports its own misconfiguration when
    it is called, so startup only needs the list for a warning.
    """
    return missing_settings(*CALENDAR_KEYS, *BREAKDOWN_KEYS, "ELEVEN_API_KEY", *CALL_KEYS, config=config)
