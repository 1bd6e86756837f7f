from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load .env for local dev; real deployments pass env vars directly
load_dotenv(override=False)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Config(BaseSettings):
    """
    Engine configuration loaded from environment variables.
    Uses pydantic for validation and parsing.
    """

    LOG_LEVEL: str = Field("INFO", description="Root log level used by setup_logging")
    TREND_WINDOW: int = Field(
        10, ge=3, description="Number of sessions kept in LiftState trend windows"
    )
    RED_FLAG_SUPPRESS_DAYS: int = Field(
        30, ge=0, description="Days a dismissed severity-4 red flag stays hidden for a region"
    )
    RAMP_UP_DAYS: int = Field(
        14, ge=1, description="Days without training before a ramp-up restart is suggested"
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        level = str(v or "INFO").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return level


SETTINGS = Config()
