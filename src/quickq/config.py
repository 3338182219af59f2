from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the absolute path to the project root
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_DATA_DIR = PROJECT_ROOT / "data"


class Settings(BaseSettings):
    """
    Centralized runtime configuration for the QuickQ session core.
    All defaults are sensible for dev-mode; ops override via ENV (QUICKQ_ prefix).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="QUICKQ_",
        extra="ignore",
        populate_by_name=True,
    )

    # --- Remote API ---
    api_base_url: str = Field(default="https://quickq69-732728700948.us-central1.run.app/")
    connect_timeout: float = Field(default=30.0)
    read_timeout: float = Field(default=30.0)

    # --- Job search ---
    search_timeout_seconds: float = Field(default=180.0)
    search_result_limit: int = Field(default=6)
    featured_jobs_query: str = Field(
        default="Software Engineer Google Apple Microsoft Amazon Meta Netflix"
    )

    # --- Feedback retries ---
    feedback_max_retries: int = Field(default=3)
    feedback_retry_delay: float = Field(default=1.0)  # seconds

    # --- Local storage ---
    job_cache_path: str = Field(default=str(DEFAULT_DATA_DIR / "job_cache.db"))
    session_store_path: str = Field(default=str(DEFAULT_DATA_DIR / "session_store.db"))

    # --- Logging ---
    # Unprefixed names are accepted too, matching LOG_LEVEL / LOG_DIR in .env
    log_level: str = Field(
        default="INFO", validation_alias=AliasChoices("QUICKQ_LOG_LEVEL", "LOG_LEVEL")
    )
    log_dir: str = Field(
        default=str(PROJECT_ROOT / "logs"),
        validation_alias=AliasChoices("QUICKQ_LOG_DIR", "LOG_DIR"),
    )

    # --- Local session API ---
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000)


# Create a singleton instance
settings = Settings()
