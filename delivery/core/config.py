from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Delivery_Orders"
    DATABASE_URL: str = "sqlite:///./delivery.db"
    LOG_LEVEL: str = "INFO"

    # --- Startup ---
    DB_CONNECT_RETRIES: int = 10
    DB_CONNECT_WAIT_SECONDS: int = 3

    # --- Events ---
    # Without a Redis URL events are only delivered to in-process subscribers.
    REDIS_URL: str | None = None
    EVENT_CHANNEL_PREFIX: str = "orders"
    # Subscribers run on this many background threads, off the request path.
    EVENT_HANDLER_WORKERS: int = 4

    # --- Order lifecycle ---
    # Off keeps the permissive behavior: any role-allowed status may be set again.
    STRICT_STATUS_TRANSITIONS: bool = False

    # --- Owner notifications (optional) ---
    TWILIO_ACCOUNT_SID: str | None = None
    TWILIO_AUTH_TOKEN: str | None = None
    TWILIO_FROM_NUMBER: str | None = None
    TWILIO_TIMEOUT_SECONDS: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
