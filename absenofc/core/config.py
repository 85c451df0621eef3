from atams import AtamsBaseSettings


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL, ENCRYPTION_*, CORS_*, RATE_LIMIT_* (unused by this service)
    - LOGGING_ENABLED, LOG_TO_FILE, LOG_FILE_PATH

    All settings can be overridden via .env file or by redefining them here.
    """
    APP_NAME: str = "AbsenOfc Log Activity"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # AbsenOfc backend
    BACKEND_URL: str = "http://localhost:8080"
    BACKEND_TIMEOUT_SECONDS: int = 20

    # Export formatting
    EXPORT_TIMEZONE: str = "Asia/Jakarta"
    EXPORT_DATE_FORMAT: str = "%d/%m/%Y"
    DEFAULT_EXPORT_NAME: str = "log_activity"
    CSV_ESCAPE_QUOTES: bool = False

    # Bulk export
    EXPORT_DIR: str = "exports"
    BULK_EXPORT_DELAY_MS: int = 500


settings = Settings()
