from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DB_URL: str = "sqlite+aiosqlite:///quotes.db"
    DB_ECHO: bool = False

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_MAX_FILE_SIZE: int = 10485760  # 10MB in bytes
    LOG_BACKUP_COUNT: int = 5
    LOG_COLORS: str = "true"
    LOG_TO_FILE: str = "true"

    # Environment
    ENVIRONMENT: str = "development"

    class Config:
        env_file = ".env"

    @property
    def colors_enabled(self) -> bool:
        return self.LOG_COLORS.strip().lower() in ("1", "true", "yes")

    @property
    def file_logging_enabled(self) -> bool:
        return self.LOG_TO_FILE.strip().lower() in ("1", "true", "yes")

settings = Settings()
