from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from dotenv import load_dotenv


CONFIG_DIR = Path(__file__).resolve().parent
# .env lives in the project root (two levels up from app/core)
PROJECT_ROOT = CONFIG_DIR.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / '.env'

load_dotenv(ENV_FILE_PATH)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding='utf-8',
        extra='ignore'
    )

    DEBUG_MODE: bool = False

    # Generation service
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Resume export
    RESUME_EXPORT_FILENAME: str = "Prepify_Resume.docx"

    # In-memory sessions: idle ones are evicted, and the oldest when the cap is hit
    SESSION_TTL_SECONDS: int = 3600
    MAX_SESSIONS: int = 1000

    # CORS
    CORS_ALLOW_ORIGINS: list[str] = ["*"]


settings = Settings()
