# backend-server/app/core/config.py
from pydantic_settings import BaseSettings; from dotenv import load_dotenv
load_dotenv()
class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./windryft.db"
    JWT_SECRET_KEY: str = "change-me-in-production"; JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"; PORT: int = 8000

    # AI vendors; a missing key puts that vendor in fallback mode
    GEMINI_API_KEY: str | None = None; ANTHROPIC_API_KEY: str | None = None; DEEPSEEK_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-1.5-pro"
    ANTHROPIC_MODEL: str = "claude-3-7-sonnet-20250219"
    DEEPSEEK_MODEL: str = "deepseek-chat"
    AI_REQUEST_TIMEOUT: float = 30.0

    SEED_DEFAULT_DATA: bool = True
    DEMO_USER_PASSWORD: str = "password"
settings = Settings()
