from pathlib import Path

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./webpulse.db"

    PORT: int = 3001
    ENVIRONMENT: str = "development"
    CLIENT_DIST: Path = Path("client/dist")
    LOG_LEVEL: str = "INFO"

    # Security
    SECRET_KEY: str = "mysecretssshhhhhhh"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 120

    class Config:
        env_file = ".env"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"
