from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- DB ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "coursecart"
    # full URL wins over the DB_* parts (sqlite in tests)
    DATABASE_URL: Optional[str] = None

    # --- session tokens ---
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    SESSION_TOKEN_EXPIRE_MINUTES: int = 720

    # --- cart ---
    MAX_SECTIONS_PER_COURSE: int = 2

    # --- upstream catalog ---
    CATALOG_BASE_URL: str = "https://nyu.a1liu.com/api/search"
    CATALOG_TERM: str = "fa2022"
    CATALOG_TIMEOUT_SECONDS: float = 10.0

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

settings = Settings()
