import os
from dotenv import load_dotenv
from fastapi import Request

load_dotenv()  # charge .env


def _split(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings:
    MONGO_URL: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    DATABASE_NAME: str = os.getenv("DATABASE_NAME", "marketplace")
    ENV: str = os.getenv("ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-in-production-32-characters-min")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5000"))

    # Compte admin créé au démarrage s'il n'existe pas
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@marketplace.local").strip().lower()
    ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD")

    CORS_ORIGINS: list[str] = _split(
        os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173")
    )

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)


settings = Settings()


def get_settings(request: Request) -> Settings:
    """Dépendance FastAPI : configuration de l'application."""
    return request.app.state.settings
