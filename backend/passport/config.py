"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Base de données (SQLite par défaut, MySQL via mysql+pymysql://...)
    DATABASE_URL: str = "sqlite:///./passport.sqlite"

    # JWT
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Cookies d'authentification
    AUTH_COOKIE_NAME: str = "authToken"
    USER_COOKIE_NAME: str = "userData"

    # Mot de passe attribué aux comptes importés sans mot de passe
    DEFAULT_IMPORT_PASSWORD: str = "changeme"

    # CORS — front Next.js en local par défaut
    CORS_ORIGIN_REGEX: str = r"https?://(localhost|127\.0\.0\.1)(:\d+)?"

    # Environnement
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


settings = Settings()
