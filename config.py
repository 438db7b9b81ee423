import os

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv())


def _env_bool(name, default):
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///plantcare.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Liste d'origines séparées par des virgules, "*" pour toutes
    ALLOWED_CORS_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_CORS_ORIGINS", "*").split(",") if o.strip()]
    REMINDER_SCHEDULER_ENABLED = _env_bool("REMINDER_SCHEDULER_ENABLED", True)
    REMINDER_INTERVAL_MINUTES = int(os.getenv("REMINDER_INTERVAL_MINUTES", "60"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    PORT = int(os.getenv("PORT", "3000"))
    RESTX_MASK_SWAGGER = False
    RESTX_ERROR_404_HELP = False


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    REMINDER_SCHEDULER_ENABLED = False
    LOG_LEVEL = "WARNING"
