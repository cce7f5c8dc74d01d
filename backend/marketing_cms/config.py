import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name, default):
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Auth
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=_env_int("JWT_ACCESS_MINUTES", 15))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=_env_int("JWT_REFRESH_DAYS", 7))
    SETUP_SECRET_TOKEN = os.getenv("SETUP_SECRET_TOKEN")

    # Uploads
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.abspath("uploads"))
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024

    # Public site
    BASE_URL = os.getenv("BASE_URL", "https://grubtech.com")
    SERVICE_NAME = "marketing-cms"

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Rate limiting: scope -> (max_requests, window_seconds)
    RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", True)
    RATE_LIMITS = {
        "login": (_env_int("LOGIN_RATE_LIMIT_MAX", 20), 15 * 60),
        "lead": (_env_int("LEAD_RATE_LIMIT_MAX", 10), 60 * 60),
        "setup": (_env_int("SETUP_RATE_LIMIT_MAX", 5), 60 * 60),
        "apply": (_env_int("APPLY_RATE_LIMIT_MAX", 5), 60 * 60),
    }


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///marketing_cms.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "testing-secret-key-that-is-long-enough-for-hs256"
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SETUP_SECRET_TOKEN = "test-setup-token"
    RATE_LIMIT_ENABLED = False
    BASE_URL = "https://example.test"


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
