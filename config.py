import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./booksphere.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # "production" hides reset links and delivery details from API responses
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    DEV_EMAIL_RETURN_URL = bool(data.get("DEV_EMAIL_RETURN_URL", False))
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    PUBLIC_BASE_URL = data.get("PUBLIC_BASE_URL", "http://localhost:8000")

    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRE_MINUTES = int(data.get("JWT_EXPIRE_MINUTES", 60 * 24 * 7))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 60))

    # SMTP delivery is used only when both EMAIL_USER and EMAIL_PASS are set
    EMAIL_HOST = data.get("EMAIL_HOST", "smtp.gmail.com")
    EMAIL_PORT = int(data.get("EMAIL_PORT", 587))
    EMAIL_USER = data.get("EMAIL_USER", "")
    EMAIL_PASS = data.get("EMAIL_PASS", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "")
    EMAIL_USE_TLS = bool(data.get("EMAIL_USE_TLS", True))
    EMAIL_TIMEOUT_SECONDS = float(data.get("EMAIL_TIMEOUT_SECONDS", 10))
    TEST_INBOX_SIZE = int(data.get("TEST_INBOX_SIZE", 100))

    @classmethod
    def is_production(cls) -> bool:
        return str(cls.ENVIRONMENT).lower() == "production"

    @classmethod
    def expose_reset_details(cls) -> bool:
        return cls.DEV_EMAIL_RETURN_URL or not cls.is_production()
