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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tenants.db")
    CREATE_TABLES = bool(data.get("CREATE_TABLES", True))
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_TTL_DAYS = int(data.get("SESSION_TTL_DAYS", 7))
    INVITATION_TTL_DAYS = int(data.get("INVITATION_TTL_DAYS", 7))
    PM_APP_URL = data.get("PM_APP_URL", "http://localhost:3000")
    LOGIN_URL = data.get("LOGIN_URL", "http://localhost:3000/login")
    SUPPORT_EMAIL = data.get("SUPPORT_EMAIL", "support@example.com")
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    EMAIL_FROM = data.get("EMAIL_FROM", "no-reply@example.com")
    ADMIN_EMAIL = data.get("ADMIN_EMAIL", "")
    ADMIN_PASSWORD = data.get("ADMIN_PASSWORD", "")
    ADMIN_NAME = data.get("ADMIN_NAME", "Platform Admin")
