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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./documents.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Currencies accepted on documents, with their minor-unit count
    CURRENCY_MINOR_UNITS = data.get(
        "CURRENCY_MINOR_UNITS",
        {
            "INR": 2,
            "USD": 2,
            "EUR": 2,
            "GBP": 2,
            "AED": 2,
            "AUD": 2,
            "CAD": 2,
            "SGD": 2,
            "JPY": 0,
            "KRW": 0,
        },
    )

    # Document numbering: {prefix}-{year}-{counter:06d}
    DOCUMENT_NUMBER_PREFIXES = data.get(
        "DOCUMENT_NUMBER_PREFIXES",
        {"invoice": "INV", "proposal": "PRO", "contract": "CON"},
    )

    # Notifications
    NOTIFICATION_EMAIL = data.get("NOTIFICATION_EMAIL", "team@agency.example")
    NOTIFICATION_FROM = data.get("NOTIFICATION_FROM", "Agency <notifications@agency.example>")
    EMAIL_API_URL = data.get("EMAIL_API_URL", None)  # e.g. https://api.resend.com/emails
    EMAIL_API_KEY = data.get("EMAIL_API_KEY", "")
    ADMIN_URL = data.get("ADMIN_URL", "http://localhost:3000/admin")

    # Rendered documents
    COMPANY_NAME = data.get("COMPANY_NAME", "Agency")
    COMPANY_ADDRESS = data.get("COMPANY_ADDRESS", "")
