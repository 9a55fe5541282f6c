import os
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(BASE_DIR / ".env")

# Application definition

INSTALLED_APPS = [
    "corsheaders",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "apps.voucher",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# Callers are not authenticated; the voucher form is served publicly.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
        "rest_framework.parsers.JSONParser",
    ],
    "UNAUTHENTICATED_USER": None,
}

LOG_DIR = os.getenv("LOG_DIR", os.path.join(BASE_DIR, "logs"))
os.makedirs(LOG_DIR, exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "INFO",  # INFO+ only
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
        "voucher_file": {
            "level": "DEBUG",
            "class": "concurrent_log_handler.ConcurrentRotatingFileHandler",
            "filename": os.path.join(LOG_DIR, "voucher.log"),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "verbose",
        },
        "scheduler_file": {
            "level": "DEBUG",
            "class": "concurrent_log_handler.ConcurrentRotatingFileHandler",
            "filename": os.path.join(LOG_DIR, "scheduler.log"),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "verbose",
        },
        "app_file": {
            "level": "DEBUG",
            "class": "concurrent_log_handler.ConcurrentRotatingFileHandler",
            "filename": os.path.join(LOG_DIR, "application.log"),  # catch-all
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "verbose",
        },
    },
    "loggers": {
        # voucher writes to voucher_file, and bubbles up to root
        "apps.voucher": {
            "handlers": ["voucher_file"],
            "level": "DEBUG",
            "propagate": True,
        },
        "apscheduler": {
            "handlers": ["scheduler_file"],
            "level": "INFO",
            "propagate": True,
        },
        # googleapiclient is chatty at DEBUG
        "googleapiclient.discovery_cache": {
            "level": "ERROR",
            "propagate": True,
        },
    },
    "root": {
        "handlers": ["console", "app_file"],
        "level": "DEBUG",
    },
}

ROOT_URLCONF = "voucher_backend.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "voucher_backend.wsgi.application"

# The service owns no data; the database only satisfies Django's app registry.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    },
}

# Internationalization
# https://docs.djangoproject.com/en/5.0/topics/i18n/

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "Asia/Kolkata")
USE_I18N = True
USE_TZ = True

# Static files (the voucher form and the category logos)
STATIC_URL = "/static/"
STATICFILES_DIRS = [
    BASE_DIR / "public",
] if (BASE_DIR / "public").is_dir() else []

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

SECRET_KEY = os.getenv("SECRET_KEY")

APPEND_SLASH = False

# ===========================
# CUSTOM SETTINGS
# ===========================

PORT = int(os.getenv("PORT", "3000"))

GOOGLE_CREDENTIALS_PATH = os.getenv(
    "GOOGLE_CREDENTIALS_PATH", os.path.join(BASE_DIR, "credentials.json")
)

VOUCHER_SPREADSHEET_IDS = {
    "Contentstack": os.getenv("SPREADSHEET_ID_CONTENTSTACK", ""),
    "Surfboard": os.getenv("SPREADSHEET_ID_SURFBOARD", ""),
    "RawEngineering": os.getenv("SPREADSHEET_ID_RAWENGINEERING", ""),
}

DRIVE_FOLDER_ID = os.getenv("DRIVE_FOLDER_ID", "")

VOUCHER_LOGO_DIR = os.getenv("VOUCHER_LOGO_DIR", os.path.join(BASE_DIR, "public"))
VOUCHER_TMP_DIR = os.getenv("VOUCHER_TMP_DIR", os.path.join(BASE_DIR, "tmp"))

# Email (approval notifications)
EMAIL_BACKEND = os.getenv(
    "EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend"
)
EMAIL_HOST = os.getenv("EMAIL_HOST", "smtp.gmail.com")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", os.getenv("EMAIL_USER", ""))
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", os.getenv("EMAIL_PASS", ""))
EMAIL_USE_TLS = os.getenv("EMAIL_USE_TLS", "True").lower() == "true"
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", EMAIL_HOST_USER or "webmaster@localhost")
APPROVER_EMAIL = os.getenv("APPROVER_EMAIL", "approver@example.com")

# Keep-warm pinger
KEEP_WARM_ENABLED = os.getenv("KEEP_WARM_ENABLED", "False").lower() == "true"
KEEP_WARM_URL = os.getenv("KEEP_WARM_URL", f"http://localhost:{PORT}/ping")
KEEP_WARM_INTERVAL_SECONDS = int(os.getenv("KEEP_WARM_INTERVAL_SECONDS", "30"))


def validate_required_settings():
    """Validate that all required settings are properly configured."""
    required_settings = {
        "SECRET_KEY": SECRET_KEY,
        "GOOGLE_CREDENTIALS_PATH": GOOGLE_CREDENTIALS_PATH,
        "DRIVE_FOLDER_ID": DRIVE_FOLDER_ID,
    }

    missing_settings = [key for key, value in required_settings.items() if not value]

    if not any(VOUCHER_SPREADSHEET_IDS.values()):
        missing_settings.append("SPREADSHEET_ID_*")

    if missing_settings:
        raise ImproperlyConfigured(
            f"The following required settings are missing or empty: {', '.join(missing_settings)}\n"
            f"Please check your .env file and ensure all required settings are configured."
        )
