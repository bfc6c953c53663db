"""
Settings do projeto de exemplo do Orderman (também usados pelos testes).
"""

from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = "example-secret-key-change-in-production"

DEBUG = True

ALLOWED_HOSTS = ["*"]

INSTALLED_APPS = [
    # Django contrib
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.admin",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third-party
    "unfold",
    "rest_framework",
    # Orderman core
    "orderman",
    # Example app
    "example.shop",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "example.project.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "example.project.wsgi.application"

# BEGIN IMMEDIATE: alocações concorrentes esperam o lock de escrita em vez
# de falhar com "database is locked". O banco de testes fica em arquivo para
# que threads compartilhem os mesmos dados.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
        "OPTIONS": {
            "transaction_mode": "IMMEDIATE",
            "timeout": 20,
        },
        "TEST": {
            "NAME": BASE_DIR / "test_db.sqlite3",
        },
    }
}

AUTH_PASSWORD_VALIDATORS = []

LANGUAGE_CODE = "pt-br"
TIME_ZONE = "America/Sao_Paulo"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Permissões da API vêm de ORDERMAN["DEFAULT_PERMISSION_CLASSES"]; as taxas
# abaixo valem para geração e criação de pedidos (Anon/UserRateThrottle).
REST_FRAMEWORK = {
    "DEFAULT_THROTTLE_RATES": {
        "anon": "100/hour",
        "user": "5000/hour",
    },
}

# Orderman
ORDERMAN = {
    "FORMAT": "compact-numeric",
    "PREFIX": "ORD",
    "SEQUENCE_LENGTH": 4,
    "RANDOM_LENGTH": 6,
    "MAX_RETRIES": 5,
    "RETRY_DELAY": 10,
    "RANDOM_MAX_ATTEMPTS": 10,
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "orderman": {"handlers": ["console"], "level": "WARNING"},
    },
}

# Unfold Admin
UNFOLD = {
    "SITE_TITLE": "Orderman Example",
    "SITE_HEADER": "Orderman",
    "SIDEBAR": {
        "show_search": True,
    },
}
