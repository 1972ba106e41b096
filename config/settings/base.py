"""
Django Base Settings for the TickTee Style storefront API
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Security
SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-dev-key-change-in-production')
DEBUG = os.getenv('DEBUG', 'True').lower() == 'true'
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')

# Application definition
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third-party apps
    'rest_framework',
    'corsheaders',
    'drf_spectacular',

    # Local apps
    'apps.core',
    'apps.accounts',
    'apps.catalog',
    'apps.cart',
    'apps.orders',
    'apps.payments',
    'apps.notifications',
    'apps.contact',
    'api',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'
ASGI_APPLICATION = 'config.asgi.application'

# Database - SQLite for development, PostgreSQL for production
import dj_database_url

DATABASES = {
    'default': dj_database_url.config(
        default='sqlite:///' + str(BASE_DIR / 'db.sqlite3'),
        conn_max_age=600
    )
}

# Password validation (storefront policy lives in apps.core.utils.validate_password)
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
]

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'Asia/Karachi'
USE_I18N = True
USE_TZ = True

# Static and media files
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
MEDIA_URL = '/media/'
MEDIA_ROOT = Path(os.getenv('MEDIA_ROOT', str(BASE_DIR / 'media')))

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# REST Framework Configuration
REST_FRAMEWORK = {
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'api.authentication.StoreSessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_THROTTLE_CLASSES': [
        'apps.core.throttling.FixedWindowThrottle',
    ],
    'COERCE_DECIMAL_TO_STRING': False,
    'EXCEPTION_HANDLER': 'api.exceptions.custom_exception_handler',
}

# Fixed-window rate limits, keyed by the name a view declares in `rate_limit`
STORE_RATE_LIMITS = {
    'standard': {
        'limit': 100,
        'window_seconds': 15 * 60,
        'message': 'Too many requests. Please try again later.',
    },
    'auth': {
        'limit': 5,
        'window_seconds': 15 * 60,
        'message': 'Too many login attempts. Please try again after 15 minutes.',
    },
    'contact': {
        'limit': 3,
        'window_seconds': 60 * 60,
        'message': 'Too many contact form submissions. Please try again later.',
    },
    'orders': {
        'limit': 10,
        'window_seconds': 60 * 60,
        'message': 'Order limit reached. Please contact support if you need assistance.',
    },
    'admin': {
        'limit': 200,
        'window_seconds': 15 * 60,
        'message': 'Too many requests. Please try again later.',
    },
    'public': {
        'limit': 300,
        'window_seconds': 15 * 60,
        'message': 'Too many requests. Please try again later.',
    },
}

# Storefront configuration
GA_MEASUREMENT_ID = os.getenv('GA_MEASUREMENT_ID', '')
SENTRY_DSN = os.getenv('SENTRY_DSN', '')
LOGROCKET_APP_ID = os.getenv('LOGROCKET_APP_ID', '')

STORE = {
    'SITE_NAME': 'TickTee Style',
    'SITE_URL': os.getenv('SITE_URL', 'http://localhost:3000'),
    'CONTACT_PHONE': os.getenv('CONTACT_PHONE', '+92 300 1234567'),
    'CONTACT_EMAIL': os.getenv('CONTACT_EMAIL', 'support@ticktee-style.pk'),
    'INSTAGRAM_HANDLE': os.getenv('INSTAGRAM_HANDLE', '@ticktee.style'),
    'WALLET_NUMBER': os.getenv('WALLET_NUMBER', '03001234567'),
    'BUSINESS_HOURS': os.getenv('BUSINESS_HOURS', 'Mon-Sat, 10:00 AM - 8:00 PM'),

    # Checkout arithmetic
    'TAX_RATE': os.getenv('TAX_RATE', '0.10'),
    'SHIPPING_FEE': os.getenv('SHIPPING_FEE', '200'),
    'FREE_SHIPPING_THRESHOLD': os.getenv('FREE_SHIPPING_THRESHOLD', '5000'),
    'COD_FEE': os.getenv('COD_FEE', '200'),
    'LOW_STOCK_THRESHOLD': 10,

    # Analytics flags derived from the configured ids
    'GA_MEASUREMENT_ID': GA_MEASUREMENT_ID,
    'SENTRY_DSN': SENTRY_DSN,
    'LOGROCKET_APP_ID': LOGROCKET_APP_ID,
    'FEATURES': {
        'ANALYTICS': bool(GA_MEASUREMENT_ID),
        'ERROR_TRACKING': bool(SENTRY_DSN),
        'SESSION_REPLAY': bool(LOGROCKET_APP_ID),
    },

    'ENV_PRESENT': {
        'SECRET_KEY': bool(os.getenv('SECRET_KEY')),
        'DATABASE_URL': bool(os.getenv('DATABASE_URL')),
    },
}

# Uploads
PAYMENT_PROOF_MAX_BYTES = 5 * 1024 * 1024
PRODUCT_IMAGE_MAX_BYTES = 5 * 1024 * 1024

# E-mail
EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.console.EmailBackend')
DEFAULT_FROM_EMAIL = os.getenv('DEFAULT_FROM_EMAIL', 'TickTee Style <orders@ticktee-style.pk>')

# DRF Spectacular (OpenAPI) Configuration
SPECTACULAR_SETTINGS = {
    'TITLE': 'TickTee Style Storefront API',
    'DESCRIPTION': 'Watch catalog, cart, checkout and admin back-office',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}

# CORS Configuration
CORS_ALLOW_ALL_ORIGINS = DEBUG
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOWED_ORIGINS = [
    'http://localhost:3000',
    'http://127.0.0.1:3000',
]

# Caches
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

# Logging Configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
        'file': {
            'class': 'logging.FileHandler',
            'filename': BASE_DIR / 'logs' / 'app.log',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': os.getenv('LOG_LEVEL', 'INFO'),
    },
    'loggers': {
        'apps': {
            'handlers': ['console', 'file'],
            'level': os.getenv('LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}

# Create logs directory if it doesn't exist
(BASE_DIR / 'logs').mkdir(exist_ok=True)
