import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core - Shared Services'

    def ready(self):
        from .errorlog import ErrorLogService
        from .ratelimit import FixedWindowRateLimiter

        self.rate_limiter = FixedWindowRateLimiter()
        self.error_log = ErrorLogService(max_entries=100)

        store = settings.STORE
        if not settings.DEBUG:
            for name in ('SECRET_KEY', 'DATABASE_URL'):
                if not store['ENV_PRESENT'].get(name):
                    logger.warning(f"Missing environment variable {name}, falling back to defaults")
