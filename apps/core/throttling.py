"""
DRF throttle backed by the process-wide FixedWindowRateLimiter
"""
import logging
from typing import Optional

from django.apps import apps
from django.conf import settings
from rest_framework.exceptions import Throttled
from rest_framework.throttling import BaseThrottle

from .ratelimit import FixedWindowRateLimiter, RateLimitResult, RateLimitRule
from .utils import get_client_ip

logger = logging.getLogger(__name__)

DEFAULT_SCOPE = 'standard'


class RateLimitExceeded(Throttled):
    """Throttled carrying the limiter result so the handler can emit rate headers."""

    def __init__(self, result: RateLimitResult):
        self.result = result
        super().__init__(wait=result.retry_after, detail=result.message)


def get_rule(scope: str) -> RateLimitRule:
    limits = settings.STORE_RATE_LIMITS
    config = limits.get(scope) or limits[DEFAULT_SCOPE]
    return RateLimitRule.from_config(config)


class FixedWindowThrottle(BaseThrottle):
    """
    Applies the named limit declared on the view.

    Views set `rate_limit = 'contact'` (or a per-method `rate_limits` dict);
    anything undeclared falls under the standard limit.
    """

    def __init__(self, limiter: Optional[FixedWindowRateLimiter] = None):
        self.limiter = limiter or apps.get_app_config('core').rate_limiter
        self.result = None

    def get_scope(self, request, view) -> Optional[str]:
        per_method = getattr(view, 'rate_limits', None) or {}
        if request.method in per_method:
            return per_method[request.method]
        return getattr(view, 'rate_limit', DEFAULT_SCOPE)

    def allow_request(self, request, view):
        scope = self.get_scope(request, view)
        if scope is None:
            return True

        identifier = get_client_ip(request)
        self.result = self.limiter.hit(scope, identifier, get_rule(scope))
        if not self.result.allowed:
            raise RateLimitExceeded(self.result)
        return True

    def wait(self):
        if self.result is None:
            return None
        return self.result.retry_after
