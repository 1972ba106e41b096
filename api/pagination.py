"""
Page/limit pagination that reports {<key>, total, page, limit}
"""
from typing import Dict, Any, List, Tuple

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def _positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def paginate(queryset, params, default_limit: int = DEFAULT_LIMIT) -> Tuple[List, Dict[str, Any]]:
    """Slice one page out of the queryset; bad page/limit values fall back to defaults."""
    page = _positive_int(params.get('page'), 1)
    limit = min(_positive_int(params.get('limit'), default_limit), MAX_LIMIT)
    offset = (page - 1) * limit
    total = queryset.count()
    items = list(queryset[offset:offset + limit])
    return items, {'total': total, 'page': page, 'limit': limit}
