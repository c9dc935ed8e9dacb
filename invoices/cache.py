"""Path-scoped caching for rendered listing data.

Query results are cached under a key that embeds the current version of the
page path they feed. Revalidating a path bumps its version, so the next visit
misses and re-fetches from the database.
"""

import hashlib
import json
import logging
from functools import wraps
from typing import Any, Callable, Optional

from django.conf import settings
from django.core.cache import cache

from .results import Redirect

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"

PATH_VERSION_KEY = "path:version:{path}"


def _version_key(path: str) -> str:
    return PATH_VERSION_KEY.format(path=path)


def path_version(path: str) -> int:
    key = _version_key(path)
    version = cache.get(key)
    if version is None:
        cache.add(key, 1, None)
        version = cache.get(key, 1)
    return version


def make_key(path: str, prefix: str, *args: Any, **kwargs: Any) -> str:
    """Generate a cache key for one query result under the path's current version."""
    key_data = f"{prefix}:" + ":".join(str(a) for a in args)
    if kwargs:
        key_data += ":" + json.dumps(kwargs, sort_keys=True, default=str)
    digest = hashlib.md5(key_data.encode()).hexdigest()
    return f"path:{path}:v{path_version(path)}:{digest}"


def cached_for_path(path: str, timeout: Optional[int] = None):
    """Decorator caching a fetch function's result until `path` is revalidated."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            # args[0] is the store instance; its identity is not part of the key
            cache_key = make_key(path, func.__qualname__, *args[1:], **kwargs)
            result = cache.get(cache_key)
            if result is not None:
                return result

            result = func(*args, **kwargs)
            cache.set(
                cache_key,
                result,
                timeout if timeout is not None else settings.PATH_CACHE_TIMEOUT,
            )
            return result

        return wrapper
    return decorator


def revalidate_path(path: str) -> None:
    """Mark everything cached for `path` as stale."""
    key = _version_key(path)
    try:
        version = cache.incr(key)
    except ValueError:
        version = 2
        cache.set(key, version, None)
    logger.debug(f"Revalidated {path} (version {version})")


def signal_completion(path: str, redirect: bool = False) -> Optional[Redirect]:
    """Invalidate `path`, then hand back the navigation to perform, if any."""
    revalidate_path(path)
    if redirect:
        return Redirect(path)
    return None
