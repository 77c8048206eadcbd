"""Function-level cache decorators.

These decorators memoize plain synchronous functions in any driver
implementing the cache contract.
"""

import functools
import inspect
import re
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from kvcache.core.interfaces.cache import ICache
from kvcache.utils.hashing import hash_value

F = TypeVar("F", bound=Callable[..., Any])

# Module-level cache reference
_cache: ICache | None = None
_key_prefix: str = "kvcache"


def configure(cache: ICache, key_prefix: str = "kvcache") -> None:
    """Configure the cache used by decorators.

    Must be called before @cached or @invalidates have any effect.

    Args:
        cache: The cache driver to use.
        key_prefix: Prefix for keys built from function calls.

    Example:
        configure(LocalFileCache("storage/cache"))
    """
    global _cache, _key_prefix
    _cache = cache
    _key_prefix = key_prefix


def get_cache() -> ICache | None:
    """Get the configured cache.

    Returns:
        The configured cache, or None if not configured.
    """
    return _cache


def cached(
    ttl: timedelta | None = None,
    key: str | Callable[..., str] | None = None,
) -> Callable[[F], F]:
    """Decorator for caching function results.

    Caches the result of a function based on its arguments. A None
    result is never cached, so the function runs again next time.

    Args:
        ttl: Time-to-live for cached results. Uses driver default if None.
        key: Custom cache key or function to generate key.
            If string, supports {arg_name} interpolation.
            If callable, receives (*args, **kwargs) and returns key string.

    Returns:
        Decorated function.

    Example:
        @cached(ttl=timedelta(minutes=10), key="user:{id}")
        def get_user(id: str) -> dict:
            return db.get_user(id)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if _cache is None:
                # Cache not configured, execute directly
                return func(*args, **kwargs)

            cache_key = _build_cache_key(func, args, kwargs, key)

            item = _cache.get(cache_key)
            if item is not None:
                return item.value

            result = func(*args, **kwargs)
            _cache.set(cache_key, result, ttl)
            return result

        return wrapper  # type: ignore

    return decorator


def invalidates(
    keys: list[str],
) -> Callable[[F], F]:
    """Decorator for deleting cache entries after a write.

    Executes the decorated function and then deletes the listed keys.

    Args:
        keys: Keys to delete. Supports {arg_name} interpolation.

    Returns:
        Decorated function.

    Example:
        @invalidates(keys=["user:{id}"])
        def update_user(id: str, data: dict) -> dict:
            return db.update_user(id, data)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            # Execute function first
            result = func(*args, **kwargs)

            if _cache is not None:
                arguments = _bind_arguments(func, args, kwargs)
                for template in keys:
                    _cache.delete(_interpolate_string(template, arguments))

            return result

        return wrapper  # type: ignore

    return decorator


def _build_cache_key(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    custom_key: str | Callable[..., str] | None,
) -> str:
    """Build cache key for a function call.

    Args:
        func: The function being cached.
        args: Positional arguments.
        kwargs: Keyword arguments.
        custom_key: Custom key or key builder function.

    Returns:
        The cache key string.
    """
    if custom_key is not None:
        if callable(custom_key):
            return custom_key(*args, **kwargs)
        return _interpolate_string(custom_key, _bind_arguments(func, args, kwargs))

    # Build default key from function module, name, and arguments
    module = func.__module__ or "default"
    parts = [_key_prefix, module, func.__qualname__]
    if args:
        parts.append(f"a:{hash_value(list(args))}")
    if kwargs:
        parts.append(f"k:{hash_value(kwargs)}")
    return ":".join(parts)


def _bind_arguments(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    """Map a call's arguments to parameter names, defaults included."""
    try:
        bound = inspect.signature(func).bind(*args, **kwargs)
    except (TypeError, ValueError):
        # Signature unavailable or call does not match; fall back to kwargs
        return dict(kwargs)
    bound.apply_defaults()
    return dict(bound.arguments)


def _interpolate_string(template: str, arguments: dict[str, Any]) -> str:
    """Interpolate {arg_name} placeholders in string.

    Args:
        template: String with {arg_name} placeholders.
        arguments: Call arguments by parameter name.

    Returns:
        Interpolated string.
    """
    pattern = r"\{(\w+)\}"

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in arguments:
            return str(arguments[name])
        return match.group(0)  # Keep original if not found

    return re.sub(pattern, replacer, template)
