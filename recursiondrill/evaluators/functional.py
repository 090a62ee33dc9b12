"""Memoization without an evaluator object.

:func:`thread_cache` passes the cache explicitly and hands the grown cache back
with the result, in the ``(result, updated_cache)`` style. The mapping passed
in is copied once and never mutated; the returned dict belongs to the caller.

:func:`memoize` is a decorator for ordinary self-recursive functions. Because
the decorated name is rebound to the wrapper, the function's own recursive
calls already go through the cache.
"""
from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Tuple

from .cache import EvaluationCache
from .memoized import MemoizedEvaluator, _identity_key


def thread_cache(
    body: Callable[..., Any],
    args: tuple,
    cache: Optional[Mapping[Hashable, Any]] = None,
    key: Optional[Callable[..., Hashable]] = None,
) -> Tuple[Any, Dict[Hashable, Any]]:
    """Evaluate ``body`` at ``args`` and return ``(result, updated_cache)``.

    Keys of ``cache`` are ``key(*args)`` (the argument tuple by default).
    Not thread-safe: the returned dict has a single owner.
    """
    if inspect.isgeneratorfunction(body):
        raise ValueError("thread_cache takes recursive bodies, not generator bodies.")

    make_key = key if key is not None else _identity_key
    owned: Dict[Hashable, Any] = dict(cache) if cache is not None else {}

    def recurse(*sub_args: Any) -> Any:
        cache_key = make_key(*sub_args)
        if cache_key in owned:
            return owned[cache_key]
        value = body(recurse, *sub_args)
        owned[cache_key] = value
        return value

    result = recurse(*args)
    return result, owned


def memoize(
    fn: Optional[Callable[..., Any]] = None,
    *,
    key: Optional[Callable[..., Hashable]] = None,
    cache: Optional[EvaluationCache] = None,
    tag: Optional[Hashable] = None,
):
    """Memoize a plain recursive function.

    Usable bare (``@memoize``) or with options
    (``@memoize(key=..., cache=shared, tag="fib")``). The wrapper exposes
    ``cache_clear()``, ``cache_info()`` and the underlying ``evaluator``.
    """

    def decorate(func: Callable[..., Any]) -> Callable[..., Any]:
        def body(recurse, *args):
            return func(*args)

        evaluator = MemoizedEvaluator(
            body,
            key=key,
            tag=tag if tag is not None else func,
            cache=cache,
        )

        @functools.wraps(func)
        def wrapper(*args: Any) -> Any:
            return evaluator.evaluate(*args)

        wrapper.evaluator = evaluator
        wrapper.cache_clear = evaluator.reset
        wrapper.cache_info = evaluator.cache_info
        return wrapper

    if fn is None:
        return decorate
    return decorate(fn)
