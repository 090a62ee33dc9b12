from typing import Any, Callable, Hashable, Mapping, Optional

from .cache import EvaluationCache
from .evaluator import Evaluator


def _identity_key(*args: Any) -> tuple:
    return args


class MemoizedEvaluator(Evaluator):
    def __init__(
        self,
        body: Callable[..., Any],
        key: Optional[Callable[..., Hashable]] = None,
        validate: Optional[Callable[..., None]] = None,
        tag: Optional[Hashable] = None,
        cache: Optional[EvaluationCache] = None,
        use_cache: bool = True,
        seed: Optional[Mapping[tuple, Any]] = None,
    ) -> None:
        """Initialise the memoized evaluator.

        Args:
            body: The recursive definition, see :class:`Evaluator`.
            key: Builds the hashable cache key from an argument tuple.
                Defaults to the argument tuple itself.
            validate: Optional domain check run on top-level arguments.
            tag: Namespace for this definition's keys inside ``cache``.
                Defaults to ``body`` itself, so unrelated definitions sharing
                a cache never see each other's entries.
            cache: Optional shared cache instance. If not provided and
                ``use_cache`` is True, a new :class:`EvaluationCache` will be
                created for this evaluator.
            use_cache: Whether to remember results at all. With caching
                disabled the evaluator behaves like the naive one.
            seed: Known results, keyed by argument tuple, inserted into the
                cache up front (typically the base cases).
        """
        super().__init__(body, validate=validate)

        self.key = key if key is not None else _identity_key
        self.tag = tag if tag is not None else body
        self.seed = dict(seed) if seed else {}

        # Cache configuration
        self.use_cache = use_cache
        self._cache: Optional[EvaluationCache] = None
        if use_cache:
            self._cache = cache if cache is not None else EvaluationCache()

        self._seed_cache()

    @property
    def cache(self) -> Optional[EvaluationCache]:
        return self._cache

    def cache_key(self, *args: Any) -> Hashable:
        return (self.tag, self.key(*args))

    def reset(self) -> None:
        """Clear the counters and the cache, then re-apply ``seed``.

        A shared cache is cleared for every evaluator using it; they simply
        recompute on their next call.
        """
        super().reset()
        if self._cache is not None:
            self._cache.clear()
        self._seed_cache()

    def cache_info(self) -> dict:
        info = {"calls": self.calls, "body_evaluations": self.body_evaluations}
        if self._cache is not None:
            info.update(self._cache.stats())
        return info

    def _seed_cache(self) -> None:
        if self._cache is None:
            return
        for args, value in self.seed.items():
            self._cache.set(self.cache_key(*args), value)

    def _lookup(self, args: tuple) -> tuple[bool, Any]:
        if self._cache is None:
            return False, None
        return self._cache.lookup(self.cache_key(*args))

    def _store(self, args: tuple, value: Any) -> None:
        if self._cache is not None:
            self._cache.set(self.cache_key(*args), value)
