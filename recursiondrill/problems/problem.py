from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional

from ..evaluators import EvaluationCache, MemoizedEvaluator, NaiveEvaluator


def check_non_negative_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}.")


class Problem(ABC):
    """A recursive definition together with its domain rules.

    ``body`` follows one of the two styles described on
    :class:`~recursiondrill.evaluators.Evaluator`. The evaluator factories
    wire the same body, key and domain check into the naive and memoized
    evaluators, so the two can only differ in speed.
    """

    name: str = ""
    description: str = ""
    # Largest drill size the naive evaluator is run on by default.
    naive_limit: int = 20
    seed: Optional[dict] = None

    @abstractmethod
    def body(self, *args: Any) -> Any:
        ...

    def validate(self, *args: Any) -> None:
        """Raise ``ValueError`` for arguments outside the domain."""

    def key(self, *args: Any) -> Hashable:
        return args

    def drill_arguments(self, size: int) -> tuple:
        """Map a single drill size onto an argument tuple."""
        return (size,)

    def result_tag(self) -> str:
        """Identifies this problem instance in saved result file names."""
        return self.name

    def naive(self) -> NaiveEvaluator:
        return NaiveEvaluator(self.body, validate=self.validate)

    def memoized(
        self,
        cache: Optional[EvaluationCache] = None,
        use_cache: bool = True,
    ) -> MemoizedEvaluator:
        return MemoizedEvaluator(
            self.body,
            key=self.key,
            validate=self.validate,
            tag=self.name,
            cache=cache,
            use_cache=use_cache,
            seed=self.seed,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
