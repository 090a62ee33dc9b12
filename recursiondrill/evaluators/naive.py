from typing import Any

from .evaluator import Evaluator


class NaiveEvaluator(Evaluator):
    """Evaluates a definition exactly as written, remembering nothing.

    Every self-reference re-runs the body, so the work is exponential for
    definitions such as Fibonacci. Used as the reference the memoized
    evaluator is checked against.
    """

    def _lookup(self, args: tuple) -> tuple[bool, Any]:
        return False, None

    def _store(self, args: tuple, value: Any) -> None:
        pass
