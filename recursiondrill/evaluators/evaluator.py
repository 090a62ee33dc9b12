import inspect
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


class Evaluator(ABC):
    """Base class for evaluators of recursive definitions.

    A definition is given as a *body*. Two body styles are supported:

    * a plain function ``body(recurse, *args)`` which computes the value for
      ``args`` and calls ``recurse(*sub_args)`` for every self-reference;
    * a generator function ``body(*args)`` which yields each sub-argument
      tuple it depends on and receives the corresponding value back, e.g.
      ``value = yield (n - 1,)``. Such bodies are driven from an explicit
      stack, so deep dependency chains do not exhaust the interpreter stack.

    Subclasses decide whether results are remembered through
    :meth:`_lookup` and :meth:`_store`; everything else is shared so that the
    naive and memoized variants compute exactly the same values.
    """

    def __init__(
        self,
        body: Callable[..., Any],
        validate: Optional[Callable[..., None]] = None,
    ) -> None:
        if not callable(body):
            raise ValueError("body must be a callable recursive definition.")

        self.body = body
        self.validate = validate
        self.stack_safe = inspect.isgeneratorfunction(body)

        self.calls = 0
        self.body_evaluations = 0
        self._counter_lock = threading.Lock()

    def evaluate(self, *args: Any) -> Any:
        """Return the value of the definition at ``args``.

        ``validate`` runs once on the top-level arguments, before any cache
        is consulted, so domain errors surface identically with or without
        memoization.
        """
        if self.validate is not None:
            self.validate(*args)

        if self.stack_safe:
            return self._evaluate_iteratively(args)
        return self._recurse(*args)

    def reset(self) -> None:
        """Zero the call counters."""
        with self._counter_lock:
            self.calls = 0
            self.body_evaluations = 0

    @abstractmethod
    def _lookup(self, args: tuple) -> tuple[bool, Any]:
        """Return ``(found, value)`` for a previously computed ``args``."""

    @abstractmethod
    def _store(self, args: tuple, value: Any) -> None:
        """Remember ``value`` as the result for ``args``."""

    def _count_call(self) -> None:
        with self._counter_lock:
            self.calls += 1

    def _count_body_evaluation(self) -> None:
        with self._counter_lock:
            self.body_evaluations += 1

    def _recurse(self, *args: Any) -> Any:
        self._count_call()

        found, value = self._lookup(args)
        if found:
            return value

        self._count_body_evaluation()
        # Nothing is stored when the body raises.
        value = self.body(self._recurse, *args)
        self._store(args, value)
        return value

    def _evaluate_iteratively(self, args: tuple) -> Any:
        self._count_call()

        found, value = self._lookup(args)
        if found:
            return value

        stack = [(args, self._start(args))]
        pending = None

        while stack:
            frame_args, frame = stack[-1]
            try:
                request = frame.send(pending)
            except StopIteration as stop:
                stack.pop()
                pending = stop.value
                self._store(frame_args, pending)
                continue

            if not isinstance(request, tuple):
                raise TypeError(
                    f"Stack-safe bodies must yield argument tuples, got {request!r}."
                )

            self._count_call()
            found, value = self._lookup(request)
            if found:
                pending = value
            else:
                stack.append((request, self._start(request)))
                pending = None

        return pending

    def _start(self, args: tuple):
        self._count_body_evaluation()
        return self.body(*args)
