from typing import Any, List, Optional

from pydantic import BaseModel


class DrillResult(BaseModel):
    """Outcome of evaluating one drill input.

    Attributes
    ----------
    problem:
        Name of the catalogued problem.
    problem_tag:
        Identity of the problem instance, e.g. the name plus its coin set.
    size:
        Drill size the arguments were derived from.
    arguments:
        Argument tuple passed to the evaluators.
    version:
        Logical run/version identifier.
    result:
        Value returned by the memoized evaluator.
    naive_result:
        Value returned by the naive evaluator, when it was run.
    matches:
        Whether both evaluators agreed. ``None`` when the naive one was skipped.
    memoized_calls, memoized_body_evaluations:
        Calls routed through the memoized evaluator, and how many of them
        actually ran the body. With a shared cache this is only the work not
        already done for earlier sizes.
    cold_body_evaluations:
        Body evaluations the memoized evaluator needs from an empty cache,
        i.e. the number of distinct keys reachable from the arguments.
    naive_calls, naive_body_evaluations:
        The same counts for the naive evaluator (always equal to each other).
    cache_entries:
        Size of the memoization cache after the evaluation.
    duration_seconds, naive_duration_seconds:
        Wall-clock duration of each evaluation.
    timestamp_utc:
        UTC timestamp string when the evaluation finished.
    file_name:
        Base filename used when persisting the result.
    """

    problem: str
    problem_tag: str
    size: int
    arguments: List[Any]
    version: int

    result: Optional[int] = None
    naive_result: Optional[int] = None
    matches: Optional[bool] = None

    memoized_calls: Optional[int] = None
    memoized_body_evaluations: Optional[int] = None
    cold_body_evaluations: Optional[int] = None
    naive_calls: Optional[int] = None
    naive_body_evaluations: Optional[int] = None
    cache_entries: Optional[int] = None

    duration_seconds: Optional[float] = None
    naive_duration_seconds: Optional[float] = None
    timestamp_utc: Optional[str] = None

    file_name: Optional[str] = None
