from .config import DrillConfig
from .drill_result import DrillResult
from .drill_runner import DrillRunner, EquivalenceError
from .evaluators import (
    EvaluationCache,
    Evaluator,
    MemoizedEvaluator,
    NaiveEvaluator,
    memoize,
    thread_cache,
)
from .problems import PROBLEMS, Problem, get_problem
