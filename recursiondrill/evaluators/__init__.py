from .cache import EvaluationCache
from .evaluator import Evaluator
from .functional import memoize, thread_cache
from .memoized import MemoizedEvaluator
from .naive import NaiveEvaluator
