from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, call

import pytest

from recursiondrill.evaluators import (
    EvaluationCache,
    MemoizedEvaluator,
    NaiveEvaluator,
    memoize,
    thread_cache,
)

FIB_10 = 55
FIB_33 = 3524578


def fib_body(recurse, n):
    if n < 2:
        return n
    return recurse(n - 1) + recurse(n - 2)


def lucas_body(recurse, n):
    if n == 0:
        return 2
    if n == 1:
        return 1
    return recurse(n - 1) + recurse(n - 2)


def stack_safe_fib_body(n):
    if n < 2:
        return n
    previous = yield (n - 1,)
    before_previous = yield (n - 2,)
    return previous + before_previous


def iterative_fib(n):
    a, b = 0, 1
    for _ in range(n):
        a, b = b, a + b
    return a


def test_memoized_matches_known_values():
    evaluator = MemoizedEvaluator(fib_body)

    assert evaluator.evaluate(0) == 0
    assert evaluator.evaluate(1) == 1
    assert evaluator.evaluate(10) == FIB_10
    assert evaluator.evaluate(33) == FIB_33


def test_memoized_runs_body_once_per_distinct_argument():
    body = MagicMock(side_effect=fib_body)
    evaluator = MemoizedEvaluator(body, tag="fib")

    assert evaluator.evaluate(20) == 6765

    # Keys 0..20, each expanded exactly once
    assert body.call_count == 21
    assert evaluator.body_evaluations == 21
    assert sorted(c.args[1] for c in body.call_args_list) == list(range(21))


def test_naive_repeats_work():
    body = MagicMock(side_effect=fib_body)
    evaluator = NaiveEvaluator(body)

    assert evaluator.evaluate(10) == FIB_10

    # The naive call tree for fib(n) has 2 * fib(n + 1) - 1 nodes
    assert body.call_count == 2 * 89 - 1
    assert evaluator.calls == evaluator.body_evaluations


def test_warm_cache_returns_same_value_without_body_calls():
    body = MagicMock(side_effect=fib_body)
    evaluator = MemoizedEvaluator(body, tag="fib")

    first_result = evaluator.evaluate(15)
    body.reset_mock()
    second_result = evaluator.evaluate(15)

    assert first_result == second_result == 610
    body.assert_not_called()


def test_use_cache_disabled_behaves_naively():
    body = MagicMock(side_effect=fib_body)
    evaluator = MemoizedEvaluator(body, tag="fib", use_cache=False)

    evaluator.evaluate(5)
    evaluator.evaluate(5)

    assert evaluator.cache is None
    assert body.call_count == 2 * (2 * 8 - 1)


def test_shared_cache_keeps_definitions_apart():
    """fib and lucas share a cache and the same argument keys."""
    cache = EvaluationCache()

    fib = MemoizedEvaluator(fib_body, cache=cache)
    lucas = MemoizedEvaluator(lucas_body, cache=cache)

    assert fib.evaluate(10) == FIB_10
    assert lucas.evaluate(10) == 123
    assert fib.evaluate(10) == FIB_10

    assert len(cache) == 11 + 11


def test_shared_cache_reuses_entries_for_same_tag():
    cache = EvaluationCache()
    body = MagicMock(side_effect=fib_body)

    first = MemoizedEvaluator(body, tag="fib", cache=cache)
    second = MemoizedEvaluator(body, tag="fib", cache=cache)

    first.evaluate(12)
    body.reset_mock()

    assert second.evaluate(12) == 144
    body.assert_not_called()
    assert second.body_evaluations == 0


def test_failed_evaluation_is_not_cached():
    body = MagicMock(side_effect=[RuntimeError("boom"), 7])
    evaluator = MemoizedEvaluator(body, tag="flaky")

    with pytest.raises(RuntimeError, match="boom"):
        evaluator.evaluate(3)

    assert (("flaky", (3,))) not in evaluator.cache
    assert evaluator.evaluate(3) == 7
    assert body.call_count == 2


def test_validate_runs_before_cache_lookup():
    validate = MagicMock(side_effect=ValueError("n must be non-negative"))
    evaluator = MemoizedEvaluator(fib_body, validate=validate, seed={(-1,): 0})

    with pytest.raises(ValueError):
        evaluator.evaluate(-1)

    assert validate.call_args == call(-1)
    assert evaluator.body_evaluations == 0


def test_seed_skips_base_cases():
    body = MagicMock(side_effect=fib_body)
    evaluator = MemoizedEvaluator(body, tag="fib", seed={(0,): 0, (1,): 1})

    assert evaluator.evaluate(10) == FIB_10
    # Only keys 2..10 run the body
    assert body.call_count == 9


def test_custom_key_strategy():
    def sum_body(recurse, values):
        if not values:
            return 0
        return values[0] + recurse(values[1:])

    evaluator = MemoizedEvaluator(sum_body, key=lambda values: tuple(values))

    assert evaluator.evaluate([1, 2, 3, 4]) == 10
    assert (sum_body, (2, 3, 4)) in evaluator.cache


def test_reset_clears_cache_and_counters():
    evaluator = MemoizedEvaluator(fib_body, seed={(0,): 0})
    evaluator.evaluate(8)

    evaluator.reset()

    assert evaluator.calls == 0
    assert evaluator.body_evaluations == 0
    assert len(evaluator.cache) == 1
    assert evaluator.cache.stats() == {"entries": 1, "hits": 0, "misses": 0}


def test_cache_info_reports_hits_and_misses():
    evaluator = MemoizedEvaluator(fib_body)
    evaluator.evaluate(5)

    info = evaluator.cache_info()

    assert info["entries"] == 6
    assert info["misses"] == 6
    assert info["hits"] == info["calls"] - info["misses"]
    assert info["body_evaluations"] == 6


def test_stack_safe_body_handles_deep_chains():
    evaluator = MemoizedEvaluator(stack_safe_fib_body)

    assert evaluator.stack_safe
    assert evaluator.evaluate(5000) == iterative_fib(5000)
    assert evaluator.body_evaluations == 5001


def test_stack_safe_naive_matches_recursive_naive():
    naive = NaiveEvaluator(stack_safe_fib_body)
    recursive = NaiveEvaluator(fib_body)

    assert naive.evaluate(15) == recursive.evaluate(15) == 610
    assert naive.body_evaluations == recursive.body_evaluations


def test_stack_safe_body_must_yield_tuples():
    def bad_body(n):
        if n == 0:
            return 0
        value = yield n - 1
        return value

    with pytest.raises(TypeError):
        MemoizedEvaluator(bad_body).evaluate(3)


def test_stack_safe_failure_is_not_cached():
    def failing_body(n):
        if n == 0:
            raise ArithmeticError("no base case")
        value = yield (n - 1,)
        return value

    evaluator = MemoizedEvaluator(failing_body)

    with pytest.raises(ArithmeticError):
        evaluator.evaluate(4)

    assert len(evaluator.cache) == 0


def test_rejects_non_callable_body():
    with pytest.raises(ValueError):
        MemoizedEvaluator(None)


def test_concurrent_evaluations_share_cache():
    cache = EvaluationCache()

    def evaluate(n):
        return MemoizedEvaluator(fib_body, tag="fib", cache=cache).evaluate(n)

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(evaluate, range(0, 200, 7)))

    assert results == [iterative_fib(n) for n in range(0, 200, 7)]
    assert len(cache) == 197


def test_thread_cache_returns_grown_cache():
    result, cache = thread_cache(fib_body, (10,))

    assert result == FIB_10
    assert cache == {(n,): iterative_fib(n) for n in range(11)}


def test_thread_cache_does_not_mutate_input():
    _, warm = thread_cache(fib_body, (10,))
    snapshot = dict(warm)
    body = MagicMock(side_effect=fib_body)

    result, grown = thread_cache(body, (12,), cache=warm)

    assert result == 144
    assert warm == snapshot
    assert len(grown) == 13
    # Only 11 and 12 were missing
    assert body.call_count == 2


def test_thread_cache_rejects_generator_bodies():
    with pytest.raises(ValueError):
        thread_cache(stack_safe_fib_body, (3,))


def test_memoize_decorator_routes_recursive_calls_through_cache():
    body_runs = []

    @memoize
    def fib(n):
        body_runs.append(n)
        if n < 2:
            return n
        return fib(n - 1) + fib(n - 2)

    assert fib(33) == FIB_33
    assert sorted(body_runs) == list(range(34))
    assert fib.__name__ == "fib"
    assert fib.cache_info()["entries"] == 34

    fib.cache_clear()
    assert fib.cache_info()["entries"] == 0


def test_memoize_with_shared_cache_and_tags():
    cache = EvaluationCache()

    @memoize(cache=cache, tag="double")
    def double(n):
        return 0 if n == 0 else double(n - 1) + 2

    @memoize(cache=cache, tag="triple")
    def triple(n):
        return 0 if n == 0 else triple(n - 1) + 3

    assert double(5) == 10
    assert triple(5) == 15
    assert double(5) == 10
    assert ("double", (5,)) in cache
    assert ("triple", (5,)) in cache


def test_none_results_are_cached():
    body = MagicMock(return_value=None)
    evaluator = MemoizedEvaluator(body, tag="nothing")

    assert evaluator.evaluate(1) is None
    assert evaluator.evaluate(1) is None

    body.assert_called_once()
    assert evaluator.cache.lookup(("nothing", (1,))) == (True, None)
