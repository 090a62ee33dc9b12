"""Fibonacci numbers.

    F(0) = 0
    F(1) = 1
    F(n) = F(n-1) + F(n-2) for n >= 2

The naive recursion makes O(2^n) calls; memoized it expands each of the
n + 1 indices once.
"""
from .problem import Problem, check_non_negative_int


class Fibonacci(Problem):
    name = "fibonacci"
    description = "n-th Fibonacci number"
    naive_limit = 25

    def validate(self, n):
        check_non_negative_int("n", n)

    def body(self, recurse, n):
        if n < 2:
            return n
        return recurse(n - 1) + recurse(n - 2)


class StackSafeFibonacci(Fibonacci):
    """Same numbers, written as a generator body.

    Each ``yield`` hands a sub-argument tuple to the evaluator, which drives
    the computation from its own stack. Handles indices far beyond the
    interpreter's recursion limit.
    """

    name = "fibonacci_stack_safe"

    def body(self, n):
        if n < 2:
            return n
        previous = yield (n - 1,)
        before_previous = yield (n - 2,)
        return previous + before_previous
