from .catalan import Catalan, GridCatalan
from .coin_change import DEFAULT_COINS, CoinChange
from .fibonacci import Fibonacci, StackSafeFibonacci
from .problem import Problem

PROBLEMS = {
    problem.name: problem
    for problem in (Fibonacci, StackSafeFibonacci, GridCatalan, Catalan, CoinChange)
}


def get_problem(name: str, **kwargs) -> Problem:
    """Instantiate a catalogued problem by name."""
    try:
        problem_cls = PROBLEMS[name]
    except KeyError:
        raise ValueError(
            f"Unknown problem: {name}. Expected one of {', '.join(sorted(PROBLEMS))}."
        ) from None
    return problem_cls(**kwargs)
