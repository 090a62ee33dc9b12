"""Catalan numbers, two ways.

``GridCatalan`` counts monotone lattice paths that never cross the diagonal,
with ``m`` steps left in one direction and ``n`` in the other::

    cat(m, 0) = 1
    cat(m, n) = cat(m, n-1)                  if m == n
    cat(m, n) = cat(m, n-1) + cat(m-1, n)    otherwise

so that ``cat(n, n)`` is the n-th Catalan number.

``Catalan`` counts binary trees with ``n`` internal nodes::

    catalan(0) = 1
    catalan(n) = sum(catalan(i) * catalan(n-1-i) for i in 0..n-1)
"""
from .problem import Problem, check_non_negative_int


class GridCatalan(Problem):
    name = "grid_catalan"
    description = "lattice paths below the diagonal, cat(m, n)"
    naive_limit = 12

    def validate(self, m, n):
        check_non_negative_int("m", m)
        check_non_negative_int("n", n)
        # The recursion never reaches n == 0 from below the diagonal.
        if m < n:
            raise ValueError(f"m must be >= n, got m={m}, n={n}.")

    def body(self, recurse, m, n):
        if n == 0:
            return 1
        if m == n:
            return recurse(m, n - 1)
        return recurse(m, n - 1) + recurse(m - 1, n)

    def drill_arguments(self, size):
        return (size, size)


class Catalan(Problem):
    name = "catalan"
    description = "binary trees with n internal nodes"
    naive_limit = 12

    def validate(self, n):
        check_non_negative_int("n", n)

    def body(self, recurse, n):
        if n == 0:
            return 1
        return sum(recurse(i) * recurse(n - 1 - i) for i in range(n))
