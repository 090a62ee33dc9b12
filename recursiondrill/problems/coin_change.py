"""Counting the ways to make change.

    coin(0, coins)       = 1
    coin(amount, coins)  = 0                            if amount < 0
    coin(amount, [])     = 0
    coin(amount, coins)  = coin(amount, coins[1:]) + coin(amount - coins[0], coins)

Ways are counted as multisets: the first term drops the first denomination
for good, the second spends one coin of it.
"""
from typing import Sequence

from .problem import Problem

DEFAULT_COINS = (50, 25, 10, 5, 1)


class CoinChange(Problem):
    name = "coin_change"
    description = "ways to change an amount with the given denominations"
    naive_limit = 100

    def __init__(self, coins: Sequence[int] = DEFAULT_COINS) -> None:
        self.validate_coins(coins)
        self.coins = tuple(coins)

    @staticmethod
    def validate_coins(coins):
        for coin in coins:
            if isinstance(coin, bool) or not isinstance(coin, int) or coin <= 0:
                raise ValueError(f"Coin denominations must be positive integers, got {coin!r}.")

    def validate(self, amount, coins):
        # Negative amounts are part of the domain: there are no ways to make them.
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValueError(f"amount must be an integer, got {amount!r}.")
        self.validate_coins(coins)

    def key(self, amount, coins):
        return (amount, tuple(coins))

    def body(self, recurse, amount, coins):
        if amount == 0:
            return 1
        if amount < 0 or not coins:
            return 0
        return recurse(amount, coins[1:]) + recurse(amount - coins[0], coins)

    def drill_arguments(self, size):
        return (size, self.coins)

    def result_tag(self):
        return f"{self.name}_{'-'.join(map(str, self.coins))}"

    def __repr__(self):
        return f"CoinChange(coins={self.coins!r})"
