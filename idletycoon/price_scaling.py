from __future__ import annotations

import math
from fractions import Fraction
from typing import Callable


class PriceScaling:
    """Determines the price of the next unit after each purchase.

    Prices are stepped, not derived: every purchase floors ``price * growth``
    and the stepped price is what gets persisted. ``price_after`` replays the
    steps from a base price and gives the same answer as repeated ``step``
    calls, which differs from ``floor(base * growth ** count)`` once rounding
    has kicked in.
    """

    def __init__(self, fn: Callable[[int], int]) -> None:
        self._fn = fn

    def step(self, price: int) -> int:
        return self._fn(price)

    def price_after(self, base_price: int, count: int) -> int:
        price = base_price
        for _ in range(count):
            price = self._fn(price)
        return price

    @classmethod
    def fixed(cls) -> PriceScaling:
        """Price never changes."""
        return cls(lambda price: price)

    @classmethod
    def exponential(cls, growth_rate: float = 1.5) -> PriceScaling:
        """Price = floor(price * growth_rate) on every purchase."""
        # Fraction keeps the floor exact for any price size
        gr = Fraction(growth_rate)

        def _step(price: int) -> int:
            return math.floor(price * gr)

        return cls(_step)

    @classmethod
    def custom(cls, fn: Callable[[int], int]) -> PriceScaling:
        """Arbitrary price step."""
        return cls(fn)
