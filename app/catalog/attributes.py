"""
==============================================================================
Display Attribute Generators
==============================================================================

Rating and review counts have no authoritative source in the workbook, so
they are synthesized once per product per build. Generators are injected
into the reconciler so tests can pin the values.

==============================================================================
"""

from __future__ import annotations

import random
from typing import Optional


class AttributeGenerator:
    """Interface for synthesized product display attributes."""

    def rating(self) -> float:
        raise NotImplementedError

    def reviews(self) -> int:
        raise NotImplementedError


class RandomAttributeGenerator(AttributeGenerator):
    """
    Uniform random ratings and review counts.

    Ratings are drawn from the one-decimal grid 4.0 .. 4.9 and review counts
    from [50, 250). Pass a seed for reproducible builds.

    Example:
        >>> generator = RandomAttributeGenerator(seed=7)
        >>> 4.0 <= generator.rating() < 5.0
        True
    """

    MIN_RATING_TENTHS = 40
    MAX_RATING_TENTHS = 50
    MIN_REVIEWS = 50
    MAX_REVIEWS = 250

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def rating(self) -> float:
        return self._random.randrange(self.MIN_RATING_TENTHS, self.MAX_RATING_TENTHS) / 10

    def reviews(self) -> int:
        return self._random.randrange(self.MIN_REVIEWS, self.MAX_REVIEWS)


class FixedAttributeGenerator(AttributeGenerator):
    """Constant attributes, for tests and deterministic exports."""

    def __init__(self, rating: float = 4.5, reviews: int = 120) -> None:
        self._rating = rating
        self._reviews = reviews

    def rating(self) -> float:
        return self._rating

    def reviews(self) -> int:
        return self._reviews
