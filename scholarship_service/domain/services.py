import math
from typing import Iterable


def average_rating(ratings: Iterable[float]) -> float:
    """Arithmetic mean of ratings; NaN when there are none."""
    values = [float(r) for r in ratings]
    if not values:
        return math.nan
    return sum(values) / len(values)
