"""
Series downsampling module.

Reduces a date-aligned series to a point budget:
- First and last points are always kept
- Interior points are taken at a uniform stride
- Spare budget goes to week (7) and month (30) positional boundaries
"""

import logging

from healthcharts.models import Series

logger = logging.getLogger(__name__)

# Never plot fewer than the two endpoints
MIN_POINTS = 2

# Positional periods that bias spare points toward week/month boundaries
BOUNDARY_PERIODS = (30, 7)


def _effective_budget(max_points: int) -> int:
    if max_points <= 0:
        return MIN_POINTS
    return max_points


def sampling_indices(total: int, max_points: int) -> list[int]:
    """
    Positions to keep when drawing `total` points with at most `max_points`.

    The stride starts at floor(total / max_points) and is widened only when
    the stride alone would overshoot the budget.
    """
    if total <= 0:
        return []
    budget = _effective_budget(max_points)
    if total <= budget:
        return list(range(total))

    indices = {0, total - 1}
    budget = max(budget, MIN_POINTS)

    if budget > MIN_POINTS:
        step = max(1, total // budget)
        # Endpoints plus range(step, total - 1, step) must fit in the budget
        min_step = -(-(total - 1) // (budget - 1))
        if step < min_step:
            logger.debug("Widening stride from %d to %d for %d points into %d",
                         step, min_step, total, budget)
            step = min_step
        indices.update(range(step, total - 1, step))

        for i in range(total):
            if len(indices) >= budget:
                break
            if any(i % period == 0 for period in BOUNDARY_PERIODS):
                indices.add(i)

    return sorted(indices)


def downsample(series: Series, max_points: int) -> Series:
    """
    Reduce a series to at most `max_points` points.

    Series that already fit are returned as an equal copy. A budget of zero
    or less means endpoints only. Every metric is filtered by the same
    retained-index set, so the result stays aligned.
    """
    total = len(series)
    if total <= _effective_budget(max_points) or total == 1:
        return series.take(range(total))

    indices = sampling_indices(total, max_points)
    logger.debug("Downsampled %d points to %d", total, len(indices))
    return series.take(indices)
