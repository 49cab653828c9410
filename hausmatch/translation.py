import logging
import math

from .hausdorff import symmetric_distance
from .models import Offset

logger = logging.getLogger(__name__)

def grid_search_translation(context, step, window):
    """Brute-force translation search over a window at a fixed stride.

    Offsets are visited row by row (y outer, x inner, both ascending). Only a
    strictly smaller distance replaces the current best, so on ties the
    earliest offset in that order is kept.

    Args:
        context: MatchContext
        step: stride in pixels (> 0)
        window: SearchWindow, half-open
    Returns:
        (Offset, distance); (None, inf) when the window is empty
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    best_offset = None
    best_distance = math.inf
    for y in range(window.min_y, window.max_y, step):
        for x in range(window.min_x, window.max_x, step):
            offset = Offset(x, y)
            dist = symmetric_distance(context, offset)
            if dist < best_distance:
                best_distance = dist
                best_offset = offset
    return best_offset, best_distance

def hierarchical_search_translation(context, initial_step=32):
    """Coarse-to-fine translation search.

    Starts with the whole valid offset range at ``initial_step`` and halves
    the step every round down to 1. When a round strictly improves the
    running best, the window is recentred on the new best offset with a
    margin of the current step (clamped to the valid range); otherwise the
    best and the window stay as they are.

    Args:
        context: MatchContext
        initial_step: first stride, conventionally a power of two
    Returns:
        (Offset, distance) of the running best after the step-1 round
    Raises:
        ValueError: initial_step < 1, or the needle does not fit strictly
            inside the haystack
    """
    if initial_step < 1:
        raise ValueError(f"initial_step must be >= 1, got {initial_step}")
    bounds = context.valid_window()
    if bounds.is_empty:
        raise ValueError(
            f"needle ({context.needle.width}x{context.needle.height}) must be smaller "
            f"than haystack ({context.haystack.width}x{context.haystack.height})")

    best_offset = None
    best_distance = math.inf
    window = bounds
    step = int(initial_step)
    while step > 0:
        offset, dist = grid_search_translation(context, step, window)
        if dist < best_distance:
            best_offset, best_distance = offset, dist
            window = bounds.around(offset, step)
        logger.debug("step=%d best=%s dist=%.3f window=%s", step, best_offset, best_distance, window)
        step //= 2
    return best_offset, best_distance
