import logging
import math
import multiprocessing as mp

import numpy as np

from .models import EdgeMap, MatchContext, MatchResult, Pose
from .transform import rotate_scale
from .translation import hierarchical_search_translation

logger = logging.getLogger(__name__)


class SearchCancelled(Exception):
    """Raised when a pose search is stopped through its cancel token."""


def pose_grid(lo, hi, step):
    """Inclusive sweep lo, lo+step, ... <= hi, built by index.

    Building the values from an index keeps the upper bound even when
    repeated float additions would overshoot it.
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    if hi < lo:
        raise ValueError(f"range upper bound {hi} is below lower bound {lo}")
    n = int(math.floor((hi - lo) / step + 1e-9)) + 1
    return [lo + i * step for i in range(n)]


def _evaluate_pose(needle_edges, haystack, rotation, scale, initial_step):
    """Search translation for one (rotation, scale) pair.

    Returns (offset, distance, transformed needle EdgeMap).
    """
    needle = EdgeMap.from_edges(rotate_scale(needle_edges, rotation, scale))
    context = MatchContext(needle=needle, haystack=haystack)
    offset, dist = hierarchical_search_translation(context, initial_step)
    return offset, dist, needle


def _evaluate_indexed(args):
    ri, si, needle_edges, haystack, rotation, scale, initial_step = args
    offset, dist, needle = _evaluate_pose(needle_edges, haystack, rotation, scale, initial_step)
    return (dist, ri, si), offset, needle


def pose_search(needle_edges, haystack, rotation_range=(-32, 32), rotation_step=4,
                scale_range=(0.5, 2.0), scale_step=0.25, initial_step=32,
                workers=None, cancel=None):
    """Find the rotation, scale and translation of the needle in the haystack.

    The sweep runs rotations in the outer loop and scales in the inner loop,
    both inclusive of their upper bound. Every pose gets its own transformed
    copy of the needle (uncovered pixels become background) with a fresh
    distance field, and a hierarchical translation search against the
    haystack. The lowest distance wins; on ties the pose met first in the
    sweep (lower rotation, then lower scale) is kept.

    Args:
        needle_edges: bool (H, W) edge mask of the needle at rotation 0, scale 1
        haystack: EdgeMap of the scene
        rotation_range: (min_deg, max_deg)
        rotation_step: rotation stride in degrees
        scale_range: (min_scale, max_scale)
        scale_step: scale stride
        initial_step: initial translation stride of the hierarchical search
        workers: number of processes; None or 1 runs the sweep in-process
        cancel: object with is_set(), checked before every rotation
            (between pool results when workers > 1)
    Returns:
        MatchResult with the best pose, its distance and the transformed needle
    Raises:
        SearchCancelled: cancel was set
        ValueError: invalid steps/ranges, or the needle does not fit
    """
    needle_edges = np.asarray(needle_edges, dtype=bool)
    rotations = pose_grid(rotation_range[0], rotation_range[1], rotation_step)
    scales = pose_grid(scale_range[0], scale_range[1], scale_step)
    logger.debug("pose sweep: %d rotations x %d scales", len(rotations), len(scales))

    if workers is not None and workers > 1:
        best_key, best_offset, best_needle = _sweep_parallel(
            needle_edges, haystack, rotations, scales, initial_step, workers, cancel)
    else:
        best_key, best_offset, best_needle = _sweep_serial(
            needle_edges, haystack, rotations, scales, initial_step, cancel)

    dist, ri, si = best_key
    pose = Pose(offset=best_offset, rotation=rotations[ri], scale=scales[si])
    logger.info("best pose %s dist=%.3f", pose, dist)
    return MatchResult(pose=pose, distance=dist, needle=best_needle)


def _check_cancel(cancel):
    if cancel is not None and cancel.is_set():
        raise SearchCancelled("pose search cancelled")


def _sweep_serial(needle_edges, haystack, rotations, scales, initial_step, cancel):
    best_key, best_offset, best_needle = (math.inf, 0, 0), None, None
    for ri, rotation in enumerate(rotations):
        _check_cancel(cancel)
        for si, scale in enumerate(scales):
            offset, dist, needle = _evaluate_pose(needle_edges, haystack, rotation, scale, initial_step)
            logger.debug("rotation=%s scale=%s offset=%s dist=%.3f", rotation, scale, offset, dist)
            if dist < best_key[0]:
                best_key, best_offset, best_needle = (dist, ri, si), offset, needle
    return best_key, best_offset, best_needle


def _sweep_parallel(needle_edges, haystack, rotations, scales, initial_step, workers, cancel):
    _check_cancel(cancel)
    args_list = [(ri, si, needle_edges, haystack, rotation, scale, initial_step)
                 for ri, rotation in enumerate(rotations)
                 for si, scale in enumerate(scales)]
    results = []
    with mp.Pool(workers) as pool:
        # ordered results; leaving the block terminates outstanding tasks
        for res in pool.imap(_evaluate_indexed, args_list):
            _check_cancel(cancel)
            results.append(res)
    # (distance, rotation index, scale index) orders exactly like the serial sweep
    return min(results, key=lambda r: r[0])
