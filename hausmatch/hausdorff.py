import numpy as np

from .models import Offset

# Returned when no edge point lands inside the distance field.
MAX_DISTANCE = 9999.0

def _in_field(points, field, offset):
    """Shift points by offset and keep those inside [0, W) x [0, H) of field."""
    points = np.asarray(points, dtype=np.intp).reshape(-1, 2)
    h, w = field.shape[:2]
    xs =points[:, 0] + offset.dx
    ys = points[:, 1] + offset.dy
    keep = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
    return xs[keep], ys[keep]

def directed_distance(points, field, offset=Offset(0, 0)):
    """Directed Hausdorff distance from an edge point set to a distance field.

    Every edge point (ix, iy) is moved to (ix + dx, iy + dy) and the distance
    field is sampled there; the result is the largest sample. Points that land
    outside the field are skipped.

    Args:
        points: (N, 2) int array of (x, y) edge coordinates
        field: float32 (H, W) distance field of the other edge set
        offset: Offset applied to the points
    Returns:
        max sampled distance, or MAX_DISTANCE if no point landed in the field
    """
    xs, ys = _in_field(points, field, offset)
    if xs.size == 0:
        return MAX_DISTANCE
    return float(field[ys, xs].max())

def count_considered(points, field, offset=Offset(0, 0)):
    """Number of edge points that land inside the field under offset."""
    xs, _ = _in_field(points, field, offset)
    return int(xs.size)

def symmetric_distance(context, offset):
    """Symmetric Hausdorff distance of the needle placed at offset.

    max(needle -> haystack field at +offset, haystack -> needle field at -offset)
    """
    forward = directed_distance(context.needle.points, context.haystack.field, offset)
    reverse = directed_distance(context.haystack.points, context.needle.field, -offset)
    return max(forward, reverse)
