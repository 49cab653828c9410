import numpy as np, cv2
from hausmatch.models import EdgeMap, MatchContext, Offset
from hausmatch.hausdorff import (MAX_DISTANCE, directed_distance, count_considered,
                                 symmetric_distance)

def _square(shape, x0, y0, size):
    img = np.zeros(shape, np.uint8)
    cv2.rectangle(img, (x0, y0), (x0+size-1, y0+size-1), 255, 1)
    return img > 0

def test_single_point_on_constant_field():
    field = np.full((10,10), 5.0, np.float32)
    edges = np.zeros((10,10), bool)
    edges[0, 0] = True
    pts = EdgeMap.from_edges(edges).points
    assert directed_distance(pts, field, Offset(0, 0)) == 5.0
    assert count_considered(pts, field, Offset(0, 0)) == 1

def test_empty_edge_set_returns_sentinel():
    field = np.full((10,10), 5.0, np.float32)
    pts = EdgeMap.from_edges(np.zeros((10,10), bool)).points
    for off in [Offset(0, 0), Offset(3, -2), Offset(-50, 50)]:
        assert directed_distance(pts, field, off) == MAX_DISTANCE
    assert MAX_DISTANCE == 9999

def test_points_mapped_outside_return_sentinel():
    m = EdgeMap.from_edges(_square((20,20), 2, 2, 10))
    field = np.zeros((20,20), np.float32)
    assert directed_distance(m.points, field, Offset(100, 0)) == MAX_DISTANCE
    assert directed_distance(m.points, field, Offset(0, -100)) == MAX_DISTANCE
    assert count_considered(m.points, field, Offset(100, 0)) == 0

def test_self_distance_is_zero():
    m = EdgeMap.from_edges(_square((40,40), 5, 8, 20))
    assert directed_distance(m.points, m.field, Offset(0, 0)) == 0.0

def test_bounds_are_half_open():
    field = np.zeros((10,10), np.float32)
    field[:, 9] = 3.0
    pts = np.array([[0, 0]])
    # x == width is outside
    assert directed_distance(pts, field, Offset(10, 0)) == MAX_DISTANCE
    assert directed_distance(pts, field, Offset(9, 0)) == 3.0
    assert directed_distance(pts, field, Offset(0, 10)) == MAX_DISTANCE
    assert directed_distance(pts, field, Offset(-1, 0)) == MAX_DISTANCE

def test_partially_outside_points_are_skipped():
    field = np.zeros((10,10), np.float32)
    field[2, 2] = 4.0
    field[9, 9] = 7.0
    pts = np.array([[0, 0], [8, 8]])
    assert count_considered(pts, field, Offset(1, 1)) == 2
    assert directed_distance(pts, field, Offset(1, 1)) == 7.0
    # (8,8)+(2,2) falls outside and contributes nothing
    assert count_considered(pts, field, Offset(2, 2)) == 1
    assert directed_distance(pts, field, Offset(2, 2)) == 4.0

def _context():
    needle = EdgeMap.from_edges(_square((16,16), 2, 3, 10))
    hay = np.zeros((60,70), np.uint8)
    cv2.rectangle(hay, (20, 15), (29, 24), 255, 1)
    cv2.line(hay, (40, 40), (60, 50), 255, 1)
    return needle, EdgeMap.from_edges(hay > 0)

def test_directed_distance_non_negative():
    needle, hay = _context()
    for off in [Offset(0, 0), Offset(18, 12), Offset(30, 30), Offset(-5, 4)]:
        assert directed_distance(needle.points, hay.field, off) >= 0
        assert directed_distance(hay.points, needle.field, -off) >= 0

def test_symmetric_distance_is_symmetric():
    needle, hay = _context()
    ab = MatchContext(needle=needle, haystack=hay)
    ba = MatchContext(needle=hay, haystack=needle)
    for off in [Offset(0, 0), Offset(18, 12), Offset(25, 7), Offset(50, 40)]:
        assert symmetric_distance(ab, off) == symmetric_distance(ba, -off)

def test_symmetric_distance_zero_at_true_offset():
    needle, hay = _context()
    ctx = MatchContext(needle=needle, haystack=hay)
    # square at (2,3) in the needle, (20,15) in the haystack
    assert symmetric_distance(ctx, Offset(18, 12)) == 0.0
    assert symmetric_distance(ctx, Offset(19, 12)) > 0.0
