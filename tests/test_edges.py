import numpy as np, cv2
from hausmatch.edges import detect_edges

def test_detect_edges_rectangle_outline():
    img = np.zeros((100,120), np.uint8)
    cv2.rectangle(img, (40,30), (80,70), 200, -1)
    edges = detect_edges(img, 30, 90)
    assert edges.dtype == bool
    assert edges.shape == img.shape
    assert edges.any()
    # flat interior and background carry no edges
    assert not edges[45:65, 45:75].any()
    assert not edges[:20, :].any()

def test_detect_edges_accepts_bgr():
    img = np.zeros((50,50,3), np.uint8)
    cv2.circle(img, (25,25), 10, (255,255,255), -1)
    assert detect_edges(img).any()
