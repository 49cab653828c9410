import cv2
import numpy as np

def detect_edges(img, low_threshold=30, high_threshold=90, blur=True, aperture=3):
    """Canny edge map as a bool array (True=edge).

    The image is converted to gray and, when ``blur`` is set, smoothed with a
    3x3 Gaussian before Canny to suppress single-pixel noise.
    """
    if img.ndim == 3:
        img = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    if blur:
        img = cv2.GaussianBlur(img, (3, 3), 0)
    edges = cv2.Canny(img, low_threshold, high_threshold, apertureSize=aperture)
    return edges > 0
