import cv2, numpy as np

def distance_field(edges):
    """Compute the L1 distance from every pixel to the nearest edge pixel.

    Input:
        edges: bool edge map (True=edge) or uint8 (non-zero=edge)
    Return:
        dt: float32 distance (same size), zero on edge pixels.
    Note:
        cv2.distanceTransform computes distance to zero-pixels.
        We invert so that edges become zeros, then run DT.
        For DIST_L1 the precise mask is exact, values are integral.
    """
    e = (np.asarray(edges) > 0).astype(np.uint8) * 255
    inv = (255 - e)
    dt = cv2.distanceTransform(inv, distanceType=cv2.DIST_L1,
                               maskSize=cv2.DIST_MASK_PRECISE)
    return dt.astype(np.float32)

def edge_points(edges):
    """Return the on-edge pixel coordinates as an (N, 2) int array of (x, y)."""
    ys, xs = np.nonzero(np.asarray(edges))
    return np.stack([xs, ys], axis=1).astype(np.intp)
