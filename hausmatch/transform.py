import cv2
import numpy as np

def rotate_scale(edges, angle_deg, scale=1.0, fill=False):
    """Rotate and scale an edge mask about its centre on the same canvas.

    Args:
        edges: bool (H, W) edge mask
        angle_deg: rotation in degrees, counter-clockwise positive
        scale: uniform scale factor
        fill: value for pixels uncovered by the transform (False=background)
    Returns:
        new bool (H, W) edge mask; the input is left untouched
    """
    mask = np.asarray(edges)
    h, w = mask.shape[:2]
    if angle_deg == 0 and scale == 1.0:
        return mask.astype(bool, copy=True)
    M = cv2.getRotationMatrix2D((w // 2, h // 2), float(angle_deg), float(scale))
    src = (mask > 0).astype(np.uint8) * 255
    # nearest neighbour keeps the mask binary
    out = cv2.warpAffine(src, M, (w, h), flags=cv2.INTER_NEAREST,
                         borderMode=cv2.BORDER_CONSTANT,
                         borderValue=255 if fill else 0)
    return out > 0
