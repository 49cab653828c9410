import cv2
import numpy as np

def _to_bgr(img):
    vis = img.copy()
    if vis.ndim == 2:
        vis = cv2.cvtColor(vis, cv2.COLOR_GRAY2BGR)
    return vis

def draw_match_preview(scene, needle, offset, dist, needle_edges=None):
    """Superimpose the needle on the scene at offset and print the distance.

    Args:
        scene: haystack image (gray/BGR)
        needle: needle image (gray/BGR), pasted at offset
        offset: Offset of the needle's top-left corner
        dist: distance printed in the top-left corner
        needle_edges: optional bool mask drawn in red over the pasted needle
            (e.g. the edges of a rotated/scaled needle)
    Returns:
        BGR preview image
    """
    vis = _to_bgr(scene)
    patch = _to_bgr(needle)
    H, W = vis.shape[:2]
    x, y = int(offset.dx), int(offset.dy)
    # clip the patch to the scene
    w = max(0, min(patch.shape[1], W - x))
    h = max(0, min(patch.shape[0], H - y))
    if w > 0 and h > 0 and x >= 0 and y >= 0:
        vis[y:y+h, x:x+w] = patch[:h, :w]
        if needle_edges is not None:
            roi = vis[y:y+h, x:x+w]
            roi[np.asarray(needle_edges)[:h, :w]] = (0, 0, 255)
    cv2.circle(vis, (x + patch.shape[1]//2, y + patch.shape[0]//2), 20, (0, 0, 255), 3)

    text = f"dist = {dist:.2f}"
    cv2.rectangle(vis, (0, 0), (200, 30), (255, 255, 255), -1)
    cv2.putText(vis, text, (10, 20), cv2.FONT_HERSHEY_COMPLEX_SMALL, 1.0, (0, 0, 0), 1, cv2.LINE_AA)
    return vis
