import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import time
import cv2
import numpy as np
from hausmatch import (EdgeMap, MatchContext, detect_edges, pose_search,
                       hierarchical_search_translation)
from hausmatch.visualize import draw_match_preview

def make_scene():
    """Synthetic scene: a notched plate rotated by 8 deg at (70, 40) plus clutter."""
    tpl = np.full((60, 60), 30, np.uint8)
    pts = np.array([[8, 8], [52, 8], [52, 30], [34, 30], [34, 52], [8, 52]], np.int32)
    cv2.fillPoly(tpl, [pts], 210)

    scene = np.full((200, 240), 30, np.uint8)
    M = cv2.getRotationMatrix2D((30, 30), 8.0, 1.0)
    rotated = cv2.warpAffine(tpl, M, (60, 60), borderValue=30)
    scene[40:100, 70:130] = rotated
    cv2.circle(scene, (190, 150), 18, 160, -1)
    cv2.rectangle(scene, (20, 140), (60, 180), 120, -1)
    return tpl, scene

def main():
    tpl, scene = make_scene()
    needle_edges = detect_edges(tpl)
    haystack = EdgeMap.from_edges(detect_edges(scene))

    print("=" * 60)
    print("Hausdorff matching demo")
    print("=" * 60)

    print("\n[1] translation only (step 4)...")
    t0 = time.time()
    ctx = MatchContext(needle=EdgeMap.from_edges(needle_edges), haystack=haystack)
    offset, dist = hierarchical_search_translation(ctx, initial_step=4)
    print(f"  offset=({offset.dx}, {offset.dy}) dist={dist:.2f} ({time.time()-t0:.2f}s)")

    print("\n[2] rotation -12..12 step 4, scale 0.9..1.1 step 0.1...")
    t0 = time.time()
    result = pose_search(needle_edges, haystack,
                         rotation_range=(-12, 12), rotation_step=4,
                         scale_range=(0.9, 1.1), scale_step=0.1,
                         initial_step=8)
    p = result.pose
    print(f"  offset=({p.offset.dx}, {p.offset.dy}) rotation={p.rotation:g}deg "
          f"scale={p.scale:.2f} dist={result.distance:.2f} ({time.time()-t0:.2f}s)")

    vis = draw_match_preview(scene, tpl, p.offset, result.distance,
                             needle_edges=result.needle.edges)
    output_path = 'examples/out_hausdorff_rot_scale.png'
    cv2.imwrite(output_path, vis)
    print(f"\n  result saved to: {output_path}")

if __name__ == "__main__":
    main()
