"""
Interactive match explorer.

HighGUI callbacks never run a search themselves: the mouse callback and the
key loop only push commands onto MatchSession's queue, and MatchSession
executes them one at a time on the main thread.

Commands:
    ("drag", x, y)  distance of the needle placed at (x, y), rotation 0, scale 1
    ("find",)       run the configured search
    ("quit",)       leave the event loop
"""

from __future__ import annotations
from collections import deque
import logging
import time

import cv2

from .config import MatchConfig
from .hausdorff import symmetric_distance
from .models import MatchResult, Offset, Pose
from .pose import pose_search
from .translation import hierarchical_search_translation
from .visualize import draw_match_preview

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Match Preview"
KEY_ESCAPE = 27


class MatchSession:
    """
    Holds the loaded images and their MatchContext and executes queued commands.

    Attributes:
        preview: last rendered BGR preview
        last_result: MatchResult of the last "find"
        last_elapsed: wall-clock seconds of the last "find"
    """

    def __init__(self, needle_img, haystack_img, context, config=None):
        self.needle_img = needle_img
        self.haystack_img = haystack_img
        self.context = context
        self.config = config or MatchConfig()
        self.commands = deque()
        self.preview = draw_match_preview(haystack_img, needle_img, Offset(0, 0),
                                          symmetric_distance(context, Offset(0, 0)))
        self.last_result = None
        self.last_elapsed = None
        self.running = True

    def post(self, *command):
        self.commands.append(command)

    def process_pending(self):
        """Run every queued command in order. Returns True if the preview changed."""
        changed = False
        while self.commands:
            changed |= self.dispatch(self.commands.popleft())
        return changed

    def dispatch(self, command):
        name = command[0]
        if name == "drag":
            return self.drag(command[1], command[2])
        if name == "find":
            self.find()
            return True
        if name == "quit":
            self.running = False
            return False
        raise ValueError(f"unknown command: {name!r}")

    def drag(self, x, y):
        """Redraw the preview with the needle at (x, y). Ignored outside the valid range."""
        offset = Offset(int(x), int(y))
        if not self.context.valid_window().contains(offset):
            return False
        dist = symmetric_distance(self.context, offset)
        self.preview = draw_match_preview(self.haystack_img, self.needle_img, offset, dist)
        return True

    def find(self):
        cfg = self.config
        start = time.time()
        if cfg.searches_pose:
            result = pose_search(self.context.needle.edges, self.context.haystack,
                                 rotation_range=cfg.rotation_range, rotation_step=cfg.rotation_step,
                                 scale_range=cfg.scale_range, scale_step=cfg.scale_step,
                                 initial_step=cfg.initial_step, workers=cfg.workers)
        else:
            offset, dist = hierarchical_search_translation(self.context, cfg.initial_step)
            result = MatchResult(pose=Pose(offset=offset), distance=dist, needle=self.context.needle)
        self.last_elapsed = time.time() - start
        self.last_result = result
        edges = result.needle.edges if cfg.searches_pose else None
        self.preview = draw_match_preview(self.haystack_img, self.needle_img,
                                          result.offset, result.distance, needle_edges=edges)
        logger.info("found at (%d, %d) in %.2f secs", result.offset.dx, result.offset.dy, self.last_elapsed)
        return result


def run_viewer(session):
    """Show the preview window and feed mouse/keyboard events to the session."""

    def on_mouse(event, x, y, flags, param):
        if flags & cv2.EVENT_FLAG_LBUTTON:
            session.post("drag", x, y)

    cv2.namedWindow(WINDOW_TITLE, cv2.WINDOW_AUTOSIZE)
    cv2.setMouseCallback(WINDOW_TITLE, on_mouse)
    cv2.imshow(WINDOW_TITLE, session.preview)
    print("Press ESC to exit.")
    print("Press 'f' to find the best translation.")

    try:
        while session.running:
            ch = cv2.waitKey(20) & 0xFF
            # window closed by the user
            if cv2.getWindowProperty(WINDOW_TITLE, cv2.WND_PROP_VISIBLE) < 1:
                break
            if ch == KEY_ESCAPE:
                session.post("quit")
            elif ch == ord('f'):
                print("\tFinding best translation...", end="", flush=True)
                session.post("find")
            had_find = any(c[0] == "find" for c in session.commands)
            if session.process_pending():
                cv2.imshow(WINDOW_TITLE, session.preview)
            if had_find and session.last_result is not None:
                off = session.last_result.offset
                print(f" found at ({off.dx}, {off.dy}).")
                print(f"\tSearch took {session.last_elapsed:.2f} secs")
    finally:
        cv2.destroyWindow(WINDOW_TITLE)
