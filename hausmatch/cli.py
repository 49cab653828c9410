"""
Command line entry point: locate needle.png inside haystack.png.

    hausmatch needle.png haystack.png              # interactive window
    hausmatch needle.png haystack.png --no-gui     # search once and print
"""

import argparse
import logging
import sys

from .config import MatchConfig
from .edges import detect_edges
from .io import ImageLoadError, load_image, save_image
from .models import EdgeMap, MatchContext
from .viewer import MatchSession, run_viewer

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Exit with status 1 (not argparse's 2) on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser():
    ap = _ArgumentParser(prog="hausmatch",
                         description="Find a needle image in a haystack image by Hausdorff distance")
    ap.add_argument('needle', help='image to search for')
    ap.add_argument('haystack', help='image to search in')
    ap.add_argument('--config', help='JSON file with MatchConfig fields')
    ap.add_argument('--step', type=int, help='initial translation step (pixels)')
    ap.add_argument('--rotation', type=float, nargs=3, metavar=('MIN', 'MAX', 'STEP'),
                    help='rotation sweep in degrees')
    ap.add_argument('--scale', type=float, nargs=3, metavar=('MIN', 'MAX', 'STEP'),
                    help='scale sweep')
    ap.add_argument('--low', type=int, help='Canny low threshold')
    ap.add_argument('--high', type=int, help='Canny high threshold')
    ap.add_argument('--workers', type=int, help='processes for the pose sweep')
    ap.add_argument('--no-gui', action='store_true', help='search once and print the result')
    ap.add_argument('--out', help='write the match preview to this path')
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap


def config_from_args(args):
    cfg = MatchConfig.from_json(args.config) if args.config else MatchConfig()
    overrides = cfg.to_dict()
    if args.step is not None:
        overrides["initial_step"] = args.step
    if args.rotation is not None:
        overrides["rotation_range"] = args.rotation[:2]
        overrides["rotation_step"] = args.rotation[2]
    if args.scale is not None:
        overrides["scale_range"] = args.scale[:2]
        overrides["scale_step"] = args.scale[2]
    if args.low is not None:
        overrides["low_threshold"] = args.low
    if args.high is not None:
        overrides["high_threshold"] = args.high
    if args.workers is not None:
        overrides["workers"] = args.workers
    return MatchConfig.from_dict(overrides)


def _load_edges(path, cfg):
    print(f"Opening {path}")
    img = load_image(path)
    edges = detect_edges(img, cfg.low_threshold, cfg.high_threshold, blur=cfg.blur)
    return img, EdgeMap.from_edges(edges)


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        cfg = config_from_args(args)
        haystack_img, haystack = _load_edges(args.haystack, cfg)
        needle_img, needle = _load_edges(args.needle, cfg)
        context = MatchContext(needle=needle, haystack=haystack)
        session = MatchSession(needle_img, haystack_img, context, cfg)
        if args.no_gui:
            result = session.find()
            pose = result.pose
            print(f"found at ({pose.offset.dx}, {pose.offset.dy}), "
                  f"rotation={pose.rotation:g} deg, scale={pose.scale:g}, dist={result.distance:.2f}")
            print(f"Search took {session.last_elapsed:.2f} secs")
        else:
            run_viewer(session)
        if args.out:
            save_image(session.preview, args.out)
            print(f"Preview -> {args.out}")
    except ImageLoadError as e:
        print(e, file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
