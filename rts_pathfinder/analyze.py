# region Header
"""
analyze.py - offline terrain analysis for one map

Usage:
  rts-analyze MAP_DIR_OR_NPZ [--start X,Y --goal X,Y] [--json OUT] [--plot [PNG]]
"""
# endregion

# region Imports
import argparse
import logging
import math
import sys
from . import config
from .chokepoints import ChokePointService
from .export import analysis_payload, choke_payload, positions_payload, write_json
from .loader import load_grid
from .pathfinder import Pathfinder
from .ramps import RampDetector
# endregion

logger = logging.getLogger(__name__)


def finite_float(text):
    try:
        v = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {text!r}")
    if not math.isfinite(v):
        raise argparse.ArgumentTypeError(f"expected a finite number, got {text!r}")
    return v


def parse_point(text):
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y got {text!r}")
    return (finite_float(parts[0]), finite_float(parts[1]))


def build_parser():
    ap = argparse.ArgumentParser(prog="rts-analyze", description="Find ramps, choke points and paths on a map.")
    ap.add_argument("map", nargs="?", default=config.MAP_DIR, help="map directory (PNG planes) or .npz archive")
    ap.add_argument("--start", type=parse_point, help="path start X,Y")
    ap.add_argument("--goal", type=parse_point, help="path goal X,Y")
    ap.add_argument("--max-distance", type=finite_float, default=config.DEFENSIVE_MAX_DISTANCE)
    ap.add_argument("--json", dest="json_out", help="write results to this JSON file")
    ap.add_argument("--plot", nargs="?", const="", default=None, help="plot results (to PNG if a path is given)")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if (args.start is None) != (args.goal is None):
        logger.error("--start and --goal must be given together")
        return 2

    try:
        grid = load_grid(args.map)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load map: {e}")
        return 1

    analysis = RampDetector(grid).analyze()
    for r in analysis.ramps:
        print(f"ramp   ({r.x:.1f}, {r.y:.1f})  cells={r.cells}  heights={r.min_height}-{r.max_height}")
    for c in analysis.choke_points:
        print(f"choke  ({c.x}, {c.y})  height={c.height}")

    payload = analysis_payload(analysis)
    path, lip = [], []
    if args.start is not None:
        pathfinder = Pathfinder(grid)
        chokes = ChokePointService(grid, pathfinder)
        path = pathfinder.find_path(args.start, args.goal)
        print(f"path   {len(path)} waypoints")
        choke = chokes.defensive_choke_point(args.start, args.goal, args.max_distance)
        if choke is not None:
            lip = chokes.entire_choke_point(choke)
            print(f"defensive choke ({choke.x}, {choke.y})  lip={len(lip)} cells")
        payload["path"] = positions_payload(path)["positions"]
        payload["defensive_choke"] = choke_payload(choke)
        payload["lip"] = [choke_payload(c) for c in lip]

    if args.json_out:
        write_json(payload, args.json_out)

    if args.plot is not None:
        from .viz import show_terrain_analysis
        show_terrain_analysis(grid, analysis, path=path, lip=lip, out_path=args.plot or None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
