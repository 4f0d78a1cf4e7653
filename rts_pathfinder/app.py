# app.py - Flask JSON API over one loaded map
# deps: pip install flask numpy pillow

from __future__ import annotations
import io
import logging
import math
from typing import Any, Dict, Optional
from flask import Flask, jsonify, make_response, request
from PIL import Image

from . import config
from .chokepoints import ChokePointService
from .export import analysis_payload, choke_payload, positions_payload
from .grid import TerrainGrid
from .pathfinder import Pathfinder
from .ramps import RampDetector

logger = logging.getLogger(__name__)


def _finite(value) -> float:
    v = float(value)
    if not math.isfinite(v):
        raise ValueError(f"non-finite value: {value!r}")
    return v


def _point(value) -> tuple:
    x, y = value
    return (_finite(x), _finite(y))


def create_app(grid: TerrainGrid) -> Flask:
    app = Flask(__name__)
    pathfinder = Pathfinder(grid)
    chokes = ChokePointService(grid, pathfinder)
    detector = RampDetector(grid)
    cache: Dict[str, Any] = {}

    def analysis():
        # ramp/choke detection runs once per loaded map
        if "analysis" not in cache:
            cache["analysis"] = detector.analyze()
        return cache["analysis"]

    # ======= CORS =======
    @app.after_request
    def _cors(resp):
        resp.headers["Access-Control-Allow-Origin"] = "*"
        resp.headers["Access-Control-Allow-Headers"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        return resp

    # ======= grid queries =======
    @app.route("/", methods=["GET"])
    def root():
        return {"ok": True, "width": grid.width, "height": grid.height,
                "path": "/path (POST JSON)", "ramps": "/ramps", "chokepoints": "/chokepoints"}

    @app.route("/grid/point", methods=["GET"])
    def grid_point():
        try:
            x = int(request.args["x"]); y = int(request.args["y"])
        except (KeyError, ValueError):
            return jsonify({"error": "integer x and y required"}), 400
        return jsonify({"x": x, "y": y, "walkable": grid.is_walkable(x, y),
                        "buildable": grid.is_buildable(x, y), "height": grid.height_at(x, y)})

    @app.route("/grid/height.png", methods=["GET"])
    def grid_height_png():
        buf = io.BytesIO()
        Image.fromarray(grid.height_map()).save(buf, "PNG")
        buf.seek(0)
        resp = make_response(buf.read())
        resp.headers["Content-Type"] = "image/png"
        return resp

    # ======= pathing =======
    @app.route("/path", methods=["POST"])
    def path():
        """
        JSON body: {"start":[x,y], "goal":[x,y]}  or  {"points":[[x,y], ...]}
        """
        data = request.get_json(force=True, silent=True) or {}
        try:
            if "points" in data:
                pts = [_point(p) for p in data["points"]]
                if len(pts) < 2:
                    return jsonify({"error": "points must have at least 2 entries"}), 400
                return jsonify(positions_payload(pathfinder.find_route(pts)))
            result = pathfinder.find_path_result(_point(data["start"]), _point(data["goal"]))
        except (KeyError, TypeError, ValueError):
            return jsonify({"error": "finite start and goal as [x, y] required"}), 400

        resp = positions_payload(result.waypoints)
        resp.update({"found": result.found, "expansions": result.expansions,
                     "cost": result.cost if result.found else None})
        return jsonify(resp)

    # ======= terrain features =======
    @app.route("/ramps", methods=["GET"])
    def ramps():
        return jsonify({"ramps": analysis_payload(analysis())["ramps"]})

    @app.route("/chokepoints", methods=["GET"])
    def chokepoints():
        return jsonify({"choke_points": analysis_payload(analysis())["choke_points"]})

    @app.route("/chokepoint/defensive", methods=["POST"])
    def chokepoint_defensive():
        data = request.get_json(force=True, silent=True) or {}
        try:
            start, goal = _point(data["start"]), _point(data["goal"])
            max_distance = _finite(data.get("max_distance", config.DEFENSIVE_MAX_DISTANCE))
        except (KeyError, TypeError, ValueError):
            return jsonify({"error": "finite start and goal as [x, y] required"}), 400

        choke = chokes.defensive_choke_point(start, goal, max_distance)
        resp: Dict[str, Optional[Any]] = {"choke_point": choke_payload(choke)}
        if choke is not None:
            lip = chokes.entire_choke_point(choke)
            resp["lip"] = [choke_payload(c) for c in lip]
            resp["bottom"] = [choke_payload(c) for c in chokes.entire_bottom_of_ramp(choke)]
            resp["wall_off"] = [choke_payload(c) for c in chokes.wall_off_points(lip)]
        return jsonify(resp)

    return app


if __name__ == "__main__":
    from .loader import load_grid

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    create_app(load_grid(config.MAP_DIR)).run(host=config.API_HOST, port=config.API_PORT, threaded=True)
