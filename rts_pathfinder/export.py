# region Imports
from __future__ import annotations
import json
import logging
from typing import Optional, Sequence
from .models import ChokePoint, WorldPos
# endregion

logger = logging.getLogger(__name__)


# region Serializers
def positions_payload(path: Sequence[WorldPos]) -> dict:
    return {"positions": [{"x": float(x), "y": float(y)} for x, y in path]}


def choke_payload(c: Optional[ChokePoint]) -> Optional[dict]:
    if c is None:
        return None
    return {"x": c.x, "y": c.y, "height": c.height}


def analysis_payload(analysis) -> dict:
    return {
        "ramps": [
            {"x": r.x, "y": r.y, "cells": r.cells, "min_height": r.min_height, "max_height": r.max_height}
            for r in analysis.ramps
        ],
        "choke_points": [choke_payload(c) for c in analysis.choke_points],
        "rejected_clusters": analysis.rejected_clusters,
        "start_locations": [{"x": float(x), "y": float(y)} for x, y in analysis.start_locations],
    }
# endregion


# region File Export
def write_json(payload: dict, out_path: str) -> None:
    with open(out_path, "w") as f:
        json.dump(payload, f, indent=2)
    logger.info(f"Wrote {out_path}")


def write_path_json(path: Sequence[WorldPos], out_path: str = "route.json") -> None:
    write_json(positions_payload(path), out_path)
# endregion
