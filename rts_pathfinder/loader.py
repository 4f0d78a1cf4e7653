"""
Build a TerrainGrid from map bitmaps on disk.

A map directory holds walkable.png, buildable.png and height.png (8-bit
grayscale, row 0 = y 0). Non-zero pixels are walkable / buildable. An .npz
archive with walkable, buildable and height arrays works as well.
"""

# region Imports
from __future__ import annotations
import logging
from pathlib import Path
import numpy as np
from PIL import Image
from .grid import TerrainGrid
# endregion

logger = logging.getLogger(__name__)

PLANE_FILES = {"walkable": "walkable.png", "buildable": "buildable.png", "height": "height.png"}


def _read_gray(path: Path) -> np.ndarray:
    if not path.exists():
        raise FileNotFoundError(f"Map plane not found: {path}")
    with Image.open(path) as im:
        return np.asarray(im.convert("L"), dtype=np.uint8)


def load_map_dir(map_dir) -> TerrainGrid:
    map_dir = Path(map_dir)
    planes = {name: _read_gray(map_dir / fname) for name, fname in PLANE_FILES.items()}
    shapes = {name: arr.shape for name, arr in planes.items()}
    if len(set(shapes.values())) != 1:
        raise ValueError(f"Map planes differ in size: {shapes}")
    grid = TerrainGrid.from_masks(planes["walkable"] > 0, planes["buildable"] > 0, planes["height"])
    logger.info(f"Loaded {grid} from {map_dir}")
    return grid


def load_npz(path) -> TerrainGrid:
    with np.load(path) as data:
        missing = [k for k in PLANE_FILES if k not in data]
        if missing:
            raise ValueError(f"{path} is missing arrays: {missing}")
        return TerrainGrid.from_masks(data["walkable"], data["buildable"], data["height"])


def load_grid(path) -> TerrainGrid:
    path = Path(path)
    if path.suffix == ".npz":
        return load_npz(path)
    return load_map_dir(path)


def save_map_dir(grid: TerrainGrid, map_dir) -> None:
    map_dir = Path(map_dir)
    map_dir.mkdir(parents=True, exist_ok=True)
    Image.fromarray(grid.walkable_mask().astype(np.uint8) * 255).save(map_dir / PLANE_FILES["walkable"])
    Image.fromarray(grid.buildable_mask().astype(np.uint8) * 255).save(map_dir / PLANE_FILES["buildable"])
    Image.fromarray(grid.height_map()).save(map_dir / PLANE_FILES["height"])
