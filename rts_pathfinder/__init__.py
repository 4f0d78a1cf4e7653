from .grid import TerrainGrid, cell_center, world_to_cell
from .models import ChokePoint, MapCell, PathResult, Ramp, RampCluster
from .pathfinder import Pathfinder
from .ramps import MapAnalysis, RampDetector, RampParams
from .chokepoints import ChokePointService
from .placement import PlacementFilter

__all__ = [
    "TerrainGrid", "cell_center", "world_to_cell",
    "ChokePoint", "MapCell", "PathResult", "Ramp", "RampCluster",
    "Pathfinder", "MapAnalysis", "RampDetector", "RampParams",
    "ChokePointService", "PlacementFilter",
]
