# models.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Cell = Tuple[int, int]
WorldPos = Tuple[float, float]


@dataclass(frozen=True)
class MapCell:
    x: int
    y: int
    height: int
    walkable: bool
    buildable: bool


@dataclass(frozen=True)
class ChokePoint:
    x: int
    y: int
    height: int

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)

    @property
    def center(self) -> WorldPos:
        return (self.x + 0.5, self.y + 0.5)


@dataclass
class RampCluster:
    """Candidate ramp cells plus their heights, in discovery order."""
    cells: List[Cell]
    heights: List[int] = field(default_factory=list)

    def __len__(self):
        return len(self.cells)

    @property
    def centroid(self) -> WorldPos:
        n = len(self.cells)
        return (sum(c[0] for c in self.cells) / n, sum(c[1] for c in self.cells) / n)

    @property
    def min_height(self) -> int:
        return min(self.heights)

    @property
    def max_height(self) -> int:
        return max(self.heights)

    @property
    def height_range(self) -> int:
        return self.max_height - self.min_height

    @property
    def levels(self) -> int:
        return len(set(self.heights))


@dataclass(frozen=True)
class Ramp:
    x: float
    y: float
    cells: int = 0
    min_height: int = 0
    max_height: int = 0

    @property
    def position(self) -> WorldPos:
        return (self.x, self.y)


@dataclass
class PathResult:
    waypoints: List[WorldPos]
    cost: float
    expansions: int
    start_cell: Optional[Cell] = None
    goal_cell: Optional[Cell] = None

    @property
    def found(self) -> bool:
        return bool(self.waypoints)
