# region Imports
import math
from typing import Dict, Iterable, List
from .config import PATROL_AVOID_RADIUS
from .models import WorldPos
# endregion


# region Circular Paths
def circular_path(
    center: WorldPos,
    radius: float,
    segments: int,
    avoid: Iterable[WorldPos] = (),
    avoid_radius: float = PATROL_AVOID_RADIUS,
) -> List[WorldPos]:
    """Evenly spaced points on a circle, minus those within avoid_radius of any avoided position."""
    avoid = list(avoid)
    out = []
    for i in range(max(0, segments)):
        angle = 2.0 * math.pi * i / segments
        p = (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))
        if any(math.hypot(p[0] - a[0], p[1] - a[1]) < avoid_radius for a in avoid):
            continue
        out.append(p)
    return out
# endregion


# region Path Cache
class PathCache:
    """Patrol paths by caller-chosen key; built once, reused until cleared."""

    def __init__(self):
        self._paths: Dict[str, List[WorldPos]] = {}

    def get_or_create(self, key: str, center: WorldPos, radius: float, segments: int,
                      avoid: Iterable[WorldPos] = (), avoid_radius: float = PATROL_AVOID_RADIUS) -> List[WorldPos]:
        cached = self._paths.get(key)
        if cached is not None:
            return cached
        path = circular_path(center, radius, segments, avoid, avoid_radius)
        self._paths[key] = path
        return path

    def clear(self, key: str) -> None:
        self._paths.pop(key, None)

    def clear_all(self) -> None:
        self._paths.clear()

    def __contains__(self, key):
        return key in self._paths

    def __len__(self):
        return len(self._paths)
# endregion
