# region Imports
from collections import deque
from typing import Callable, Hashable, Iterable, List, Sequence, Tuple
# endregion


# region Predicate Partitioning
def connected_components(items: Sequence[Hashable], adjacent: Callable[[Hashable, Hashable], bool]) -> List[list]:
    """
    Partition items into connected components of the adjacency predicate.
    Components come out in order of their first member; members in BFS order.
    O(n^2) predicate calls, fine for small inputs.
    """
    visited = set()
    components = []
    for seed in items:
        if seed in visited:
            continue
        visited.add(seed)
        comp = []
        frontier = deque([seed])
        while frontier:
            cur = frontier.popleft()
            comp.append(cur)
            for other in items:
                if other not in visited and adjacent(cur, other):
                    visited.add(other)
                    frontier.append(other)
        components.append(comp)
    return components
# endregion


# region Windowed Partitioning
def chebyshev_adjacent(radius: int) -> Callable[[Tuple[int, int], Tuple[int, int]], bool]:
    def adjacent(a, b):
        return abs(a[0] - b[0]) <= radius and abs(a[1] - b[1]) <= radius

    return adjacent


def cluster_within(cells: Iterable[Tuple[int, int]], radius: int) -> List[List[Tuple[int, int]]]:
    """
    Same partition as connected_components(cells, chebyshev_adjacent(radius)),
    but looks neighbors up in a (2r+1)^2 window instead of scanning every cell.
    """
    cells = list(cells)
    members = set(cells)
    offsets = [
        (dx, dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
        if dx or dy
    ]
    visited = set()
    components = []
    for seed in cells:
        if seed in visited:
            continue
        visited.add(seed)
        comp = []
        frontier = deque([seed])
        while frontier:
            x, y = frontier.popleft()
            comp.append((x, y))
            for dx, dy in offsets:
                nb = (x + dx, y + dy)
                if nb in members and nb not in visited:
                    visited.add(nb)
                    frontier.append(nb)
        components.append(comp)
    return components
# endregion
