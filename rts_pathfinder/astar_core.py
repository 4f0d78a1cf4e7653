# region Imports and Typing
from typing import Any, Callable, List, Optional, Tuple
import heapq
from .models import Cell
# endregion

# cardinals first, then diagonals
STEPS_8 = ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (1, -1), (-1, 1), (-1, -1))

# region Neighbor Generation
def neighbors_8(u, W, H):
    x, y = u
    for dx, dy in STEPS_8:
        xx, yy = x + dx, y + dy
        if 0 <= xx < W and 0 <= yy < H:
            yield (xx, yy)
# endregion

# region Path Reconstruction
def reconstruct(parent, goal):
    path = []
    v = goal
    while v is not None:
        path.append(v)
        v = parent.get(v)
    path.reverse()
    return path
# endregion

# region A* Algorithm
def astar(
    start: Cell,
    goal: Cell,
    neighbors_fn: Callable[[Cell], Any],
    edge_cost_fn: Callable[[Cell, Cell], Optional[float]],
    heuristic_fn: Callable[[Cell, Cell], float],
) -> Tuple[Optional[List[Cell]], float, int, List[Cell]]:
    """
    Returns:
      path (None if unreachable), total_cost, expansions, expanded_order

    Open entries are (f, h, counter, node); the counter makes equal-f pops
    follow insertion order. Improved nodes are pushed again and the stale
    entries are skipped on pop once the node is closed.
    """
    if start == goal:
        return [start], 0.0, 0, [start]

    counter = 0
    openh: List[Tuple[float, float, int, Cell]] = []
    h0 = heuristic_fn(start, goal)
    heapq.heappush(openh, (h0, h0, counter, start))
    g = {start: 0.0}
    parent = {start: None}
    closed = set()
    expanded_order = []

    while openh:
        f, h, _, u = heapq.heappop(openh)
        if u in closed:
            continue
        closed.add(u)
        expanded_order.append(u)

        if u == goal:
            return reconstruct(parent, u), g[u], len(expanded_order), expanded_order

        gu = g[u]
        # region Neighbor Loop
        for v in neighbors_fn(u):
            if v in closed:
                continue
            c = edge_cost_fn(u, v)
            if c is None:
                continue
            alt = gu + c
            old = g.get(v)
            if old is None or alt < old - 1e-12:
                g[v] = alt
                parent[v] = u
                hv = heuristic_fn(v, goal)
                counter += 1
                heapq.heappush(openh, (alt + hv, hv, counter, v))
        # endregion

    return None, float("inf"), len(expanded_order), expanded_order
# endregion
