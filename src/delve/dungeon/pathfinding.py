from __future__ import annotations

import heapq
import itertools
from collections import deque
from typing import Callable, Dict, List, Optional, Set, Tuple

Point = Tuple[int, int]
Walkable = Callable[[int, int], bool]
MoveCost = Callable[[Point, Point], int]

_ORTHOGONAL = ((1, 0), (-1, 0), (0, 1), (0, -1))


def manhattan(a: Point, b: Point) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def find_path(
    start: Point,
    goal: Point,
    walkable: Walkable,
    move_cost: MoveCost,
) -> Optional[List[Point]]:
    """A* search over a 4-connected grid.

    ``walkable(x, y)`` decides which cells may be entered; ``move_cost(a, b)``
    gives the non-negative cost of stepping from ``a`` to ``b`` and is only
    called for walkable ``b``. The start cell itself is never tested.

    Returns the path ordered from ``goal`` back to ``start`` (both included),
    or None when the goal is not walkable or cannot be reached.
    """
    if not walkable(*goal):
        return None

    counter = itertools.count()
    open_heap: List[Tuple[int, int, Point]] = [(manhattan(start, goal), next(counter), start)]
    g_score: Dict[Point, int] = {start: 0}
    came_from: Dict[Point, Point] = {}
    closed: Set[Point] = set()

    while open_heap:
        _f, _, current = heapq.heappop(open_heap)
        if current in closed:
            # Stale entry superseded by a cheaper one
            continue
        if current == goal:
            return _reconstruct_path(came_from, current)
        closed.add(current)

        cx, cy = current
        for dx, dy in _ORTHOGONAL:
            neighbor = (cx + dx, cy + dy)
            if neighbor in closed or not walkable(*neighbor):
                continue
            tentative = g_score[current] + move_cost(current, neighbor)
            if tentative >= g_score.get(neighbor, float("inf")):
                continue
            came_from[neighbor] = current
            g_score[neighbor] = tentative
            heapq.heappush(open_heap, (tentative + manhattan(neighbor, goal), next(counter), neighbor))
    return None


def _reconstruct_path(came_from: Dict[Point, Point], current: Point) -> List[Point]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    return path


def flood_fill(start: Point, passable: Walkable) -> Set[Point]:
    """Return every cell 4-connected to ``start`` through passable cells."""
    if not passable(*start):
        return set()
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for dx, dy in _ORTHOGONAL:
            n = (x + dx, y + dy)
            if n not in seen and passable(*n):
                seen.add(n)
                q.append(n)
    return seen
