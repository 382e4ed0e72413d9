from delve.dungeon.pathfinding import find_path, flood_fill, manhattan


def grid_walkable(width, height, walls=()):
    blocked = set(walls)

    def walkable(x, y):
        return 0 <= x < width and 0 <= y < height and (x, y) not in blocked

    return walkable


def unit_cost(_a, _b):
    return 1


def assert_unit_steps(path):
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        assert abs(ax - bx) + abs(ay - by) == 1, f"non-orthogonal step {(ax, ay)} -> {(bx, by)}"


def test_open_grid_path_is_manhattan_optimal():
    path = find_path((0, 0), (4, 4), grid_walkable(5, 5), unit_cost)
    assert path is not None
    assert len(path) == 9
    assert_unit_steps(path)


def test_path_runs_from_goal_back_to_start():
    path = find_path((0, 0), (3, 1), grid_walkable(5, 5), unit_cost)
    assert path[0] == (3, 1)
    assert path[-1] == (0, 0)


def test_always_walkable_predicate_still_terminates():
    path = find_path((0, 0), (4, 4), lambda x, y: True, unit_cost)
    assert path is not None and len(path) == 9


def test_unwalkable_goal_means_no_path():
    walkable = grid_walkable(5, 5, walls=[(4, 4)])
    assert find_path((0, 0), (4, 4), walkable, unit_cost) is None
    assert find_path((4, 4), (4, 4), walkable, unit_cost) is None


def test_start_equal_to_goal():
    assert find_path((2, 2), (2, 2), grid_walkable(5, 5), unit_cost) == [(2, 2)]


def test_start_cell_need_not_be_walkable():
    walkable = grid_walkable(5, 5, walls=[(0, 0)])
    path = find_path((0, 0), (2, 0), walkable, unit_cost)
    assert path == [(2, 0), (1, 0), (0, 0)]


def test_routes_around_wall_through_gap():
    # Column x=2 is blocked except at the bottom row.
    walls = [(2, y) for y in range(4)]
    path = find_path((0, 0), (4, 0), grid_walkable(5, 5, walls), unit_cost)
    assert path is not None
    assert (2, 4) in path
    assert len(path) == 13
    assert_unit_steps(path)


def test_fully_blocked_goal_is_unreachable():
    walls = [(2, y) for y in range(5)]
    assert find_path((0, 0), (4, 0), grid_walkable(5, 5, walls), unit_cost) is None


def test_move_cost_steers_path_away_from_expensive_cells():
    def cost(_a, b):
        return 10 if b == (1, 1) else 1

    path = find_path((0, 1), (2, 1), grid_walkable(3, 3), cost)
    assert (1, 1) not in path
    assert len(path) == 5


def test_move_cost_only_called_for_walkable_targets():
    walls = {(1, 0), (1, 2)}
    walkable = grid_walkable(3, 3, walls)
    seen = []

    def cost(a, b):
        seen.append(b)
        return 1

    find_path((0, 0), (2, 2), walkable, cost)
    assert seen
    assert all(walkable(*b) for b in seen)


def test_manhattan():
    assert manhattan((0, 0), (3, 4)) == 7
    assert manhattan((-1, 2), (1, -2)) == 6


def test_flood_fill_collects_connected_region():
    walls = [(2, y) for y in range(3)]
    walkable = grid_walkable(5, 3, walls)
    left = flood_fill((0, 0), walkable)
    assert left == {(x, y) for x in range(2) for y in range(3)}
    assert flood_fill((2, 0), walkable) == set()
