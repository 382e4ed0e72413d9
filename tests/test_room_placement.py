import itertools

import pytest

from delve.core.random import RandomSource
from delve.dungeon.geometry import Rect
from delve.dungeon.map import Map
from delve.dungeon.rooms import (
    ConsecutiveFailures,
    FixedAttempts,
    door_candidates,
    place_rooms,
    placement_ranges,
    rasterize_room,
)
from delve.dungeon.tiles import GRASS_TINT, ROOM_FLOOR_WEIGHTS, TileType

MAP_W, MAP_H = 52, 42
ROOM_W, ROOM_H = range(4, 8), range(4, 8)
OUTSIDE, BUFFER = 2, 2


def assert_valid_rooms(rooms, map_w=MAP_W, map_h=MAP_H, outside=OUTSIDE, buffer=BUFFER):
    for r1, r2 in itertools.combinations(rooms, 2):
        assert not r1.intersects_with_buffer(r2, buffer), f"{r1} overlaps {r2}"
    for r in rooms:
        assert r.left() >= outside
        assert r.top() >= outside
        assert r.right() <= map_w - outside
        assert r.bottom() <= map_h - outside


def test_fixed_attempts_budget():
    budget = FixedAttempts(3)
    assert not budget.exhausted(2, 100)
    assert budget.exhausted(3, 0)


def test_consecutive_failures_budget():
    budget = ConsecutiveFailures(10)
    assert not budget.exhausted(1000, 9)
    assert budget.exhausted(1, 10)


def test_placement_ranges_keep_largest_room_inside():
    x_range, y_range = placement_ranges((MAP_W, MAP_H), ROOM_W, ROOM_H, OUTSIDE)
    assert x_range == range(2, 42)
    assert y_range == range(2, 32)


def test_fixed_attempts_rooms_do_not_overlap():
    rooms = place_rooms((MAP_W, MAP_H), ROOM_W, ROOM_H, OUTSIDE, BUFFER, FixedAttempts(101), RandomSource(7))
    assert rooms
    assert len(rooms) <= 101
    assert_valid_rooms(rooms)


def test_consecutive_failures_fill_the_area():
    rooms = place_rooms(
        (MAP_W, MAP_H), ROOM_W, ROOM_H, OUTSIDE, BUFFER, ConsecutiveFailures(500), RandomSource(7)
    )
    assert len(rooms) > 5
    assert_valid_rooms(rooms)


@pytest.mark.parametrize("seed", [1, 2, 3, "abc"])
def test_room_invariants_across_seeds(seed):
    rooms = place_rooms((80, 60), range(3, 10), range(5, 7), 3, 1, ConsecutiveFailures(200), RandomSource(seed))
    assert_valid_rooms(rooms, 80, 60, 3, 1)


def test_zero_budget_places_nothing():
    assert place_rooms((MAP_W, MAP_H), ROOM_W, ROOM_H, OUTSIDE, BUFFER, FixedAttempts(0), RandomSource(1)) == []


def test_on_accept_sees_rooms_in_order():
    seen = []
    rooms = place_rooms(
        (MAP_W, MAP_H), ROOM_W, ROOM_H, OUTSIDE, BUFFER, FixedAttempts(50), RandomSource(3), on_accept=seen.append
    )
    assert seen == rooms


def test_empty_origin_range_raises():
    with pytest.raises(ValueError):
        place_rooms((12, 40), ROOM_W, ROOM_H, OUTSIDE, BUFFER, FixedAttempts(5), RandomSource(1))


def test_rasterize_room_draws_walls_and_floor():
    dmap = Map(20, 20)
    room = Rect(2, 3, 6, 5)
    rasterize_room(dmap, room, RandomSource(11))

    assert dmap.rooms == [room]
    for x in range(room.left(), room.right() + 1):
        for y in range(room.top(), room.bottom() + 1):
            tile = dmap.tile_at(x, y)
            on_border = x in (room.left(), room.right()) or y in (room.top(), room.bottom())
            if on_border:
                assert tile.tile_type is TileType.WALL
            else:
                assert tile.tile_type in ROOM_FLOOR_WEIGHTS
                assert tile.tile_type.is_walkable_tile()
                if tile.tile_type is TileType.GRASS:
                    assert tile.color == GRASS_TINT
                else:
                    assert tile.color is None
    # Nothing outside the room is touched
    assert dmap.tile_at(1, 3).tile_type is TileType.EMPTY
    assert dmap.tile_at(9, 3).tile_type is TileType.EMPTY


def test_door_candidates_are_wall_midpoints():
    room = Rect(10, 10, 6, 4)
    doors = [door for door, _outside in door_candidates(room)]
    assert doors == [(13, 10), (13, 14), (10, 12), (16, 12)]
    outside = [o for _door, o in door_candidates(room)]
    assert outside == [(13, 9), (13, 15), (9, 12), (17, 12)]
