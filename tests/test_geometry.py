import pytest

from delve.core.random import RandomSource
from delve.dungeon.geometry import Coords, Rect, clamp


def test_rect_intersects_itself():
    rect = Rect(0, 0, 5, 5)
    assert rect.intersects(rect)
    assert rect.intersects(Rect(2, 2, 5, 5))


def test_partial_overlap_intersects():
    assert Rect(0, 0, 10, 10).intersects(Rect(2, 2, 10, 10))


def test_touching_edges_count_as_intersection():
    # right() of the first is 5, left() of the second is 5
    assert Rect(0, 0, 5, 5).intersects(Rect(5, 0, 3, 3))
    assert Rect(0, 0, 5, 5).intersects(Rect(0, 5, 3, 3))


def test_separated_rects_do_not_intersect():
    assert not Rect(0, 0, 5, 5).intersects(Rect(6, 0, 3, 3))
    assert not Rect(0, 0, 5, 5).intersects(Rect(0, 6, 3, 3))
    assert not Rect(10, 10, 2, 2).intersects(Rect(0, 0, 2, 2))


def test_inclusive_bounds():
    r = Rect(3, 4, 5, 6)
    assert (r.left(), r.right(), r.top(), r.bottom()) == (3, 8, 4, 10)
    assert r.contains((8, 10))
    assert r.contains((3, 4))
    assert not r.contains((9, 10))


def test_center_uses_floor_division():
    assert Rect(0, 0, 5, 5).center() == (2, 2)
    assert Rect(10, 20, 7, 4).center() == (13, 22)


def test_buffer_grows_origin_and_size():
    assert Rect(5, 5, 4, 4).buffer(2) == Rect(3, 3, 6, 6)


def test_buffer_clamps_origin_at_zero():
    # The origin stops at 0 but the size still only grows by the buffer.
    assert Rect(1, 0, 4, 4).buffer(2) == Rect(0, 0, 6, 6)


def test_intersects_with_buffer_requires_gap_larger_than_buffer():
    a = Rect(10, 0, 4, 4)
    assert a.intersects_with_buffer(Rect(16, 0, 4, 4), 2)
    assert not a.intersects_with_buffer(Rect(17, 0, 4, 4), 2)


def test_random_rect_respects_half_open_ranges():
    rng = RandomSource(99)
    for _ in range(200):
        r = Rect.random_rect(rng, range(2, 5), range(3, 4), range(4, 8), range(1, 2))
        assert 2 <= r.x < 5
        assert r.y == 3
        assert 4 <= r.width < 8
        assert r.height == 1


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        Rect(0, 0, -1, 3)


def test_clamp():
    assert clamp(-3, 0, 5) == 0
    assert clamp(7, 0, 5) == 5
    assert clamp(4, 0, 5) == 4


def test_coords_order_and_distance():
    assert Coords(1, 9) < Coords(2, 0)
    assert Coords(1, 1) < Coords(1, 2)
    assert Coords(3, 4) == Coords.of((3, 4))
    assert Coords(0, 0).distance(Coords(3, -4)) == 7
    assert Coords(3, 4).as_tuple() == (3, 4)
