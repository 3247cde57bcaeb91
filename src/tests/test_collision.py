from src.flappy.collision import Box, overlaps, pipe_boxes, first_hit
from src.flappy.pipes import PipePair


def test_overlapping_boxes_collide():
    assert overlaps(Box(0, 0, 10, 10), Box(5, 5, 10, 10))
    assert overlaps(Box(5, 5, 10, 10), Box(0, 0, 10, 10))


def test_edge_touching_boxes_do_not_collide():
    assert not overlaps(Box(0, 0, 10, 10), Box(10, 0, 10, 10))
    assert not overlaps(Box(0, 0, 10, 10), Box(0, 10, 10, 10))
    assert not overlaps(Box(0, 0, 10, 10), Box(10, 10, 10, 10))


def test_contained_box_collides():
    assert overlaps(Box(0, 0, 100, 100), Box(40, 40, 5, 5))


def test_fractional_overlap_collides():
    assert overlaps(Box(0, 0, 10, 10), Box(9.5, 9.5, 1, 1))


def test_pipe_boxes_match_pair_geometry():
    pipe = PipePair(x=100.0, top_height=200.0, bottom_y=350.0, bottom_height=200.0)
    top, bottom = pipe_boxes(pipe, pipe_w=60)
    assert top == Box(100.0, 0.0, 60, 200.0)
    assert bottom == Box(100.0, 350.0, 60, 200.0)


def test_first_hit_inside_gap_is_none():
    pipe = PipePair(x=70.0, top_height=200.0, bottom_y=350.0, bottom_height=200.0)
    bird = Box(80, 250, 30, 30)
    assert first_hit(bird, [pipe]) is None


def test_first_hit_reports_segment():
    far = PipePair(x=300.0, top_height=100.0, bottom_y=250.0, bottom_height=300.0)
    near = PipePair(x=70.0, top_height=260.0, bottom_y=410.0, bottom_height=140.0)
    bird = Box(80, 250, 30, 30)
    assert first_hit(bird, [near, far]) == Box(70.0, 0.0, 60, 260.0)


def test_bird_resting_on_bottom_segment_edge_is_safe():
    pipe = PipePair(x=70.0, top_height=100.0, bottom_y=280.0, bottom_height=270.0)
    assert first_hit(Box(80, 250, 30, 30), [pipe]) is None
