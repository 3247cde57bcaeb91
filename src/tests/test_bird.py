import pytest

from src.flappy.bird import Bird
from src.flappy.collision import Box


def test_single_step_from_rest():
    bird = Bird(y=250.0, vy=0.0)
    bird.update_physics(gravity=0.5)
    assert bird.vy == 0.5
    assert bird.y == 250.5


def test_semi_implicit_euler_each_frame():
    bird = Bird(y=250.0, vy=-5.0)
    for _ in range(30):
        prev_y, prev_vy = bird.y, bird.vy
        bird.update_physics(gravity=0.5)
        assert bird.vy == prev_vy + 0.5
        assert bird.y == prev_y + bird.vy


@pytest.mark.parametrize("vy, expected", [(-20.0, -30.0), (1.5, 6.0), (40.0, 90.0)])
def test_rotation_follows_velocity_and_clamps(vy, expected):
    bird = Bird(vy=vy)
    bird.update_physics(gravity=0.5)
    assert bird.rotation == expected


def test_flap_sets_velocity_regardless_of_current():
    bird = Bird(vy=12.0)
    bird.flap(-5.0)
    assert bird.vy == -5.0
    bird.flap(-5.0)
    assert bird.vy == -5.0


def test_defaults_and_box():
    bird = Bird()
    assert (bird.x, bird.y, bird.vy, bird.rotation) == (80.0, 250.0, 0.0, 0.0)
    assert bird.box == Box(80.0, 250.0, 30, 30)
    assert bird.bottom == 280.0
