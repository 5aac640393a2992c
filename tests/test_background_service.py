import math

import pytest

from src.services.background_service import (
    GRID_SIZE,
    frame_heights,
    grid_positions,
    grid_spacing,
    line_indices,
    wave_height,
)


def test_grid_geometry():
    positions = grid_positions()

    assert len(positions) == GRID_SIZE * GRID_SIZE
    assert grid_spacing() == pytest.approx(1000 / 59)
    assert positions[0] == pytest.approx((-30 * 1000 / 59, -30 * 1000 / 59))
    # Each point links right and down: 2 * n * (n - 1) segments
    assert len(line_indices()) == 2 * (2 * GRID_SIZE * (GRID_SIZE - 1))


def test_small_grid_lines():
    assert line_indices(2) == [0, 1, 0, 2, 1, 3, 2, 3]


def test_wave_at_origin_and_time_zero():
    assert wave_height(0, 0, 0) == pytest.approx(12.0)


def test_pointer_ripple_only_nearby():
    t = math.pi / 16  # sin(8t) == 1
    assert wave_height(0, 0, t, pointer=(0, 0)) - wave_height(0, 0, t) == pytest.approx(25.0)
    assert wave_height(0, 0, t, pointer=(500, 500)) == pytest.approx(wave_height(0, 0, t))


def test_frame_has_one_height_per_point():
    assert len(frame_heights(1000.0)) == GRID_SIZE * GRID_SIZE
