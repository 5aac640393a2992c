"""
Particle grid for the animated landing background.

The browser draws the points and lines; the geometry and the wave height
field are computed here so every client animates the same surface.
"""
import math
from typing import List, Optional, Tuple

GRID_SIZE = 60
GRID_EXTENT = 1000.0
TIME_SCALE = 0.0003  # per millisecond
POINTER_RADIUS = 150.0


def grid_spacing(grid_size: int = GRID_SIZE) -> float:
    return GRID_EXTENT / (grid_size - 1)


def grid_positions(grid_size: int = GRID_SIZE) -> List[Tuple[float, float]]:
    """(x, z) of every point, row by row, centred on the origin."""
    spacing = grid_spacing(grid_size)
    half = grid_size / 2
    return [
        ((j - half) * spacing, (i - half) * spacing)
        for i in range(grid_size)
        for j in range(grid_size)
    ]


def line_indices(grid_size: int = GRID_SIZE) -> List[int]:
    """Index pairs joining each point to its right and lower neighbours."""
    indices: List[int] = []
    for i in range(grid_size):
        for j in range(grid_size):
            index = i * grid_size + j
            if j < grid_size - 1:
                indices.extend((index, index + 1))
            if i < grid_size - 1:
                indices.extend((index, index + grid_size))
    return indices


def wave_height(x: float, z: float, t: float, pointer: Optional[Tuple[float, float]] = None) -> float:
    """Height of the surface at (x, z) for scaled time t, with the pointer ripple."""
    y = (
        math.sin(t + x * 0.015) * 15
        + math.cos(t * 1.3 + z * 0.015) * 12
        + math.sin(t * 1.7 + (x + z) * 0.025) * 8
    )
    if pointer is not None:
        distance = math.hypot(x - pointer[0], z - pointer[1])
        if distance < POINTER_RADIUS:
            influence = (1 - distance / POINTER_RADIUS) ** 2
            y += math.sin(t * 8 - distance * 0.05) * 25 * influence
    return y


def frame_heights(
    time_ms: float,
    pointer: Optional[Tuple[float, float]] = None,
    grid_size: int = GRID_SIZE,
) -> List[float]:
    t = time_ms * TIME_SCALE
    return [wave_height(x, z, t, pointer) for x, z in grid_positions(grid_size)]
