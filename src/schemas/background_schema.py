from typing import List

from pydantic import BaseModel


class GridOut(BaseModel):
    grid_size: int
    spacing: float
    positions: List[List[float]]
    line_indices: List[int]


class FrameOut(BaseModel):
    time: float
    heights: List[float]
