import logging
import math
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..schemas.background_schema import FrameOut, GridOut
from ..services.background_service import (
    GRID_SIZE,
    frame_heights,
    grid_positions,
    grid_spacing,
    line_indices,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/background", tags=["background"])


@router.get("/grid", response_model=GridOut)
def read_grid():
    """Point positions (x, z) and line segment indices of the landing background."""
    return GridOut(
        grid_size=GRID_SIZE,
        spacing=grid_spacing(),
        positions=[[x, z] for x, z in grid_positions()],
        line_indices=line_indices(),
    )


@router.get("/frame", response_model=FrameOut)
def read_frame(
    t: float = Query(..., description="Milliseconds since epoch (or since page load)"),
    pointer_x: Optional[float] = Query(default=None),
    pointer_z: Optional[float] = Query(default=None),
):
    """Heights of every grid point at time t, with the ripple around the pointer if given."""
    if (pointer_x is None) != (pointer_z is None):
        raise HTTPException(status_code=400, detail="pointer_x and pointer_z go together")
    if not all(math.isfinite(v) for v in (t, pointer_x, pointer_z) if v is not None):
        raise HTTPException(status_code=400, detail="t, pointer_x and pointer_z must be finite numbers")

    pointer = (pointer_x, pointer_z) if pointer_x is not None else None
    try:
        return FrameOut(time=t, heights=frame_heights(t, pointer))
    except Exception as e:
        logger.error(f"Error computing background frame: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error computing background frame")
