"""
Layouts - Ready-made cell declarations.

The band layout is two rows of cells joined vertically:

    row 1 (ids 11, 12, ...) points up
    row 2 (ids 21, 22, ...) points down

Cells in the same column are linked up/down. Each row end declares one
more cell that does not exist, so stepping past it hits a boundary.
Up-pointing cells declare no `up` neighbor and down-pointing cells no
`down` neighbor.
"""

from __future__ import annotations

from ..engine_core.faces import PointingDirection
from .builder import CellSpec


MAX_BAND_COLUMNS = 8


def band_layout(columns: int = 6) -> list[CellSpec]:
    """Declare a two-row band `columns` cells wide."""
    if not 1 <= columns <= MAX_BAND_COLUMNS:
        raise ValueError(f"Band width must be between 1 and {MAX_BAND_COLUMNS}")

    specs = []
    for column in range(1, columns + 1):
        top_id = 10 + column
        bottom_id = 20 + column
        specs.append(CellSpec(
            cell_id=top_id,
            pointing_direction=PointingDirection.UP,
            neighbors={"left": top_id - 1, "right": top_id + 1, "down": bottom_id},
        ))
        specs.append(CellSpec(
            cell_id=bottom_id,
            pointing_direction=PointingDirection.DOWN,
            neighbors={"left": bottom_id - 1, "right": bottom_id + 1, "up": top_id},
        ))
    return specs
