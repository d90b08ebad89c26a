from __future__ import annotations
from typing import List, Optional, Sequence

from src.core.interlocking import Interlocking

CELL_WIDTH = 15


def _cell(network: Interlocking, sid: Optional[int]) -> str:
    if sid is None:
        return " "
    return f"{sid}: {network.get_section(sid) or ' '}"


def render_board(network: Interlocking, layout: Sequence[Sequence[Optional[int]]] | None = None) -> str:
    """Plain-text occupancy board, one row per layout row.

    Falls back to the corridor's own layout, then to one section per row.
    """
    rows = layout or network.config.layout or [[sid] for sid in sorted(network.sections)]
    width = max(len(r) for r in rows)
    underline = "-" * (width * CELL_WIDTH + width - 1)
    lines: List[str] = [underline]
    for row in rows:
        cells = [_cell(network, sid) for sid in row] + [" "] * (width - len(row))
        lines.append("|".join(f"{c:<{CELL_WIDTH}}" for c in cells))
    lines.append(underline)
    return "\n".join(lines) + "\n"
