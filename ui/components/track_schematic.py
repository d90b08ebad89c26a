import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from typing import Any, Dict, List, Optional, Tuple
import plotly.graph_objects as go


def _positions(section_ids: List[int], layout: Optional[List[List[Optional[int]]]]) -> Dict[int, Tuple[int, int]]:
    # (column, row) per section; rows grow downwards like the text board
    if layout:
        return {sid: (c, -r) for r, row in enumerate(layout) for c, sid in enumerate(row) if sid is not None}
    return {sid: (0, -i) for i, sid in enumerate(section_ids)}


def render_track_schematic(state: Dict[str, Any], layout: Optional[List[List[Optional[int]]]] = None) -> go.Figure:
    """One short segment per section, red when occupied, labelled with the occupant."""
    sections = {int(k): v for k, v in (state.get("sections") or {}).items()}
    pos = _positions(sorted(sections), layout)
    fig = go.Figure()
    occupied_total = 0
    for sid, (x, y) in pos.items():
        occupant = sections.get(sid)
        if occupant:
            occupied_total += 1
        color = "#e74c3c" if occupant else "#2ecc71"
        fig.add_trace(go.Scatter(
            x=[x + 0.1, x + 0.9], y=[y, y], mode="lines+text",
            line=dict(color=color, width=10 if occupant else 6),
            text=[f"{sid}", occupant or ""], textposition="top center",
            hovertemplate=f"Section={sid}<br>Occupied by={occupant or '-'}<extra></extra>",
            showlegend=False,
        ))
    fig.add_trace(go.Scatter(x=[None], y=[None], mode="markers", marker=dict(color="#e74c3c"), name="Occupied"))
    fig.add_trace(go.Scatter(x=[None], y=[None], mode="markers", marker=dict(color="#2ecc71"), name="Free"))
    fig.update_xaxes(showticklabels=False, showgrid=False, zeroline=False)
    fig.update_yaxes(showticklabels=False, showgrid=False, zeroline=False)
    fig.update_layout(
        title=f"Corridor – {occupied_total}/{len(pos)} occupied",
        height=320,
        margin=dict(l=10, r=10, t=60, b=10),
    )
    return fig
