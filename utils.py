# utils.py

from typing import Dict, List, Optional, Sequence

import plotly.graph_objects as go

import config
from engine import InvalidReferenceError, MissingInputError, SimulationError, StepRecord, Trace

EMPTY_LABEL = "-"
HIT_SYMBOL = "✓"
FAULT_SYMBOL = "✗"

# Heatmap codes for a frame cell
CELL_EMPTY = 0
CELL_RESIDENT = 1
CELL_CHANGED = 2


def get_color(page: Optional[str], changed: bool = False) -> str:
    """Return a color for one frame cell."""
    if page is None:
        return config.COLOR_EMPTY
    if changed:
        return config.COLOR_CHANGED
    return config.COLOR_RESIDENT


def frame_label(page: Optional[str]) -> str:
    return EMPTY_LABEL if page is None else page


def status_symbol(step: StepRecord) -> str:
    return HIT_SYMBOL if step.is_hit else FAULT_SYMBOL


def status_color(step: StepRecord) -> str:
    return config.COLOR_HIT if step.is_hit else config.COLOR_FAULT


def error_message(exc: SimulationError) -> str:
    """User-facing text for a rejected run."""
    if isinstance(exc, MissingInputError):
        return "Please fill in all fields."
    if isinstance(exc, InvalidReferenceError):
        return f"Error: '{', '.join(exc.invalid)}' not found in Input String."
    return f"Error: {exc}"


def describe_step(step: StepRecord) -> str:
    if step.is_hit:
        return f"Step {step.total}: page {step.page} is resident (hit)"
    if step.replaced_page is None:
        return f"Step {step.total}: page {step.page} loaded into empty frame {step.changed_slot} (fault)"
    return (
        f"Step {step.total}: page {step.page} replaced page {step.replaced_page} "
        f"in frame {step.changed_slot} (fault)"
    )


def stats_summary(trace: Trace) -> Dict[str, str]:
    """Statistics card values, in display order."""
    return {
        "Total Pages": str(trace.total),
        "Hits": str(trace.hits),
        "Faults": str(trace.faults),
        "Hit Ratio": f"{trace.hit_ratio_percent}%",
    }


def step_rows(steps: Sequence[StepRecord]) -> List[Dict[str, object]]:
    """Flatten steps into table rows, one column per frame."""
    rows = []
    for step in steps:
        row = {"step": step.total, "page": step.page}
        for slot, page in enumerate(step.frames):
            row[f"F{slot}"] = frame_label(page)
        row["status"] = "Hit" if step.is_hit else "Fault"
        row["replaced"] = frame_label(step.replaced_page)
        row["hit ratio"] = f"{step.hit_ratio_percent}%"
        rows.append(row)
    return rows


def timeline_figure(steps: Sequence[StepRecord], frame_count: int, current: Optional[int] = None) -> go.Figure:
    """
    Build the frame timeline: one column per step, one row per frame.

    Args:
        steps: Steps to draw, usually the ones revealed so far
        frame_count: Number of frame rows
        current: Step index to outline, if any

    Returns:
        go.Figure: A heatmap with the page id written in every occupied cell
    """
    x = [f"{step.total}" for step in steps]
    y = [f"F{slot}" for slot in range(frame_count)]
    z = []
    text = []
    for slot in range(frame_count):
        z_row = []
        text_row = []
        for step in steps:
            page = step.frames[slot]
            if page is None:
                z_row.append(CELL_EMPTY)
            elif step.changed_slot == slot:
                z_row.append(CELL_CHANGED)
            else:
                z_row.append(CELL_RESIDENT)
            text_row.append(frame_label(page))
        z.append(z_row)
        text.append(text_row)

    colorscale = [
        [0.0, config.COLOR_EMPTY], [0.33, config.COLOR_EMPTY],
        [0.33, config.COLOR_RESIDENT], [0.66, config.COLOR_RESIDENT],
        [0.66, config.COLOR_CHANGED], [1.0, config.COLOR_CHANGED],
    ]

    fig = go.Figure()
    fig.add_trace(go.Heatmap(
        x=x,
        y=y,
        z=z,
        text=text,
        texttemplate="%{text}",
        colorscale=colorscale,
        zmin=CELL_EMPTY,
        zmax=CELL_CHANGED,
        showscale=False,
        xgap=4,
        ygap=4,
        hoverinfo="text",
    ))

    # Referenced page and hit/fault mark above each column
    ticktext = [
        f"<b>{step.page}</b><br><span style='color:{status_color(step)}'>{status_symbol(step)}</span>"
        for step in steps
    ]
    fig.update_layout(
        height=120 + 45 * frame_count,
        margin=dict(l=40, r=10, t=70, b=10),
        xaxis=dict(type="category", side="top", tickmode="array", tickvals=x, ticktext=ticktext, fixedrange=True),
        yaxis=dict(autorange="reversed", fixedrange=True),
        plot_bgcolor="rgba(0,0,0,0)",
    )

    if current is not None and 0 <= current < len(steps):
        fig.add_vrect(
            x0=current - 0.5,
            x1=current + 0.5,
            line_width=2,
            line_color="#111827",
            fillcolor="rgba(0,0,0,0)",
        )
    return fig
