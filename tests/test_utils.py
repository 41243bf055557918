"""Tests for display helpers."""

import plotly.graph_objects as go

import config
from engine import InvalidConfigError, InvalidReferenceError, MissingInputError, generate_trace
from utils import (
    describe_step,
    error_message,
    frame_label,
    get_color,
    stats_summary,
    status_symbol,
    step_rows,
    timeline_figure,
)


def test_get_color() -> None:
    """Empty, resident and freshly written cells use distinct colors."""
    assert get_color(None) == config.COLOR_EMPTY
    assert get_color(None, changed=True) == config.COLOR_EMPTY
    assert get_color("3") == config.COLOR_RESIDENT
    assert get_color("3", changed=True) == config.COLOR_CHANGED


def test_frame_label() -> None:
    """Empty frames show a dash."""
    assert frame_label(None) == "-"
    assert frame_label("7") == "7"


def test_status_symbol() -> None:
    """Hits get a check mark, faults a cross."""
    trace = generate_trace(["1", "1"], 1)
    assert status_symbol(trace[0]) == "✗"
    assert status_symbol(trace[1]) == "✓"


def test_error_messages() -> None:
    """Each rejection maps to the text shown in the form."""
    assert error_message(MissingInputError(["references"])) == "Please fill in all fields."
    assert error_message(InvalidReferenceError(["8", "9"])) == "Error: '8, 9' not found in Input String."
    assert error_message(InvalidConfigError("bad")) == "Error: bad"


def test_describe_step() -> None:
    """Step descriptions distinguish hits, loads and replacements."""
    trace = generate_trace(["1", "1", "2"], 1)
    assert describe_step(trace[0]) == "Step 1: page 1 loaded into empty frame 0 (fault)"
    assert describe_step(trace[1]) == "Step 2: page 1 is resident (hit)"
    assert describe_step(trace[2]) == "Step 3: page 2 replaced page 1 in frame 0 (fault)"


def test_stats_summary() -> None:
    """Statistics card for the Belady string over 3 frames."""
    trace = generate_trace("1 2 3 4 1 2 5 1 2 3 4 5".split(), 3)
    assert stats_summary(trace) == {
        "Total Pages": "12",
        "Hits": "3",
        "Faults": "9",
        "Hit Ratio": "25%",
    }


def test_step_rows() -> None:
    """One row per step with a column per frame."""
    rows = step_rows(generate_trace(["1", "2", "1"], 2).steps)
    assert rows[0] == {
        "step": 1, "page": "1", "F0": "1", "F1": "-",
        "status": "Fault", "replaced": "-", "hit ratio": "0%",
    }
    assert rows[2]["status"] == "Hit"
    assert rows[2]["hit ratio"] == "33%"


def test_timeline_figure() -> None:
    """Rows are frames, columns are steps, the written cell is highlighted."""
    trace = generate_trace(["1", "2", "1"], 2)
    fig = timeline_figure(trace.steps, trace.frame_count, current=2)
    assert isinstance(fig, go.Figure)
    heatmap = fig.data[0]
    assert list(heatmap.y) == ["F0", "F1"]
    assert list(heatmap.x) == ["1", "2", "3"]
    assert [list(row) for row in heatmap.z] == [[2, 1, 1], [0, 2, 1]]
    assert [list(row) for row in heatmap.text] == [["1", "1", "1"], ["-", "2", "2"]]
    assert len(fig.layout.shapes) == 1


def test_timeline_figure_without_current() -> None:
    """No outline is drawn when no step is selected."""
    trace = generate_trace(["1"], 3)
    fig = timeline_figure(trace.steps, trace.frame_count)
    assert len(fig.layout.shapes) == 0
    assert len(fig.data[0].y) == 3


def test_timeline_outline_sits_on_current_column() -> None:
    """Step columns are categories, so the outline brackets the current column."""
    trace = generate_trace(["1", "2", "1"], 2)
    for current in range(3):
        fig = timeline_figure(trace.steps, trace.frame_count, current=current)
        assert fig.layout.xaxis.type == "category"
        shape = fig.layout.shapes[0]
        assert (shape.x0, shape.x1) == (current - 0.5, current + 0.5)
