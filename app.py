"""
FIFO Page Replacement Visualizer

This application simulates the FIFO (First-In-First-Out) page replacement
algorithm step by step and shows, for every reference:
    - The contents of each physical frame
    - Whether the reference was a hit or a page fault
    - Which page was evicted, and from which frame
    - Running hit/fault statistics

Built with Streamlit for the web interface and Plotly for visualizations.

Run with:
    streamlit run app.py
"""

# =============================================================================
# IMPORTS
# =============================================================================

import logging                               # Engine diagnostics
import time                                  # For pacing auto-play
import streamlit as st                       # Web application framework

import config                                # Defaults, bounds and colors
from engine import PlaybackSession, SimulationError, simulate
from utils import (
    describe_step,
    error_message,
    frame_label,
    get_color,
    stats_summary,
    status_color,
    status_symbol,
    step_rows,
    timeline_figure,
)

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger("fifo_visualizer")


# =============================================================================
# STREAMLIT UI - Web Application Interface
# =============================================================================

# Configure the Streamlit page
st.set_page_config(page_title="FIFO Page Replacement Visualizer", layout="wide")

# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

# Page selector for switching between Simulator and Concepts views
page = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("FIFO Page Replacement Visualizer")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if page == "Concepts":
    st.header("Operating System Concepts Used in This Project")
    st.markdown(
        """
        ## 📘 Key Concepts

        ### **1. Pages and Frames**
        - A *page* is a fixed-size unit of a process's memory.
        - A *frame* is a slot of physical memory that can hold one page.

        ### **2. Page Hit**
        - The referenced page is already resident in some frame.
        - Nothing is loaded or evicted.

        ### **3. Page Fault**
        - The referenced page is not resident.
        - The OS loads it into a free frame, or evicts a resident page when all frames are full.

        ### **4. FIFO (First In First Out)**
        - Evict the page that has been in memory the longest.
        - A hit does **not** refresh a page's age; that is what separates FIFO from LRU.
        - Frames are overwritten in a fixed circular order: 0, 1, ..., n-1, 0, ...

        ### **5. Hit Ratio**
        - Hits divided by total references, shown as a percentage.

        ### **6. Belady's Anomaly**
        - With FIFO, adding frames can *increase* the number of faults.
        - Try `1 2 3 4 1 2 5 1 2 3 4 5` with 3 frames (9 faults) and then 4 frames (10 faults).
        """
    )
    st.stop()  # Stop rendering - don't show simulator on Concepts page

# -----------------------------------------------------------------------------
# SESSION STATE - Playback Session Persistence
# -----------------------------------------------------------------------------

# One playback session per browser session (persists across Streamlit reruns)
if "playback" not in st.session_state:
    st.session_state.playback = PlaybackSession(speed=config.DEFAULT_SPEED)

session: PlaybackSession = st.session_state.playback


def _clear_inputs():
    """Reset every input field and drop the current simulation."""
    st.session_state.available_pages = ""
    st.session_state.reference_string = ""
    st.session_state.frame_count = config.DEFAULT_FRAME_COUNT
    session.clear()


# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Inputs
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Input")

# Seed the form once; Clear writes these keys directly
st.session_state.setdefault("available_pages", config.SAMPLE_AVAILABLE_PAGES)
st.session_state.setdefault("reference_string", config.SAMPLE_REFERENCE_STRING)
st.session_state.setdefault("frame_count", config.DEFAULT_FRAME_COUNT)

available_raw = st.sidebar.text_input("Available pages (space separated)", key="available_pages")

references_raw = st.sidebar.text_area("Reference string (space separated)", key="reference_string")

frame_count_raw = st.sidebar.number_input(
    "Number of frames",
    min_value=config.MIN_FRAME_COUNT,
    max_value=config.MAX_FRAME_COUNT,
    step=1,
    key="frame_count",
)

run_col, clear_col = st.sidebar.columns(2)

# Run: validate inputs and compute the whole trace at once
if run_col.button("Run", key="run", type="primary"):
    try:
        trace = simulate(available_raw, references_raw, frame_count_raw)
    except SimulationError as e:
        logger.info("Run rejected: %s", e)
        st.sidebar.error(error_message(e))
    else:
        session.load(trace)

clear_col.button("Clear", on_click=_clear_inputs)

st.sidebar.markdown("---")

# -----------------------------------------------------------------------------
# SIDEBAR - Playback Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Playback")

speed = st.sidebar.slider(
    "Playback speed (steps/sec)",
    min_value=config.MIN_SPEED,
    max_value=config.MAX_SPEED,
    value=config.DEFAULT_SPEED,
)
session.set_speed(speed)

# =============================================================================
# MAIN CONTENT AREA
# =============================================================================

if not session.has_trace:
    st.info("Enter the available pages, a reference string and a frame count, then press **Run**.")
    st.stop()

trace = session.trace

# -----------------------------------------------------------------------------
# Statistics Card
# -----------------------------------------------------------------------------

st.subheader("Statistics")
for col, (label, value) in zip(st.columns(4), stats_summary(trace).items()):
    col.metric(label, value)

# -----------------------------------------------------------------------------
# Navigation Controls
# -----------------------------------------------------------------------------

# Callbacks run before the script, so every widget below sees the new position
def _navigate(move):
    session.pause()
    move()


def _seek_from_slider():
    session.pause()
    session.seek(st.session_state.step - 1)


st.subheader("Timeline")
nav = st.columns(5)
nav[0].button("⏮ First", key="nav_first", disabled=session.at_start, on_click=_navigate, args=(session.first,))
nav[1].button("◀ Prev", key="nav_prev", disabled=session.at_start, on_click=_navigate, args=(session.previous,))
nav[2].button("⏸ Pause" if session.playing else "▶ Play", key="nav_play", on_click=session.toggle_play)
nav[3].button("Next ▶", key="nav_next", disabled=session.at_end, on_click=_navigate, args=(session.next,))
nav[4].button("Last ⏭", key="nav_last", disabled=session.at_end, on_click=_navigate, args=(session.last,))

st.session_state.step = session.position + 1
st.slider(
    "Step",
    min_value=1,
    max_value=max(len(trace), 2),
    disabled=len(trace) == 1,
    key="step",
    on_change=_seek_from_slider,
)

step = session.current

# ----- Frame Timeline Visualization -----
fig = timeline_figure(session.visible_steps, trace.frame_count, current=session.position)
st.plotly_chart(fig, width="stretch")

# -----------------------------------------------------------------------------
# Step Detail
# -----------------------------------------------------------------------------

col1, col2 = st.columns([1, 2])

with col1:
    st.subheader(f"Step {step.total} of {trace.total}")
    st.markdown(
        f"Reference: **{step.page}** "
        f"<span style='color:{status_color(step)}; font-size:1.4em'>{status_symbol(step)}</span>",
        unsafe_allow_html=True,
    )
    st.write(describe_step(step))

    # Frame boxes for the current step; the changed slot is highlighted
    boxes = "".join(
        f"<div style='background:{get_color(p, slot == step.changed_slot)}; padding:6px 12px; "
        f"margin:3px 0; border-radius:6px; font-family:monospace'>F{slot}: {frame_label(p)}</div>"
        for slot, p in enumerate(step.frames)
    )
    st.markdown(boxes, unsafe_allow_html=True)

    st.metric("Running hit ratio", f"{step.hit_ratio_percent}%")
    st.caption(f"Hits {step.running_hits} · Faults {step.running_faults}")

with col2:
    st.subheader("Steps so far")
    st.table(step_rows(session.visible_steps))

    st.subheader("Event Log")
    for ev in session.event_log[-config.EVENT_LOG_LIMIT:][::-1]:
        st.write(ev)

# =============================================================================
# FOOTER - Usage Tips
# =============================================================================

st.markdown("---")
st.markdown(
    "**Usage tips**:\n"
    "- Every reference must be one of the available pages.\n"
    "- Use **Play** to step through automatically, or the arrows and slider to move by hand.\n"
    "- Press **Run** again after editing the inputs; the old timeline is replaced."
)

# -----------------------------------------------------------------------------
# AUTO-PLAY - advance one step, then rerun the script
# -----------------------------------------------------------------------------

if session.playing:
    time.sleep(session.delay)
    session.tick()
    st.rerun()
