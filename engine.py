# engine.py

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

PageId = str


# -----------------------------
# Errors
# -----------------------------
class SimulationError(ValueError):
    """Base class for every error raised while preparing or running a simulation."""


class MissingInputError(SimulationError):
    """A required field is empty or the frame count is not a positive number."""

    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)
        super().__init__("Please fill in all fields.")


class InvalidReferenceError(SimulationError):
    """One or more reference tokens are not among the available pages.

    ``invalid`` holds every offending occurrence in reference order; repeats
    are reported as many times as they appear.
    """

    def __init__(self, invalid: Sequence[PageId]):
        self.invalid = list(invalid)
        super().__init__(f"'{', '.join(self.invalid)}' not found in Input String.")


class InvalidConfigError(SimulationError):
    """Frame count or playback speed outside its valid range."""


# -----------------------------
# Data model
# -----------------------------
@dataclass(frozen=True)
class SimulationInput:
    available_pages: Tuple[PageId, ...]
    references: Tuple[PageId, ...]
    frame_count: int


@dataclass(frozen=True)
class StepRecord:
    """
    Snapshot of the frame table right after one reference is processed.

    Attributes:
        step_index (int): Position of the reference in the string (0-based)
        page (str): The referenced page
        frames (Tuple[Optional[str], ...]): Frame contents after this step, None = empty
        is_hit (bool): True if the page was already resident
        changed_slot (Optional[int]): Slot written on a fault, None on a hit
        replaced_page (Optional[str]): Page evicted from that slot, None if it was empty
        running_hits (int): Hits so far, this step included
        running_faults (int): Faults so far, this step included
        hit_ratio_percent (int): round(100 * running_hits / (step_index + 1))
    """
    step_index: int
    page: PageId
    frames: Tuple[Optional[PageId], ...]
    is_hit: bool
    changed_slot: Optional[int]
    replaced_page: Optional[PageId]
    running_hits: int
    running_faults: int
    hit_ratio_percent: int

    @property
    def is_fault(self) -> bool:
        return not self.is_hit

    @property
    def total(self) -> int:
        return self.step_index + 1


@dataclass(frozen=True)
class Trace:
    references: Tuple[PageId, ...]
    frame_count: int
    steps: Tuple[StepRecord, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> StepRecord:
        return self.steps[index]

    def __iter__(self) -> Iterator[StepRecord]:
        return iter(self.steps)

    @property
    def hits(self) -> int:
        return self.steps[-1].running_hits if self.steps else 0

    @property
    def faults(self) -> int:
        return self.steps[-1].running_faults if self.steps else 0

    @property
    def total(self) -> int:
        return len(self.steps)

    @property
    def hit_ratio_percent(self) -> int:
        return self.steps[-1].hit_ratio_percent if self.steps else 0


def hit_ratio_percent(hits: int, total: int) -> int:
    """Whole-number hit ratio, halves rounded up (50.5 -> 51)."""
    if total <= 0:
        return 0
    return (200 * hits + total) // (2 * total)


# -----------------------------
# Validation
# -----------------------------
def tokenize(text: str) -> List[PageId]:
    return text.split()


def parse_frame_count(raw: Union[int, str, None]) -> int:
    """
    Turn the frame count field into a positive integer.

    Raises:
        MissingInputError: If the value is empty, non-numeric, zero or negative
    """
    if isinstance(raw, bool) or raw is None:
        raise MissingInputError(["frame_count"])
    if isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise MissingInputError(["frame_count"]) from None
    if value <= 0:
        raise MissingInputError(["frame_count"])
    return value


def validate(available_pages: Sequence[PageId], references: Sequence[PageId]) -> Sequence[PageId]:
    """
    Check that every reference token is one of the available pages.

    Args:
        available_pages: Declared page ids; duplicates are allowed
        references: The reference string, already tokenized

    Returns:
        The ``references`` argument itself, untouched

    Raises:
        MissingInputError: If either sequence is empty
        InvalidReferenceError: Listing each reference occurrence not in ``available_pages``
    """
    missing = []
    if not available_pages:
        missing.append("available_pages")
    if not references:
        missing.append("references")
    if missing:
        raise MissingInputError(missing)

    valid = set(available_pages)
    invalid = [ref for ref in references if ref not in valid]
    if invalid:
        logger.warning("Rejected %d invalid reference(s): %s", len(invalid), invalid)
        raise InvalidReferenceError(invalid)
    return references


def parse_inputs(available_raw: str, references_raw: str, frame_count_raw) -> SimulationInput:
    """Check the three form fields, then tokenize and validate them."""
    missing = []
    if not (available_raw or "").strip():
        missing.append("available_pages")
    if not (references_raw or "").strip():
        missing.append("references")
    try:
        frame_count = parse_frame_count(frame_count_raw)
    except MissingInputError:
        missing.append("frame_count")
    if missing:
        logger.warning("Missing or unusable input: %s", ", ".join(missing))
        raise MissingInputError(missing)

    available_pages = tokenize(available_raw)
    references = tokenize(references_raw)
    validate(available_pages, references)
    return SimulationInput(tuple(available_pages), tuple(references), frame_count)


# -----------------------------
# FIFO step generator
# -----------------------------
def generate_trace(references: Sequence[PageId], frame_count: int) -> Trace:
    """
    Run FIFO over ``references`` and record every step.

    Pages are evicted strictly in load order: a hit never moves a page, and
    the cursor only advances on a fault.

    Raises:
        InvalidConfigError: If ``frame_count`` is not a positive integer
    """
    if isinstance(frame_count, bool) or not isinstance(frame_count, int) or frame_count <= 0:
        raise InvalidConfigError(f"Frame count must be a positive integer, got {frame_count!r}")

    frames: List[Optional[PageId]] = [None] * frame_count
    cursor = 0
    hits = 0
    faults = 0
    steps = []

    for index, page in enumerate(references):
        if page in frames:
            hits += 1
            is_hit = True
            changed_slot = None
            replaced_page = None
        else:
            faults += 1
            is_hit = False
            changed_slot = cursor
            replaced_page = frames[cursor]
            frames[cursor] = page
            cursor = (cursor + 1) % frame_count

        step = StepRecord(
            step_index=index,
            page=page,
            frames=tuple(frames),
            is_hit=is_hit,
            changed_slot=changed_slot,
            replaced_page=replaced_page,
            running_hits=hits,
            running_faults=faults,
            hit_ratio_percent=hit_ratio_percent(hits, index + 1),
        )
        logger.debug("Step %d: page %s %s frames=%s", index, page, "hit" if is_hit else "fault", step.frames)
        steps.append(step)

    trace = Trace(tuple(references), frame_count, tuple(steps))
    logger.info(
        "Simulated %d reference(s) over %d frame(s): %d hit(s), %d fault(s)",
        trace.total, frame_count, trace.hits, trace.faults,
    )
    return trace


def simulate(available_raw: str, references_raw: str, frame_count_raw) -> Trace:
    """Validate the raw form fields and return the full trace."""
    parsed = parse_inputs(available_raw, references_raw, frame_count_raw)
    return generate_trace(parsed.references, parsed.frame_count)


# -----------------------------
# Playback session
# -----------------------------
@dataclass
class PlaybackSession:
    """
    Navigation state over one trace, owned by a single UI session.

    Attributes:
        trace (Optional[Trace]): The current simulation, None before the first run
        position (int): Index of the step on display
        playing (bool): True while auto-play is advancing
        speed (float): Auto-play rate in steps per second
        event_log (List[str]): Human-readable history of this session
    """
    trace: Optional[Trace] = None
    position: int = 0
    playing: bool = False
    speed: float = 1.0
    event_log: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.set_speed(self.speed)

    def load(self, trace: Trace):
        self.trace = trace
        self.position = 0
        self.playing = False
        self.event_log.append(
            f"Loaded: {trace.total} references, {trace.frame_count} frames "
            f"({trace.hits} hits, {trace.faults} faults)"
        )

    def clear(self):
        self.trace = None
        self.position = 0
        self.playing = False
        self.event_log.append("Cleared")

    # -----------------------------
    # Queries
    # -----------------------------
    @property
    def has_trace(self) -> bool:
        return self.trace is not None and len(self.trace) > 0

    @property
    def current(self) -> Optional[StepRecord]:
        if not self.has_trace:
            return None
        return self.trace[self.position]

    @property
    def visible_steps(self) -> Tuple[StepRecord, ...]:
        if not self.has_trace:
            return ()
        return self.trace.steps[: self.position + 1]

    @property
    def at_start(self) -> bool:
        return self.position == 0

    @property
    def at_end(self) -> bool:
        return not self.has_trace or self.position == len(self.trace) - 1

    @property
    def delay(self) -> float:
        return 1.0 / self.speed

    # -----------------------------
    # Navigation
    # -----------------------------
    def seek(self, index: int):
        if not self.has_trace:
            return
        self.position = max(0, min(index, len(self.trace) - 1))

    def first(self):
        self.seek(0)

    def previous(self):
        self.seek(self.position - 1)

    def next(self):
        self.seek(self.position + 1)

    def last(self):
        if self.has_trace:
            self.seek(len(self.trace) - 1)

    # -----------------------------
    # Auto-play
    # -----------------------------
    def set_speed(self, speed: float):
        if speed <= 0:
            raise InvalidConfigError(f"Playback speed must be positive, got {speed!r}")
        self.speed = speed

    def play(self):
        if not self.has_trace:
            return
        if self.at_end:
            self.first()
        self.playing = True
        self.event_log.append(f"Play from step {self.position + 1}")

    def pause(self):
        if self.playing:
            self.event_log.append(f"Paused at step {self.position + 1}")
        self.playing = False

    def toggle_play(self):
        if self.playing:
            self.pause()
        else:
            self.play()

    def tick(self) -> bool:
        """Advance one step while playing; returns False once playback has stopped."""
        if not self.playing or not self.has_trace:
            self.playing = False
            return False
        if self.at_end:
            self.pause()
            return False
        self.next()
        if self.at_end:
            self.pause()
        return True
