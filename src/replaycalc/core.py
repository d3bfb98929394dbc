"""History controller: the event log behind the calculator and its scrubbing."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from replaycalc import brain
from replaycalc.brain import CalculatorState
from replaycalc.events import Event, event_for_label
from replaycalc.exceptions import OutOfRangeError
from replaycalc.operations import DISPLAY_FRACTION_DIGITS
from replaycalc.validators import round_position, validate_index

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Projections the presentation layer re-reads after every mutation."""

    output: str
    history_description: str
    total_count: int
    cursor: int


class HistoryController:
    """
    Owns the event log and derives the calculator state from it.

    The log is split at a cursor into the committed history, which the
    brain folds into the current state, and the events kept after the
    cursor for redo. Scrubbing moves the cursor without losing either side;
    applying a new event drops the redo side.

    Example:
        >>> controller = HistoryController()
        >>> for label in "12+8=":
        ...     _ = controller.press(label)
        >>> controller.current_output()
        '20'
        >>> controller.scrub(3).output
        '12'
        >>> controller.total_count()
        5
    """

    def __init__(self, max_fraction_digits: int = DISPLAY_FRACTION_DIGITS) -> None:
        """
        Start with an empty log and the brain at ``LeftOnly("0")``.

        Args:
            max_fraction_digits: Fraction digits shown by ``current_output``
        """
        self._max_fraction_digits = max_fraction_digits
        self._history: list[Event] = []
        self._pending_redo: list[Event] = []
        self._state: CalculatorState = brain.INITIAL_STATE

    @property
    def state(self) -> CalculatorState:
        """State derived from the committed history."""
        return self._state

    @property
    def cursor(self) -> int:
        """Number of committed events."""
        return len(self._history)

    @property
    def history(self) -> list[Event]:
        """Committed events, oldest first."""
        return self._history.copy()

    @property
    def pending_redo(self) -> list[Event]:
        """Events after the cursor, kept until the next ``apply``."""
        return self._pending_redo.copy()

    def current_output(self) -> str:
        return brain.output(self._state, self._max_fraction_digits)

    def history_description(self) -> str:
        return "".join(event.label for event in self._history)

    def total_count(self) -> int:
        return len(self._history) + len(self._pending_redo)

    def snapshot(self) -> Snapshot:
        """Current projections for the presentation layer."""
        return Snapshot(
            output=self.current_output(),
            history_description=self.history_description(),
            total_count=self.total_count(),
            cursor=self.cursor,
        )

    def apply(self, event: Event) -> Snapshot:
        """
        Commit ``event`` at the cursor.

        Any events kept for redo are discarded. The state advances by a
        single brain step, without replaying the history.
        """
        dropped = len(self._pending_redo)
        self._pending_redo.clear()
        self._history.append(event)
        self._state = brain.apply(self._state, event)
        logger.debug(
            "event_applied",
            label=event.label,
            cursor=self.cursor,
            dropped_redo=dropped,
        )
        return self.snapshot()

    def press(self, label: str) -> Snapshot:
        """
        Apply the event for a button label.

        Raises:
            InvalidInputError: If no key carries that label
        """
        return self.apply(event_for_label(label))

    def scrub(self, index: int) -> Snapshot:
        """
        Move the cursor to ``index`` and rebuild the state from scratch.

        Events before the index become the committed history and the rest
        are kept for redo, so ``scrub(total_count())`` restores everything.

        Args:
            index: New cursor position in ``[0, total_count()]``

        Returns:
            Snapshot after the move

        Raises:
            OutOfRangeError: If index is outside ``[0, total_count()]``
            InvalidInputError: If index is not an int
        """
        total = self.total_count()
        try:
            validate_index(index, total)
        except OutOfRangeError:
            logger.warning("scrub_out_of_range", index=index, total=total)
            raise

        events = self._history + self._pending_redo
        self._history = events[:index]
        self._pending_redo = events[index:]
        self._state = brain.fold(self._history)
        logger.info(
            "history_scrubbed",
            cursor=index,
            total=total,
            output=self.current_output(),
        )
        return self.snapshot()

    def slide(self, position: float) -> Snapshot:
        """Scrub to the whole event index nearest a slider position."""
        return self.scrub(round_position(position))

    def clear_history(self) -> Snapshot:
        """Forget every event and return to the initial state."""
        self._history.clear()
        self._pending_redo.clear()
        self._state = brain.INITIAL_STATE
        logger.info("history_cleared")
        return self.snapshot()

    def __len__(self) -> int:
        return self.total_count()

    def __repr__(self) -> str:
        return (
            f"HistoryController(output={self.current_output()!r}, "
            f"cursor={self.cursor}, total={self.total_count()})"
        )
