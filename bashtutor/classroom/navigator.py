"""
Navigator - Learner input interpretation and the run state machine.

Provides:
- parse_navigation: map one line of input to a navigation action
- RunState: explicit Idle / Running / Paused / Finished transitions

Nothing here performs I/O, so sequences of jumps and skips can be tested
without a terminal.
"""

import re
from typing import Optional

from bashtutor.schemas import NavAction, NavKind, RunPhase, SectionResult, SectionStatus


_INTEGER = re.compile(r'^[+-]?[0-9]+$')


def parse_navigation(raw: str, total: int) -> tuple[NavAction, Optional[str]]:
    """
    Interpret one line typed at a navigation prompt.

    Args:
        raw: The line as read (end of input arrives as "")
        total: Number of sections in the catalog

    Returns:
        Tuple of (action, warning message or None). An out-of-range section
        number yields Continue plus a warning.
    """
    answer = raw.strip()

    if answer == "Q":
        return NavAction.quit(), None
    if answer == "q":
        return NavAction.skip(), None
    if _INTEGER.match(answer):
        target = int(answer)
        if 1 <= target <= total:
            return NavAction.jump(target), None
        return NavAction.proceed(), f"Invalid section number: {answer}. Continuing..."
    return NavAction.proceed(), None


class RunState:
    """
    Position of a single tutorial run.

    Transitions:
        Idle --start--> Running(1), or Running(j) when the start prompt jumped
        Running(i) --completed/failed--> Paused
        Running(i) --skipped--> Running(i+1)
        Running(i) --jumped(j)--> Running(j)
        Paused --continue/skip--> Running(i+1)
        Paused --jump(j)--> Running(j)
        any --quit--> Finished
    Moving past the last section also ends in Finished.
    """

    def __init__(self, total: int):
        if total < 1:
            raise ValueError("A run needs at least one section")
        self.total = total
        self.phase = RunPhase.IDLE
        self.current_index: Optional[int] = None
        self.pending_jump: Optional[int] = None
        self.aborted = False
        self.history: list[int] = []  # section indices entered, in order

    @property
    def finished(self) -> bool:
        return self.phase == RunPhase.FINISHED

    def _require(self, *phases: RunPhase):
        if self.phase not in phases:
            allowed = ", ".join(p.value for p in phases)
            raise RuntimeError(f"Run is {self.phase.value}; expected {allowed}")

    def request_jump(self, target: int):
        if not 1 <= target <= self.total:
            raise ValueError(f"Section {target} is outside 1-{self.total}")
        self.pending_jump = target

    def _advance(self):
        if self.pending_jump is not None:
            next_index = self.pending_jump
            self.pending_jump = None
        else:
            next_index = (self.current_index or 0) + 1

        if next_index > self.total:
            self.phase = RunPhase.FINISHED
            return

        self.current_index = next_index
        self.phase = RunPhase.RUNNING
        self.history.append(next_index)

    def _apply(self, action: NavAction):
        if action.kind == NavKind.QUIT:
            self.quit()
            return
        if action.kind == NavKind.JUMP_TO:
            self.request_jump(action.target)
        self._advance()

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def start(self, action: Optional[NavAction] = None) -> RunPhase:
        """Leave Idle. A skip at the start prompt simply begins at section 1."""
        self._require(RunPhase.IDLE)
        self._apply(action or NavAction.proceed())
        return self.phase

    def section_finished(self, result: SectionResult) -> RunPhase:
        self._require(RunPhase.RUNNING)

        if result.prompts_afterwards:
            self.phase = RunPhase.PAUSED
        elif result.status == SectionStatus.QUIT:
            self.quit()
        elif result.status == SectionStatus.JUMPED:
            self.request_jump(result.jump_target)
            self._advance()
        else:
            self._advance()
        return self.phase

    def resolve(self, action: NavAction) -> RunPhase:
        """Apply the answer given at the post-section prompt."""
        self._require(RunPhase.PAUSED)
        self._apply(action)
        return self.phase

    def quit(self):
        self.phase = RunPhase.FINISHED
        self.pending_jump = None
        self.aborted = True
