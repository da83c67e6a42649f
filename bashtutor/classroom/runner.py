"""
SectionRunner - Walk the catalog with next / skip / jump / quit navigation.

The runner owns the run state, the cleanup registry and the console. Section
bodies talk to it through a SectionContext; a navigation answer given inside
a body unwinds the body with one of the control exceptions below, and
run_section turns that into a SectionResult.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from bashtutor.schemas import NavAction, NavKind, RunPhase, SectionResult, SectionStatus
from bashtutor.viewer import Console

from .catalog import Section, SectionCatalog
from .cleanup import CleanupRegistry, exit_on_signals
from .navigator import RunState, parse_navigation

logger = logging.getLogger(__name__)


DEFAULT_PROMPT = (
    "Press Enter to continue, 'q' to skip this section, 'Q' to quit, "
    "or enter topic number (1-{total}): "
)
START_PROMPT = "Press ENTER to start the tutorial..."
DEFAULT_TITLE = "MASTER BASH SCRIPTING TUTORIAL"


# -----------------------------------------------------------------------------
# Control signals raised inside section bodies
# -----------------------------------------------------------------------------

class SectionSkipped(Exception):
    """The learner typed q: abandon the rest of the current section."""


class JumpRequested(Exception):
    """The learner typed a section number: leave the section immediately."""

    def __init__(self, target: int):
        super().__init__(f"jump to section {target}")
        self.target = target


class QuitRequested(Exception):
    """The learner typed Q: end the run."""


def _exit_code(value) -> int:
    """None means success; anything that is not an int status is a failure."""
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"section body returned {value!r} instead of an exit status")
    return value


class SectionContext:
    """What a section body can use while it runs."""

    def __init__(self, runner: "SectionRunner", section: Section):
        self.runner = runner
        self.section = section
        self.console = runner.console
        self.workdir = runner.workdir
        self.script_args = list(runner.script_args)
        # Exported to demo commands
        self.env: dict[str, str] = {"TUTOR_TMP": str(runner.temp_file)}

    def checkpoint(self, message: Optional[str] = None):
        """
        Pause for navigation. Returns on Continue, otherwise raises the
        matching control signal.
        """
        action = self.runner.prompt_navigation(message)
        if action.kind == NavKind.QUIT:
            raise QuitRequested()
        if action.kind == NavKind.SKIP_SECTION:
            raise SectionSkipped()
        if action.kind == NavKind.JUMP_TO:
            raise JumpRequested(action.target)

    def ask(self, prompt: str) -> str:
        """Read a free-form answer. Q still quits the run."""
        answer = self.console.read_line(prompt)
        if answer.strip() == "Q":
            self.console.cecho("RED", "Aborting as requested.")
            raise QuitRequested()
        return answer

    def register(self, path: str | Path) -> Path:
        """Register a path for removal at exit; call before creating it."""
        return self.runner.registry.register(path)

    def register_glob(self, pattern: str):
        """Remove whatever matches pattern (relative to workdir) at exit."""
        self.runner.registry.register_glob(pattern)


class SectionRunner:
    """
    Run a SectionCatalog interactively.

    Cleanup runs exactly once per runner, on normal completion, on Q, and
    when the process is asked to terminate.
    """

    def __init__(
        self,
        catalog: SectionCatalog,
        console: Optional[Console] = None,
        workdir: Optional[Path] = None,
        registry: Optional[CleanupRegistry] = None,
        script_args: Sequence[str] = (),
        title: str = DEFAULT_TITLE,
    ):
        self.catalog = catalog
        self.console = console or Console()
        self.workdir = Path(workdir) if workdir else Path(".")
        self.registry = registry if registry is not None else CleanupRegistry(self.workdir)
        self.script_args = tuple(script_args)
        self.title = title
        self.state = RunState(len(catalog))
        self.results: list[tuple[int, SectionResult]] = []
        self._cleaned_up = False

        self.temp_file = self.registry.register(f"temp_shell_demo_lines_{os.getpid()}.txt")

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def show_catalog(self):
        """Print the numbered table of contents."""
        self.console.box_header(self.title)
        self.console.cecho("CYAN", "Table of Contents - The following sections will be covered interactively:")
        self.console.echo()
        self.console.numbered_list(self.catalog.titles)
        self.console.echo()

    def prompt_navigation(self, custom_message: Optional[str] = None) -> NavAction:
        """Read one navigation answer. Never raises on bad or missing input."""
        total = len(self.catalog)
        raw = self.console.read_line(custom_message or DEFAULT_PROMPT.format(total=total))
        action, problem = parse_navigation(raw, total)

        if problem:
            self.console.cecho("RED", problem)
        if action.kind == NavKind.QUIT:
            self.console.cecho("RED", "Aborting as requested.")
        elif action.kind == NavKind.JUMP_TO:
            self.console.cecho("YELLOW", f"Jumping to section {action.target}...")
        return action

    def run_section(self, section: Section) -> SectionResult:
        """Invoke one section body and classify how it ended."""
        self.console.box_header(section.title)
        ctx = SectionContext(self, section)

        try:
            exit_code = _exit_code(section.body(ctx))
        except SectionSkipped:
            self.console.echo()
            self.console.cecho("YELLOW", f"⏩ Section skipped: {section.title}")
            return SectionResult(status=SectionStatus.SKIPPED)
        except JumpRequested as e:
            return SectionResult(status=SectionStatus.JUMPED, jump_target=e.target)
        except QuitRequested:
            return SectionResult(status=SectionStatus.QUIT)
        except Exception as e:
            logger.warning(f"Section '{section.title}' raised {type(e).__name__}: {e}")
            exit_code = 1

        self.console.echo()
        if exit_code == 0:
            self.console.cecho("GREEN", f"✔ Section completed: {section.title}")
            return SectionResult(status=SectionStatus.COMPLETED)

        logger.warning(f"Section '{section.title}' finished with exit code {exit_code}")
        self.console.cecho("YELLOW", f"⚠️  Section failed (code {exit_code}) but continuing: {section.title}")
        return SectionResult(status=SectionStatus.FAILED, exit_code=exit_code)

    def main_loop(self):
        """Run sections until the index range is exhausted or the learner quits."""
        if self.state.phase == RunPhase.IDLE:
            self.state.start()

        while self.state.phase == RunPhase.RUNNING:
            section = self.catalog.get(self.state.current_index)
            result = self.run_section(section)
            self.results.append((section.index, result))

            if self.state.section_finished(result) != RunPhase.PAUSED:
                continue

            self.console.echo()
            action = self.prompt_navigation()
            if action.kind == NavKind.SKIP_SECTION:
                self.console.cecho("YELLOW", "Skipping remaining steps...")
            self.state.resolve(action)

    def cleanup(self):
        """Remove registered paths. Only the first call does anything."""
        if self._cleaned_up:
            return
        self._cleaned_up = True
        self.registry.cleanup()

    def run(self, start: Optional[int] = None) -> int:
        """
        Full interactive run: catalog, start prompt, main loop, cleanup.

        Args:
            start: Optional 1-based section to begin at (skips the start prompt)

        Returns:
            Process exit code (always 0)
        """
        self.workdir.mkdir(parents=True, exist_ok=True)

        with exit_on_signals():
            try:
                self.show_catalog()
                if start is not None:
                    self.state.start(self._start_action(start))
                else:
                    self.state.start(self.prompt_navigation(START_PROMPT))
                self.main_loop()

                if not self.state.aborted:
                    self.console.echo()
                    self.console.cecho("GREEN", "All sections processed. Cleaning up...")
                    self.cleanup()
                    self.console.cecho("GREEN", "Done.")
            finally:
                self.cleanup()
        return 0

    def _start_action(self, start: int) -> NavAction:
        if 1 <= start <= len(self.catalog):
            return NavAction.jump(start)
        self.console.cecho("RED", f"Invalid section number: {start}. Starting from section 1...")
        return NavAction.proceed()
