"""
ScriptedLesson - A section body driven by a YAML lesson document.

Each step type maps to one handler in STEP_HANDLERS. Handlers return an exit
code (run steps) or None.
"""

import logging
import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from bashtutor.schemas import (
    AskStep,
    CheckpointStep,
    ExampleStep,
    ExplainStep,
    HeadingStep,
    LessonContent,
    LessonStep,
    RunStep,
    WriteFileStep,
)

if TYPE_CHECKING:
    from .runner import SectionContext

logger = logging.getLogger(__name__)

_GLOB_CHARS = re.compile(r"[*?\[]")

COMMAND_NOT_FOUND = 127


def run_command(
    command: str,
    cwd: Path,
    args: Sequence[str] = (),
    env: Optional[dict[str, str]] = None,
) -> tuple[int, str]:
    """
    Run a shell snippet with bash, positional args available as $1..$n.

    Returns:
        Tuple of (exit code, combined stdout/stderr)
    """
    bash = shutil.which("bash")
    if not bash:
        logger.warning("bash not found on PATH; cannot run example")
        return COMMAND_NOT_FOUND, ""

    completed = subprocess.run(
        [bash, "-c", command, "bashtutor", *args],
        cwd=cwd,
        env={**os.environ, **(env or {})},
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        check=False,
    )
    return completed.returncode, completed.stdout


# -----------------------------------------------------------------------------
# Step handlers
# -----------------------------------------------------------------------------

def _heading(ctx: "SectionContext", step: HeadingStep):
    ctx.console.sub_heading(step.text)


def _explain(ctx: "SectionContext", step: ExplainStep):
    ctx.console.echo(step.text.rstrip())
    ctx.console.echo()


def _example(ctx: "SectionContext", step: ExampleStep):
    ctx.console.code_block(step.code, step.caption)


def _checkpoint(ctx: "SectionContext", step: CheckpointStep):
    ctx.checkpoint(step.message)


def _run(ctx: "SectionContext", step: RunStep) -> Optional[int]:
    if step.prompt:
        ctx.checkpoint(step.prompt)
    for path in step.creates:
        if _GLOB_CHARS.search(path):
            ctx.register_glob(path)
        else:
            ctx.register(path)

    code, output = run_command(step.command, ctx.workdir, ctx.script_args, ctx.env)
    for line in output.rstrip("\n").splitlines():
        ctx.console.cecho("GREEN", f"Output: {line}")

    if code != 0:
        ctx.console.cecho("YELLOW", f"Command exited with status {code}")
    if step.allow_failure:
        return None
    return code


def _write_file(ctx: "SectionContext", step: WriteFileStep):
    path = ctx.register(step.path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(step.content, encoding="utf-8")
    ctx.console.cecho("GREEN", f"Created {step.path}")


def _ask(ctx: "SectionContext", step: AskStep):
    ctx.env[step.variable] = ctx.ask(step.prompt)


STEP_HANDLERS: dict[str, Callable[["SectionContext", LessonStep], Optional[int]]] = {
    "heading": _heading,
    "explain": _explain,
    "example": _example,
    "checkpoint": _checkpoint,
    "run": _run,
    "write_file": _write_file,
    "ask": _ask,
}


class ScriptedLesson:
    """Callable section body that plays back the steps of one lesson."""

    def __init__(self, content: LessonContent):
        self.content = content

    def __repr__(self) -> str:
        return f"ScriptedLesson({self.content.lesson_id!r})"

    def __call__(self, ctx: "SectionContext") -> int:
        exit_code = 0
        if self.content.summary:
            ctx.console.cecho("WHITE", self.content.summary.strip())
            ctx.console.echo()

        for step in self.content.steps:
            code = STEP_HANDLERS[step.type](ctx, step)
            if code:
                exit_code = code
        return exit_code
