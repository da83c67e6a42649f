"""Shared fixtures: a console fed from a list of answers."""

import io

import pytest

from bashtutor.classroom import SectionCatalog, SectionRunner
from bashtutor.viewer import Console


class ScriptedInput:
    """Line reader returning canned answers, then EOFError."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def output_of(runner: SectionRunner) -> str:
    return runner.console.out.getvalue()


@pytest.fixture
def make_console():
    def _make(inputs=()):
        reader = ScriptedInput(inputs)
        return Console(out=io.StringIO(), reader=reader, color=False), reader
    return _make


@pytest.fixture
def make_runner(tmp_path, make_console):
    """Build a runner over (title, body) entries with scripted answers."""
    def _make(entries, inputs=(), **kwargs):
        console, reader = make_console(inputs)
        runner = SectionRunner(
            SectionCatalog(entries),
            console=console,
            workdir=tmp_path,
            **kwargs,
        )
        runner.reader = reader
        return runner
    return _make


@pytest.fixture
def recorder():
    """Section bodies that log their title to a shared list."""
    order: list[str] = []

    def body(name, exit_code=None):
        def _body(ctx):
            order.append(name)
            return exit_code
        return _body

    body.order = order
    return body
