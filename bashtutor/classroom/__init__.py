"""
bashtutor Classroom - Runtime components for running the tutorial.

This module provides:
- SectionCatalog: ordered, numbered sections
- SectionRunner: interactive run with skip / jump / quit navigation
- RunState / parse_navigation: navigation logic without I/O
- CleanupRegistry: files removed when the run ends
- ScriptedLesson: section body built from a YAML lesson
"""

from .catalog import (
    Section,
    SectionBody,
    SectionCatalog,
    CatalogError,
)

from .cleanup import (
    CleanupRegistry,
    exit_on_signals,
)

from .navigator import (
    RunState,
    parse_navigation,
)

from .lesson_body import (
    ScriptedLesson,
    STEP_HANDLERS,
    run_command,
)

from .runner import (
    SectionRunner,
    SectionContext,
    SectionSkipped,
    JumpRequested,
    QuitRequested,
    DEFAULT_PROMPT,
    START_PROMPT,
)

__all__ = [
    # Catalog
    "Section",
    "SectionBody",
    "SectionCatalog",
    "CatalogError",
    # Cleanup
    "CleanupRegistry",
    "exit_on_signals",
    # Navigator
    "RunState",
    "parse_navigation",
    # Lessons
    "ScriptedLesson",
    "STEP_HANDLERS",
    "run_command",
    # Runner
    "SectionRunner",
    "SectionContext",
    "SectionSkipped",
    "JumpRequested",
    "QuitRequested",
    "DEFAULT_PROMPT",
    "START_PROMPT",
]
