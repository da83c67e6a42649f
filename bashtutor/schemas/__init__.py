"""
bashtutor Schemas - Pydantic models for the interactive shell tutorial.

This module exports all schema classes for:
- Lesson: YAML lesson documents and their steps
- Navigation: learner actions, section results, run phases
"""

# Lesson schemas
from .lesson import (
    HeadingStep,
    ExplainStep,
    ExampleStep,
    CheckpointStep,
    RunStep,
    WriteFileStep,
    AskStep,
    LessonStep,
    LessonContent,
)

# Navigation schemas
from .navigation import (
    NavKind,
    NavAction,
    SectionStatus,
    SectionResult,
    RunPhase,
)

__all__ = [
    # Lesson
    'HeadingStep',
    'ExplainStep',
    'ExampleStep',
    'CheckpointStep',
    'RunStep',
    'WriteFileStep',
    'AskStep',
    'LessonStep',
    'LessonContent',
    # Navigation
    'NavKind',
    'NavAction',
    'SectionStatus',
    'SectionResult',
    'RunPhase',
]
