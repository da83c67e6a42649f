"""
Lesson file schemas for bashtutor.

Defines Pydantic models for YAML lesson files including:
- Lesson steps (headings, explanations, code listings, runnable demos)
- In-lesson checkpoints and questions
- The lesson document itself
"""

from pydantic import BaseModel, Field, field_validator
from typing import Annotated, Optional, Literal, Union


# -----------------------------------------------------------------------------
# Lesson step types
# -----------------------------------------------------------------------------

class LessonStepBase(BaseModel):
    type: str


class HeadingStep(LessonStepBase):
    type: Literal["heading"] = "heading"
    text: str


class ExplainStep(LessonStepBase):
    type: Literal["explain"] = "explain"
    text: str


class ExampleStep(LessonStepBase):
    """A code listing printed verbatim, never executed."""
    type: Literal["example"] = "example"
    code: str
    caption: Optional[str] = None


class CheckpointStep(LessonStepBase):
    """A navigation prompt inside the lesson body (q / Q / number honoured)."""
    type: Literal["checkpoint"] = "checkpoint"
    message: Optional[str] = None


class RunStep(LessonStepBase):
    """
    Run a demo command with bash.

    Paths listed in `creates` are registered for cleanup before the
    command runs, relative to the tutorial working directory. Entries with
    glob characters (test_*.txt) are expanded when cleanup runs.
    """
    type: Literal["run"] = "run"
    command: str
    prompt: Optional[str] = "Press ENTER to run the example..."
    creates: list[str] = []
    allow_failure: bool = False


class WriteFileStep(LessonStepBase):
    type: Literal["write_file"] = "write_file"
    path: str
    content: str


class AskStep(LessonStepBase):
    """Read a free-form answer and export it to later run steps."""
    type: Literal["ask"] = "ask"
    prompt: str
    variable: str = Field(..., pattern=r'^[A-Za-z_][A-Za-z0-9_]*$')


LessonStep = Annotated[
    Union[
        HeadingStep,
        ExplainStep,
        ExampleStep,
        CheckpointStep,
        RunStep,
        WriteFileStep,
        AskStep,
    ],
    Field(discriminator="type"),
]


# -----------------------------------------------------------------------------
# Main lesson content schema
# -----------------------------------------------------------------------------

class LessonContent(BaseModel):
    lesson_id: str = Field(..., pattern=r'^[a-z0-9_]+$')
    title: str = Field(..., min_length=1)
    position: int = Field(..., ge=0)  # ordering key, not the catalog index
    summary: Optional[str] = None
    steps: list[LessonStep] = Field(..., min_length=1)

    @field_validator('title')
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Lesson title must not be blank')
        return v
