"""
Navigation schemas for bashtutor.

Defines the values passed between the prompt, the section runner and the
run state machine:
- Navigation actions chosen by the learner
- Section results reported by the runner
- Run phases
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional
from enum import Enum


class NavKind(str, Enum):
    CONTINUE = "continue"
    SKIP_SECTION = "skip_section"
    JUMP_TO = "jump_to"
    QUIT = "quit"


class NavAction(BaseModel):
    kind: NavKind = NavKind.CONTINUE
    target: Optional[int] = Field(default=None, ge=1)  # 1-based section index

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_target(self):
        if self.kind == NavKind.JUMP_TO and self.target is None:
            raise ValueError("jump_to requires a target section")
        if self.kind != NavKind.JUMP_TO and self.target is not None:
            raise ValueError(f"{self.kind.value} does not take a target")
        return self

    @classmethod
    def proceed(cls) -> "NavAction":
        return cls(kind=NavKind.CONTINUE)

    @classmethod
    def skip(cls) -> "NavAction":
        return cls(kind=NavKind.SKIP_SECTION)

    @classmethod
    def jump(cls, target: int) -> "NavAction":
        return cls(kind=NavKind.JUMP_TO, target=target)

    @classmethod
    def quit(cls) -> "NavAction":
        return cls(kind=NavKind.QUIT)


class SectionStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"         # body finished with a non-zero exit signal
    SKIPPED = "skipped"       # learner typed q inside the body
    JUMPED = "jumped"         # learner typed a section number inside the body
    QUIT = "quit"


class SectionResult(BaseModel):
    status: SectionStatus
    exit_code: int = 0
    jump_target: Optional[int] = Field(default=None, ge=1)

    @property
    def prompts_afterwards(self) -> bool:
        """Whether the runner asks for navigation once the section returns."""
        return self.status in (SectionStatus.COMPLETED, SectionStatus.FAILED)


class RunPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"         # section finished, awaiting navigation
    FINISHED = "finished"
