"""
Runtime configuration for bashtutor.

Values come from the environment (optionally a .env file), and command
line flags override them.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from .lesson_loader import LESSONS_DIR


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}


class TutorConfig(BaseModel):
    lessons_dir: Path = LESSONS_DIR
    workdir: Path = Path(".")          # where demo commands run and create files
    log_level: str = "WARNING"
    color: bool = True

    @field_validator('log_level')
    @classmethod
    def check_log_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v


def load_config(env_file: Optional[Path] = None) -> TutorConfig:
    """
    Build configuration from environment variables.

    Reads BASHTUTOR_LESSONS_DIR, BASHTUTOR_WORKDIR, BASHTUTOR_LOG_LEVEL and
    BASHTUTOR_NO_COLOR (NO_COLOR is honoured as well). A .env file is loaded
    first without overriding variables already set.
    """
    load_dotenv(env_file)

    values = {}
    if os.environ.get("BASHTUTOR_LESSONS_DIR"):
        values["lessons_dir"] = Path(os.environ["BASHTUTOR_LESSONS_DIR"])
    if os.environ.get("BASHTUTOR_WORKDIR"):
        values["workdir"] = Path(os.environ["BASHTUTOR_WORKDIR"])
    if os.environ.get("BASHTUTOR_LOG_LEVEL"):
        values["log_level"] = os.environ["BASHTUTOR_LOG_LEVEL"]

    no_color = os.environ.get("BASHTUTOR_NO_COLOR", "").lower() in _TRUTHY
    if no_color or "NO_COLOR" in os.environ:
        values["color"] = False

    return TutorConfig(**values)


def setup_logging(level: str):
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
