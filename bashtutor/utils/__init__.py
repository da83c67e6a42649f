"""bashtutor utilities."""

from .lesson_loader import (
    LESSONS_DIR,
    LessonLoadError,
    load_lesson_data,
    load_lesson,
    get_available_lessons,
    load_all_lessons,
)
from .config import TutorConfig, load_config, setup_logging

__all__ = [
    "LESSONS_DIR",
    "LessonLoadError",
    "load_lesson_data",
    "load_lesson",
    "get_available_lessons",
    "load_all_lessons",
    "TutorConfig",
    "load_config",
    "setup_logging",
]
