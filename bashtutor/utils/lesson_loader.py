"""
Lesson loader utility for bashtutor.

Loads YAML lesson files from the lessons/ directory.
"""

from pathlib import Path
from typing import Any
import yaml
from pydantic import ValidationError

from bashtutor.schemas import LessonContent


# Bundled lessons directory (shipped as package data)
LESSONS_DIR = Path(__file__).parent.parent / "lessons"


class LessonLoadError(Exception):
    """A lesson file is missing, unreadable, or fails validation."""


def load_lesson_data(name: str, lessons_dir: Path | None = None) -> dict[str, Any]:
    """
    Load a raw lesson document by name.

    Args:
        name: Lesson name without .yaml extension (e.g., "loops_conditions")
        lessons_dir: Optional custom lessons directory

    Returns:
        Dict containing the parsed YAML lesson

    Raises:
        LessonLoadError: If the file doesn't exist or YAML parsing fails
    """
    dir_path = lessons_dir or LESSONS_DIR
    file_path = dir_path / f"{name}.yaml"

    if not file_path.exists():
        raise LessonLoadError(f"Lesson file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LessonLoadError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise LessonLoadError(f"Lesson file {file_path} must contain a mapping")
    return data


def load_lesson(name: str, lessons_dir: Path | None = None) -> LessonContent:
    """Load and validate a lesson by name."""
    data = load_lesson_data(name, lessons_dir)
    try:
        return LessonContent.model_validate(data)
    except ValidationError as e:
        raise LessonLoadError(f"Invalid lesson '{name}': {e}") from e


def get_available_lessons(lessons_dir: Path | None = None) -> list[str]:
    """
    List all available lesson files.

    Args:
        lessons_dir: Optional custom lessons directory

    Returns:
        Sorted list of lesson names (without .yaml extension)
    """
    dir_path = lessons_dir or LESSONS_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))


def load_all_lessons(lessons_dir: Path | None = None) -> list[LessonContent]:
    """
    Load every lesson in a directory, ordered by position then lesson_id.

    Raises:
        LessonLoadError: If any lesson fails to load, or two lessons share an id
    """
    lessons = [load_lesson(name, lessons_dir) for name in get_available_lessons(lessons_dir)]

    seen: set[str] = set()
    for lesson in lessons:
        if lesson.lesson_id in seen:
            raise LessonLoadError(f"Duplicate lesson_id: {lesson.lesson_id}")
        seen.add(lesson.lesson_id)

    return sorted(lessons, key=lambda lesson: (lesson.position, lesson.lesson_id))
