"""
SectionCatalog - The ordered list of sections a run walks through.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional

from bashtutor.schemas import LessonContent
from bashtutor.utils.lesson_loader import load_all_lessons

from .lesson_body import ScriptedLesson

if TYPE_CHECKING:
    from .runner import SectionContext


# A body prints its lesson and returns an exit signal (None or 0 = success)
SectionBody = Callable[["SectionContext"], Optional[int]]


class CatalogError(ValueError):
    """The catalog is empty or has duplicate titles."""


@dataclass(frozen=True)
class Section:
    """One numbered unit of the tutorial."""
    title: str
    index: int  # 1-based, stable for the run
    body: SectionBody


class SectionCatalog:
    """
    Sections numbered 1..N in the order given.

    Titles must be unique, and at least one section is required.
    """

    def __init__(self, entries: Iterable[tuple[str, SectionBody]]):
        self._sections: list[Section] = []
        seen: set[str] = set()

        for title, body in entries:
            title = title.strip()
            if not title:
                raise CatalogError("Section title must not be blank")
            if title in seen:
                raise CatalogError(f"Duplicate section title: {title}")
            if not callable(body):
                raise CatalogError(f"Section '{title}' has no callable body")
            seen.add(title)
            self._sections.append(Section(title=title, index=len(self._sections) + 1, body=body))

        if not self._sections:
            raise CatalogError("Catalog has no sections")

    @classmethod
    def from_lessons(cls, lessons: Iterable[LessonContent]) -> "SectionCatalog":
        return cls((lesson.title, ScriptedLesson(lesson)) for lesson in lessons)

    @classmethod
    def from_directory(cls, lessons_dir: Optional[Path] = None) -> "SectionCatalog":
        """Build a catalog from every lesson file in a directory."""
        return cls.from_lessons(load_all_lessons(lessons_dir))

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    @property
    def titles(self) -> list[str]:
        return [s.title for s in self._sections]

    def get(self, index: int) -> Section:
        """Get a section by its 1-based index."""
        if not 1 <= index <= len(self._sections):
            raise IndexError(f"No section {index} (catalog has {len(self._sections)})")
        return self._sections[index - 1]
